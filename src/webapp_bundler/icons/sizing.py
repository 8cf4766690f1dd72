"""Canonical iconset sizes and nearest-size selection."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

ICONSET_SIZES: tuple[int, ...] = (16, 32, 128, 256, 512, 1024)
RETINA_SIZE = ICONSET_SIZES[-1]


@dataclass(frozen=True)
class IconsetEntry:
    """One named representation inside an iconset directory."""

    pixels: int
    nominal: int
    retina: bool

    @property
    def filename(self) -> str:
        """Return the iconset file name, e.g. ``icon_512x512@2x.png``."""
        scale = "@2x" if self.retina else ""
        return f"icon_{self.nominal}x{self.nominal}{scale}.png"


def select_icon_size(biggest: int, sizes: Sequence[int] = ICONSET_SIZES) -> int:
    """Return the table entry closest to ``biggest``.

    On equal distance the earlier (smaller) entry wins.

    Raises
    ------
    ValueError
        If ``sizes`` is empty.
    """
    if not sizes:
        raise ValueError("icon size table must not be empty")
    closest = sizes[0]
    closest_distance = abs(closest - biggest)
    for size in sizes[1:]:
        distance = abs(size - biggest)
        if distance < closest_distance:
            closest = size
            closest_distance = distance
    return closest


def iconset_entry(pixels: int) -> IconsetEntry:
    """Map a pixel size to its iconset entry.

    The largest canonical size is stored as the 2x variant of half that size.
    """
    if pixels == RETINA_SIZE:
        return IconsetEntry(pixels=pixels, nominal=pixels // 2, retina=True)
    return IconsetEntry(pixels=pixels, nominal=pixels, retina=False)
