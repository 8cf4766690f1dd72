"""Decode, square, resample, and pack candidate icons into ICNS containers."""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence
from pathlib import Path
from tempfile import TemporaryDirectory
from threading import Event

from PIL import Image, UnidentifiedImageError

from webapp_bundler.application.ports import IconPacker
from webapp_bundler.errors import (
    BundleCancelledError,
    ConversionError,
    DecodeError,
    ResampleError,
)
from webapp_bundler.icons.model import Icon
from webapp_bundler.icons.sizing import (
    ICONSET_SIZES,
    IconsetEntry,
    iconset_entry,
    select_icon_size,
)

logger = logging.getLogger(__name__)

ICNS_MIME = "image/icns"
ICNS_EXT = "icns"
CONVERTED_SOURCE = "converted"
TEMP_PREFIX = "webapp-bundler-"


def decode_image(data: bytes) -> Image.Image:
    """Decode raw bytes into a fully loaded RGBA image.

    Raises
    ------
    DecodeError
        If the bytes are not a supported image or have an empty dimension.
    """
    try:
        with Image.open(io.BytesIO(data)) as opened:
            opened.load()
            image = opened.convert("RGBA")
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"cannot decode icon image: {exc}") from exc
    width, height = image.size
    if width <= 0 or height <= 0:
        raise DecodeError(f"icon image has empty dimensions {width}x{height}")
    return image


def crop_to_square(image: Image.Image) -> Image.Image:
    """Crop the centred square of ``image`` without scaling it."""
    width, height = image.size
    if width == height:
        return image
    side = min(width, height)
    left = (width - side) // 2
    top = (height - side) // 2
    try:
        return image.crop((left, top, left + side, top + side))
    except (OSError, ValueError) as exc:
        raise ResampleError(f"cannot crop icon to square: {exc}") from exc


def resample_square(image: Image.Image, pixels: int) -> Image.Image:
    """Resample a square image to ``pixels`` x ``pixels`` with bicubic filtering."""
    if image.size == (pixels, pixels):
        return image
    try:
        return image.resize((pixels, pixels), Image.Resampling.BICUBIC)
    except (OSError, ValueError, MemoryError) as exc:
        raise ResampleError(f"cannot resample icon to {pixels}px: {exc}") from exc


def encode_png(image: Image.Image) -> bytes:
    """Encode an image as PNG bytes."""
    buffer = io.BytesIO()
    try:
        image.save(buffer, format="PNG")
    except (OSError, ValueError) as exc:
        raise ResampleError(f"cannot encode icon as PNG: {exc}") from exc
    return buffer.getvalue()


class IconConverter:
    """Convert a candidate icon into a packed ICNS container.

    Parameters
    ----------
    packer : IconPacker
        Collaborator that turns an ``.iconset`` directory into one container.
    sizes : Sequence[int], optional
        Canonical size table used for nearest-size selection.
    multi_resolution : bool, default=False
        Also render every table size below the selected one.
    """

    def __init__(
        self,
        packer: IconPacker,
        *,
        sizes: Sequence[int] = ICONSET_SIZES,
        multi_resolution: bool = False,
    ) -> None:
        if not sizes:
            raise ValueError("icon size table must not be empty")
        self._packer = packer
        self._sizes = tuple(sizes)
        self._multi_resolution = multi_resolution

    def plan(self, biggest: int) -> list[IconsetEntry]:
        """Return the iconset entries rendered for an image of ``biggest`` pixels."""
        selected = select_icon_size(biggest, self._sizes)
        if not self._multi_resolution:
            return [iconset_entry(selected)]
        return [iconset_entry(size) for size in self._sizes if size <= selected]

    def convert(self, candidate: Icon, cancel_event: Event | None = None) -> Icon:
        """Convert ``candidate`` and return a new ICNS icon.

        Raises
        ------
        DecodeError
            If the candidate cannot be decoded.
        ResampleError
            If cropping, resampling, or PNG encoding fails.
        ConversionError
            If the packer fails; the message carries its output.
        BundleCancelledError
            If ``cancel_event`` is set before packing.
        """
        square = crop_to_square(decode_image(candidate.data))
        entries = self.plan(max(square.size))
        logger.debug(
            "converting icon from %s (%dpx) into %s",
            candidate.source,
            square.size[0],
            ", ".join(entry.filename for entry in entries),
        )
        try:
            with TemporaryDirectory(prefix=TEMP_PREFIX) as tmp:
                iconset_dir = Path(tmp) / "icon.iconset"
                iconset_dir.mkdir()
                for entry in entries:
                    png = encode_png(resample_square(square, entry.pixels))
                    (iconset_dir / entry.filename).write_bytes(png)

                if cancel_event is not None and cancel_event.is_set():
                    raise BundleCancelledError("cancelled before packing icon")

                packed_path = self._packer.pack(iconset_dir, Path(tmp) / "icon.icns")
                data = packed_path.read_bytes()
        except OSError as exc:
            raise ConversionError(f"icon working directory I/O failed: {exc}") from exc

        return Icon.from_bytes(CONVERTED_SOURCE, data, ICNS_MIME, ICNS_EXT)
