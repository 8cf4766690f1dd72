"""Icon value object exchanged between icon sources and the converter."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Icon:
    """Raw icon payload with its origin and format metadata.

    Parameters
    ----------
    source : str
        Where the icon came from, usually a URL or ``"converted"``.
    data : bytes
        Encoded image payload.
    mime : str
        MIME type of ``data``.
    ext : str
        File extension without the leading dot.
    size : int
        Byte length of ``data``.
    """

    source: str
    data: bytes
    mime: str
    ext: str
    size: int

    @classmethod
    def from_bytes(cls, source: str, data: bytes, mime: str, ext: str) -> Icon:
        """Build an icon whose ``size`` matches the payload length."""
        return cls(source=source, data=data, mime=mime, ext=ext, size=len(data))
