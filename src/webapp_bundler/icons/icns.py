"""Pure-Python ICNS container encoder for PNG iconsets.

Modern ICNS files store PNG payloads as tagged chunks: a 4-byte OSType,
a big-endian length that includes the 8-byte header, then the data.
"""

from __future__ import annotations

import struct
from collections.abc import Iterable, Mapping
from pathlib import Path

ICNS_MAGIC = b"icns"
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

ICONSET_TYPES: Mapping[str, bytes] = {
    "icon_16x16.png": b"icp4",
    "icon_32x32.png": b"icp5",
    "icon_128x128.png": b"ic07",
    "icon_256x256.png": b"ic08",
    "icon_512x512.png": b"ic09",
    "icon_512x512@2x.png": b"ic10",
    "icon_16x16@2x.png": b"ic11",
    "icon_32x32@2x.png": b"ic12",
    "icon_128x128@2x.png": b"ic13",
    "icon_256x256@2x.png": b"ic14",
}


def encode_chunk(tag: bytes, payload: bytes) -> bytes:
    """Encode one tagged ICNS chunk."""
    return tag + struct.pack(">I", len(payload) + 8) + payload


def encode_icns(chunks: Iterable[tuple[bytes, bytes]]) -> bytes:
    """Encode ``(tag, png_bytes)`` pairs into a complete ICNS document.

    Raises
    ------
    ValueError
        If no chunks are supplied or a payload is not PNG data.
    """
    body = bytearray()
    for tag, payload in chunks:
        if not payload.startswith(PNG_SIGNATURE):
            raise ValueError(f"chunk '{tag.decode('ascii')}' is not PNG data")
        body += encode_chunk(tag, payload)
    if not body:
        raise ValueError("no icon representations to pack")
    return ICNS_MAGIC + struct.pack(">I", len(body) + 8) + bytes(body)


def encode_iconset(iconset_dir: Path) -> bytes:
    """Encode every recognised PNG in an ``.iconset`` directory.

    Files are packed in the order of ``ICONSET_TYPES``; unknown names are
    ignored.
    """
    chunks = [
        (tag, (iconset_dir / name).read_bytes())
        for name, tag in ICONSET_TYPES.items()
        if (iconset_dir / name).is_file()
    ]
    return encode_icns(chunks)


def read_icns_tags(data: bytes) -> list[bytes]:
    """Return chunk tags of an ICNS document in file order.

    Raises
    ------
    ValueError
        If ``data`` is not a well-formed ICNS document.
    """
    if len(data) < 8 or data[:4] != ICNS_MAGIC:
        raise ValueError("not an ICNS document")
    (total,) = struct.unpack(">I", data[4:8])
    if total != len(data):
        raise ValueError("ICNS length header does not match payload")
    tags: list[bytes] = []
    offset = 8
    while offset < total:
        if offset + 8 > total:
            raise ValueError("truncated ICNS chunk header")
        tag = data[offset : offset + 4]
        (length,) = struct.unpack(">I", data[offset + 4 : offset + 8])
        if length < 8 or offset + length > total:
            raise ValueError(f"invalid length for ICNS chunk '{tag!r}'")
        tags.append(tag)
        offset += length
    return tags
