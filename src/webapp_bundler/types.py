"""Shared type aliases for bundler modules."""

from __future__ import annotations

from collections.abc import Sequence
from os import PathLike
from typing import Literal

type PathLikeStr = str | PathLike[str]
type PackerKind = Literal["auto", "iconutil", "native"]
type IconFormats = Sequence[str]

DEFAULT_ICON_FORMATS: tuple[str, ...] = ("png", "jpg", "ico")
