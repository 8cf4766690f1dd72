"""Icon model, size selection, and conversion into icon containers."""

from .converter import IconConverter
from .model import Icon
from .sizing import ICONSET_SIZES, IconsetEntry, iconset_entry, select_icon_size

__all__ = [
    "ICONSET_SIZES",
    "Icon",
    "IconConverter",
    "IconsetEntry",
    "iconset_entry",
    "select_icon_size",
]
