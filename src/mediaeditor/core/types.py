"""Core types and enums for the mediaeditor package."""

from enum import Enum, IntEnum
from typing import Optional, Callable, Union

# Status callback type: receives status strings ("staging", "processing", "completed")
StatusCb = Optional[Callable[[str], None]]

# Progress callbacks share the status signature
ProgressCb = StatusCb

# Geometry, colors, times and text are passed through to FFmpeg verbatim
Value = Union[int, float, str]


class LayerKind(str, Enum):
    """Kinds of editing layers."""

    IMAGE = "image"
    TEXT = "text"
    STICKER = "sticker"
    FILTER = "filter"
    CROP = "crop"
    TRIM = "trim"


class Priority(IntEnum):
    """Order in which complex layers are compiled into the filter graph."""

    HIGH = 0
    MEDIUM = 1
    LOW = 2


# Kinds that may appear at most once in a registry
SINGLETON_KINDS = frozenset({LayerKind.FILTER, LayerKind.CROP, LayerKind.TRIM})
