"""Core module for the mediaeditor package."""

from .types import (
    ProgressCb,
    StatusCb,
    Value,
    LayerKind,
    Priority,
    SINGLETON_KINDS,
)
from .errors import (
    EditorError,
    DuplicateLayerKindError,
    LayerIndexError,
    AssetResolutionError,
    EngineExecutionError,
    NotReadyError,
)

__all__ = [
    "ProgressCb",
    "StatusCb",
    "Value",
    "LayerKind",
    "Priority",
    "SINGLETON_KINDS",
    "EditorError",
    "DuplicateLayerKindError",
    "LayerIndexError",
    "AssetResolutionError",
    "EngineExecutionError",
    "NotReadyError",
]
