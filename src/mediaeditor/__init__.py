"""mediaeditor - compile editing layers into a single FFmpeg filter-graph run."""

from .__version__ import __version__
from .media import (
    MediaEditor,
    LayerRegistry,
    AssetCatalog,
    AssetFetcher,
    OutputProfile,
    MediaContext,
    compile_filter_graph,
    build_command,
    enumerate_inputs,
    default_context,
    set_default_context,
)
from .core import (
    LayerKind,
    Priority,
    EditorError,
    DuplicateLayerKindError,
    LayerIndexError,
    AssetResolutionError,
    EngineExecutionError,
    NotReadyError,
)


__all__ = [
    "__version__",
    "MediaEditor",
    "LayerRegistry",
    "AssetCatalog",
    "AssetFetcher",
    "OutputProfile",
    "MediaContext",
    "compile_filter_graph",
    "build_command",
    "enumerate_inputs",
    "default_context",
    "set_default_context",
    "LayerKind",
    "Priority",
    "EditorError",
    "DuplicateLayerKindError",
    "LayerIndexError",
    "AssetResolutionError",
    "EngineExecutionError",
    "NotReadyError",
]
