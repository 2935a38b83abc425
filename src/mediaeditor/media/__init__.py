"""Media module for layer compilation and FFmpeg execution."""

from .layers import (
    Layer,
    ImageLayer,
    TextLayer,
    StickerLayer,
    FilterLayer,
    CropLayer,
    TrimLayer,
)
from .registry import LayerRegistry
from .assets import AssetCatalog
from .inputs import AuxiliaryInput, InputPlan, enumerate_inputs
from .filter_graph import compile_filter_graph
from .command import build_command
from .output import OutputProfile
from .fetch import AssetFetcher
from .editor import MediaEditor
from .context import MediaContext, default_context, set_default_context

__all__ = [
    "Layer",
    "ImageLayer",
    "TextLayer",
    "StickerLayer",
    "FilterLayer",
    "CropLayer",
    "TrimLayer",
    "LayerRegistry",
    "AssetCatalog",
    "AuxiliaryInput",
    "InputPlan",
    "enumerate_inputs",
    "compile_filter_graph",
    "build_command",
    "OutputProfile",
    "AssetFetcher",
    "MediaEditor",
    "MediaContext",
    "default_context",
    "set_default_context",
]
