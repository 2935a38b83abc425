"""Auxiliary input enumeration for images and stickers."""

from typing import Dict, List, Sequence
from pydantic import BaseModel, Field
from .assets import AssetCatalog
from .layers import Layer


class AuxiliaryInput(BaseModel):
    """One extra `-i` input, after the primary input at stream 0."""

    stream_index: int
    path: str


class InputPlan(BaseModel):
    """Ordered auxiliary inputs plus the stream lookups the compiler needs."""

    inputs: List[AuxiliaryInput] = Field(default_factory=list)
    # registry position of an Image layer -> stream index
    image_streams: Dict[int, int] = Field(default_factory=dict)
    # sticker_index -> stream index
    sticker_streams: Dict[int, int] = Field(default_factory=dict)

    def image_stream(self, position: int) -> int:
        """Stream index of the Image layer at a registry position."""
        return self.image_streams[position]

    def sticker_stream(self, sticker_index: int) -> int:
        """Stream index shared by every Sticker layer using sticker_index."""
        return self.sticker_streams[sticker_index]

    def args(self) -> List[str]:
        """FFmpeg input arguments, in stream order."""
        args = []
        for aux in self.inputs:
            args.extend(["-i", aux.path])
        return args


def enumerate_inputs(layers: Sequence[Layer], catalog: AssetCatalog) -> InputPlan:
    """
    Derive auxiliary inputs from a layer snapshot.

    Image layers come first in registry order, then one input per distinct
    sticker_index in order of first occurrence. Streams are numbered from 1;
    stream 0 is the primary input.

    Args:
        layers: Layer snapshot in registry order
        catalog: Asset catalogue for sticker paths

    Returns:
        InputPlan with inputs and stream lookups
    """
    plan = InputPlan()
    stream = 1

    for position, layer in enumerate(layers):
        if layer.kind == "image":
            plan.inputs.append(
                AuxiliaryInput(stream_index=stream, path=layer.staged_name)
            )
            plan.image_streams[position] = stream
            stream += 1

    for layer in layers:
        if layer.kind == "sticker" and layer.sticker_index not in plan.sticker_streams:
            plan.inputs.append(
                AuxiliaryInput(
                    stream_index=stream,
                    path=catalog.sticker_name(layer.sticker_index),
                )
            )
            plan.sticker_streams[layer.sticker_index] = stream
            stream += 1

    return plan
