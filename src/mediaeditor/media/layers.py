"""Layer models: the editing operations an editor compiles into one FFmpeg run."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Union, Literal, Annotated
from ..core.types import Priority, Value


class BaseLayer(BaseModel):
    """Fields shared by every layer kind."""

    model_config = ConfigDict(frozen=True)

    priority: Priority
    complex: bool = True


class ImageLayer(BaseLayer):
    """Image file scaled and overlaid onto the video."""

    kind: Literal["image"] = "image"
    priority: Priority = Priority.MEDIUM
    source_ref: str
    staged_name: str
    width: Value
    height: Value
    x: Value
    y: Value
    image_index: int


class TextLayer(BaseLayer):
    """Boxed text drawn with a catalogue font."""

    kind: Literal["text"] = "text"
    priority: Priority = Priority.LOW
    x: Value
    y: Value
    text: str
    font_size: Value = "24"
    font_color: str = "black"
    font_index: int = 0
    background_color: str = "white"
    border_width: Value = "0"


class StickerLayer(BaseLayer):
    """Catalogue sticker scaled and overlaid onto the video."""

    kind: Literal["sticker"] = "sticker"
    priority: Priority = Priority.MEDIUM
    sticker_index: int
    custom_index: int
    width: Value
    height: Value
    x: Value
    y: Value


class FilterLayer(BaseLayer):
    """Catalogue color filter applied to the primary stream."""

    kind: Literal["filter"] = "filter"
    priority: Priority = Priority.HIGH
    filter_index: int


class CropLayer(BaseLayer):
    """Crop rectangle applied to the final video."""

    kind: Literal["crop"] = "crop"
    priority: Priority = Priority.LOW
    width: Value
    height: Value
    x: Value
    y: Value


class TrimLayer(BaseLayer):
    """Start/end trim, expressed as plain output options."""

    kind: Literal["trim"] = "trim"
    priority: Priority = Priority.LOW
    complex: bool = False
    start_time: Value
    end_time: Value


Layer = Annotated[
    Union[ImageLayer, TextLayer, StickerLayer, FilterLayer, CropLayer, TrimLayer],
    Field(discriminator="kind"),
]

# Layers that are wired into the overlay chain
OVERLAY_KINDS = ("image", "sticker")
