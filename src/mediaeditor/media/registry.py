"""Ordered layer registry with per-kind uniqueness and index allocation."""

import logging
from collections import Counter
from typing import Dict, Iterator, List, Optional, Tuple
from ..core.errors import DuplicateLayerKindError, LayerIndexError
from ..core.types import LayerKind, Value, SINGLETON_KINDS
from .layers import (
    Layer,
    ImageLayer,
    TextLayer,
    StickerLayer,
    FilterLayer,
    CropLayer,
    TrimLayer,
)


class LayerRegistry:
    """
    Ordered collection of layers.

    Insertion order matters: it fixes the auxiliary input order of Image layers
    and breaks priority ties in the filter graph compiler. Filter, Crop and Trim
    layers each occupy a single slot; a second add of one of those kinds is
    rejected and leaves the first in place.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._layers: List[Layer] = []
        self._singletons: Dict[LayerKind, Layer] = {}
        self._image_count = 0
        # sticker_index -> custom_index, with the number of layers sharing it
        self._sticker_slots: Dict[int, int] = {}
        self._sticker_refs: Counter = Counter()

    # Snapshot access
    @property
    def layers(self) -> Tuple[Layer, ...]:
        """Immutable snapshot of the current layers in registry order."""
        return tuple(self._layers)

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[Layer]:
        return iter(tuple(self._layers))

    def __getitem__(self, position: int) -> Layer:
        return self._layers[position]

    def get(self, kind: LayerKind) -> Optional[Layer]:
        """Return the Filter, Crop or Trim layer currently in its slot."""
        return self._singletons.get(LayerKind(kind))

    # Index allocation
    def next_image_index(self) -> int:
        """Index for the next Image layer: the number of Image layers present."""
        return self._image_count

    def next_custom_index(self, sticker_index: int) -> int:
        """Custom index for a sticker, shared by every layer using the same sticker."""
        if sticker_index in self._sticker_slots:
            return self._sticker_slots[sticker_index]
        if not self._sticker_slots:
            return 0
        return max(self._sticker_slots.values()) + 1

    # Layer management
    def add_image(
        self,
        source_ref: str,
        staged_name: str,
        width: Value,
        height: Value,
        x: Value,
        y: Value,
    ) -> ImageLayer:
        """
        Add an image overlay.

        Args:
            source_ref: Path or URL the image bytes are fetched from
            staged_name: Name the image is staged under for FFmpeg
            width: Scaled width
            height: Scaled height
            x: Horizontal overlay position
            y: Vertical overlay position

        Returns:
            The created ImageLayer
        """
        layer = ImageLayer(
            source_ref=source_ref,
            staged_name=staged_name,
            width=width,
            height=height,
            x=x,
            y=y,
            image_index=self.next_image_index(),
        )
        self._append(layer)
        return layer

    def add_text(
        self,
        x: Value,
        y: Value,
        text: str,
        font_size: Value = "24",
        font_color: str = "black",
        font_index: int = 0,
        background_color: str = "white",
        border_width: Value = "0",
    ) -> TextLayer:
        """Add a boxed text overlay drawn with the catalogue font at font_index."""
        layer = TextLayer(
            x=x,
            y=y,
            text=text,
            font_size=font_size,
            font_color=font_color,
            font_index=font_index,
            background_color=background_color,
            border_width=border_width,
        )
        self._append(layer)
        return layer

    def add_sticker(
        self, sticker_index: int, width: Value, height: Value, x: Value, y: Value
    ) -> StickerLayer:
        """
        Add a catalogue sticker overlay.

        Stickers sharing a sticker_index share one custom index, and therefore one
        auxiliary input.
        """
        layer = StickerLayer(
            sticker_index=sticker_index,
            custom_index=self.next_custom_index(sticker_index),
            width=width,
            height=height,
            x=x,
            y=y,
        )
        self._append(layer)
        return layer

    def add_filter(self, filter_index: int) -> FilterLayer:
        """Add the color filter. Raises DuplicateLayerKindError if one exists."""
        self._check_slot(LayerKind.FILTER)
        layer = FilterLayer(filter_index=filter_index)
        self._append(layer)
        return layer

    def add_crop(self, width: Value, height: Value, x: Value, y: Value) -> CropLayer:
        """Add the crop. Raises DuplicateLayerKindError if one exists."""
        self._check_slot(LayerKind.CROP)
        layer = CropLayer(width=width, height=height, x=x, y=y)
        self._append(layer)
        return layer

    def add_trim(self, start_time: Value, end_time: Value) -> TrimLayer:
        """Add the trim. Raises DuplicateLayerKindError if one exists."""
        self._check_slot(LayerKind.TRIM)
        layer = TrimLayer(start_time=start_time, end_time=end_time)
        self._append(layer)
        return layer

    def remove_layer(self, position: int) -> Layer:
        """
        Remove the layer at position.

        Layers that stay keep their image and custom indices.

        Args:
            position: 0-based registry position

        Returns:
            The removed layer

        Raises:
            LayerIndexError: If no layer exists at position
        """
        if not 0 <= position < len(self._layers):
            raise LayerIndexError(position, len(self._layers))

        layer = self._layers.pop(position)
        kind = LayerKind(layer.kind)

        if kind in SINGLETON_KINDS:
            del self._singletons[kind]
        elif kind == LayerKind.IMAGE:
            self._image_count -= 1
        elif kind == LayerKind.STICKER:
            self._sticker_refs[layer.sticker_index] -= 1
            if self._sticker_refs[layer.sticker_index] == 0:
                del self._sticker_refs[layer.sticker_index]
                del self._sticker_slots[layer.sticker_index]

        self.logger.debug(f"Removed {kind.value} layer at position {position}")
        return layer

    # Internal methods
    def _check_slot(self, kind: LayerKind) -> None:
        """Reject a second layer of a singleton kind."""
        if kind in self._singletons:
            self.logger.warning(f"Layer already added: {kind.value}")
            raise DuplicateLayerKindError(kind.value)

    def _append(self, layer: Layer) -> None:
        """Append a layer and update the kind bookkeeping."""
        kind = LayerKind(layer.kind)

        if kind in SINGLETON_KINDS:
            self._singletons[kind] = layer
        elif kind == LayerKind.IMAGE:
            self._image_count += 1
        elif kind == LayerKind.STICKER:
            self._sticker_slots[layer.sticker_index] = layer.custom_index
            self._sticker_refs[layer.sticker_index] += 1

        self._layers.append(layer)
        self.logger.debug(
            f"Added {kind.value} layer at position {len(self._layers) - 1}"
        )
