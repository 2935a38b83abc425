"""Filter graph compiler: turns complex layers into one -filter_complex string."""

import logging
from typing import List, Optional, Sequence, Tuple
from ..core.types import Priority
from .assets import AssetCatalog
from .inputs import InputPlan, enumerate_inputs
from .layers import Layer, OVERLAY_KINDS

logger = logging.getLogger(__name__)

PRIMARY_INPUT = "[0]"
FILTERED_LABEL = "[filtered]"


class _OverlayChain:
    """Label of the current chain output, local to one compile call."""

    def __init__(self, overlay_count: int):
        self.base = PRIMARY_INPUT
        self.remaining = overlay_count

    def overlay(self, scaled: str, x, y, out_label: str) -> str:
        """Overlay a scaled input onto the chain and advance the chain label."""
        self.remaining -= 1
        fragment = f"{self.base}{scaled}overlay={x}:{y}"
        if self.remaining > 0:
            # Not the last overlay: label the result so the next one reads it
            fragment += out_label
            self.base = out_label
        return fragment


def compile_filter_graph(
    layers: Sequence[Layer],
    catalog: AssetCatalog,
    plan: Optional[InputPlan] = None,
) -> Optional[str]:
    """
    Compile the complex layers of a snapshot into a filter graph.

    Graph fragments (filter, images, stickers) are joined with ';' and wired into
    one overlay chain. Chain fragments (crop, text) are appended with ',' so they
    apply to the graph's final output.

    Args:
        layers: Layer snapshot in registry order
        catalog: Asset catalogue for fonts, stickers and filters
        plan: Input plan for the same snapshot (computed if omitted)

    Returns:
        Filter graph string, or None if there are no complex layers
    """
    complex_layers: List[Tuple[int, Layer]] = [
        (position, layer) for position, layer in enumerate(layers) if layer.complex
    ]
    if not complex_layers:
        return None

    if plan is None:
        plan = enumerate_inputs(layers, catalog)

    # sorted() is stable, so equal priorities keep registry order
    complex_layers = sorted(complex_layers, key=lambda item: item[1].priority)

    overlay_count = sum(1 for _, layer in complex_layers if layer.kind in OVERLAY_KINDS)
    # A labeled filter output is only consumed by Medium-priority layers
    has_medium = any(layer.priority == Priority.MEDIUM for layer in layers)

    chain = _OverlayChain(overlay_count)
    graph_parts: List[str] = []
    chain_parts: List[str] = []

    for idx, (position, layer) in enumerate(complex_layers):
        if layer.kind == "crop":
            chain_parts.append(_crop_filter(layer))
        elif layer.kind == "text":
            chain_parts.append(_text_filter(layer, catalog))
        elif layer.kind == "filter":
            fragment = f"{PRIMARY_INPUT}{catalog.filter_expr(layer.filter_index)}"
            if has_medium:
                fragment += FILTERED_LABEL
                chain.base = FILTERED_LABEL
            graph_parts.append(fragment)
        elif layer.kind == "image":
            scaled = f"[img{idx}]"
            graph_parts.append(
                _scale_filter(plan.image_stream(position), layer, scaled)
                + ";"
                + chain.overlay(scaled, layer.x, layer.y, f"[overImg{idx}]")
            )
        elif layer.kind == "sticker":
            scaled = f"[sticker{idx}]"
            graph_parts.append(
                _scale_filter(plan.sticker_stream(layer.sticker_index), layer, scaled)
                + ";"
                + chain.overlay(scaled, layer.x, layer.y, f"[overStick{idx}]")
            )

    segments = []
    if graph_parts:
        segments.append(";".join(graph_parts))
    segments.extend(chain_parts)

    graph = ",".join(segments)
    logger.debug(f"Compiled filter graph: {graph}")
    return graph


def _scale_filter(stream: int, layer, out_label: str) -> str:
    return f"[{stream}]scale={layer.width}x{layer.height}{out_label}"


def _crop_filter(layer) -> str:
    return f"crop={layer.width}:{layer.height}:{layer.x}:{layer.y}"


def _text_filter(layer, catalog: AssetCatalog) -> str:
    # Box color always carries an explicit alpha
    return (
        f"drawtext=fontfile={catalog.font_name(layer.font_index)}"
        f":text={layer.text}"
        f":fontcolor={layer.font_color}"
        f":fontsize={layer.font_size}"
        f":box=1:boxcolor={layer.background_color}@1"
        f":boxborderw={layer.border_width}"
        f":x={layer.x}:y={layer.y}"
    )
