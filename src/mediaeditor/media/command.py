"""Command assembly: the full FFmpeg argument list for one editing run."""

from typing import List, Optional, Sequence
from .assets import AssetCatalog
from .filter_graph import compile_filter_graph
from .inputs import enumerate_inputs
from .layers import Layer
from .output import OutputProfile


def simple_layer_args(layers: Sequence[Layer]) -> List[str]:
    """Arguments for layers expressed as plain options (currently only trim)."""
    args = []
    for layer in layers:
        if not layer.complex and layer.kind == "trim":
            args.extend(["-ss", str(layer.start_time), "-to", str(layer.end_time)])
    return args


def build_command(
    input_name: str,
    layers: Sequence[Layer],
    catalog: AssetCatalog,
    out_path: str,
    output: Optional[OutputProfile] = None,
) -> List[str]:
    """
    Build the FFmpeg argument list (without the binary) for a layer snapshot.

    Order is fixed: primary input, auxiliary inputs, filter graph (if any complex
    layer exists), simple layer options, output options, output path.

    Args:
        input_name: Staged name of the primary input
        layers: Layer snapshot in registry order
        catalog: Asset catalogue
        out_path: Output file name
        output: Output profile (fragmented MP4 by default)

    Returns:
        List of FFmpeg arguments
    """
    profile = output or OutputProfile.fragmented_mp4()
    plan = enumerate_inputs(layers, catalog)

    argv = ["-i", input_name]
    argv.extend(plan.args())

    graph = compile_filter_graph(layers, catalog, plan)
    if graph is not None:
        argv.extend(["-filter_complex", graph])

    argv.extend(simple_layer_args(layers))
    argv.extend(profile.args(out_path))

    return argv
