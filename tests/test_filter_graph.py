"""Tests for input enumeration, filter graph compilation and command assembly."""

import pytest
from mediaeditor.core import AssetResolutionError
from mediaeditor.media import (
    AssetCatalog,
    LayerRegistry,
    OutputProfile,
    build_command,
    compile_filter_graph,
    enumerate_inputs,
)

OUTPUT_ARGS = [
    "-segment_format_options",
    "movflags=frag_keyframe+empty_moov+default_base_moof",
    "-movflags",
    "faststart",
    "-vsync",
    "0",
    "-f",
    "mp4",
]


@pytest.fixture
def catalog():
    return AssetCatalog(
        fonts=["/assets/font.ttf"],
        stickers=["/assets/logo.png", "https://cdn.example.com/stickers/star.png"],
    )


@pytest.fixture
def registry():
    return LayerRegistry()


class TestAssetCatalog:
    """Test the asset catalogue configuration."""

    def test_defaults(self):
        """Test default fonts, stickers and hue filters."""
        catalog = AssetCatalog()
        assert catalog.fonts == ["font.ttf"]
        assert catalog.stickers == ["logo.png"]
        assert catalog.filters == [
            "hue=h=-60",
            "hue=h=0",
            "hue=h=60",
            "hue=h=120",
            "hue=h=180",
            "hue=h=240",
        ]

    def test_staged_names(self, catalog):
        """Test staged names are basenames of paths and URL paths."""
        assert catalog.font_name(0) == "font.ttf"
        assert catalog.sticker_name(0) == "logo.png"
        assert catalog.sticker_name(1) == "star.png"

    def test_shared_basenames_get_indexed_names(self):
        """Test that sources sharing a file name stage under distinct names."""
        catalog = AssetCatalog(
            fonts=["fonts/logo.ttf", "/assets/sans.ttf"],
            stickers=["red/logo.png", "https://cdn.example.com/blue/logo.png"],
        )
        assert catalog.sticker_name(0) == "sticker_0.png"
        assert catalog.sticker_name(1) == "sticker_1.png"
        assert catalog.font_name(0) == "logo.ttf"
        assert catalog.font_name(1) == "sans.ttf"

    def test_from_dict(self):
        """Test loading a catalogue from plain config data."""
        catalog = AssetCatalog.model_validate(
            {"fonts": ["a.ttf", "b.ttf"], "filters": ["negate"]}
        )
        assert catalog.font_name(1) == "b.ttf"
        assert catalog.filter_expr(0) == "negate"
        assert catalog.stickers == ["logo.png"]

    def test_unknown_index(self, catalog):
        """Test lookups outside the catalogue."""
        with pytest.raises(AssetResolutionError):
            catalog.font_name(3)
        with pytest.raises(AssetResolutionError):
            catalog.sticker_name(-1)
        with pytest.raises(AssetResolutionError):
            catalog.filter_expr(6)


class TestInputEnumeration:
    """Test auxiliary input ordering."""

    def test_single_image(self, registry, catalog):
        """Test one image gives stream 1."""
        registry.add_image("/tmp/a.png", "a.png", 100, 50, 10, 20)
        plan = enumerate_inputs(registry.layers, catalog)

        assert [(i.stream_index, i.path) for i in plan.inputs] == [(1, "a.png")]
        assert plan.args() == ["-i", "a.png"]

    def test_images_before_stickers(self, registry, catalog):
        """Test images come first in registry order, then distinct stickers."""
        registry.add_sticker(1, 10, 10, 0, 0)
        registry.add_image("x.png", "x.png", 1, 1, 0, 0)
        registry.add_sticker(0, 10, 10, 0, 0)
        registry.add_sticker(1, 20, 20, 0, 0)
        registry.add_image("y.png", "y.png", 1, 1, 0, 0)

        plan = enumerate_inputs(registry.layers, catalog)

        assert [(i.stream_index, i.path) for i in plan.inputs] == [
            (1, "x.png"),
            (2, "y.png"),
            (3, "star.png"),
            (4, "logo.png"),
        ]
        assert plan.sticker_stream(1) == 3
        assert plan.sticker_stream(0) == 4
        assert plan.image_stream(1) == 1
        assert plan.image_stream(4) == 2

    def test_no_auxiliary_inputs(self, registry, catalog):
        """Test text and crop need no extra inputs."""
        registry.add_text(0, 0, "a")
        registry.add_crop(1, 1, 0, 0)
        assert enumerate_inputs(registry.layers, catalog).inputs == []


class TestFilterGraphCompiler:
    """Test filter graph compilation."""

    def test_no_complex_layers(self, registry, catalog):
        """Test that trim alone yields no filter graph."""
        registry.add_trim("00:00:02", "00:00:05")
        assert compile_filter_graph(registry.layers, catalog) is None
        assert compile_filter_graph((), catalog) is None

    def test_single_image(self, registry, catalog):
        """Test one image: first and last overlay, so unlabeled."""
        registry.add_image("a.png", "a.png", 100, 50, 10, 20)

        graph = compile_filter_graph(registry.layers, catalog)

        assert graph == "[1]scale=100x50[img0];[0][img0]overlay=10:20"

    def test_filter_then_image(self, registry, catalog):
        """Test that the image overlays onto the labeled filter output."""
        registry.add_filter(2)
        registry.add_image("a.png", "a.png", 100, 50, 10, 20)

        graph = compile_filter_graph(registry.layers, catalog)

        assert graph == (
            "[0]hue=h=60[filtered];"
            "[1]scale=100x50[img1];[filtered][img1]overlay=10:20"
        )

    def test_priority_order_beats_insertion(self, registry, catalog):
        """Test that a filter added last is still compiled first."""
        registry.add_image("a.png", "a.png", 100, 50, 10, 20)
        registry.add_filter(0)

        graph = compile_filter_graph(registry.layers, catalog)

        assert graph.startswith("[0]hue=h=-60[filtered];")
        assert "[filtered][img1]overlay=10:20" in graph

    def test_filter_alone_unlabeled(self, registry, catalog):
        """Test a lone filter leaves its output unlabeled."""
        registry.add_filter(3)
        assert compile_filter_graph(registry.layers, catalog) == "[0]hue=h=120"

    def test_overlay_chain_threads_labels(self, registry, catalog):
        """Test that each overlay reads the previous overlay's output."""
        registry.add_image("a.png", "a.png", 10, 10, 1, 2)
        registry.add_sticker(0, 20, 20, 3, 4)
        registry.add_image("b.png", "b.png", 30, 30, 5, 6)

        graph = compile_filter_graph(registry.layers, catalog)

        assert graph.split(";") == [
            "[1]scale=10x10[img0]",
            "[0][img0]overlay=1:2[overImg0]",
            "[3]scale=20x20[sticker1]",
            "[overImg0][sticker1]overlay=3:4[overStick1]",
            "[2]scale=30x30[img2]",
            "[overStick1][img2]overlay=5:6",
        ]

    def test_repeated_sticker_shares_stream(self, registry, catalog):
        """Test that the same sticker twice scales the same input twice."""
        registry.add_image("a.png", "a.png", 1, 1, 0, 0)
        registry.add_sticker(1, 10, 10, 0, 0)
        registry.add_sticker(1, 20, 20, 5, 5)

        graph = compile_filter_graph(registry.layers, catalog)

        assert "[2]scale=10x10[sticker1]" in graph
        assert "[2]scale=20x20[sticker2]" in graph
        assert graph.endswith("[overStick1][sticker2]overlay=5:5")

    def test_chain_fragments_only(self, registry, catalog):
        """Test crop and text without any graph fragment."""
        registry.add_crop(640, 360, 0, 0)
        registry.add_text(10, 20, "hello", font_size=32, font_color="red")

        graph = compile_filter_graph(registry.layers, catalog)

        assert graph == (
            "crop=640:360:0:0,"
            "drawtext=fontfile=font.ttf:text=hello:fontcolor=red:fontsize=32"
            ":box=1:boxcolor=white@1:boxborderw=0:x=10:y=20"
        )

    def test_chain_fragments_follow_graph(self, registry, catalog):
        """Test crop and text are appended with commas after the graph."""
        registry.add_text(0, 0, "t", background_color="#000000")
        registry.add_image("a.png", "a.png", 100, 50, 10, 20)
        registry.add_crop(320, 240, 5, 5)

        graph = compile_filter_graph(registry.layers, catalog)
        head, *tail = graph.split(",")

        assert head == "[1]scale=100x50[img0];[0][img0]overlay=10:20"
        assert tail[0].startswith("drawtext=")
        assert "boxcolor=#000000@1" in tail[0]
        assert tail[1] == "crop=320:240:5:5"

    def test_full_registry(self, registry, catalog):
        """Test every layer kind together."""
        registry.add_trim("00:00:01", "00:00:04")
        registry.add_text(0, 0, "title")
        registry.add_sticker(0, 50, 50, 0, 0)
        registry.add_image("a.png", "a.png", 100, 100, 10, 10)
        registry.add_filter(5)
        registry.add_crop(200, 200, 0, 0)

        graph = compile_filter_graph(registry.layers, catalog)
        graph_part, text_part, crop_part = graph.split(",")

        assert graph_part.split(";") == [
            "[0]hue=h=240[filtered]",
            "[2]scale=50x50[sticker1]",
            "[filtered][sticker1]overlay=0:0[overStick1]",
            "[1]scale=100x100[img2]",
            "[overStick1][img2]overlay=10:10",
        ]
        assert text_part.startswith("drawtext=fontfile=font.ttf:text=title")
        assert crop_part == "crop=200:200:0:0"
        assert graph.count("[") == graph.count("]")

    def test_compile_is_repeatable(self, registry, catalog):
        """Test that compiling twice gives the same graph."""
        registry.add_filter(1)
        registry.add_image("a.png", "a.png", 1, 1, 0, 0)
        registry.add_sticker(0, 1, 1, 0, 0)

        first = compile_filter_graph(registry.layers, catalog)
        second = compile_filter_graph(registry.layers, catalog)

        assert first == second

    def test_no_chain_state_leaks_between_registries(self, catalog):
        """Test that a filter in one compile does not affect another."""
        with_filter = LayerRegistry()
        with_filter.add_filter(0)
        with_filter.add_image("a.png", "a.png", 1, 1, 0, 0)
        compile_filter_graph(with_filter.layers, catalog)

        plain = LayerRegistry()
        plain.add_image("a.png", "a.png", 1, 1, 0, 0)

        assert compile_filter_graph(plain.layers, catalog) == (
            "[1]scale=1x1[img0];[0][img0]overlay=0:0"
        )

    def test_streams_after_removal(self, registry, catalog):
        """Test stream labels match the inputs after a removal."""
        registry.add_image("a.png", "a.png", 1, 1, 0, 0)
        registry.add_image("b.png", "b.png", 2, 2, 0, 0)
        registry.add_sticker(0, 3, 3, 0, 0)
        registry.remove_layer(0)

        plan = enumerate_inputs(registry.layers, catalog)
        graph = compile_filter_graph(registry.layers, catalog, plan)

        assert plan.args() == ["-i", "b.png", "-i", "logo.png"]
        assert graph.startswith("[1]scale=2x2[img0];")
        assert "[2]scale=3x3[sticker1]" in graph


class TestCommandAssembly:
    """Test full argument list assembly."""

    def test_output_profile(self):
        """Test fixed output options."""
        assert OutputProfile.fragmented_mp4().args("out.mp4") == OUTPUT_ARGS + [
            "out.mp4"
        ]

    def test_trim_only(self, registry, catalog):
        """Test that trim alone adds seek options and no filter graph."""
        registry.add_trim("00:00:02", "00:00:05")

        argv = build_command("input.mp4", registry.layers, catalog, "test.mp4")

        assert argv == [
            "-i",
            "input.mp4",
            "-ss",
            "00:00:02",
            "-to",
            "00:00:05",
        ] + OUTPUT_ARGS + ["test.mp4"]
        assert "-filter_complex" not in argv

    def test_empty_registry(self, registry, catalog):
        """Test the command for an input with no layers."""
        argv = build_command("input.mp4", registry.layers, catalog, "out.mp4")
        assert argv == ["-i", "input.mp4"] + OUTPUT_ARGS + ["out.mp4"]

    def test_argument_order(self, registry, catalog):
        """Test inputs, graph, trim and output options appear in order."""
        registry.add_trim(1, 3)
        registry.add_sticker(1, 10, 10, 0, 0)
        registry.add_image("a.png", "a.png", 100, 50, 10, 20)

        argv = build_command("input.mp4", registry.layers, catalog, "out.mp4")

        assert argv[:6] == ["-i", "input.mp4", "-i", "a.png", "-i", "star.png"]
        assert argv[6] == "-filter_complex"
        assert argv[8:12] == ["-ss", "1", "-to", "3"]
        assert argv[12:] == OUTPUT_ARGS + ["out.mp4"]

    def test_filter_complex_iff_complex_layer(self, registry, catalog):
        """Test the filter graph flag follows the presence of complex layers."""
        registry.add_trim(0, 1)
        assert "-filter_complex" not in build_command(
            "in.mp4", registry.layers, catalog, "out.mp4"
        )

        registry.add_crop(1, 1, 0, 0)
        assert "-filter_complex" in build_command(
            "in.mp4", registry.layers, catalog, "out.mp4"
        )

        registry.remove_layer(1)
        assert "-filter_complex" not in build_command(
            "in.mp4", registry.layers, catalog, "out.mp4"
        )
