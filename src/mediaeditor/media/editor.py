"""Media editor: layer registry, asset staging and FFmpeg execution."""

import asyncio
from typing import List, Optional, Tuple
from ..core.errors import AssetResolutionError, EngineExecutionError, NotReadyError
from ..core.types import ProgressCb, Value
from .assets import AssetCatalog
from .command import build_command
from .context import MediaContext, default_context
from .fetch import AssetFetcher
from .layers import (
    Layer,
    ImageLayer,
    TextLayer,
    StickerLayer,
    FilterLayer,
    CropLayer,
    TrimLayer,
)
from .output import OutputProfile
from .registry import LayerRegistry


class MediaEditor:
    """Edits one input video with layers and renders it through a single FFmpeg run."""

    def __init__(
        self,
        catalog: Optional[AssetCatalog] = None,
        output_file: str = "output.mp4",
        on_progress: ProgressCb = None,
        verbose: bool = False,
        ctx: Optional[MediaContext] = None,
        fetcher: Optional[AssetFetcher] = None,
        output: Optional[OutputProfile] = None,
    ):
        """
        Initialize the editor.

        Args:
            catalog: Fonts, stickers and filters layers refer to by index
            output_file: Name of the produced file inside the working directory
            on_progress: Status callback ("staging", "processing", "completed")
            verbose: Log FFmpeg's stderr output
            ctx: Media context for operations
            fetcher: Asset fetcher (local files and URLs)
            output: Output profile (fragmented MP4 by default)
        """
        self.ctx = ctx or default_context()
        self.catalog = catalog or AssetCatalog()
        self.output_file = output_file
        self.on_progress = on_progress
        self.verbose = verbose
        self.fetcher = fetcher or AssetFetcher(logger=self.ctx.logger)
        self.output = output or OutputProfile.fragmented_mp4()
        self.registry = LayerRegistry(logger=self.ctx.logger)

        self.input_source: Optional[str] = None
        self.input_name: Optional[str] = None
        self._completed = False

    @property
    def layers(self) -> Tuple[Layer, ...]:
        """Snapshot of the current layers."""
        return self.registry.layers

    # Input
    async def load(self, input_source: str, file_name: str) -> "MediaEditor":
        """
        Fetch the primary input and stage it.

        Args:
            input_source: File path or URL of the video to edit
            file_name: Name the input is staged under

        Returns:
            This editor
        """
        self.ctx.logger.info(f"Loading input file: {input_source}")
        await self._stage(input_source, file_name)
        self.input_source = input_source
        self.input_name = file_name
        self._completed = False
        return self

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
        """Add an image overlay; the image is fetched when assets are loaded."""
        return self.registry.add_image(source_ref, staged_name, width, height, x, y)

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
        """Add a boxed text overlay."""
        return self.registry.add_text(
            x,
            y,
            text,
            font_size=font_size,
            font_color=font_color,
            font_index=font_index,
            background_color=background_color,
            border_width=border_width,
        )

    def add_sticker(
        self, sticker_index: int, width: Value, height: Value, x: Value, y: Value
    ) -> StickerLayer:
        """Add a catalogue sticker overlay."""
        return self.registry.add_sticker(sticker_index, width, height, x, y)

    def add_filter(self, filter_index: int) -> FilterLayer:
        """Add the color filter."""
        return self.registry.add_filter(filter_index)

    def add_crop(self, width: Value, height: Value, x: Value, y: Value) -> CropLayer:
        """Add the crop."""
        return self.registry.add_crop(width, height, x, y)

    def add_trim(self, start_time: Value, end_time: Value) -> TrimLayer:
        """Add the trim."""
        return self.registry.add_trim(start_time, end_time)

    def remove_layer(self, position: int) -> Layer:
        """Remove the layer at position."""
        return self.registry.remove_layer(position)

    # Command generation
    def command(self) -> List[str]:
        """
        Build the FFmpeg arguments for the current layers.

        Returns:
            Argument list, without the FFmpeg binary
        """
        if self.input_name is None:
            raise NotReadyError("No input loaded; call load() first")
        return build_command(
            self.input_name,
            self.registry.layers,
            self.catalog,
            self.output_file,
            self.output,
        )

    def dry_run(self) -> str:
        """
        Generate the FFmpeg command line without executing it.

        Returns:
            FFmpeg command string
        """
        return " ".join([self.ctx.ffmpeg, "-y", *self.command()])

    # Execution
    async def load_assets(self) -> None:
        """
        Stage every asset the current layers reference, one at a time.

        Images are staged under their staged names; fonts and stickers under
        their catalogue staged names.

        Raises:
            AssetResolutionError: If an asset cannot be fetched or staged, or two
                different sources would be staged under the same name
        """
        for source, name in self._staging_plan():
            await self._stage(source, name)

    def _staging_plan(self) -> List[Tuple[str, str]]:
        """Distinct (source, staged name) pairs in staging order."""
        layers = self.registry.layers
        plan = [
            (layer.source_ref, layer.staged_name)
            for layer in layers
            if layer.kind == "image"
        ]
        for index in dict.fromkeys(
            layer.font_index for layer in layers if layer.kind == "text"
        ):
            plan.append(
                (self.catalog.font_source(index), self.catalog.font_name(index))
            )
        for index in dict.fromkeys(
            layer.sticker_index for layer in layers if layer.kind == "sticker"
        ):
            plan.append(
                (self.catalog.sticker_source(index), self.catalog.sticker_name(index))
            )

        # staged name -> source, seeded with the primary input
        claimed = {self.input_name: self.input_source} if self.input_name else {}
        distinct = []
        for source, name in plan:
            if name not in claimed:
                claimed[name] = source
                distinct.append((source, name))
            elif claimed[name] != source:
                raise AssetResolutionError(
                    f"{source} and {claimed[name]} both stage as {name}",
                    source,
                )
        return distinct

    async def run(self) -> None:
        """
        Stage assets and render the output with FFmpeg.

        Raises:
            NotReadyError: If no input has been loaded
            AssetResolutionError: If an asset cannot be fetched or staged
            EngineExecutionError: If FFmpeg fails
        """
        if self.input_name is None:
            raise NotReadyError("No input loaded; call load() first")

        self._completed = False

        self.ctx.logger.info("Loading assets")
        self._report("staging")
        await self.load_assets()

        argv = [self.ctx.ffmpeg, "-y", *self.command()]
        self.ctx.logger.info(f"Running FFmpeg: {' '.join(argv)}")
        self._report("processing")

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                cwd=self.ctx.tmp,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise EngineExecutionError(f"Failed to start FFmpeg: {e}")

        _, stderr = await process.communicate()
        stderr_text = stderr.decode(errors="replace") if stderr else ""

        if self.verbose and stderr_text:
            self.ctx.logger.info(stderr_text)

        if process.returncode != 0:
            raise EngineExecutionError(
                f"FFmpeg failed with return code: {process.returncode}",
                process.returncode,
                stderr_text,
            )

        self._completed = True
        self._report("completed")
        self.ctx.logger.info("FFmpeg completed successfully")

    def get_output(self) -> bytes:
        """
        Read the produced file.

        Returns:
            Output file contents

        Raises:
            NotReadyError: If no run has completed successfully
        """
        if self.input_name is None or not self._completed:
            raise NotReadyError("Output not ready; run() has not completed")
        return self.ctx.read_file(self.output_file)

    # Internal methods
    async def _stage(self, source: str, name: str) -> None:
        """Fetch one asset and write it into the working directory."""
        self.ctx.logger.debug(f"Staging {source} as {name}")
        data = await self.fetcher.fetch_async(source)
        try:
            self.ctx.write_file(name, data)
        except OSError as e:
            raise AssetResolutionError(f"Failed to stage {name}: {e}", source)

    def _report(self, status: str) -> None:
        if self.on_progress:
            self.on_progress(status)
