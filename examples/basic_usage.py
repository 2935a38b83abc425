#!/usr/bin/env python3
"""
Basic usage example for mediaeditor.

This example demonstrates:
1. Loading a video and stacking layers on it
2. Inspecting the generated FFmpeg command
3. Rendering and saving the result
"""

import asyncio
import os
from mediaeditor import AssetCatalog, MediaEditor, DuplicateLayerKindError


async def main():
    """Run basic usage example."""
    # Load video (replace with your video path or URL)
    video_path = os.getenv(
        "MEDIAEDITOR_INPUT",
        "https://sample-videos.com/zip/10/mp4/SampleVideo_1280x720_1mb.mp4",
    )

    # Fonts and stickers are referenced by index from layers
    catalog = AssetCatalog(fonts=["assets/font.ttf"], stickers=["assets/logo.png"])

    def progress_callback(status):
        print(f"Status: {status}")

    editor = MediaEditor(catalog, on_progress=progress_callback)

    print(f"Loading video: {video_path}")
    await editor.load(video_path, "input.mp4")

    # Stack layers
    editor.add_filter(2)
    editor.add_image("assets/badge.png", "badge.png", 100, 50, 10, 20)
    editor.add_sticker(0, 64, 64, "W-w-10", 10)
    editor.add_text(
        20, "H-th-20", "Hello world", font_color="white", background_color="black"
    )
    editor.add_trim("00:00:02", "00:00:05")

    try:
        editor.add_trim("00:00:00", "00:00:01")
    except DuplicateLayerKindError as e:
        print(f"Ignored: {e}")

    print(f"FFmpeg command: {editor.dry_run()}")

    await editor.run()

    output_path = "edited.mp4"
    with open(output_path, "wb") as f:
        f.write(editor.get_output())

    print("✅ Video processing completed!")
    print(f"Output saved to: {output_path}")


if __name__ == "__main__":
    asyncio.run(main())
