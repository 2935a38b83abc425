"""Output profiles with FFmpeg argument generation."""

from pydantic import BaseModel
from typing import List, Literal


class OutputProfile(BaseModel):
    """Output profile that generates the trailing FFmpeg arguments."""

    kind: Literal["fragmented_mp4"] = "fragmented_mp4"

    @staticmethod
    def fragmented_mp4() -> "OutputProfile":
        """
        Fragmented, fast-start MP4 with passthrough frame timing.

        Returns:
            Fragmented MP4 output profile
        """
        return OutputProfile(kind="fragmented_mp4")

    def args(self, out_path: str) -> List[str]:
        """
        Generate FFmpeg output arguments for this profile.

        Args:
            out_path: Output file path

        Returns:
            List of FFmpeg arguments ending with the output path
        """
        return [
            "-segment_format_options",
            "movflags=frag_keyframe+empty_moov+default_base_moof",
            "-movflags",
            "faststart",
            "-vsync",
            "0",
            "-f",
            "mp4",
            out_path,
        ]
