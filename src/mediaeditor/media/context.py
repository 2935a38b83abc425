"""Working directory where inputs and assets are staged for FFmpeg."""

import tempfile
import logging
import os
import subprocess
from pathlib import Path
from typing import Optional
from ..core.errors import AssetResolutionError


class MediaContext:
    """FFmpeg binary plus the working directory that staged names resolve in."""

    def __init__(
        self,
        ffmpeg: str = "ffmpeg",
        tmp_root: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Create the working directory and check the FFmpeg binary.

        Args:
            ffmpeg: Path to ffmpeg binary
            tmp_root: Directory the working directory is created in
            logger: Logger shared by the editor, registry and fetcher
        """
        self.ffmpeg = ffmpeg
        self.logger = logger or logging.getLogger(__name__)

        # FFmpeg runs here, so staged names resolve relative to it
        self._tmp = tempfile.TemporaryDirectory(dir=tmp_root, prefix="mediaeditor_")
        self.tmp = self._tmp.name
        self._root = os.path.realpath(self.tmp)

        self._check_engine()

    def _check_engine(self) -> None:
        """Run `ffmpeg -version` once so a missing engine fails before staging."""
        try:
            result = subprocess.run(
                [self.ffmpeg, "-version"], capture_output=True, text=True, timeout=10
            )
        except FileNotFoundError as e:
            raise RuntimeError(f"FFmpeg not found at {self.ffmpeg!r}: {e}")
        except subprocess.TimeoutExpired:
            raise RuntimeError(f"FFmpeg at {self.ffmpeg!r} did not answer -version")

        if result.returncode != 0:
            raise RuntimeError(f"FFmpeg not working: {result.stderr}")
        self.logger.debug(f"Using FFmpeg at {self.ffmpeg}, staging in {self.tmp}")

    # Staged files
    def path(self, name: str) -> str:
        """
        Resolve a staged file name inside the working directory.

        Args:
            name: Staged name (leading slashes are ignored)

        Returns:
            Absolute path of the staged file

        Raises:
            AssetResolutionError: If name resolves outside the working directory
        """
        path = os.path.join(self.tmp, name.lstrip("/\\"))
        resolved = os.path.realpath(path)
        root = self._root
        if resolved == root or os.path.commonpath([root, resolved]) != root:
            raise AssetResolutionError(
                f"Staged name {name!r} resolves outside the working directory", name
            )
        return path

    def write_file(self, name: str, data: bytes) -> str:
        """
        Stage bytes under a name.

        Args:
            name: Staged name
            data: File contents

        Returns:
            Absolute path of the staged file
        """
        path = self.path(name)
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)
        self.logger.debug(f"Staged {name} ({len(data)} bytes)")
        return path

    def read_file(self, name: str) -> bytes:
        """
        Read a staged or produced file.

        Raises:
            FileNotFoundError: If nothing was written under name
        """
        with open(self.path(name), "rb") as f:
            return f.read()

    def cleanup(self) -> None:
        """Remove the working directory and everything staged in it."""
        try:
            self._tmp.cleanup()
        except OSError as e:
            self.logger.warning(f"Could not remove working directory {self.tmp}: {e}")
        else:
            self.logger.debug(f"Removed working directory {self.tmp}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()


# Shared by editors created without an explicit context
_SHARED_CTX: Optional[MediaContext] = None


def default_context() -> MediaContext:
    """Shared context, created on first use."""
    global _SHARED_CTX
    if _SHARED_CTX is None:
        _SHARED_CTX = MediaContext()
    return _SHARED_CTX


def set_default_context(ctx: MediaContext) -> None:
    """Replace the shared context used by editors created without one."""
    global _SHARED_CTX
    _SHARED_CTX = ctx
