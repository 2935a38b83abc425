"""Shared test fixtures and configuration."""

import pytest
import tempfile
import os
from unittest.mock import patch
from mediaeditor.media import MediaContext


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield tmp_dir


@pytest.fixture
def ctx():
    """Media context with the FFmpeg version check stubbed out."""
    with patch("subprocess.run") as mock_run:
        mock_run.return_value.returncode = 0
        mock_run.return_value.stderr = ""
        context = MediaContext()
    yield context
    context.cleanup()


@pytest.fixture
def sample_video_path(temp_dir):
    """Create a sample video file path (fake contents for testing)."""
    video_path = os.path.join(temp_dir, "sample.mp4")
    with open(video_path, "wb") as f:
        f.write(b"fake video data")
    return video_path


@pytest.fixture
def sample_image_path(temp_dir):
    """Create a sample image file path (fake contents for testing)."""
    image_path = os.path.join(temp_dir, "sample.png")
    with open(image_path, "wb") as f:
        f.write(b"fake image data")
    return image_path


@pytest.fixture
def sample_catalog(temp_dir):
    """Asset catalogue whose font and stickers exist on disk."""
    from mediaeditor.media import AssetCatalog

    sources = {}
    for name in ("font.ttf", "logo.png", "star.png"):
        path = os.path.join(temp_dir, name)
        with open(path, "wb") as f:
            f.write(f"fake {name}".encode())
        sources[name] = path

    return AssetCatalog(
        fonts=[sources["font.ttf"]],
        stickers=[sources["logo.png"], sources["star.png"]],
    )
