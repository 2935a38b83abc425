"""Asset fetching from local paths and HTTP(S) URLs."""

import asyncio
import logging
import requests
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse
from ..__version__ import __version__
from ..core.errors import AssetResolutionError


class AssetFetcher:
    """Resolves an asset source (file path or URL) into raw bytes."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = 300.0,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            session: Optional requests session to use for URLs
            timeout: Request timeout in seconds
            logger: Logger instance for debugging
        """
        self.session = session or requests.Session()
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

        self.session.headers.update(
            {"User-Agent": f"mediaeditor-python/{__version__}"}
        )

    @staticmethod
    def is_url(source: str) -> bool:
        """Check if source is an HTTP(S) URL."""
        return urlparse(source).scheme in ("http", "https")

    def fetch(self, source: str) -> bytes:
        """
        Fetch asset bytes.

        Args:
            source: Local file path or HTTP(S) URL

        Returns:
            Asset contents

        Raises:
            AssetResolutionError: If the asset cannot be read or downloaded
        """
        if self.is_url(source):
            return self._download(source)

        try:
            data = Path(source).read_bytes()
        except OSError as e:
            raise AssetResolutionError(f"Failed to read {source}: {e}", source)

        self.logger.debug(f"Read {source} ({len(data)} bytes)")
        return data

    async def fetch_async(self, source: str) -> bytes:
        """Fetch asset bytes without blocking the event loop."""
        return await asyncio.to_thread(self.fetch, source)

    def _download(self, url: str) -> bytes:
        """Download a URL."""
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.Timeout:
            raise AssetResolutionError(
                f"Download of {url} timed out after {self.timeout} seconds", url
            )
        except requests.exceptions.RequestException as e:
            raise AssetResolutionError(f"Failed to download {url}: {e}", url)

        self.logger.debug(f"Downloaded {url} ({len(response.content)} bytes)")
        return response.content
