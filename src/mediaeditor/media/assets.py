"""Asset catalogue: indexed fonts, stickers and color filters."""

from pathlib import Path
from typing import List
from urllib.parse import urlparse
from pydantic import BaseModel, Field
from ..core.errors import AssetResolutionError

DEFAULT_FILTERS = [
    "hue=h=-60",
    "hue=h=0",
    "hue=h=60",
    "hue=h=120",
    "hue=h=180",
    "hue=h=240",
]


def staged_name_for(source: str) -> str:
    """Name an asset is staged under: the basename of its path or URL path."""
    parsed = urlparse(source)
    if parsed.scheme in ("http", "https"):
        name = Path(parsed.path).name
    else:
        name = Path(source).name
    return name or source


class AssetCatalog(BaseModel):
    """
    Indexed asset lists referenced by layers.

    Fonts and stickers map an index to a source path or URL; filters map an
    index to a filter expression applied to the primary stream.
    """

    fonts: List[str] = Field(default_factory=lambda: ["font.ttf"])
    stickers: List[str] = Field(default_factory=lambda: ["logo.png"])
    filters: List[str] = Field(default_factory=lambda: list(DEFAULT_FILTERS))

    def font_source(self, index: int) -> str:
        """Source of the font at index."""
        return self._lookup(self.fonts, index, "font")

    def font_name(self, index: int) -> str:
        """Staged name of the font at index."""
        return self._staged_name(self.font_source(index), "font", index)

    def sticker_source(self, index: int) -> str:
        """Source of the sticker at index."""
        return self._lookup(self.stickers, index, "sticker")

    def sticker_name(self, index: int) -> str:
        """Staged name of the sticker at index."""
        return self._staged_name(self.sticker_source(index), "sticker", index)

    def filter_expr(self, index: int) -> str:
        """Filter expression at index."""
        return self._lookup(self.filters, index, "filter")

    def _staged_name(self, source: str, what: str, index: int) -> str:
        """
        Basename of source, or `<what>_<index><ext>` when another catalogue
        source shares that basename.
        """
        name = staged_name_for(source)
        shared = any(
            other != source and staged_name_for(other) == name
            for other in self.fonts + self.stickers
        )
        if shared:
            name = f"{what}_{index}{Path(name).suffix}"
        return name

    @staticmethod
    def _lookup(items: List[str], index: int, what: str) -> str:
        if not 0 <= index < len(items):
            raise AssetResolutionError(f"Unknown {what} index: {index}")
        return items[index]
