"""Exceptions raised by the mediaeditor package."""

from typing import Optional


class EditorError(Exception):
    """Base exception for editor errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DuplicateLayerKindError(EditorError):
    """Exception raised when a second Filter, Crop or Trim layer is added."""

    def __init__(self, kind: str):
        super().__init__(f"A {kind} layer has already been added")
        self.kind = kind


class LayerIndexError(EditorError, IndexError):
    """Exception raised when removing a layer position that does not exist."""

    def __init__(self, position: int, size: int):
        super().__init__(
            f"Layer position {position} out of range for {size} layer(s)"
        )
        self.position = position
        self.size = size


class AssetResolutionError(EditorError):
    """Exception raised when an asset cannot be fetched, staged or looked up."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


class EngineExecutionError(EditorError):
    """Exception raised when FFmpeg rejects or fails the assembled command."""

    def __init__(
        self,
        message: str,
        returncode: Optional[int] = None,
        stderr: Optional[str] = None,
    ):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class NotReadyError(EditorError):
    """Exception raised when output is requested before a successful run."""

    pass
