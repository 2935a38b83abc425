"""Version information for mediaeditor."""

__version__ = "0.1.0"
