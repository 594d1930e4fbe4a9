"""Facebook video & reel download link API."""

__version__ = "1.0.0"
