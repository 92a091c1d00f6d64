from __future__ import annotations


class ConfigError(RuntimeError):
    """Raised when configuration is missing or invalid."""


class FetchError(RuntimeError):
    """Raised when the posts endpoint cannot be reached or returns an unusable body."""


class RenderError(RuntimeError):
    """Raised when a page template fails to render or an output file cannot be written."""
