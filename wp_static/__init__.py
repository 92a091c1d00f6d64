from __future__ import annotations

from .config import SourceSettings, load_config, resolve_source_settings
from .config_schema import AppConfig
from .errors import ConfigError, FetchError, RenderError
from .post import FetchResult, PostDetail, PostSummary, RawPost, RouteParam
from .queries import PostQueries
from .wp_client import WordPressPostSource

__all__ = [
    "AppConfig",
    "ConfigError",
    "FetchError",
    "FetchResult",
    "PostDetail",
    "PostQueries",
    "PostSummary",
    "RawPost",
    "RenderError",
    "RouteParam",
    "SourceSettings",
    "WordPressPostSource",
    "load_config",
    "resolve_source_settings",
]
