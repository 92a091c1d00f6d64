from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from .post import FetchResult, RawPost

_DEFAULT_OFFLINE_ITEMS: list[dict[str, Any]] = [
    {
        "ID": 3,
        "post_title": "Pre-rendering",
        "post_date": "2024-01-03 08:30:00",
        "post_content": "<p>Pages are generated ahead of each request.</p>",
    },
    {
        "ID": 1,
        "post_title": "Hello world",
        "post_date": "2024-01-01 09:00:00",
        "post_content": "<p>Welcome to WordPress. This is your first post.</p>",
    },
    {
        "ID": 2,
        "post_title": "Data fetching",
        "post_date": "2024-01-02 10:00:00",
        "post_content": "<p>Posts come from the <code>/latest-posts</code> endpoint.</p>",
    },
]


@dataclass
class OfflinePostSource:
    """
    Network-free stand-in for WordPressPostSource.

    Serves a small fixed set of posts so builds can be previewed without an API.
    """

    items: Sequence[dict[str, Any]] = tuple(_DEFAULT_OFFLINE_ITEMS)

    def fetch(self) -> FetchResult:
        return FetchResult.success([RawPost.model_validate(item) for item in self.items])
