from __future__ import annotations

import logging
from typing import Any, Protocol

import requests
from pydantic import ValidationError

from .config import SourceSettings
from .errors import FetchError
from .post import FetchResult, RawPost

_log = logging.getLogger(__name__)


class EventLogger(Protocol):
    def warning(self, event: str, *, url: str | None = None, **data: Any) -> None: ...

    def error(self, event: str, *, url: str | None = None, **data: Any) -> None: ...


class _StdlibEventLogger:
    """Routes adapter events to the `logging` module when no build log is attached."""

    def warning(self, event: str, *, url: str | None = None, **data: Any) -> None:
        _log.warning("%s url=%s %s", event, url or "-", data)

    def error(self, event: str, *, url: str | None = None, **data: Any) -> None:
        _log.error("%s url=%s %s", event, url or "-", data)


def _decode_posts(body: list[Any]) -> list[RawPost]:
    posts: list[RawPost] = []
    for index, item in enumerate(body):
        try:
            posts.append(RawPost.model_validate(item))
        except ValidationError as e:
            raise FetchError(f"Invalid post at index {index}: {e.errors()[0].get('msg')}") from e
    return posts


class WordPressPostSource:
    """
    Reads the custom `/latest-posts` endpoint of a WordPress install.

    Every call re-fetches. There are no retries and no caching; failures are logged
    and reported through FetchResult instead of being raised.
    """

    def __init__(
        self,
        settings: SourceSettings,
        *,
        session: requests.Session | None = None,
        logger: EventLogger | None = None,
    ) -> None:
        self._settings = settings
        self._session = session or requests.Session()
        self._logger: EventLogger = logger or _StdlibEventLogger()

    @property
    def endpoint_url(self) -> str:
        return self._settings.endpoint_url

    def fetch(self) -> FetchResult:
        url = self.endpoint_url

        try:
            response = self._session.get(
                url,
                headers={"Accept": "application/json"},
                timeout=self._settings.timeout_seconds,
            )
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as e:
            # JSON decode errors from requests subclass RequestException.
            message = f"Error fetching WordPress posts: {e}"
            self._logger.error("posts_fetch_failed", url=url, message=str(e))
            return FetchResult.failure(message)
        except ValueError as e:
            message = f"Error decoding WordPress posts: {e}"
            self._logger.error("posts_fetch_failed", url=url, message=str(e))
            return FetchResult.failure(message)

        if not isinstance(body, list):
            message = "Unexpected API response format. Expected array."
            self._logger.warning(
                "posts_format_mismatch", url=url, received=type(body).__name__
            )
            return FetchResult.failure(message)

        try:
            posts = _decode_posts(body)
        except FetchError as e:
            self._logger.warning("posts_item_invalid", url=url, message=str(e))
            return FetchResult.failure(str(e))

        return FetchResult.success(posts)

    def fetch_all_raw_posts(self) -> list[RawPost]:
        return list(self.fetch().posts)
