from __future__ import annotations

from functools import lru_cache
from typing import Protocol

from pyuca import Collator

from .normalize import to_detail, to_summary
from .post import FetchResult, PostDetail, PostSummary, RawPost, RouteParam


class PostSource(Protocol):
    def fetch(self) -> FetchResult: ...


@lru_cache(maxsize=1)
def _collator() -> Collator:
    return Collator()


def _title_sort_key(post: RawPost) -> tuple[int, ...]:
    # Unicode collation: case and accents only break ties between equal base letters.
    return _collator().sort_key(post.post_title or "")


class PostQueries:
    """
    Read operations used by page generation.

    None of these raise for missing data: a failed fetch looks like an empty blog,
    and an unknown id yields the empty PostDetail.
    """

    def __init__(self, source: PostSource) -> None:
        self._source = source

    def fetch_result(self) -> FetchResult:
        return self._source.fetch()

    def list_sorted(self) -> list[PostSummary]:
        """All posts ordered by title (Unicode collation, stable on ties)."""
        posts = self._source.fetch().posts
        if not posts:
            return []
        return [to_summary(p) for p in sorted(posts, key=_title_sort_key)]

    def list_identifiers(self) -> list[RouteParam]:
        return [RouteParam(id=p.id_str) for p in self._source.fetch().posts]

    def find_by_id(self, post_id: str) -> PostDetail | None:
        for post in self._source.fetch().posts:
            if post.id_str == post_id:
                return to_detail(post)
        return None

    def get_by_id(self, post_id: str) -> PostDetail:
        detail = self.find_by_id(post_id)
        if detail is None:
            return PostDetail.empty()
        return detail
