from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, Sequence

from .config_schema import SiteConfig
from .errors import FetchError, RenderError
from .post import FetchResult
from .queries import PostQueries
from .render import render_index, render_post


class BuildEventLogger(Protocol):
    def info(self, event: str, *, url: str | None = None, **data: Any) -> None: ...

    def warning(self, event: str, *, url: str | None = None, **data: Any) -> None: ...

    def error(self, event: str, *, url: str | None = None, **data: Any) -> None: ...


@dataclass(frozen=True)
class BuildResult:
    out_dir: Path
    index_path: Path
    post_paths: Sequence[Path]
    skipped_ids: Sequence[str]

    @property
    def pages_written(self) -> int:
        return 1 + len(self.post_paths)


@dataclass(frozen=True)
class _SnapshotSource:
    """Replays one verified fetch so a strict build renders from a single response."""

    result: FetchResult

    def fetch(self) -> FetchResult:
        return self.result


def _is_safe_page_id(post_id: str) -> bool:
    if not post_id or post_id in (".", ".."):
        return False
    return "/" not in post_id and "\\" not in post_id


def _write_page(path: Path, html: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
    except OSError as e:
        raise RenderError(f"Failed to write page: {path}") from e


def build_site(
    queries: PostQueries,
    site: SiteConfig,
    out_dir: str | Path,
    *,
    logger: BuildEventLogger | None = None,
    strict: bool = False,
) -> BuildResult:
    """
    Pre-render the index page and one page per post route.

    Routes come from list_identifiers() and each page's data from get_by_id(), so a
    post that disappears between the two calls renders as an empty page. With
    strict=True the posts are fetched once, a failed fetch raises FetchError, and
    every page is rendered from that one response.
    """
    out = Path(out_dir)

    if strict:
        result = queries.fetch_result()
        if not result.ok:
            if logger is not None:
                logger.error("build_fetch_failed", reason=result.error)
            raise FetchError(result.error or "fetch failed")
        queries = PostQueries(_SnapshotSource(result))

    summaries = queries.list_sorted()
    routes = queries.list_identifiers()

    post_paths: list[Path] = []
    skipped: list[str] = []

    for route in routes:
        if not _is_safe_page_id(route.id):
            skipped.append(route.id)
            if logger is not None:
                logger.warning("page_skipped", post_id=route.id, reason="unsafe_id")
            continue

        detail = queries.get_by_id(route.id)
        page_path = out / "posts" / f"{route.id}.html"
        _write_page(page_path, render_post(detail, site))
        post_paths.append(page_path)
        if logger is not None:
            logger.info("page_written", post_id=route.id, path=str(page_path))

    linked = [s for s in summaries if _is_safe_page_id(s.id)]
    index_path = out / "index.html"
    _write_page(index_path, render_index(linked, site))
    if logger is not None:
        logger.info("page_written", path=str(index_path), posts=len(linked))

    return BuildResult(
        out_dir=out,
        index_path=index_path,
        post_paths=tuple(post_paths),
        skipped_ids=tuple(skipped),
    )
