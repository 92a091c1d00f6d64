from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr, field_validator


class RawPost(BaseModel):
    """A single element of the `/latest-posts` array, as WordPress sends it."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    ID: StrictInt | StrictStr
    post_title: str | None = None
    post_date: str | None = None
    post_content: str | None = None

    @field_validator("ID")
    @classmethod
    def _id_must_be_usable(cls, v: int | str) -> int | str:
        if isinstance(v, str) and not v.strip():
            raise ValueError("must be a non-empty identifier")
        return v

    @property
    def id_str(self) -> str:
        return str(self.ID)


@dataclass(frozen=True)
class PostSummary:
    id: str
    title: str = ""
    date: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "title": self.title, "date": self.date}


@dataclass(frozen=True)
class PostDetail:
    id: str
    title: str = ""
    date: str = ""
    content: str = ""

    @classmethod
    def empty(cls) -> "PostDetail":
        return cls(id="", title="", date="", content="")

    def is_empty(self) -> bool:
        return not (self.id or self.title or self.date or self.content)

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "content": self.content,
        }


@dataclass(frozen=True)
class RouteParam:
    """One static route, shaped like `{"params": {"id": ...}}`."""

    id: str

    def to_dict(self) -> dict[str, Any]:
        return {"params": {"id": self.id}}


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one endpoint fetch: posts on success, a reason on failure."""

    posts: Sequence[RawPost] = field(default_factory=tuple)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, posts: Sequence[RawPost]) -> "FetchResult":
        return cls(posts=tuple(posts), error=None)

    @classmethod
    def failure(cls, reason: str) -> "FetchResult":
        return cls(posts=(), error=(reason or "").strip() or "fetch failed")
