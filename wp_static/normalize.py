from __future__ import annotations

from datetime import datetime

from .post import PostDetail, PostSummary, RawPost

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def convert_date(value: str | None) -> str:
    """
    Convert a WordPress `YYYY-MM-DD HH:mm:ss` string to `YYYY-MM-DDTHH:mm:ss`.

    Only the first space is replaced. The calendar value is not validated.
    """
    if not value:
        return ""
    return value.replace(" ", "T", 1)


def to_summary(raw: RawPost) -> PostSummary:
    return PostSummary(
        id=raw.id_str,
        title=raw.post_title or "",
        date=convert_date(raw.post_date),
    )


def to_detail(raw: RawPost) -> PostDetail:
    return PostDetail(
        id=raw.id_str,
        title=raw.post_title or "",
        date=convert_date(raw.post_date),
        content=raw.post_content or "",
    )


def display_date(value: str | None) -> str:
    """Format an ISO timestamp for pages, e.g. `January 2, 2024`; "" if unparseable."""
    s = (value or "").strip()
    if not s:
        return ""
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return ""
    return f"{_MONTHS[dt.month - 1]} {dt.day}, {dt.year}"
