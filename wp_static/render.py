from __future__ import annotations

from functools import lru_cache
from typing import Any, Sequence

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from .config_schema import SiteConfig
from .errors import RenderError
from .normalize import display_date
from .post import PostDetail, PostSummary

INDEX_TEMPLATE = "index.html.j2"
POST_TEMPLATE = "post.html.j2"


@lru_cache(maxsize=1)
def _environment() -> Environment:
    env = Environment(
        loader=PackageLoader("wp_static", "templates"),
        autoescape=True,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["display_date"] = display_date
    return env


def _render(template_name: str, **context: Any) -> str:
    try:
        return _environment().get_template(template_name).render(**context)
    except TemplateError as e:
        raise RenderError(f"Failed to render {template_name}: {e}") from e


def render_index(posts: Sequence[PostSummary], site: SiteConfig) -> str:
    return _render(INDEX_TEMPLATE, posts=list(posts), site=site, root="")


def render_post(post: PostDetail, site: SiteConfig) -> str:
    """Render one post page. `post.content` is trusted HTML from WordPress and is not escaped."""
    return _render(POST_TEMPLATE, post=post, site=site, root="../")
