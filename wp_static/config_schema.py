from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

_ENV_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _validate_env_var_name(value: str) -> str:
    name = (value or "").strip()
    if not _ENV_NAME_RE.fullmatch(name):
        raise ValueError("must be a valid environment variable name")
    return name


class SourceConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url_env: str = "WP_API_URL"
    endpoint_path: str = "/latest-posts"
    timeout_seconds: float | None = Field(None, gt=0)

    @field_validator("base_url_env")
    @classmethod
    def _base_url_env_must_be_valid(cls, v: str) -> str:
        return _validate_env_var_name(v)

    @field_validator("endpoint_path")
    @classmethod
    def _endpoint_path_must_be_absolute(cls, v: str) -> str:
        path = (v or "").strip()
        if not path.startswith("/"):
            raise ValueError("must start with '/'")
        return path


class SiteConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str = "Blog"
    description: str = ""


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    source: SourceConfig = Field(default_factory=SourceConfig)
    site: SiteConfig = Field(default_factory=SiteConfig)
