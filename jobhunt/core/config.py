"""Configuration models and YAML loader for the listing finder."""

import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from jobhunt.platforms.linkedin.selectors import Selectors

ANY_LANGUAGE = "any"


class WorkplaceTypes(BaseModel):
    """Acceptable work arrangements. Flags are independent."""

    model_config = ConfigDict(frozen=True)

    on_site: bool = False
    remote: bool = False
    hybrid: bool = False


class SearchCriteria(BaseModel):
    """A single search entry. Read-only for the lifetime of a stream."""

    model_config = ConfigDict(frozen=True)

    keywords: str
    location: str = ""
    workplace: WorkplaceTypes = Field(default_factory=WorkplaceTypes)
    title_pattern: str = ".*"
    description_pattern: str = ".*"
    languages: list[str] = Field(default_factory=lambda: [ANY_LANGUAGE])

    @field_validator("keywords")
    @classmethod
    def keywords_not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "keywords must not be empty"
            raise ValueError(msg)
        return v.strip()

    @field_validator("location")
    @classmethod
    def location_stripped(cls, v: str) -> str:
        return v.strip()

    @field_validator("title_pattern", "description_pattern")
    @classmethod
    def pattern_compiles(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            msg = f"invalid regular expression {v!r}: {e}"
            raise ValueError(msg) from e
        return v

    @field_validator("languages")
    @classmethod
    def languages_not_empty(cls, v: list[str]) -> list[str]:
        cleaned = [lang.strip().lower() for lang in v if lang.strip()]
        if not cleaned:
            msg = f"languages must name at least one language or '{ANY_LANGUAGE}'"
            raise ValueError(msg)
        return cleaned

    @property
    def accepts_any_language(self) -> bool:
        return ANY_LANGUAGE in self.languages


class BrowserConfig(BaseModel):
    """Browser session configuration."""

    cookies_path: str = "config/linkedin_cookies.json"
    timeout_ms: int = Field(default=30000, ge=1000)
    slow_mo_ms: int = Field(default=0, ge=0)
    locale: str = "en-US"


class PipelineConfig(BaseModel):
    """Pacing and bounded-wait settings for the discovery pipeline."""

    page_delay_s: float = Field(default=2.0, ge=0.0)
    page_timeout_ms: int = Field(default=5000, ge=100)
    metadata_timeout_ms: int = Field(default=5000, ge=100)
    item_timeout_ms: int = Field(default=30000, ge=100)
    max_results: int | None = Field(default=None, ge=1)


class DatabaseConfig(BaseModel):
    """Database configuration."""

    path: str = "data/matches.db"


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    selectors: Selectors = Field(default_factory=Selectors)
    searches: list[SearchCriteria] = Field(default_factory=list)

    @field_validator("searches")
    @classmethod
    def at_least_one_search(cls, v: list[SearchCriteria]) -> list[SearchCriteria]:
        if not v:
            msg = "at least one search must be configured"
            raise ValueError(msg)
        return v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
