"""Domain models for site configuration, scanning and build results."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .errors import ConfigError

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".hbs"
OUTPUT_SUFFIX = ".html"
DEFAULT_CONFIG_FILE = Path("./mllt.toml")


class SiteSettings(BaseModel):
    """The ``[site]`` table of ``mllt.toml``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    baseurl: str = Field(..., alias="baseURL", description="Site base URL")
    out_dir: Path = Field(
        default=Path("./html"), alias="publishdir", description="Where to put artifacts"
    )
    content: Path = Field(..., description="Page templates folder")
    theme: Path | None = Field(default=None, description="Partials and layouts folder")
    assets: Path | None = Field(
        default=None, description="Static files copied directly to the output"
    )
    strict: bool = Field(
        default=False,
        description="Treat missing context values as errors instead of empty strings",
    )
    workers: int = Field(default=1, ge=1, description="Threads used to render and sync")


class Config(BaseSettings):
    """Resolved site configuration.

    Values come from ``mllt.toml``; ``MLLT_``-prefixed environment variables
    override the file (``MLLT_SITE__STRICT=true``) and :meth:`merge_with`
    applies command line overrides on top of both.
    """

    model_config = SettingsConfigDict(
        env_prefix="MLLT_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    site: SiteSettings
    params: dict[str, Any] = Field(
        default_factory=dict, description="Extra values exposed to templates"
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment wins over values read from the config file.
        return env_settings, init_settings

    @classmethod
    def from_str(cls, text: str, source: Path | str = "<string>") -> Config:
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(source, str(exc)) from exc
        try:
            return cls(**data)
        except ValidationError as exc:
            raise ConfigError(source, str(exc)) from exc

    @classmethod
    def from_file(cls, path: Path) -> Config:
        """Load configuration from a TOML file.

        Args:
            path: Path to ``mllt.toml``

        Returns:
            Validated configuration
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(path, f"Error opening: {exc.strerror or exc}") from exc
        logger.debug(f"Loaded config file: {path}")
        return cls.from_str(text, source=path)

    def merge_with(self, **overrides: Any) -> Config:
        """Return a copy with ``[site]`` fields replaced by non-None overrides."""
        updates = {key: value for key, value in overrides.items() if value is not None}
        unknown = set(updates) - set(SiteSettings.model_fields)
        if unknown:
            raise ValueError(f"Unknown site setting(s): {', '.join(sorted(unknown))}")
        if not updates:
            return self
        return self.model_copy(update={"site": self.site.model_copy(update=updates)})


class ScannedTemplate(BaseModel):
    """A template file discovered under a scan root."""

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(..., description="Registry key derived from the path")
    path: Path = Field(..., description="Absolute file path")
    relative_path: Path = Field(..., description="Path relative to the scan root")
    source: str = Field(..., description="Template source text")


class SyncReport(BaseModel):
    """Outcome of one asset sync pass."""

    copied: list[Path] = Field(default_factory=list, description="Destinations written")
    skipped: list[Path] = Field(
        default_factory=list, description="Destinations already up to date"
    )
    created_dirs: list[Path] = Field(
        default_factory=list, description="Destination directories created"
    )


class BuildReport(BaseModel):
    """Outcome of a full site build."""

    templates: int = Field(..., description="Number of registered templates")
    pages: list[Path] = Field(default_factory=list, description="Rendered output files")
    assets: SyncReport | None = Field(
        default=None, description="Asset sync result, if an assets folder is configured"
    )
