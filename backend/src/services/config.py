"""Application configuration helpers."""

from __future__ import annotations

from functools import lru_cache
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://localhost:1420")
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_FALSE_VALUES = {"0", "false", "no", "off"}


class AppConfig(BaseModel):
    """Runtime configuration loaded from environment variables."""

    model_config = ConfigDict(frozen=True)

    vault_path: Optional[Path] = Field(
        default=None,
        description="Directory of Markdown notes loaded into the store at startup",
    )
    enable_link_suggestions: bool = Field(
        default=True,
        description="Feature toggle for the neural linker",
    )
    suggestion_limit: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Maximum autocomplete titles returned per query",
    )
    search_limit: Optional[int] = Field(
        default=None,
        ge=1,
        description="Default cap on search results served over HTTP",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: tuple[str, ...] = Field(default=DEFAULT_CORS_ORIGINS)

    @field_validator("vault_path", mode="before")
    @classmethod
    def _normalize_vault_path(cls, value: str | Path | None) -> Optional[Path]:
        if value is None or value == "":
            return None
        path = value if isinstance(value, Path) else Path(value)
        return path.expanduser().resolve()

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: str | None) -> str:
        level = (value or "INFO").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: str | tuple[str, ...] | list[str] | None) -> tuple[str, ...]:
        if value is None or value == "":
            return DEFAULT_CORS_ORIGINS
        if isinstance(value, str):
            value = value.split(",")
        return tuple(origin.strip() for origin in value if origin.strip())


def _read_env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(key, default)


def _read_int(key: str) -> Optional[int]:
    raw = _read_env(key)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from exc


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Load and cache application configuration."""
    enable_link_suggestions = (
        _read_env("KB_ENABLE_LINK_SUGGESTIONS", "true").strip().lower() not in _FALSE_VALUES
    )
    suggestion_limit = _read_int("KB_SUGGESTION_LIMIT")

    config = AppConfig(
        vault_path=_read_env("KB_VAULT_PATH"),
        enable_link_suggestions=enable_link_suggestions,
        suggestion_limit=suggestion_limit if suggestion_limit is not None else 5,
        search_limit=_read_int("KB_SEARCH_LIMIT"),
        log_level=_read_env("KB_LOG_LEVEL", "INFO"),
        cors_origins=_read_env("KB_CORS_ORIGINS"),
    )
    if config.vault_path is not None and not config.vault_path.is_dir():
        raise ValueError(f"KB_VAULT_PATH is not a directory: {config.vault_path}")
    return config


def reload_config() -> AppConfig:
    """Clear cached config (useful for tests) and reload."""
    get_config.cache_clear()
    return get_config()


def configure_logging(level: str | None = None) -> None:
    """Apply the shared log format to the root logger."""
    logging.basicConfig(level=level or get_config().log_level, format=LOG_FORMAT)


__all__ = [
    "AppConfig",
    "get_config",
    "reload_config",
    "configure_logging",
]
