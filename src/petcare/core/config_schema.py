"""Pydantic models for config validation.

Opt-in schema validation for ``Config.config_data``.  Call
``Config.validated()`` to obtain a typed, validated ``PetCareConfig``
instance.  Existing dict-based access continues to work unchanged.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PathsConfig(BaseModel):
    """File-system paths used by the application."""

    data_dir: Path
    storage_dir: Path | None = None
    log_dir: Path | None = None

    @field_validator("data_dir", "storage_dir", "log_dir", mode="before")
    @classmethod
    def _expand_user(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(v).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v


class StorageConfig(BaseModel):
    """Persistence settings."""

    timeout: float = Field(10.0, gt=0)
    compress: bool = True


class AnalyticsConfig(BaseModel):
    """Statistics windows and recomputation knobs."""

    window_days: int = Field(30, ge=1)
    streak_limit_days: int = Field(3650, ge=1)
    upcoming_limit: int = Field(5, ge=1)
    debounce_seconds: float = Field(0.5, ge=0)


class NotificationsConfig(BaseModel):
    default_body: str = "PetCare reminder"


class SyncConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    enabled: bool = False


class LoggingConfig(BaseModel):
    level: str = "WARNING"
    file: str | None = None

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {v!r}")
        return level


class PetCareConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so consumers can bolt on custom sections
    without touching this schema.
    """

    model_config = ConfigDict(extra="allow")

    paths: PathsConfig = PathsConfig(data_dir=Path("~/.petcare-data"))
    storage: StorageConfig = StorageConfig()
    analytics: AnalyticsConfig = AnalyticsConfig()
    notifications: NotificationsConfig = NotificationsConfig()
    sync: SyncConfig = SyncConfig()
    logging: LoggingConfig = LoggingConfig()
