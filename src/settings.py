#!/usr/bin/env python
"""
Centralized configuration schema for the home page.

Merges defaults from config.Config with optional runtime overrides and
normalizes the values the Last.fm widget and the page content rely on.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from config import Config


class AppSettings(BaseModel):
    """Application-wide settings."""

    model_config = ConfigDict(extra="ignore")

    # Last.fm
    lastfm_api_key: Optional[str] = None
    lastfm_api_url: str = "https://ws.audioscrobbler.com/2.0/"
    lastfm_user: str = "kkyowa"
    lastfm_limit: int = 10
    lastfm_timeout_seconds: float = 5.0

    # Page content
    birth_date: date = date(2005, 4, 24)
    data_dir: str = "data"

    @property
    def lastfm_enabled(self) -> bool:
        return bool(self.lastfm_api_key)

    @field_validator("lastfm_api_key", mode="before")
    @classmethod
    def _blank_key_is_none(cls, value: object) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("lastfm_limit", mode="before")
    @classmethod
    def _coerce_limit(cls, value: object) -> int:
        try:
            limit = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 10
        # Last.fm caps page size at 200
        return max(1, min(limit, 200))

    @field_validator("lastfm_timeout_seconds", mode="before")
    @classmethod
    def _coerce_timeout(cls, value: object) -> float:
        try:
            timeout = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 5.0
        return max(0.5, min(timeout, 30.0))

    @field_validator("birth_date", mode="before")
    @classmethod
    def _parse_birth_date(cls, value: object) -> object:
        if isinstance(value, str):
            try:
                return date.fromisoformat(value.strip())
            except ValueError:
                return date(2005, 4, 24)
        return value


def load_app_settings(overrides: Optional[Dict[str, Any]] = None) -> AppSettings:
    """Load settings merging config defaults with optional runtime overrides."""
    data: Dict[str, Any] = {
        "lastfm_api_key": Config.LAST_FM_KEY,
        "lastfm_api_url": Config.LASTFM_API_URL,
        "lastfm_user": Config.LASTFM_USER,
        "lastfm_limit": Config.LASTFM_LIMIT,
        "lastfm_timeout_seconds": Config.LASTFM_TIMEOUT_SECONDS,
        "birth_date": Config.BIRTH_DATE,
        "data_dir": Config.DATA_DIR,
    }
    if overrides:
        data.update(overrides)
    return AppSettings.model_validate(data)


__all__ = [
    "AppSettings",
    "load_app_settings",
]
