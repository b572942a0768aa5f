#!/usr/bin/env python
"""
Centralized configuration schema and pinning settings loader.

Merges defaults from config.Config with environment variables and
provides helpers to build credentials for the pinning client.
"""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config import Config


def _env_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _parse_origins(value: Optional[object]) -> List[str]:
    """Normalize CORS origins into a unique ordered list without wildcards."""
    if value is None:
        tokens: List[str] = []
    elif isinstance(value, str):
        tokens = [token.strip() for token in value.split(",")]
    elif isinstance(value, (list, tuple, set)):
        tokens = [str(token).strip() for token in value]
    else:
        tokens = [str(value).strip()]

    normalized: List[str] = []
    for token in tokens:
        if not token or token == "*":
            continue
        token = token.rstrip("/")
        if token not in normalized:
            normalized.append(token)
    return normalized


class PinningCredentials(BaseModel):
    """API key pair sent to Pinata with every upload."""

    model_config = ConfigDict(frozen=True)

    api_key: str
    secret_key: str


class AppSettings(BaseModel):
    """Application-wide settings."""

    model_config = ConfigDict(extra="ignore")

    # Pinata
    pinata_api_key: Optional[str] = None
    pinata_secret_api_key: Optional[str] = None
    pinata_endpoint: str = "https://api.pinata.cloud/pinning/pinFileToIPFS"
    pinata_timeout_seconds: int = 30
    pin_uploaded_via: str = "music-collab-backend"
    max_upload_bytes: int = Field(default=50 * 1024 * 1024, gt=0)

    # HTTP
    cors_allowed_origins: List[str] = Field(default_factory=list)
    readiness_max_nfts: int = Field(default=0, ge=0)

    debug: bool = False

    @field_validator("cors_allowed_origins", mode="before")
    @classmethod
    def _normalize_origins(cls, value: Optional[object]) -> List[str]:
        return _parse_origins(value)

    @field_validator("pinata_timeout_seconds", mode="before")
    @classmethod
    def _coerce_timeout(cls, value: object) -> int:
        try:
            seconds = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 30
        return max(1, min(seconds, 300))

    @field_validator("debug", mode="before")
    @classmethod
    def _coerce_debug(cls, value: object) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
        return bool(value)

    def pinning_credentials(self) -> Optional[PinningCredentials]:
        if not self.pinata_api_key or not self.pinata_secret_api_key:
            return None
        return PinningCredentials(api_key=self.pinata_api_key, secret_key=self.pinata_secret_api_key)


def load_app_settings(overrides: Optional[Dict[str, Any]] = None) -> AppSettings:
    """Load settings merging config defaults with optional runtime overrides."""
    data: Dict[str, Any] = {
        "pinata_api_key": Config.PINATA_API_KEY,
        "pinata_secret_api_key": Config.PINATA_SECRET_API_KEY,
        "pinata_endpoint": Config.PINATA_ENDPOINT,
        "pinata_timeout_seconds": Config.PINATA_TIMEOUT_SECONDS,
        "pin_uploaded_via": Config.PIN_UPLOADED_VIA,
        "max_upload_bytes": Config.MAX_UPLOAD_BYTES,
        "cors_allowed_origins": Config.CORS_ALLOWED_ORIGINS,
        "readiness_max_nfts": Config.READINESS_MAX_NFTS,
        "debug": _env_bool("DEBUG", Config.DEBUG),
    }
    if overrides:
        data.update(overrides)
    return AppSettings.model_validate(data)


__all__ = [
    "AppSettings",
    "PinningCredentials",
    "load_app_settings",
]
