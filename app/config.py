"""Application configuration loaded from config.yaml + environment variables."""

from __future__ import annotations

import yaml
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings

_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"


def _load_yaml() -> dict:
    if _CONFIG_PATH.exists():
        with open(_CONFIG_PATH) as f:
            return yaml.safe_load(f) or {}
    return {}


_yaml = _load_yaml()


class UploadConfig(BaseSettings):
    base_dir: str = "data/uploads"
    max_images: int = 10
    allowed_formats: list[str] = Field(default_factory=lambda: ["JPEG", "PNG", "WEBP", "GIF"])


class AuthConfig(BaseSettings):
    session_max_age_days: int = 7
    min_password_length: int = 6
    property_roles: list[str] = Field(default_factory=lambda: ["admin", "agent"])
    schedule_roles: list[str] = Field(default_factory=lambda: ["admin", "agent"])


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///data/listings.db"
    log_level: str = "INFO"
    uploads: UploadConfig = Field(default_factory=UploadConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


def get_settings() -> Settings:
    """Build Settings by merging YAML defaults with env overrides."""
    y = _yaml
    uploads = UploadConfig(**y.get("uploads", {}))
    auth = AuthConfig(**y.get("auth", {}))
    kwargs = {}
    db_url = y.get("database", {}).get("url")
    if db_url:
        kwargs["database_url"] = db_url
    if "log_level" in y:
        kwargs["log_level"] = y["log_level"]
    return Settings(uploads=uploads, auth=auth, **kwargs)
