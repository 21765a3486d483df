# src/config/settings.py
"""
Application configuration management.
Loads settings from environment variables with sensible defaults.

Environment selection: APP_ENV (or FLASK_ENV for compatibility), one of
dev | prod | test. A `.env` file in the working directory is honoured by the
entry points (CLI, web) through python-dotenv.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional
from dataclasses import dataclass


# -------------------------- helpers (pure) --------------------------


def _norm_env_name(raw: Optional[str]) -> str:
    """
    Normalize environment name to one of: dev | prod | test
    Accepts FLASK_ENV compatibility.
    """
    if not raw:
        raw = os.getenv("APP_ENV") or os.getenv("FLASK_ENV") or "prod"
    raw = raw.lower().strip()
    if raw in {"development", "debug"}:
        return "dev"
    if raw in {"production", "release"}:
        return "prod"
    if raw == "testing":
        return "test"
    if raw not in {"dev", "prod", "test"}:
        return "prod"
    return raw


def _project_root() -> Path:
    return Path(
        os.getenv("PROJECT_ROOT", Path(__file__).parent.parent.parent)
    ).resolve()


def _bool(var: str, default: bool = False) -> bool:
    val = os.getenv(var)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


def _int(var: str, default: int) -> int:
    try:
        return int(os.getenv(var, "").strip() or default)
    except ValueError:
        return default


# -------------------------- dataclasses --------------------------


@dataclass
class WebConfig:
    """Web server configuration."""

    secret_key: str
    debug: bool
    host: str
    port: int
    max_content_length: int


@dataclass
class MonitorConfig:
    """Dashboard computation configuration."""

    deadline_warning_days: int
    store_capacity: int
    snapshot_path: Optional[str]


@dataclass
class Settings:
    """Application settings."""

    environment: str
    project_root: Path
    log_level: str
    web: WebConfig
    monitor: MonitorConfig


# -------------------------- public API --------------------------


def get_settings(environment: Optional[str] = None) -> Settings:
    """
    Get application settings based on environment.
    """
    env = _norm_env_name(environment)
    project_root = _project_root()

    web = WebConfig(
        secret_key=os.getenv("SECRET_KEY", "dev-secret-key-change-in-production"),
        debug=_bool("DEBUG", env == "dev"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int("PORT", 8000),
        max_content_length=_int("MAX_CONTENT_LENGTH", 2 * 1024 * 1024),  # 2MB, CSV uploads
    )

    snapshot_path = os.getenv("SNAPSHOT_PATH")
    monitor = MonitorConfig(
        deadline_warning_days=_int("DEADLINE_WARNING_DAYS", 7),
        store_capacity=_int("STORE_CAPACITY", 96),
        snapshot_path=str(Path(snapshot_path).expanduser()) if snapshot_path else None,
    )

    return Settings(
        environment=env,
        project_root=project_root,
        log_level=os.getenv("LOG_LEVEL", "DEBUG" if env == "dev" else "INFO").upper(),
        web=web,
        monitor=monitor,
    )
