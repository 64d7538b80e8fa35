"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a whole number, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "SmartSpend"
    DB_FILENAME = "smartspend.db"

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("SMARTSPEND_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("SMARTSPEND_DATABASE_URL", self._build_sqlite_url())
        self.STORE_TIMEOUT_SECONDS = _env_float("SMARTSPEND_STORE_TIMEOUT", 10.0)
        self.RECENT_LIMIT = _env_int("SMARTSPEND_RECENT_LIMIT", 5)
        if self.STORE_TIMEOUT_SECONDS <= 0:
            raise ValueError("SMARTSPEND_STORE_TIMEOUT must be greater than zero.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the local database and logs live."""

        data_root = os.getenv("SMARTSPEND_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            engine_options["connect_args"] = {
                "check_same_thread": False,
                "timeout": self.STORE_TIMEOUT_SECONDS,
            }
        else:
            engine_options["pool_pre_ping"] = True
            engine_options["pool_timeout"] = self.STORE_TIMEOUT_SECONDS
        return engine_options


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """Configuration for test runs; keeps console output quiet."""

    __test__ = False

    DEBUG = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = False
