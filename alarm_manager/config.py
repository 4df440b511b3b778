"""Application configuration loaded from config.yaml + environment variables."""

from __future__ import annotations

import yaml
from functools import lru_cache
from pathlib import Path
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///data/alarm_company.db"


def _load_yaml(path: Path = _CONFIG_PATH) -> dict:
    if path.exists():
        with open(path) as f:
            return yaml.safe_load(f) or {}
    return {}


class LoggingConfig(BaseSettings):
    level: str = "INFO"
    directory: str = "logs"
    filename: str = "alarm-manager.log"
    retention_days: int = 30
    console: bool = True

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return v


class WorkOrderConfig(BaseSettings):
    number_prefix: str = "WO"
    number_width: int = 4
    upcoming_days: int = 7
    recent_limit: int = 5


class Settings(BaseSettings):
    app_name: str = "Alarm Company Manager"
    database_url: str = DEFAULT_DATABASE_URL
    echo_sql: bool = False
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    work_orders: WorkOrderConfig = Field(default_factory=WorkOrderConfig)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


def load_settings(path: Path = _CONFIG_PATH) -> Settings:
    """Build Settings by merging YAML defaults with env overrides."""
    y = _load_yaml(path)
    overrides = {}
    db_url = y.get("database", {}).get("url")
    if db_url:
        overrides["database_url"] = db_url
    if "echo" in y.get("database", {}):
        overrides["echo_sql"] = bool(y["database"]["echo"])
    return Settings(
        logging=LoggingConfig(**y.get("logging", {})),
        work_orders=WorkOrderConfig(**y.get("work_orders", {})),
        **overrides,
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
