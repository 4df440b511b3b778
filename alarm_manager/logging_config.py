"""
Logging configuration for the alarm company manager.
Console output plus a daily-rotating log file.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

from alarm_manager.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def build_logging_config(cfg: LoggingConfig) -> dict:
    handlers: dict[str, dict] = {
        "file": {
            "class": "logging.handlers.TimedRotatingFileHandler",
            "formatter": "standard",
            "filename": str(Path(cfg.directory) / cfg.filename),
            "when": "midnight",
            "backupCount": cfg.retention_days,
            "encoding": "utf-8",
        },
    }
    if cfg.console:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": LOG_FORMAT},
        },
        "handlers": handlers,
        "loggers": {
            "alarm_manager": {
                "handlers": list(handlers),
                "level": cfg.level,
                "propagate": False,
            },
            "sqlalchemy.engine": {
                "handlers": list(handlers),
                "level": "WARNING",
                "propagate": False,
            },
        },
    }


def configure_logging(cfg: LoggingConfig) -> None:
    Path(cfg.directory).mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(cfg))
    logging.getLogger("alarm_manager").info("Logging initialised (level=%s)", cfg.level)
