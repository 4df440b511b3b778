import logging
import logging.config

import pytest
from pydantic import ValidationError

from alarm_manager.config import DEFAULT_DATABASE_URL, LoggingConfig, load_settings
from alarm_manager.logging_config import build_logging_config


def test_missing_yaml_uses_defaults(tmp_path):
    settings = load_settings(tmp_path / "absent.yaml")
    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.work_orders.number_prefix == "WO"
    assert settings.work_orders.number_width == 4
    assert settings.logging.retention_days == 30


def test_yaml_overrides(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "database:\n"
        "  url: sqlite+aiosqlite:///tmp/other.db\n"
        "  echo: true\n"
        "logging:\n"
        "  level: debug\n"
        "  console: false\n"
        "work_orders:\n"
        "  upcoming_days: 14\n"
    )
    settings = load_settings(path)
    assert settings.database_url == "sqlite+aiosqlite:///tmp/other.db"
    assert settings.echo_sql is True
    assert settings.logging.level == "DEBUG"
    assert settings.work_orders.upcoming_days == 14


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        LoggingConfig(level="chatty")


def test_logging_config_shape(tmp_path):
    cfg = LoggingConfig(directory=str(tmp_path), console=False, retention_days=7)
    conf = build_logging_config(cfg)

    assert set(conf["handlers"]) == {"file"}
    assert conf["handlers"]["file"]["backupCount"] == 7
    assert conf["handlers"]["file"]["when"] == "midnight"
    assert conf["loggers"]["alarm_manager"]["level"] == "INFO"


def test_logging_config_is_accepted_by_dictconfig(tmp_path):
    cfg = LoggingConfig(directory=str(tmp_path), console=True)
    logging.config.dictConfig(build_logging_config(cfg))
    logging.getLogger("alarm_manager.tests").info("hello")

    root = logging.getLogger("alarm_manager")
    for handler in list(root.handlers):
        handler.flush()
        root.removeHandler(handler)
        handler.close()
    root.propagate = True
    assert "hello" in (tmp_path / cfg.filename).read_text()
