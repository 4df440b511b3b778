from argparse import Namespace

import pytest

from alarm_manager import cli
from alarm_manager.config import load_settings
from alarm_manager.db import engine


@pytest.fixture
def cli_settings(tmp_path, monkeypatch):
    config = tmp_path / "config.yaml"
    config.write_text(f"database:\n  url: sqlite+aiosqlite:///{tmp_path / 'cli.db'}\n")
    settings = load_settings(config)
    monkeypatch.setattr("alarm_manager.config.get_settings", lambda: settings)
    monkeypatch.setattr(engine, "get_settings", lambda: settings)
    engine.get_engine.cache_clear()
    yield settings
    engine.get_engine.cache_clear()


async def test_init_seed_and_next_number(cli_settings, capsys):
    await cli.cmd_init_db(Namespace(seed=True))
    out = capsys.readouterr().out
    assert "Database tables created" in out
    assert "Seeded 41 lookup rows" in out

    await cli.cmd_seed(Namespace())
    assert "already populated" in capsys.readouterr().out

    await cli.cmd_next_number(Namespace(date="2024-03-01"))
    assert capsys.readouterr().out.strip() == "WO2024-0001"
