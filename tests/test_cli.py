from pathlib import Path

import gamehorizon.__main__ as cli
from gamehorizon.config import load_settings


def test_settings_defaults(monkeypatch):
    for name in ("GAMEHORIZON_STORE_PORT", "GAMEHORIZON_API_URL", "GAMEHORIZON_UI_PORT"):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings()
    assert settings.store_port == 3001
    assert settings.api_url == "http://localhost:3001"
    assert settings.ui_port == 3000


def test_settings_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("GAMEHORIZON_DB_PATH", str(tmp_path / "games.json"))
    monkeypatch.setenv("GAMEHORIZON_STORE_PORT", "4001")
    monkeypatch.delenv("GAMEHORIZON_API_URL", raising=False)
    settings = load_settings()
    assert settings.db_path == Path(tmp_path / "games.json")
    assert settings.api_url == "http://localhost:4001"


def test_store_command_runs_store_app(monkeypatch):
    calls = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs)))
    cli.main(["--log-level", "debug", "store", "--port", "5000"])
    [(target, kwargs)] = calls
    assert target == "gamehorizon.main:app"
    assert kwargs["port"] == 5000
    assert kwargs["log_level"] == "debug"


def test_ui_command_runs_ui_app(monkeypatch):
    calls = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda target, **kwargs: calls.append(target))
    cli.main(["ui"])
    assert calls == ["gamehorizon.ui.app:app"]
