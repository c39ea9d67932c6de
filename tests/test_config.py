import importlib

import config


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("API_PORT", "9100")
    monkeypatch.setenv("DEBUG", "yes")
    monkeypatch.setenv("BOOKSTORE_DB_FILE", "/tmp/other.db")
    try:
        reloaded = importlib.reload(config)
        assert reloaded.settings.api_port == 9100
        assert reloaded.settings.debug is True
        assert reloaded.settings.database_file == "/tmp/other.db"
    finally:
        monkeypatch.undo()
        importlib.reload(config)


def test_as_bool():
    assert config._as_bool(None) is False
    assert config._as_bool(None, default=True) is True
    assert config._as_bool("1") is True
    assert config._as_bool("off") is False
