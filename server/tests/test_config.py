from __future__ import annotations

import importlib
import os

import app.config as config


def test_settings_read_brave_environment(monkeypatch) -> None:
    keys = ("BRAVE_API_KEY", "PORT", "BRAVE_RATE_LIMIT_PER_SECOND")
    original_env = {key: os.environ.get(key) for key in keys}
    monkeypatch.setenv("BRAVE_API_KEY", "from-env")
    monkeypatch.setenv("PORT", "8123")
    monkeypatch.setenv("BRAVE_RATE_LIMIT_PER_SECOND", "20")

    reloaded = importlib.reload(config)

    try:
        assert reloaded.settings.brave_api_key == "from-env"
        assert reloaded.settings.port == 8123
        assert reloaded.settings.rate_limit_per_second == 20
        assert reloaded.settings.rate_limit_per_month == int(os.environ.get("BRAVE_RATE_LIMIT_PER_MONTH", "15000"))
    finally:
        for key, value in original_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        importlib.reload(config)


def test_get_settings_is_cached() -> None:
    assert config.get_settings() is config.get_settings()
