from pathlib import Path

import config


def _write_config(path: Path, text: str) -> None:
    path.write_text(text, encoding="utf-8")


def _use_config(tmp_path, monkeypatch, text: str) -> Path:
    config_dir = tmp_path / ".versetrack"
    config_dir.mkdir()
    config_path = config_dir / "config.toml"
    _write_config(config_path, text)
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_PATH", config_path)
    for name in ("MEMORIZATION_SYSTEM_ENABLED", "MEMORIZATION_TIMEZONE", "MEMORIZATION_STREAK_LOOKBACK_DAYS"):
        monkeypatch.delenv(name, raising=False)
    return config_path


def test_set_system_enabled_updates_existing_section(tmp_path, monkeypatch):
    config_path = _use_config(tmp_path, monkeypatch, "[memorization]\nsystem_enabled = true\ntimezone = \"UTC\"\n")

    config.set_system_enabled(False)

    updated = config_path.read_text(encoding="utf-8")
    assert "system_enabled = false" in updated
    assert 'timezone = "UTC"' in updated
    assert config.load_config()["memorization"]["system_enabled"] is False


def test_set_system_enabled_adds_section_when_missing(tmp_path, monkeypatch):
    config_path = _use_config(tmp_path, monkeypatch, "[logging]\nlevel = \"DEBUG\"\n")

    config.set_system_enabled(True)

    updated = config_path.read_text(encoding="utf-8")
    assert "[memorization]" in updated
    assert "system_enabled = true" in updated


def test_defaults_and_env_overrides(tmp_path, monkeypatch):
    _use_config(tmp_path, monkeypatch, "")

    loaded = config.load_config()
    assert loaded["memorization"] == {
        "system_enabled": True,
        "timezone": "local",
        "streak_lookback_days": 365,
    }

    monkeypatch.setenv("MEMORIZATION_SYSTEM_ENABLED", "false")
    monkeypatch.setenv("MEMORIZATION_TIMEZONE", "UTC")
    assert config.get_config_value("memorization", "system_enabled") is False
    assert config.get_config_value("memorization", "timezone") == "UTC"


def test_example_config_is_copied_on_first_load(tmp_path, monkeypatch):
    config_dir = tmp_path / ".versetrack"
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_PATH", config_dir / "config.toml")
    monkeypatch.delenv("MEMORIZATION_SYSTEM_ENABLED", raising=False)

    loaded = config.load_config()

    assert (config_dir / "config.toml").exists()
    assert loaded["memorization"]["system_enabled"] is True
