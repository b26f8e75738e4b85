"""Tests for settings persistence and validation."""

import json

import pytest

from imgzoom.config.settings import (
    ModifierKey,
    Settings,
    get_env_var,
    get_probe_timeout,
    get_settings_path,
    load_settings,
    reset_settings,
    save_settings,
    update_setting,
    validate_all_env_vars,
    validate_setting,
)
from imgzoom.exceptions import ConfigurationError


class TestModifierKey:
    """Test modifier key parsing."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("AltLeft", ModifierKey.ALT),
            ("ControlLeft", ModifierKey.CTRL),
            ("shift", ModifierKey.SHIFT),
            ("Ctrl", ModifierKey.CTRL),
        ],
    )
    def test_parse(self, value, expected):
        assert ModifierKey.parse(value) is expected

    def test_parse_unknown(self):
        with pytest.raises(ConfigurationError):
            ModifierKey.parse("MetaLeft")

    def test_flags(self):
        assert [m.flag for m in ModifierKey] == ["alt", "ctrl", "shift"]


class TestPersistence:
    """Test loading and saving settings.json."""

    def test_defaults_without_file(self):
        settings = load_settings()
        assert settings == Settings(ModifierKey.ALT, 25, 500)

    def test_settings_path_respects_env(self, isolated_config):
        assert get_settings_path() == isolated_config / "settings.json"
        assert isolated_config.is_dir()

    def test_save_uses_camel_case_keys(self):
        save_settings(Settings(ModifierKey.SHIFT, 10, 250))
        data = json.loads(get_settings_path().read_text())
        assert data == {"modifierKey": "ShiftLeft", "stepSize": 10, "initialSize": 250}

    def test_round_trip(self):
        save_settings(Settings(ModifierKey.CTRL, 40, 750))
        assert load_settings() == Settings(ModifierKey.CTRL, 40, 750)

    def test_partial_file_merges_defaults(self):
        get_settings_path().write_text('{"stepSize": 50}')
        assert load_settings() == Settings(ModifierKey.ALT, 50, 500)

    @pytest.mark.parametrize(
        "content",
        ["{not json", "[1, 2]", '{"modifierKey": "Hyper"}', '{"stepSize": "lots"}'],
    )
    def test_corrupt_file_gives_defaults(self, content, caplog):
        get_settings_path().write_text(content)
        assert load_settings() == Settings()
        assert "Ignoring unreadable settings" in caplog.text

    def test_reset(self):
        save_settings(Settings(ModifierKey.CTRL, 40, 750))
        assert reset_settings() == Settings()
        assert load_settings() == Settings()


class TestValidation:
    """Test the ranges enforced on explicit updates."""

    @pytest.mark.parametrize(
        "key, value, expected",
        [
            ("stepSize", "0", 0),
            ("stepSize", "100", 100),
            ("initialSize", "0", 0),
            ("initialSize", "1000", 1000),
            ("initialSize", 275, 275),
            ("modifierKey", "ctrl", ModifierKey.CTRL),
        ],
    )
    def test_valid(self, key, value, expected):
        assert validate_setting(key, value) == expected

    @pytest.mark.parametrize(
        "key, value",
        [
            ("stepSize", "101"),
            ("stepSize", "-1"),
            ("stepSize", "ten"),
            ("initialSize", "1025"),
            ("initialSize", "260"),
            ("modifierKey", "meta"),
            ("zoomSpeed", "3"),
        ],
    )
    def test_invalid(self, key, value):
        with pytest.raises(ConfigurationError):
            validate_setting(key, value)

    def test_update_persists(self):
        settings = update_setting("stepSize", "40")
        assert settings.step_size == 40
        assert load_settings().step_size == 40

    def test_invalid_update_keeps_file(self):
        update_setting("initialSize", "300")
        with pytest.raises(ConfigurationError):
            update_setting("initialSize", "301")
        assert load_settings().initial_size == 300


class TestEnvironment:
    """Test environment variable handling."""

    def test_probe_timeout_default(self):
        assert get_probe_timeout() == 2.0

    def test_probe_timeout_override(self, monkeypatch):
        monkeypatch.setenv("IMGZOOM_PROBE_TIMEOUT", "0.5")
        assert get_probe_timeout() == 0.5

    def test_probe_timeout_not_a_number(self, monkeypatch):
        monkeypatch.setenv("IMGZOOM_PROBE_TIMEOUT", "soon")
        with pytest.raises(ConfigurationError):
            get_probe_timeout()

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("IMGZOOM_LOG_LEVEL", "loud")
        errors = validate_all_env_vars()
        assert len(errors) == 1
        assert "IMGZOOM_LOG_LEVEL" in errors[0]
        with pytest.raises(ConfigurationError):
            get_env_var("IMGZOOM_LOG_LEVEL")

    def test_valid_environment(self, monkeypatch):
        monkeypatch.setenv("IMGZOOM_LOG_LEVEL", "DEBUG")
        assert validate_all_env_vars() == []
        assert get_env_var("IMGZOOM_LOG_LEVEL") == "DEBUG"

    def test_unset_returns_default(self):
        assert get_env_var("IMGZOOM_LOG_LEVEL") == "info"
