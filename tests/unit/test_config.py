"""Tests for settings.json / profile.yaml handling.

Uses isolated directories via tmp_path and SALARY_CALENDAR_CONFIG_PATH.
"""

import json

import pytest
import yaml
from pydantic import ValidationError

from salarycal.sdk import (
    get_config_dir,
    get_effective_profile,
    get_effective_settings,
    get_profile_path,
    get_setting,
    load_profile,
    load_settings,
    save_profile,
    set_setting,
    ProfileNotFoundError,
    ProfileSchema,
)


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Point the config directory at an empty temp dir."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("SALARY_CALENDAR_CONFIG_PATH", str(config_dir))
    return config_dir


class TestConfigDir:
    """Location of the configuration directory."""

    def test_env_var_overrides_config_dir(self, isolated_env):
        assert get_config_dir() == isolated_env

    def test_xdg_fallback(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SALARY_CALENDAR_CONFIG_PATH", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_dir() == tmp_path / "salary-calendar"


class TestSettings:
    """settings.json reads, writes and validation."""

    def test_defaults_without_settings_file(self, isolated_env):
        settings = get_effective_settings()

        assert load_settings() == {}
        assert settings.provider_url == "https://isdayoff.ru"
        assert settings.provider_timeout == 10.0
        assert settings.profile is None

    def test_set_setting_coerces_and_persists(self, isolated_env):
        set_setting("provider_timeout", "2.5")

        stored = json.loads((isolated_env / "settings.json").read_text())
        assert stored == {"provider_timeout": 2.5}
        assert get_setting("provider_timeout") == 2.5
        assert get_effective_settings().provider_timeout == 2.5

    def test_get_setting_default(self, isolated_env):
        assert get_setting("profile") is None
        assert get_setting("profile", "fallback") == "fallback"

    @pytest.mark.parametrize("key,value", [
        ("provider_timeout", "0"),
        ("provider_timeout", "soon"),
        ("unknown_key", "x"),
    ])
    def test_set_setting_rejects_invalid_values(self, isolated_env, key, value):
        with pytest.raises(ValidationError):
            set_setting(key, value)

        assert not (isolated_env / "settings.json").exists()

    def test_unknown_key_in_settings_file_is_an_error(self, isolated_env):
        (isolated_env / "settings.json").write_text(json.dumps({"provider_ulr": "x"}))

        with pytest.raises(ValidationError):
            get_effective_settings()


class TestProfile:
    """profile.yaml loading, saving and relocation."""

    def test_missing_profile_gives_defaults(self, isolated_env):
        profile = get_effective_profile()

        assert profile.monthly_salary is None
        assert profile.payment_days == [14, 29]
        assert profile.count == 5
        assert profile.vacations == []

    def test_load_profile_requires_existing_file(self, isolated_env):
        with pytest.raises(ProfileNotFoundError):
            load_profile(require_exists=True)
        assert load_profile(require_exists=False) == {}

    def test_profile_round_trip(self, isolated_env):
        path = save_profile({
            "monthly_salary": 150000,
            "payment_days": [29, 14, 14],
            "vacations": ["01.07.2026-14.07.2026", "04.11"],
        })

        assert path == isolated_env / "profile.yaml"
        profile = get_effective_profile()
        assert profile.monthly_salary == 150000
        assert profile.payment_days == [14, 29]
        assert profile.vacations == ["01.07.2026-14.07.2026", "04.11"]

    def test_custom_profile_location(self, isolated_env, tmp_path):
        custom = tmp_path / "elsewhere" / "me.yaml"
        set_setting("profile", str(custom))
        save_profile({"monthly_salary": 90000})

        assert get_profile_path() == custom
        assert yaml.safe_load(custom.read_text()) == {"monthly_salary": 90000}

    def test_custom_profile_must_exist_when_required(self, isolated_env, tmp_path):
        set_setting("profile", str(tmp_path / "missing.yaml"))

        with pytest.raises(ProfileNotFoundError):
            get_profile_path(require_exists=True)


class TestProfileSchema:
    """Field constraints on the profile model."""

    @pytest.mark.parametrize("data", [
        {"monthly_salary": 0},
        {"monthly_salary": 5_000_001},
        {"payment_days": []},
        {"payment_days": [0]},
        {"payment_days": [32]},
        {"count": 25},
        {"salary": 100000},
    ])
    def test_rejects(self, data):
        with pytest.raises(ValidationError):
            ProfileSchema.model_validate(data)
