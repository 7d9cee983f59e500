"""Configuration management for Salary Calendar.

Configuration is split into two files:

1. settings.json - Machine-specific settings
   - provider_url: base URL of the production calendar service
   - provider_timeout: seconds before a calendar request is abandoned
   - profile: path to profile.yaml (optional, if not colocated)

2. profile.yaml - User's personal configuration
   - monthly_salary: salary per month
   - payment_days: nominal days of month the salary is paid on
   - count: how many upcoming payments to show
   - vacations: vacation dates/ranges in the same grammar as the CLI input

Config directory resolution:
1. SALARY_CALENDAR_CONFIG_PATH environment variable (if set)
2. ~/.config/salary-calendar/ (XDG_CONFIG_HOME fallback)

Profile resolution:
1. settings.json "profile" key (if set)
2. profile.yaml in same config directory
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

import yaml

from .schemas import ProfileSchema, SettingsSchema


APP_NAME = "salary-calendar"
CONFIG_ENV_VAR = "SALARY_CALENDAR_CONFIG_PATH"
SETTINGS_FILENAME = "settings.json"
PROFILE_FILENAME = "profile.yaml"


class ConfigNotFoundError(Exception):
    """Raised when no configuration is found."""
    pass


class ProfileNotFoundError(ConfigNotFoundError):
    """Raised when no profile is found."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. SALARY_CALENDAR_CONFIG_PATH environment variable
    2. ~/.config/salary-calendar/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Args:
        settings: Settings dictionary to save

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json."""
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    The merged settings are validated before anything is written, so an
    unknown key or a malformed value never reaches the file.

    Raises:
        pydantic.ValidationError: If the resulting settings are invalid
    """
    settings = load_settings()
    settings[key] = value
    validated = SettingsSchema.model_validate(settings)
    settings[key] = getattr(validated, key)
    return save_settings(settings)


def get_effective_settings() -> SettingsSchema:
    """Settings with defaults filled in for anything not configured."""
    return SettingsSchema.model_validate(load_settings())


def get_profile_path(require_exists: bool = False) -> Path:
    """Get the path to the profile.yaml file.

    Resolution order:
    1. settings.json "profile" key (if set)
    2. profile.yaml in config directory

    Args:
        require_exists: If True, raises ProfileNotFoundError if not found

    Returns:
        Path to profile.yaml

    Raises:
        ProfileNotFoundError: If require_exists=True and no profile found
    """
    custom_profile = get_setting("profile")
    if custom_profile:
        profile_path = Path(custom_profile).expanduser()
        if require_exists and not profile_path.exists():
            raise ProfileNotFoundError(
                f"Profile not found at configured path: {profile_path}\n\n"
                f"Update with: salary-calendar settings set profile /path/to/profile.yaml"
            )
        return profile_path

    profile_path = get_config_dir() / PROFILE_FILENAME
    if require_exists and not profile_path.exists():
        raise ProfileNotFoundError(
            f"No profile found at {profile_path}\n\n"
            f"Create one with: salary-calendar profile init"
        )

    return profile_path


def load_profile(require_exists: bool = True) -> dict:
    """Load user profile from profile.yaml.

    Args:
        require_exists: If True, raises ProfileNotFoundError if not found

    Returns:
        Profile dictionary (empty dict if not required and not found)
    """
    profile_path = get_profile_path(require_exists=require_exists)

    if not profile_path.exists():
        return {}

    with open(profile_path, "r") as f:
        return yaml.safe_load(f) or {}


def save_profile(profile: dict, path: Optional[Path] = None) -> Path:
    """Save user profile to profile.yaml.

    Args:
        profile: Profile dictionary to save
        path: Optional custom path (uses default if not specified)

    Returns:
        Path to the saved profile file
    """
    if path is None:
        path = get_profile_path(require_exists=False)

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.dump(profile, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    return path


def get_effective_profile() -> ProfileSchema:
    """Load and validate the profile, falling back to defaults when absent.

    Raises:
        pydantic.ValidationError: If profile.yaml has unknown keys or bad values
    """
    return ProfileSchema.model_validate(load_profile(require_exists=False))
