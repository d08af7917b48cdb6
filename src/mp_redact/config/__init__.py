"""Config – 12-factor settings and environment-aware redaction rules."""

from mp_redact.config.environment import EnvironmentPolicy, EnvironmentRule, Fallback
from mp_redact.config.settings import EnvSettingsLoader, Settings, SettingsLoader, ToggleSettings
from mp_redact.config.validation import (
    ConfigError,
    EnvironmentUndeterminedError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "EnvironmentPolicy",
    "EnvironmentRule",
    "EnvironmentUndeterminedError",
    "Fallback",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "ToggleSettings",
]
