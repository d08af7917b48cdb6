"""Config settings – 12-factor env-based configuration."""
from mp_redact.config.settings.base import Settings
from mp_redact.config.settings.loaders import EnvSettingsLoader, SettingsLoader
from mp_redact.config.settings.redaction import DISABLE_REDACTION_ENV, ToggleSettings

__all__ = [
    "DISABLE_REDACTION_ENV",
    "EnvSettingsLoader",
    "Settings",
    "SettingsLoader",
    "ToggleSettings",
]
