"""Config validation errors."""
from mp_redact.config.validation.errors import (
    ConfigError,
    EnvironmentUndeterminedError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvironmentUndeterminedError",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
]
