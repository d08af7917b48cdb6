"""Config validation errors."""
from mp_redact.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Raised when configuration is invalid or loading failed."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A required environment variable / setting is absent."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(
            f"Required setting '{setting_name}' is missing", location=setting_name
        )
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting's value is present but semantically invalid."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}",
            location=setting_name,
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


class EnvironmentUndeterminedError(ConfigError):
    """No environment rule matched and the fallback demands failure."""
    default_code = "environment_undetermined"

    def __init__(self, variables: list[str]) -> None:
        names = ", ".join(variables) or "<none>"
        super().__init__(
            "Expected environment variables to be set that determine whether "
            f"sensitive data should be redacted ({names})"
        )
        self.variables = variables


__all__ = [
    "ConfigError",
    "EnvironmentUndeterminedError",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
]
