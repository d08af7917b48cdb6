"""Toggle – RedactionToggle, a set-once cell.

The behaviour is fixed exactly once: by an explicit :meth:`disable` call or,
failing that, by the first read, which consults
``MP_REDACT_DISABLE_REDACTION`` and the optional
:class:`~mp_redact.config.EnvironmentPolicy`. After that it can never change,
so a later code path cannot switch masking off mid-run.
"""
from __future__ import annotations

import threading

from mp_redact.config.environment import EnvironmentPolicy
from mp_redact.config.settings import EnvSettingsLoader, SettingsLoader, ToggleSettings
from mp_redact.kernel.errors import ToggleAlreadySetError
from mp_redact.kernel.types import Err, Ok, Result
from mp_redact.observability.logging import get_logger
from mp_redact.toggle.behavior import RedactionBehavior

logger = get_logger(__name__)


class RedactionToggle:
    """Process-wide redaction switch that can be set at most once.

    Concurrent first reads race on a lock; exactly one initialisation wins and
    every reader observes the same frozen value.

    Parameters
    ----------
    settings_loader:
        Source of :class:`ToggleSettings`; defaults to the process environment.
    environment:
        Optional environment rules consulted on first read when the disable
        variable is not set.
    """

    def __init__(
        self,
        settings_loader: SettingsLoader | None = None,
        environment: EnvironmentPolicy | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._value: RedactionBehavior | None = None
        self._settings_loader = settings_loader or EnvSettingsLoader()
        self._environment = environment

    @property
    def is_frozen(self) -> bool:
        return self._value is not None

    def disable(self) -> Result[None, ToggleAlreadySetError]:
        """Switch to plaintext rendering, if nothing has been read or set yet.

        Returns ``Ok(None)`` on success and ``Err(ToggleAlreadySetError)``
        once the value is frozen; the frozen value is left untouched.
        """
        with self._lock:
            current = self._value
            if current is None:
                self._value = RedactionBehavior.PLAINTEXT
        if current is None:
            logger.warning("redaction.disabled", source="disable")
            return Ok(None)
        logger.info("redaction.toggle_rejected", behavior=current.value)
        return Err(ToggleAlreadySetError(current))

    def use_environment(self, environment: EnvironmentPolicy) -> Result[None, ToggleAlreadySetError]:
        """Install environment rules for the first read; fails once frozen."""
        with self._lock:
            current = self._value
            if current is None:
                self._environment = environment
        if current is None:
            return Ok(None)
        return Err(ToggleAlreadySetError(current))

    def behavior(self) -> RedactionBehavior:
        """Return the frozen behaviour, initialising it on first call."""
        value = self._value
        if value is not None:
            return value
        with self._lock:
            if self._value is None:
                self._value = self._initial_behavior()
                if self._value.is_plaintext():
                    logger.warning("redaction.disabled", source="environment")
            return self._value

    def _initial_behavior(self) -> RedactionBehavior:
        settings = self._settings_loader.load(ToggleSettings)
        if settings.disable_redaction:
            return RedactionBehavior.PLAINTEXT
        if self._environment is not None and not self._environment.is_redaction_enabled():
            return RedactionBehavior.PLAINTEXT
        return RedactionBehavior.REDACT

    def __repr__(self) -> str:
        state = self._value.value if self._value is not None else "unset"
        return f"<RedactionToggle: {state}>"


_default_toggle = RedactionToggle()


def default_toggle() -> RedactionToggle:
    """Return the process-wide toggle consulted by the engine."""
    return _default_toggle


def disable() -> Result[None, ToggleAlreadySetError]:
    """Disable redaction globally. Call once, early, before anything is rendered."""
    return _default_toggle.disable()


def use_environment(environment: EnvironmentPolicy) -> Result[None, ToggleAlreadySetError]:
    """Install environment rules on the process-wide toggle before first use."""
    return _default_toggle.use_environment(environment)


def get_redaction_behavior() -> RedactionBehavior:
    return _default_toggle.behavior()


__all__ = [
    "RedactionToggle",
    "default_toggle",
    "disable",
    "get_redaction_behavior",
    "use_environment",
]
