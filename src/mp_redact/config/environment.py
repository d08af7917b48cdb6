"""Config – environment-aware redaction rules.

Lets an application decide, from the values of its own environment variables,
whether redaction should be on. For example::

    policy = EnvironmentPolicy.from_mapping({
        "fallback": {"redact": True},
        "env": {
            "APP_ENV": {"redact": ["production", "staging"], "skip-redact": ["dev", "qa"]},
        },
    })

The policy is consulted exactly once, when the redaction toggle is first
read; see :class:`mp_redact.toggle.RedactionToggle`.
"""
from __future__ import annotations

import dataclasses
import os
from enum import Enum
from typing import Any, Mapping

from mp_redact.config.validation import (
    ConfigError,
    EnvironmentUndeterminedError,
    InvalidSettingValueError,
)


class Fallback(str, Enum):
    """What to do when no rule matches the current environment."""

    REDACT = "redact"
    PLAINTEXT = "plaintext"
    PANIC = "panic"

    @classmethod
    def parse(cls, value: Any) -> "Fallback":
        if value is True:
            return cls.REDACT
        if value is False:
            return cls.PLAINTEXT
        if value == "panic":
            return cls.PANIC
        if isinstance(value, Fallback):
            return value
        raise InvalidSettingValueError(
            "fallback.redact", value, 'fallback redaction behavior must be true, false or "panic"'
        )


@dataclasses.dataclass(frozen=True)
class EnvironmentRule:
    """Redact when *variable* holds one of ``redact``; skip for ``skip_redact``."""

    variable: str
    redact: tuple[str, ...] = ()
    skip_redact: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.redact and not self.skip_redact:
            raise ConfigError(
                f"Environment variable {self.variable!r} has an empty configuration"
            )

    def decide(self, environ: Mapping[str, str]) -> bool | None:
        """Return ``True``/``False`` when the rule matches, ``None`` otherwise."""
        value = environ.get(self.variable)
        if value is None:
            return None
        if value in self.redact:
            return True
        if value in self.skip_redact:
            return False
        return None


@dataclasses.dataclass(frozen=True)
class EnvironmentPolicy:
    """Ordered environment rules plus a fallback behaviour.

    Rules are evaluated in variable-name order; the first rule whose variable
    is set to a listed value decides.
    """

    rules: tuple[EnvironmentRule, ...] = ()
    fallback: Fallback = Fallback.REDACT

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.rules, key=lambda rule: rule.variable))
        object.__setattr__(self, "rules", ordered)

        seen: set[tuple[str, str]] = set()
        for rule in ordered:
            for value in (*rule.redact, *rule.skip_redact):
                pair = (rule.variable, value)
                if pair in seen:
                    raise ConfigError(
                        f"duplicate key-value environment variable pair: {pair!r}"
                    )
                seen.add(pair)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EnvironmentPolicy":
        """Build a policy from the ``{"fallback": ..., "env": ...}`` structure.

        Accepts what ``tomllib.load`` returns for a document such as::

            [fallback]
            redact = "panic"

            [env.APP_ENV]
            redact = ["production"]
            skip-redact = ["dev"]
        """
        fallback_section = data.get("fallback") or {}
        fallback = Fallback.parse(fallback_section.get("redact", True))

        rules = [
            EnvironmentRule(
                variable=variable,
                redact=tuple(section.get("redact", ())),
                skip_redact=tuple(section.get("skip-redact", section.get("skip_redact", ()))),
            )
            for variable, section in (data.get("env") or {}).items()
        ]
        return cls(rules=tuple(rules), fallback=fallback)

    def is_redaction_enabled(self, environ: Mapping[str, str] | None = None) -> bool:
        """Decide whether redaction is on for *environ* (default: ``os.environ``).

        Raises
        ------
        EnvironmentUndeterminedError
            When no rule matches and the fallback is :attr:`Fallback.PANIC`.
        """
        environ = os.environ if environ is None else environ
        for rule in self.rules:
            decision = rule.decide(environ)
            if decision is not None:
                return decision

        if self.fallback is Fallback.PANIC:
            raise EnvironmentUndeterminedError([rule.variable for rule in self.rules])
        return self.fallback is Fallback.REDACT


__all__ = ["EnvironmentPolicy", "EnvironmentRule", "Fallback"]
