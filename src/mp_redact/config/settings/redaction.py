"""Config settings – the redaction toggle's environment knob."""
from __future__ import annotations

import dataclasses

from mp_redact.config.settings.base import Settings

DISABLE_REDACTION_ENV = "MP_REDACT_DISABLE_REDACTION"


@dataclasses.dataclass
class ToggleSettings(Settings):
    """Settings read once, when the redaction toggle is first observed.

    ``MP_REDACT_DISABLE_REDACTION`` set to ``1``, ``true`` or ``on``
    (case-insensitive) starts the process in plaintext mode.
    """

    _prefix: dataclasses.ClassVar[str] = "MP_REDACT"

    disable_redaction: bool = False


__all__ = ["DISABLE_REDACTION_ENV", "ToggleSettings"]
