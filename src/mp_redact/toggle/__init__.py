"""Toggle – the process-wide, set-once switch between redacting and plaintext.

See :class:`~mp_redact.toggle.state.RedactionToggle`. The module-level
helpers operate on the default instance the engine consults::

    from mp_redact.toggle import disable

    if os.environ.get("APP_ENV") == "dev":
        disable().unwrap()
"""
from mp_redact.toggle.behavior import RedactionBehavior
from mp_redact.toggle.state import (
    RedactionToggle,
    default_toggle,
    disable,
    get_redaction_behavior,
    use_environment,
)

__all__ = [
    "RedactionBehavior",
    "RedactionToggle",
    "default_toggle",
    "disable",
    "get_redaction_behavior",
    "use_environment",
]
