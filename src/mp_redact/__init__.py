"""
mp_redact – structured-value redaction for logs and diagnostics.

Import path convention::

    from mp_redact.policy import RedactionPolicy, redact, resolve_policy
    from mp_redact.engine import RedactorBuilder, Specialization
    from mp_redact.formatting import redactable, field
    from mp_redact.toggle import disable
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
