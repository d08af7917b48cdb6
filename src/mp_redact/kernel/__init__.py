"""Kernel – framework-agnostic building blocks shared by every layer."""

from mp_redact.kernel.errors import (
    ApplicationError,
    BaseError,
    DomainError,
    PolicyError,
    ToggleAlreadySetError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "PolicyError",
    "ToggleAlreadySetError",
]
