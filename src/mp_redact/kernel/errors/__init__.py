"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   └── PolicyError
    └── ApplicationError     (application.py)
        └── ToggleAlreadySetError
"""

from mp_redact.kernel.errors.application import ApplicationError, ToggleAlreadySetError
from mp_redact.kernel.errors.base import BaseError
from mp_redact.kernel.errors.domain import DomainError, PolicyError

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "PolicyError",
    "ToggleAlreadySetError",
]
