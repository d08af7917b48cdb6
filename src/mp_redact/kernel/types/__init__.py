"""Kernel value types – public re-export surface.

Modules:
  result.py – Ok, Err, Result (returned by the redaction toggle)
  option.py – Some, Nothing, Option (the nullable wrapper whose rendering
              the engine's option specialisation understands)
"""

from mp_redact.kernel.types.option import Nothing, Option, Some, from_optional
from mp_redact.kernel.types.result import Err, Ok, Result

__all__ = [
    "Err",
    "Nothing",
    "Ok",
    "Option",
    "Result",
    "Some",
    "from_optional",
]
