from .models import Violation, ViolationKind, violation
from .result import ValidationResult

__all__ = [
    "ValidationResult",
    "Violation",
    "ViolationKind",
    "violation",
]
