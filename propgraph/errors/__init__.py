"""
errors/ - Error taxonomy

Structured exceptions for schema construction and evaluation.
"""

from .taxonomy import (
    ErrorCategory,
    ErrorCode,
    PropertyGraphError,
    SchemaError,
    CycleError,
    UndeclaredPropertyError,
    SchemaFrozenError,
    EvaluationError,
    DispatchError,
)

__all__ = [
    "ErrorCategory",
    "ErrorCode",
    "PropertyGraphError",
    "SchemaError",
    "CycleError",
    "UndeclaredPropertyError",
    "SchemaFrozenError",
    "EvaluationError",
    "DispatchError",
]
