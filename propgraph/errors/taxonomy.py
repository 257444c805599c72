"""
errors/taxonomy.py - Error classification for schema and evaluation failures

Both error families are structural defects: a property set whose declarations
form a loop, or a clause list that is not exhaustive for a partial result
actually reached. Neither is retried.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional


class ErrorCategory(Enum):
    """Error categories."""
    # Raised while building a schema (1xxx)
    SCHEMA = "schema"

    # Raised while evaluating an input (2xxx)
    EVALUATION = "evaluation"


class ErrorCode(Enum):
    """Specific error codes."""

    # Schema (1xxx)
    SCH_INVALID = 1000
    SCH_CYCLE = 1001
    SCH_UNDECLARED = 1002
    SCH_FROZEN = 1003

    # Evaluation (2xxx)
    EVL_FAILED = 2000
    EVL_NO_MATCH = 2001


class PropertyGraphError(Exception):
    """Base exception for all propgraph errors."""

    code: Optional[ErrorCode] = None
    category: Optional[ErrorCategory] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code.value if self.code else None,
            "category": self.category.value if self.category else None,
            "error": type(self).__name__,
            "message": str(self),
        }


# =============================================================================
# SCHEMA ERRORS
# =============================================================================

class SchemaError(PropertyGraphError):
    """Raised when a property set cannot be turned into a schema."""
    category = ErrorCategory.SCHEMA
    code = ErrorCode.SCH_INVALID


class CycleError(SchemaError):
    """Raised when property requirements form a cycle."""
    code = ErrorCode.SCH_CYCLE

    def __init__(self, vertices: Iterable[str], cycle_path: Optional[List[str]] = None):
        self.vertices: FrozenSet[str] = frozenset(vertices)
        self.cycle_path: List[str] = list(cycle_path or [])

        message = f"Cyclic dependency between properties: {', '.join(sorted(self.vertices))}"
        if self.cycle_path:
            message += f" (e.g. {' -> '.join(self.cycle_path)})"
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["vertices"] = sorted(self.vertices)
        data["cycle_path"] = self.cycle_path
        return data


class UndeclaredPropertyError(SchemaError):
    """Raised when a clause requires a property that was never declared."""
    code = ErrorCode.SCH_UNDECLARED

    def __init__(self, missing: Mapping[str, Iterable[str]]):
        # undeclared name -> properties requiring it
        self.missing: Dict[str, List[str]] = {
            name: sorted(required_by) for name, required_by in sorted(missing.items())
        }
        details = "; ".join(
            f"'{name}' required by {', '.join(required_by)}"
            for name, required_by in self.missing.items()
        )
        super().__init__(f"Undeclared properties: {details}")

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["missing"] = self.missing
        return data


class SchemaFrozenError(SchemaError):
    """Raised when a property is defined after its schema was built."""
    code = ErrorCode.SCH_FROZEN


# =============================================================================
# EVALUATION ERRORS
# =============================================================================

class EvaluationError(PropertyGraphError):
    """Raised when an input cannot be evaluated against a schema."""
    category = ErrorCategory.EVALUATION
    code = ErrorCode.EVL_FAILED


class DispatchError(EvaluationError):
    """Raised when no clause of a property matches the partial result."""
    code = ErrorCode.EVL_NO_MATCH

    def __init__(
        self,
        property_name: str,
        partial: Optional[Mapping[str, Any]] = None,
        clause_count: int = 0,
    ):
        self.property_name = property_name
        self.partial: Optional[Dict[str, Any]] = dict(partial) if partial is not None else None
        self.clause_count = clause_count

        message = f"No clause of property '{property_name}' matched ({clause_count} clauses tried)"
        if self.partial is not None:
            message += f"; partial result: {self.partial!r}"
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["property"] = self.property_name
        data["clause_count"] = self.clause_count
        data["partial"] = (
            {k: repr(v) for k, v in self.partial.items()} if self.partial is not None else None
        )
        return data
