"""
engine/ - Schema construction and evaluation

Provides:
- Schema / build_schema: validated, ordered property set
- Evaluator / evaluate / evaluate_many: first-match dispatch per input
- ResultRecord: read-only result mapping
"""

from .record import ResultRecord
from .schema import (
    Schema,
    build_schema,
)
from .evaluator import (
    Evaluator,
    EvaluationResult,
    StepResult,
    evaluate,
    evaluate_many,
)

__all__ = [
    # Record
    "ResultRecord",
    # Schema
    "Schema",
    "build_schema",
    # Evaluation
    "Evaluator",
    "EvaluationResult",
    "StepResult",
    "evaluate",
    "evaluate_many",
]
