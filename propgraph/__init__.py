"""
propgraph - Dependency-ordered derived properties

Computes a set of named, mutually dependent properties from a single input.
Declared requirements form a dependency graph that is checked for cycles
once, when the schema is built; each evaluation then walks a deterministic
topological order and computes every property with the first of its clauses
that matches the partial result built so far.

Main Components:
- core: declaration model (Clause, PropertyDeclaration)
- dependencies: graph builder, cycle detector, topological sorter
- engine: Schema construction and evaluation
- surface: PropertySet builder and match patterns
- errors: CycleError, DispatchError and the rest of the taxonomy
- bootstrap: configuration, logging and the command line
"""

from .core import (
    Clause,
    PropertyDeclaration,
    clause,
    merge_declarations,
)
from .dependencies import (
    DependencyGraph,
    build_graph,
    find_cycle,
    topological_sort,
)
from .engine import (
    Schema,
    build_schema,
    Evaluator,
    EvaluationResult,
    ResultRecord,
    evaluate,
    evaluate_many,
)
from .surface import (
    ANY,
    Match,
    match,
    PropertySet,
)
from .errors import (
    PropertyGraphError,
    SchemaError,
    CycleError,
    UndeclaredPropertyError,
    SchemaFrozenError,
    EvaluationError,
    DispatchError,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Declarations
    "Clause",
    "PropertyDeclaration",
    "clause",
    "merge_declarations",
    # Dependencies
    "DependencyGraph",
    "build_graph",
    "find_cycle",
    "topological_sort",
    # Engine
    "Schema",
    "build_schema",
    "Evaluator",
    "EvaluationResult",
    "ResultRecord",
    "evaluate",
    "evaluate_many",
    # Surface
    "ANY",
    "Match",
    "match",
    "PropertySet",
    # Errors
    "PropertyGraphError",
    "SchemaError",
    "CycleError",
    "UndeclaredPropertyError",
    "SchemaFrozenError",
    "EvaluationError",
    "DispatchError",
]
