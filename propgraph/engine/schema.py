"""
engine/schema.py - Schema construction

Composition point of the declaration model, graph builder, cycle detector and
topological sorter. Building a schema is the only fallible one-time step and
the only place cycle detection happens; the resulting Schema is immutable and
may be shared by any number of evaluations.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Set, Tuple, TYPE_CHECKING
import logging

from propgraph.core.declarations import (
    PropertyDeclaration,
    PropertyName,
    merge_declarations,
)
from propgraph.dependencies import (
    DependencyGraph,
    build_graph,
    find_cycle,
    describe_cycle,
    topological_sort,
)
from propgraph.errors import CycleError, SchemaError, UndeclaredPropertyError
from propgraph.bootstrap.config import EngineConfig, get_config

if TYPE_CHECKING:
    from .record import ResultRecord

logger = logging.getLogger(__name__)


# =============================================================================
# SCHEMA
# =============================================================================

@dataclass(frozen=True, eq=False)
class Schema:
    """
    Validated property set plus its resolved evaluation order.

    declarations preserves first-declaration order; evaluation_order is a
    permutation of the same names consistent with every dependency edge.
    """
    declarations: Mapping[PropertyName, PropertyDeclaration]
    evaluation_order: Tuple[PropertyName, ...]
    graph: DependencyGraph = field(repr=False, compare=False)
    built_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc), compare=False
    )

    def __post_init__(self):
        object.__setattr__(self, "declarations", MappingProxyType(dict(self.declarations)))
        object.__setattr__(self, "evaluation_order", tuple(self.evaluation_order))

        if (
            len(self.evaluation_order) != len(self.declarations)
            or set(self.evaluation_order) != set(self.declarations)
        ):
            raise SchemaError(
                "Evaluation order must contain every declared property exactly once"
            )

    @property
    def names(self) -> Tuple[PropertyName, ...]:
        """Property names in declaration order."""
        return tuple(self.declarations)

    def get_declaration(self, name: PropertyName) -> PropertyDeclaration:
        return self.declarations[name]

    def get_direct_dependencies(self, name: PropertyName) -> Set[PropertyName]:
        return self.graph.get_direct_dependencies(name)

    def get_all_dependencies(self, name: PropertyName) -> Set[PropertyName]:
        return self.graph.get_all_dependencies(name)

    def get_all_downstream(self, name: PropertyName) -> Set[PropertyName]:
        return self.graph.get_all_downstream(name)

    def evaluate(self, input: Any, config: Optional[EngineConfig] = None) -> "ResultRecord":
        """Evaluate every property for one input."""
        from .evaluator import evaluate
        return evaluate(self, input, config)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "properties": [decl.to_dict() for decl in self.declarations.values()],
            "evaluation_order": list(self.evaluation_order),
            "graph": self.graph.to_dict(),
            "built_at": self.built_at.isoformat(),
        }

    def __len__(self) -> int:
        return len(self.declarations)


# =============================================================================
# CONSTRUCTION
# =============================================================================

def _drop_undeclared(
    merged: Dict[PropertyName, PropertyDeclaration],
    undeclared: Set[PropertyName],
) -> Dict[PropertyName, PropertyDeclaration]:
    return {
        name: PropertyDeclaration(
            name=decl.name,
            clauses=decl.clauses,
            required_names=decl.required_names - undeclared,
        )
        for name, decl in merged.items()
    }


def build_schema(
    declarations: Iterable[PropertyDeclaration],
    config: Optional[EngineConfig] = None,
) -> Schema:
    """
    Build an immutable schema from property declarations.

    Declarations sharing a name are merged in definition order. The
    dependency graph is checked for requirements on undeclared properties
    and for cycles before the evaluation order is computed.

    Raises:
        UndeclaredPropertyError: a requirement names an undeclared property
        CycleError: requirements form a cycle; carries the cyclic vertex set
    """
    config = config or get_config().engine
    declarations = list(declarations)
    merged = merge_declarations(declarations)

    graph = build_graph(declarations)

    undeclared = graph.undeclared_names()
    if undeclared:
        missing = {name: graph.get_direct_dependents(name) for name in undeclared}
        if not config.allow_undeclared_requirements:
            raise UndeclaredPropertyError(missing)

        for name, required_by in missing.items():
            logger.warning(
                f"Dropping requirement on undeclared property '{name}' "
                f"(required by {', '.join(sorted(required_by))})"
            )
        merged = _drop_undeclared(merged, set(undeclared))
        graph = build_graph(merged.values())

    cyclic = find_cycle(graph)
    if cyclic:
        cycle_path = describe_cycle(graph, cyclic)
        logger.error(f"Cyclic dependency detected: {' -> '.join(cycle_path)}")
        raise CycleError(cyclic, cycle_path)

    order = topological_sort(graph)

    schema = Schema(
        declarations=merged,
        evaluation_order=tuple(order),
        graph=graph.freeze(),
    )

    logger.info(
        f"Schema built: {len(schema)} properties, "
        f"{graph.nx_graph.number_of_edges()} edges"
    )
    logger.debug(f"Evaluation order: {', '.join(schema.evaluation_order)}")
    return schema
