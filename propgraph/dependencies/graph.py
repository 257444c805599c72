"""
propgraph Dependency Graph

Directed graph of "must-precede" edges between properties. For every
declaration p and every r in required_names(p) the graph holds the edge
r -> p ("r must be computed before p").

The builder performs no validation: cycles are left for the cycle detector
and requirements naming undeclared properties still become vertices, marked
declared=False, for schema construction to report.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple
import logging

import networkx as nx

from propgraph.core.declarations import PropertyDeclaration, PropertyName

logger = logging.getLogger(__name__)


class DependencyGraph:
    """
    Directed graph of property dependencies backed by a networkx DiGraph.

    Node attributes:
        index: position of the property's first declaration
        declared: False for names only ever seen as requirements
    """

    def __init__(self, graph: Optional[nx.DiGraph] = None):
        self._graph: nx.DiGraph = graph if graph is not None else nx.DiGraph()
        self._declared_count: int = sum(
            1 for _, declared in self._graph.nodes(data="declared") if declared
        )

    @property
    def nx_graph(self) -> nx.DiGraph:
        """Get the underlying networkx graph."""
        return self._graph

    @property
    def is_frozen(self) -> bool:
        return nx.is_frozen(self._graph)

    def add_property(self, name: PropertyName, declared: bool = True) -> None:
        """Add a property vertex; the first declaration fixes its index."""
        if name in self._graph:
            if declared and not self._graph.nodes[name]["declared"]:
                self._graph.nodes[name]["declared"] = True
                self._graph.nodes[name]["index"] = self._next_declared_index()
            return

        index = self._next_declared_index() if declared else None
        self._graph.add_node(name, index=index, declared=declared)

    def add_dependency(self, dependent: PropertyName, dependency: PropertyName) -> None:
        """
        Add a dependency: dependent depends on dependency.

        Args:
            dependent: The downstream property (computed after dependency)
            dependency: The upstream property (read by dependent)
        """
        if dependency not in self._graph:
            self.add_property(dependency, declared=False)
        if dependent not in self._graph:
            self.add_property(dependent, declared=False)

        # DiGraph keeps an edge set, re-adding is a no-op
        self._graph.add_edge(dependency, dependent)

    def _next_declared_index(self) -> int:
        index = self._declared_count
        self._declared_count += 1
        return index

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def properties(self) -> List[PropertyName]:
        """All vertices, in insertion order."""
        return list(self._graph.nodes)

    @property
    def edges(self) -> List[Tuple[PropertyName, PropertyName]]:
        """All (dependency, dependent) edges."""
        return list(self._graph.edges)

    def has_property(self, name: PropertyName) -> bool:
        return name in self._graph

    def declaration_order(self) -> Dict[PropertyName, int]:
        """Map each declared property to its declaration index."""
        return {
            name: index
            for name, index in self._graph.nodes(data="index")
            if index is not None
        }

    def undeclared_names(self) -> List[PropertyName]:
        """Vertices that were required but never declared."""
        return [
            name for name, declared in self._graph.nodes(data="declared")
            if not declared
        ]

    def get_direct_dependencies(self, name: PropertyName) -> Set[PropertyName]:
        """Properties that this property directly depends on."""
        if name not in self._graph:
            return set()
        return set(self._graph.predecessors(name))

    def get_direct_dependents(self, name: PropertyName) -> Set[PropertyName]:
        """Properties that directly depend on this property."""
        if name not in self._graph:
            return set()
        return set(self._graph.successors(name))

    def get_all_dependencies(self, name: PropertyName) -> Set[PropertyName]:
        """All upstream dependencies (transitive closure)."""
        if name not in self._graph:
            return set()
        return set(nx.ancestors(self._graph, name))

    def get_all_downstream(self, name: PropertyName) -> Set[PropertyName]:
        """All downstream dependents (transitive closure)."""
        if name not in self._graph:
            return set()
        return set(nx.descendants(self._graph, name))

    def freeze(self) -> "DependencyGraph":
        """Return a read-only copy of this graph."""
        return DependencyGraph(nx.freeze(self._graph.copy()))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize graph for inspection."""
        return {
            "nodes": {
                name: {
                    "index": data["index"],
                    "declared": data["declared"],
                    "depends_on": sorted(self._graph.predecessors(name)),
                    "depended_by": sorted(self._graph.successors(name)),
                }
                for name, data in self._graph.nodes(data=True)
            },
            "edges": [
                {"source": source, "target": target}
                for source, target in self._graph.edges
            ],
        }

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __contains__(self, name: object) -> bool:
        return name in self._graph


# =============================================================================
# BUILDER
# =============================================================================

def build_graph(declarations: Iterable[PropertyDeclaration]) -> DependencyGraph:
    """
    Build the dependency graph for a sequence of declarations.

    Every declared name becomes a vertex in first-declaration order, then an
    edge r -> p is added for each requirement r of each declaration p.
    Several declarations may contribute the same edge.
    """
    declarations = list(declarations)
    graph = DependencyGraph()

    for decl in declarations:
        graph.add_property(decl.name)

    for decl in declarations:
        # sorted so that undeclared vertices get a reproducible position
        for required in sorted(decl.required_names):
            graph.add_dependency(decl.name, required)

    logger.debug(
        f"Dependency graph built: {len(graph)} properties, "
        f"{graph.nx_graph.number_of_edges()} edges"
    )
    return graph
