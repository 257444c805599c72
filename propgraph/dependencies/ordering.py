"""
propgraph Topological Sorter

Produces the evaluation order of a schema: a linear extension of the
dependency graph where properties without a relative ordering constraint
keep their declaration order.
"""

from __future__ import annotations
from typing import Dict, List, Optional

import networkx as nx

from propgraph.core.declarations import PropertyName
from .graph import DependencyGraph


def topological_sort(
    graph: DependencyGraph,
    declaration_order: Optional[Dict[PropertyName, int]] = None,
) -> List[PropertyName]:
    """
    Compute a deterministic topological order.

    Repeatedly selects, among the vertices whose predecessors have all been
    emitted, the one with the smallest declaration index. Must only be
    called on an acyclic graph.

    Args:
        graph: Acyclic dependency graph
        declaration_order: property -> declaration index
            (defaults to the indices stored on the graph)

    Returns:
        Every vertex of the graph exactly once
    """
    if declaration_order is None:
        declaration_order = graph.declaration_order()

    # undeclared vertices sort after all declared ones, by name
    fallback = len(declaration_order)

    def sort_key(name: PropertyName):
        return (declaration_order.get(name, fallback), name)

    return list(nx.lexicographical_topological_sort(graph.nx_graph, key=sort_key))
