"""
propgraph Cycle Detector

Runs once per schema construction. Reports every property that lies on some
cycle, not just the fact that a cycle exists, so that callers can name the
mutually dependent properties.
"""

from __future__ import annotations
from typing import FrozenSet, List, Optional, Set

import networkx as nx

from propgraph.core.declarations import PropertyName
from .graph import DependencyGraph


def find_cycle(graph: DependencyGraph) -> Optional[FrozenSet[PropertyName]]:
    """
    Find the vertices participating in a cycle.

    A vertex is on a cycle when it belongs to a strongly connected component
    of more than one vertex, or when it requires itself.

    Returns:
        The set of cyclic vertices, or None for an acyclic graph.
    """
    g = graph.nx_graph
    looping: Set[PropertyName] = set(nx.nodes_with_selfloops(g))

    for component in nx.strongly_connected_components(g):
        if len(component) > 1:
            looping.update(component)

    return frozenset(looping) if looping else None


def describe_cycle(graph: DependencyGraph, vertices: FrozenSet[PropertyName]) -> List[PropertyName]:
    """
    Return one concrete loop through the given cyclic vertices.

    The path is closed, e.g. ["a", "b", "a"]. Empty when the vertices carry
    no cycle.
    """
    subgraph = graph.nx_graph.subgraph(vertices)
    try:
        edges = nx.find_cycle(subgraph)
    except nx.NetworkXNoCycle:
        return []
    return [source for source, _ in edges] + [edges[0][0]]
