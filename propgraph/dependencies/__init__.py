"""
propgraph Dependency Engine

Provides:
- DependencyGraph: graph of property requirements
- build_graph: graph builder over property declarations
- find_cycle / describe_cycle: cycle detection and reporting
- topological_sort: deterministic evaluation order
"""

from .graph import (
    DependencyGraph,
    build_graph,
)
from .cycles import (
    find_cycle,
    describe_cycle,
)
from .ordering import (
    topological_sort,
)

__all__ = [
    # Graph
    "DependencyGraph",
    "build_graph",
    # Cycles
    "find_cycle",
    "describe_cycle",
    # Ordering
    "topological_sort",
]
