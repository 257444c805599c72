"""
core/declarations.py - Property declaration model

Plain data describing each property: its name, its ordered clauses and the
other property names those clauses read. Declarations are produced by the
declaration layer (see propgraph.surface) and consumed, unchanged, by the
graph builder and the evaluator.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import (
    Any, Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple, Union,
)


PropertyName = str

# pattern(partial) -> bindings, True (matched, nothing bound), or None/False
PatternResult = Union[Mapping[str, Any], bool, None]
Pattern = Callable[[Mapping[str, Any]], PatternResult]

# guard(input, bindings) -> bool
Guard = Callable[[Any, Mapping[str, Any]], bool]

# body(input, partial) -> value
Body = Callable[[Any, Mapping[str, Any]], Any]


def match_anything(partial: Mapping[str, Any]) -> Mapping[str, Any]:
    """Pattern that matches every partial result and binds nothing."""
    return {}


def always(input: Any, bindings: Mapping[str, Any]) -> bool:
    """Guard that always holds."""
    return True


# =============================================================================
# CLAUSE
# =============================================================================

@dataclass(frozen=True)
class Clause:
    """One guarded alternative for computing a property."""
    pattern: Pattern
    guard: Guard
    body: Body
    requires: FrozenSet[PropertyName] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "requires", frozenset(self.requires))

    def match(self, input: Any, partial: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
        """
        Test this clause against the partial result.

        Returns:
            The pattern's bindings when both pattern and guard hold, else None.
        """
        result = self.pattern(partial)
        if result is None or result is False:
            return None
        bindings: Mapping[str, Any] = {} if result is True else result

        if not self.guard(input, bindings):
            return None
        return bindings


def clause(
    body: Body,
    pattern: Optional[Pattern] = None,
    when: Optional[Guard] = None,
    requires: Iterable[PropertyName] = (),
) -> Clause:
    """Factory for a Clause with permissive defaults for pattern and guard."""
    return Clause(
        pattern=pattern or match_anything,
        guard=when or always,
        body=body,
        requires=frozenset(requires),
    )


# =============================================================================
# PROPERTY DECLARATION
# =============================================================================

@dataclass(frozen=True)
class PropertyDeclaration:
    """
    Declaration of a single property.

    Clause order is significant: the first matching clause wins.
    When required_names is not given it is the union of every clause's
    requires set.
    """
    name: PropertyName
    clauses: Tuple[Clause, ...] = ()
    required_names: Optional[FrozenSet[PropertyName]] = field(default=None)

    def __post_init__(self):
        object.__setattr__(self, "clauses", tuple(self.clauses))
        if self.required_names is None:
            required: FrozenSet[PropertyName] = frozenset()
            for c in self.clauses:
                required = required | c.requires
            object.__setattr__(self, "required_names", required)
        else:
            object.__setattr__(self, "required_names", frozenset(self.required_names))

    @property
    def clause_count(self) -> int:
        return len(self.clauses)

    def merged_with(self, other: "PropertyDeclaration") -> "PropertyDeclaration":
        """Append another declaration's clauses for the same property."""
        if other.name != self.name:
            raise ValueError(f"Cannot merge '{other.name}' into '{self.name}'")
        return PropertyDeclaration(
            name=self.name,
            clauses=self.clauses + other.clauses,
            required_names=self.required_names | other.required_names,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "clause_count": self.clause_count,
            "required_names": sorted(self.required_names),
        }


def merge_declarations(
    declarations: Iterable[PropertyDeclaration],
) -> Dict[PropertyName, PropertyDeclaration]:
    """
    Collapse declarations sharing a name into one per property.

    Clauses are concatenated in definition order and required names are
    unioned. The returned dict preserves first-declaration order.
    """
    merged: Dict[PropertyName, PropertyDeclaration] = {}
    for decl in declarations:
        if decl.name in merged:
            merged[decl.name] = merged[decl.name].merged_with(decl)
        else:
            merged[decl.name] = decl
    return merged


def declaration_order(declarations: Iterable[PropertyDeclaration]) -> List[PropertyName]:
    """Unique property names in the order they were first declared."""
    return list(merge_declarations(declarations).keys())
