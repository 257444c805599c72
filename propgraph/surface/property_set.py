"""
surface/property_set.py - Property set builder

Collects property definitions into declarations and turns them into a
schema exactly once. Each call to define() contributes one clause; defining
the same name several times adds alternatives in definition order, tried
first to last.

Usage:
    props = PropertySet("example")

    @props.define()
    def p(i, _):
        return i + 1

    @props.define(match(p=ANY), when=lambda i, b: b["p"] > 0)
    def q(i, _):
        return i * 5

    @props.define(match(p=ANY))
    def q(i, r):
        return r["p"] * i

    props.evaluate(2)   # ResultRecord(p=3, q=10)
    props.new(2)        # ExampleRecord(p=3, q=10)
"""

from __future__ import annotations
from dataclasses import make_dataclass
from typing import Any, Callable, Iterable, List, Optional, Tuple, Type
import logging
import re
import threading

from propgraph.core.declarations import (
    Body,
    Guard,
    Pattern,
    PropertyDeclaration,
    PropertyName,
    clause,
    declaration_order,
    match_anything,
)
from propgraph.engine import ResultRecord, Schema, build_schema, evaluate_many
from propgraph.errors import SchemaFrozenError
from propgraph.bootstrap.config import EngineConfig
from .patterns import Match

logger = logging.getLogger(__name__)


class PropertySet:
    """Builder for a named set of mutually dependent properties."""

    def __init__(self, name: str = "properties", config: Optional[EngineConfig] = None):
        self.name = name
        self._config = config
        self._declarations: List[PropertyDeclaration] = []
        self._schema: Optional[Schema] = None
        self._record_class: Optional[Type] = None
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Definition
    # -------------------------------------------------------------------------

    def define(
        self,
        pattern: Optional[Pattern] = None,
        *,
        name: Optional[PropertyName] = None,
        when: Optional[Guard] = None,
        uses: Iterable[PropertyName] = (),
    ) -> Callable[[Body], Body]:
        """
        Decorator adding one clause to a property.

        Args:
            pattern: Match (or any pattern callable) over the partial result
            name: Property name, defaults to the function name
            when: Guard called with (input, bindings)
            uses: Extra property names read by a plain-callable pattern or
                guard; their values are added to the bindings the guard sees

        Returns:
            The decorated function, unchanged
        """
        def decorator(body: Body) -> Body:
            prop_name = name or body.__name__
            used = tuple(uses)
            requires = frozenset(used)
            if isinstance(pattern, Match):
                requires = requires | pattern.names

            clause_pattern = pattern
            if used:
                clause_pattern = _binding_uses(pattern or match_anything, used)

            self.declare(PropertyDeclaration(
                name=prop_name,
                clauses=(clause(body, pattern=clause_pattern, when=when, requires=requires),),
            ))
            return body

        return decorator

    def declare(self, declaration: PropertyDeclaration) -> None:
        """Add a ready-made declaration."""
        with self._lock:
            if self._schema is not None:
                raise SchemaFrozenError(
                    f"Property set '{self.name}' is already built; "
                    f"cannot add property '{declaration.name}'"
                )
            self._declarations.append(declaration)
        logger.debug(f"{self.name}: declared '{declaration.name}'")

    @property
    def declarations(self) -> Tuple[PropertyDeclaration, ...]:
        return tuple(self._declarations)

    @property
    def names(self) -> List[PropertyName]:
        """Unique property names in declaration order."""
        return declaration_order(self._declarations)

    @property
    def is_built(self) -> bool:
        return self._schema is not None

    # -------------------------------------------------------------------------
    # Schema & evaluation
    # -------------------------------------------------------------------------

    def build(self) -> Schema:
        """Build (once) and return the schema for this property set."""
        with self._lock:
            if self._schema is None:
                self._schema = build_schema(self._declarations, self._config)
        return self._schema

    @property
    def schema(self) -> Schema:
        return self.build()

    def evaluate(self, input: Any) -> ResultRecord:
        return self.build().evaluate(input, self._config)

    def evaluate_many(self, inputs: Iterable[Any], max_workers: Optional[int] = None) -> List[ResultRecord]:
        return evaluate_many(self.build(), inputs, max_workers=max_workers, config=self._config)

    @property
    def record_class(self) -> Type:
        """Frozen dataclass with one field per property, in declaration order."""
        schema = self.build()
        if self._record_class is None:
            self._record_class = make_dataclass(
                _record_class_name(self.name),
                [(name, Any) for name in schema.names],
                frozen=True,
            )
        return self._record_class

    def new(self, input: Any) -> Any:
        """Evaluate an input and return an instance of record_class."""
        return self.record_class(**self.evaluate(input))

    def __repr__(self) -> str:
        state = "built" if self.is_built else "open"
        return f"PropertySet({self.name!r}, properties={self.names}, {state})"


def _record_class_name(name: str) -> str:
    parts = [part for part in re.split(r"[^0-9a-zA-Z]+", name) if part]
    base = "".join(part[0].upper() + part[1:] for part in parts) or "Properties"
    if base[0].isdigit():
        base = "_" + base
    return f"{base}Record"


def _binding_uses(pattern: Pattern, uses: Tuple[PropertyName, ...]) -> Pattern:
    """Wrap a pattern so its bindings also carry the values of `uses`."""
    def bound(partial):
        result = pattern(partial)
        if result is None or result is False:
            return None
        bindings = {} if result is True else dict(result)
        for used in uses:
            if used in partial:
                bindings.setdefault(used, partial[used])
        return bindings

    return bound
