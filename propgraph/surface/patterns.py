"""
surface/patterns.py - Partial-result patterns

A Match tests that named properties are bound in the partial result and,
optionally, equal to given literals. Its field names are the properties the
clause reads, which is what the declaration layer reports as requirements.

    match(p=3)        # p bound and equal to 3
    match(p=ANY)      # p bound to anything, captured as binding "p"
"""

from __future__ import annotations
from typing import Any, Dict, FrozenSet, Mapping, Optional


class _Any:
    """Wildcard: the property must be bound, any value matches."""

    _instance: Optional["_Any"] = None

    def __new__(cls) -> "_Any":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ANY"


ANY = _Any()


class Match:
    """Pattern over a partial result."""

    __slots__ = ("_fields",)

    def __init__(self, **fields: Any):
        self._fields: Dict[str, Any] = dict(fields)

    @property
    def names(self) -> FrozenSet[str]:
        """Properties this pattern references."""
        return frozenset(self._fields)

    @property
    def fields(self) -> Dict[str, Any]:
        return dict(self._fields)

    def __call__(self, partial: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        bindings: Dict[str, Any] = {}
        for name, expected in self._fields.items():
            if name not in partial:
                return None
            value = partial[name]
            if expected is not ANY and value != expected:
                return None
            bindings[name] = value
        return bindings

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self._fields.items())
        return f"match({fields})"


def match(**fields: Any) -> Match:
    return Match(**fields)
