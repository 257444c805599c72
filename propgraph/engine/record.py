"""
engine/record.py - Result record

Read-only mapping returned by a successful evaluation: exactly one value per
declared property, keyed by property name in declaration order.
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Dict, Iterator


class ResultRecord(Mapping):
    """
    Immutable mapping of property name to computed value.

    Values are also readable as attributes, except for properties whose name
    is a method of the record (keys, items, values, get, to_dict); those are
    only reachable by item access.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any]):
        object.__setattr__(self, "_values", dict(values))

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("ResultRecord is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("ResultRecord is read-only")

    def __reduce__(self):
        return (ResultRecord, (self._values,))

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self._values.items())
        return f"ResultRecord({fields})"

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)
