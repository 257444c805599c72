"""
core/ - Declaration model

Provides:
- Clause: one guarded alternative (pattern, guard, body)
- PropertyDeclaration: ordered clauses plus required property names
- merge_declarations: per-name merging in definition order
"""

from .declarations import (
    PropertyName,
    Pattern,
    Guard,
    Body,
    Clause,
    PropertyDeclaration,
    clause,
    match_anything,
    always,
    merge_declarations,
    declaration_order,
)

__all__ = [
    "PropertyName",
    "Pattern",
    "Guard",
    "Body",
    "Clause",
    "PropertyDeclaration",
    "clause",
    "match_anything",
    "always",
    "merge_declarations",
    "declaration_order",
]
