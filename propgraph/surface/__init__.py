"""
surface/ - Declaration layer

Python-native way of writing property sets: patterns over the partial
result and a PropertySet builder that produces declarations for the engine.
"""

from .patterns import (
    ANY,
    Match,
    match,
)
from .property_set import PropertySet

__all__ = [
    "ANY",
    "Match",
    "match",
    "PropertySet",
]
