"""Concrete disposal tiers."""

from .base import Base
from .derived import Derived
from .generation import Generation1, Generation2

__all__ = [
    "Base",
    "Derived",
    "Generation1",
    "Generation2",
]
