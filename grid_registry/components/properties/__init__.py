"""Property component aggregates.

Re-exports the immutable value objects stored on (or derived from) the
registry :class:`grid_registry.state.State`: who owns a cell, what color it
has and where it sits on the grid.
"""

from .color import Color
from .ownership import Ownership
from .position import Position

__all__ = [
    "Color",
    "Ownership",
    "Position",
]
