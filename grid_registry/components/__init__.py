"""grid_registry.components
=================================

Aggregate import surface for the component dataclasses used by the registry,
so downstream code can write::

    from grid_registry.components import Color, Ownership, Position

All component classes are frozen ``@dataclass`` value objects; they carry no
behavior beyond their fields and are swapped wholesale by the systems.
"""

from .properties import Color
from .properties import Ownership
from .properties import Position

__all__ = [
    "Color",
    "Ownership",
    "Position",
]
