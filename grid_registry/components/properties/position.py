"""Position component.

Immutable integer grid coordinates derived from a cell id. Positions are never
stored on the ``State``; they are recomputed by
:func:`grid_registry.utils.grid.to_coords` whenever needed.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Grid coordinate.

    Attributes:
        x: Column index (0 at left).
        y: Row index (0 at top).
    """

    x: int
    y: int
