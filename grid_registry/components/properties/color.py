"""Color component.

Three 8-bit channels stored in ``State.color`` keyed by cell id. Only claimed
cells carry a color; range checks live in
:mod:`grid_registry.utils.color` so that the dataclass stays a plain value.
"""

from dataclasses import dataclass

from grid_registry.types import RGB


@dataclass(frozen=True)
class Color:
    """RGB value of a cell.

    Attributes:
        r: Red channel (0-255).
        g: Green channel (0-255).
        b: Blue channel (0-255).
    """

    r: int
    g: int
    b: int

    def as_tuple(self) -> RGB:
        return (self.r, self.g, self.b)
