"""Coordinate mapping helpers.

Pure, stateless bijection between linear cell ids (``1..256``) and grid
coordinates (``x, y`` in ``0..15``). Ids run row by row from the top-left
corner::

    id = y * 16 + x + 1
    x = (id - 1) % 16
    y = (id - 1) // 16

``to_id`` and ``to_coords`` are exact inverses over their valid domains.
"""

from typing import Any, Iterator

from grid_registry.components.properties import Position
from grid_registry.exceptions import InvalidCoordError, InvalidIdError
from grid_registry.types import GRID_SIZE, MAX_CELL_ID, MIN_CELL_ID, CellID


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_id(cell_id: Any) -> bool:
    """Return True if ``cell_id`` is an integer in ``[1, 256]``."""
    return _is_int(cell_id) and MIN_CELL_ID <= cell_id <= MAX_CELL_ID


def is_in_bounds(x: Any, y: Any) -> bool:
    """Return True if ``(x, y)`` lies on the 16x16 grid."""
    return _is_int(x) and _is_int(y) and 0 <= x < GRID_SIZE and 0 <= y < GRID_SIZE


def check_id(cell_id: Any) -> CellID:
    """Return ``cell_id`` unchanged, raising ``InvalidIdError`` if out of range."""
    if not is_valid_id(cell_id):
        raise InvalidIdError(cell_id)
    return cell_id


def to_coords(cell_id: CellID) -> Position:
    """Map a cell id to its grid position.

    Raises:
        InvalidIdError: If ``cell_id`` is outside ``[1, 256]``.
    """
    check_id(cell_id)
    index = cell_id - 1
    return Position(index % GRID_SIZE, index // GRID_SIZE)


def to_id(x: int, y: int) -> CellID:
    """Map grid coordinates to a cell id.

    Raises:
        InvalidCoordError: If ``x`` or ``y`` is outside ``[0, 15]``.
    """
    if not is_in_bounds(x, y):
        raise InvalidCoordError(x, y)
    return y * GRID_SIZE + x + 1


def all_cell_ids() -> Iterator[CellID]:
    """Yield every cell id in ascending order."""
    return iter(range(MIN_CELL_ID, MAX_CELL_ID + 1))
