"""Ledger queries.

Read-only helpers over a :class:`grid_registry.state.State` snapshot. Every
query is recomputed from the snapshot it is given, so results are always
consistent with that snapshot and enumeration can be restarted at will.

Performance: the sorted id list and the owner index are cached per
``ownership`` map. ``PMap`` values are hashable, so a new snapshot produces a
new cache key and stale entries are never returned.
"""

from functools import lru_cache
from typing import Dict, List, Mapping, Optional, Tuple

from grid_registry.components.properties import Color, Ownership
from grid_registry.exceptions import AttributeStoreDisabledError, NotFoundError
from grid_registry.state import State
from grid_registry.types import CallerID, CellID
from grid_registry.utils.grid import all_cell_ids, check_id


@lru_cache(maxsize=256)
def _sorted_ids(ownership: Mapping[CellID, Ownership]) -> Tuple[CellID, ...]:
    return tuple(sorted(ownership.keys()))


@lru_cache(maxsize=256)
def _owner_index(
    ownership: Mapping[CellID, Ownership],
) -> Mapping[CallerID, Tuple[CellID, ...]]:
    index: Dict[CallerID, List[CellID]] = {}
    for cell_id in _sorted_ids(ownership):
        index.setdefault(ownership[cell_id].owner, []).append(cell_id)
    return {owner: tuple(ids) for owner, ids in index.items()}


def is_claimed(state: State, cell_id: CellID) -> bool:
    """Return True if the cell has an owner."""
    return check_id(cell_id) in state.ownership


def owner_of(state: State, cell_id: CellID) -> CallerID:
    """Return the owner identity of a claimed cell.

    Raises:
        InvalidIdError: If ``cell_id`` is outside ``[1, 256]``.
        NotFoundError: If the cell is unclaimed.
    """
    ownership: Optional[Ownership] = state.ownership.get(check_id(cell_id))
    if ownership is None:
        raise NotFoundError(cell_id)
    return ownership.owner


def claimed_ids(state: State) -> List[CellID]:
    """Ascending ids of all claimed cells."""
    return list(_sorted_ids(state.ownership))


def unclaimed_ids(state: State) -> List[CellID]:
    """Ascending ids of all cells still available."""
    return [cell_id for cell_id in all_cell_ids() if cell_id not in state.ownership]


def cells_owned_by(state: State, caller: CallerID) -> List[CellID]:
    """Ascending ids of the cells owned by ``caller``."""
    return list(_owner_index(state.ownership).get(caller, ()))


def get_color(state: State, cell_id: CellID) -> Color:
    """Return the color of a claimed cell.

    Raises:
        InvalidIdError: If ``cell_id`` is outside ``[1, 256]``.
        AttributeStoreDisabledError: If the registry runs without colors.
        NotFoundError: If the cell is unclaimed.
    """
    check_id(cell_id)
    if not state.config.attributes_enabled:
        raise AttributeStoreDisabledError("get_color")
    color = state.color.get(cell_id)
    if color is None:
        raise NotFoundError(cell_id)
    return color
