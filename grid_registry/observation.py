"""Array and dict exports of a registry snapshot.

Collaborators that draw the grid or feed it to analysis code want the whole
board at once rather than 256 ``get_color`` calls. These helpers produce that
view from a single snapshot:

``color_grid(state)`` -> ``np.ndarray(16, 16, 3)`` of ``uint8``, indexed ``[y, x]``
``claimed_mask(state)`` -> ``np.ndarray(16, 16)`` of ``bool``
``registry_info(state)`` -> JSON-friendly summary dict
"""

from typing import Any, Dict

import numpy as np
import numpy.typing as npt

from grid_registry.state import State
from grid_registry.types import GRID_SIZE
from grid_registry.utils.grid import to_coords
from grid_registry.utils.ledger import claimed_ids

UInt8Array = npt.NDArray[np.uint8]
BoolArray = npt.NDArray[np.bool_]


def color_grid(state: State) -> UInt8Array:
    """RGB array of the board; unclaimed (or colorless) cells are black."""
    arr: UInt8Array = np.zeros((GRID_SIZE, GRID_SIZE, 3), dtype=np.uint8)
    for cell_id, color in state.color.items():
        pos = to_coords(cell_id)
        arr[pos.y, pos.x] = color.as_tuple()
    return arr


def claimed_mask(state: State) -> BoolArray:
    """Boolean array, True where the cell is claimed."""
    mask: BoolArray = np.zeros((GRID_SIZE, GRID_SIZE), dtype=np.bool_)
    for cell_id in state.ownership:
        pos = to_coords(cell_id)
        mask[pos.y, pos.x] = True
    return mask


def registry_info(state: State) -> Dict[str, Any]:
    """Summary of counters, claimed ids and configuration."""
    return {
        "total_claimed": int(state.total_claimed),
        "balance": int(state.balance),
        "version": int(state.version),
        "claimed": claimed_ids(state),
        "config": state.config.to_dict(),
    }
