"""Color system.

Owner-gated overwrite of a cell's color. Checks run in a fixed order so a
request fails with the same error regardless of its values:

1. cell id range
2. attribute store enabled
3. cell claimed (``NotFoundError``)
4. caller is the owner, by exact equality (``NotOwnerError``)
5. channel / step values
"""

from dataclasses import replace

from grid_registry.components.properties import Color
from grid_registry.exceptions import (
    AttributeStoreDisabledError,
    NotFoundError,
    NotOwnerError,
)
from grid_registry.state import State
from grid_registry.types import CallerID, CellID, Channel, Step
from grid_registry.utils.color import color_from_steps, make_color
from grid_registry.utils.grid import check_id


def authorize_color_change(state: State, cell_id: CellID, caller: CallerID) -> None:
    """Raise unless ``caller`` may recolor ``cell_id`` in ``state``."""
    check_id(cell_id)
    if not state.config.attributes_enabled:
        raise AttributeStoreDisabledError("set_color")
    ownership = state.ownership.get(cell_id)
    if ownership is None:
        raise NotFoundError(cell_id)
    if ownership.owner != caller:
        raise NotOwnerError(cell_id, caller)


def apply_color(state: State, cell_id: CellID, color: Color) -> State:
    """Overwrite the stored color; assumes authorization already passed."""
    return replace(
        state,
        color=state.color.set(cell_id, color),
        version=state.version + 1,
    )


def color_system(
    state: State, cell_id: CellID, caller: CallerID, r: Channel, g: Channel, b: Channel
) -> State:
    """Set the exact channel values of an owned cell.

    Raises:
        InvalidIdError, AttributeStoreDisabledError, NotFoundError,
        NotOwnerError: See module docstring for the order.
        InvalidColorError: If a channel is outside ``[0, 255]``.
    """
    authorize_color_change(state, cell_id, caller)
    return apply_color(state, cell_id, make_color(r, g, b))


def color_steps_system(
    state: State,
    cell_id: CellID,
    caller: CallerID,
    r_step: Step,
    g_step: Step,
    b_step: Step,
) -> State:
    """Set an owned cell's color from three quantization steps (``0..15``).

    Raises:
        InvalidIdError, AttributeStoreDisabledError, NotFoundError,
        NotOwnerError: See module docstring for the order.
        InvalidStepError: If a step is outside ``[0, 15]``.
    """
    authorize_color_change(state, cell_id, caller)
    return apply_color(state, cell_id, color_from_steps(r_step, g_step, b_step))
