"""Claim system.

Transitions a cell from unclaimed to owned. The check and the write happen on
one immutable snapshot, so as long as callers commit the returned ``State``
under a single writer (see :class:`grid_registry.registry.GridRegistry`) no
cell can be claimed twice.
"""

from dataclasses import replace

from grid_registry.components.properties import Color, Ownership
from grid_registry.exceptions import AlreadyClaimedError, InsufficientPaymentError
from grid_registry.state import State
from grid_registry.types import CallerID, CellID
from grid_registry.utils.grid import check_id


def claim_system(
    state: State, cell_id: CellID, caller: CallerID, payment: int = 0
) -> State:
    """Claim ``cell_id`` for ``caller``.

    On success the cell gains an :class:`Ownership`, ``total_claimed`` grows by
    one, the payment is added to ``balance`` and, when the attribute store is
    enabled, the cell is painted with ``config.default_color``.

    Args:
        state (State): Current immutable state.
        cell_id (CellID): Cell to claim.
        caller (CallerID): Authenticated identity of the claimant.
        payment (int): Amount attached to the claim.

    Returns:
        State: New state with the cell claimed.

    Raises:
        InvalidIdError: If ``cell_id`` is outside ``[1, 256]``.
        AlreadyClaimedError: If the cell already has an owner.
        InsufficientPaymentError: If the payment is not an integer, is negative,
            or is below the minimum while fee gating is enabled.
    """
    check_id(cell_id)
    if cell_id in state.ownership:
        raise AlreadyClaimedError(cell_id, caller)

    config = state.config
    if not isinstance(payment, int) or isinstance(payment, bool):
        raise InsufficientPaymentError(cell_id, payment, config.minimum_amount)
    if payment < 0 or (config.fee_required and payment < config.minimum_amount):
        raise InsufficientPaymentError(cell_id, payment, config.minimum_amount)

    color = state.color
    if config.attributes_enabled:
        color = color.set(cell_id, Color(*config.default_color))

    return replace(
        state,
        ownership=state.ownership.set(cell_id, Ownership(owner=caller, payment=payment)),
        color=color,
        total_claimed=state.total_claimed + 1,
        balance=state.balance + payment,
        version=state.version + 1,
    )
