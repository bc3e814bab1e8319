"""Treasury system.

Administrator-only withdrawal of the accumulated claim payments. The external
transfer runs *before* the zeroed state is returned: if it raises, no new state
exists and the caller keeps the old balance, so the pair "transfer + zero" is
one unit.
"""

from dataclasses import replace
from typing import Optional, Tuple

from grid_registry.exceptions import (
    ConfigurationError,
    NoFundsError,
    NotAdminError,
    TransferFailedError,
)
from grid_registry.state import State
from grid_registry.types import CallerID, TransferFn


def withdraw_system(
    state: State, caller: CallerID, transfer_fn: Optional[TransferFn]
) -> Tuple[State, int]:
    """Transfer the whole balance to the administrator.

    Args:
        state (State): Current immutable state.
        caller (CallerID): Identity requesting the withdrawal.
        transfer_fn (Optional[TransferFn]): Callable ``(recipient, amount)``
            performing the external payout; any exception it raises aborts the
            withdrawal.

    Returns:
        Tuple[State, int]: New state with a zero balance, and the amount sent.

    Raises:
        NotAdminError: If ``caller`` is not ``config.admin``.
        NoFundsError: If the balance is zero.
        ConfigurationError: If the admin has funds but no ``transfer_fn``.
        TransferFailedError: If ``transfer_fn`` raised; chained to its error.
    """
    admin = state.config.admin
    if admin is None or caller != admin:
        raise NotAdminError(caller)
    amount = state.balance
    if amount <= 0:
        raise NoFundsError()
    if transfer_fn is None:
        raise ConfigurationError("No transfer function configured for withdraw")

    try:
        transfer_fn(caller, amount)
    except Exception as exc:
        raise TransferFailedError(caller, amount) from exc

    return replace(state, balance=0, version=state.version + 1), amount
