"""Typed failures raised by registry operations.

Every failure is local and recoverable: nothing here is meant to bring the
process down. Validation errors also derive from the matching builtin
(``ValueError``, ``LookupError``, ``PermissionError``) so generic handlers in
host applications keep working.
"""

from typing import Any, Optional

from grid_registry.types import CallerID, CellID


class GridRegistryError(Exception):
    """Base exception for the grid registry."""


class InvalidIdError(GridRegistryError, ValueError):
    """Raised when a cell id lies outside ``[1, 256]``."""

    def __init__(self, cell_id: Any):
        self.cell_id = cell_id
        super().__init__(f"Invalid cell id: {cell_id!r}")


class InvalidCoordError(GridRegistryError, ValueError):
    """Raised when ``x`` or ``y`` lies outside ``[0, 15]``."""

    def __init__(self, x: Any, y: Any):
        self.x = x
        self.y = y
        super().__init__(f"Invalid coordinates: ({x!r}, {y!r})")


class InvalidColorError(GridRegistryError, ValueError):
    """Raised when a color channel is not an integer in ``[0, 255]``."""

    def __init__(self, channel: str, value: Any):
        self.channel = channel
        self.value = value
        super().__init__(f"Invalid {channel} channel value: {value!r}")


class InvalidStepError(GridRegistryError, ValueError):
    """Raised when a quantization step is not an integer in ``[0, 15]``."""

    def __init__(self, channel: str, step: Any):
        self.channel = channel
        self.step = step
        super().__init__(f"Invalid {channel} step: {step!r}")


class AlreadyClaimedError(GridRegistryError):
    """Raised when claiming a cell that already has an owner."""

    def __init__(self, cell_id: CellID, caller: CallerID):
        self.cell_id = cell_id
        self.caller = caller
        super().__init__(f"Cell {cell_id} is already claimed")


class NotFoundError(GridRegistryError, LookupError):
    """Raised when an attribute operation targets an unclaimed cell."""

    def __init__(self, cell_id: CellID):
        self.cell_id = cell_id
        super().__init__(f"Cell {cell_id} is not claimed")


class NotOwnerError(GridRegistryError, PermissionError):
    """Raised when a caller other than the owner mutates a cell."""

    def __init__(self, cell_id: CellID, caller: CallerID):
        self.cell_id = cell_id
        self.caller = caller
        super().__init__(f"Caller {caller!r} does not own cell {cell_id}")


class NotAdminError(GridRegistryError, PermissionError):
    """Raised when a non-administrator attempts a withdrawal."""

    def __init__(self, caller: CallerID):
        self.caller = caller
        super().__init__(f"Caller {caller!r} is not the registry administrator")


class InsufficientPaymentError(GridRegistryError):
    """Raised when a fee-gated claim carries less than the minimum amount."""

    def __init__(self, cell_id: CellID, payment: Any, minimum_amount: int):
        self.cell_id = cell_id
        self.payment = payment
        self.minimum_amount = minimum_amount
        super().__init__(
            f"Payment {payment!r} for cell {cell_id} is below the minimum of {minimum_amount}"
        )


class NoFundsError(GridRegistryError):
    """Raised when withdrawing from an empty balance."""

    def __init__(self) -> None:
        super().__init__("No funds to withdraw")


class TransferFailedError(GridRegistryError):
    """Raised when the external transfer of a withdrawal fails.

    The balance is left untouched; the original failure is chained as
    ``__cause__``.
    """

    def __init__(self, caller: CallerID, amount: int):
        self.caller = caller
        self.amount = amount
        super().__init__(f"Transfer of {amount} to {caller!r} failed")


class AttributeStoreDisabledError(GridRegistryError):
    """Raised when a color operation runs on a registry without colors."""

    def __init__(self, operation: Optional[str] = None):
        self.operation = operation
        detail = f" ({operation})" if operation else ""
        super().__init__(f"Attribute store is disabled{detail}")


class ConfigurationError(GridRegistryError):
    """Raised when there's a configuration error."""


class CorruptStateError(GridRegistryError):
    """Raised when a persisted registry table violates the ledger invariants."""
