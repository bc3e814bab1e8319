"""Thread-safe registry facade.

:class:`GridRegistry` owns the single current :class:`State` reference and is
the only place where new states are committed. Concurrency model:

* Writers (``claim``, ``set_color``, ``set_color_by_steps``, ``withdraw``) run
  their check and write under one re-entrant lock, then swap the state
  reference. Racing claims on the same id therefore produce exactly one winner;
  every loser sees the committed owner and gets ``AlreadyClaimedError``.
* Readers never lock. They grab the current reference once and query that
  immutable snapshot, so a reader may miss a write that lands mid-call but
  never observes a half-applied one.
* Events are published after the commit while the lock is still held, so
  subscribers see events in commit order (and, per cell, in mutation order).

Example:

>>> registry = GridRegistry()
>>> registry.claim(42, "alice")
>>> registry.render(42).color_hex
'#FFFFFF'
"""

import logging
import threading
from typing import Callable, List, Optional

from grid_registry.components.properties import Color, Position
from grid_registry.config import RegistryConfig
from grid_registry.events import (
    CellClaimed,
    ColorUpdated,
    Event,
    EventBus,
    FundsWithdrawn,
    Handler,
)
from grid_registry.exceptions import GridRegistryError
from grid_registry.metadata import Metadata, render, token_document, token_uri
from grid_registry.persistence import load_state, save_state
from grid_registry.state import State, genesis_state
from grid_registry.systems.claim import claim_system
from grid_registry.systems.color import color_steps_system, color_system
from grid_registry.systems.treasury import withdraw_system
from grid_registry.types import CallerID, CellID, EventType, TransferFn
from grid_registry.utils import grid, ledger

logger = logging.getLogger(__name__)


class GridRegistry:
    """Mutable, thread-safe handle on the 256-cell ledger."""

    def __init__(
        self,
        config: Optional[RegistryConfig] = None,
        transfer_fn: Optional[TransferFn] = None,
        bus: Optional[EventBus] = None,
        state: Optional[State] = None,
    ):
        """Create a registry.

        Arguments:
            config: Registry settings; ignored when ``state`` is given (the state
                carries its own config). Defaults to the free color profile.
            transfer_fn: Payout callable used by :meth:`withdraw`.
            bus: Event bus to publish on; a private one is created if omitted.
            state: Existing snapshot to resume from (e.g. loaded from disk).
        """
        self._state: State = state if state is not None else genesis_state(config)
        self._transfer_fn = transfer_fn
        self.bus = bus if bus is not None else EventBus()
        self._lock = threading.RLock()

    # -------- Snapshot access --------

    @property
    def state(self) -> State:
        return self._state

    def snapshot(self) -> State:
        """Return the current immutable state."""
        return self._state

    @property
    def config(self) -> RegistryConfig:
        return self._state.config

    def subscribe(self, event_type: EventType, fn: Handler) -> None:
        self.bus.subscribe(event_type, fn)

    # -------- Mutations --------

    def claim(self, cell_id: CellID, caller: CallerID, payment: int = 0) -> None:
        """Claim a cell for ``caller``; see :func:`claim_system` for failures."""
        with self._lock:
            self._apply(
                "claim", cell_id, caller, lambda s: claim_system(s, cell_id, caller, payment)
            )
            pos = grid.to_coords(cell_id)
            logger.info("Cell %s claimed by %r (payment=%s)", cell_id, caller, payment)
            self._publish(CellClaimed(caller=caller, cell_id=cell_id, x=pos.x, y=pos.y))

    def set_color(
        self, cell_id: CellID, caller: CallerID, r: int, g: int, b: int
    ) -> None:
        """Overwrite an owned cell's color with exact channel values."""
        with self._lock:
            new_state = self._apply(
                "set_color",
                cell_id,
                caller,
                lambda s: color_system(s, cell_id, caller, r, g, b),
            )
            self._color_committed(new_state, cell_id, caller)

    def set_color_by_steps(
        self, cell_id: CellID, caller: CallerID, r_step: int, g_step: int, b_step: int
    ) -> None:
        """Overwrite an owned cell's color from quantization steps (0-15)."""
        with self._lock:
            new_state = self._apply(
                "set_color_by_steps",
                cell_id,
                caller,
                lambda s: color_steps_system(s, cell_id, caller, r_step, g_step, b_step),
            )
            self._color_committed(new_state, cell_id, caller)

    def withdraw(self, caller: CallerID) -> int:
        """Pay the whole balance out to the administrator; returns the amount.

        Raises:
            NotAdminError, NoFundsError, ConfigurationError,
            TransferFailedError: See :func:`withdraw_system`. On any failure
                the balance is unchanged.
        """
        with self._lock:
            try:
                new_state, amount = withdraw_system(self._state, caller, self._transfer_fn)
            except GridRegistryError as exc:
                logger.warning("Withdrawal by %r rejected: %s", caller, exc)
                raise
            self._state = new_state
            logger.info("Withdrew %s to %r", amount, caller)
            self._publish(FundsWithdrawn(caller=caller, amount=amount))
            return amount

    # -------- Reads --------

    def is_claimed(self, cell_id: CellID) -> bool:
        return ledger.is_claimed(self._state, cell_id)

    def owner_of(self, cell_id: CellID) -> CallerID:
        return ledger.owner_of(self._state, cell_id)

    def get_color(self, cell_id: CellID) -> Color:
        return ledger.get_color(self._state, cell_id)

    def list_claimed(self) -> List[CellID]:
        return ledger.claimed_ids(self._state)

    def list_unclaimed(self) -> List[CellID]:
        return ledger.unclaimed_ids(self._state)

    def cells_owned_by(self, caller: CallerID) -> List[CellID]:
        return ledger.cells_owned_by(self._state, caller)

    def total_claimed(self) -> int:
        return self._state.total_claimed

    def balance(self) -> int:
        return self._state.balance

    def render(self, cell_id: CellID) -> Metadata:
        return render(self._state, cell_id)

    def token_document(self, cell_id: CellID) -> dict:
        return token_document(self._state, cell_id)

    def token_uri(self, cell_id: CellID) -> str:
        return token_uri(self._state, cell_id)

    @staticmethod
    def to_coords(cell_id: CellID) -> Position:
        return grid.to_coords(cell_id)

    @staticmethod
    def to_id(x: int, y: int) -> CellID:
        return grid.to_id(x, y)

    # -------- Persistence --------

    def save(self, path: str) -> None:
        """Write the current snapshot to ``path`` (see :mod:`grid_registry.persistence`)."""
        save_state(self._state, path)

    @classmethod
    def from_file(
        cls,
        path: str,
        config: Optional[RegistryConfig] = None,
        transfer_fn: Optional[TransferFn] = None,
        bus: Optional[EventBus] = None,
    ) -> "GridRegistry":
        """Resume a registry from a table written by :meth:`save`."""
        return cls(transfer_fn=transfer_fn, bus=bus, state=load_state(path, config))

    # -------- Internal helpers --------

    def _apply(
        self,
        operation: str,
        cell_id: CellID,
        caller: CallerID,
        system: Callable[[State], State],
    ) -> State:
        """Run ``system`` on the current state and commit the result.

        Must be called with the lock held.
        """
        try:
            new_state = system(self._state)
        except GridRegistryError as exc:
            logger.warning("%s on cell %r by %r rejected: %s", operation, cell_id, caller, exc)
            raise
        self._state = new_state
        return new_state

    def _color_committed(self, state: State, cell_id: CellID, caller: CallerID) -> None:
        color = state.color[cell_id]
        logger.info("Cell %s recolored to %s by %r", cell_id, color.as_tuple(), caller)
        self._publish(
            ColorUpdated(caller=caller, cell_id=cell_id, r=color.r, g=color.g, b=color.b)
        )

    def _publish(self, event: Event) -> None:
        logger.debug("Publishing %s", event)
        self.bus.publish(self, event)
