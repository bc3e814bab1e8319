"""Notifications published after committed mutations.

Presentation layers subscribe instead of polling. Each event type has its own
``blinker.Signal``; handlers are called as ``handler(sender, event=event)``
where ``sender`` is the publishing registry. A handler that raises is logged
and skipped; the remaining handlers for that event still run.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, ClassVar, Dict, Union

from blinker import Signal

from grid_registry.types import CallerID, CellID, EventType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CellClaimed:
    """A cell was claimed."""

    type: ClassVar[EventType] = EventType.CELL_CLAIMED

    caller: CallerID
    cell_id: CellID
    x: int
    y: int


@dataclass(frozen=True)
class ColorUpdated:
    """A cell's color was overwritten by its owner."""

    type: ClassVar[EventType] = EventType.COLOR_UPDATED

    caller: CallerID
    cell_id: CellID
    r: int
    g: int
    b: int


@dataclass(frozen=True)
class FundsWithdrawn:
    """The administrator withdrew the accumulated balance."""

    type: ClassVar[EventType] = EventType.FUNDS_WITHDRAWN

    caller: CallerID
    amount: int


Event = Union[CellClaimed, ColorUpdated, FundsWithdrawn]
Handler = Callable[..., Any]


def event_payload(event: Event) -> Dict[str, Any]:
    """JSON-friendly dict of an event, tagged with its type."""
    return {"type": str(event.type), **asdict(event)}


class EventBus:
    """Event bus leveraging blinker Signal objects, keyed by :class:`EventType`."""

    def __init__(self) -> None:
        self._signals: Dict[EventType, Signal] = {}

    def _signal(self, event_type: EventType) -> Signal:
        return self._signals.setdefault(event_type, Signal(str(event_type)))

    def subscribe(self, event_type: EventType, fn: Handler) -> None:
        # weak=False keeps lambdas and bound methods alive without a reference elsewhere
        self._signal(event_type).connect(fn, weak=False)

    def subscribe_all(self, fn: Handler) -> None:
        for event_type in EventType:
            self.subscribe(event_type, fn)

    def unsubscribe(self, event_type: EventType, fn: Handler) -> None:
        sig = self._signals.get(event_type)
        if sig is not None:
            sig.disconnect(fn)

    def publish(self, sender: Any, event: Event) -> None:
        sig = self._signals.get(event.type)
        if sig is None:
            return
        for receiver in sig.receivers_for(sender):
            try:
                receiver(sender, event=event)
            except Exception:
                logger.exception("Subscriber %r failed while handling %s", receiver, event.type)
