"""Common type aliases, grid constants and enumerations.

``TransferFn`` is the extension point used by the treasury to move the
accumulated balance out of the registry; it is injected by the hosting
application the same way callers inject their own identities.
"""

from enum import StrEnum, auto
from typing import Callable, Tuple

CellID = int
CallerID = str
Channel = int
Step = int

RGB = Tuple[Channel, Channel, Channel]

TransferFn = Callable[[CallerID, int], None]

GRID_SIZE = 16
CELL_COUNT = GRID_SIZE * GRID_SIZE
MIN_CELL_ID = 1
MAX_CELL_ID = CELL_COUNT

MAX_CHANNEL = 255
MAX_STEP = 15

WHITE: RGB = (MAX_CHANNEL, MAX_CHANNEL, MAX_CHANNEL)


class EventType(StrEnum):
    """Notification categories published after a committed mutation."""

    CELL_CLAIMED = auto()
    COLOR_UPDATED = auto()
    FUNDS_WITHDRAWN = auto()
