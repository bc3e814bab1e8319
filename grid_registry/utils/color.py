"""Color validation, quantization and hex helpers.

Pickers offer 16 levels per channel. A level ``s`` maps to ``s * 17``, except
the top level 15 which is pinned to 255 so the channel never leaves the 8-bit
range::

    0 -> 0, 1 -> 17, ..., 14 -> 238, 15 -> 255
"""

from typing import Any, Tuple

from grid_registry.components.properties import Color
from grid_registry.exceptions import InvalidColorError, InvalidStepError
from grid_registry.types import MAX_CHANNEL, MAX_STEP, Channel, Step

STEP_SIZE = 17

QUANTIZATION_TABLE: Tuple[Channel, ...] = tuple(
    MAX_CHANNEL if s == MAX_STEP else s * STEP_SIZE for s in range(MAX_STEP + 1)
)

CHANNEL_NAMES = ("r", "g", "b")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def step_to_channel(step: Step, channel: str = "step") -> Channel:
    """Quantize one step to its channel value.

    Raises:
        InvalidStepError: If ``step`` is not an integer in ``[0, 15]``.
    """
    if not _is_int(step) or not 0 <= step <= MAX_STEP:
        raise InvalidStepError(channel, step)
    return QUANTIZATION_TABLE[step]


def channel_to_step(value: Channel) -> Step:
    """Nearest step for a channel value (used to preset pickers)."""
    return min(MAX_STEP, max(0, round(value / STEP_SIZE)))


def make_color(r: Any, g: Any, b: Any) -> Color:
    """Build a validated :class:`Color`.

    Raises:
        InvalidColorError: If a channel is not an integer in ``[0, 255]``.
    """
    for name, value in zip(CHANNEL_NAMES, (r, g, b)):
        if not _is_int(value) or not 0 <= value <= MAX_CHANNEL:
            raise InvalidColorError(name, value)
    return Color(r, g, b)


def color_from_steps(r_step: Any, g_step: Any, b_step: Any) -> Color:
    """Quantize three steps into a :class:`Color`."""
    r, g, b = (
        step_to_channel(step, name)
        for name, step in zip(CHANNEL_NAMES, (r_step, g_step, b_step))
    )
    return Color(r, g, b)


def color_to_steps(color: Color) -> Tuple[Step, Step, Step]:
    """Inverse of :func:`color_from_steps` for quantized colors."""
    return (
        channel_to_step(color.r),
        channel_to_step(color.g),
        channel_to_step(color.b),
    )


def color_hex(color: Color) -> str:
    """Return ``#RRGGBB`` with uppercase hex digits."""
    return "#{:02X}{:02X}{:02X}".format(color.r, color.g, color.b)
