"""Conversion between :class:`State` and the persisted cell table.

The persisted layout is a sequential table of 256 fixed-size records, one per
cell id in ascending order, plus the scalars::

    {
      "total_claimed": 3,
      "balance": 0,
      "has_colors": true,
      "cells": [{"claimed": true, "owner": "alice", "r": 255, "g": 255, "b": 255}, ...]
    }

Unclaimed cells are stored as ``{"claimed": false, "owner": null, "r": 0,
"g": 0, "b": 0}``. Tables written while the attribute store was disabled carry
``"has_colors": false``; loading one with colors enabled paints every claimed
cell with ``config.default_color`` instead of the zeroed channels.
``from_records`` rebuilds a ``State`` and refuses tables
that break the ledger invariants, so a hand-edited file cannot smuggle in a
double owner count or an out-of-range channel.
"""

import json
import logging
import os
import tempfile
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence, cast

from pyrsistent import pmap

from grid_registry.components.properties import Color, Ownership
from grid_registry.config import RegistryConfig
from grid_registry.exceptions import CorruptStateError
from grid_registry.state import State, check_invariants
from grid_registry.types import CELL_COUNT, CallerID, CellID, MAX_CHANNEL
from grid_registry.utils.grid import all_cell_ids

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


@dataclass(frozen=True)
class CellRecord:
    """One fixed-size row of the persisted table."""

    claimed: bool = False
    owner: Optional[CallerID] = None
    r: int = 0
    g: int = 0
    b: int = 0


def to_records(state: State) -> List[CellRecord]:
    """Flatten a state into 256 records ordered by cell id."""
    records: List[CellRecord] = []
    for cell_id in all_cell_ids():
        ownership = state.ownership.get(cell_id)
        if ownership is None:
            records.append(CellRecord())
            continue
        color = state.color.get(cell_id, Color(0, 0, 0))
        records.append(
            CellRecord(
                claimed=True, owner=ownership.owner, r=color.r, g=color.g, b=color.b
            )
        )
    return records


def _check_record(cell_id: CellID, record: CellRecord) -> None:
    if record.claimed != (record.owner is not None):
        raise CorruptStateError(f"Cell {cell_id}: owner must be set iff claimed")
    for channel in (record.r, record.g, record.b):
        if not isinstance(channel, int) or not 0 <= channel <= MAX_CHANNEL:
            raise CorruptStateError(f"Cell {cell_id}: channel {channel!r} out of range")


def from_records(
    records: Sequence[CellRecord],
    total_claimed: int,
    balance: int = 0,
    config: Optional[RegistryConfig] = None,
    has_colors: bool = True,
) -> State:
    """Rebuild a :class:`State` from a persisted table.

    When ``has_colors`` is False the record channels are ignored and claimed
    cells get ``config.default_color``.

    Raises:
        CorruptStateError: If the table has the wrong length, a record breaks
            "owner iff claimed", a channel is out of range, or ``total_claimed``
            does not match the number of claimed records.
    """
    config = config or RegistryConfig()
    if len(records) != CELL_COUNT:
        raise CorruptStateError(f"Expected {CELL_COUNT} records, got {len(records)}")

    ownership: Dict[CellID, Ownership] = {}
    color: Dict[CellID, Color] = {}
    for cell_id, record in zip(all_cell_ids(), records):
        _check_record(cell_id, record)
        if not record.claimed:
            continue
        ownership[cell_id] = Ownership(owner=cast(CallerID, record.owner))
        if not config.attributes_enabled:
            continue
        if has_colors:
            color[cell_id] = Color(record.r, record.g, record.b)
        else:
            color[cell_id] = Color(*config.default_color)

    state = State(
        config=config,
        ownership=pmap(ownership),
        color=pmap(color),
        total_claimed=total_claimed,
        balance=balance,
    )
    problems = check_invariants(state)
    if problems:
        raise CorruptStateError("; ".join(problems))
    return state


def state_to_dict(state: State) -> Dict[str, Any]:
    """JSON-friendly dict of the persisted layout."""
    return {
        "format_version": FORMAT_VERSION,
        "total_claimed": state.total_claimed,
        "balance": state.balance,
        "has_colors": state.config.attributes_enabled,
        "cells": [asdict(record) for record in to_records(state)],
    }


def _scalar(data: Dict[str, Any], key: str, default: Optional[int] = None) -> int:
    value = data[key] if default is None else data.get(key, default)
    if not isinstance(value, int) or isinstance(value, bool):
        raise CorruptStateError(f"{key} must be an integer, got {value!r}")
    return value


def state_from_dict(
    data: Dict[str, Any], config: Optional[RegistryConfig] = None
) -> State:
    """Inverse of :func:`state_to_dict`."""
    try:
        records = [CellRecord(**cell) for cell in data["cells"]]
        total_claimed = _scalar(data, "total_claimed")
        balance = _scalar(data, "balance", 0)
        has_colors = bool(data.get("has_colors", True))
    except (KeyError, TypeError, ValueError) as exc:
        raise CorruptStateError(f"Malformed registry table: {exc}") from exc
    return from_records(records, total_claimed, balance, config, has_colors)


def save_state(state: State, path: str) -> None:
    """Write ``state`` to ``path`` as JSON.

    The table is written to a temporary file in the same directory and then
    moved over ``path``, so a failed write leaves the previous file intact.
    """
    data = state_to_dict(state)
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".registry-", suffix=".json")
    try:
        with os.fdopen(fd, "w") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, path)
    except BaseException:
        os.unlink(tmp_path)
        raise
    logger.info(
        "Saved registry to %s (%d claimed, balance %d)",
        path,
        state.total_claimed,
        state.balance,
    )


def load_state(path: str, config: Optional[RegistryConfig] = None) -> State:
    """Read a state written by :func:`save_state`.

    Raises:
        CorruptStateError: If the file is not valid JSON or breaks an invariant.
    """
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise CorruptStateError(f"{path} is not valid JSON: {exc}") from exc
    state = state_from_dict(data, config)
    logger.info("Loaded registry from %s (%d claimed)", path, state.total_claimed)
    return state
