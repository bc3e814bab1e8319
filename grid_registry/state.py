"""Core immutable registry ``State`` dataclass.

This module defines the frozen :class:`State` object that represents the whole
256-cell ledger at one moment. All systems are pure functions that take a
previous ``State`` plus inputs (cell id, caller, values) and return a *new*
``State``; nothing is mutated in place. A snapshot handed to a reader therefore
stays consistent no matter how many claims are committed afterwards.

Design notes:

* Component stores are **persistent maps** (``pyrsistent.PMap``) keyed by
    ``CellID``. Absence of a key in ``ownership`` means the cell is unclaimed;
    absence in ``color`` means the cell has no color (unclaimed, or the
    attribute store is disabled).
* ``total_claimed`` mirrors ``len(ownership)`` and is maintained by the claim
    system; :func:`check_invariants` verifies it.
* ``version`` counts committed mutations and orders snapshots.

See :mod:`grid_registry.registry` for how a mutable facade serializes writers
on top of these values.
"""

from dataclasses import dataclass
from typing import List, Optional

from pyrsistent import PMap, pmap

from grid_registry.components.properties import Color, Ownership
from grid_registry.config import RegistryConfig
from grid_registry.types import MAX_CHANNEL, CellID
from grid_registry.utils.grid import is_valid_id


@dataclass(frozen=True)
class State:
    """Immutable registry state.

    Attributes:
        config (RegistryConfig): Fee policy, administrator and attribute profile.
        ownership (PMap[CellID, Ownership]): Claimed cells and their owners.
        color (PMap[CellID, Color]): Colors of claimed cells.
        total_claimed (int): Number of claimed cells.
        balance (int): Accumulated claim payments not yet withdrawn.
        version (int): Number of committed mutations since genesis.
    """

    config: RegistryConfig = RegistryConfig()

    ownership: PMap[CellID, Ownership] = pmap()
    color: PMap[CellID, Color] = pmap()

    total_claimed: int = 0
    balance: int = 0
    version: int = 0


def genesis_state(config: Optional[RegistryConfig] = None) -> State:
    """Return the initial state: every cell unclaimed, zero balance."""
    return State(config=config or RegistryConfig())


def check_invariants(state: State) -> List[str]:
    """Return human-readable violations of the ledger invariants (empty if sound)."""
    problems: List[str] = []
    if state.total_claimed != len(state.ownership):
        problems.append(
            f"total_claimed={state.total_claimed} but {len(state.ownership)} cells are claimed"
        )
    if state.balance < 0:
        problems.append(f"negative balance {state.balance}")
    for cell_id in state.ownership:
        if not is_valid_id(cell_id):
            problems.append(f"ownership for invalid cell id {cell_id!r}")
    for cell_id, color in state.color.items():
        if cell_id not in state.ownership:
            problems.append(f"cell {cell_id} has a color but no owner")
        for channel in color.as_tuple():
            if not 0 <= channel <= MAX_CHANNEL:
                problems.append(f"cell {cell_id} channel {channel} out of range")
    if not state.config.attributes_enabled and len(state.color) > 0:
        problems.append("colors present while the attribute store is disabled")
    return problems
