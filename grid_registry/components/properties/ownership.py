"""Ownership component.

Presence of a cell id in ``State.ownership`` is what *claimed* means: the
component is added exactly once by the claim system and never removed.
"""

from dataclasses import dataclass

from grid_registry.types import CallerID


@dataclass(frozen=True)
class Ownership:
    """Claim record.

    Attributes:
        owner: Identity of the caller that claimed the cell.
        payment: Amount attached to the claim (0 for free claims).
    """

    owner: CallerID
    payment: int = 0
