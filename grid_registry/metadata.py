"""Per-cell metadata.

Composes the coordinate mapper and the attribute store into a descriptive
record. Output is fully determined by the snapshot: the same state always
renders the same metadata, byte for byte.

Two shapes are offered:

* :class:`Metadata` / :func:`render`: the flat record
  ``{id, x, y, r, g, b, color_hex}``.
* :func:`token_document` / :func:`token_uri`: the common token-metadata JSON
  document (``name``, ``description``, ``attributes``), optionally packed into a
  ``data:`` URI.
"""

import base64
import json
from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from grid_registry.state import State
from grid_registry.types import CellID
from grid_registry.utils.color import color_hex
from grid_registry.utils.grid import to_coords
from grid_registry.utils.ledger import get_color, owner_of

TOKEN_NAME_PREFIX = "Grid Box #"
TOKEN_DESCRIPTION = "One of 256 claimable cells on a 16x16 grid."
DATA_URI_PREFIX = "data:application/json;base64,"


@dataclass(frozen=True)
class Metadata:
    """Descriptive record of a claimed cell.

    Attributes:
        id: Cell id.
        x: Column (0-15).
        y: Row (0-15).
        r: Red channel.
        g: Green channel.
        b: Blue channel.
        color_hex: ``#RRGGBB``, uppercase.
    """

    id: CellID
    x: int
    y: int
    r: int
    g: int
    b: int
    color_hex: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def render(state: State, cell_id: CellID) -> Metadata:
    """Render the metadata record of a claimed cell.

    Raises:
        InvalidIdError: If ``cell_id`` is outside ``[1, 256]``.
        AttributeStoreDisabledError: If the registry runs without colors.
        NotFoundError: If the cell is unclaimed.
    """
    color = get_color(state, cell_id)
    pos = to_coords(cell_id)
    return Metadata(
        id=cell_id,
        x=pos.x,
        y=pos.y,
        r=color.r,
        g=color.g,
        b=color.b,
        color_hex=color_hex(color),
    )


def token_document(state: State, cell_id: CellID) -> Dict[str, Any]:
    """Token-metadata document for a claimed cell."""
    meta = render(state, cell_id)
    attributes: List[Dict[str, Any]] = [
        {"trait_type": "X", "value": meta.x},
        {"trait_type": "Y", "value": meta.y},
        {"trait_type": "Color", "value": meta.color_hex},
        {"trait_type": "Owner", "value": owner_of(state, cell_id)},
    ]
    return {
        "name": f"{TOKEN_NAME_PREFIX}{cell_id}",
        "description": TOKEN_DESCRIPTION,
        "attributes": attributes,
    }


def token_uri(state: State, cell_id: CellID) -> str:
    """``data:`` URI embedding :func:`token_document` as base64 JSON."""
    document = json.dumps(
        token_document(state, cell_id), sort_keys=True, separators=(",", ":")
    )
    return DATA_URI_PREFIX + base64.b64encode(document.encode("utf-8")).decode("ascii")
