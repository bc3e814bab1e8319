import base64
import json

import pytest

from grid_registry.exceptions import InvalidIdError, NotFoundError
from grid_registry.metadata import DATA_URI_PREFIX, Metadata, render, token_document, token_uri
from grid_registry.state import genesis_state
from grid_registry.systems.color import color_system
from tests.test_utils import ALICE, make_claimed_state


def test_render_default_color() -> None:
    state = make_claimed_state([(1, ALICE)])
    assert render(state, 1) == Metadata(
        id=1, x=0, y=0, r=255, g=255, b=255, color_hex="#FFFFFF"
    )


def test_render_reflects_color_and_coordinates() -> None:
    state = make_claimed_state([(35, ALICE)])
    state = color_system(state, 35, ALICE, 10, 171, 0)
    meta = render(state, 35)
    assert (meta.x, meta.y) == (2, 2)
    assert meta.color_hex == "#0AAB00"


def test_render_is_deterministic() -> None:
    state = make_claimed_state([(200, ALICE)])
    assert render(state, 200) == render(state, 200)
    assert token_uri(state, 200) == token_uri(state, 200)


def test_render_unclaimed_and_invalid() -> None:
    with pytest.raises(NotFoundError):
        render(genesis_state(), 1)
    with pytest.raises(InvalidIdError):
        render(genesis_state(), 0)


def test_token_document_attributes() -> None:
    state = make_claimed_state([(17, ALICE)])
    document = token_document(state, 17)
    assert document["name"] == "Grid Box #17"
    traits = {a["trait_type"]: a["value"] for a in document["attributes"]}
    assert traits == {"X": 0, "Y": 1, "Color": "#FFFFFF", "Owner": ALICE}


def test_token_uri_decodes_to_document() -> None:
    state = make_claimed_state([(17, ALICE)])
    uri = token_uri(state, 17)
    assert uri.startswith(DATA_URI_PREFIX)
    decoded = json.loads(base64.b64decode(uri[len(DATA_URI_PREFIX):]))
    assert decoded == token_document(state, 17)
