import logging

import pytest

from grid_registry.components import Color, Position
from grid_registry.config import paid_ledger_profile
from grid_registry.exceptions import (
    AlreadyClaimedError,
    AttributeStoreDisabledError,
    ConfigurationError,
    InsufficientPaymentError,
    InvalidCoordError,
    InvalidIdError,
    InvalidStepError,
    NoFundsError,
    NotAdminError,
    NotFoundError,
    NotOwnerError,
    TransferFailedError,
)
from grid_registry.registry import GridRegistry
from tests.test_utils import ADMIN, ALICE, BOB, RecordingTransfer, make_paid_registry


def test_ownership_gate() -> None:
    registry = GridRegistry()
    registry.claim(5, ALICE)
    with pytest.raises(NotOwnerError):
        registry.set_color(5, BOB, 1, 2, 3)
    registry.set_color(5, ALICE, 1, 2, 3)
    assert registry.get_color(5) == Color(1, 2, 3)


def test_step_quantization() -> None:
    registry = GridRegistry()
    registry.claim(5, ALICE)
    registry.set_color_by_steps(5, ALICE, 15, 15, 15)
    assert registry.get_color(5) == Color(255, 255, 255)
    registry.set_color_by_steps(5, ALICE, 0, 0, 0)
    assert registry.get_color(5) == Color(0, 0, 0)
    with pytest.raises(InvalidStepError):
        registry.set_color_by_steps(5, ALICE, 16, 0, 0)
    assert registry.get_color(5) == Color(0, 0, 0)


def test_enumeration_consistency() -> None:
    registry = GridRegistry()
    for cell_id in (256, 1, 17):
        registry.claim(cell_id, ALICE)
    assert registry.list_claimed() == [1, 17, 256]
    assert registry.total_claimed() == 3
    unclaimed = registry.list_unclaimed()
    assert len(unclaimed) == 253
    assert 17 not in unclaimed and 2 in unclaimed


def test_metadata_after_claim() -> None:
    registry = GridRegistry()
    registry.claim(1, ALICE)
    assert registry.render(1).to_dict() == {
        "id": 1,
        "x": 0,
        "y": 0,
        "r": 255,
        "g": 255,
        "b": 255,
        "color_hex": "#FFFFFF",
    }


def test_render_unclaimed_cell_fails() -> None:
    registry = GridRegistry()
    with pytest.raises(NotFoundError):
        registry.render(9)
    with pytest.raises(NotFoundError):
        registry.get_color(9)


def test_reads_validate_ids() -> None:
    registry = GridRegistry()
    with pytest.raises(InvalidIdError):
        registry.is_claimed(0)
    with pytest.raises(InvalidCoordError):
        registry.to_id(16, 0)
    assert registry.to_coords(256) == Position(15, 15)
    assert registry.to_id(15, 15) == 256


def test_resubmitted_claim_fails_and_keeps_counter() -> None:
    registry = GridRegistry()
    registry.claim(8, ALICE)
    with pytest.raises(AlreadyClaimedError):
        registry.claim(8, ALICE)
    assert registry.total_claimed() == 1
    assert registry.owner_of(8) == ALICE
    assert registry.is_claimed(8)


def test_cells_owned_by() -> None:
    registry = GridRegistry()
    registry.claim(9, ALICE)
    registry.claim(3, BOB)
    registry.claim(2, ALICE)
    assert registry.cells_owned_by(ALICE) == [2, 9]
    assert registry.cells_owned_by(BOB) == [3]
    assert registry.cells_owned_by("carol") == []


def test_snapshot_is_isolated_from_later_writes() -> None:
    registry = GridRegistry()
    registry.claim(1, ALICE)
    snapshot = registry.snapshot()
    registry.claim(2, BOB)
    registry.set_color(1, ALICE, 0, 0, 0)
    assert snapshot.total_claimed == 1
    assert 2 not in snapshot.ownership
    assert snapshot.color[1] == Color(255, 255, 255)


def test_paid_profile_claim_and_withdraw() -> None:
    transfer = RecordingTransfer()
    registry = make_paid_registry(minimum_amount=10, transfer=transfer)
    with pytest.raises(InsufficientPaymentError):
        registry.claim(1, ALICE, payment=5)
    assert registry.total_claimed() == 0
    registry.claim(1, ALICE, payment=10)
    registry.claim(2, BOB, payment=15)
    assert registry.balance() == 25

    with pytest.raises(NotAdminError):
        registry.withdraw(ALICE)
    assert registry.withdraw(ADMIN) == 25
    assert registry.balance() == 0
    assert transfer.calls == [(ADMIN, 25)]
    with pytest.raises(NoFundsError):
        registry.withdraw(ADMIN)


def test_withdrawal_atomicity_on_transfer_failure() -> None:
    transfer = RecordingTransfer(fail=True)
    registry = make_paid_registry(minimum_amount=10, transfer=transfer)
    registry.claim(1, ALICE, payment=10)
    before = registry.balance()
    with pytest.raises(TransferFailedError):
        registry.withdraw(ADMIN)
    assert registry.balance() == before == 10

    transfer.fail = False
    assert registry.withdraw(ADMIN) == 10
    assert registry.balance() == 0


def test_withdraw_without_transfer_function() -> None:
    registry = GridRegistry(config=paid_ledger_profile(ADMIN, 1))
    registry.claim(1, ALICE, payment=1)
    with pytest.raises(NotAdminError):
        registry.withdraw(ALICE)
    with pytest.raises(ConfigurationError):
        registry.withdraw(ADMIN)
    assert registry.balance() == 1


def test_paid_profile_has_no_colors() -> None:
    registry = make_paid_registry(minimum_amount=1)
    registry.claim(1, ALICE, payment=1)
    with pytest.raises(AttributeStoreDisabledError):
        registry.set_color(1, ALICE, 1, 2, 3)
    with pytest.raises(AttributeStoreDisabledError):
        registry.render(1)
    assert registry.list_claimed() == [1]


def test_rejections_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    registry = GridRegistry()
    registry.claim(4, ALICE)
    with caplog.at_level(logging.WARNING, logger="grid_registry.registry"):
        with pytest.raises(AlreadyClaimedError):
            registry.claim(4, BOB)
    assert any("rejected" in record.getMessage() for record in caplog.records)


def test_token_uri_embeds_document() -> None:
    registry = GridRegistry()
    registry.claim(18, ALICE)
    assert registry.token_uri(18).startswith("data:application/json;base64,")
    assert registry.token_document(18)["name"] == "Grid Box #18"


def test_withdraw_by_non_admin_on_default_registry() -> None:
    registry = GridRegistry()
    with pytest.raises(NotAdminError):
        registry.withdraw(ALICE)


def test_fractional_payment_never_reaches_balance() -> None:
    registry = make_paid_registry(minimum_amount=10)
    with pytest.raises(InsufficientPaymentError):
        registry.claim(1, ALICE, payment=10.5)  # type: ignore[arg-type]
    with pytest.raises(InsufficientPaymentError):
        GridRegistry().claim(1, ALICE, payment=None)  # type: ignore[arg-type]
    assert registry.balance() == 0
    assert not registry.is_claimed(1)
