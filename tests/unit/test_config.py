import json
from pathlib import Path

import pytest

from grid_registry.config import RegistryConfig, free_color_profile, paid_ledger_profile
from grid_registry.exceptions import ConfigurationError


def test_defaults_are_free_claims_with_white() -> None:
    config = RegistryConfig()
    assert config.fee_required is False
    assert config.minimum_amount == 0
    assert config.attributes_enabled is True
    assert config.default_color == (255, 255, 255)
    assert config.admin is None


def test_profiles() -> None:
    free = free_color_profile()
    assert not free.fee_required and free.attributes_enabled
    paid = paid_ledger_profile("admin", 5)
    assert paid.fee_required and not paid.attributes_enabled
    assert paid.minimum_amount == 5
    assert paid.admin == "admin"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"minimum_amount": -1},
        {"minimum_amount": 1.5},
        {"fee_required": True},
        {"default_color": (256, 0, 0)},
        {"default_color": (0, 0)},
        {"default_color": 7},
    ],
)
def test_invalid_configs_raise(kwargs: dict) -> None:
    with pytest.raises(ConfigurationError):
        RegistryConfig(**kwargs)


def test_dict_round_trip() -> None:
    config = RegistryConfig(admin="root", fee_required=True, minimum_amount=3)
    assert RegistryConfig.from_dict(config.to_dict()) == config


def test_from_dict_rejects_unknown_keys() -> None:
    with pytest.raises(ConfigurationError):
        RegistryConfig.from_dict({"admin": "root", "grid_size": 3})


def test_json_file_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "registry.json"
    config = RegistryConfig(admin="root", default_color=(0, 17, 34))
    config.save_to_json_file(str(path))
    assert json.loads(path.read_text())["default_color"] == [0, 17, 34]
    assert RegistryConfig.from_json_file(str(path)) == config
