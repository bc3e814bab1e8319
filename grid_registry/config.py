"""Registry configuration and deployment profiles.

A registry runs in one of two observed profiles:

* ``free_color_profile``: claims are free and every claimed cell carries a
  mutable color (white on claim).
* ``paid_ledger_profile``: claims require a minimum payment, accumulated into
  a balance the administrator may withdraw; no attribute store.

Fee gating and the attribute store are independent switches, so mixed
configurations are also valid.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from grid_registry.exceptions import ConfigurationError
from grid_registry.types import MAX_CHANNEL, RGB, WHITE, CallerID


@dataclass(frozen=True)
class RegistryConfig:
    """Immutable registry settings.

    Attributes:
        admin: Identity allowed to withdraw the accumulated balance.
        fee_required: If True, ``claim`` requires ``payment >= minimum_amount``.
        minimum_amount: Minimum claim payment when fee gating is enabled.
        attributes_enabled: If False, cells carry no color at all.
        default_color: Color assigned to a cell when it is claimed.
    """

    admin: Optional[CallerID] = None
    fee_required: bool = False
    minimum_amount: int = 0
    attributes_enabled: bool = True
    default_color: RGB = field(default=WHITE)

    def __post_init__(self) -> None:
        if isinstance(self.minimum_amount, bool) or not isinstance(
            self.minimum_amount, int
        ):
            raise ConfigurationError(
                f"minimum_amount must be an integer, got {self.minimum_amount!r}"
            )
        if self.minimum_amount < 0:
            raise ConfigurationError(
                f"minimum_amount must be non-negative, got {self.minimum_amount}"
            )
        if self.fee_required and self.admin is None:
            raise ConfigurationError("fee_required needs an admin to withdraw funds")
        try:
            color = tuple(self.default_color)
        except TypeError as exc:
            raise ConfigurationError(
                f"Invalid default_color: {self.default_color!r}"
            ) from exc
        if len(color) != 3 or not all(
            isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= MAX_CHANNEL
            for c in color
        ):
            raise ConfigurationError(f"Invalid default_color: {self.default_color!r}")
        # Normalize lists coming from JSON into a hashable tuple
        object.__setattr__(self, "default_color", color)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "admin": self.admin,
            "fee_required": self.fee_required,
            "minimum_amount": self.minimum_amount,
            "attributes_enabled": self.attributes_enabled,
            "default_color": list(self.default_color),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RegistryConfig":
        """Create from dictionary, rejecting unknown keys."""
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")
        kwargs = dict(data)
        if "default_color" in kwargs:
            kwargs["default_color"] = tuple(kwargs["default_color"])
        return cls(**kwargs)

    @classmethod
    def from_json_file(cls, file_path: str) -> "RegistryConfig":
        """Load configuration from JSON file."""
        with open(file_path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    def save_to_json_file(self, file_path: str) -> None:
        """Save configuration to JSON file."""
        with open(file_path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)


def free_color_profile(admin: Optional[CallerID] = None) -> RegistryConfig:
    """Free claims with a white default color per claimed cell."""
    return RegistryConfig(admin=admin, fee_required=False, attributes_enabled=True)


def paid_ledger_profile(admin: CallerID, minimum_amount: int) -> RegistryConfig:
    """Fee-gated claims, no attribute store."""
    return RegistryConfig(
        admin=admin,
        fee_required=True,
        minimum_amount=minimum_amount,
        attributes_enabled=False,
    )
