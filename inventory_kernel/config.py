"""
Inventory Configuration (``inventory_kernel.config``).

Responsibility
--------------
Defines the settings the kernel and its reporting collaborators read, with
sensible defaults, and loads overrides from a YAML file.

Failure modes
-------------
* Invalid setting values  -> ``ValueError`` at construction.
* Unknown keys in ``from_dict``  -> ``ValueError``.
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Self

import yaml

from inventory_kernel.domain.alerts import DEFAULT_LOW_STOCK_THRESHOLD
from inventory_kernel.logging_config import get_logger

logger = get_logger("config")


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class InventoryConfig:
    """
    Configuration schema for the inventory kernel.

    Override at instantiation:

        config = InventoryConfig(low_stock_threshold=5, currency_symbol="EUR ")
    """

    # Alerts
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD

    # Display (read by reporting sinks, never by the store)
    currency_symbol: str = "$"
    display_decimal_places: int = 2

    # Logging
    log_level: str = "INFO"

    def __post_init__(self):
        if self.low_stock_threshold < 0:
            raise ValueError("low_stock_threshold cannot be negative")
        if self.display_decimal_places < 0:
            raise ValueError("display_decimal_places cannot be negative")

        self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(VALID_LOG_LEVELS)}, "
                f"got '{self.log_level}'"
            )

        logger.info(
            "inventory_config_initialized",
            extra={
                "low_stock_threshold": self.low_stock_threshold,
                "currency_symbol": self.currency_symbol,
                "display_decimal_places": self.display_decimal_places,
                "log_level": self.log_level,
            },
        )

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with the standard defaults."""
        logger.info("inventory_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create config from a dictionary (e.g., parsed from YAML)."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown inventory config keys: {unknown}")
        logger.info(
            "inventory_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)


def load_yaml_file(path: Path) -> Any:
    """
    Load a single YAML file and return its parsed contents.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f)


def load_inventory_config(path: Path | str) -> InventoryConfig:
    """
    Load an ``InventoryConfig`` from a YAML mapping.

    An empty file yields the defaults.

    Raises:
        ValueError: if the document is not a mapping or has unknown keys.
    """
    data = load_yaml_file(Path(path)) or {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Inventory config must be a mapping, got {type(data).__name__}"
        )
    return InventoryConfig.from_dict(data)
