"""
Low-stock alerts.

Responsibility:
    Decide whether an item's quantity is low and describe the alert.

Architecture position:
    Kernel > Domain -- pure policy, zero I/O. Alerts are returned to the
    caller and logged; they are never stored.

Invariants enforced:
    - Strict threshold: ``quantity < threshold`` is low, ``quantity ==
      threshold`` is not.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from inventory_kernel.domain.item import Item, ItemSnapshot
from inventory_kernel.logging_config import get_logger

logger = get_logger("domain.alerts")

DEFAULT_LOW_STOCK_THRESHOLD = 10


@dataclass(frozen=True)
class LowStockAlert:
    """An item whose quantity fell below the threshold."""

    item_id: UUID
    item_name: str
    quantity: int
    threshold: int

    @property
    def message(self) -> str:
        return (
            f"Item {self.item_name} is below {self.threshold} units! "
            f"Current quantity: {self.quantity}"
        )


class LowStockEvaluator:
    """Evaluates one item against a fixed low-stock threshold."""

    def __init__(self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD):
        self._threshold = threshold

    @property
    def threshold(self) -> int:
        return self._threshold

    def evaluate(self, item: Item | ItemSnapshot) -> LowStockAlert | None:
        if item.quantity >= self._threshold:
            return None

        alert = LowStockAlert(
            item_id=item.item_id,
            item_name=item.name,
            quantity=item.quantity,
            threshold=self._threshold,
        )
        logger.warning(
            "low_stock_alert",
            extra={
                "item_id": str(item.item_id),
                "item_name": item.name,
                "quantity": item.quantity,
                "threshold": self._threshold,
            },
        )
        return alert
