"""
Item -- Inventory item record and its immutable snapshot.

Responsibility:
    ``Item`` is the live record owned by ``InventoryStore``; ``ItemSnapshot``
    is the frozen copy handed to everything outside the store (transaction
    records, selectors, callers).

Architecture position:
    Kernel > Domain -- pure data, zero I/O.

Invariants enforced:
    - ``price`` is always a ``Decimal``; floats are converted through their
      string form so ``1.5`` becomes ``Decimal("1.5")`` and not its binary
      expansion.
    - A snapshot never aliases the live record's custom-field map.

Non-goals:
    - No range validation: negative prices and quantities are accepted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Mapping
from uuid import UUID


def to_price(value: Decimal | int | float | str) -> Decimal:
    """Convert a caller-supplied price to ``Decimal``."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


@dataclass
class Item:
    """
    A tracked inventory record.

    Contract: mutable, owned exclusively by one ``InventoryStore``.
    ``item_id`` and ``added_at`` never change after creation.
    """

    item_id: UUID
    name: str
    category: str
    quantity: int
    price: Decimal
    unit: str
    added_at: datetime
    custom_fields: dict[str, Any] = field(default_factory=dict)

    @property
    def line_value(self) -> Decimal:
        return self.quantity * self.price

    def snapshot(self) -> ItemSnapshot:
        """Return a frozen copy of the current state."""
        return ItemSnapshot(
            item_id=self.item_id,
            name=self.name,
            category=self.category,
            quantity=self.quantity,
            price=self.price,
            unit=self.unit,
            added_at=self.added_at,
            custom_fields=MappingProxyType(dict(self.custom_fields)),
        )


@dataclass(frozen=True)
class ItemSnapshot:
    """
    Point-in-time view of an item.

    Contract: immutable; ``custom_fields`` is a read-only mapping.
    """

    item_id: UUID
    name: str
    category: str
    quantity: int
    price: Decimal
    unit: str
    added_at: datetime
    custom_fields: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def line_value(self) -> Decimal:
        return self.quantity * self.price
