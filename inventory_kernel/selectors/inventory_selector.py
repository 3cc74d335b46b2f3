"""
Module: inventory_kernel.selectors.inventory_selector
Responsibility: Read-only projections over an ``InventoryStore``: dashboard
    summary, search, inventory listing, CSV rows, transaction listing and
    item ages.  Nothing here is stored; every figure is recomputed from the
    store's current items at call time.
Architecture position: Kernel > Selectors.  Reads the store's public
    snapshot API only; never mutates.

Invariants enforced:
    - ``total_value`` is always sum(quantity x price) over active items.
    - CSV columns have a fixed order: Name, Category, Quantity, Price, Unit,
      AddedAt.  Custom fields are never exported.
    - Item age in days is floor((now - added_at) / 1 day).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from inventory_kernel.domain.clock import Clock
from inventory_kernel.domain.item import ItemSnapshot
from inventory_kernel.domain.transactions import Transaction

if TYPE_CHECKING:
    from inventory_kernel.services.inventory_store import InventoryStore

CSV_HEADER: tuple[str, ...] = (
    "Name",
    "Category",
    "Quantity",
    "Price",
    "Unit",
    "AddedAt",
)

_ONE_DAY = timedelta(days=1)


def _price_text(price: Decimal) -> str:
    """Shortest plain form of a price: ``2.0`` -> ``"2"``, ``1.50`` -> ``"1.5"``."""
    return f"{price.normalize():f}"


@dataclass(frozen=True)
class DashboardSummary:
    """Item count, total stock value and every category seen."""

    item_count: int
    total_value: Decimal
    categories: tuple[str, ...]


@dataclass(frozen=True)
class ItemAge:
    """Whole days since an item was added."""

    item_id: UUID
    name: str
    days: int


class InventorySelector:
    """Pure read side of the inventory."""

    def __init__(self, store: InventoryStore, clock: Clock | None = None):
        self._store = store
        self._clock = clock or store.clock

    def dashboard_summary(self) -> DashboardSummary:
        items = self._store.items
        total = sum((item.line_value for item in items), Decimal("0"))
        return DashboardSummary(
            item_count=len(items),
            total_value=total,
            categories=self._store.categories,
        )

    def search(self, query: str) -> list[ItemSnapshot]:
        """
        Case-insensitive substring match on name, category or price.

        Prices match in their shortest plain form, so ``2.0`` is searched
        as ``"2"``.
        """
        needle = query.lower()
        return [
            item
            for item in self._store.items
            if any(
                needle in str(value).lower()
                for value in (item.name, item.category, _price_text(item.price))
            )
        ]

    def list_inventory(self) -> list[ItemSnapshot]:
        return list(self._store.items)

    def export_csv(self) -> list[tuple]:
        """Header row followed by one row per item, in column order."""
        rows: list[tuple] = [CSV_HEADER]
        for item in self._store.items:
            rows.append((
                item.name,
                item.category,
                item.quantity,
                item.price,
                item.unit,
                item.added_at.isoformat(),
            ))
        return rows

    def list_transactions(self) -> list[Transaction]:
        return list(self._store.transactions)

    def item_ages(self, as_of: datetime | None = None) -> list[ItemAge]:
        now = as_of or self._clock.now()
        return [
            ItemAge(
                item_id=item.item_id,
                name=item.name,
                days=(now - item.added_at) // _ONE_DAY,
            )
            for item in self._store.items
        ]
