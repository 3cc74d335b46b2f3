"""Read-side projections over the inventory store."""

from inventory_kernel.selectors.inventory_selector import (
    CSV_HEADER,
    DashboardSummary,
    InventorySelector,
    ItemAge,
)

__all__ = [
    "CSV_HEADER",
    "DashboardSummary",
    "InventorySelector",
    "ItemAge",
]
