"""
Inventory Orchestrator (``inventory_kernel.services.orchestrator``).

Responsibility
--------------
Drives one store operation at a time on behalf of callers that think in
item names, then forwards what happened to a ``ReportSink``:

1. Resolve the item name to an ``item_id`` (first match). An unknown name
   is rejected here with ``ITEM_NOT_FOUND`` carrying the requested name.
2. Run the store operation. Batch imports run one ``add`` per record,
   each reported before the next is applied.
3. On success: confirmation (sales and restocks), the low-stock alert if
   any, then a fresh dashboard projection for mutating operations.
4. On rejection: ``sink.failure(result)`` and nothing else.

The store stays free of presentation; this is the only place where a
mutation is followed by a dashboard refresh.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, Mapping

from inventory_kernel.exceptions import ItemNotFoundError
from inventory_kernel.ingestion.batch_import import ImportRecord
from inventory_kernel.logging_config import get_logger
from inventory_kernel.selectors.inventory_selector import InventorySelector
from inventory_kernel.services.inventory_store import (
    InventoryStore,
    StoreResult,
    StoreStatus,
)
from inventory_kernel.services.reporting import ReportSink

logger = get_logger("services.orchestrator")

_CONFIRMED_STATUSES = frozenset({StoreStatus.SOLD, StoreStatus.RESTOCKED})


class InventoryOrchestrator:
    """Name-addressed facade over ``InventoryStore`` with reporting."""

    def __init__(
        self,
        store: InventoryStore,
        sink: ReportSink,
        selector: InventorySelector | None = None,
    ):
        self._store = store
        self._sink = sink
        self._selector = selector or InventorySelector(store)

    @property
    def store(self) -> InventoryStore:
        return self._store

    @property
    def selector(self) -> InventorySelector:
        return self._selector

    # =========================================================================
    # Mutations
    # =========================================================================

    def add(
        self,
        name: str,
        category: str,
        quantity: int,
        price: Decimal | int | float | str,
        unit: str,
        custom_fields: Mapping[str, Any] | None = None,
    ) -> StoreResult:
        result = self._store.add(name, category, quantity, price, unit, custom_fields)
        return self._report(result, refresh=True)

    def edit_at(
        self,
        index: int,
        name: str,
        category: str,
        quantity: int,
        price: Decimal | int | float | str,
        unit: str,
        custom_fields: Mapping[str, Any] | None = None,
    ) -> StoreResult:
        result = self._store.edit_at(
            index, name, category, quantity, price, unit, custom_fields,
        )
        return self._report(result, refresh=True)

    def remove(self, name: str) -> StoreResult:
        item_id = self._store.find_item_id(name)
        if item_id is None:
            return self._report(self._unknown_name(name, "remove"), refresh=False)
        return self._report(self._store.remove(item_id), refresh=True)

    def sell(self, name: str, quantity: int) -> StoreResult:
        item_id = self._store.find_item_id(name)
        if item_id is None:
            return self._report(self._unknown_name(name, "sell"), refresh=False)
        return self._report(self._store.sell(item_id, quantity), refresh=True)

    def restock(self, name: str, quantity: int) -> StoreResult:
        item_id = self._store.find_item_id(name)
        if item_id is None:
            return self._report(self._unknown_name(name, "restock"), refresh=False)
        return self._report(self._store.restock(item_id, quantity), refresh=True)

    def import_batch(
        self,
        records: Iterable[ImportRecord | Mapping[str, Any]],
    ) -> list[StoreResult]:
        """
        Add every record in turn, reporting each addition like a single
        ``add`` before the next record is applied.

        All records are parsed before any is added, so a malformed record
        raises ``ImportRecordError`` with the store untouched.
        """
        parsed = [
            r if isinstance(r, ImportRecord) else ImportRecord.from_mapping(r, index)
            for index, r in enumerate(records)
        ]
        results = [
            self._report(
                self._store.add(r.name, r.category, r.quantity, r.price, r.unit),
                refresh=True,
            )
            for r in parsed
        ]
        logger.info("orchestrated_batch_import", extra={"record_count": len(results)})
        return results

    def register_custom_field(self, name: str) -> StoreResult:
        return self._report(self._store.register_custom_field(name), refresh=False)

    def set_custom_field(self, item_name: str, field_name: str, value: Any) -> StoreResult:
        item_id = self._store.find_item_id(item_name)
        if item_id is None:
            result = self._unknown_name(item_name, "set_custom_field")
        else:
            result = self._store.set_item_custom_field(item_id, field_name, value)
        return self._report(result, refresh=False)

    # =========================================================================
    # Views
    # =========================================================================

    def search(self, query: str) -> None:
        self._sink.search_results(query, self._selector.search(query))

    def view_inventory(self) -> None:
        self._sink.inventory(self._selector.list_inventory())

    def export_csv(self) -> None:
        self._sink.csv(self._selector.export_csv())

    def view_transactions(self) -> None:
        self._sink.transactions(self._selector.list_transactions())

    def view_ages(self) -> None:
        self._sink.ages(self._selector.item_ages())

    def dashboard(self) -> None:
        self._sink.dashboard(self._selector.dashboard_summary())

    # =========================================================================
    # Internals
    # =========================================================================

    def _report(self, result: StoreResult, *, refresh: bool) -> StoreResult:
        if not result.is_success:
            self._sink.failure(result)
            return result

        if result.status in _CONFIRMED_STATUSES:
            self._sink.confirmation(result)
        if result.alert is not None:
            self._sink.alert(result.alert)
        if refresh:
            self.dashboard()
        return result

    def _unknown_name(self, name: str, operation: str) -> StoreResult:
        error = ItemNotFoundError(name)
        logger.info(
            "operation_rejected_unknown_name",
            extra={"item_name": name, "rejected_operation": operation},
        )
        return StoreResult(
            status=StoreStatus.ITEM_NOT_FOUND,
            message=str(error),
            error=error,
        )
