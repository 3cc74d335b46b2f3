"""
Inventory Store (``inventory_kernel.services.inventory_store``).

Responsibility
--------------
Owns the item collection, transaction log, category set and custom-field
registry, and exposes the operations that move an item through its
lifecycle: add -> edit / sell / restock -> remove.

Architecture
------------
Layer: **Services** -- stateful orchestration over the pure domain layer.
The store never formats or prints anything; projections live in
``inventory_kernel.selectors`` and presentation in ``services.reporting``.

Invariants
----------
- Atomicity: each operation either applies every sub-step (mutate, log,
  evaluate alert) or, when a guard rejects it, none of them.
- Quantity never changes without a transaction appended in the same call.
- Each successful state change performs exactly one low-stock evaluation on
  the affected item (post-change state; pre-removal state for ``remove``).
- Items are addressed by their stable ``item_id``. ``find_item_id`` and
  ``item_id_at`` resolve names and positions for callers that only have
  those; name lookups return the first match in collection order.

Failure Modes
-------------
Business rejections never raise. They come back as a ``StoreResult`` with a
failure ``StoreStatus`` and the matching typed exception in ``error``:

- ``ITEM_NOT_FOUND``      -- unknown ``item_id``.
- ``INDEX_OUT_OF_RANGE``  -- ``edit_at`` outside the collection.
- ``INSUFFICIENT_STOCK``  -- sale larger than quantity on hand.
- ``DUPLICATE_CUSTOM_FIELD`` -- already registered (counts as success).

Usage::

    store = InventoryStore(clock=SystemClock())
    added = store.add("Apple", "Fruit", 10, Decimal("1.5"), "kg")
    result = store.sell(added.item_id, 2)
    if result.alert:
        notify(result.alert.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping
from uuid import UUID, uuid4

from inventory_kernel.config import InventoryConfig
from inventory_kernel.domain.alerts import LowStockAlert, LowStockEvaluator
from inventory_kernel.domain.categories import CategorySet
from inventory_kernel.domain.clock import Clock, SystemClock
from inventory_kernel.domain.custom_fields import CustomFieldRegistry
from inventory_kernel.domain.item import Item, ItemSnapshot, to_price
from inventory_kernel.domain.transactions import (
    AddTransaction,
    DeleteTransaction,
    EditTransaction,
    EditValues,
    RestockTransaction,
    SaleTransaction,
    Transaction,
    TransactionLog,
)
from inventory_kernel.exceptions import (
    DuplicateCustomFieldError,
    IndexOutOfRangeError,
    InsufficientStockError,
    InventoryKernelError,
    ItemNotFoundError,
)
from inventory_kernel.ingestion.batch_import import ImportRecord
from inventory_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.inventory_store")


class StoreStatus(str, Enum):
    """Outcome of a store operation."""

    ADDED = "added"
    EDITED = "edited"
    REMOVED = "removed"
    SOLD = "sold"
    RESTOCKED = "restocked"
    REGISTERED = "registered"
    UPDATED = "updated"
    ITEM_NOT_FOUND = "item_not_found"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    INSUFFICIENT_STOCK = "insufficient_stock"
    DUPLICATE_CUSTOM_FIELD = "duplicate_custom_field"


_SUCCESS_STATUSES = frozenset({
    StoreStatus.ADDED,
    StoreStatus.EDITED,
    StoreStatus.REMOVED,
    StoreStatus.SOLD,
    StoreStatus.RESTOCKED,
    StoreStatus.REGISTERED,
    StoreStatus.UPDATED,
    StoreStatus.DUPLICATE_CUSTOM_FIELD,
})


@dataclass(frozen=True)
class StoreResult:
    """Result of a store operation."""

    status: StoreStatus
    item_id: UUID | None = None
    item: ItemSnapshot | None = None
    transaction: Transaction | None = None
    alert: LowStockAlert | None = None
    message: str | None = None
    error: InventoryKernelError | None = None

    @property
    def is_success(self) -> bool:
        return self.status in _SUCCESS_STATUSES

    def raise_for_status(self) -> None:
        """Raise the carried error if the operation was rejected."""
        if not self.is_success and self.error is not None:
            raise self.error


class InventoryStore:
    """
    Single owner of all inventory state.

    Contract
    --------
    One instance per session or test; there is no module-level state.
    Operations are synchronous and must be serialized by the caller if the
    instance is shared between threads.

    Non-goals
    ---------
    - No persistence, undo, or range validation of quantities and prices.
    - No dashboard refresh: callers (see ``InventoryOrchestrator``) decide
      when to project.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        config: InventoryConfig | None = None,
        id_factory: Callable[[], UUID] = uuid4,
    ):
        self._clock = clock or SystemClock()
        self._config = config or InventoryConfig.with_defaults()
        self._new_id = id_factory

        self._items: list[Item] = []
        self._log = TransactionLog()
        self._categories = CategorySet()
        self._custom_fields = CustomFieldRegistry()
        self._evaluator = LowStockEvaluator(self._config.low_stock_threshold)

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def items(self) -> tuple[ItemSnapshot, ...]:
        return tuple(item.snapshot() for item in self._items)

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return self._log.all()

    @property
    def categories(self) -> tuple[str, ...]:
        return self._categories.all()

    @property
    def custom_fields(self) -> dict[str, Any]:
        return self._custom_fields.as_dict()

    def __len__(self) -> int:
        return len(self._items)

    def find_item_id(self, name: str) -> UUID | None:
        """Id of the first item named ``name``, or None."""
        for item in self._items:
            if item.name == name:
                return item.item_id
        return None

    def item_id_at(self, index: int) -> UUID | None:
        """Id of the item at ``index`` in collection order, or None."""
        if 0 <= index < len(self._items):
            return self._items[index].item_id
        return None

    def get_item(self, item_id: UUID) -> ItemSnapshot:
        """
        Snapshot of an active item.

        Raises:
            ItemNotFoundError: if no active item has ``item_id``.
        """
        located = self._locate(item_id)
        if located is None:
            raise ItemNotFoundError(str(item_id))
        return located[1].snapshot()

    # =========================================================================
    # Lifecycle operations
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
        """
        Create an item, register its category and log an ``Add``.

        Always succeeds.
        """
        now = self._clock.now()
        item = Item(
            item_id=self._new_id(),
            name=name,
            category=category,
            quantity=quantity,
            price=to_price(price),
            unit=unit,
            added_at=now,
            custom_fields=dict(custom_fields or {}),
        )
        with LogContext.bind(operation="add", item_id=str(item.item_id)):
            record = self._build(
                AddTransaction, item.item_id, now, item=item.snapshot(),
            )
            self._items.append(item)
            self._log.append(record)
            new_category = self._categories.ensure(category)
            alert = self._evaluator.evaluate(item)

            self._log_applied(
                "item_added",
                record,
                item_name=name,
                category=category,
                quantity=quantity,
                price=item.price,
                new_category=new_category,
            )
        return StoreResult(
            status=StoreStatus.ADDED,
            item_id=item.item_id,
            item=item.snapshot(),
            transaction=record,
            alert=alert,
            message=f"Added {quantity} {unit} of {name}",
        )

    def edit(
        self,
        item_id: UUID | None,
        name: str,
        category: str,
        quantity: int,
        price: Decimal | int | float | str,
        unit: str,
        custom_fields: Mapping[str, Any] | None = None,
    ) -> StoreResult:
        """
        Replace every editable field of an item and log an ``Edit``.

        Full replacement: custom fields become exactly ``custom_fields``
        (empty when omitted). ``item_id`` and ``added_at`` are preserved.
        The new category is not added to the category set.
        """
        with LogContext.bind(operation="edit", item_id=str(item_id)):
            located = self._locate(item_id)
            if located is None:
                return self._not_found(item_id, "edit")
            index, old_item = located

            new_fields = dict(custom_fields or {})
            values = EditValues(
                name=name,
                category=category,
                quantity=quantity,
                price=to_price(price),
                unit=unit,
                custom_fields=MappingProxyType(dict(new_fields)),
            )
            replacement = Item(
                item_id=old_item.item_id,
                name=name,
                category=category,
                quantity=quantity,
                price=values.price,
                unit=unit,
                added_at=old_item.added_at,
                custom_fields=new_fields,
            )
            record = self._build(
                EditTransaction,
                old_item.item_id,
                self._clock.now(),
                old=old_item.snapshot(),
                new=values,
            )
            self._items[index] = replacement
            self._log.append(record)
            alert = self._evaluator.evaluate(replacement)

            self._log_applied(
                "item_edited",
                record,
                index=index,
                old_quantity=old_item.quantity,
                quantity=quantity,
            )
        return StoreResult(
            status=StoreStatus.EDITED,
            item_id=replacement.item_id,
            item=replacement.snapshot(),
            transaction=record,
            alert=alert,
            message=f"Edited {name}",
        )

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
        """
        Positional variant of ``edit`` for callers that address items by
        their place in the collection.
        """
        item_id = self.item_id_at(index)
        if item_id is None:
            error = IndexOutOfRangeError(index, len(self._items))
            logger.info(
                "edit_rejected_index_out_of_range",
                extra={"index": index, "size": len(self._items)},
            )
            return StoreResult(
                status=StoreStatus.INDEX_OUT_OF_RANGE,
                message=str(error),
                error=error,
            )
        return self.edit(
            item_id, name, category, quantity, price, unit, custom_fields,
        )

    def remove(self, item_id: UUID | None) -> StoreResult:
        """
        Delete an item and log a ``Delete`` carrying its last snapshot.

        The low-stock check runs on the item as it was just before removal.
        Its category stays in the category set.
        """
        with LogContext.bind(operation="remove", item_id=str(item_id)):
            located = self._locate(item_id)
            if located is None:
                return self._not_found(item_id, "remove")
            index, item = located

            snapshot = item.snapshot()
            alert = self._evaluator.evaluate(snapshot)
            record = self._build(
                DeleteTransaction, item.item_id, self._clock.now(), item=snapshot,
            )
            self._log.append(record)
            del self._items[index]

            self._log_applied("item_removed", record, item_name=item.name)
        return StoreResult(
            status=StoreStatus.REMOVED,
            item_id=item.item_id,
            item=snapshot,
            transaction=record,
            alert=alert,
            message=f"Removed {item.name}",
        )

    def sell(self, item_id: UUID | None, quantity: int) -> StoreResult:
        """Decrement stock if enough is on hand and log a ``Sale``."""
        with LogContext.bind(operation="sell", item_id=str(item_id)):
            located = self._locate(item_id)
            if located is None:
                return self._not_found(item_id, "sell")
            _, item = located

            if item.quantity < quantity:
                error = InsufficientStockError(
                    str(item.item_id), item.name, quantity, item.quantity,
                )
                logger.info(
                    "sale_rejected_insufficient_stock",
                    extra={"requested": quantity, "available": item.quantity},
                )
                return StoreResult(
                    status=StoreStatus.INSUFFICIENT_STOCK,
                    item_id=item.item_id,
                    item=item.snapshot(),
                    message=str(error),
                    error=error,
                )

            record = self._build(
                SaleTransaction,
                item.item_id,
                self._clock.now(),
                item_name=item.name,
                unit=item.unit,
                quantity=quantity,
                quantity_after=item.quantity - quantity,
            )
            item.quantity -= quantity
            self._log.append(record)
            alert = self._evaluator.evaluate(item)

            self._log_applied(
                "item_sold",
                record,
                quantity_sold=quantity,
                quantity_after=item.quantity,
            )
        return StoreResult(
            status=StoreStatus.SOLD,
            item_id=item.item_id,
            item=item.snapshot(),
            transaction=record,
            alert=alert,
            message=f"Sold {quantity} {item.unit} of {item.name}",
        )

    def restock(self, item_id: UUID | None, quantity: int) -> StoreResult:
        """Increment stock unconditionally and log a ``Restock``."""
        with LogContext.bind(operation="restock", item_id=str(item_id)):
            located = self._locate(item_id)
            if located is None:
                return self._not_found(item_id, "restock")
            _, item = located

            record = self._build(
                RestockTransaction,
                item.item_id,
                self._clock.now(),
                item_name=item.name,
                unit=item.unit,
                quantity=quantity,
                quantity_after=item.quantity + quantity,
            )
            item.quantity += quantity
            self._log.append(record)
            alert = self._evaluator.evaluate(item)

            self._log_applied(
                "item_restocked",
                record,
                quantity_added=quantity,
                quantity_after=item.quantity,
            )
        return StoreResult(
            status=StoreStatus.RESTOCKED,
            item_id=item.item_id,
            item=item.snapshot(),
            transaction=record,
            alert=alert,
            message=f"Restocked {quantity} {item.unit} of {item.name}",
        )

    def import_batch(self, records: Iterable[ImportRecord]) -> list[StoreResult]:
        """``add`` each record in order. Batch records carry no custom fields."""
        results = [
            self.add(r.name, r.category, r.quantity, r.price, r.unit)
            for r in records
        ]
        logger.info("batch_imported", extra={"record_count": len(results)})
        return results

    # =========================================================================
    # Custom fields
    # =========================================================================

    def register_custom_field(self, name: str) -> StoreResult:
        """Declare a store-wide custom field. Re-declaring is a no-op."""
        if not self._custom_fields.register(name):
            error = DuplicateCustomFieldError(name)
            logger.debug("custom_field_already_registered", extra={"field_name": name})
            return StoreResult(
                status=StoreStatus.DUPLICATE_CUSTOM_FIELD,
                message=str(error),
                error=error,
            )
        logger.info("custom_field_registered", extra={"field_name": name})
        return StoreResult(
            status=StoreStatus.REGISTERED,
            message=f"Registered custom field {name}",
        )

    def set_item_custom_field(
        self,
        item_id: UUID | None,
        field_name: str,
        value: Any,
    ) -> StoreResult:
        """
        Set one custom-field value on an item.

        The registry is not consulted; undeclared fields are allowed. No
        quantity changes, so no transaction is logged and no alert evaluated.
        """
        with LogContext.bind(operation="set_custom_field", item_id=str(item_id)):
            located = self._locate(item_id)
            if located is None:
                return self._not_found(item_id, "set_custom_field")
            _, item = located

            item.custom_fields[field_name] = value
            logger.info(
                "item_custom_field_set",
                extra={
                    "field_name": field_name,
                    "registered": field_name in self._custom_fields,
                },
            )
        return StoreResult(
            status=StoreStatus.UPDATED,
            item_id=item.item_id,
            item=item.snapshot(),
            message=f"Set {field_name} on {item.name}",
        )

    # =========================================================================
    # Internals
    # =========================================================================

    def _locate(self, item_id: UUID | None) -> tuple[int, Item] | None:
        if item_id is None:
            return None
        for index, item in enumerate(self._items):
            if item.item_id == item_id:
                return index, item
        return None

    def _build(
        self,
        record_type: type[Transaction],
        item_id: UUID,
        occurred_at: datetime,
        **payload: Any,
    ) -> Any:
        return record_type(
            transaction_id=self._new_id(),
            sequence=self._log.next_sequence,
            item_id=item_id,
            occurred_at=occurred_at,
            **payload,
        )

    def _log_applied(self, event: str, record: Transaction, **fields: Any) -> None:
        with LogContext.bind(transaction_id=str(record.transaction_id)):
            logger.info(event, extra={"sequence": record.sequence, **fields})

    def _not_found(self, item_id: UUID | None, operation: str) -> StoreResult:
        error = ItemNotFoundError(str(item_id))
        logger.info(
            "operation_rejected_item_not_found",
            extra={"rejected_operation": operation},
        )
        return StoreResult(
            status=StoreStatus.ITEM_NOT_FOUND,
            item_id=item_id,
            message=str(error),
            error=error,
        )
