"""
Typed Exception Hierarchy for the Inventory Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers must be able to tell "sold" from "insufficient stock" from "not
found" without parsing message strings:
  1. Every error has a TYPED exception class (catch by type, not message)
  2. Every exception has a CODE attribute (machine-readable, API-safe)
  3. Exceptions carry structured DATA (not just a message string)

Store operations do not raise for business rejections. They return a
``StoreResult`` whose ``error`` attribute holds one of these instances, so
the same type and code are available whether the caller inspects the result
or calls ``result.raise_for_status()``.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    InventoryKernelError (base)
    |
    +-- ItemError
    |   +-- ItemNotFoundError
    |   +-- IndexOutOfRangeError
    |
    +-- StockError
    |   +-- InsufficientStockError
    |
    +-- CustomFieldError
    |   +-- DuplicateCustomFieldError
    |
    +-- TransactionLogError
    |   +-- TransactionSequenceError
    |
    +-- ImportRecordError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Item            | ITEM_NOT_FOUND              | No item for the given id / name
                | INDEX_OUT_OF_RANGE          | Positional edit outside the collection
----------------|-----------------------------|-----------------------------------------
Stock           | INSUFFICIENT_STOCK          | Sale quantity exceeds quantity on hand
----------------|-----------------------------|-----------------------------------------
Custom field    | DUPLICATE_CUSTOM_FIELD      | Field already registered (harmless)
----------------|-----------------------------|-----------------------------------------
Transaction log | TRANSACTION_SEQUENCE_ERROR  | Record appended out of sequence
----------------|-----------------------------|-----------------------------------------
Import          | IMPORT_RECORD_ERROR         | Batch record missing required keys
"""


class InventoryKernelError(Exception):
    """
    Base exception for all inventory kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "INVENTORY_KERNEL_ERROR"


# Item-related exceptions


class ItemError(InventoryKernelError):
    """Base exception for item lookup errors."""

    code: str = "ITEM_ERROR"


class ItemNotFoundError(ItemError):
    """No active item matches the given id or name."""

    code: str = "ITEM_NOT_FOUND"

    def __init__(self, item_ref: str):
        self.item_ref = item_ref
        super().__init__(f"Item not found: {item_ref}")


class IndexOutOfRangeError(ItemError):
    """Positional lookup outside the item collection."""

    code: str = "INDEX_OUT_OF_RANGE"

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(
            f"Item index {index} out of range for collection of size {size}"
        )


# Stock-related exceptions


class StockError(InventoryKernelError):
    """Base exception for stock-level errors."""

    code: str = "STOCK_ERROR"


class InsufficientStockError(StockError):
    """Requested sale quantity exceeds quantity on hand."""

    code: str = "INSUFFICIENT_STOCK"

    def __init__(
        self,
        item_id: str,
        item_name: str,
        requested: int,
        available: int,
    ):
        self.item_id = item_id
        self.item_name = item_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for {item_name}: "
            f"requested {requested}, available {available}"
        )


# Custom-field exceptions


class CustomFieldError(InventoryKernelError):
    """Base exception for custom-field registry errors."""

    code: str = "CUSTOM_FIELD_ERROR"


class DuplicateCustomFieldError(CustomFieldError):
    """
    Field is already registered.

    Registration is idempotent, so this is reported but never fatal.
    """

    code: str = "DUPLICATE_CUSTOM_FIELD"

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Custom field already registered: {field_name}")


# Transaction-log exceptions


class TransactionLogError(InventoryKernelError):
    """Base exception for transaction log errors."""

    code: str = "TRANSACTION_LOG_ERROR"


class TransactionSequenceError(TransactionLogError):
    """A record was appended with a sequence other than the next one."""

    code: str = "TRANSACTION_SEQUENCE_ERROR"

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Transaction sequence gap: expected {expected}, received {received}"
        )


# Ingestion exceptions


class ImportRecordError(InventoryKernelError):
    """A batch import record is missing required keys."""

    code: str = "IMPORT_RECORD_ERROR"

    def __init__(self, index: int, missing_keys: list[str]):
        self.index = index
        self.missing_keys = missing_keys
        super().__init__(
            f"Import record {index} missing keys: {', '.join(missing_keys)}"
        )
