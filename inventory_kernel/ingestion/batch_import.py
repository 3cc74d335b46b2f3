"""
Batch Import Records (``inventory_kernel.ingestion.batch_import``).

Responsibility
--------------
Turns plain external records ``{name, category, quantity, price, unit}`` into
typed ``ImportRecord`` values for ``InventoryStore.import_batch``. Batch
records never carry custom fields.

Legacy export files use the short keys ``n`` and ``cat``; they are accepted
as aliases for ``name`` and ``category``.

Failure modes
-------------
* Missing required keys  -> ``ImportRecordError`` (with the record index).
* Non-list YAML document  -> ``ValueError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterable, Mapping

from inventory_kernel.config import load_yaml_file
from inventory_kernel.domain.item import to_price
from inventory_kernel.exceptions import ImportRecordError
from inventory_kernel.logging_config import get_logger

logger = get_logger("ingestion.batch_import")

REQUIRED_KEYS = ("name", "category", "quantity", "price", "unit")

KEY_ALIASES = {
    "n": "name",
    "cat": "category",
}


@dataclass(frozen=True)
class ImportRecord:
    """One externally supplied item row."""

    name: str
    category: str
    quantity: int
    price: Decimal
    unit: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], index: int = 0) -> ImportRecord:
        normalized = {KEY_ALIASES.get(k, k): v for k, v in data.items()}
        missing = [k for k in REQUIRED_KEYS if k not in normalized]
        if missing:
            raise ImportRecordError(index, missing)
        return cls(
            name=str(normalized["name"]),
            category=str(normalized["category"]),
            quantity=int(normalized["quantity"]),
            price=to_price(normalized["price"]),
            unit=str(normalized["unit"]),
        )


def records_from_mappings(rows: Iterable[Mapping[str, Any]]) -> list[ImportRecord]:
    """Parse every row, failing on the first malformed one."""
    records = [ImportRecord.from_mapping(row, i) for i, row in enumerate(rows)]
    logger.debug("import_records_parsed", extra={"record_count": len(records)})
    return records


def load_import_file(path: Path | str) -> list[ImportRecord]:
    """Read a YAML list of item mappings."""
    data = load_yaml_file(Path(path)) or []
    if not isinstance(data, list):
        raise ValueError(
            f"Import file must contain a list of records, got {type(data).__name__}"
        )
    return records_from_mappings(data)
