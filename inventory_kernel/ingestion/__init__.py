"""Batch import sources feeding ``InventoryStore.import_batch``."""

from inventory_kernel.ingestion.batch_import import (
    ImportRecord,
    load_import_file,
    records_from_mappings,
)

__all__ = [
    "ImportRecord",
    "load_import_file",
    "records_from_mappings",
]
