"""Stateful services: the inventory store, reporting sinks and orchestrator."""

from inventory_kernel.services.inventory_store import (
    InventoryStore,
    StoreResult,
    StoreStatus,
)
from inventory_kernel.services.orchestrator import InventoryOrchestrator
from inventory_kernel.services.reporting import ReportSink, TextReportSink

__all__ = [
    "InventoryStore",
    "StoreResult",
    "StoreStatus",
    "InventoryOrchestrator",
    "ReportSink",
    "TextReportSink",
]
