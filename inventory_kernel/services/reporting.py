"""
Reporting Sinks (``inventory_kernel.services.reporting``).

Responsibility
--------------
The presentation boundary. The kernel hands structured data (summaries,
alerts, results, rows) to a ``ReportSink``; the sink decides how it looks.
``TextReportSink`` renders plain text to a stream: currency with the
configured symbol and decimal places, comma-joined categories, CSV through
the ``csv`` module, and item ages as ``<name>: <n>d``.

Architecture
------------
Layer: **Services** -- outer boundary. Nothing in ``domain`` or
``selectors`` imports from here.
"""

from __future__ import annotations

import csv
import io
import sys
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol, Sequence, TextIO

from inventory_kernel.config import InventoryConfig
from inventory_kernel.domain.alerts import LowStockAlert
from inventory_kernel.domain.item import ItemSnapshot
from inventory_kernel.domain.transactions import (
    AddTransaction,
    DeleteTransaction,
    EditTransaction,
    RestockTransaction,
    SaleTransaction,
    Transaction,
)
from inventory_kernel.selectors.inventory_selector import DashboardSummary, ItemAge
from inventory_kernel.services.inventory_store import StoreResult


class ReportSink(Protocol):
    """Receives structured output from the orchestrator."""

    def dashboard(self, summary: DashboardSummary) -> None: ...

    def alert(self, alert: LowStockAlert) -> None: ...

    def confirmation(self, result: StoreResult) -> None: ...

    def failure(self, result: StoreResult) -> None: ...

    def search_results(self, query: str, items: Sequence[ItemSnapshot]) -> None: ...

    def inventory(self, items: Sequence[ItemSnapshot]) -> None: ...

    def csv(self, rows: Sequence[tuple]) -> None: ...

    def transactions(self, records: Sequence[Transaction]) -> None: ...

    def ages(self, ages: Sequence[ItemAge]) -> None: ...


def render_csv(rows: Sequence[tuple]) -> str:
    """Encode rows as CSV text (``\\n`` line endings, minimal quoting)."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue()


def describe_transaction(record: Transaction) -> str:
    """One-line human description of a transaction record."""
    prefix = f"#{record.sequence} {record.occurred_at.isoformat()} {record.transaction_type.value}"
    if isinstance(record, (AddTransaction, DeleteTransaction)):
        item = record.item
        return f"{prefix} {item.name} ({item.quantity} {item.unit} @ {item.price})"
    if isinstance(record, EditTransaction):
        return (
            f"{prefix} {record.old.name} -> {record.new.name} "
            f"({record.old.quantity} -> {record.new.quantity} {record.new.unit})"
        )
    if isinstance(record, (SaleTransaction, RestockTransaction)):
        return (
            f"{prefix} {record.item_name} {record.quantity} {record.unit} "
            f"(now {record.quantity_after})"
        )
    return prefix


class TextReportSink:
    """Writes plain-text reports to a stream (stdout by default)."""

    def __init__(
        self,
        stream: TextIO | None = None,
        config: InventoryConfig | None = None,
    ):
        self._stream = stream or sys.stdout
        self._config = config or InventoryConfig.with_defaults()

    def _write(self, text: str) -> None:
        self._stream.write(text.rstrip("\n") + "\n")

    def _money(self, amount: Decimal) -> str:
        quantum = Decimal(1).scaleb(-self._config.display_decimal_places)
        rounded = amount.quantize(quantum, rounding=ROUND_HALF_UP)
        return f"{self._config.currency_symbol}{rounded}"

    def _item_line(self, item: ItemSnapshot) -> str:
        line = (
            f"{item.name} [{item.category}] {item.quantity} {item.unit} "
            f"@ {self._money(item.price)}"
        )
        if item.custom_fields:
            extras = ", ".join(f"{k}={v}" for k, v in item.custom_fields.items())
            line += f" {{{extras}}}"
        return line

    def dashboard(self, summary: DashboardSummary) -> None:
        self._write(
            "=== Dashboard ===\n"
            f"Items: {summary.item_count}\n"
            f"Total: {self._money(summary.total_value)}\n"
            f"Cats: {', '.join(summary.categories)}"
        )

    def alert(self, alert: LowStockAlert) -> None:
        self._write(f"**ALERT: {alert.message}**")

    def confirmation(self, result: StoreResult) -> None:
        if result.message:
            self._write(result.message)

    def failure(self, result: StoreResult) -> None:
        self._write(f"!! {result.status.value}: {result.message}")

    def search_results(self, query: str, items: Sequence[ItemSnapshot]) -> None:
        lines = [f"=== Search: {query} ({len(items)} found) ==="]
        lines.extend(self._item_line(item) for item in items)
        self._write("\n".join(lines))

    def inventory(self, items: Sequence[ItemSnapshot]) -> None:
        lines = ["=== Inventory ==="]
        lines.extend(self._item_line(item) for item in items)
        self._write("\n".join(lines))

    def csv(self, rows: Sequence[tuple]) -> None:
        self._write("CSV:\n" + render_csv(rows))

    def transactions(self, records: Sequence[Transaction]) -> None:
        lines = ["Transactions:"]
        lines.extend(describe_transaction(record) for record in records)
        self._write("\n".join(lines))

    def ages(self, ages: Sequence[ItemAge]) -> None:
        self._write("\n".join(f"{age.name}: {age.days}d" for age in ages))
