"""
Pytest fixtures for the inventory kernel test suite.

Provides:
- A deterministic clock and default config
- Fresh store / selector / orchestrator instances per test
- A recording report sink
- The seeded four-item inventory used by the scenario tests

Everything is in memory; no database, no network.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from inventory_kernel.config import InventoryConfig
from inventory_kernel.domain.clock import DeterministicClock
from inventory_kernel.logging_config import LogContext, reset_logging
from inventory_kernel.selectors.inventory_selector import InventorySelector
from inventory_kernel.services.inventory_store import InventoryStore
from inventory_kernel.services.orchestrator import InventoryOrchestrator

START_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

SEED_ITEMS = [
    ("Apple", "Fruit", 10, Decimal("1.5"), "kg"),
    ("Banana", "Fruit", 5, Decimal("1"), "kg"),
    ("Orange", "Fruit", 3, Decimal("2"), "kg"),
    ("Milk", "Dairy", 5, Decimal("3"), "litre"),
]


class RecordingSink:
    """Report sink that keeps every call as ``(kind, payload)``."""

    def __init__(self):
        self.events: list[tuple[str, object]] = []

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.events]

    def of_kind(self, kind: str) -> list:
        return [payload for k, payload in self.events if k == kind]

    def dashboard(self, summary):
        self.events.append(("dashboard", summary))

    def alert(self, alert):
        self.events.append(("alert", alert))

    def confirmation(self, result):
        self.events.append(("confirmation", result))

    def failure(self, result):
        self.events.append(("failure", result))

    def search_results(self, query, items):
        self.events.append(("search_results", (query, list(items))))

    def inventory(self, items):
        self.events.append(("inventory", list(items)))

    def csv(self, rows):
        self.events.append(("csv", list(rows)))

    def transactions(self, records):
        self.events.append(("transactions", list(records)))

    def ages(self, ages):
        self.events.append(("ages", list(ages)))


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock(START_TIME)


@pytest.fixture
def config() -> InventoryConfig:
    return InventoryConfig()


@pytest.fixture
def store(clock, config) -> InventoryStore:
    return InventoryStore(clock=clock, config=config)


@pytest.fixture
def seeded_store(store) -> InventoryStore:
    for name, category, quantity, price, unit in SEED_ITEMS:
        store.add(name, category, quantity, price, unit)
    return store


@pytest.fixture
def selector(store, clock) -> InventorySelector:
    return InventorySelector(store, clock)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def orchestrator(store, sink) -> InventoryOrchestrator:
    return InventoryOrchestrator(store, sink)
