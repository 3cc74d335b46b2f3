"""
Tests for the low-stock alert evaluator.

Boundary: strictly below the threshold is low; exactly the threshold is not.
"""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from inventory_kernel.domain.alerts import (
    DEFAULT_LOW_STOCK_THRESHOLD,
    LowStockAlert,
    LowStockEvaluator,
)
from inventory_kernel.domain.item import Item


def _item(quantity: int, name: str = "Apple") -> Item:
    return Item(
        item_id=uuid4(),
        name=name,
        category="Fruit",
        quantity=quantity,
        price=Decimal("1"),
        unit="kg",
        added_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


class TestLowStockEvaluator:

    def test_default_threshold_is_ten(self):
        assert DEFAULT_LOW_STOCK_THRESHOLD == 10
        assert LowStockEvaluator().threshold == 10

    def test_exactly_threshold_is_not_low(self):
        assert LowStockEvaluator().evaluate(_item(10)) is None

    def test_below_threshold_alerts(self):
        item = _item(9)
        alert = LowStockEvaluator().evaluate(item)
        assert alert == LowStockAlert(
            item_id=item.item_id, item_name="Apple", quantity=9, threshold=10,
        )

    @pytest.mark.parametrize("quantity", [0, 1, 5])
    def test_low_quantities_alert(self, quantity):
        assert LowStockEvaluator().evaluate(_item(quantity)) is not None

    def test_custom_threshold(self):
        evaluator = LowStockEvaluator(threshold=3)
        assert evaluator.evaluate(_item(3)) is None
        assert evaluator.evaluate(_item(2)) is not None

    def test_accepts_snapshots(self):
        assert LowStockEvaluator().evaluate(_item(1).snapshot()) is not None

    def test_alert_message(self):
        alert = LowStockEvaluator().evaluate(_item(8, name="Milk"))
        assert alert.message == "Item Milk is below 10 units! Current quantity: 8"

    def test_alert_is_logged(self, caplog):
        with caplog.at_level("WARNING", logger="inventory_kernel"):
            LowStockEvaluator().evaluate(_item(2))
        assert any(r.getMessage() == "low_stock_alert" for r in caplog.records)
