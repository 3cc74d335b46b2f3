"""
Tests for the append-only TransactionLog and transaction records.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone
from uuid import uuid4

import pytest

from inventory_kernel.domain.transactions import (
    RestockTransaction,
    SaleTransaction,
    TransactionLog,
    TransactionType,
)
from inventory_kernel.exceptions import TransactionSequenceError

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _sale(sequence: int, quantity: int = 1) -> SaleTransaction:
    return SaleTransaction(
        transaction_id=uuid4(),
        sequence=sequence,
        item_id=uuid4(),
        occurred_at=NOW,
        item_name="Apple",
        unit="kg",
        quantity=quantity,
        quantity_after=5,
    )


class TestTransactionLog:

    def test_starts_empty(self):
        log = TransactionLog()
        assert len(log) == 0
        assert log.all() == ()
        assert log.next_sequence == 1

    def test_append_preserves_order(self):
        log = TransactionLog()
        first, second = _sale(1), _sale(2)
        log.append(first)
        log.append(second)
        assert log.all() == (first, second)
        assert list(log) == [first, second]
        assert log.next_sequence == 3

    def test_out_of_sequence_append_rejected(self):
        log = TransactionLog()
        log.append(_sale(1))
        with pytest.raises(TransactionSequenceError) as exc_info:
            log.append(_sale(3))
        assert exc_info.value.expected == 2
        assert exc_info.value.received == 3
        assert len(log) == 1

    def test_all_returns_copy(self):
        log = TransactionLog()
        log.append(_sale(1))
        snapshot = log.all()
        log.append(_sale(2))
        assert len(snapshot) == 1


class TestTransactionRecords:

    def test_records_are_frozen(self):
        record = _sale(1)
        with pytest.raises(FrozenInstanceError):
            record.quantity = 99

    def test_type_tags(self):
        assert _sale(1).transaction_type is TransactionType.SALE
        restock = RestockTransaction(
            transaction_id=uuid4(),
            sequence=1,
            item_id=uuid4(),
            occurred_at=NOW,
            item_name="Milk",
            unit="litre",
            quantity=2,
            quantity_after=7,
        )
        assert restock.transaction_type is TransactionType.RESTOCK
        assert TransactionType.RESTOCK.value == "restock"
