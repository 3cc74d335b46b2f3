"""
Transactions -- Immutable change records and the append-only log.

Responsibility:
    One frozen record per state change (add, edit, delete, sale, restock)
    and ``TransactionLog``, the ordered sequence they are appended to.

Architecture position:
    Kernel > Domain -- pure data, zero I/O.

Invariants enforced:
    - Records are frozen dataclasses; item state inside them is an
      ``ItemSnapshot``, never the live ``Item``.
    - The log only grows. ``sequence`` is 1-based and gap-free; order of
      sequence = order of insertion = chronological order.

Failure modes:
    - ``TransactionLog.append`` raises ``TransactionSequenceError`` when a
      record's sequence is not the next one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Iterator, Mapping
from uuid import UUID

from inventory_kernel.domain.item import ItemSnapshot
from inventory_kernel.exceptions import TransactionSequenceError


class TransactionType(str, Enum):
    """Kind of state change a record describes."""

    ADD = "add"
    EDIT = "edit"
    DELETE = "delete"
    SALE = "sale"
    RESTOCK = "restock"


@dataclass(frozen=True)
class Transaction:
    """Common envelope shared by every record."""

    transaction_type: ClassVar[TransactionType]

    transaction_id: UUID
    sequence: int
    item_id: UUID
    occurred_at: datetime


@dataclass(frozen=True)
class AddTransaction(Transaction):
    transaction_type: ClassVar[TransactionType] = TransactionType.ADD

    item: ItemSnapshot


@dataclass(frozen=True)
class EditValues:
    """The replacement field tuple supplied to an edit."""

    name: str
    category: str
    quantity: int
    price: Decimal
    unit: str
    custom_fields: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({})
    )


@dataclass(frozen=True)
class EditTransaction(Transaction):
    transaction_type: ClassVar[TransactionType] = TransactionType.EDIT

    old: ItemSnapshot
    new: EditValues


@dataclass(frozen=True)
class DeleteTransaction(Transaction):
    transaction_type: ClassVar[TransactionType] = TransactionType.DELETE

    item: ItemSnapshot


@dataclass(frozen=True)
class SaleTransaction(Transaction):
    transaction_type: ClassVar[TransactionType] = TransactionType.SALE

    item_name: str
    unit: str
    quantity: int
    quantity_after: int


@dataclass(frozen=True)
class RestockTransaction(Transaction):
    transaction_type: ClassVar[TransactionType] = TransactionType.RESTOCK

    item_name: str
    unit: str
    quantity: int
    quantity_after: int


class TransactionLog:
    """
    Append-only, ordered record of state changes.

    No deletion, no compaction, no reordering.
    """

    def __init__(self) -> None:
        self._records: list[Transaction] = []

    @property
    def next_sequence(self) -> int:
        return len(self._records) + 1

    def append(self, record: Transaction) -> None:
        if record.sequence != self.next_sequence:
            raise TransactionSequenceError(self.next_sequence, record.sequence)
        self._records.append(record)

    def all(self) -> tuple[Transaction, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._records))
