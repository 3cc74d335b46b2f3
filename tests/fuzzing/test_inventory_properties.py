"""
Property-based tests for the inventory store.

Properties checked over random operation sequences:
- Total stock value always equals sum(quantity x price) over active items.
- The transaction log grows by exactly one record per successful mutation
  and by none per rejected one; sequences stay contiguous from 1.
- A rejected sale leaves quantity and log unchanged.
- Custom-field registration is idempotent.
- Low-stock alert fires iff the post-change quantity is below the threshold.
"""

from datetime import datetime, timezone
from decimal import Decimal

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st
from hypothesis.strategies import composite

from inventory_kernel.domain.clock import DeterministicClock
from inventory_kernel.selectors.inventory_selector import InventorySelector
from inventory_kernel.services.inventory_store import InventoryStore, StoreStatus

_SETTINGS = settings(
    max_examples=150,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)

NAMES = ["Apple", "Banana", "Orange", "Milk", "Cheese"]

prices = st.decimals(
    min_value=Decimal("0.01"),
    max_value=Decimal("9999.99"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)
quantities = st.integers(min_value=0, max_value=500)


@composite
def operations(draw):
    """One store operation as ``(kind, name, args)``."""
    kind = draw(st.sampled_from(["add", "edit", "remove", "sell", "restock"]))
    name = draw(st.sampled_from(NAMES))
    if kind in ("add", "edit"):
        return kind, name, (
            draw(st.sampled_from(["Fruit", "Dairy"])),
            draw(quantities),
            draw(prices),
            "kg",
        )
    if kind in ("sell", "restock"):
        return kind, name, (draw(st.integers(min_value=1, max_value=200)),)
    return kind, name, ()


def _new_store() -> InventoryStore:
    clock = DeterministicClock(datetime(2024, 1, 1, tzinfo=timezone.utc))
    return InventoryStore(clock=clock)


def _apply(store: InventoryStore, kind: str, name: str, args: tuple):
    if kind == "add":
        return store.add(name, *args)
    item_id = store.find_item_id(name)
    if kind == "edit":
        return store.edit(item_id, name, *args)
    return getattr(store, kind)(item_id, *args)


class TestStoreInvariants:

    @given(ops=st.lists(operations(), max_size=40))
    @_SETTINGS
    def test_total_value_matches_items(self, ops):
        store = _new_store()
        selector = InventorySelector(store)
        for op in ops:
            _apply(store, *op)
            expected = sum(
                (item.quantity * item.price for item in store.items), Decimal("0"),
            )
            summary = selector.dashboard_summary()
            assert summary.total_value == expected
            assert summary.item_count == len(store)

    @given(ops=st.lists(operations(), max_size=40))
    @_SETTINGS
    def test_log_grows_once_per_success(self, ops):
        store = _new_store()
        for op in ops:
            before = len(store.transactions)
            result = _apply(store, *op)
            growth = len(store.transactions) - before
            assert growth == (1 if result.is_success else 0)
            if result.is_success:
                assert store.transactions[-1] == result.transaction

        assert [r.sequence for r in store.transactions] == list(
            range(1, len(store.transactions) + 1)
        )

    @given(ops=st.lists(operations(), max_size=40))
    @_SETTINGS
    def test_alert_iff_below_threshold(self, ops):
        store = _new_store()
        for op in ops:
            result = _apply(store, *op)
            if result.is_success:
                assert (result.alert is not None) == (result.item.quantity < 10)
            else:
                assert result.alert is None


class TestSaleGuard:

    @given(on_hand=quantities, extra=st.integers(min_value=1, max_value=100))
    @_SETTINGS
    def test_oversell_changes_nothing(self, on_hand, extra):
        store = _new_store()
        item_id = store.add("Apple", "Fruit", on_hand, Decimal("1"), "kg").item_id
        log_size = len(store.transactions)

        result = store.sell(item_id, on_hand + extra)

        assert result.status is StoreStatus.INSUFFICIENT_STOCK
        assert store.get_item(item_id).quantity == on_hand
        assert len(store.transactions) == log_size

    @given(on_hand=quantities, data=st.data())
    @_SETTINGS
    def test_sell_then_restock_round_trips_quantity(self, on_hand, data):
        store = _new_store()
        item_id = store.add("Apple", "Fruit", on_hand, Decimal("1"), "kg").item_id
        amount = data.draw(st.integers(min_value=0, max_value=on_hand))

        store.sell(item_id, amount)
        store.restock(item_id, amount)

        assert store.get_item(item_id).quantity == on_hand


class TestRegistrationIdempotence:

    @given(names=st.lists(st.sampled_from(["Origin", "Brand", "Expiry"]), max_size=20))
    @_SETTINGS
    def test_registry_holds_each_name_once(self, names):
        store = _new_store()
        for name in names:
            store.register_custom_field(name)
        assert list(store.custom_fields) == list(dict.fromkeys(names))
        assert store.transactions == ()
