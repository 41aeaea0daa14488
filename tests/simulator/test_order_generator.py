import random
from datetime import timedelta

import pytest

from conftest import FIXED_NOW, FakeCatalog, FakeDirectory, FakeOrderStore
from simulator.generator import (
    COMPLETED_STATUS,
    CUSTOMER_ROLE,
    GUEST_CUSTOMER_ID,
    PUBLISHED_STATUS,
    RANDOM_SALE_NOTE,
    RandomOrderGenerator,
)


def _generator(product_ids=(), customer_ids=(), store=None, seed=7, **kwargs):
    store = store if store is not None else FakeOrderStore()
    generator = RandomOrderGenerator(
        FakeCatalog(product_ids),
        FakeDirectory(customer_ids),
        store,
        rng=random.Random(seed),
        clock=lambda: FIXED_NOW,
        **kwargs,
    )
    return generator, store


class TestGenerateMonthlyRandomSales:
    def test_empty_catalog_creates_nothing(self):
        generator, store = _generator(product_ids=[], customer_ids=[5, 6])

        orders = generator.generate_monthly_random_sales()

        assert orders == []
        assert store.created == []
        assert generator.catalog.requested_statuses
        assert set(generator.catalog.requested_statuses) == {PUBLISHED_STATUS}

    @pytest.mark.parametrize("seed", range(25))
    def test_batch_size_stays_between_ten_and_fifteen(self, seed):
        generator, store = _generator(product_ids=[1, 2, 3], seed=seed)

        orders = generator.generate_monthly_random_sales()

        assert 10 <= len(orders) <= 15
        assert len(store.saved) == len(orders)

    def test_explicit_count_overrides_random_size(self):
        generator, _store = _generator(product_ids=[1])

        assert len(generator.generate_monthly_random_sales(count=3)) == 3
        assert generator.generate_monthly_random_sales(count=0) == []

    def test_every_order_has_one_unit_of_a_published_product(self):
        generator, _store = _generator(product_ids=[11, 12, 13], customer_ids=[101, 102])

        for order in generator.generate_monthly_random_sales():
            assert len(order.lines) == 1
            product_id, quantity = order.lines[0]
            assert product_id in {11, 12, 13}
            assert quantity == 1

    def test_customers_come_from_the_customer_pool(self):
        generator, _store = _generator(product_ids=[1], customer_ids=[101, 102, 103])

        orders = generator.generate_monthly_random_sales()

        assert {order.customer_id for order in orders} <= {101, 102, 103}
        assert set(generator.directory.requested_roles) == {CUSTOMER_ROLE}

    def test_no_customers_means_guest_orders(self):
        generator, _store = _generator(product_ids=[1], customer_ids=[])

        orders = generator.generate_monthly_random_sales(count=4)

        assert [order.customer_id for order in orders] == [GUEST_CUSTOMER_ID] * 4

    def test_orders_are_completed_with_note_and_totals(self):
        generator, _store = _generator(product_ids=[1], customer_ids=[101])

        for order in generator.generate_monthly_random_sales(count=5):
            assert order.status == COMPLETED_STATUS
            assert order.note == RANDOM_SALE_NOTE
            assert order.totals_calculated is True

    def test_dates_fall_within_the_past_month(self):
        generator, _store = _generator(product_ids=[1, 2], seed=3)

        orders = generator.generate_monthly_random_sales(count=60)

        for order in orders:
            assert FIXED_NOW - timedelta(days=30) <= order.date_created <= FIXED_NOW - timedelta(days=1)
            assert (FIXED_NOW - order.date_created) % timedelta(days=1) == timedelta(0)

    def test_single_product_without_customers(self):
        generator, store = _generator(product_ids=["P1"], customer_ids=[])

        orders = generator.generate_monthly_random_sales(count=10)

        assert len(orders) == 10
        assert len(store.created) == 10
        for order in orders:
            assert order.lines == [("P1", 1)]
            assert order.customer_id == GUEST_CUSTOMER_ID
            assert order.status == COMPLETED_STATUS
            assert FIXED_NOW - timedelta(days=30) <= order.date_created <= FIXED_NOW - timedelta(days=1)

    def test_same_seed_gives_same_batch(self):
        first, _ = _generator(product_ids=[1, 2, 3, 4], customer_ids=[9, 8], seed=42)
        second, _ = _generator(product_ids=[1, 2, 3, 4], customer_ids=[9, 8], seed=42)

        def snapshot(orders):
            return [(o.lines, o.customer_id, o.date_created) for o in orders]

        assert snapshot(first.generate_monthly_random_sales()) == snapshot(
            second.generate_monthly_random_sales()
        )

    def test_store_failure_stops_the_batch(self):
        store = FakeOrderStore(fail_on_save=3)
        generator, _store = _generator(product_ids=[1], store=store)

        with pytest.raises(RuntimeError, match="order store unavailable"):
            generator.generate_monthly_random_sales(count=10)

        assert len(store.saved) == 2
        assert len(store.created) == 3

    def test_custom_bounds_are_honoured(self):
        generator, _store = _generator(product_ids=[1], min_orders=2, max_orders=2, backdate_days=1)

        orders = generator.generate_monthly_random_sales()

        assert len(orders) == 2
        assert all(order.date_created == FIXED_NOW - timedelta(days=1) for order in orders)


class TestGeneratorConfiguration:
    def test_min_greater_than_max_is_rejected(self):
        with pytest.raises(ValueError, match="min_orders"):
            _generator(min_orders=5, max_orders=4)

    def test_backdate_must_be_positive(self):
        with pytest.raises(ValueError, match="backdate_days"):
            _generator(backdate_days=0)

    def test_random_customer_falls_back_to_guest(self):
        generator, _store = _generator(customer_ids=[])

        assert generator.get_random_customer_id() == GUEST_CUSTOMER_ID

    def test_create_random_order_returns_none_on_empty_catalog(self):
        generator, store = _generator(product_ids=[])

        assert generator.create_random_order_with_date() is None
        assert store.created == []
