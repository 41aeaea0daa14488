"""Fabricate a batch of completed, backdated orders."""
from __future__ import annotations

import logging
import random
from datetime import timedelta

from django.utils import timezone

logger = logging.getLogger("salesim")

GUEST_CUSTOMER_ID = 0
CUSTOMER_ROLE = "CUSTOMER"
PUBLISHED_STATUS = "publish"
COMPLETED_STATUS = "completed"
RANDOM_SALE_NOTE = "Random sale generated for testing"


class RandomOrderGenerator:
    """Create ``min_orders``..``max_orders`` random orders per run.

    Each order holds one unit of a random published product, belongs to a
    random customer (or a guest) and is dated 1 to ``backdate_days`` days
    before now.  Collaborators:

    - ``catalog.list_ids(status)``
    - ``directory.list_ids(role, limit=..., random_order=...)``
    - ``orders``: ``create``, ``add_product``, ``set_customer_id``,
      ``calculate_totals``, ``update_status``, ``set_date_created``, ``save``

    Errors raised by ``orders`` are not caught: a failure stops the batch and
    orders saved before it stay saved.
    """

    def __init__(
        self,
        catalog,
        directory,
        orders,
        *,
        rng: random.Random | None = None,
        clock=timezone.now,
        min_orders: int = 10,
        max_orders: int = 15,
        backdate_days: int = 30,
    ):
        if min_orders > max_orders:
            raise ValueError("min_orders cannot exceed max_orders.")
        if backdate_days < 1:
            raise ValueError("backdate_days must be at least 1.")
        self.catalog = catalog
        self.directory = directory
        self.orders = orders
        self.rng = rng or random.Random()
        self.clock = clock
        self.min_orders = min_orders
        self.max_orders = max_orders
        self.backdate_days = backdate_days

    def generate_monthly_random_sales(self, count: int | None = None) -> list:
        """Run ``count`` attempts (random when omitted); return saved orders."""
        if count is None:
            count = self.rng.randint(self.min_orders, self.max_orders)

        created = []
        for _ in range(count):
            order = self.create_random_order_with_date()
            if order is not None:
                created.append(order)

        logger.info("Generated %d random sale(s) in %d attempt(s).", len(created), count)
        return created

    def create_random_order_with_date(self):
        """Create one backdated order, or return None on an empty catalog."""
        product_ids = list(self.catalog.list_ids(PUBLISHED_STATUS))
        if not product_ids:
            logger.debug("No published product, skipping random sale.")
            return None

        product_id = self.rng.choice(product_ids)

        order = self.orders.create()
        self.orders.add_product(order, product_id, 1)
        self.orders.set_customer_id(order, self.get_random_customer_id())
        self.orders.calculate_totals(order)
        self.orders.update_status(order, COMPLETED_STATUS, RANDOM_SALE_NOTE)

        days_ago = self.rng.randint(1, self.backdate_days)
        self.orders.set_date_created(order, self.clock() - timedelta(days=days_ago))
        return self.orders.save(order)

    def get_random_customer_id(self) -> int:
        ids = self.directory.list_ids(CUSTOMER_ROLE, limit=1, random_order=True)
        if ids:
            return ids[0]
        return GUEST_CUSTOMER_ID
