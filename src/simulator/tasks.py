"""Celery tasks for the simulator app."""
from __future__ import annotations

import logging

from celery import shared_task

from simulator.backends import build_order_generator
from simulator.schedule import SIMULATE_EVENT

logger = logging.getLogger("salesim")


@shared_task(name=SIMULATE_EVENT)
def generate_monthly_random_sales(count=None, seed=None):
    """Create this month's batch of random completed orders.

    Fired by Celery Beat while the simulator schedule is enabled.
    """
    generator = build_order_generator(seed=seed)
    orders = generator.generate_monthly_random_sales(count=count)
    logger.info("Random sales batch done: %d order(s).", len(orders))
    return {
        "generated_count": len(orders),
        "order_ids": [order.pk for order in orders],
    }
