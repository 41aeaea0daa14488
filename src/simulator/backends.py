"""Database-backed collaborators for the schedule synchronizer and the generator."""
from __future__ import annotations

import logging
import random

from django.conf import settings
from django_celery_beat.models import IntervalSchedule, PeriodicTask

from accounts.models import User
from catalog.models import Product
from catalog.services import product_ids
from sales.models import Order
from sales.services import (
    add_product_to_order,
    calculate_order_totals,
    create_order,
    update_order_status,
)
from simulator.generator import RandomOrderGenerator
from simulator.models import Option
from simulator.schedule import ScheduleSynchronizer, add_monthly_cron_schedule

logger = logging.getLogger("salesim")


class InvalidScheduleError(ValueError):
    """Raised when a job is registered with an unknown recurrence name."""


# ---------------------------------------------------------------------------
# Settings store
# ---------------------------------------------------------------------------

class OptionStore:
    """Key/value access to :class:`simulator.models.Option`."""

    def get(self, name: str, default=None):
        option = Option.objects.filter(name=name).first()
        if option is None:
            return default
        return option.value

    def set(self, name: str, value) -> Option:
        option, _created = Option.objects.update_or_create(
            name=name,
            defaults={"value": value},
        )
        return option


# ---------------------------------------------------------------------------
# Recurring-job scheduler
# ---------------------------------------------------------------------------

class BeatScheduler:
    """Recurring jobs stored as django-celery-beat ``PeriodicTask`` rows.

    The job name doubles as the Celery task name, so the beat process
    dispatches the task registered under that name.
    """

    def __init__(self, base_schedules: dict | None = None, schedule_filters=None):
        self.base_schedules = base_schedules
        if schedule_filters is None:
            schedule_filters = [add_monthly_cron_schedule]
        self.schedule_filters = list(schedule_filters)

    def schedules(self) -> dict:
        """Recurrence table after every filter has had its say."""
        table = dict(
            self.base_schedules
            if self.base_schedules is not None
            else getattr(settings, "SIMULATOR_CRON_SCHEDULES", {})
        )
        for schedule_filter in self.schedule_filters:
            table = schedule_filter(table)
        return table

    def get(self, name: str) -> PeriodicTask | None:
        return PeriodicTask.objects.filter(name=name).select_related("interval").first()

    def is_scheduled(self, name: str) -> bool:
        return PeriodicTask.objects.filter(name=name, enabled=True).exists()

    def schedule(self, name: str, start_time, recurrence: str) -> PeriodicTask:
        schedules = self.schedules()
        if recurrence not in schedules:
            raise InvalidScheduleError(f"Unknown recurrence '{recurrence}'.")

        existing = self.get(name)
        if existing is not None and existing.enabled:
            return existing

        interval, _ = IntervalSchedule.objects.get_or_create(
            every=int(schedules[recurrence]["interval"]),
            period=IntervalSchedule.SECONDS,
        )
        task, _created = PeriodicTask.objects.update_or_create(
            name=name,
            defaults={
                "task": name,
                "interval": interval,
                "start_time": start_time,
                "enabled": True,
                "description": schedules[recurrence].get("display", recurrence),
            },
        )
        return task

    def unschedule(self, name: str) -> int:
        tasks = PeriodicTask.objects.filter(name=name)
        removed = tasks.count()
        if removed:
            tasks.delete()
        return removed


# ---------------------------------------------------------------------------
# Catalog / customer readers
# ---------------------------------------------------------------------------

class ProductCatalog:
    def list_ids(self, status: str = Product.Status.PUBLISH) -> list[int]:
        return product_ids(status)


class CustomerDirectory:
    def list_ids(self, role: str, *, limit: int | None = None, random_order: bool = False) -> list[int]:
        queryset = User.objects.with_role(role)
        queryset = queryset.order_by("?") if random_order else queryset.order_by("pk")
        if limit is not None:
            queryset = queryset[:limit]
        return list(queryset.values_list("pk", flat=True))


# ---------------------------------------------------------------------------
# Order store
# ---------------------------------------------------------------------------

class OrderStore:
    """Builds orders through the sales services."""

    created_via = "simulator"

    def create(self) -> Order:
        return create_order(created_via=self.created_via)

    def add_product(self, order: Order, product_id: int, quantity: int = 1):
        product = Product.objects.get(pk=product_id)
        return add_product_to_order(order, product, quantity)

    def set_customer_id(self, order: Order, customer_id: int) -> None:
        # 0 is the guest checkout sentinel.
        order.customer_id = customer_id or None

    def calculate_totals(self, order: Order) -> Order:
        return calculate_order_totals(order)

    def update_status(self, order: Order, status: str, note: str = "") -> Order:
        return update_order_status(order, status, note)

    def set_date_created(self, order: Order, when) -> None:
        order.created_at = when

    def save(self, order: Order) -> Order:
        order.save()
        return order


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def build_schedule_synchronizer() -> ScheduleSynchronizer:
    return ScheduleSynchronizer(OptionStore(), BeatScheduler())


def build_order_generator(seed: int | None = None) -> RandomOrderGenerator:
    return RandomOrderGenerator(
        ProductCatalog(),
        CustomerDirectory(),
        OrderStore(),
        rng=random.Random(seed),
        min_orders=settings.SIMULATOR_MIN_ORDERS,
        max_orders=settings.SIMULATOR_MAX_ORDERS,
        backdate_days=settings.SIMULATOR_BACKDATE_DAYS,
    )
