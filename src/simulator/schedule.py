"""Keep the recurring sales-simulation job in step with its on/off option.

The simulator owns exactly one recurring job.  Whether that job should exist
is decided by a boolean option edited from the settings page; the
synchronizer below reconciles the scheduler with that option every time a
lifecycle hook fires (migrations, beat start-up, option save).  Once the
two agree, another pass changes nothing.
"""
from __future__ import annotations

import logging

from django.utils import timezone

logger = logging.getLogger("salesim")

SIMULATE_EVENT = "simulator.monthly_sales_simulate_event"
ENABLE_CRON_OPTION = "simulator_enable_cron"
MONTHLY = "monthly"
DAY_IN_SECONDS = 24 * 60 * 60

_TRUTHY = {"1", "true", "yes", "on"}


def add_monthly_cron_schedule(schedules: dict) -> dict:
    """Return ``schedules`` with a 30-day ``monthly`` recurrence added.

    An existing ``monthly`` entry is kept as-is.  The input mapping is not
    modified.
    """
    schedules = dict(schedules)
    if MONTHLY not in schedules:
        schedules[MONTHLY] = {
            "interval": 30 * DAY_IN_SECONDS,
            "display": "Once a Month",
        }
    return schedules


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


class ScheduleSynchronizer:
    """Register or remove the simulation job according to the option.

    ``options`` needs ``get(name, default)``; ``scheduler`` needs
    ``is_scheduled(name)``, ``schedule(name, start_time, recurrence)`` and
    ``unschedule(name)``.
    """

    def __init__(
        self,
        options,
        scheduler,
        *,
        flag_name: str = ENABLE_CRON_OPTION,
        job_name: str = SIMULATE_EVENT,
        recurrence: str = MONTHLY,
        clock=timezone.now,
    ):
        self.options = options
        self.scheduler = scheduler
        self.flag_name = flag_name
        self.job_name = job_name
        self.recurrence = recurrence
        self.clock = clock

    def is_enabled(self) -> bool:
        return _as_bool(self.options.get(self.flag_name, False))

    def sync(self) -> bool:
        """Reconcile the scheduler with the option; return the option value."""
        enabled = self.is_enabled()
        if enabled and not self.scheduler.is_scheduled(self.job_name):
            self.scheduler.schedule(self.job_name, self.clock(), self.recurrence)
            logger.info("Scheduled %s (%s).", self.job_name, self.recurrence)
        elif not enabled:
            removed = self.scheduler.unschedule(self.job_name)
            if removed:
                logger.info("Unscheduled %s.", self.job_name)
        return enabled

    def activate(self) -> bool:
        """Register the job if missing, whatever the option says.

        Returns True when a registration was made.
        """
        if self.scheduler.is_scheduled(self.job_name):
            return False
        self.scheduler.schedule(self.job_name, self.clock(), self.recurrence)
        logger.info("Activated %s (%s).", self.job_name, self.recurrence)
        return True

    def deactivate(self) -> int:
        """Remove the job; returns how many registrations were dropped."""
        removed = self.scheduler.unschedule(self.job_name)
        logger.info("Deactivated %s (%d removed).", self.job_name, removed)
        return removed
