"""Lifecycle hooks that resynchronize the simulation schedule."""
from __future__ import annotations

import logging

from celery.signals import beat_init
from django.db.models.signals import post_save
from django.dispatch import receiver

from simulator.models import Option
from simulator.schedule import ENABLE_CRON_OPTION

logger = logging.getLogger("salesim")


def _sync_schedule(trigger: str) -> None:
    from simulator.backends import build_schedule_synchronizer

    enabled = build_schedule_synchronizer().sync()
    logger.debug("Simulator schedule synced on %s (enabled=%s).", trigger, enabled)


def sync_schedule_after_migrate(sender, **kwargs):
    """Connected to ``post_migrate`` for the simulator app in ``apps.py``."""
    _sync_schedule("migrate")


@receiver(post_save, sender=Option)
def sync_schedule_on_option_save(sender, instance, **kwargs):
    if instance.name == ENABLE_CRON_OPTION:
        _sync_schedule("option save")


@beat_init.connect
def sync_schedule_on_beat_start(sender=None, **kwargs):
    _sync_schedule("beat start")
