"""Celery configuration."""
import os
from celery import Celery

os.environ.setdefault(
    "DJANGO_SETTINGS_MODULE",
    os.getenv("DJANGO_SETTINGS_MODULE", "config.settings.prod"),
)

app = Celery("salesim")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()

# Beat schedule
# The simulator's recurring job is not listed here: it is registered and
# removed at runtime in the database scheduler, see simulator.schedule.
app.conf.beat_schedule = {}
