"""App config for the sales simulator."""
from django.apps import AppConfig
from django.db.models.signals import post_migrate


class SimulatorConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "simulator"
    verbose_name = "Random Sales Simulator"

    def ready(self):
        from simulator import signals

        post_migrate.connect(signals.sync_schedule_after_migrate, sender=self)
