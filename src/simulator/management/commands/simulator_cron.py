"""Manage the recurring random-sales job from the command line."""
from django.core.management.base import BaseCommand

from simulator.backends import BeatScheduler, OptionStore
from simulator.schedule import ScheduleSynchronizer


class Command(BaseCommand):
    help = "Activate, deactivate, resynchronize or inspect the random sales schedule."

    def add_arguments(self, parser):
        parser.add_argument(
            "action",
            choices=["activate", "deactivate", "sync", "status"],
            help=(
                "activate: register the job if missing; deactivate: remove it; "
                "sync: follow the settings page option; status: show the current state."
            ),
        )

    def handle(self, *args, **options):
        scheduler = BeatScheduler()
        synchronizer = ScheduleSynchronizer(OptionStore(), scheduler)
        action = options["action"]

        if action == "activate":
            if synchronizer.activate():
                self.stdout.write(self.style.SUCCESS(f"Scheduled {synchronizer.job_name}."))
            else:
                self.stdout.write(f"{synchronizer.job_name} is already scheduled.")
        elif action == "deactivate":
            removed = synchronizer.deactivate()
            self.stdout.write(self.style.SUCCESS(f"Removed {removed} schedule(s)."))
        elif action == "sync":
            enabled = synchronizer.sync()
            self.stdout.write(self.style.SUCCESS(
                f"Schedule synchronized (option {'enabled' if enabled else 'disabled'})."
            ))

        job = scheduler.get(synchronizer.job_name)
        self.stdout.write(f"Option enabled: {synchronizer.is_enabled()}")
        if job is None:
            self.stdout.write("Job: not scheduled")
        else:
            self.stdout.write(
                f"Job: scheduled every {job.interval} "
                f"(enabled={job.enabled}, last run={job.last_run_at or 'never'})"
            )
