"""Run the random sales generator once, outside of Celery Beat."""
from django.core.management.base import BaseCommand, CommandError

from simulator.backends import build_order_generator


class Command(BaseCommand):
    help = "Create a batch of completed random orders dated within the past month."

    def add_arguments(self, parser):
        parser.add_argument(
            "--count",
            type=int,
            default=None,
            help="Number of orders to attempt (default: random between the configured bounds).",
        )
        parser.add_argument(
            "--seed",
            type=int,
            default=None,
            help="Random seed for reproducible generation.",
        )

    def handle(self, *args, **options):
        count = options["count"]
        if count is not None and count < 0:
            raise CommandError("--count cannot be negative.")

        generator = build_order_generator(seed=options["seed"])
        orders = generator.generate_monthly_random_sales(count=count)

        if not orders:
            self.stdout.write(self.style.WARNING("No order created (no published product?)."))
            return
        self.stdout.write(self.style.SUCCESS(f"Created {len(orders)} random order(s)."))
