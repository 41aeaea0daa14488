"""Install demo customers and/or sample products."""
from django.core.management.base import BaseCommand, CommandError

from simulator import demo


class Command(BaseCommand):
    help = "Install demo customers and sample products (both when no flag is given)."

    def add_arguments(self, parser):
        parser.add_argument("--customers", action="store_true", help="Install demo customers.")
        parser.add_argument("--products", action="store_true", help="Install sample products.")
        parser.add_argument(
            "--file",
            default=None,
            help="Product workbook to import instead of the bundled sample.",
        )

    def handle(self, *args, **options):
        install_all = not (options["customers"] or options["products"])

        try:
            if install_all or options["customers"]:
                created = demo.install_demo_customers()
                self.stdout.write(self.style.SUCCESS(f"{len(created)} demo customer(s) installed."))

            if install_all or options["products"]:
                summary = demo.install_sample_products(options["file"])
                self.stdout.write(self.style.SUCCESS(
                    f"Sample products: {summary['created']} created, "
                    f"{summary['updated']} updated, {summary['errors']} error(s)."
                ))
                for detail in summary["error_details"]:
                    self.stdout.write(self.style.WARNING(f"  {detail}"))
        except demo.DemoDataError as exc:
            raise CommandError(str(exc)) from exc
