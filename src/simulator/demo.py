"""One-off demo data installers triggered from the settings page."""
from __future__ import annotations

import logging
from pathlib import Path

from django.conf import settings
from django.utils.crypto import get_random_string

from accounts.models import User
from catalog.services import import_products_from_excel

logger = logging.getLogger("salesim")

DEMO_CUSTOMERS = [
    ("John", "Doe"),
    ("Jane", "Smith"),
    ("Michael", "Johnson"),
    ("Emily", "Davis"),
    ("Chris", "Brown"),
    ("Anna", "Taylor"),
    ("David", "Wilson"),
    ("Laura", "Martinez"),
    ("Kevin", "Anderson"),
    ("Rachel", "Lee"),
]


class DemoDataError(ValueError):
    """Demo data could not be installed; the message is shown to the operator."""


def install_demo_customers(password_length: int = 8) -> list[User]:
    """Create the demo customer accounts.

    Stops at the first account that cannot be created; accounts created
    before it are kept.
    """
    created = []
    for first_name, last_name in DEMO_CUSTOMERS:
        login = f"{first_name}_{last_name}".lower()
        email = f"{login}@example.com"
        if User.objects.filter(email__iexact=email).exists():
            raise DemoDataError(
                f"Error creating customer: a user with the email {email} already exists."
            )
        user = User.objects.create_user(
            email=email,
            password=get_random_string(password_length),
            first_name=first_name,
            last_name=last_name,
            role=User.Role.CUSTOMER,
        )
        created.append(user)

    logger.info("Installed %d demo customer(s).", len(created))
    return created


def install_sample_products(path: str | Path | None = None) -> dict:
    """Import the sample product workbook into the catalog."""
    path = Path(path or settings.SIMULATOR_SAMPLE_PRODUCTS_FILE)
    if not path.is_file():
        raise DemoDataError(f"Sample products file not found: {path}")

    summary = import_products_from_excel(str(path))
    if summary["errors"] and not (summary["created"] or summary["updated"]):
        raise DemoDataError(
            "No sample product could be installed: " + "; ".join(summary["error_details"][:3])
        )

    logger.info(
        "Sample products installed from %s: %d created, %d updated.",
        path, summary["created"], summary["updated"],
    )
    return summary
