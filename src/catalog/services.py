"""
Service functions for the catalog app.

Handles catalog lookups and bulk import from Excel using openpyxl.
"""
import logging
from decimal import Decimal, InvalidOperation

from django.utils.text import slugify

import openpyxl

from .models import Category, Product

logger = logging.getLogger("salesim")

# ---------------------------------------------------------------------------
# Expected column order for the import spreadsheet
# ---------------------------------------------------------------------------
IMPORT_COLUMNS = [
    "name",            # A - name
    "sku",             # B - sku (unique reference)
    "category",        # C - category name
    "regular_price",   # D - regular_price
    "stock_quantity",  # E - managed stock (empty = not managed)
    "description",     # F - description
    "status",          # G - publish / draft / pending / private
]


def product_ids(status: str = Product.Status.PUBLISH) -> list[int]:
    """Return the ids of every product in ``status``, oldest first."""
    return list(
        Product.objects
        .filter(status=status)
        .order_by("pk")
        .values_list("pk", flat=True)
    )


# =========================================================================
# IMPORT
# =========================================================================

def import_products_from_excel(file) -> dict:
    """
    Import products from an Excel (.xlsx) file or path.

    Expected columns (first row is header):
        name | sku | category | regular_price | stock_quantity | description | status

    Rows are matched on SKU, so importing the same sheet twice updates the
    existing products instead of duplicating them.

    Returns a dict with counts::

        {"created": int, "updated": int, "errors": int, "error_details": list[str]}
    """
    wb = openpyxl.load_workbook(file, read_only=True, data_only=True)
    ws = wb.active

    created = 0
    updated = 0
    errors = 0
    error_details: list[str] = []

    rows = ws.iter_rows(min_row=2, values_only=True)  # skip header
    for row_idx, row in enumerate(rows, start=2):
        if not any(value not in (None, "") for value in row):
            continue
        try:
            # Unpack row (pad with None when columns are missing)
            padded = list(row) + [None] * (len(IMPORT_COLUMNS) - len(row))
            (
                name,
                sku,
                category_name,
                regular_price,
                stock_quantity,
                description,
                status_raw,
            ) = padded[:7]

            # ----- Validation -----
            if not name or not sku:
                raise ValueError("Name and SKU are required.")

            if regular_price in (None, ""):
                raise ValueError("Regular price is required.")

            name = str(name).strip()
            sku = str(sku).strip()

            # Category (create if it does not exist, optional)
            category = None
            if category_name:
                category_name = str(category_name).strip()
                category, _ = Category.objects.get_or_create(
                    name__iexact=category_name,
                    defaults={
                        "name": category_name,
                        "slug": _unique_slug(Category, category_name),
                    },
                )

            try:
                regular_price = Decimal(str(regular_price))
            except (InvalidOperation, TypeError):
                raise ValueError("Invalid price.")

            manage_stock = stock_quantity not in (None, "")
            if manage_stock:
                try:
                    stock_quantity = int(stock_quantity)
                except (TypeError, ValueError):
                    raise ValueError("Invalid stock quantity.")
            else:
                stock_quantity = None

            status = str(status_raw).strip().lower() if status_raw else Product.Status.PUBLISH
            if status not in Product.Status.values:
                raise ValueError(f"Unknown status '{status}'.")

            description = str(description).strip() if description else ""

            # ----- Create or update -----
            product, was_created = Product.objects.update_or_create(
                sku=sku,
                defaults={
                    "name": name,
                    "slug": _unique_slug(Product, name, exclude_sku=sku),
                    "category": category,
                    "regular_price": regular_price,
                    "manage_stock": manage_stock,
                    "stock_quantity": stock_quantity,
                    "description": description,
                    "status": status,
                },
            )

            if was_created:
                created += 1
            else:
                updated += 1

        except Exception as exc:
            errors += 1
            detail = f"Row {row_idx}: {exc}"
            error_details.append(detail)
            logger.warning("Product import - %s", detail)

    wb.close()

    logger.info(
        "Product import finished: %d created, %d updated, %d error(s).",
        created, updated, errors,
    )

    return {
        "created": created,
        "updated": updated,
        "errors": errors,
        "error_details": error_details,
    }


# =========================================================================
# Helpers
# =========================================================================

def _unique_slug(model_class, name: str, exclude_sku: str | None = None) -> str:
    """
    Generate a unique slug for the given model class based on *name*.

    If a product with the same slug already exists (and is not the one
    identified by *exclude_sku*), append a numeric suffix.
    """
    base_slug = slugify(name) or "item"
    slug = base_slug
    counter = 1

    while True:
        qs = model_class.objects.filter(slug=slug)
        if exclude_sku and model_class is Product:
            qs = qs.exclude(sku=exclude_sku)
        if not qs.exists():
            return slug
        slug = f"{base_slug}-{counter}"
        counter += 1
