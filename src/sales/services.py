"""Business-logic / service functions for the sales app."""
from __future__ import annotations

import logging

from django.conf import settings
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from catalog.models import Product
from sales.models import Order, OrderItem, OrderNote

logger = logging.getLogger("salesim")

# Statuses in which the ordered goods have left the shelf.
STOCK_REDUCING_STATUSES = {Order.Status.PROCESSING, Order.Status.COMPLETED}


# ---------------------------------------------------------------------------
# create_order
# ---------------------------------------------------------------------------

def create_order(customer=None, created_via: str = "") -> Order:
    """Create and persist a new PENDING order.

    Parameters
    ----------
    customer : accounts.models.User, optional
        ``None`` records a guest checkout.
    created_via : str
        Channel label stored on the order.
    """
    order = Order.objects.create(
        customer=customer,
        status=Order.Status.PENDING,
        currency=getattr(settings, "CURRENCY", "USD"),
        created_via=created_via,
    )
    logger.debug("Order %s created (PENDING) via %s", order.pk, created_via or "-")
    return order


# ---------------------------------------------------------------------------
# add_product_to_order
# ---------------------------------------------------------------------------

def add_product_to_order(order: Order, product: Product, qty: int = 1) -> OrderItem:
    """Add ``qty`` units of ``product`` to ``order``.

    The product's name and price are snapshotted on the line.  Adding a
    product already on the order increases the existing line.

    Raises
    ------
    ValueError
        If ``qty`` is not positive.
    """
    if qty < 1:
        raise ValueError("Quantity must be at least 1.")

    existing_item = order.items.filter(product=product).first()
    if existing_item:
        existing_item.quantity += qty
        existing_item.save()
        return existing_item

    return OrderItem.objects.create(
        order=order,
        product=product,
        product_name=product.name,
        unit_price=product.regular_price,
        quantity=qty,
    )


# ---------------------------------------------------------------------------
# calculate_order_totals
# ---------------------------------------------------------------------------

def calculate_order_totals(order: Order) -> Order:
    """Recalculate and persist subtotal, tax and total on an order."""
    # A prefetched "items" cache would be stale right after add_product_to_order.
    prefetched_cache = getattr(order, "_prefetched_objects_cache", None)
    if prefetched_cache:
        prefetched_cache.pop("items", None)

    order.recalculate_totals()
    order.save(update_fields=["subtotal", "tax_total", "total", "updated_at"])
    return order


# ---------------------------------------------------------------------------
# update_order_status
# ---------------------------------------------------------------------------

@transaction.atomic
def update_order_status(order: Order, new_status: str, note: str = "") -> Order:
    """Move ``order`` to ``new_status`` and record the change as a note.

    Entering ``processing`` or ``completed`` reduces managed stock once per
    order; completing stamps ``date_completed``.
    """
    if new_status not in Order.Status.values:
        raise ValueError(f"Unknown order status '{new_status}'.")

    old_status = order.status
    order.status = new_status
    update_fields = ["status", "updated_at"]

    if new_status == Order.Status.COMPLETED and order.date_completed is None:
        order.date_completed = timezone.now()
        update_fields.append("date_completed")

    if new_status in STOCK_REDUCING_STATUSES and not order.stock_reduced:
        _reduce_order_stock(order)
        order.stock_reduced = True
        update_fields.append("stock_reduced")

    order.save(update_fields=update_fields)

    if old_status != new_status:
        transition = (
            f"Order status changed from {Order.Status(old_status).label} "
            f"to {Order.Status(new_status).label}."
        )
        content = f"{note} {transition}".strip() if note else transition
        OrderNote.objects.create(order=order, content=content)
    elif note:
        OrderNote.objects.create(order=order, content=note)

    logger.debug("Order %s: %s -> %s", order.pk, old_status, new_status)
    return order


def _reduce_order_stock(order: Order) -> None:
    """Decrement stock for every managed product on the order."""
    for item in order.items.select_related("product"):
        if not item.product.manage_stock:
            continue
        Product.objects.filter(pk=item.product_id).update(
            stock_quantity=F("stock_quantity") - item.quantity,
        )
