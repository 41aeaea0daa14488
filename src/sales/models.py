"""Models for the sales app."""
from decimal import Decimal

from django.conf import settings
from django.db import models

from core.models import TimeStampedModel


# ---------------------------------------------------------------------------
# Order
# ---------------------------------------------------------------------------

class Order(TimeStampedModel):
    """A customer order.  ``customer`` is empty for guest checkouts."""

    class Status(models.TextChoices):
        PENDING = "pending", "Pending payment"
        PROCESSING = "processing", "Processing"
        ON_HOLD = "on-hold", "On hold"
        COMPLETED = "completed", "Completed"
        CANCELLED = "cancelled", "Cancelled"
        REFUNDED = "refunded", "Refunded"
        FAILED = "failed", "Failed"

    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
        verbose_name="customer",
    )
    status = models.CharField(
        "status",
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    currency = models.CharField("currency", max_length=10, default="USD")
    created_via = models.CharField(
        "created via",
        max_length=50,
        blank=True,
        default="",
        help_text="Channel that produced the order (admin, checkout, simulator...).",
    )

    # ------------------------------------------------------------------
    # Amounts
    # ------------------------------------------------------------------
    subtotal = models.DecimalField(
        "subtotal",
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    tax_total = models.DecimalField(
        "tax total",
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    total = models.DecimalField(
        "total",
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    # ------------------------------------------------------------------
    # Workflow
    # ------------------------------------------------------------------
    date_completed = models.DateTimeField("completed at", null=True, blank=True)
    stock_reduced = models.BooleanField("stock reduced", default=False)

    class Meta:
        verbose_name = "order"
        verbose_name_plural = "orders"
        ordering = ["-created_at"]

    def __str__(self):
        return f"Order #{self.pk}"

    @property
    def customer_reference(self) -> int:
        """Customer id, or 0 for a guest checkout."""
        return self.customer_id or 0

    # ------------------------------------------------------------------
    # Calculation helpers
    # ------------------------------------------------------------------

    def recalculate_totals(self):
        """Recalculate subtotal, tax and total from related items.

        Does **not** call ``save()`` -- the caller is responsible for
        persisting changes.
        """
        self.subtotal = sum(
            (item.line_total for item in self.items.all()), Decimal("0.00")
        )
        tax_rate = Decimal(str(getattr(settings, "SALES_TAX_RATE", 0) or 0))
        if tax_rate > Decimal("0"):
            self.tax_total = (self.subtotal * tax_rate / Decimal("100")).quantize(Decimal("0.01"))
        else:
            self.tax_total = Decimal("0.00")
        self.total = self.subtotal + self.tax_total


# ---------------------------------------------------------------------------
# OrderItem
# ---------------------------------------------------------------------------

class OrderItem(TimeStampedModel):
    """A single line item on an order."""

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="items",
        verbose_name="order",
    )
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.PROTECT,
        related_name="order_items",
        verbose_name="product",
    )
    product_name = models.CharField(
        "product name (snapshot)",
        max_length=255,
        help_text="Product name at the time of the order.",
    )
    unit_price = models.DecimalField(
        "unit price",
        max_digits=12,
        decimal_places=2,
    )
    quantity = models.PositiveIntegerField("quantity", default=1)
    line_total = models.DecimalField(
        "line total",
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    class Meta:
        verbose_name = "order item"
        verbose_name_plural = "order items"
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.product_name} x{self.quantity}"

    def save(self, *args, **kwargs):
        """Calculate line_total before saving."""
        self.line_total = self.unit_price * self.quantity
        super().save(*args, **kwargs)


# ---------------------------------------------------------------------------
# OrderNote
# ---------------------------------------------------------------------------

class OrderNote(TimeStampedModel):
    """Audit trail entry attached to an order."""

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="notes",
        verbose_name="order",
    )
    content = models.TextField("content")

    class Meta:
        verbose_name = "order note"
        verbose_name_plural = "order notes"
        ordering = ["created_at"]

    def __str__(self):
        return self.content[:50]
