"""Models for the catalog app (products and categories)."""
from decimal import Decimal

from django.db import models
from django.utils.text import slugify

from core.models import TimeStampedModel


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------

class Category(TimeStampedModel):
    """Product category with optional tree structure via self-referencing FK."""

    name = models.CharField("name", max_length=255)
    slug = models.SlugField("slug", max_length=255, unique=True)
    parent = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="children",
        verbose_name="parent category",
    )

    class Meta:
        verbose_name = "category"
        verbose_name_plural = "categories"
        ordering = ["name"]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name) or "cat"
        super().save(*args, **kwargs)


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------

class Product(TimeStampedModel):
    """A sellable catalog entry.

    Only ``publish`` products are visible to shoppers, and only those are
    picked by the sales simulator.
    """

    class Status(models.TextChoices):
        PUBLISH = "publish", "Published"
        DRAFT = "draft", "Draft"
        PENDING = "pending", "Pending review"
        PRIVATE = "private", "Private"

    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
        verbose_name="category",
    )
    name = models.CharField("name", max_length=255)
    slug = models.SlugField("slug", max_length=255, unique=True)
    sku = models.CharField(
        "SKU",
        max_length=50,
        unique=True,
        help_text="Unique internal product reference.",
    )
    description = models.TextField("description", blank=True, default="")
    regular_price = models.DecimalField(
        "regular price",
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    status = models.CharField(
        "status",
        max_length=20,
        choices=Status.choices,
        default=Status.PUBLISH,
        db_index=True,
    )
    manage_stock = models.BooleanField("manage stock", default=False)
    stock_quantity = models.IntegerField("stock quantity", null=True, blank=True)

    class Meta:
        verbose_name = "product"
        verbose_name_plural = "products"
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.sku})"

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name) or "product"
        super().save(*args, **kwargs)

    @property
    def is_published(self) -> bool:
        return self.status == self.Status.PUBLISH
