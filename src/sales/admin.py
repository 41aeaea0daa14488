"""Admin configuration for the sales app."""
from django.contrib import admin

from sales.models import Order, OrderItem, OrderNote


# ---------------------------------------------------------------------------
# Inlines
# ---------------------------------------------------------------------------

class OrderItemInline(admin.TabularInline):
    """Inline for order lines within the Order admin."""

    model = OrderItem
    extra = 0
    readonly_fields = ("line_total",)
    fields = (
        "product",
        "product_name",
        "unit_price",
        "quantity",
        "line_total",
    )


class OrderNoteInline(admin.TabularInline):
    model = OrderNote
    extra = 0
    readonly_fields = ("content", "created_at")
    fields = ("content", "created_at")


# ---------------------------------------------------------------------------
# Order
# ---------------------------------------------------------------------------

@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin for the Order model."""

    list_display = (
        "__str__",
        "customer",
        "status",
        "total",
        "created_via",
        "created_at",
    )
    list_filter = ("status", "created_via", "created_at")
    search_fields = (
        "customer__email",
        "customer__first_name",
        "customer__last_name",
    )
    readonly_fields = ("subtotal", "tax_total", "total", "date_completed", "updated_at")
    list_select_related = ("customer",)
    inlines = [OrderItemInline, OrderNoteInline]
    date_hierarchy = "created_at"
