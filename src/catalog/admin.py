"""Admin configuration for the catalog app."""
from django.contrib import admin

from .models import Category, Product


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------

@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "parent", "created_at")
    list_filter = ("parent",)
    search_fields = ("name", "slug")
    prepopulated_fields = {"slug": ("name",)}
    readonly_fields = ("created_at", "updated_at")
    list_select_related = ("parent",)


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------

@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "sku",
        "category",
        "regular_price",
        "status",
        "stock_quantity",
        "created_at",
    )
    list_filter = ("status", "category", "manage_stock")
    search_fields = ("name", "sku")
    prepopulated_fields = {"slug": ("name",)}
    list_editable = ("status",)
    readonly_fields = ("created_at", "updated_at")
    list_select_related = ("category",)
