"""Admin configuration for the simulator app."""
from django.contrib import admin

from simulator.models import Option


@admin.register(Option)
class OptionAdmin(admin.ModelAdmin):
    list_display = ("name", "value", "updated_at")
    search_fields = ("name",)
    readonly_fields = ("created_at", "updated_at")
