"""Models for the simulator app."""
from django.db import models

from core.models import TimeStampedModel


class Option(TimeStampedModel):
    """Named, JSON-encoded site setting."""

    name = models.CharField("name", max_length=191, unique=True)
    value = models.JSONField("value", null=True, blank=True)

    class Meta:
        verbose_name = "option"
        verbose_name_plural = "options"
        ordering = ["name"]

    def __str__(self):
        return self.name
