"""URL configuration for the Random Sales Simulator."""
from django.conf import settings
from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView

urlpatterns = [
    path("simulator/", include("simulator.urls")),
    # Root redirect
    path("", RedirectView.as_view(url="/simulator/settings/", permanent=False)),
]

if getattr(settings, "ENABLE_DJANGO_ADMIN", False):
    urlpatterns.insert(0, path("admin/", admin.site.urls))
