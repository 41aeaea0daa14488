"""URL configuration for the simulator app."""
from django.urls import path

from simulator import views

app_name = "simulator"

urlpatterns = [
    path("settings/", views.simulator_settings, name="settings"),
    path(
        "ajax/install-demo-customers/",
        views.install_demo_customers,
        name="install-demo-customers",
    ),
    path(
        "ajax/install-sample-products/",
        views.install_sample_products,
        name="install-sample-products",
    ),
]
