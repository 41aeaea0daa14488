"""Views for the simulator settings page and its asynchronous actions."""
import logging

from django.contrib import messages
from django.contrib.admin.views.decorators import staff_member_required
from django.http import JsonResponse
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views.decorators.http import require_POST

from simulator import demo
from simulator.backends import BeatScheduler, OptionStore
from simulator.forms import SimulatorSettingsForm
from simulator.schedule import ENABLE_CRON_OPTION, SIMULATE_EVENT

logger = logging.getLogger("salesim")


def _json_result(success: bool, data, status: int = 200) -> JsonResponse:
    return JsonResponse({"success": success, "data": data}, status=status)


# ---------------------------------------------------------------------------
# Settings page
# ---------------------------------------------------------------------------
@staff_member_required
def simulator_settings(request):
    """Toggle the monthly simulation and expose the demo data buttons."""
    options = OptionStore()

    if request.method == "POST":
        form = SimulatorSettingsForm(request.POST)
        if form.is_valid():
            enabled = form.cleaned_data["enable_cron"]
            # Saving the option resynchronizes the schedule (see signals).
            options.set(ENABLE_CRON_OPTION, enabled)
            logger.info("Simulator cron %s by %s", "enabled" if enabled else "disabled", request.user)
            messages.success(request, "Settings saved.")
            return redirect("simulator:settings")
    else:
        form = SimulatorSettingsForm(
            initial={"enable_cron": bool(options.get(ENABLE_CRON_OPTION, False))},
        )

    context = {
        "form": form,
        "job": BeatScheduler().get(SIMULATE_EVENT),
        "simulator_ajax": {
            "install_demo_customers_url": reverse("simulator:install-demo-customers"),
            "install_sample_products_url": reverse("simulator:install-sample-products"),
        },
    }
    return render(request, "simulator/settings.html", context)


# ---------------------------------------------------------------------------
# Asynchronous demo data installers (POST only, CSRF protected)
# ---------------------------------------------------------------------------
@staff_member_required
@require_POST
def install_demo_customers(request):
    try:
        created = demo.install_demo_customers()
    except demo.DemoDataError as exc:
        logger.warning("Demo customers install failed: %s", exc)
        return _json_result(False, str(exc), status=400)

    logger.info("%d demo customer(s) installed by %s", len(created), request.user)
    return _json_result(True, "Demo customers installed successfully!")


@staff_member_required
@require_POST
def install_sample_products(request):
    try:
        summary = demo.install_sample_products()
    except demo.DemoDataError as exc:
        logger.warning("Sample products install failed: %s", exc)
        return _json_result(False, str(exc), status=400)

    message = (
        f"Sample products installed successfully! "
        f"({summary['created']} created, {summary['updated']} updated)"
    )
    if summary["errors"]:
        message += f" {summary['errors']} row(s) skipped."
    return _json_result(True, message)
