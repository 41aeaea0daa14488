"""Forms for the simulator app."""
from django import forms


class SimulatorSettingsForm(forms.Form):
    """Main settings of the simulator."""

    enable_cron = forms.BooleanField(
        required=False,
        label="Enable Cron Job",
        help_text="Generate 10-15 completed orders dated within the past month, once a month.",
        widget=forms.CheckboxInput(attrs={"class": "form-check-input"}),
    )
