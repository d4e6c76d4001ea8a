# reservations/apps.py

from django.apps import AppConfig
import logging


class ReservationsConfig(AppConfig):
    """App configuration for the table reservation engine."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'reservations'
    verbose_name = "Table Reservations"

    def ready(self):
        """Bind the broadcast signal handlers once the app registry is loaded."""
        import reservations.signals  # noqa: F401  # Import solely for side effects
        logging.getLogger(__name__).info("✅ reservations.signals module loaded successfully.")
