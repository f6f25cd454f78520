from django.apps import AppConfig
from django.conf import settings


class BookingsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.bookings"

    def ready(self) -> None:
        from shared.application.message_bus import message_bus
        from shared.application.uow import DjangoUnitOfWork, IsolationLevel
        from apps.bookings.application import register_handlers

        message_bus.max_retries = settings.BOOKING_CONCURRENCY_RETRIES
        register_handlers(
            message_bus,
            DjangoUnitOfWork,
            isolation_level=IsolationLevel(settings.BOOKING_ISOLATION_LEVEL),
        )
