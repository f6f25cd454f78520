from django.apps import AppConfig


class RoomsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.rooms"

    def ready(self) -> None:
        from shared.application.message_bus import message_bus
        from shared.application.uow import DjangoUnitOfWork
        from apps.rooms.application import register_handlers

        register_handlers(message_bus, DjangoUnitOfWork)
