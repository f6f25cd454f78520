from django.core.management.base import BaseCommand

from shared.application.message_bus import message_bus
from shared.domain.exceptions import Conflict
from apps.rooms.application.command_handlers import CreateRoomCommand

DEFAULT_ROOMS = (
    ("Conference Room A", 10, "1st Floor, North Wing"),
    ("Conference Room B", 12, "1st Floor, South Wing"),
    ("Small Meeting Room", 4, "2nd Floor"),
    ("Board Room", 20, "Top Floor"),
)


class Command(BaseCommand):
    help = 'Creates the default set of rooms; rooms that already exist are skipped'

    def handle(self, *args, **options):
        created_count = 0

        for name, capacity, location in DEFAULT_ROOMS:
            try:
                message_bus.handle_command(
                    CreateRoomCommand(name=name, capacity=capacity, location=location)
                )
            except Conflict:
                self.stdout.write(f"Room already exists: {name}")
                continue

            created_count += 1
            self.stdout.write(f"Created room: {name}")

        self.stdout.write(self.style.SUCCESS(f"Created {created_count} room(s)"))
