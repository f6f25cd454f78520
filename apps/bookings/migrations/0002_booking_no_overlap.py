"""Store-level guard against double bookings.

PostgreSQL only: two non-cancelled bookings of the same room may not have
overlapping ``[start_at, end_at)`` windows. Other backends rely on the
room row lock taken by the use-cases.
"""

from django.db import migrations

CONSTRAINT_NAME = "booking_room_no_overlap"


def add_exclusion_constraint(apps, schema_editor):
    if schema_editor.connection.vendor != "postgresql":
        return
    schema_editor.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")
    schema_editor.execute(
        f"""
        ALTER TABLE bookings_booking
        ADD CONSTRAINT {CONSTRAINT_NAME}
        EXCLUDE USING gist (
            room_id WITH =,
            tstzrange(start_at, end_at, '[)') WITH &&
        )
        WHERE (status <> 'cancelled')
        """
    )


def drop_exclusion_constraint(apps, schema_editor):
    if schema_editor.connection.vendor != "postgresql":
        return
    schema_editor.execute(
        f"ALTER TABLE bookings_booking DROP CONSTRAINT IF EXISTS {CONSTRAINT_NAME}"
    )


class Migration(migrations.Migration):

    dependencies = [
        ("bookings", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(add_exclusion_constraint, drop_exclusion_constraint),
    ]
