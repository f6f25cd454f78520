"""Double-booking races against the configured database."""

from __future__ import annotations

import unittest
from datetime import timedelta
from threading import Barrier, Lock, Thread
from uuid import uuid4

from django.db import IntegrityError, connection, connections, transaction
from django.test import TransactionTestCase
from django.utils import timezone

from apps.bookings.application.command_handlers import CreateBookingCommand
from apps.bookings.models import Booking
from apps.rooms.models import Room
from shared.application.message_bus import message_bus
from shared.domain.exceptions import Conflict


class ConcurrentBookingTests(TransactionTestCase):
    """Runs on every backend, SQLite included."""

    def setUp(self) -> None:
        self.room = Room.objects.create(name="Board Room", capacity=20, created_at=timezone.now())
        self.start = (timezone.now() + timedelta(days=2)).replace(minute=0, second=0, microsecond=0)

    def _race(self, callers: int) -> list:
        barrier = Barrier(callers)
        results = []
        results_lock = Lock()

        def attempt():
            try:
                barrier.wait()
                try:
                    message_bus.handle_command(
                        CreateBookingCommand(
                            room_id=self.room.id,
                            requester_id=uuid4(),
                            start=self.start,
                            end=self.start + timedelta(hours=1),
                        )
                    )
                    outcome = "created"
                except Conflict:
                    outcome = "conflict"
                except Exception as exc:
                    outcome = f"{exc.__class__.__name__}: {exc}"
                with results_lock:
                    results.append(outcome)
            finally:
                connections.close_all()

        threads = [Thread(target=attempt) for _ in range(callers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        return results

    def test_only_one_of_many_identical_requests_wins(self) -> None:
        results = self._race(callers=6)

        self.assertEqual(sorted(results), ["conflict"] * 5 + ["created"])
        self.assertEqual(Booking.objects.filter(room=self.room).count(), 1)

    def test_two_callers_for_the_same_window(self) -> None:
        results = self._race(callers=2)

        self.assertEqual(sorted(results), ["conflict", "created"])
        self.assertEqual(Booking.objects.filter(room=self.room).count(), 1)


@unittest.skipUnless(connection.vendor == "postgresql", "needs PostgreSQL exclusion constraints")
class ExclusionConstraintTests(TransactionTestCase):
    def setUp(self) -> None:
        self.room = Room.objects.create(name="Board Room", capacity=20, created_at=timezone.now())
        self.start = (timezone.now() + timedelta(days=2)).replace(minute=0, second=0, microsecond=0)

    def test_exclusion_constraint_rejects_overlapping_rows(self) -> None:
        now = timezone.now()
        Booking.objects.create(
            room=self.room,
            created_by_user_id=uuid4(),
            start_at=self.start,
            end_at=self.start + timedelta(hours=1),
            created_at=now,
        )

        with self.assertRaises(IntegrityError), transaction.atomic():
            Booking.objects.create(
                room=self.room,
                created_by_user_id=uuid4(),
                start_at=self.start + timedelta(minutes=30),
                end_at=self.start + timedelta(hours=2),
                created_at=now,
            )

    def test_cancelled_rows_do_not_block(self) -> None:
        now = timezone.now()
        Booking.objects.create(
            room=self.room,
            created_by_user_id=uuid4(),
            start_at=self.start,
            end_at=self.start + timedelta(hours=1),
            status=Booking.Status.CANCELLED,
            created_at=now,
        )

        Booking.objects.create(
            room=self.room,
            created_by_user_id=uuid4(),
            start_at=self.start,
            end_at=self.start + timedelta(hours=1),
            created_at=now,
        )

        self.assertEqual(Booking.objects.filter(room=self.room).count(), 2)
