from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from apps.bookings.domain.entities import TRANSITIONS, Booking, BookingAction, BookingStatus
from apps.bookings.domain.events import (
    BookingCancelled,
    BookingCompleted,
    BookingConfirmed,
    BookingCreated,
    BookingRescheduled,
)
from shared.domain.clock import FixedClock
from shared.domain.exceptions import Conflict, InvalidTransition, ValidationError
from shared.domain.value_objects import TimeRange

NOW = datetime(2030, 1, 15, 8, 0, tzinfo=timezone.utc)
ROOM_ID = uuid4()


def window(start_hour, end_hour):
    return TimeRange(NOW.replace(hour=start_hour), NOW.replace(hour=end_hour))


@pytest.fixture
def clock():
    return FixedClock(NOW)


def new_booking(clock, time_range=None, room_id=ROOM_ID):
    return Booking.create(
        room_id=room_id,
        created_by_user_id=uuid4(),
        time_range=time_range or window(10, 11),
        subject="Planning",
        clock=clock,
    )


def test_create_starts_pending_and_records_event(clock):
    booking = new_booking(clock)

    assert booking.status == BookingStatus.PENDING
    assert booking.created_at == NOW
    assert booking.status_changed_at is None
    assert [type(e) for e in booking.events] == [BookingCreated]
    assert booking.events[0].time_range == window(10, 11)


def test_create_rejects_window_that_already_ended(clock):
    clock.set(NOW.replace(hour=11))

    with pytest.raises(Conflict):
        new_booking(clock, window(10, 11))


def test_create_allows_window_that_already_started(clock):
    clock.set(NOW.replace(hour=10, minute=30))

    assert new_booking(clock, window(10, 11)).status == BookingStatus.PENDING


def test_subject_is_limited_to_200_characters(clock):
    with pytest.raises(ValidationError):
        Booking.create(ROOM_ID, uuid4(), window(10, 11), subject="x" * 201, clock=clock)

    booking = Booking.create(ROOM_ID, uuid4(), window(10, 11), subject="x" * 200, clock=clock)
    assert len(booking.subject) == 200


def test_blank_subject_becomes_none(clock):
    booking = Booking.create(ROOM_ID, uuid4(), window(10, 11), subject="   ", clock=clock)

    assert booking.subject is None


def test_room_and_requester_are_required(clock):
    with pytest.raises(ValidationError):
        Booking.create(None, uuid4(), window(10, 11), clock=clock)
    with pytest.raises(ValidationError):
        Booking.create(ROOM_ID, None, window(10, 11), clock=clock)


def test_confirm_without_overlap(clock):
    booking = new_booking(clock)
    booking.clear_events()
    clock.advance(timedelta(minutes=1))

    booking.confirm([], clock=clock)

    assert booking.status == BookingStatus.CONFIRMED
    assert booking.status_changed_at == NOW + timedelta(minutes=1)
    assert [type(e) for e in booking.events] == [BookingConfirmed]


@pytest.mark.parametrize("status", [BookingStatus.PENDING, BookingStatus.CONFIRMED])
def test_confirm_with_identical_range_conflicts(clock, status):
    booking = new_booking(clock)
    other = new_booking(clock)
    other.status = status

    with pytest.raises(Conflict):
        booking.confirm([other], clock=clock)

    assert booking.status == BookingStatus.PENDING


def test_confirm_ignores_itself_cancelled_and_other_rooms(clock):
    booking = new_booking(clock)
    cancelled = new_booking(clock)
    cancelled.cancel(clock=clock)
    elsewhere = new_booking(clock, room_id=uuid4())

    booking.confirm([booking, cancelled, elsewhere], clock=clock)

    assert booking.status == BookingStatus.CONFIRMED


def test_confirm_ignores_touching_bookings(clock):
    booking = new_booking(clock, window(10, 11))

    booking.confirm([new_booking(clock, window(11, 12)), new_booking(clock, window(9, 10))], clock=clock)

    assert booking.status == BookingStatus.CONFIRMED


@pytest.mark.parametrize("status", [BookingStatus.CONFIRMED, BookingStatus.CANCELLED, BookingStatus.COMPLETED])
def test_confirm_only_from_pending(clock, status):
    booking = new_booking(clock)
    booking.status = status

    with pytest.raises(InvalidTransition):
        booking.confirm([], clock=clock)


def test_cancel_is_idempotent(clock):
    booking = new_booking(clock)
    booking.confirm([], clock=clock)
    booking.clear_events()

    booking.cancel(clock=clock)
    first_change = booking.status_changed_at
    clock.advance(timedelta(minutes=5))
    booking.cancel(clock=clock)

    assert booking.status == BookingStatus.CANCELLED
    assert booking.status_changed_at == first_change
    assert [type(e) for e in booking.events] == [BookingCancelled]
    assert booking.events[0].old_status == "confirmed"


def test_completed_booking_cannot_be_cancelled(clock):
    booking = new_booking(clock)
    booking.confirm([], clock=clock)
    clock.set(NOW.replace(hour=11))
    booking.complete(clock=clock)

    with pytest.raises(InvalidTransition):
        booking.cancel(clock=clock)


def test_complete_before_end_fails(clock):
    booking = new_booking(clock)
    booking.confirm([], clock=clock)
    clock.set(NOW.replace(hour=10, minute=59))

    with pytest.raises(InvalidTransition):
        booking.complete(clock=clock)
    assert booking.status == BookingStatus.CONFIRMED


def test_complete_after_end(clock):
    booking = new_booking(clock)
    booking.confirm([], clock=clock)
    booking.clear_events()
    clock.set(NOW.replace(hour=11))

    booking.complete(clock=clock)

    assert booking.status == BookingStatus.COMPLETED
    assert booking.status_changed_at == NOW.replace(hour=11)
    assert [type(e) for e in booking.events] == [BookingCompleted]


def test_complete_requires_confirmed(clock):
    booking = new_booking(clock)
    clock.set(NOW.replace(hour=12))

    with pytest.raises(InvalidTransition):
        booking.complete(clock=clock)


def test_invalid_transition_is_a_conflict(clock):
    booking = new_booking(clock)
    booking.cancel(clock=clock)

    with pytest.raises(Conflict):
        booking.confirm([], clock=clock)


def test_reschedule_confirmed_returns_to_pending(clock):
    booking = new_booking(clock)
    booking.confirm([], clock=clock)
    booking.clear_events()

    booking.reschedule(window(14, 15), [], clock=clock)

    assert booking.status == BookingStatus.PENDING
    assert booking.time_range == window(14, 15)
    event = booking.events[0]
    assert isinstance(event, BookingRescheduled)
    assert event.previous_range == window(10, 11)


def test_reschedule_checks_overlap_at_new_window(clock):
    booking = new_booking(clock, window(10, 11))
    busy = new_booking(clock, window(14, 15))

    with pytest.raises(Conflict):
        booking.reschedule(window(14, 16), [busy], clock=clock)

    assert booking.time_range == window(10, 11)


def test_reschedule_may_overlap_its_own_old_window(clock):
    booking = new_booking(clock, window(10, 11))

    booking.reschedule(window(10, 12), [booking], clock=clock)

    assert booking.time_range == window(10, 12)


def test_reschedule_into_the_past_fails(clock):
    booking = new_booking(clock, window(10, 11))
    clock.set(NOW.replace(hour=13))

    with pytest.raises(InvalidTransition):
        booking.reschedule(window(12, 13), [], clock=clock)


def test_reschedule_cancelled_booking_fails(clock):
    booking = new_booking(clock)
    booking.cancel(clock=clock)

    with pytest.raises(InvalidTransition):
        booking.reschedule(window(14, 15), [], clock=clock)


def test_transition_table_is_closed():
    for status in BookingStatus:
        for action in BookingAction:
            booking = Booking(
                room_id=ROOM_ID,
                created_by_user_id=uuid4(),
                time_range=window(10, 11),
                status=status,
                created_at=NOW,
            )
            assert booking.can(action) == ((status, action) in TRANSITIONS)

    assert all(
        (status, BookingAction.CONFIRM) not in TRANSITIONS
        for status in (BookingStatus.CONFIRMED, BookingStatus.COMPLETED, BookingStatus.CANCELLED)
    )
