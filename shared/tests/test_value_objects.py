from datetime import datetime, timedelta, timezone

import pytest

from shared.domain.exceptions import InvalidInterval, ValidationError
from shared.domain.value_objects import TimeRange


def at(hour, minute=0):
    return datetime(2030, 1, 15, hour, minute, tzinfo=timezone.utc)


def test_create_accepts_end_after_start():
    time_range = TimeRange.create(at(10), at(11))

    assert time_range.start == at(10)
    assert time_range.end == at(11)
    assert time_range.duration == timedelta(hours=1)


@pytest.mark.parametrize("start, end", [(at(11), at(10)), (at(10), at(10))])
def test_create_rejects_end_not_after_start(start, end):
    with pytest.raises(InvalidInterval):
        TimeRange.create(start, end)


def test_invalid_interval_is_a_validation_error():
    with pytest.raises(ValidationError):
        TimeRange(at(12), at(9))


def test_naive_datetimes_are_rejected():
    with pytest.raises(InvalidInterval):
        TimeRange(datetime(2030, 1, 15, 10), datetime(2030, 1, 15, 11))


def test_equality_is_structural():
    assert TimeRange(at(10), at(11)) == TimeRange(at(10), at(11))
    assert TimeRange(at(10), at(11)) != TimeRange(at(10), at(12))
    assert len({TimeRange(at(10), at(11)), TimeRange(at(10), at(11))}) == 1


def test_time_range_is_immutable():
    time_range = TimeRange(at(10), at(11))

    with pytest.raises(AttributeError):
        time_range.end = at(12)


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (TimeRange(at(10), at(11)), TimeRange(at(10), at(11)), True),
        (TimeRange(at(10), at(11)), TimeRange(at(10, 30), at(11, 30)), True),
        (TimeRange(at(10), at(12)), TimeRange(at(10, 30), at(11, 30)), True),
        (TimeRange(at(11), at(12)), TimeRange(at(10, 30), at(11, 30)), True),
        (TimeRange(at(10), at(11)), TimeRange(at(11), at(12)), False),
        (TimeRange(at(10), at(11)), TimeRange(at(12), at(13)), False),
    ],
)
def test_overlap_is_symmetric(a, b, expected):
    assert a.overlaps(b) is expected
    assert b.overlaps(a) is expected


def test_touching_ranges_do_not_overlap():
    assert TimeRange(at(1), at(2)).overlaps(TimeRange(at(2), at(3))) is False


def test_overlap_requires_a_time_range():
    with pytest.raises(TypeError):
        TimeRange(at(10), at(11)).overlaps((at(10), at(11)))


def test_contains_is_inclusive_on_both_ends():
    time_range = TimeRange(at(10), at(11))

    assert time_range.contains(at(10))
    assert time_range.contains(at(10, 30))
    assert time_range.contains(at(11))
    assert not time_range.contains(at(11, 1))
    assert not time_range.contains(at(9, 59))


def test_shift_moves_both_bounds():
    shifted = TimeRange(at(10), at(11)).shift(timedelta(minutes=-30))

    assert shifted == TimeRange(at(9, 30), at(10, 30))


def test_expand_moves_only_the_end():
    time_range = TimeRange(at(10), at(11))

    assert time_range.expand(timedelta(minutes=30)) == TimeRange(at(10), at(11, 30))
    assert time_range == TimeRange(at(10), at(11))


def test_expand_cannot_invert_the_range():
    with pytest.raises(InvalidInterval):
        TimeRange(at(10), at(11)).expand(timedelta(hours=-1))
