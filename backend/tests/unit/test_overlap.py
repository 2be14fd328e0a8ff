"""
Unit tests for overlap detection.

Pure interval logic: appointments are built in memory, no database.
"""
import itertools

import pytest

from shopmgr.models import Appointment
from shopmgr.services.overlap import (
    Interval,
    count_overlapping,
    find_overlapping,
    overlaps,
    resolve_interval,
)

from tests.factories import at


def make_appointment(id, appointment_date=None, start=None, end=None, status="scheduled"):
    return Appointment(
        id=id,
        appointment_date=appointment_date or start or at(9),
        scheduled_start_time=start,
        scheduled_end_time=end,
        status=status,
    )


class TestInterval:

    def test_instant(self):
        assert Interval(at(9), at(9)).is_instant

    def test_inverted_interval_rejected(self):
        with pytest.raises(ValueError):
            Interval(at(10), at(9))


class TestResolveInterval:

    def test_precise_bounds_win(self):
        appt = make_appointment(1, appointment_date=at(8), start=at(9), end=at(11))
        assert resolve_interval(appt) == Interval(at(9), at(11))

    def test_no_bounds_collapses_to_appointment_date(self):
        appt = make_appointment(1, appointment_date=at(10))
        interval = resolve_interval(appt)
        assert interval == Interval(at(10), at(10))
        assert interval.is_instant

    def test_missing_end_falls_back_to_appointment_date(self):
        appt = make_appointment(1, appointment_date=at(12), start=at(9))
        assert resolve_interval(appt) == Interval(at(9), at(12))

    def test_missing_start_falls_back_to_appointment_date(self):
        appt = make_appointment(1, appointment_date=at(9), end=at(11))
        assert resolve_interval(appt) == Interval(at(9), at(11))

    def test_fallback_end_before_start_collapses_to_start(self):
        appt = make_appointment(1, appointment_date=at(8), start=at(9))
        assert resolve_interval(appt) == Interval(at(9), at(9))


class TestOverlaps:

    @pytest.mark.parametrize("a, b, expected", [
        (Interval(at(9), at(10)), Interval(at(11), at(12)), False),
        (Interval(at(9), at(11)), Interval(at(10), at(12)), True),
        (Interval(at(9), at(12)), Interval(at(10), at(11)), True),
        # Closed bounds: touching endpoints overlap
        (Interval(at(9), at(10)), Interval(at(10), at(11)), True),
        (Interval(at(10), at(10)), Interval(at(9), at(11)), True),
        (Interval(at(10), at(10)), Interval(at(10), at(10)), True),
        (Interval(at(10), at(10)), Interval(at(10, 1), at(11)), False),
    ])
    def test_overlaps(self, a, b, expected):
        assert overlaps(a, b) is expected

    def test_symmetric(self):
        intervals = [
            Interval(at(8), at(9)),
            Interval(at(9), at(9)),
            Interval(at(8, 30), at(12)),
            Interval(at(12), at(17)),
            Interval(at(13), at(13)),
        ]
        for a, b in itertools.product(intervals, repeat=2):
            assert overlaps(a, b) == overlaps(b, a)


class TestCountOverlapping:

    def test_counts_only_active_overlapping(self):
        candidate = Interval(at(9), at(12))
        appointments = [
            make_appointment(1, start=at(8), end=at(9, 30)),
            make_appointment(2, start=at(11), end=at(13), status="confirmed"),
            make_appointment(3, start=at(10), end=at(11), status="in_progress"),
            make_appointment(4, start=at(10), end=at(11), status="cancelled"),
            make_appointment(5, start=at(10), end=at(11), status="completed"),
            make_appointment(6, start=at(13), end=at(14)),
        ]
        assert count_overlapping(candidate, appointments) == 3
        assert [a.id for a in find_overlapping(candidate, appointments)] == [1, 2, 3]

    def test_excludes_appointment_being_assigned(self):
        candidate = Interval(at(9), at(10))
        appointments = [
            make_appointment(1, start=at(9), end=at(10)),
            make_appointment(2, start=at(9, 30), end=at(10, 30)),
        ]
        assert count_overlapping(candidate, appointments, exclude_appointment_id=1) == 1

    def test_point_appointments_participate(self):
        candidate = Interval(at(9), at(10))
        appointments = [
            make_appointment(1, appointment_date=at(9, 30)),
            make_appointment(2, appointment_date=at(10, 30)),
        ]
        assert count_overlapping(candidate, appointments) == 1

    def test_empty(self):
        assert count_overlapping(Interval(at(9), at(10)), []) == 0
