"""
Tests for mechanic availability slots.

BASE_DAY (2025-03-10) is a Monday.
"""
from datetime import date, datetime, time

from shopmgr.core.status_config import MechanicStatus
from shopmgr.schemas.scheduling import DaySlot
from shopmgr.services.availability import iter_business_days

from tests.factories import BASE_DAY, at, create_test_appointment, create_test_mechanic

MONDAY = BASE_DAY.date()
FRIDAY = date(2025, 3, 14)
SUNDAY = date(2025, 3, 16)


class TestBusinessDays:

    def test_skips_weekend(self):
        days = list(iter_business_days(MONDAY, date(2025, 3, 17)))
        assert days == [
            date(2025, 3, 10), date(2025, 3, 11), date(2025, 3, 12),
            date(2025, 3, 13), date(2025, 3, 14), date(2025, 3, 17),
        ]

    def test_weekend_only_range_is_empty(self):
        assert list(iter_business_days(date(2025, 3, 15), SUNDAY)) == []


class TestMechanicAvailability:

    def test_full_week_yields_five_open_days(self, db_session, availability_service):
        mechanic = create_test_mechanic(db_session)
        db_session.commit()

        result = availability_service.get_mechanic_availability(mechanic.id, MONDAY, SUNDAY)

        assert result.ok
        slots = result.value
        assert len(slots) == 5
        assert [s.date for s in slots] == [date(2025, 3, d) for d in range(10, 15)]
        assert all(a.date < b.date for a, b in zip(slots, slots[1:]))
        assert all(s.available and s.appointment_count is None for s in slots)

    def test_slot_covers_workday_window(self, db_session, availability_service):
        mechanic = create_test_mechanic(db_session)
        db_session.commit()

        slot = availability_service.get_mechanic_availability(mechanic.id, MONDAY, MONDAY).value[0]

        assert slot == DaySlot(
            date=MONDAY,
            start_time=datetime.combine(MONDAY, time(8, 0)),
            end_time=datetime.combine(MONDAY, time(17, 0)),
            available=True,
        )

    def test_booked_days_report_count(self, db_session, availability_service):
        mechanic = create_test_mechanic(db_session)
        create_test_appointment(db_session, appointment_date=at(9), mechanic=mechanic)
        create_test_appointment(db_session, appointment_date=at(14), mechanic=mechanic, status="confirmed")
        create_test_appointment(db_session, appointment_date=at(10, day_offset=2), mechanic=mechanic,
                                status="in_progress")
        db_session.commit()

        slots = availability_service.get_mechanic_availability(mechanic.id, MONDAY, FRIDAY).value

        by_day = {s.date: s for s in slots}
        assert by_day[MONDAY].available is False
        assert by_day[MONDAY].appointment_count == 2
        assert by_day[date(2025, 3, 12)].appointment_count == 1
        assert by_day[date(2025, 3, 11)].available is True
        assert by_day[date(2025, 3, 11)].appointment_count is None

    def test_ignores_inactive_and_other_mechanics_appointments(self, db_session, availability_service):
        mechanic = create_test_mechanic(db_session)
        other = create_test_mechanic(db_session)
        create_test_appointment(db_session, appointment_date=at(9), mechanic=mechanic, status="cancelled")
        create_test_appointment(db_session, appointment_date=at(9), mechanic=mechanic, status="completed")
        create_test_appointment(db_session, appointment_date=at(9), mechanic=other)
        db_session.commit()

        slots = availability_service.get_mechanic_availability(mechanic.id, MONDAY, MONDAY).value

        assert slots[0].available is True

    def test_weekend_appointments_produce_no_slot(self, db_session, availability_service):
        mechanic = create_test_mechanic(db_session)
        create_test_appointment(db_session, appointment_date=at(10, day_offset=5), mechanic=mechanic)
        db_session.commit()

        slots = availability_service.get_mechanic_availability(mechanic.id, MONDAY, SUNDAY).value

        assert len(slots) == 5
        assert all(s.available for s in slots)

    def test_datetime_bounds_filter_appointments(self, db_session, availability_service):
        mechanic = create_test_mechanic(db_session)
        create_test_appointment(db_session, appointment_date=at(8), mechanic=mechanic)
        create_test_appointment(db_session, appointment_date=at(16), mechanic=mechanic)
        db_session.commit()

        # Only the 16:00 appointment falls inside [12:00, 23:00]
        slots = availability_service.get_mechanic_availability(mechanic.id, at(12), at(23)).value

        assert len(slots) == 1
        assert slots[0].appointment_count == 1

    def test_inverted_range_is_empty(self, db_session, availability_service):
        mechanic = create_test_mechanic(db_session)
        db_session.commit()

        result = availability_service.get_mechanic_availability(mechanic.id, FRIDAY, MONDAY)

        assert result.ok
        assert result.value == []

    def test_inactive_mechanic_has_no_availability(self, db_session, availability_service):
        mechanic = create_test_mechanic(db_session, status=MechanicStatus.INACTIVE.value)
        db_session.commit()

        result = availability_service.get_mechanic_availability(mechanic.id, MONDAY, SUNDAY)

        assert result.ok
        assert result.value == []
        assert result.error is None

    def test_missing_mechanic_has_no_availability(self, db_session, availability_service):
        result = availability_service.get_mechanic_availability(12345, MONDAY, SUNDAY)

        assert result.ok
        assert result.value == []
