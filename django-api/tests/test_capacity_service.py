"""Tests for CapacityService: session upserts and seat accounting.

Run with: pytest tests/test_capacity_service.py -v
"""

from datetime import date, time, timedelta

import pytest

from training import models as orm
from training.domain import SessionStatus
from training.domain.errors import (
    ClassNotFoundError,
    SessionFullError,
    SessionNotFoundError,
    ValidationError,
)


def _assert_seat_invariant(session):
    assert 0 <= session.available_seats.value <= session.max_seats.value
    if session.status == SessionStatus.FULL:
        assert session.available_seats.value == 0


@pytest.mark.django_db
class TestUpsertSession:
    """Tests for creating and editing sessions."""

    def test_create_defaults_to_twelve_open_seats(self, class_factory, session_factory, next_week):
        """A new session gets 12 seats, all available, and is scheduled."""
        class_factory()

        session = session_factory()

        assert session.max_seats.value == 12
        assert session.available_seats.value == 12
        assert session.status == SessionStatus.SCHEDULED
        assert session.date == next_week
        assert session.start_time == time(9, 0)
        assert session.class_id == "rifle-101"

    def test_create_with_explicit_capacity(self, class_factory, session_factory):
        """available_seats starts at the requested max_seats."""
        class_factory()

        session = session_factory(max_seats="5")

        assert (session.max_seats.value, session.available_seats.value) == (5, 5)

    @pytest.mark.parametrize("max_seats", [0, -3, "many"])
    def test_invalid_capacity_rejected(self, class_factory, session_factory, max_seats):
        """max_seats must be a positive integer."""
        class_factory()

        with pytest.raises(ValidationError):
            session_factory(max_seats=max_seats)

    @pytest.mark.parametrize("missing", ["id", "class_id", "date", "start_time", "end_time"])
    def test_required_fields(self, class_factory, capacity, tenant, missing):
        """Missing session fields raise ValidationError before any write."""
        class_factory()
        values = {
            "id": "s-1",
            "class_id": "rifle-101",
            "date": "2030-01-01",
            "start_time": "09:00",
            "end_time": "12:00",
        }
        del values[missing]

        with pytest.raises(ValidationError):
            capacity.upsert_session(tenant, values)

        assert not orm.ClassSession.objects.exists()

    def test_unknown_status_rejected(self, class_factory, session_factory):
        """Only scheduled, full and cancelled are accepted."""
        class_factory()

        with pytest.raises(ValidationError):
            session_factory(status="postponed")

    def test_class_must_exist_in_tenant(self, session_factory):
        """A session for an unknown class raises ClassNotFoundError."""
        with pytest.raises(ClassNotFoundError):
            session_factory(class_id="ghost")

        assert not orm.ClassSession.objects.exists()

    def test_edit_replaces_non_seat_fields_wholesale(self, class_factory, session_factory):
        """Editing replaces location and instructor; omitted ones become empty."""
        class_factory()
        session_factory(location="Range A", instructor="J. Smith")

        edited = session_factory(location="Range B", instructor=None, start_time="10:30")

        assert edited.location == "Range B"
        assert edited.instructor is None
        assert edited.start_time == time(10, 30)

    def test_reduction_subtracts_from_available_floored_at_zero(
        self, class_factory, session_factory, registration_factory
    ):
        """12 seats with 8 taken, cut to 5: available drops from 4 to 0 and never below."""
        class_factory()
        session_factory(max_seats=12)
        for _ in range(8):
            registration_factory()

        reduced = session_factory(max_seats=5)

        assert reduced.max_seats.value == 5
        assert reduced.available_seats.value == 0
        assert reduced.status == SessionStatus.FULL
        _assert_seat_invariant(reduced)

    def test_increase_does_not_resurrect_consumed_seats(
        self, class_factory, session_factory, registration_factory
    ):
        """After cutting 12 -> 5 with 8 taken, growing back to 12 leaves available at 0."""
        class_factory()
        session_factory(max_seats=12)
        for _ in range(8):
            registration_factory()
        session_factory(max_seats=5)

        grown = session_factory(max_seats=12)

        assert grown.max_seats.value == 12
        assert grown.available_seats.value == 0
        assert grown.status == SessionStatus.FULL

    def test_partial_reduction_keeps_taken_seats(
        self, class_factory, session_factory, registration_factory
    ):
        """Cutting 10 -> 8 with 3 taken leaves 5 available."""
        class_factory()
        session_factory(max_seats=10)
        for _ in range(3):
            registration_factory()

        reduced = session_factory(max_seats=8)

        assert reduced.available_seats.value == 5
        assert reduced.status == SessionStatus.SCHEDULED

    def test_increase_keeps_available_seats(self, class_factory, session_factory, registration_factory):
        """Growing capacity leaves available_seats at its current value."""
        class_factory()
        session_factory(max_seats=4)
        registration_factory()

        grown = session_factory(max_seats=10)

        assert (grown.max_seats.value, grown.available_seats.value) == (10, 3)

    def test_requested_full_status_normalised_when_seats_remain(self, class_factory, session_factory):
        """A session with free seats cannot be stored as full."""
        class_factory()

        session = session_factory(status="full")

        assert session.status == SessionStatus.SCHEDULED

    def test_cancelled_status_kept_even_when_no_seat_left(
        self, class_factory, session_factory, registration_factory
    ):
        """Cancelled is kept as requested whatever the seat count."""
        class_factory()
        session_factory(max_seats=1)
        registration_factory()

        cancelled = session_factory(max_seats=1, status="cancelled")

        assert cancelled.status == SessionStatus.CANCELLED
        assert cancelled.available_seats.value == 0


@pytest.mark.django_db
class TestSeatLedger:
    """Tests for consuming and releasing seats."""

    def test_consume_takes_one_seat(self, class_factory, session_factory, capacity, tenant):
        """consume_seat decrements available_seats by exactly one."""
        class_factory()
        session_factory(max_seats=3)

        capacity.consume_seat(tenant, "s-1")

        assert capacity.get_session(tenant, "s-1").available_seats.value == 2

    def test_consume_last_seat_marks_full(self, class_factory, session_factory, capacity, tenant):
        """Taking the last seat flips the status to full."""
        class_factory()
        session_factory(max_seats=1)

        capacity.consume_seat(tenant, "s-1")

        session = capacity.get_session(tenant, "s-1")
        assert session.available_seats.value == 0
        assert session.status == SessionStatus.FULL

    def test_consume_with_no_seat_left_raises_session_full(
        self, class_factory, session_factory, capacity, tenant
    ):
        """A session with zero seats is never decremented below zero."""
        class_factory()
        session_factory(max_seats=1)
        capacity.consume_seat(tenant, "s-1")

        with pytest.raises(SessionFullError):
            capacity.consume_seat(tenant, "s-1")

        assert capacity.get_session(tenant, "s-1").available_seats.value == 0

    def test_consume_unknown_session_raises_not_found(self, capacity, tenant):
        """consume_seat on an unknown session raises SessionNotFoundError."""
        with pytest.raises(SessionNotFoundError):
            capacity.consume_seat(tenant, "missing")

    def test_release_reopens_full_session(self, class_factory, session_factory, capacity, tenant):
        """Releasing a seat of a full session makes it scheduled again."""
        class_factory()
        session_factory(max_seats=1)
        capacity.consume_seat(tenant, "s-1")

        released = capacity.release_seat(tenant, "s-1")

        assert released.available_seats.value == 1
        assert released.status == SessionStatus.SCHEDULED

    def test_release_never_exceeds_max_seats(self, class_factory, session_factory, capacity, tenant):
        """Releasing on a session with every seat free changes nothing."""
        class_factory()
        session_factory(max_seats=2)

        released = capacity.release_seat(tenant, "s-1")

        assert released.available_seats.value == 2

    def test_release_unknown_session_raises_not_found(self, capacity, tenant):
        """release_seat on an unknown session raises SessionNotFoundError."""
        with pytest.raises(SessionNotFoundError):
            capacity.release_seat(tenant, "missing")


@pytest.mark.django_db
class TestSessionQueries:
    """Tests for listing, fetching and deleting sessions."""

    def test_list_orders_by_date_then_start_time(self, class_factory, session_factory, capacity, tenant):
        """Sessions are listed by date, then start time."""
        class_factory()
        later = (date.today() + timedelta(days=10)).isoformat()
        sooner = (date.today() + timedelta(days=3)).isoformat()
        session_factory("c", date=later, start_time="08:00")
        session_factory("b", date=sooner, start_time="13:00")
        session_factory("a", date=sooner, start_time="09:00")

        assert [s.id for s in capacity.list_sessions(tenant, "rifle-101")] == ["a", "b", "c"]

    def test_future_only_hides_past_and_unscheduled(
        self, class_factory, session_factory, registration_factory, capacity, tenant
    ):
        """By default only upcoming scheduled sessions are listed."""
        class_factory()
        session_factory("past", date=(date.today() - timedelta(days=1)).isoformat())
        session_factory("today", date=date.today().isoformat())
        session_factory("cancelled", status="cancelled")
        session_factory("full", max_seats=1)
        registration_factory(session_id="full")

        upcoming = [s.id for s in capacity.list_sessions(tenant, "rifle-101")]
        everything = {s.id for s in capacity.list_sessions(tenant, "rifle-101", future_only=False)}

        assert upcoming == ["today"]
        assert everything == {"past", "today", "cancelled", "full"}

    def test_get_unknown_session_raises_not_found(self, capacity, tenant):
        """get_session raises SessionNotFoundError for an unknown id."""
        with pytest.raises(SessionNotFoundError):
            capacity.get_session(tenant, "missing")

    def test_delete_keeps_registrations(
        self, class_factory, session_factory, registration_factory, capacity, tenant
    ):
        """Deleting a session removes it but leaves its registrations in place."""
        class_factory()
        session_factory()
        registration_factory()

        capacity.delete_session(tenant, "s-1")

        with pytest.raises(SessionNotFoundError):
            capacity.get_session(tenant, "s-1")
        assert orm.Registration.objects.filter(session_code="s-1").count() == 1

    def test_delete_unknown_session_raises_not_found(self, capacity, tenant):
        """Deleting an unknown session raises SessionNotFoundError."""
        with pytest.raises(SessionNotFoundError):
            capacity.delete_session(tenant, "missing")
