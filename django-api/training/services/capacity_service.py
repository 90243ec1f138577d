"""Capacity service - sessions and their seat ledger.

A session's max_seats, available_seats and status move together:
- available_seats starts at max_seats;
- shrinking max_seats removes free seats first and never goes below zero;
- growing max_seats leaves available_seats as it was;
- status is full exactly when no seat is left, unless it is cancelled.
"""

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

from training.domain import ClassSession, SessionStatus, TenantId
from training.domain.errors import (
    ClassNotFoundError,
    SessionFullError,
    SessionNotFoundError,
    ValidationError,
)
from training.domain.models import DEFAULT_MAX_SEATS
from training.services import inputs
from training.stores.interfaces import CatalogStore, SessionStore

logger = logging.getLogger(__name__)


class CapacityService:
    """Service for session scheduling and seat accounting."""

    def __init__(self, sessions: SessionStore, catalog: CatalogStore) -> None:
        self._sessions = sessions
        self._catalog = catalog

    def list_sessions(
        self, tenant: TenantId, class_id: str, future_only: bool = True
    ) -> list[ClassSession]:
        """Return sessions of a class by date and start time.

        With future_only, only scheduled sessions from today on are returned.
        """
        scheduled_from = date.today() if future_only else None
        return self._sessions.list_sessions(tenant, class_id, scheduled_from)

    def get_session(self, tenant: TenantId, session_id: str) -> ClassSession:
        """Return a session by id.

        Raises:
            SessionNotFoundError: If the session does not exist in the tenant.
        """
        session = self._sessions.get_session(tenant, session_id)
        if session is None:
            raise SessionNotFoundError()
        return session

    def upsert_session(self, tenant: TenantId, fields: Mapping[str, Any]) -> ClassSession:
        """Create a session or replace an existing one with the same id.

        Every field except the seat counts is replaced wholesale. Seats already
        taken by registrations are kept when max_seats changes.

        Raises:
            ValidationError: If a field is missing or invalid.
            ClassNotFoundError: If class_id is not an active class of the tenant.
            TransactionAbortedError: If the store fails; nothing is written.
        """
        code = inputs.text(inputs.require(fields, "id"), "id")
        class_id = inputs.text(inputs.require(fields, "class_id"), "class_id")
        max_seats = DEFAULT_MAX_SEATS
        if not inputs.is_blank(fields.get("max_seats")):
            max_seats = inputs.positive_integer(fields["max_seats"], "max_seats")
        values = {
            "class_code": class_id,
            "date": inputs.iso_date(inputs.require(fields, "date"), "date"),
            "start_time": inputs.iso_time(inputs.require(fields, "start_time"), "start_time"),
            "end_time": inputs.iso_time(inputs.require(fields, "end_time"), "end_time"),
            "location": inputs.optional_text(fields.get("location"), "location"),
            "instructor": inputs.optional_text(fields.get("instructor"), "instructor"),
            "status": _session_status(fields.get("status")),
        }

        with self._sessions.atomic():
            if self._catalog.get_class(tenant, class_id) is None:
                raise ClassNotFoundError()
            session = self._sessions.upsert_session(tenant, code, max_seats, values)
        logger.info(
            "Saved session %s for tenant %s: %s/%s seats available, %s",
            code,
            tenant,
            session.available_seats.value,
            session.max_seats.value,
            session.status,
        )
        return session

    def consume_seat(self, tenant: TenantId, session_id: str) -> None:
        """Take one seat of the session and mark it full when none are left.

        Must be called inside the caller's transaction.

        Raises:
            SessionFullError: If no seat was left to take.
            SessionNotFoundError: If the session does not exist in the tenant.
        """
        if not self._sessions.consume_seat(tenant, session_id):
            if self._sessions.get_session(tenant, session_id) is None:
                raise SessionNotFoundError()
            logger.warning("Session %s of tenant %s is full", session_id, tenant)
            raise SessionFullError()
        self._sessions.sync_status(tenant, session_id)

    def release_seat(self, tenant: TenantId, session_id: str) -> ClassSession:
        """Give one seat back to the session, reopening it if it was full.

        A session already at max_seats is left unchanged.

        Raises:
            SessionNotFoundError: If the session does not exist in the tenant.
        """
        with self._sessions.atomic():
            self.get_session(tenant, session_id)
            if not self._sessions.release_seat(tenant, session_id):
                logger.info(
                    "Session %s of tenant %s has no taken seat to release", session_id, tenant
                )
            self._sessions.sync_status(tenant, session_id)
            return self.get_session(tenant, session_id)

    def delete_session(self, tenant: TenantId, session_id: str) -> None:
        """Delete a session. Its registrations are kept.

        Raises:
            SessionNotFoundError: If the session does not exist in the tenant.
        """
        if not self._sessions.delete_session(tenant, session_id):
            raise SessionNotFoundError()
        logger.info("Deleted session %s for tenant %s", session_id, tenant)


def _session_status(value: Any) -> SessionStatus:
    if inputs.is_blank(value):
        return SessionStatus.SCHEDULED
    try:
        return SessionStatus(str(value).strip().lower())
    except ValueError as exc:
        raise ValidationError("status must be scheduled, full or cancelled") from exc
