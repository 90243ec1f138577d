"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in training/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import StrEnum

from training.domain.value_objects import Capacity, Money

DEFAULT_MAX_SEATS = 12
DEFAULT_CATEGORY = "other"

# Display order of class levels; unknown levels sort last.
LEVEL_RANKS = {"Beginner": 1, "Intermediate": 2, "Advanced": 3}
OTHER_LEVEL_RANK = 4


class SessionStatus(StrEnum):
    SCHEDULED = "scheduled"
    FULL = "full"
    CANCELLED = "cancelled"


class RegistrationStatus(StrEnum):
    """Well-known registration statuses. Stored values are an open set."""

    CONFIRMED = "confirmed"
    PENDING = "pending"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


# Statuses whose registrations hold a seat.
ACTIVE_REGISTRATION_STATUSES = frozenset(
    {RegistrationStatus.CONFIRMED, RegistrationStatus.PENDING}
)


def level_rank(level: str) -> int:
    return LEVEL_RANKS.get(level, OTHER_LEVEL_RANK)


@dataclass(frozen=True)
class Category:
    """Domain representation of a Category."""

    id: str
    name: str
    display_name: str
    icon: str | None
    sort_order: int
    active: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class TrainingClass:
    """Domain representation of a Class offered in the catalog."""

    id: str
    name: str
    level: str
    duration: str
    tuition: Money
    category: str
    sort_order: int
    badge: str | None
    summary: str | None
    description: str | None
    highlights: str | None
    equipment: str | None
    prerequisites: str | None
    active: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ClassSession:
    """Domain representation of a scheduled Session of a class."""

    id: str
    class_id: str
    date: date
    start_time: time
    end_time: time
    location: str | None
    instructor: str | None
    max_seats: Capacity
    available_seats: Capacity
    status: SessionStatus
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        if self.available_seats.value > self.max_seats.value:
            raise ValueError("Available seats cannot exceed max seats")

    @property
    def consumed_seats(self) -> int:
        return self.max_seats.value - self.available_seats.value

    @property
    def is_full(self) -> bool:
        return self.status == SessionStatus.FULL


@dataclass(frozen=True)
class Registration:
    """Domain representation of a Registration.

    The class and session fields at the bottom are filled in by listings that
    join the registration to its class and session.
    """

    id: int
    transaction_id: str
    class_id: str
    session_id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    experience_level: str
    amount: Money
    status: str
    auth_code: str | None
    waiver_accepted: bool
    rules_accepted: bool
    created_at: datetime
    class_name: str | None = None
    session_date: date | None = None
    session_start_time: time | None = None
    session_end_time: time | None = None
    session_location: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_REGISTRATION_STATUSES


@dataclass(frozen=True)
class RegistrationFilters:
    """Exact-match filters for listing registrations; None means unfiltered."""

    class_id: str | None = None
    session_id: str | None = None
    status: str | None = None
    email: str | None = None
