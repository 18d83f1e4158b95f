"""Database models"""

from reservation_api.models.reservation import (
    ACTIVE_STATUSES,
    TERMINAL_STATUSES,
    TRANSITIONS,
    Reservation,
    ReservationStatus,
    assert_transition,
)

__all__ = [
    "ACTIVE_STATUSES",
    "TERMINAL_STATUSES",
    "TRANSITIONS",
    "Reservation",
    "ReservationStatus",
    "assert_transition",
]
