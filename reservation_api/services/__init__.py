"""Reservation domain services"""

from reservation_api.services.reservation_service import ReservationService
from reservation_api.services.validation import ValidatedReservation, validate_create_request

__all__ = [
    "ReservationService",
    "ValidatedReservation",
    "validate_create_request",
]
