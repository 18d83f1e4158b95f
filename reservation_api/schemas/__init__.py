"""Pydantic schemas for request/response validation"""

from reservation_api.schemas.reservation import (
    ReservationCreate,
    ReservationResponse,
)

__all__ = [
    "ReservationCreate",
    "ReservationResponse",
]
