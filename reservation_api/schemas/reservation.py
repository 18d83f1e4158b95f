"""Reservation schemas"""

from typing import Any, Optional

from pydantic import BaseModel

from reservation_api.models.reservation import Reservation


class ReservationCreate(BaseModel):
    """Create reservation request

    Fields are untyped at the transport level; presence, type, format and
    length are checked by the validation gate in its own fixed order.
    """
    customer_name: Optional[Any] = None
    reserved_at: Optional[Any] = None
    party_size: Optional[Any] = None
    customer_phone: Optional[Any] = None
    customer_email: Optional[Any] = None


class ReservationResponse(BaseModel):
    """Reservation view"""
    id: int
    reservation_number: str
    customer_name: str
    reserved_at: str
    status: str
    party_size: Optional[int] = None
    cancel_reason: Optional[str] = None
    created_at: str
    updated_at: str

    @classmethod
    def from_entity(cls, reservation: Reservation) -> "ReservationResponse":
        return cls(
            id=reservation.id,
            reservation_number=reservation.reservation_number,
            customer_name=reservation.customer_name,
            reserved_at=reservation.reserved_at.isoformat(),
            status=reservation.status.value,
            party_size=reservation.party_size,
            cancel_reason=reservation.cancel_reason,
            created_at=reservation.created_at.isoformat(),
            updated_at=reservation.updated_at.isoformat(),
        )
