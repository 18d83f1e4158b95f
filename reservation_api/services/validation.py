"""Structural and temporal checks for reservation requests.

Everything here is pure: no storage access and no side effects, so the
checks may run again inside the lifecycle engine.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from reservation_api.exceptions import InvalidArgument, InvalidInput
from reservation_api.models.reservation import Reservation
from reservation_api.schemas.reservation import ReservationCreate

# ISO-8601 local date-time; no offset, time part required, up to nanoseconds
_LOCAL_DATETIME = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(?::\d{2}(?:\.(\d{1,9}))?)?")

_MICROSECOND_DIGITS = 6

NAME_MAX_LENGTH = Reservation.__table__.c.customer_name.type.length
PHONE_MAX_LENGTH = Reservation.__table__.c.customer_phone.type.length
EMAIL_MAX_LENGTH = Reservation.__table__.c.customer_email.type.length


@dataclass(frozen=True)
class ValidatedReservation:
    """A create request that passed the structural checks"""
    customer_name: str
    reserved_at: datetime
    party_size: Optional[int] = None
    customer_phone: Optional[str] = None
    customer_email: Optional[str] = None


def parse_reserved_at(value: str) -> datetime:
    """Parse local date-time text; sub-microsecond digits are truncated"""
    text = value.strip()
    match = _LOCAL_DATETIME.fullmatch(text)
    if not match:
        raise InvalidInput("malformed timestamp")

    fraction = match.group(1)
    if fraction and len(fraction) > _MICROSECOND_DIGITS:
        text = text[: len(text) - (len(fraction) - _MICROSECOND_DIGITS)]

    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise InvalidInput("malformed timestamp") from e


def ensure_future(reserved_at: datetime, now: datetime) -> None:
    if not reserved_at > now:
        raise InvalidArgument("reservation time must be in the future")


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _contact(value: Any, field: str, max_length: int) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidInput(f"{field} must be text")
    value = value.strip()
    if len(value) > max_length:
        raise InvalidInput(f"{field} must be at most {max_length} characters")
    return value or None


def validate_create_request(
    request: Optional[ReservationCreate], now: datetime
) -> ValidatedReservation:
    """Validate a create request, failing on the first broken rule.

    Order: request presence, customer name, timestamp, party size, contact
    fields, and finally the timestamp must lie strictly after ``now``.
    Fields arrive untyped, so each check also classifies the value's type.
    """
    if request is None:
        raise InvalidInput("request required")

    if _is_blank(request.customer_name):
        raise InvalidInput("customer name required")
    customer_name = request.customer_name.strip()
    if len(customer_name) > NAME_MAX_LENGTH:
        raise InvalidInput(f"customer name must be at most {NAME_MAX_LENGTH} characters")

    if _is_blank(request.reserved_at):
        raise InvalidInput("malformed timestamp")
    reserved_at = parse_reserved_at(request.reserved_at)

    # Party size is optional; when given it must be a positive integer
    party_size = request.party_size
    if party_size is not None and (
        isinstance(party_size, bool) or not isinstance(party_size, int) or party_size < 1
    ):
        raise InvalidInput("party size must be at least 1")

    customer_phone = _contact(request.customer_phone, "customer phone", PHONE_MAX_LENGTH)
    customer_email = _contact(request.customer_email, "customer email", EMAIL_MAX_LENGTH)

    ensure_future(reserved_at, now)

    return ValidatedReservation(
        customer_name=customer_name,
        reserved_at=reserved_at,
        party_size=party_size,
        customer_phone=customer_phone,
        customer_email=customer_email,
    )
