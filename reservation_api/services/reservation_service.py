"""
Reservation lifecycle service: creation, lookup, listing and cancellation.
"""

import uuid
from datetime import datetime
from typing import Callable, Iterable, List, Optional

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from reservation_api.config import Settings, get_settings
from reservation_api.exceptions import Conflict, Internal, NotFound
from reservation_api.models.reservation import (
    ACTIVE_STATUSES,
    TERMINAL_STATUSES,
    Reservation,
    ReservationStatus,
    assert_transition,
)
from reservation_api.repositories.reservation_repository import ReservationRepository
from reservation_api.schemas.reservation import ReservationCreate, ReservationResponse
from reservation_api.services.validation import (
    ValidatedReservation,
    ensure_future,
    validate_create_request,
)

logger = structlog.get_logger()

SLOT_TAKEN = "active reservation already exists at this time"

MIN_RESERVATION_ID = 1
MAX_RESERVATION_ID = 2 ** 63 - 1


class ReservationService:
    """Owns the reservation state machine.

    Every public operation is one unit of work on ``db``: reads, guards and
    the write are committed together or rolled back together.
    """

    def __init__(
        self,
        db: AsyncSession,
        clock: Callable[[], datetime] = datetime.now,
        settings: Optional[Settings] = None,
    ):
        self.db = db
        self.repository = ReservationRepository(db)
        self.clock = clock
        self.settings = settings or get_settings()

    async def create_reservation(self, request: Optional[ReservationCreate]) -> ReservationResponse:
        """Validate a raw create request, then create the reservation"""
        validated = validate_create_request(request, self.clock())
        return await self.create(validated)

    async def create(self, validated: ValidatedReservation) -> ReservationResponse:
        """Create a REQUESTED reservation on a free, future slot.

        The existence check is backed by a partial unique index on
        ``reserved_at`` over active statuses; an insert that loses a race
        fails with IntegrityError and is reported as the same conflict.
        A unique-number collision is retried with a fresh number.
        """
        ensure_future(validated.reserved_at, self.clock())

        max_attempts = self.settings.reservation_number_max_attempts
        for attempt in range(1, max_attempts + 1):
            if await self.repository.exists_active_at(validated.reserved_at, ACTIVE_STATUSES):
                logger.warning("Reservation slot taken", reserved_at=validated.reserved_at.isoformat())
                raise Conflict(SLOT_TAKEN)

            now = self.clock()
            reservation = Reservation(
                reservation_number=self.generate_reservation_number(),
                customer_name=validated.customer_name,
                customer_phone=validated.customer_phone or self.settings.reservation_default_phone,
                customer_email=validated.customer_email,
                reserved_at=validated.reserved_at,
                party_size=validated.party_size,
                status=ReservationStatus.REQUESTED,
                cancel_reason=None,
                created_at=now,
                updated_at=now,
            )

            try:
                await self.repository.add(reservation)
                await self.db.commit()
            except IntegrityError:
                await self.db.rollback()
                if await self.repository.exists_active_at(validated.reserved_at, ACTIVE_STATUSES):
                    logger.warning(
                        "Reservation slot taken concurrently",
                        reserved_at=validated.reserved_at.isoformat(),
                    )
                    raise Conflict(SLOT_TAKEN)
                logger.warning("Reservation number collision", attempt=attempt)
                continue

            logger.info(
                "Reservation created",
                reservation_id=reservation.id,
                reservation_number=reservation.reservation_number,
                reserved_at=reservation.reserved_at.isoformat(),
            )
            return ReservationResponse.from_entity(reservation)

        raise Internal(f"could not allocate a unique reservation number in {max_attempts} attempts")

    async def get_reservation(self, reservation_id: int) -> ReservationResponse:
        reservation = await self._get_or_raise(reservation_id)
        return ReservationResponse.from_entity(reservation)

    async def get_reservation_by_number(self, reservation_number: str) -> ReservationResponse:
        """Customer-facing lookup that does not expose the internal id"""
        reservation = await self.repository.get_by_number(reservation_number.strip())
        if reservation is None:
            raise NotFound(f"reservation not found: number={reservation_number}")
        return ReservationResponse.from_entity(reservation)

    async def list_reservations(
        self,
        statuses: Optional[Iterable[ReservationStatus]] = None,
        reserved_from: Optional[datetime] = None,
        reserved_to: Optional[datetime] = None,
    ) -> List[ReservationResponse]:
        reservations = await self.repository.list(
            statuses=statuses,
            reserved_from=reserved_from,
            reserved_to=reserved_to,
        )
        return [ReservationResponse.from_entity(r) for r in reservations]

    async def cancel_reservation(self, reservation_id: int) -> ReservationResponse:
        """Move an active reservation to CANCELED.

        The UPDATE is conditional on the version read here; if another
        writer got there first the operation fails with Conflict and the
        caller may retry from the lookup.
        """
        reservation = await self._get_or_raise(reservation_id)
        current = reservation.status

        if current in TERMINAL_STATUSES:
            logger.warning("Cancel rejected", reservation_id=reservation_id, status=current.value)
            raise Conflict("already-finalized reservation cannot be canceled")

        # Kept apart from the terminal check: a new non-terminal, non-active
        # status must not become cancelable by omission
        if current not in ACTIVE_STATUSES:
            logger.warning("Cancel rejected", reservation_id=reservation_id, status=current.value)
            raise Conflict("current state does not permit cancellation")

        assert_transition(current, ReservationStatus.CANCELED)

        reservation.status = ReservationStatus.CANCELED
        reservation.cancel_reason = self.settings.reservation_cancel_reason
        reservation.updated_at = self.clock()

        try:
            await self.repository.save(reservation)
            await self.db.commit()
        except StaleDataError as e:
            await self.db.rollback()
            logger.warning("Stale reservation write", reservation_id=reservation_id)
            raise Conflict("reservation was modified concurrently") from e

        logger.info(
            "Reservation canceled",
            reservation_id=reservation.id,
            previous_status=current.value,
        )
        return ReservationResponse.from_entity(reservation)

    def generate_reservation_number(self) -> str:
        """Opaque, shareable code, e.g. RSV-3F9A1C07B2D4"""
        length = self.settings.reservation_number_length
        return self.settings.reservation_number_prefix + uuid.uuid4().hex[:length].upper()

    async def _get_or_raise(self, reservation_id: int) -> Reservation:
        # Ids outside the BIGINT key range cannot exist and would overflow the driver
        if not MIN_RESERVATION_ID <= reservation_id <= MAX_RESERVATION_ID:
            raise NotFound(f"reservation not found: id={reservation_id}")

        reservation = await self.repository.get(reservation_id)
        if reservation is None:
            raise NotFound(f"reservation not found: id={reservation_id}")
        return reservation
