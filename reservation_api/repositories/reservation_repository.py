"""Reservation storage access"""

from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from reservation_api.models.reservation import Reservation, ReservationStatus


class ReservationRepository:
    """Queries and writes for the reservations table.

    Writes only flush; committing is left to the caller so that a lookup,
    its guards and the write share one transaction.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, reservation: Reservation) -> Reservation:
        """Insert and return the entity with its generated id"""
        self.db.add(reservation)
        await self.db.flush()
        return reservation

    async def save(self, reservation: Reservation) -> Reservation:
        """Flush pending changes to an already persistent entity.

        The mapper versions every UPDATE, so a row changed since it was read
        raises sqlalchemy.orm.exc.StaleDataError here.
        """
        await self.db.flush()
        return reservation

    async def get(self, reservation_id: int) -> Optional[Reservation]:
        return await self.db.get(Reservation, reservation_id)

    async def get_by_number(self, reservation_number: str) -> Optional[Reservation]:
        result = await self.db.execute(
            select(Reservation).where(Reservation.reservation_number == reservation_number)
        )
        return result.scalar_one_or_none()

    async def list(
        self,
        statuses: Optional[Iterable[ReservationStatus]] = None,
        reserved_from: Optional[datetime] = None,
        reserved_to: Optional[datetime] = None,
    ) -> List[Reservation]:
        """List reservations in insertion order with optional filters"""
        query = select(Reservation)

        if statuses:
            query = query.where(Reservation.status.in_(list(statuses)))

        if reserved_from:
            query = query.where(Reservation.reserved_at >= reserved_from)

        if reserved_to:
            query = query.where(Reservation.reserved_at <= reserved_to)

        result = await self.db.execute(query.order_by(Reservation.id))
        return list(result.scalars().all())

    async def exists_active_at(
        self, reserved_at: datetime, statuses: Iterable[ReservationStatus]
    ) -> bool:
        """Check whether a reservation in one of statuses holds reserved_at"""
        result = await self.db.execute(
            select(
                exists().where(
                    Reservation.reserved_at == reserved_at,
                    Reservation.status.in_(list(statuses)),
                )
            )
        )
        return bool(result.scalar())
