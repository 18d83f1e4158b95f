"""Reservation management API endpoints"""

from typing import List, Optional
from datetime import datetime

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from reservation_api.database import get_db
from reservation_api.models.reservation import ReservationStatus
from reservation_api.schemas.reservation import ReservationCreate, ReservationResponse
from reservation_api.services.reservation_service import ReservationService

router = APIRouter()


def get_reservation_service(db: AsyncSession = Depends(get_db)) -> ReservationService:
    return ReservationService(db)


@router.get("", response_model=List[ReservationResponse])
async def list_reservations(
    status: Optional[List[ReservationStatus]] = Query(None),
    from_date: Optional[datetime] = Query(None, alias="from"),
    to_date: Optional[datetime] = Query(None, alias="to"),
    service: ReservationService = Depends(get_reservation_service),
):
    """List reservations, optionally filtered by status and time range"""
    return await service.list_reservations(
        statuses=status,
        reserved_from=from_date,
        reserved_to=to_date,
    )


@router.post("", response_model=ReservationResponse, status_code=201)
async def create_reservation(
    reservation_data: Optional[ReservationCreate] = Body(None),
    service: ReservationService = Depends(get_reservation_service),
):
    """Create a new reservation"""
    return await service.create_reservation(reservation_data)


@router.get("/number/{reservation_number}", response_model=ReservationResponse)
async def get_reservation_by_number(
    reservation_number: str,
    service: ReservationService = Depends(get_reservation_service),
):
    """Get reservation details by reservation number"""
    return await service.get_reservation_by_number(reservation_number)


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
    reservation_id: int,
    service: ReservationService = Depends(get_reservation_service),
):
    """Get reservation details"""
    return await service.get_reservation(reservation_id)


@router.patch("/{reservation_id}/cancel", response_model=ReservationResponse)
async def cancel_reservation(
    reservation_id: int,
    service: ReservationService = Depends(get_reservation_service),
):
    """Cancel a reservation"""
    return await service.cancel_reservation(reservation_id)
