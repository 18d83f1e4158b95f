#!/usr/bin/env python3
"""
Seed script to create demo reservations
"""

import asyncio
from datetime import datetime, timedelta


async def seed_demo_data():
    """Seed demo data for development"""
    from sqlalchemy import select, func

    from reservation_api.database import SessionLocal, engine, Base
    from reservation_api.exceptions import Conflict
    from reservation_api.models.reservation import Reservation
    from reservation_api.schemas.reservation import ReservationCreate
    from reservation_api.services.reservation_service import ReservationService

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        # Check if demo data already exists
        result = await db.execute(select(func.count(Reservation.id)))
        if result.scalar():
            print("Demo data already exists. Skipping...")
            return

        service = ReservationService(db)
        tomorrow = (datetime.now() + timedelta(days=1)).replace(hour=18, minute=0, second=0, microsecond=0)

        guests = [
            ("Alice Kim", 2),
            ("Bruno Silva", 4),
            ("Chloe Martin", 6),
            ("Daniel Park", None),
        ]

        created = []
        for offset, (name, party_size) in enumerate(guests):
            reserved_at = tomorrow + timedelta(minutes=30 * offset)
            try:
                reservation = await service.create_reservation(
                    ReservationCreate(
                        customer_name=name,
                        reserved_at=reserved_at.isoformat(),
                        party_size=party_size,
                    )
                )
            except Conflict as e:
                print(f"Skipping {name}: {e.message}")
                continue
            created.append(reservation)
            print(f"Created reservation: {reservation.reservation_number} for {name} at {reservation.reserved_at}")

        # Cancel one so the listing shows both states
        if created:
            canceled = await service.cancel_reservation(created[-1].id)
            print(f"Canceled reservation: {canceled.reservation_number} ({canceled.cancel_reason})")

        print(f"""
Demo data created successfully!

Reservations: {len(created)} created
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
