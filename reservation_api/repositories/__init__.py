"""Storage repositories"""

from reservation_api.repositories.reservation_repository import ReservationRepository

__all__ = ["ReservationRepository"]
