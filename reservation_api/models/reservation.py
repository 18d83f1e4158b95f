"""Reservation model"""

import enum
from datetime import datetime
from types import MappingProxyType

from sqlalchemy import BigInteger, Column, DateTime, Enum, Index, Integer, String, text

from reservation_api.database import Base
from reservation_api.exceptions import Conflict


class ReservationStatus(str, enum.Enum):
    """Reservation lifecycle states"""
    REQUESTED = "REQUESTED"
    CONFIRMED = "CONFIRMED"
    CANCELED = "CANCELED"
    COMPLETED = "COMPLETED"
    NO_SHOW = "NO_SHOW"

    @property
    def is_active(self) -> bool:
        """Active reservations occupy their time slot"""
        return self in ACTIVE_STATUSES

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    def can_transition_to(self, target: "ReservationStatus") -> bool:
        return target in TRANSITIONS[self]


ACTIVE_STATUSES = frozenset({ReservationStatus.REQUESTED, ReservationStatus.CONFIRMED})

TERMINAL_STATUSES = frozenset(
    {ReservationStatus.CANCELED, ReservationStatus.COMPLETED, ReservationStatus.NO_SHOW}
)

# Confirm, complete and no-show edges have no triggering operation yet
TRANSITIONS = MappingProxyType({
    ReservationStatus.REQUESTED: frozenset({ReservationStatus.CONFIRMED, ReservationStatus.CANCELED}),
    ReservationStatus.CONFIRMED: frozenset(
        {ReservationStatus.CANCELED, ReservationStatus.COMPLETED, ReservationStatus.NO_SHOW}
    ),
    ReservationStatus.CANCELED: frozenset(),
    ReservationStatus.COMPLETED: frozenset(),
    ReservationStatus.NO_SHOW: frozenset(),
})


def assert_transition(current: ReservationStatus, target: ReservationStatus) -> None:
    """Raise Conflict unless the state table declares current -> target"""
    if not current.can_transition_to(target):
        raise Conflict(f"illegal status transition: {current.value} -> {target.value}")


_ACTIVE_SLOT_PREDICATE = text(
    "status IN ({})".format(", ".join(f"'{s.value}'" for s in sorted(ACTIVE_STATUSES)))
)


class Reservation(Base):
    """Table reservations"""
    __tablename__ = "reservations"
    __table_args__ = (
        # One active reservation per timestamp, enforced by storage
        Index(
            "uq_reservations_active_slot",
            "reserved_at",
            unique=True,
            postgresql_where=_ACTIVE_SLOT_PREDICATE,
            sqlite_where=_ACTIVE_SLOT_PREDICATE,
        ),
    )

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    reservation_number = Column(String(50), unique=True, nullable=False)

    # Customer information
    customer_name = Column(String(100), nullable=False)
    customer_phone = Column(String(20), nullable=False)
    customer_email = Column(String(100))

    # Reservation details
    reserved_at = Column(DateTime, nullable=False)
    party_size = Column(Integer)

    # Status
    status = Column(
        Enum(ReservationStatus, native_enum=False, length=20),
        nullable=False,
        default=ReservationStatus.REQUESTED,
        index=True,
    )
    cancel_reason = Column(String(500))

    # Metadata
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now)

    # Optimistic concurrency: UPDATE ... WHERE version = <version read>
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<Reservation {self.id} {self.reservation_number} {self.status}>"
