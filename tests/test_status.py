"""Tests for the reservation status table"""

import pytest

from reservation_api.exceptions import Conflict
from reservation_api.models.reservation import (
    ACTIVE_STATUSES,
    TERMINAL_STATUSES,
    TRANSITIONS,
    ReservationStatus,
    assert_transition,
)


def test_every_status_is_either_active_or_terminal():
    assert ACTIVE_STATUSES | TERMINAL_STATUSES == set(ReservationStatus)
    assert not ACTIVE_STATUSES & TERMINAL_STATUSES


def test_membership_predicates():
    assert ReservationStatus.REQUESTED.is_active
    assert ReservationStatus.CONFIRMED.is_active
    assert not ReservationStatus.CANCELED.is_active

    assert ReservationStatus.NO_SHOW.is_terminal
    assert not ReservationStatus.REQUESTED.is_terminal


def test_declared_edges():
    edges = {(src, dst) for src, targets in TRANSITIONS.items() for dst in targets}
    assert edges == {
        (ReservationStatus.REQUESTED, ReservationStatus.CONFIRMED),
        (ReservationStatus.REQUESTED, ReservationStatus.CANCELED),
        (ReservationStatus.CONFIRMED, ReservationStatus.CANCELED),
        (ReservationStatus.CONFIRMED, ReservationStatus.COMPLETED),
        (ReservationStatus.CONFIRMED, ReservationStatus.NO_SHOW),
    }


def test_no_edge_back_into_requested():
    assert all(
        not status.can_transition_to(ReservationStatus.REQUESTED) for status in ReservationStatus
    )


@pytest.mark.parametrize("status", sorted(TERMINAL_STATUSES))
def test_terminal_statuses_have_no_exits(status):
    assert TRANSITIONS[status] == frozenset()


def test_assert_transition():
    assert_transition(ReservationStatus.CONFIRMED, ReservationStatus.COMPLETED)

    with pytest.raises(Conflict):
        assert_transition(ReservationStatus.REQUESTED, ReservationStatus.COMPLETED)


def test_policy_constants_are_immutable():
    with pytest.raises(TypeError):
        TRANSITIONS[ReservationStatus.CANCELED] = frozenset({ReservationStatus.REQUESTED})

    with pytest.raises(AttributeError):
        ACTIVE_STATUSES.add(ReservationStatus.CANCELED)
