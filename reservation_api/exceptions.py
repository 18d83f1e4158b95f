"""Reservation error taxonomy"""


class ReservationError(Exception):
    """Base class for errors raised by the reservation core"""

    code = "reservation_error"
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidInput(ReservationError):
    """Missing or malformed request fields"""

    code = "invalid_input"
    status_code = 400


class InvalidArgument(ReservationError):
    """Well-formed but semantically invalid values"""

    code = "invalid_argument"
    status_code = 400


class NotFound(ReservationError):
    code = "not_found"
    status_code = 404


class Conflict(ReservationError):
    """Duplicate slot, illegal transition or concurrent modification"""

    code = "conflict"
    status_code = 409


class Internal(ReservationError):
    code = "internal"
    status_code = 500
