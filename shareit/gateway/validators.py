import datetime
from typing import Callable, Optional

from .schemas import BookingRequest

VALID_STATES = ("ALL", "CURRENT", "PAST", "FUTURE", "WAITING", "REJECTED")

MAX_COMMENT_LENGTH = 1000


class GatewayValidationError(Exception):
    """A request that is rejected before it reaches the server."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def validate_booking_dates(booking: BookingRequest,
                           clock: Callable[[], datetime.datetime] = datetime.datetime.now) -> None:
    """
    Rejects missing dates, dates in the past, and windows whose start is not
    strictly before the end.
    """
    if booking.start is None:
        raise GatewayValidationError("start is required")
    if booking.end is None:
        raise GatewayValidationError("end is required")

    now = clock()
    if booking.start < now:
        raise GatewayValidationError("start must not be in the past")
    if booking.end < now:
        raise GatewayValidationError("end must not be in the past")
    if booking.start > booking.end:
        raise GatewayValidationError("start must precede end")
    if booking.start == booking.end:
        raise GatewayValidationError("start must not equal end")


def validate_booking_state(state: Optional[str]) -> None:
    if state is None or not state.strip():
        raise GatewayValidationError("state must not be blank")
    if state.strip().upper() not in VALID_STATES:
        raise GatewayValidationError(f"unknown state: {state}. Allowed: {', '.join(VALID_STATES)}")


def validate_comment(text: Optional[str]) -> None:
    if text is None or not text.strip():
        raise GatewayValidationError("comment text must not be blank")
    if len(text) > MAX_COMMENT_LENGTH:
        raise GatewayValidationError(f"comment must not be longer than {MAX_COMMENT_LENGTH} characters")
