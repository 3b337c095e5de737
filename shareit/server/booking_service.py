import datetime
import logging
from typing import Callable, List

from . import models, schemas
from .exceptions import InvalidState, NotFound, Unauthorized
from .repository import BookingStore, ItemDirectory, Party, UserDirectory
from .states import BookingState, UnknownState, next_status, parse_state, trigger_for

logger = logging.getLogger("booking_service")

Clock = Callable[[], datetime.datetime]


class BookingService:
    """
    Creation, approval and lookup of bookings.

    Holds no booking state of its own: every call reads from the store,
    validates, and writes back. Checks run in a fixed order and the first
    one that fails decides the error.
    """

    def __init__(self, bookings: BookingStore, users: UserDirectory, items: ItemDirectory,
                 clock: Clock = datetime.datetime.now):
        self.bookings = bookings
        self.users = users
        self.items = items
        self.clock = clock

    def create_booking(self, request: schemas.BookingCreate, requester_id: int) -> models.Booking:
        booker = self.users.resolve(requester_id)
        item = self.items.resolve(request.item_id)

        if not item.available:
            raise InvalidState("item not available for booking")
        if item.owner_id == requester_id:
            raise InvalidState("owner cannot book own item")
        if request.start >= request.end:
            raise InvalidState("start must precede end")

        booking = models.Booking(
            start=request.start,
            end=request.end,
            item=item,
            booker=booker,
            status=models.BookingStatus.WAITING,
        )
        booking = self.bookings.add(booking)
        logger.info(f"User {requester_id} requested booking {booking.id} of item {item.id}")
        return booking

    def update_booking_status(self, booking_id: int, approved: bool, acting_user_id: int) -> models.Booking:
        booking = self.bookings.get(booking_id, for_update=True)
        if booking is None:
            raise NotFound("Booking", booking_id)

        if booking.item.owner_id != acting_user_id:
            raise Unauthorized("only owner may change status")

        current = booking.status
        new = next_status(current, trigger_for(approved))
        # Another request may have decided the booking since it was read
        if not self.bookings.change_status(booking, expected=current, new=new):
            logger.warning(f"Booking {booking_id} was finalized concurrently, {new.value} not applied")
            raise InvalidState("booking already finalized")

        logger.info(f"Owner {acting_user_id} set booking {booking_id} to {new.value}")
        return booking

    def get_booking_by_id(self, booking_id: int, acting_user_id: int) -> models.Booking:
        booking = self.bookings.get(booking_id)
        if booking is None:
            raise NotFound("Booking", booking_id)

        if acting_user_id not in (booking.booker.id, booking.item.owner_id):
            raise Unauthorized("no access to this booking")
        return booking

    def get_user_bookings(self, user_id: int, state: str) -> List[models.Booking]:
        """Bookings made by ``user_id`` matching the ``state`` filter."""
        return self._list(Party.BOOKER, user_id, state)

    def get_owner_bookings(self, user_id: int, state: str) -> List[models.Booking]:
        """Bookings on items owned by ``user_id`` matching the ``state`` filter."""
        return self._list(Party.OWNER, user_id, state)

    def find_completed_bookings(self, booker_id: int, item_id: int, status: models.BookingStatus,
                                before: datetime.datetime) -> List[models.Booking]:
        # No access check: only called from other services, never from a route
        return self.bookings.find_completed(booker_id, item_id, status, before)

    def _list(self, party: Party, user_id: int, state: str) -> List[models.Booking]:
        self.users.resolve(user_id)

        parsed = parse_state(state)
        if isinstance(parsed, UnknownState):
            raise InvalidState(f"unknown state: {parsed.raw}")

        now = self.clock()
        selected = parsed.state
        if selected is BookingState.ALL:
            return self.bookings.find_all(party, user_id)
        if selected is BookingState.CURRENT:
            return self.bookings.find_current(party, user_id, now)
        if selected is BookingState.PAST:
            return self.bookings.find_past(party, user_id, now)
        if selected is BookingState.FUTURE:
            return self.bookings.find_future(party, user_id, now)
        # WAITING and REJECTED share their names with a BookingStatus
        return self.bookings.find_by_status(party, user_id, models.BookingStatus(selected.value))
