"""
Persistence contracts used by the booking core, plus their SQLAlchemy
implementations.

The services only ever see the abstract classes; the ``Sql*`` classes are
wired in by the routers and can be swapped for in-memory fakes in tests.
"""
import datetime
from abc import ABC, abstractmethod
from enum import Enum as PyEnum
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from . import models
from .exceptions import NotFound


class Party(str, PyEnum):
    """Which side of a booking a listing query is scoped to."""
    BOOKER = "booker"
    OWNER = "owner"


class BookingStore(ABC):
    """
    Storage for Booking records.

    Every ``find_*`` method returns bookings ordered by ``start``, newest
    first. ``party`` selects bookings made by ``party_id`` (BOOKER) or
    bookings on items owned by ``party_id`` (OWNER).
    """

    @abstractmethod
    def get(self, booking_id: int, for_update: bool = False) -> Optional[models.Booking]:
        """
        Returns the booking as currently stored. With ``for_update`` the row
        is locked where the backend supports it.
        """
        raise NotImplementedError

    @abstractmethod
    def add(self, booking: models.Booking) -> models.Booking:
        raise NotImplementedError

    @abstractmethod
    def change_status(self, booking: models.Booking, expected: models.BookingStatus,
                      new: models.BookingStatus) -> bool:
        """
        Moves the booking from ``expected`` to ``new`` in one conditional
        write. Returns False, changing nothing, when the stored status is no
        longer ``expected``.
        """
        raise NotImplementedError

    @abstractmethod
    def find_all(self, party: Party, party_id: int) -> List[models.Booking]:
        raise NotImplementedError

    @abstractmethod
    def find_current(self, party: Party, party_id: int, now: datetime.datetime) -> List[models.Booking]:
        """Bookings with ``start <= now < end``."""
        raise NotImplementedError

    @abstractmethod
    def find_past(self, party: Party, party_id: int, now: datetime.datetime) -> List[models.Booking]:
        """Bookings with ``end < now``."""
        raise NotImplementedError

    @abstractmethod
    def find_future(self, party: Party, party_id: int, now: datetime.datetime) -> List[models.Booking]:
        """Bookings with ``start > now``."""
        raise NotImplementedError

    @abstractmethod
    def find_by_status(self, party: Party, party_id: int, status: models.BookingStatus) -> List[models.Booking]:
        raise NotImplementedError

    @abstractmethod
    def find_completed(self, booker_id: int, item_id: int, status: models.BookingStatus,
                       before: datetime.datetime) -> List[models.Booking]:
        """Bookings by ``booker_id`` on ``item_id`` in ``status`` that ended before ``before``."""
        raise NotImplementedError


class UserDirectory(ABC):
    @abstractmethod
    def resolve(self, user_id: int) -> models.User:
        """Returns the user or raises ``NotFound``."""
        raise NotImplementedError


class ItemDirectory(ABC):
    @abstractmethod
    def resolve(self, item_id: int) -> models.Item:
        """Returns the item or raises ``NotFound``."""
        raise NotImplementedError


class CommentStore(ABC):
    @abstractmethod
    def add(self, comment: models.Comment) -> models.Comment:
        raise NotImplementedError


# --- SQLAlchemy implementations ---

class SqlBookingStore(BookingStore):
    def __init__(self, db: Session):
        self.db = db

    def _scoped(self, party: Party, party_id: int):
        query = self.db.query(models.Booking)
        if party is Party.OWNER:
            # The eager-loaded item uses an anonymous alias, so join explicitly to filter on it
            return query.join(models.Item, models.Booking.item_id == models.Item.id).filter(
                models.Item.owner_id == party_id
            )
        return query.filter(models.Booking.booker_id == party_id)

    @staticmethod
    def _newest_first(query) -> List[models.Booking]:
        return query.order_by(models.Booking.start.desc()).all()

    def get(self, booking_id: int, for_update: bool = False) -> Optional[models.Booking]:
        query = self.db.query(models.Booking).filter(models.Booking.id == booking_id)
        if for_update:
            query = query.with_for_update(of=models.Booking)
        # Overwrite whatever an earlier read left in the identity map
        return query.populate_existing().first()

    def add(self, booking: models.Booking) -> models.Booking:
        self.db.add(booking)
        self.db.commit()
        self.db.refresh(booking)
        return booking

    def change_status(self, booking: models.Booking, expected: models.BookingStatus,
                      new: models.BookingStatus) -> bool:
        # SQLite has no row locks, so the WHERE on status is what serializes owners
        result = self.db.execute(
            update(models.Booking)
            .where(models.Booking.id == booking.id, models.Booking.status == expected)
            .values(status=new)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False
        self.db.commit()
        self.db.refresh(booking)
        return True

    def find_all(self, party: Party, party_id: int) -> List[models.Booking]:
        return self._newest_first(self._scoped(party, party_id))

    def find_current(self, party: Party, party_id: int, now: datetime.datetime) -> List[models.Booking]:
        return self._newest_first(self._scoped(party, party_id).filter(
            models.Booking.start <= now,
            models.Booking.end > now,
        ))

    def find_past(self, party: Party, party_id: int, now: datetime.datetime) -> List[models.Booking]:
        return self._newest_first(self._scoped(party, party_id).filter(models.Booking.end < now))

    def find_future(self, party: Party, party_id: int, now: datetime.datetime) -> List[models.Booking]:
        return self._newest_first(self._scoped(party, party_id).filter(models.Booking.start > now))

    def find_by_status(self, party: Party, party_id: int, status: models.BookingStatus) -> List[models.Booking]:
        return self._newest_first(self._scoped(party, party_id).filter(models.Booking.status == status))

    def find_completed(self, booker_id: int, item_id: int, status: models.BookingStatus,
                       before: datetime.datetime) -> List[models.Booking]:
        return self._newest_first(self.db.query(models.Booking).filter(
            models.Booking.booker_id == booker_id,
            models.Booking.item_id == item_id,
            models.Booking.status == status,
            models.Booking.end < before,
        ))


class SqlUserDirectory(UserDirectory):
    def __init__(self, db: Session):
        self.db = db

    def resolve(self, user_id: int) -> models.User:
        user = self.db.query(models.User).filter(models.User.id == user_id).first()
        if user is None:
            raise NotFound("User", user_id)
        return user


class SqlItemDirectory(ItemDirectory):
    def __init__(self, db: Session):
        self.db = db

    def resolve(self, item_id: int) -> models.Item:
        item = self.db.query(models.Item).filter(models.Item.id == item_id).first()
        if item is None:
            raise NotFound("Item", item_id)
        return item


class SqlCommentStore(CommentStore):
    def __init__(self, db: Session):
        self.db = db

    def add(self, comment: models.Comment) -> models.Comment:
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)
        return comment
