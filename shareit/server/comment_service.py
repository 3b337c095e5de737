import datetime
import logging

from . import models
from .booking_service import BookingService, Clock
from .exceptions import InvalidState
from .repository import CommentStore, ItemDirectory, UserDirectory

logger = logging.getLogger("comment_service")


class CommentService:
    """Lets renters comment on items they have actually finished renting."""

    def __init__(self, bookings: BookingService, comments: CommentStore, users: UserDirectory,
                 items: ItemDirectory, clock: Clock = datetime.datetime.now):
        self.bookings = bookings
        self.comments = comments
        self.users = users
        self.items = items
        self.clock = clock

    def can_comment(self, user_id: int, item_id: int) -> bool:
        """
        True once the user has an owner-approved booking of the item whose
        end lies in the past. Waiting, rejected and still-running bookings
        do not count.
        """
        completed = self.bookings.find_completed_bookings(
            user_id, item_id, models.BookingStatus.APPROVED, self.clock()
        )
        return len(completed) > 0

    def add_comment(self, user_id: int, item_id: int, text: str) -> models.Comment:
        author = self.users.resolve(user_id)
        item = self.items.resolve(item_id)

        if not self.can_comment(user_id, item_id):
            logger.warning(f"User {user_id} tried to comment on item {item_id} without a finished rental")
            raise InvalidState("user has not completed a rental of this item")

        comment = models.Comment(text=text, item_id=item.id, author=author, created=self.clock())
        comment = self.comments.add(comment)
        logger.info(f"User {user_id} commented on item {item_id}")
        return comment
