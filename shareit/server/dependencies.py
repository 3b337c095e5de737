from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from .booking_service import BookingService
from .comment_service import CommentService
from .database import get_db
from .repository import SqlBookingStore, SqlCommentStore, SqlItemDirectory, SqlUserDirectory

USER_ID_HEADER = "X-Sharer-User-Id"


def get_current_user_id(
        user_id: Annotated[int, Header(alias=USER_ID_HEADER, gt=0)]
) -> int:
    """
    The acting user's id, passed through by the gateway in a header.
    """
    return user_id


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(
        bookings=SqlBookingStore(db),
        users=SqlUserDirectory(db),
        items=SqlItemDirectory(db),
    )


def get_comment_service(
        db: Session = Depends(get_db),
        bookings: BookingService = Depends(get_booking_service),
) -> CommentService:
    return CommentService(
        bookings=bookings,
        comments=SqlCommentStore(db),
        users=SqlUserDirectory(db),
        items=SqlItemDirectory(db),
    )
