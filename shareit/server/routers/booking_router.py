import logging
from fastapi import APIRouter, Depends
from typing import List, Annotated

from .. import schemas
from ..booking_service import BookingService
from ..dependencies import get_booking_service, get_current_user_id

router = APIRouter(prefix="/bookings", tags=["Bookings"])

logger = logging.getLogger("shareit_server")

CurrentUser = Annotated[int, Depends(get_current_user_id)]
Service = Annotated[BookingService, Depends(get_booking_service)]


@router.post("", response_model=schemas.BookingRead)
def create_booking(booking: schemas.BookingCreate, user_id: CurrentUser, service: Service):
    """
    Request a booking of an item for the authenticated user.
    """
    logger.info(f"Creating booking for user {user_id}: item {booking.item_id}, {booking.start} - {booking.end}")
    return service.create_booking(booking, user_id)


@router.patch("/{booking_id}", response_model=schemas.BookingRead)
def update_booking_status(booking_id: int, approved: bool, user_id: CurrentUser, service: Service):
    """
    Approve or reject a waiting booking. Only the item's owner may do this.
    """
    logger.info(f"User {user_id} {'approving' if approved else 'rejecting'} booking {booking_id}")
    return service.update_booking_status(booking_id, approved, user_id)


# Declared before /{booking_id} so "owner" is not parsed as an id
@router.get("/owner", response_model=List[schemas.BookingRead])
def read_owner_bookings(user_id: CurrentUser, service: Service, state: str = "ALL"):
    """
    Get bookings of every item the authenticated user owns.
    """
    bookings = service.get_owner_bookings(user_id, state)
    logger.info(f"Found {len(bookings)} bookings for owner {user_id} with state {state}")
    return bookings


@router.get("/{booking_id}", response_model=schemas.BookingRead)
def read_booking(booking_id: int, user_id: CurrentUser, service: Service):
    return service.get_booking_by_id(booking_id, user_id)


@router.get("", response_model=List[schemas.BookingRead])
def read_user_bookings(user_id: CurrentUser, service: Service, state: str = "ALL"):
    """
    Get all bookings made by the authenticated user.
    """
    bookings = service.get_user_bookings(user_id, state)
    logger.info(f"Found {len(bookings)} bookings for user {user_id} with state {state}")
    return bookings
