import logging
from fastapi import APIRouter, Depends, Header, Path, Request
from typing import Annotated

from ..client import USER_ID_HEADER, BookingClient
from ..schemas import BookingRequest
from ..validators import validate_booking_dates, validate_booking_state

router = APIRouter(prefix="/bookings", tags=["Bookings"])

logger = logging.getLogger("shareit_gateway")


def get_booking_client(request: Request) -> BookingClient:
    # The HTTP client is opened once in the app lifespan
    return BookingClient(request.app.state.http_client)


UserId = Annotated[int, Header(alias=USER_ID_HEADER, gt=0)]
BookingId = Annotated[int, Path(gt=0)]
Client = Annotated[BookingClient, Depends(get_booking_client)]


@router.post("")
async def create_booking(booking: BookingRequest, user_id: UserId, client: Client):
    logger.info(f"Gateway: creating booking for user {user_id}: {booking}")
    validate_booking_dates(booking)
    return await client.create_booking(user_id, booking)


@router.patch("/{booking_id}")
async def update_booking_status(booking_id: BookingId, approved: bool, user_id: UserId, client: Client):
    logger.info(f"Gateway: user {user_id} sets booking {booking_id} to {'APPROVED' if approved else 'REJECTED'}")
    return await client.update_booking_status(user_id, booking_id, approved)


@router.get("/owner")
async def read_owner_bookings(user_id: UserId, client: Client, state: str = "ALL"):
    logger.info(f"Gateway: bookings of owner {user_id} with state {state}")
    validate_booking_state(state)
    return await client.get_owner_bookings(user_id, state)


@router.get("/{booking_id}")
async def read_booking(booking_id: BookingId, user_id: UserId, client: Client):
    logger.info(f"Gateway: booking {booking_id} requested by user {user_id}")
    return await client.get_booking(user_id, booking_id)


@router.get("")
async def read_user_bookings(user_id: UserId, client: Client, state: str = "ALL"):
    logger.info(f"Gateway: bookings of user {user_id} with state {state}")
    validate_booking_state(state)
    return await client.get_user_bookings(user_id, state)
