import logging
from typing import Any, Optional

import httpx
from fastapi import Response

from .schemas import BookingRequest, CommentRequest

logger = logging.getLogger("shareit_gateway")

USER_ID_HEADER = "X-Sharer-User-Id"


class ServerUnavailable(Exception):
    """The server could not be reached or did not answer in time."""


class BaseClient:
    """
    Sends a request to the server on behalf of a user and relays the answer
    unchanged.
    """

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def _send(self, method: str, path: str, user_id: int,
                    json: Optional[Any] = None, params: Optional[dict] = None) -> Response:
        try:
            upstream = await self.http.request(
                method, path, headers={USER_ID_HEADER: str(user_id)}, json=json, params=params
            )
        except httpx.RequestError as e:
            logger.error(f"Server request {method} {path} failed: {e}")
            raise ServerUnavailable(str(e)) from e

        return Response(
            content=upstream.content,
            status_code=upstream.status_code,
            media_type=upstream.headers.get("content-type"),
        )


class BookingClient(BaseClient):
    API_PREFIX = "/bookings"

    async def create_booking(self, user_id: int, booking: BookingRequest) -> Response:
        body = booking.model_dump(mode="json", by_alias=True)
        return await self._send("POST", self.API_PREFIX, user_id, json=body)

    async def update_booking_status(self, user_id: int, booking_id: int, approved: bool) -> Response:
        params = {"approved": str(approved).lower()}
        return await self._send("PATCH", f"{self.API_PREFIX}/{booking_id}", user_id, params=params)

    async def get_booking(self, user_id: int, booking_id: int) -> Response:
        return await self._send("GET", f"{self.API_PREFIX}/{booking_id}", user_id)

    async def get_user_bookings(self, user_id: int, state: str) -> Response:
        return await self._send("GET", self.API_PREFIX, user_id, params={"state": state})

    async def get_owner_bookings(self, user_id: int, state: str) -> Response:
        return await self._send("GET", f"{self.API_PREFIX}/owner", user_id, params={"state": state})


class ItemClient(BaseClient):
    API_PREFIX = "/items"

    async def add_comment(self, user_id: int, item_id: int, comment: CommentRequest) -> Response:
        return await self._send("POST", f"{self.API_PREFIX}/{item_id}/comment", user_id,
                                json=comment.model_dump(mode="json"))
