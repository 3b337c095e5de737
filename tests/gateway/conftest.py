import httpx
import pytest
from fastapi.testclient import TestClient

from shareit.gateway.client import BookingClient, ItemClient
from shareit.gateway.main import app
from shareit.gateway.routers.booking_router import get_booking_client
from shareit.gateway.routers.item_router import get_item_client


class FakeServer:
    """Records forwarded requests and answers with a canned response."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.body = {"id": 1, "status": "WAITING"}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)


@pytest.fixture
def server():
    return FakeServer()


@pytest.fixture
def http(server):
    return httpx.AsyncClient(transport=httpx.MockTransport(server), base_url="http://server")


@pytest.fixture
def booking_client(http):
    return BookingClient(http)


@pytest.fixture
def client(http, booking_client):
    """Gateway TestClient whose forwarding goes to the fake server."""
    app.dependency_overrides[get_booking_client] = lambda: booking_client
    app.dependency_overrides[get_item_client] = lambda: ItemClient(http)

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
