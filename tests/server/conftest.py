import pytest
from datetime import datetime
from fastapi.testclient import TestClient

from shareit.server import models
from shareit.server.database import Base, get_db, make_engine, make_session_factory
from shareit.server.main import app

# Kept apart from the dev database file
engine = make_engine("sqlite:///./test_shareit.db")
TestingSessionLocal = make_session_factory(engine)


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """A session whose work is rolled back after each test."""
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)
    yield session
    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def make_user(db_session):
    def _make_user(name: str) -> models.User:
        user = models.User(name=name, email=f"{name.lower()}@example.com")
        db_session.add(user)
        db_session.commit()
        return user
    return _make_user


@pytest.fixture
def make_item(db_session):
    def _make_item(owner: models.User, available: bool = True, name: str = "Drill") -> models.Item:
        item = models.Item(name=name, description=f"{name} for rent", available=available, owner_id=owner.id)
        db_session.add(item)
        db_session.commit()
        return item
    return _make_item


@pytest.fixture
def make_booking(db_session):
    def _make_booking(item: models.Item, booker: models.User, start: datetime, end: datetime,
                      status: models.BookingStatus = models.BookingStatus.WAITING) -> models.Booking:
        booking = models.Booking(item_id=item.id, booker_id=booker.id, start=start, end=end, status=status)
        db_session.add(booking)
        db_session.commit()
        return booking
    return _make_booking


@pytest.fixture(scope="function")
def client(db_session):
    """Server TestClient bound to the rolled-back test session."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
