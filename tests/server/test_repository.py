# Query tests for the SQLAlchemy booking store and directories
import pytest
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta
from sqlalchemy import text

from shareit.server import models
from shareit.server.database import make_engine
from shareit.server.exceptions import NotFound
from shareit.server.repository import Party, SqlBookingStore, SqlItemDirectory, SqlUserDirectory

NOW = datetime(2026, 6, 1, 12, 0)


@pytest.fixture
def store(db_session):
    return SqlBookingStore(db_session)


@pytest.fixture
def scene(make_user, make_item, make_booking):
    """
    Owner lends a drill and a ladder. Renter has a past, a current and a
    future booking; a second renter has one current booking of the ladder.
    """
    owner = make_user("Owner")
    renter = make_user("Renter")
    other = make_user("Other")
    drill = make_item(owner, name="Drill")
    ladder = make_item(owner, name="Ladder")

    day = timedelta(days=1)
    past = make_booking(drill, renter, NOW - 10 * day, NOW - 5 * day, models.BookingStatus.APPROVED)
    current = make_booking(drill, renter, NOW - day, NOW + day)
    future = make_booking(ladder, renter, NOW + 3 * day, NOW + 4 * day, models.BookingStatus.REJECTED)
    others = make_booking(ladder, other, NOW - 2 * day, NOW + 2 * day, models.BookingStatus.APPROVED)
    return {
        "owner": owner, "renter": renter, "other": other, "drill": drill, "ladder": ladder,
        "past": past, "current": current, "future": future, "others": others,
    }


def ids(bookings):
    return [b.id for b in bookings]


def test_find_all_by_booker_newest_first(store, scene):
    result = store.find_all(Party.BOOKER, scene["renter"].id)
    assert ids(result) == ids([scene["future"], scene["current"], scene["past"]])


def test_find_all_by_owner_includes_every_booker(store, scene):
    result = store.find_all(Party.OWNER, scene["owner"].id)
    assert ids(result) == ids([scene["future"], scene["current"], scene["others"], scene["past"]])


def test_time_windows_for_booker(store, scene):
    renter_id = scene["renter"].id
    assert ids(store.find_current(Party.BOOKER, renter_id, NOW)) == [scene["current"].id]
    assert ids(store.find_past(Party.BOOKER, renter_id, NOW)) == [scene["past"].id]
    assert ids(store.find_future(Party.BOOKER, renter_id, NOW)) == [scene["future"].id]


def test_current_window_bounds(store, scene, make_booking):
    # start == now counts as current, end == now does not
    starting = make_booking(scene["drill"], scene["other"], NOW, NOW + timedelta(hours=1))
    ending = make_booking(scene["drill"], scene["other"], NOW - timedelta(hours=1), NOW)

    current_ids = ids(store.find_current(Party.BOOKER, scene["other"].id, NOW))
    assert starting.id in current_ids
    assert ending.id not in current_ids
    assert ending.id not in ids(store.find_past(Party.BOOKER, scene["other"].id, NOW))


def test_time_windows_for_owner(store, scene):
    owner_id = scene["owner"].id
    assert ids(store.find_current(Party.OWNER, owner_id, NOW)) == ids([scene["current"], scene["others"]])
    assert ids(store.find_past(Party.OWNER, owner_id, NOW)) == [scene["past"].id]
    assert ids(store.find_future(Party.OWNER, owner_id, NOW)) == [scene["future"].id]


def test_find_by_status(store, scene):
    assert ids(store.find_by_status(Party.BOOKER, scene["renter"].id, models.BookingStatus.WAITING)) == [
        scene["current"].id
    ]
    assert ids(store.find_by_status(Party.OWNER, scene["owner"].id, models.BookingStatus.REJECTED)) == [
        scene["future"].id
    ]


def test_owner_sees_nothing_as_booker(store, scene):
    assert store.find_all(Party.BOOKER, scene["owner"].id) == []
    assert store.find_all(Party.OWNER, scene["renter"].id) == []


def test_find_completed(store, scene):
    renter_id, drill_id = scene["renter"].id, scene["drill"].id

    assert ids(store.find_completed(renter_id, drill_id, models.BookingStatus.APPROVED, NOW)) == [
        scene["past"].id
    ]
    # The approved ladder booking by "other" is still running
    assert store.find_completed(scene["other"].id, scene["ladder"].id, models.BookingStatus.APPROVED, NOW) == []
    assert store.find_completed(renter_id, drill_id, models.BookingStatus.REJECTED, NOW) == []


def test_get_loads_item_and_booker(store, scene):
    booking = store.get(scene["current"].id, for_update=True)
    assert booking.booker.name == "Renter"
    assert booking.item.owner_id == scene["owner"].id
    assert store.get(987654) is None


def test_add_assigns_id(store, scene):
    booking = models.Booking(
        start=NOW, end=NOW + timedelta(days=1), item=scene["drill"], booker=scene["other"],
        status=models.BookingStatus.WAITING,
    )
    saved = store.add(booking)
    assert saved.id is not None
    assert store.get(saved.id).booker_id == scene["other"].id


def test_directories(db_session, scene):
    assert SqlUserDirectory(db_session).resolve(scene["renter"].id).name == "Renter"
    assert SqlItemDirectory(db_session).resolve(scene["drill"].id).name == "Drill"

    with pytest.raises(NotFound, match="User with id 424242 not found"):
        SqlUserDirectory(db_session).resolve(424242)
    with pytest.raises(NotFound, match="Item with id 424242 not found"):
        SqlItemDirectory(db_session).resolve(424242)


def test_sqlite_connection_usable_from_another_thread(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'threads.db'}")
    try:
        with engine.connect() as connection:
            with ThreadPoolExecutor(max_workers=1) as pool:
                value = pool.submit(lambda: connection.execute(text("SELECT 1")).scalar()).result()
    finally:
        engine.dispose()
    assert value == 1
