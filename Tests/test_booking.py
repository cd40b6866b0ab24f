import pytest

from Models import Trip
from Services.booking_service import trip_price
from Services.errors import (
    AlreadyCompleted, CarNotFound, CarUnavailable, DriverUnassigned,
    DuplicateCarId, DuplicateUsername, InvalidPosition, InvalidRoute,
    NoCarsAvailable,
)


@pytest.fixture
def alice(seeded_service):
    return seeded_service.find_account("alice")


def test_available_cars_sorted_by_distance(seeded_service):
    offers = seeded_service.find_available_cars(3, 7)

    assert [offer.car.id for offer in offers] == ["C1", "C2", "C3", "C4", "C5"]
    assert [offer.distance for offer in offers] == [1, 2, 2, 5, 7]
    assert {offer.price for offer in offers} == {4}


def test_available_cars_without_drop_have_no_price(seeded_service):
    offers = seeded_service.find_available_cars(9)
    # C4 (8) and C5 (10) tie at distance 1; C4 was added first
    assert [offer.car.id for offer in offers] == ["C4", "C5", "C2", "C1", "C3"]
    assert [offer.distance for offer in offers] == [1, 1, 4, 7, 8]
    assert all(offer.price is None for offer in offers)


def test_end_to_end_seeded_booking(seeded_service, alice):
    nearest = seeded_service.find_available_cars(3, 7)[0].car
    assert nearest.id == "C1"

    trip = seeded_service.book_trip(alice, nearest.id, 3, 7)
    assert trip.id == "T001"
    assert trip.price == 4
    assert trip.driver.username == "driver1"
    assert trip.ended_at is None
    assert nearest.is_available is False
    assert "C1" not in [offer.car.id for offer in seeded_service.find_available_cars(3)]

    seeded_service.complete_trip(trip)
    assert trip.ended_at is not None
    assert nearest.is_available is True
    assert nearest.position == 7


def test_trip_recorded_in_both_histories(seeded_service, alice):
    trip = seeded_service.book_trip(alice, "c2", 1, 4)
    driver = seeded_service.find_account("driver2")

    assert seeded_service.customer_trips(alice) == [trip]
    assert seeded_service.driver_trips(driver) == [trip]
    assert seeded_service.all_trips() == [trip]


def test_invalid_route_creates_no_trip(seeded_service, alice):
    with pytest.raises(InvalidRoute):
        seeded_service.book_trip(alice, "C1", 4, 4)

    assert seeded_service.db.query(Trip).count() == 0
    assert seeded_service.get_car("C1").is_available is True


def test_position_out_of_range(seeded_service, alice):
    with pytest.raises(InvalidPosition):
        seeded_service.book_trip(alice, "C1", 0, 4)
    with pytest.raises(InvalidPosition):
        seeded_service.book_trip(alice, "C1", 4, 11)


def test_unassigned_driver_leaves_car_available(seeded_service, alice):
    with pytest.raises(DriverUnassigned):
        seeded_service.book_trip(alice, "C3", 2, 6)

    assert seeded_service.get_car("C3").is_available is True
    assert seeded_service.db.query(Trip).count() == 0


def test_unknown_car(seeded_service, alice):
    with pytest.raises(CarNotFound):
        seeded_service.book_trip(alice, "C99", 2, 6)


def test_car_in_trip_cannot_be_booked(seeded_service, alice):
    seeded_service.book_trip(alice, "C1", 2, 6)

    with pytest.raises(CarUnavailable):
        seeded_service.book_trip(alice, "C1", 3, 5)
    assert seeded_service.db.query(Trip).count() == 1


def test_no_cars_available(service):
    customer = service.register_customer("carol", "pw", "Carol", "c@example.com")
    service.add_car("X1", "Solo-1", 5)
    service.add_driver_and_assign("dan", "pw", "Dan", "1", "X1")
    service.book_trip(customer, "X1", 5, 6)

    with pytest.raises(NoCarsAvailable):
        service.book_trip(customer, "X1", 2, 3)


def test_price_independent_of_car(seeded_service, alice):
    near = seeded_service.book_trip(alice, "C1", 3, 7)
    far = seeded_service.book_trip(alice, "C4", 3, 7)

    assert near.price == far.price == trip_price(3, 7) == 4


def test_sequential_trip_ids(seeded_service, alice):
    ids = []
    for car_id in ("C1", "C2", "C4"):
        trip = seeded_service.book_trip(alice, car_id, 1, 10)
        ids.append(trip.id)
        seeded_service.complete_trip(trip)

    assert ids == ["T001", "T002", "T003"]


def test_complete_twice(seeded_service, alice):
    trip = seeded_service.book_trip(alice, "C1", 2, 5)
    seeded_service.complete_trip(trip, 9)
    assert trip.car.position == 9

    with pytest.raises(AlreadyCompleted):
        seeded_service.complete_trip(trip, 3)
    assert trip.car.position == 9


def test_get_trip_is_case_insensitive(seeded_service, alice):
    trip = seeded_service.book_trip(alice, "C1", 2, 5)
    assert seeded_service.get_trip("t001") is trip


def test_add_car(seeded_service):
    car = seeded_service.add_car("C6", "Ciaz-606", 4)
    assert car.is_available is True
    assert car.driver is None
    assert len(seeded_service.list_cars()) == 6


def test_add_car_duplicate_id(seeded_service):
    with pytest.raises(DuplicateCarId):
        seeded_service.add_car("c1", "Copy", 3)


def test_add_car_position_out_of_range(seeded_service):
    with pytest.raises(InvalidPosition):
        seeded_service.add_car("C7", "Far-707", 12)


def test_add_driver_overwrites_assignment(seeded_service):
    previous = seeded_service.find_account("driver1")
    driver = seeded_service.add_driver_and_assign("driver4", "pass4", "Naresh", "9990004", "C1")

    car = seeded_service.get_car("C1")
    assert car.driver is driver
    assert driver.assigned_car is car
    # The old driver keeps pointing at the car
    assert previous.assigned_car is car


def test_add_driver_duplicate_username(seeded_service):
    with pytest.raises(DuplicateUsername):
        seeded_service.add_driver_and_assign("Alice", "pw", "A", "1", "C3")
    assert seeded_service.get_car("C3").driver is None


def test_seed_runs_once(seeded_service):
    assert seeded_service.seed_demo_data() is False
    assert len(seeded_service.list_cars()) == 5


def test_cars_keep_registry_order(seeded_service):
    seeded_service.add_car("C0", "Zen-000", 5)

    assert [car.id for car in seeded_service.list_cars()] == ["C1", "C2", "C3", "C4", "C5", "C0"]
    assert [car.number for car in seeded_service.list_cars()] == [1, 2, 3, 4, 5, 6]
    # C2 and C0 both sit at 5; C2 was added first
    offers = seeded_service.find_available_cars(5)
    assert [offer.car.id for offer in offers[:2]] == ["C2", "C0"]


def test_non_ascii_car_id_is_case_insensitive(seeded_service):
    car = seeded_service.add_car("Ä1", "Äpfel-1", 3)

    assert seeded_service.get_car("ä1") is car
    with pytest.raises(DuplicateCarId):
        seeded_service.add_car("ä1", "Copy", 4)
