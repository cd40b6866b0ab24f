# Services/booking_service.py
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from Models import (
    Account, Customer, Driver, Owner, Car, Trip,
    MIN_POSITION, MAX_POSITION, TRIP_ID_FORMAT,
)
from Services.errors import (
    AccountNotFound, AlreadyCompleted, CarNotFound, CarUnavailable,
    DriverUnassigned, DuplicateCarId, DuplicateUsername, InvalidCredentials,
    InvalidPosition, InvalidRoute, NoCarsAvailable, TripNotFound,
)

logger = logging.getLogger(__name__)

# Lookup order for find_account
ACCOUNT_KINDS = (Customer, Driver, Owner)


@dataclass
class CarOffer:
    """An available car as shown to a customer searching for a ride."""
    car: Car
    distance: int
    price: Optional[int]


def trip_price(pickup: int, drop: int) -> int:
    # Depends only on the requested route, never on the matched car.
    return abs(pickup - drop)


def check_position(value: int, label: str = "position") -> int:
    if not MIN_POSITION <= value <= MAX_POSITION:
        raise InvalidPosition(
            f"{label.capitalize()} must be between {MIN_POSITION} and {MAX_POSITION}, got {value}"
        )
    return value


class RideBookingService:
    """
    Booking operations over the registry held by a database session.

    Every failure raises a BookingError subclass before any row is touched;
    every successful mutation is committed before returning.
    """

    def __init__(self, db: Session):
        self.db = db

    def _commit(self):
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    # Accounts

    def find_account(self, username: str) -> Optional[Account]:
        wanted = Account.fold(username)
        for kind in ACCOUNT_KINDS:
            account = (
                self.db.query(kind)
                .filter(kind.username_key == wanted)
                .first()
            )
            if account is not None:
                return account
        return None

    def _ensure_username_free(self, username: str):
        if self.find_account(username) is not None:
            logger.warning("Rejected duplicate username %r", username)
            raise DuplicateUsername(f"Username '{username}' already exists")

    def register_customer(self, username: str, password: str, name: str, contact: str) -> Customer:
        self._ensure_username_free(username)
        customer = Customer(
            id=str(uuid.uuid4()),
            username=username,
            password=password,
            name=name,
            contact=contact,
        )
        self.db.add(customer)
        self._commit()
        logger.info("Registered customer %s", username)
        return customer

    def login(self, username: str, password: str) -> Account:
        account = self.find_account(username)
        if account is None:
            logger.warning("Login for unknown account %r", username)
            raise AccountNotFound("Account not found")
        if not account.check_password(password):
            logger.warning("Invalid password for %r", username)
            raise InvalidCredentials("Invalid password")
        logger.info("%s %s logged in", account.role.value, account.username)
        return account

    # Cars

    def list_cars(self) -> List[Car]:
        return self.db.query(Car).order_by(Car.number).all()

    def _find_car(self, car_id: str) -> Optional[Car]:
        return self.db.query(Car).filter(Car.id_key == Car.fold(car_id)).first()

    def get_car(self, car_id: str) -> Car:
        car = self._find_car(car_id)
        if car is None:
            raise CarNotFound(f"Car '{car_id}' not found")
        return car

    def find_available_cars(self, pickup: int, drop: Optional[int] = None) -> List[CarOffer]:
        """
        Available cars, nearest to the pickup point first.

        The price tiebreak is the same for every offer of one request, so
        cars at equal distance stay in registry order.
        """
        check_position(pickup, "pickup")
        price = None
        if drop is not None:
            check_position(drop, "drop")
            price = trip_price(pickup, drop)

        offers = [
            CarOffer(car=car, distance=abs(car.position - pickup), price=price)
            for car in self.db.query(Car).filter(Car.is_available == True).order_by(Car.number).all()
        ]
        offers.sort(key=lambda offer: (offer.distance, offer.price or 0))
        return offers

    def add_car(self, car_id: str, name: str, position: int) -> Car:
        if self._find_car(car_id) is not None:
            logger.warning("Rejected duplicate car id %r", car_id)
            raise DuplicateCarId(f"Car id '{car_id}' already exists")
        check_position(position)

        number = (self.db.query(func.max(Car.number)).scalar() or 0) + 1
        car = Car(id=car_id, name=name, number=number, position=position, is_available=True)
        self.db.add(car)
        self._commit()
        logger.info("Added car %s (%s) at position %d", car.name, car.id, position)
        return car

    def add_driver_and_assign(self, username: str, password: str, name: str,
                              contact: str, car_id: str) -> Driver:
        self._ensure_username_free(username)
        car = self.get_car(car_id)

        driver = Driver(
            id=str(uuid.uuid4()),
            username=username,
            password=password,
            name=name,
            contact=contact,
        )
        if car.driver is not None:
            logger.info("Car %s reassigned from %s to %s", car.id, car.driver.username, username)
        # Both directions; any previous driver keeps its stale pointer
        driver.assigned_car = car
        car.driver = driver
        self.db.add(driver)
        self._commit()
        logger.info("Driver %s added and assigned to %s", username, car.id)
        return driver

    # Trips

    def _next_trip_number(self) -> int:
        return (self.db.query(func.max(Trip.number)).scalar() or 0) + 1

    def book_trip(self, customer: Customer, car_id: str, pickup: int, drop: int) -> Trip:
        check_position(pickup, "pickup")
        check_position(drop, "drop")
        if pickup == drop:
            raise InvalidRoute("Pickup and drop cannot be the same")

        if not self.find_available_cars(pickup, drop):
            logger.warning("No cars available for %s", customer.username)
            raise NoCarsAvailable("No cars available right now")

        car = self.get_car(car_id)
        if not car.is_available:
            raise CarUnavailable(f"Car '{car.id}' is on a trip")
        if car.driver is None:
            raise DriverUnassigned(
                f"Car '{car.id}' has no assigned driver. Owner must assign a driver first"
            )

        number = self._next_trip_number()
        car.start_trip()
        trip = Trip(
            id=TRIP_ID_FORMAT.format(number),
            number=number,
            customer=customer,
            driver=car.driver,
            car=car,
            pickup=pickup,
            drop=drop,
            price=trip_price(pickup, drop),
            started_at=datetime.utcnow(),
        )
        self.db.add(trip)
        self._commit()
        logger.info(
            "Booked %s for %s with driver %s: trip %s, price %d",
            car.name, customer.username, trip.driver.username, trip.id, trip.price,
        )
        return trip

    def complete_trip(self, trip: Trip, end_position: Optional[int] = None) -> Trip:
        if trip.is_completed:
            raise AlreadyCompleted(f"Trip {trip.id} is already completed")
        if end_position is None:
            end_position = trip.drop
        check_position(end_position, "end position")

        trip.complete()
        trip.car.end_trip(end_position)
        self._commit()
        logger.info("Trip %s completed; car %s now at %d", trip.id, trip.car.id, end_position)
        return trip

    def get_trip(self, trip_id: str) -> Trip:
        # Trip ids are generated ASCII, so upper-casing the input is enough
        trip = self.db.query(Trip).filter(Trip.id == trip_id.strip().upper()).first()
        if trip is None:
            raise TripNotFound(f"Trip '{trip_id}' not found")
        return trip

    def customer_trips(self, customer: Customer) -> List[Trip]:
        return list(customer.trips)

    def driver_trips(self, driver: Driver) -> List[Trip]:
        return list(driver.trips)

    def all_trips(self) -> List[Trip]:
        return self.db.query(Trip).order_by(Trip.number).all()

    # Demo data

    def seed_demo_data(self) -> bool:
        """
        Load the demo fleet: one owner, five cars, three drivers on C1, C2
        and C4, and the customer alice/alice123. Skipped when an owner exists.
        """
        if self.db.query(Owner).first() is not None:
            return False

        self.db.add(Owner(
            id=str(uuid.uuid4()),
            username="owner",
            password="owner",
            name="Super Owner",
            contact="owner@example.com",
        ))
        self._commit()

        for car_id, name, position in [
            ("C1", "Swift-101", 2),
            ("C2", "Dzire-202", 5),
            ("C3", "Alto-303", 1),
            ("C4", "Innova-404", 8),
            ("C5", "Baleno-505", 10),
        ]:
            self.add_car(car_id, name, position)

        for username, password, name, contact, car_id in [
            ("driver1", "pass1", "Ramesh", "9990001", "C1"),
            ("driver2", "pass2", "Suresh", "9990002", "C2"),
            ("driver3", "pass3", "Mahesh", "9990003", "C4"),
        ]:
            self.add_driver_and_assign(username, password, name, contact, car_id)

        self.register_customer("alice", "alice123", "Alice", "alice@example.com")
        logger.info("Seeded initial data: owner, 5 cars, 3 drivers, 1 sample customer")
        return True
