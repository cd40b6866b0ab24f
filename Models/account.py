# Models/account.py
import enum
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Enum
from sqlalchemy.orm import relationship, validates
from .base import Base


class Role(str, enum.Enum):
    CUSTOMER = "customer"
    DRIVER = "driver"
    OWNER = "owner"


class Account(Base):
    """
    Login identity shared by customers, drivers and owners.

    All roles live in one table; `role` is the tag callers dispatch on.
    Usernames are unique case-insensitively across every role, which the
    booking service enforces before inserting.
    """
    __tablename__ = 'accounts'

    # Primary identifiers
    id = Column(String, primary_key=True, index=True)
    username = Column(String, nullable=False)
    # Case-folded username, the key every lookup compares against
    username_key = Column(String, nullable=False, unique=True, index=True)
    password = Column(String, nullable=False)
    role = Column(Enum(Role), nullable=False)

    # Profile
    name = Column(String, nullable=False)
    contact = Column(String, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __mapper_args__ = {
        'polymorphic_on': role,
    }

    @staticmethod
    def fold(username: str) -> str:
        return username.casefold()

    @validates('username')
    def _set_username_key(self, key, value):
        self.username_key = Account.fold(value)
        return value

    def check_password(self, password: str) -> bool:
        return self.password == password

    def __repr__(self):
        return f"<{self.role.value.title()} {self.name} ({self.username})>"


class Customer(Account):
    trips = relationship(
        "Trip",
        foreign_keys="Trip.customer_id",
        back_populates="customer",
        order_by="Trip.number",
    )

    __mapper_args__ = {'polymorphic_identity': Role.CUSTOMER}


class Driver(Account):
    # Plain column: a car may point at a newer driver while this one still
    # points at the car (last assignment wins).
    assigned_car_id = Column(String, nullable=True)
    assigned_car = relationship(
        "Car",
        primaryjoin="foreign(Driver.assigned_car_id) == Car.id",
    )

    trips = relationship(
        "Trip",
        foreign_keys="Trip.driver_id",
        back_populates="driver",
        order_by="Trip.number",
    )

    __mapper_args__ = {'polymorphic_identity': Role.DRIVER}


class Owner(Account):
    __mapper_args__ = {'polymorphic_identity': Role.OWNER}
