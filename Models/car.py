# Models/car.py
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship, validates
from datetime import datetime
from .base import Base

MIN_POSITION = 1
MAX_POSITION = 10


class Car(Base):
    __tablename__ = 'cars'

    # Primary identifiers
    id = Column(String, primary_key=True, index=True)
    id_key = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)

    # Registry order, assigned when the car is added
    number = Column(Integer, unique=True, nullable=False)

    # Position on the 1..10 line
    position = Column(Integer, nullable=False)

    # Status
    is_available = Column(Boolean, default=True, nullable=False)

    # Driver relationship, written after both rows exist
    driver_id = Column(String, ForeignKey('accounts.id'), nullable=True)
    driver = relationship("Driver", foreign_keys=[driver_id], post_update=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @staticmethod
    def fold(car_id: str) -> str:
        return car_id.casefold()

    @validates('id')
    def _set_id_key(self, key, value):
        self.id_key = Car.fold(value)
        return value

    def start_trip(self):
        self.is_available = False

    def end_trip(self, new_position: int):
        self.is_available = True
        self.position = new_position

    def __repr__(self):
        driver = self.driver.name if self.driver is not None else "Unassigned"
        return f"<Car {self.name} ({self.id}) pos={self.position} available={self.is_available} driver={driver}>"
