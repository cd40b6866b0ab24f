# Models/trip.py
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from .base import Base

TRIP_ID_FORMAT = "T{:03d}"


class Trip(Base):
    __tablename__ = 'trips'

    # Primary identifiers
    id = Column(String, primary_key=True, index=True)
    number = Column(Integer, unique=True, nullable=False)

    # Parties
    customer_id = Column(String, ForeignKey('accounts.id'), nullable=False)
    driver_id = Column(String, ForeignKey('accounts.id'), nullable=False)
    car_id = Column(String, ForeignKey('cars.id'), nullable=False)

    customer = relationship("Customer", foreign_keys=[customer_id], back_populates="trips")
    driver = relationship("Driver", foreign_keys=[driver_id], back_populates="trips")
    car = relationship("Car")

    # Route
    pickup = Column(Integer, nullable=False)
    drop = Column(Integer, nullable=False)
    price = Column(Integer, nullable=False)

    # Timestamps
    started_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    ended_at = Column(DateTime, nullable=True)

    @property
    def is_completed(self) -> bool:
        return self.ended_at is not None

    def complete(self):
        self.ended_at = datetime.utcnow()

    def __repr__(self):
        ended = self.ended_at.isoformat() if self.ended_at else "In-Progress"
        return f"<Trip {self.id} P:{self.pickup} D:{self.drop} Price:{self.price} End:{ended}>"
