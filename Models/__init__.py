# Models/__init__.py
from .base import Base
from .account import Account, Customer, Driver, Owner, Role
from .car import Car, MIN_POSITION, MAX_POSITION
from .trip import Trip, TRIP_ID_FORMAT

# List all models for easy access and database initialization
__all__ = [
    'Base',
    'Account',
    'Customer',
    'Driver',
    'Owner',
    'Role',
    'Car',
    'Trip',
    'MIN_POSITION',
    'MAX_POSITION',
    'TRIP_ID_FORMAT',
]
