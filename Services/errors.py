# Services/errors.py
import enum


class FailureKind(str, enum.Enum):
    DUPLICATE_USERNAME = "DuplicateUsername"
    DUPLICATE_CAR_ID = "DuplicateCarId"
    ACCOUNT_NOT_FOUND = "AccountNotFound"
    INVALID_CREDENTIALS = "InvalidCredentials"
    INVALID_ROUTE = "InvalidRoute"
    INVALID_POSITION = "InvalidPosition"
    NO_CARS_AVAILABLE = "NoCarsAvailable"
    CAR_NOT_FOUND = "CarNotFound"
    CAR_UNAVAILABLE = "CarUnavailable"
    DRIVER_UNASSIGNED = "DriverUnassigned"
    TRIP_NOT_FOUND = "TripNotFound"
    ALREADY_COMPLETED = "AlreadyCompleted"


class BookingError(Exception):
    """Recoverable failure of a booking service operation.

    Raised before anything is written, so the registry is unchanged.
    """
    kind: FailureKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DuplicateUsername(BookingError):
    kind = FailureKind.DUPLICATE_USERNAME


class DuplicateCarId(BookingError):
    kind = FailureKind.DUPLICATE_CAR_ID


class AccountNotFound(BookingError):
    kind = FailureKind.ACCOUNT_NOT_FOUND


class InvalidCredentials(BookingError):
    kind = FailureKind.INVALID_CREDENTIALS


class InvalidRoute(BookingError):
    kind = FailureKind.INVALID_ROUTE


class InvalidPosition(BookingError):
    kind = FailureKind.INVALID_POSITION


class NoCarsAvailable(BookingError):
    kind = FailureKind.NO_CARS_AVAILABLE


class CarNotFound(BookingError):
    kind = FailureKind.CAR_NOT_FOUND


class CarUnavailable(BookingError):
    kind = FailureKind.CAR_UNAVAILABLE


class DriverUnassigned(BookingError):
    kind = FailureKind.DRIVER_UNASSIGNED


class TripNotFound(BookingError):
    kind = FailureKind.TRIP_NOT_FOUND


class AlreadyCompleted(BookingError):
    kind = FailureKind.ALREADY_COMPLETED
