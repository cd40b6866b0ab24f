# Services/trip_router.py
from fastapi import APIRouter, HTTPException, Depends, status
from pydantic import BaseModel, ConfigDict, conint, constr
from typing import List, Optional
from datetime import datetime
from Models import Account, Role, Trip, MIN_POSITION, MAX_POSITION
from Services.booking_service import RideBookingService
from Services.dependencies import get_booking_service, current_account, require_role

router = APIRouter(
    responses={404: {"description": "Trip not found"}}
)

Position = conint(ge=MIN_POSITION, le=MAX_POSITION)

class TripCreate(BaseModel):
    """
    Booking request.

    Attributes:
        car_id: Id of the chosen car, usually one returned by /api/cars/available
        pickup: Pickup point (1 to 10)
        drop: Drop point (1 to 10), different from pickup
    """
    car_id: constr(strip_whitespace=True, min_length=1)
    pickup: Position
    drop: Position

class TripComplete(BaseModel):
    """End of a trip. The car ends at the drop point unless told otherwise."""
    end_position: Optional[Position] = None

class TripResponse(BaseModel):
    id: str
    customer_id: str
    driver_id: str
    car_id: str
    pickup: int
    drop: int
    price: int
    started_at: datetime
    ended_at: Optional[datetime]

    model_config = ConfigDict(from_attributes=True)

def ensure_can_view(trip: Trip, account: Account):
    """Owners see every trip; customers and drivers only their own."""
    if account.role == Role.OWNER:
        return
    if account.role == Role.CUSTOMER and trip.customer_id == account.id:
        return
    if account.role == Role.DRIVER and trip.driver_id == account.id:
        return
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Not your trip"
    )

@router.post("",
    response_model=TripResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Book a cab",
    description="""
    Book the chosen car for a ride from pickup to drop.

    The price is the distance between pickup and drop, whichever car is chosen.
    The car must be available and have a driver assigned.
    """
)
async def book_trip(
    booking: TripCreate,
    customer: Account = Depends(require_role(Role.CUSTOMER)),
    service: RideBookingService = Depends(get_booking_service)
):
    return service.book_trip(customer, booking.car_id, booking.pickup, booking.drop)

@router.get("/mine", response_model=List[TripResponse], summary="Trip history of the customer")
async def my_trips(
    customer: Account = Depends(require_role(Role.CUSTOMER)),
    service: RideBookingService = Depends(get_booking_service)
):
    return service.customer_trips(customer)

@router.get("/list", response_model=List[TripResponse], summary="All trips (owner view)",
            dependencies=[Depends(require_role(Role.OWNER))])
async def list_trips(service: RideBookingService = Depends(get_booking_service)):
    return service.all_trips()

@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip(
    trip_id: str,
    account: Account = Depends(current_account),
    service: RideBookingService = Depends(get_booking_service)
):
    trip = service.get_trip(trip_id)
    ensure_can_view(trip, account)
    return trip

@router.post("/{trip_id}/complete",
    response_model=TripResponse,
    summary="Complete a trip",
    description="""
    Mark the trip as ended and free the car at its end position.
    Allowed for the customer who booked the trip and for owners.
    A trip can only be completed once.
    """
)
async def complete_trip(
    trip_id: str,
    completion: Optional[TripComplete] = None,
    account: Account = Depends(current_account),
    service: RideBookingService = Depends(get_booking_service)
):
    trip = service.get_trip(trip_id)
    if account.role == Role.DRIVER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Drivers cannot complete trips"
        )
    ensure_can_view(trip, account)
    end_position = completion.end_position if completion is not None else None
    return service.complete_trip(trip, end_position)
