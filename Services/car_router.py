# Services/car_router.py
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, conint, constr
from typing import List, Optional
from datetime import datetime
from Models import Car, Role, MIN_POSITION, MAX_POSITION
from Services.booking_service import RideBookingService, CarOffer
from Services.dependencies import get_booking_service, require_role

router = APIRouter(
    responses={404: {"description": "Car not found"}}
)

Position = conint(ge=MIN_POSITION, le=MAX_POSITION)

class CarBase(BaseModel):
    id: constr(strip_whitespace=True, min_length=1, max_length=20)
    name: constr(strip_whitespace=True, min_length=1, max_length=50)
    position: Position

class CarCreate(CarBase):
    pass

class CarResponse(CarBase):
    is_available: bool
    driver_id: Optional[str] = None
    driver_name: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime]

class CarOfferResponse(BaseModel):
    car: CarResponse
    distance: int
    price: Optional[int]

def car_response(car: Car) -> CarResponse:
    return CarResponse(
        id=car.id,
        name=car.name,
        position=car.position,
        is_available=car.is_available,
        driver_id=car.driver_id,
        driver_name=car.driver.name if car.driver is not None else None,
        created_at=car.created_at,
        updated_at=car.updated_at,
    )

def offer_response(offer: CarOffer) -> CarOfferResponse:
    return CarOfferResponse(
        car=car_response(offer.car),
        distance=offer.distance,
        price=offer.price,
    )

@router.post("", response_model=CarResponse, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_role(Role.OWNER))])
async def create_car(
    car: CarCreate,
    service: RideBookingService = Depends(get_booking_service)
):
    return car_response(service.add_car(car.id, car.name, car.position))

@router.get("/list", response_model=List[CarResponse],
            dependencies=[Depends(require_role(Role.OWNER))])
async def list_cars(
    available_only: bool = Query(default=False),
    service: RideBookingService = Depends(get_booking_service)
):
    cars = service.list_cars()
    if available_only:
        cars = [car for car in cars if car.is_available]
    return [car_response(car) for car in cars]

@router.get("/available", response_model=List[CarOfferResponse])
async def available_cars(
    pickup: int = Query(..., ge=MIN_POSITION, le=MAX_POSITION),
    drop: Optional[int] = Query(default=None, ge=MIN_POSITION, le=MAX_POSITION),
    service: RideBookingService = Depends(get_booking_service)
):
    """Available cars sorted by distance to the pickup point, with the trip price."""
    return [offer_response(offer) for offer in service.find_available_cars(pickup, drop)]

@router.get("/{car_id}", response_model=CarResponse)
async def get_car(
    car_id: str,
    service: RideBookingService = Depends(get_booking_service)
):
    return car_response(service.get_car(car_id))
