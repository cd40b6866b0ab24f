# Services/driver_router.py
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, constr
from typing import List, Optional
from datetime import datetime
from Models import Account, Role
from Services.booking_service import RideBookingService
from Services.dependencies import get_booking_service, require_role
from Services.trip_router import TripResponse

router = APIRouter()

class DriverBase(BaseModel):
    username: constr(strip_whitespace=True, min_length=1, max_length=50)
    name: constr(strip_whitespace=True, min_length=1, max_length=100)
    contact: constr(strip_whitespace=True, min_length=1, max_length=100)

class DriverCreate(DriverBase):
    password: constr(min_length=1, max_length=100)
    car_id: constr(strip_whitespace=True, min_length=1)

class DriverResponse(DriverBase):
    id: str
    assigned_car_id: Optional[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

@router.post("", response_model=DriverResponse, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_role(Role.OWNER))])
async def add_driver(
    driver: DriverCreate,
    service: RideBookingService = Depends(get_booking_service)
):
    """Add a driver and assign them to a car, replacing any current driver of that car."""
    return service.add_driver_and_assign(
        driver.username, driver.password, driver.name, driver.contact, driver.car_id
    )

@router.get("/me/trips", response_model=List[TripResponse])
async def my_trips(
    driver: Account = Depends(require_role(Role.DRIVER)),
    service: RideBookingService = Depends(get_booking_service)
):
    return service.driver_trips(driver)
