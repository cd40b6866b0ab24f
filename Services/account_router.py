# Services/account_router.py
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, constr
from typing import List, Optional
from datetime import datetime
from Models import Account, Role
from Services.booking_service import RideBookingService
from Services.dependencies import get_booking_service, current_account
from Services.menus import menu_for

router = APIRouter()

# Pydantic models
class AccountBase(BaseModel):
    username: constr(strip_whitespace=True, min_length=1, max_length=50)
    name: constr(strip_whitespace=True, min_length=1, max_length=100)
    contact: constr(strip_whitespace=True, min_length=1, max_length=100)

class CustomerCreate(AccountBase):
    password: constr(min_length=1, max_length=100)

class AccountResponse(AccountBase):
    id: str
    role: Role
    created_at: datetime
    updated_at: Optional[datetime]

    model_config = ConfigDict(from_attributes=True)

class LoginRequest(BaseModel):
    username: constr(strip_whitespace=True, min_length=1)
    password: constr(min_length=1)

class MenuResponse(BaseModel):
    banner: str
    options: List[str]

class LoginResponse(BaseModel):
    account: AccountResponse
    menu: MenuResponse

# API Endpoints
@router.post("/register", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
async def register_customer(
    customer: CustomerCreate,
    service: RideBookingService = Depends(get_booking_service)
):
    return service.register_customer(
        customer.username, customer.password, customer.name, customer.contact
    )

@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    service: RideBookingService = Depends(get_booking_service)
):
    account = service.login(credentials.username, credentials.password)
    return {"account": account, "menu": menu_for(account)}

@router.get("/me", response_model=LoginResponse)
async def get_current_account(account: Account = Depends(current_account)):
    return {"account": account, "menu": menu_for(account)}
