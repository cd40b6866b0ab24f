# Services/dependencies.py
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.orm import Session

from Models import Account, Role
from Services.booking_service import RideBookingService
from Services.errors import AccountNotFound, InvalidCredentials
from database import get_db

security = HTTPBasic()


def get_booking_service(db: Session = Depends(get_db)) -> RideBookingService:
    return RideBookingService(db)


def current_account(
    credentials: HTTPBasicCredentials = Depends(security),
    service: RideBookingService = Depends(get_booking_service),
) -> Account:
    try:
        return service.login(credentials.username, credentials.password)
    except (AccountNotFound, InvalidCredentials):
        # Same answer for unknown users and wrong passwords
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Basic"},
        )


def require_role(role: Role):
    """Dependency that only lets accounts with the given role through."""
    def checker(account: Account = Depends(current_account)) -> Account:
        if account.role != role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Only {role.value} accounts can do this"
            )
        return account
    return checker
