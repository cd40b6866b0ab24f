# Services/menus.py
from typing import Callable, Dict, List

from Models import Account, Role


def _customer_banner(account: Account) -> str:
    return f"Customer menu for {account.name} ({account.username})"


def _driver_banner(account: Account) -> str:
    car = account.assigned_car.name if account.assigned_car is not None else "None"
    return f"Driver menu for {account.name} ({account.username}) - Car: {car}"


def _owner_banner(account: Account) -> str:
    return f"Owner menu for {account.name} ({account.username})"


BANNERS: Dict[Role, Callable[[Account], str]] = {
    Role.CUSTOMER: _customer_banner,
    Role.DRIVER: _driver_banner,
    Role.OWNER: _owner_banner,
}

OPTIONS: Dict[Role, List[str]] = {
    Role.CUSTOMER: ["Book a Cab", "View My Trips", "Logout"],
    Role.DRIVER: ["View My Trips", "Logout"],
    Role.OWNER: [
        "View All Trips",
        "View Car Status",
        "Add Car",
        "Add Driver & Assign to Car",
        "Logout",
    ],
}


def menu_for(account: Account) -> Dict[str, object]:
    """Banner and options of the menu shown after login, picked by role tag."""
    return {
        "banner": BANNERS[account.role](account),
        "options": OPTIONS[account.role],
    }
