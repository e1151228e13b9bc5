"""
Enumerations shared by the job catalog, actions and buildings.
"""

from enum import Enum


class BuildingType(str, Enum):
    EMPLOYMENT_AGENCY = "EMPLOYMENT_AGENCY"
    FACTORY = "FACTORY"
    BANK = "BANK"
    COLLEGE = "COLLEGE"
    DEPARTMENT_STORE = "DEPARTMENT_STORE"
    CLOTHES_STORE = "CLOTHES_STORE"
    APPLIANCE_STORE = "APPLIANCE_STORE"
    PAWN_SHOP = "PAWN_SHOP"
    RESTAURANT = "RESTAURANT"
    SUPERMARKET = "SUPERMARKET"
    RENT_AGENCY = "RENT_AGENCY"
    LOW_COST_APARTMENT = "LOW_COST_APARTMENT"
    SECURITY_APARTMENT = "SECURITY_APARTMENT"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()

    @property
    def is_home(self) -> bool:
        return self in (BuildingType.LOW_COST_APARTMENT, BuildingType.SECURITY_APARTMENT)


class ActionType(str, Enum):
    MOVE = "MOVE"
    ENTER_BUILDING = "ENTER_BUILDING"
    EXIT_BUILDING = "EXIT_BUILDING"
    WORK = "WORK"
    STUDY = "STUDY"
    RELAX = "RELAX"
    PURCHASE = "PURCHASE"
    SELL = "SELL"
    APPLY_JOB = "APPLY_JOB"
    QUIT_JOB = "QUIT_JOB"
    PAY_RENT = "PAY_RENT"
    RENT_HOME = "RENT_HOME"
    SUBMENU = "SUBMENU"
