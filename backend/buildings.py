"""
Buildings

Static map fixtures that expose actions to the player inside them. Each
building kind is a subclass holding its own catalog as plain data; all of
them share one capability surface:

    get_job_offerings()                 -> jobs hired here
    get_available_actions(state, game)  -> empty unless the player is inside
    get_action_tree(state, game)        -> menu for the UI

Every building emits an exit action, and a work action for players employed
by a job of the building's type.
"""

import logging
from typing import Dict, List, Optional, Tuple

from actions import (
    Action,
    ActionTreeNode,
    ApplyForJobAction,
    BuyStockAction,
    ClothesPurchaseAction,
    EatMealAction,
    ExitBuildingAction,
    PayRentAction,
    PurchaseAction,
    QuitJobAction,
    RelaxAction,
    RentHomeAction,
    SellPossessionAction,
    SellStockAction,
    StudyAction,
    SubmenuAction,
    WorkAction,
)
from config import CONFIG
from enums import BuildingType
from grid import Position
from jobs import Job, JobSystem
from possessions import PossessionType, make_appliance, make_clothes, make_food

logger = logging.getLogger(__name__)


class Building:
    """Base building: identity, position and the shared menu helpers."""

    building_type: BuildingType = None
    default_description = ""

    def __init__(
        self,
        building_id: str,
        name: str,
        position: Position,
        job_system: Optional[JobSystem] = None,
        description: Optional[str] = None,
    ):
        self.id = building_id
        self.type = self.building_type
        self.name = name
        self.position = position
        self.description = description or self.default_description
        self.job_system = job_system

    # Capability surface

    def get_job_offerings(self) -> List[Job]:
        if self.job_system is None:
            return []
        return self.job_system.get_available_jobs(self.type)

    def get_available_actions(self, state, game) -> List[Action]:
        if not self.is_player_inside(state):
            return []
        return self._building_actions(state, game) + self._work_actions(state) + [self.exit_action()]

    def get_action_tree(self, state, game) -> ActionTreeNode:
        """Flat menu: the first action is the root, the rest its children."""
        actions = self.get_available_actions(state, game)
        if not actions:
            return ActionTreeNode(self.exit_action())
        return self._node(actions[0], [self._node(a, index=i + 1) for i, a in enumerate(actions[1:])])

    # Predicates

    def can_enter(self, state) -> bool:
        return True

    def is_home(self) -> bool:
        return self.type.is_home

    def is_player_inside(self, state) -> bool:
        return state.current_building == self.id

    def is_player_at_position(self, state) -> bool:
        return state.position.equals(self.position)

    # Helpers for subclasses

    def _building_actions(self, state, game) -> List[Action]:
        return []

    def _work_actions(self, state) -> List[Action]:
        job = state.job
        if job is not None and job.building_type == self.type:
            return [WorkAction(self, job)]
        return []

    def exit_action(self) -> ExitBuildingAction:
        return ExitBuildingAction(self)

    @staticmethod
    def _node(action: Action, children=None, index: int = 0) -> ActionTreeNode:
        return ActionTreeNode(action, list(children or []), index)

    def _submenu(
        self,
        key: str,
        display_name: str,
        description: str,
        actions: List[Action],
        index: int = 0,
        empty_message: Optional[str] = None,
    ) -> ActionTreeNode:
        """Group actions under a zero-cost submenu entry."""
        submenu = SubmenuAction(
            f"{self.id}-{key}",
            display_name,
            description,
            available=bool(actions) or empty_message is None,
            unavailable_message=empty_message or "Nothing available",
        )
        return self._node(submenu, [self._node(a, index=i) for i, a in enumerate(actions)], index)

    def _trailing_nodes(self, state, start: int) -> List[ActionTreeNode]:
        """Work (when employed here) and exit, appended after a shop's submenus."""
        tail = self._work_actions(state) + [self.exit_action()]
        return [self._node(a, index=start + i) for i, a in enumerate(tail)]

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "type": self.type.value,
            "name": self.name,
            "description": self.description,
            "position": self.position.to_dict(),
            "jobOfferings": [job.id for job in self.get_job_offerings()],
        }

    def __str__(self) -> str:
        return f"{self.name} [{self.type.value}] at {self.position}"


class Factory(Building):
    building_type = BuildingType.FACTORY
    default_description = "Industrial jobs from janitor to general manager"


class College(Building):
    building_type = BuildingType.COLLEGE
    default_description = "Study to raise your education"

    def _building_actions(self, state, game) -> List[Action]:
        return [StudyAction(self)]


class Bank(Building):
    building_type = BuildingType.BANK
    default_description = "Buy and sell stocks"

    STOCKS: Tuple[Tuple[str, str], ...] = (
        ("t-bills", "T-Bills"),
        ("gold", "Gold"),
        ("silver", "Silver"),
        ("pig-bellies", "Pig Bellies"),
        ("blue-chip", "Blue Chip"),
        ("penny", "Penny Stock"),
    )

    def _symbol_for(self, company_name: str) -> str:
        for symbol, name in self.STOCKS:
            if name == company_name:
                return symbol
        return CONFIG.economy.default_stock

    def _buy_actions(self) -> List[Action]:
        return [BuyStockAction(self, symbol, name) for symbol, name in self.STOCKS]

    def _sell_actions(self, state) -> List[Action]:
        return [
            SellStockAction(self, stock, self._symbol_for(stock.name))
            for stock in state.get_possessions_by_type(PossessionType.STOCK)
        ]

    def _building_actions(self, state, game) -> List[Action]:
        return self._buy_actions() + self._sell_actions(state)

    def get_action_tree(self, state, game) -> ActionTreeNode:
        if not self.is_player_inside(state):
            return self._node(self.exit_action())
        children = [
            self._submenu("buy-stocks", "Buy Stocks", "Buy one share", self._buy_actions(), 0),
            self._submenu(
                "sell-stocks", "Sell Stocks", "Sell shares you own",
                self._sell_actions(state), 1, empty_message="No stocks to sell",
            ),
        ]
        children += self._trailing_nodes(state, len(children))
        root = SubmenuAction(f"{self.id}-stock-trading", "Stock Trading", "Trade stocks")
        return self._node(root, children)


class Supermarket(Building):
    building_type = BuildingType.SUPERMARKET
    default_description = "Buy affordable groceries - budget-friendly shopping"

    # name, price, health effect, weeks until spoiled
    GROCERIES: Tuple[Tuple[str, int, int, int], ...] = (
        ("Bread", 3, 5, 2),
        ("Milk", 4, 6, 1),
        ("Eggs", 5, 8, 2),
        ("Chicken", 8, 12, 1),
        ("Rice", 6, 10, 10),
        ("Vegetables", 7, 9, 1),
        ("Pasta", 5, 8, 10),
        ("Cheese", 6, 7, 2),
    )

    def _grocery_actions(self) -> List[Action]:
        actions = []
        for name, price, nutrition, spoil in self.GROCERIES:
            actions.append(PurchaseAction(
                self, name, price,
                lambda game, n=name, p=price, h=nutrition, s=spoil: make_food(
                    n, p, health_effect=h, spoil_time=game.current_week + s
                ),
                description=f"Grocery shopping: {name} (${price}, +{nutrition} nutrition)",
            ))
        return actions

    def _building_actions(self, state, game) -> List[Action]:
        return self._grocery_actions()

    def get_action_tree(self, state, game) -> ActionTreeNode:
        if not self.is_player_inside(state):
            return self._node(self.exit_action())
        groceries = self._grocery_actions()
        children = [self._node(a, index=i) for i, a in enumerate(groceries)]
        children += self._trailing_nodes(state, len(children))
        root = SubmenuAction(f"{self.id}-buy-menu", "Buy Groceries", "Shop for affordable groceries")
        return self._node(root, children)


class Restaurant(Building):
    building_type = BuildingType.RESTAURANT
    default_description = "Fast food restaurant offering entry-level to mid-level jobs"

    # item id, display name, health gained
    MENU: Tuple[Tuple[str, str, int], ...] = (
        ("burger", "Burger", 5),
        ("prepared-meal", "Prepared Meal", 8),
    )

    def _meal_actions(self, game) -> List[Action]:
        return [
            EatMealAction(self, item_id, name, game.economy_model.get_price(item_id, self.type), health)
            for item_id, name, health in self.MENU
        ]

    def _building_actions(self, state, game) -> List[Action]:
        return self._meal_actions(game)

    def get_action_tree(self, state, game) -> ActionTreeNode:
        if not self.is_player_inside(state):
            return self._node(self.exit_action())
        menu = self._submenu("menu", "Menu", "Order something to eat", self._meal_actions(game), 0)
        children = [menu] + self._trailing_nodes(state, 1)
        root = SubmenuAction(f"{self.id}-counter", "Order", "Step up to the counter")
        return self._node(root, children)


class ClothesStore(Building):
    building_type = BuildingType.CLOTHES_STORE
    default_description = "Dress for the job you want"

    # item id, display name, clothes level
    CLOTHES: Tuple[Tuple[str, str, int], ...] = (
        ("casual-clothes", "Casual Clothes", 1),
        ("dress-clothes", "Dress Clothes", 2),
        ("business-suit", "Business Suit", 3),
    )

    def _clothes_actions(self, game) -> List[Action]:
        actions = []
        for item_id, name, level in self.CLOTHES:
            price = game.economy_model.get_price(item_id, self.type)
            actions.append(ClothesPurchaseAction(
                self, name, price, level,
                lambda game, n=name, p=price, lv=level: make_clothes(n, p, lv),
            ))
        return actions

    def _building_actions(self, state, game) -> List[Action]:
        return self._clothes_actions(game)

    def get_action_tree(self, state, game) -> ActionTreeNode:
        if not self.is_player_inside(state):
            return self._node(self.exit_action())
        clothes = self._clothes_actions(game)
        children = [self._node(a, index=i) for i, a in enumerate(clothes)]
        children += self._trailing_nodes(state, len(children))
        root = SubmenuAction(f"{self.id}-buy-clothes", "Buy Clothes", "Browse the clothing racks")
        return self._node(root, children)


class ApplianceStore(Building):
    building_type = BuildingType.APPLIANCE_STORE
    default_description = "Home appliances that make life more pleasant"

    # name, price, happiness effect
    APPLIANCES: Tuple[Tuple[str, int, int], ...] = (
        ("Microwave", 150, 3),
        ("TV", 300, 5),
        ("Air Conditioner", 500, 8),
        ("Computer", 800, 10),
        ("Refrigerator", 600, 7),
        ("Washing Machine", 450, 6),
    )

    TIERS: Tuple[Tuple[str, str, int, float], ...] = (
        ("budget", "Budget", 0, 300),
        ("mid-range", "Mid-Range", 300, 600),
        ("premium", "Premium", 600, float("inf")),
    )

    def _appliance_actions(self, low: float = 0, high: float = float("inf")) -> List[Action]:
        return [
            PurchaseAction(
                self, name, price,
                lambda game, n=name, p=price, h=happiness: make_appliance(n, p, h),
                description=f"{name} (${price}, +{happiness} happiness)",
            )
            for name, price, happiness in self.APPLIANCES
            if low <= price < high
        ]

    def _building_actions(self, state, game) -> List[Action]:
        return self._appliance_actions()

    def get_action_tree(self, state, game) -> ActionTreeNode:
        if not self.is_player_inside(state):
            return self._node(self.exit_action())
        children = [
            self._submenu(key, f"{label} Appliances", f"{label} range", self._appliance_actions(low, high), i)
            for i, (key, label, low, high) in enumerate(self.TIERS)
        ]
        children += self._trailing_nodes(state, len(children))
        root = SubmenuAction(f"{self.id}-browse", "Browse Appliances", "Choose a price range")
        return self._node(root, children)


class DepartmentStore(Building):
    building_type = BuildingType.DEPARTMENT_STORE
    default_description = "Prepared food at a range of prices"

    # name, price, health effect
    FOODS: Tuple[Tuple[str, int, int], ...] = (
        ("Hamburger", 10, 5),
        ("Pizza", 15, 8),
        ("Steak", 25, 12),
        ("Salad", 8, 6),
        ("Sandwich", 12, 7),
    )

    def _food_actions(self) -> List[Action]:
        return [
            PurchaseAction(
                self, name, price,
                lambda game, n=name, p=price, h=health: make_food(n, p, health_effect=h),
                description=f"{name} (${price}, +{health} health)",
            )
            for name, price, health in self.FOODS
        ]

    def _building_actions(self, state, game) -> List[Action]:
        return self._food_actions()

    def get_action_tree(self, state, game) -> ActionTreeNode:
        if not self.is_player_inside(state):
            return self._node(self.exit_action())
        food = self._submenu("food", "Buy Food", "Prepared food items", self._food_actions(), 0)
        children = [food] + self._trailing_nodes(state, 1)
        root = SubmenuAction(f"{self.id}-departments", "Departments", "Choose a department")
        return self._node(root, children)


class PawnShop(Building):
    building_type = BuildingType.PAWN_SHOP
    default_description = "Sell your possessions for quick cash"

    def _sell_actions(self, state) -> List[Action]:
        return [SellPossessionAction(self, p) for p in state.possessions]

    def _building_actions(self, state, game) -> List[Action]:
        return self._sell_actions(state)

    def get_action_tree(self, state, game) -> ActionTreeNode:
        if not self.is_player_inside(state):
            return self._node(self.exit_action())
        sell = self._submenu(
            "sell", "Sell Items", "Pawn something you own",
            self._sell_actions(state), 0, empty_message="No items to sell",
        )
        if not state.possessions:
            sell.action.display_name = "No items to sell"
        children = [sell] + self._trailing_nodes(state, 1)
        root = SubmenuAction(f"{self.id}-counter", "Pawn Counter", "What are you selling?")
        return self._node(root, children)


class RentAgency(Building):
    building_type = BuildingType.RENT_AGENCY
    default_description = "Rent an apartment and pay your rent"

    def _rent_actions(self, game) -> List[Action]:
        return [
            RentHomeAction(self, home, game.economy_model.get_rent(home.type))
            for home in game.map.get_all_buildings()
            if home.is_home()
        ]

    def _building_actions(self, state, game) -> List[Action]:
        actions = self._rent_actions(game)
        if state.rent_debt > 0:
            actions.append(PayRentAction(self))
        return actions

    def get_action_tree(self, state, game) -> ActionTreeNode:
        if not self.is_player_inside(state):
            return self._node(self.exit_action())
        children = [self._submenu("rent", "Rent Apartment", "Choose an apartment", self._rent_actions(game), 0)]
        tail: List[Action] = [PayRentAction(self)] if state.rent_debt > 0 else []
        tail += self._work_actions(state) + [self.exit_action()]
        children += [self._node(a, index=len(children) + i) for i, a in enumerate(tail)]
        root = SubmenuAction(f"{self.id}-housing", "Housing", "Rental office")
        return self._node(root, children)


class EmploymentAgency(Building):
    """
    Job browsing across every employer on the map.

    Browsing is expressed as tree structure (one submenu per employer), so
    the agency itself holds no per-player state.
    """

    building_type = BuildingType.EMPLOYMENT_AGENCY
    default_description = "Browse and apply for jobs from all businesses in town"

    def get_job_offerings(self) -> List[Job]:
        return []

    def _employers(self, game) -> List[Building]:
        employers = [b for b in game.map.get_all_buildings() if b.get_job_offerings()]
        return sorted(employers, key=lambda b: b.name)

    def _apply_actions(self, employer) -> List[Action]:
        return [ApplyForJobAction(self, job) for job in employer.get_job_offerings()]

    def _building_actions(self, state, game) -> List[Action]:
        actions: List[Action] = []
        for employer in self._employers(game):
            actions.extend(self._apply_actions(employer))
        if state.job is not None:
            actions.append(QuitJobAction(self))
        return actions

    def get_action_tree(self, state, game) -> ActionTreeNode:
        if not self.is_player_inside(state):
            return self._node(self.exit_action())
        children = []
        for i, employer in enumerate(self._employers(game)):
            count = len(employer.get_job_offerings())
            children.append(self._submenu(
                f"browse-{employer.id}",
                f"{employer.name} ({count} job{'s' if count != 1 else ''})",
                f"Browse job openings at {employer.name}",
                self._apply_actions(employer),
                i,
            ))
        tail: List[Action] = [QuitJobAction(self)] if state.job is not None else []
        tail.append(self.exit_action())
        children += [self._node(a, index=len(children) + i) for i, a in enumerate(tail)]
        root = SubmenuAction(f"{self.id}-companies", "Browse Companies", "Companies hiring now")
        return self._node(root, children)


class Apartment(Building):
    """A home: only the renter may enter or rest; anyone inside can leave."""

    rest_effect = 0

    def can_enter(self, state) -> bool:
        return state.rented_home == self.id

    def get_available_actions(self, state, game) -> List[Action]:
        if not self.is_player_inside(state):
            return []
        actions: List[Action] = []
        if state.rented_home == self.id:
            actions.append(RelaxAction(self, self.rest_effect))
            if state.rent_debt > 0:
                actions.append(PayRentAction(self))
        actions.append(self.exit_action())
        return actions

    def get_action_tree(self, state, game) -> ActionTreeNode:
        if state.rented_home != self.id:
            children = [self._node(self.exit_action())] if self.is_player_inside(state) else []
            return self._node(SubmenuAction(
                f"{self.id}-not-your-home",
                "Not Your Home",
                "You need to rent this apartment first",
                available=False,
                unavailable_message="You need to rent this apartment first",
            ), children)
        return super().get_action_tree(state, game)


class LowCostApartment(Apartment):
    building_type = BuildingType.LOW_COST_APARTMENT
    default_description = "Affordable apartment with basic amenities"
    rest_effect = CONFIG.actions.relax_effect_low_cost


class SecurityApartment(Apartment):
    building_type = BuildingType.SECURITY_APARTMENT
    default_description = "Secure apartment with better rest"
    rest_effect = CONFIG.actions.relax_effect_security


BUILDING_CLASSES: Dict[BuildingType, type] = {
    cls.building_type: cls
    for cls in (
        Factory, College, Bank, Supermarket, Restaurant, ClothesStore, ApplianceStore,
        DepartmentStore, PawnShop, RentAgency, EmploymentAgency,
        LowCostApartment, SecurityApartment,
    )
}


def create_building(
    building_type: BuildingType,
    building_id: str,
    name: str,
    position: Position,
    job_system: Optional[JobSystem] = None,
) -> Building:
    """Instantiate the building class registered for a type."""
    cls = BUILDING_CLASSES[BuildingType(building_type)]
    logger.debug(f"Creating {cls.__name__} {building_id} at {position}")
    return cls(building_id, name, position, job_system)
