"""
Action System

Player-invocable operations and the data they return. An action never
mutates game state: execute() re-validates, then describes the intended
mutation as a list of StateChange records inside an ActionResponse. Only
Game.apply_state_changes interprets those records.

Every action takes the acting PlayerState and the Game; from the game it
reads the clock, the map, the economy model and the job system.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from config import CONFIG
from enums import ActionType
from grid import Position, Route
from jobs import Job
from measures import MeasureType
from possessions import Possession, make_stock


class ChangeType(str, Enum):
    CASH = "cash"
    MEASURE = "measure"
    POSSESSION_ADD = "possession_add"
    POSSESSION_REMOVE = "possession_remove"
    JOB = "job"
    POSITION = "position"
    CURRENT_BUILDING = "current_building"
    RENTED_HOME = "rented_home"
    RENT_DEBT = "rent_debt"
    EXPERIENCE = "experience"


@dataclass(frozen=True)
class StateChange:
    """A typed, data-only description of one intended mutation."""
    type: str
    value: Any
    description: str = ""
    measure: Optional[MeasureType] = None

    def to_dict(self) -> Dict[str, object]:
        value = self.value
        if hasattr(value, "to_dict"):
            value = value.to_dict()
        data = {
            "type": self.type.value if isinstance(self.type, ChangeType) else self.type,
            "value": value,
            "description": self.description,
        }
        if self.measure is not None:
            data["measure"] = self.measure.value
        return data


@dataclass(frozen=True)
class ActionRequirement:
    type: str
    value: Any
    description: str

    def to_dict(self) -> Dict[str, object]:
        return {"type": self.type, "value": self.value, "description": self.description}


@dataclass
class ActionResponse:
    success: bool
    message: str
    time_spent: int = 0
    state_changes: List[StateChange] = field(default_factory=list)

    @classmethod
    def succeeded(cls, message: str, time_spent: int, state_changes=None) -> "ActionResponse":
        return cls(True, message, time_spent, list(state_changes or []))

    @classmethod
    def failed(cls, message: str) -> "ActionResponse":
        return cls(False, message, 0, [])

    @classmethod
    def not_enough_cash(cls, required: float, current: float) -> "ActionResponse":
        return cls.failed(f"Not enough cash. Required: ${required}, Current: ${current}")

    def to_dict(self) -> Dict[str, object]:
        return {
            "success": self.success,
            "message": self.message,
            "timeSpent": self.time_spent,
            "stateChanges": [change.to_dict() for change in self.state_changes],
        }


class StateChangeBuilder:
    """Fluent helper for assembling a StateChange list."""

    def __init__(self):
        self._changes: List[StateChange] = []

    def cash(self, new_amount: float, description: str) -> "StateChangeBuilder":
        self._changes.append(StateChange(ChangeType.CASH, new_amount, description))
        return self

    def measure(self, measure: MeasureType, new_value: float, description: str) -> "StateChangeBuilder":
        self._changes.append(StateChange(ChangeType.MEASURE, new_value, description, measure))
        return self

    def health(self, new_value: float, description: str) -> "StateChangeBuilder":
        return self.measure(MeasureType.HEALTH, new_value, description)

    def happiness(self, new_value: float, description: str) -> "StateChangeBuilder":
        return self.measure(MeasureType.HAPPINESS, new_value, description)

    def education(self, new_value: float, description: str) -> "StateChangeBuilder":
        return self.measure(MeasureType.EDUCATION, new_value, description)

    def add_possession(self, possession: Possession, description: str) -> "StateChangeBuilder":
        self._changes.append(StateChange(ChangeType.POSSESSION_ADD, possession, description))
        return self

    def remove_possession(self, possession: Possession, description: str) -> "StateChangeBuilder":
        self._changes.append(StateChange(ChangeType.POSSESSION_REMOVE, possession, description))
        return self

    def job(self, job: Optional[Job], description: str) -> "StateChangeBuilder":
        self._changes.append(StateChange(ChangeType.JOB, job, description))
        return self

    def position(self, position: Position, description: str) -> "StateChangeBuilder":
        self._changes.append(StateChange(ChangeType.POSITION, position, description))
        return self

    def current_building(self, building_id: Optional[str], description: str) -> "StateChangeBuilder":
        self._changes.append(StateChange(ChangeType.CURRENT_BUILDING, building_id, description))
        return self

    def rented_home(self, home_id: Optional[str], description: str) -> "StateChangeBuilder":
        self._changes.append(StateChange(ChangeType.RENTED_HOME, home_id, description))
        return self

    def rent_debt(self, amount: float, description: str) -> "StateChangeBuilder":
        self._changes.append(StateChange(ChangeType.RENT_DEBT, amount, description))
        return self

    def experience(self, rank: int, points: float, description: str) -> "StateChangeBuilder":
        self._changes.append(
            StateChange(ChangeType.EXPERIENCE, {"rank": rank, "points": points}, description)
        )
        return self

    def build(self) -> List[StateChange]:
        return list(self._changes)


class Action:
    """Base class for every player-invocable operation."""

    def __init__(
        self,
        action_id: str,
        action_type: ActionType,
        display_name: str,
        description: str,
        time_cost: int,
    ):
        self.id = action_id
        self.type = action_type
        self.display_name = display_name
        self.description = description
        self.time_cost = time_cost

    def can_execute(self, state, game) -> bool:
        raise NotImplementedError

    def execute(self, state, game) -> ActionResponse:
        raise NotImplementedError

    def get_requirements(self) -> List[ActionRequirement]:
        return []

    def get_time_in_hours(self) -> float:
        return self.time_cost / CONFIG.time.time_units_per_hour

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "type": self.type.value,
            "displayName": self.display_name,
            "description": self.description,
            "timeCost": self.time_cost,
            "requirements": [r.to_dict() for r in self.get_requirements()],
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.id!r})"


@dataclass
class ActionTreeNode:
    """A menu node; leaves are terminal actions."""
    action: Action
    children: List["ActionTreeNode"] = field(default_factory=list)
    index: int = 0

    def is_leaf(self) -> bool:
        return not self.children

    def find(self, action_id: str) -> Optional["ActionTreeNode"]:
        if self.action.id == action_id:
            return self
        for child in self.children:
            found = child.find(action_id)
            if found is not None:
                return found
        return None

    def leaves(self) -> List[Action]:
        if self.is_leaf():
            return [self.action]
        result: List[Action] = []
        for child in self.children:
            result.extend(child.leaves())
        return result

    def to_dict(self) -> Dict[str, object]:
        return {
            "action": self.action.to_dict(),
            "index": self.index,
            "children": [child.to_dict() for child in self.children],
        }


# Menu plumbing


class SubmenuAction(Action):
    """Synthetic menu entry: zero time cost, no state effect."""

    def __init__(
        self,
        action_id: str,
        display_name: str,
        description: str,
        available: bool = True,
        unavailable_message: str = "Nothing available",
    ):
        super().__init__(action_id, ActionType.SUBMENU, display_name, description, 0)
        self.available = available
        self.unavailable_message = unavailable_message

    def can_execute(self, state, game) -> bool:
        return self.available

    def execute(self, state, game) -> ActionResponse:
        if not self.available:
            return ActionResponse.failed(self.unavailable_message)
        return ActionResponse.succeeded("Submenu selected", 0)


class ExitBuildingAction(Action):
    def __init__(self, building):
        super().__init__(
            f"{building.id}-exit",
            ActionType.EXIT_BUILDING,
            f"Exit {building.name}",
            "Leave the building and return to the street",
            CONFIG.actions.exit_building,
        )
        self.building = building

    def can_execute(self, state, game) -> bool:
        return state.is_inside(self.building.id)

    def execute(self, state, game) -> ActionResponse:
        if not self.can_execute(state, game):
            return ActionResponse.failed(f"You are not inside {self.building.name}")
        changes = StateChangeBuilder().position(
            self.building.position, f"Moved to {self.building.name} position"
        ).build()
        return ActionResponse.succeeded(f"You exit {self.building.name}", self.time_cost, changes)

    def get_requirements(self) -> List[ActionRequirement]:
        return [ActionRequirement("building", self.building.id, f"Must be inside {self.building.name}")]


# Street actions


class MoveAction(Action):
    """Walk along the Manhattan route to another cell."""

    def __init__(self, from_position: Position, to_position: Position):
        self.route = Route(from_position, to_position)
        time_cost = CONFIG.actions.move_base + CONFIG.actions.move_per_step * self.route.distance
        super().__init__(
            f"move-{from_position.x},{from_position.y}-to-{to_position.x},{to_position.y}",
            ActionType.MOVE,
            "Move",
            f"Move to ({to_position.x}, {to_position.y})",
            time_cost,
        )
        self.from_position = from_position
        self.to_position = to_position

    def _errors(self, state, game) -> List[str]:
        errors = []
        if not state.is_on_street():
            errors.append("Must be on the street to move")
        if not state.position.equals(self.from_position):
            errors.append("Move must start from the current position")
        if not game.map.is_valid_position(self.to_position):
            errors.append("Invalid target position")
        if state.position.equals(self.to_position):
            errors.append("Already at target position")
        return errors

    def can_execute(self, state, game) -> bool:
        return not self._errors(state, game)

    def execute(self, state, game) -> ActionResponse:
        errors = self._errors(state, game)
        if errors:
            return ActionResponse.failed("; ".join(errors))
        changes = StateChangeBuilder().position(self.to_position, f"Moved to {self.to_position}").build()
        return ActionResponse.succeeded(f"Moved to {self.to_position}", self.time_cost, changes)

    def get_requirements(self) -> List[ActionRequirement]:
        return [
            ActionRequirement("location", "street", "Must be on the street to move"),
            ActionRequirement("time", self.time_cost, f"Requires {self.time_cost} time units"),
        ]


class EnterBuildingAction(Action):
    def __init__(self, building):
        super().__init__(
            f"enter-{building.id}",
            ActionType.ENTER_BUILDING,
            f"Enter {building.name}",
            building.description,
            CONFIG.actions.enter_building,
        )
        self.building = building

    def _errors(self, state, game) -> List[str]:
        errors = []
        if not state.is_on_street():
            errors.append("Already inside a building")
        if not state.position.equals(self.building.position):
            errors.append("Must be at the building location to enter")
        if not self.building.can_enter(state):
            errors.append(f"You cannot enter {self.building.name}")
        return errors

    def can_execute(self, state, game) -> bool:
        return not self._errors(state, game)

    def execute(self, state, game) -> ActionResponse:
        errors = self._errors(state, game)
        if errors:
            return ActionResponse.failed("; ".join(errors))
        changes = StateChangeBuilder().current_building(
            self.building.id, f"Entered {self.building.name}"
        ).build()
        return ActionResponse.succeeded(f"Entered {self.building.name}", self.time_cost, changes)

    def get_requirements(self) -> List[ActionRequirement]:
        return [
            ActionRequirement("location", "street", "Must be on the street (not in a building)"),
            ActionRequirement("location", self.building.id, "Must be at the building location"),
        ]


# Shopping


class PurchaseAction(Action):
    """
    Pay a fixed price and receive a new possession.

    make_possession is called with the game (for the current week) and
    returns the item to add; it must not touch game state.
    """

    def __init__(
        self,
        building,
        item_name: str,
        price: float,
        make_possession: Callable[[Any], Possession],
        description: str = "",
        time_cost: int = CONFIG.actions.shop,
    ):
        slug = "-".join(item_name.lower().split())
        super().__init__(
            f"{building.id}-buy-{slug}",
            ActionType.PURCHASE,
            f"Buy {item_name}",
            description or f"Buy {item_name} (${price})",
            time_cost,
        )
        self.building = building
        self.item_name = item_name
        self.price = price
        self.make_possession = make_possession

    def refusal(self, state, game) -> Optional[str]:
        """Reason the purchase is refused, or None when it may proceed."""
        if not state.is_inside(self.building.id):
            return f"You must be inside {self.building.name}"
        if not state.can_afford(self.price):
            return f"Not enough cash. Need ${self.price}, have ${state.cash}"
        return None

    def can_execute(self, state, game) -> bool:
        return self.refusal(state, game) is None

    def execute(self, state, game) -> ActionResponse:
        reason = self.refusal(state, game)
        if reason:
            return ActionResponse.failed(reason)
        possession = self.make_possession(game)
        changes = (
            StateChangeBuilder()
            .cash(state.cash - self.price, f"Purchased {self.item_name}")
            .add_possession(possession, f"Added {self.item_name} to inventory")
            .build()
        )
        return ActionResponse.succeeded(
            f"Purchased {self.item_name} for ${self.price}", self.time_cost, changes
        )

    def get_requirements(self) -> List[ActionRequirement]:
        return [ActionRequirement("cash", self.price, f"Cash: ${self.price}")]


class ClothesPurchaseAction(PurchaseAction):
    """Clothes may only be bought above the level already owned."""

    def __init__(self, building, item_name: str, price: float, level: int, make_possession):
        super().__init__(
            building, item_name, price, make_possession,
            description=f"{item_name} (Level {level}) - ${price}",
        )
        self.level = level

    def refusal(self, state, game) -> Optional[str]:
        if state.get_clothes_level() >= self.level:
            return f"You already own clothes of level {state.get_clothes_level()}"
        return super().refusal(state, game)

    def get_requirements(self) -> List[ActionRequirement]:
        return super().get_requirements() + [
            ActionRequirement("clothes", self.level - 1, f"Clothes level below {self.level}")
        ]


class EatMealAction(Action):
    """Restaurant meal: paid and eaten on the spot."""

    def __init__(self, building, item_id: str, item_name: str, price: int, health_gain: int):
        super().__init__(
            f"{building.id}-eat-{item_id}",
            ActionType.PURCHASE,
            f"Eat {item_name}",
            f"{item_name} (${price}, +{health_gain} health)",
            CONFIG.actions.shop,
        )
        self.building = building
        self.item_name = item_name
        self.price = price
        self.health_gain = health_gain

    def can_execute(self, state, game) -> bool:
        return state.is_inside(self.building.id) and state.can_afford(self.price)

    def execute(self, state, game) -> ActionResponse:
        if not state.is_inside(self.building.id):
            return ActionResponse.failed(f"You must be inside {self.building.name}")
        if not state.can_afford(self.price):
            return ActionResponse.not_enough_cash(self.price, state.cash)
        changes = (
            StateChangeBuilder()
            .cash(state.cash - self.price, f"Paid for {self.item_name}")
            .health(state.health + self.health_gain, f"Gained {self.health_gain} health")
            .build()
        )
        return ActionResponse.succeeded(f"Enjoyed a {self.item_name}", self.time_cost, changes)

    def get_requirements(self) -> List[ActionRequirement]:
        return [ActionRequirement("cash", self.price, f"Cash: ${self.price}")]


class SellPossessionAction(Action):
    """Pawn an owned possession at the economy's resale price."""

    def __init__(self, building, possession: Possession):
        super().__init__(
            f"{building.id}-sell-{possession.id}",
            ActionType.SELL,
            f"Sell {possession.name}",
            f"Pawn {possession.name}",
            CONFIG.actions.sell,
        )
        self.building = building
        self.possession = possession

    def can_execute(self, state, game) -> bool:
        return (
            state.is_inside(self.building.id)
            and state.find_possession(self.possession.id) is not None
        )

    def execute(self, state, game) -> ActionResponse:
        if not self.can_execute(state, game):
            return ActionResponse.failed(f"You don't own {self.possession.name}")
        price = game.economy_model.calculate_sell_price(self.possession)
        changes = (
            StateChangeBuilder()
            .cash(state.cash + price, f"Sold {self.possession.name}")
            .remove_possession(self.possession, f"Removed {self.possession.name} from inventory")
            .build()
        )
        return ActionResponse.succeeded(
            f"Sold {self.possession.name} for ${price}", self.time_cost, changes
        )

    def get_requirements(self) -> List[ActionRequirement]:
        return [ActionRequirement("possession", self.possession.id, f"Must own {self.possession.name}")]


class BuyStockAction(Action):
    def __init__(self, building, symbol: str, company_name: str):
        super().__init__(
            f"{building.id}-buy-stock-{symbol}",
            ActionType.PURCHASE,
            f"Buy {company_name}",
            f"Buy one share of {company_name}",
            CONFIG.actions.shop,
        )
        self.building = building
        self.symbol = symbol
        self.company_name = company_name

    def can_execute(self, state, game) -> bool:
        price = game.economy_model.get_stock_price_by_id(self.symbol)
        return state.is_inside(self.building.id) and state.can_afford(price)

    def execute(self, state, game) -> ActionResponse:
        price = game.economy_model.get_stock_price_by_id(self.symbol)
        if not state.is_inside(self.building.id):
            return ActionResponse.failed(f"You must be inside {self.building.name}")
        if not state.can_afford(price):
            return ActionResponse.not_enough_cash(price, state.cash)
        stock = make_stock(self.company_name, 1, price)
        changes = (
            StateChangeBuilder()
            .cash(state.cash - price, f"Bought 1 share of {self.company_name}")
            .add_possession(stock, f"Added {self.company_name} stock")
            .build()
        )
        return ActionResponse.succeeded(
            f"Bought 1 share of {self.company_name} for ${price}", self.time_cost, changes
        )


class SellStockAction(Action):
    def __init__(self, building, possession: Possession, symbol: str):
        super().__init__(
            f"{building.id}-sell-stock-{possession.id}",
            ActionType.SELL,
            f"Sell {possession.name}",
            f"Sell {possession.shares} share(s) of {possession.name}",
            CONFIG.actions.sell,
        )
        self.building = building
        self.possession = possession
        self.symbol = symbol

    def can_execute(self, state, game) -> bool:
        return (
            state.is_inside(self.building.id)
            and state.find_possession(self.possession.id) is not None
        )

    def execute(self, state, game) -> ActionResponse:
        if not self.can_execute(state, game):
            return ActionResponse.failed(f"You don't own {self.possession.name} stock")
        proceeds = game.economy_model.get_stock_price_by_id(self.symbol) * (self.possession.shares or 0)
        changes = (
            StateChangeBuilder()
            .cash(state.cash + proceeds, f"Sold {self.possession.name} stock")
            .remove_possession(self.possession, f"Removed {self.possession.name} stock")
            .build()
        )
        return ActionResponse.succeeded(
            f"Sold {self.possession.name} stock for ${proceeds}", self.time_cost, changes
        )


# Education and career


class StudyAction(Action):
    def __init__(self, building):
        cost = CONFIG.actions.study_cost
        super().__init__(
            f"{building.id}-study",
            ActionType.STUDY,
            "Study",
            f"Study (${cost})",
            CONFIG.actions.study_time,
        )
        self.building = building
        self.cost = cost
        self.gain = CONFIG.actions.study_education_gain

    def can_execute(self, state, game) -> bool:
        return state.is_inside(self.building.id) and state.can_afford(self.cost)

    def execute(self, state, game) -> ActionResponse:
        if not state.is_inside(self.building.id):
            return ActionResponse.failed(f"Must be at {self.building.name}")
        if not state.can_afford(self.cost):
            return ActionResponse.failed(f"Need ${self.cost} for tuition")
        changes = (
            StateChangeBuilder()
            .cash(state.cash - self.cost, f"Paid ${self.cost} tuition")
            .education(state.education + self.gain, f"Gained {self.gain} education")
            .build()
        )
        return ActionResponse.succeeded("Another brick in the wall", self.time_cost, changes)

    def get_requirements(self) -> List[ActionRequirement]:
        return [
            ActionRequirement("cash", self.cost, f"Cash: ${self.cost}"),
            ActionRequirement("time", self.time_cost, f"Time: {self.time_cost} units"),
        ]


class ApplyForJobAction(Action):
    def __init__(self, building, job: Job):
        super().__init__(
            f"apply-job-{job.id}",
            ActionType.APPLY_JOB,
            f"Apply: {job.title}",
            f"Apply for {job.title} (${job.wage_per_hour}/hour)",
            CONFIG.jobs.apply_time_cost,
        )
        self.building = building
        self.job = job

    def can_execute(self, state, game) -> bool:
        if not state.is_inside(self.building.id):
            return False
        if state.job is not None and state.job.id == self.job.id:
            return False
        return game.job_system.is_qualified(state, self.job)

    def execute(self, state, game) -> ActionResponse:
        if not state.is_inside(self.building.id):
            return ActionResponse.failed(f"Must be at {self.building.name} to apply for jobs")
        result = game.job_system.apply_for_job(state, self.job.id)
        if not result.success:
            detail = "; ".join(result.failed_requirements)
            return ActionResponse.failed(f"{result.message}: {detail}" if detail else result.message)
        changes = StateChangeBuilder().job(result.job, f"Got job: {self.job.title}").build()
        return ActionResponse.succeeded(result.message, self.time_cost, changes)

    def get_requirements(self) -> List[ActionRequirement]:
        return [
            ActionRequirement("education", self.job.required_education,
                              f"Education: {self.job.required_education}"),
            ActionRequirement("experience", self.job.required_experience,
                              f"Experience: {self.job.required_experience} at rank {self.job.rank}"),
            ActionRequirement("clothes", self.job.required_clothes_level,
                              f"Clothes level: {self.job.required_clothes_level}"),
        ]


class QuitJobAction(Action):
    def __init__(self, building):
        super().__init__(
            f"{building.id}-quit-job",
            ActionType.QUIT_JOB,
            "Quit Job",
            "Quit your current job",
            CONFIG.jobs.quit_time_cost,
        )
        self.building = building

    def can_execute(self, state, game) -> bool:
        return state.is_inside(self.building.id) and state.job is not None

    def execute(self, state, game) -> ActionResponse:
        if not state.is_inside(self.building.id):
            return ActionResponse.failed(f"Must be at {self.building.name} to quit")
        result = game.job_system.quit_job(state)
        if not result.success:
            return ActionResponse.failed(result.message)
        changes = StateChangeBuilder().job(None, "Quit job").build()
        return ActionResponse.succeeded(result.message, self.time_cost, changes)


class WorkAction(Action):
    """
    One work session at the player's employer.

    Pay is floored per time unit; while rent debt is owed a share of the pay
    is garnished toward it.
    """

    def __init__(self, building, job: Job):
        super().__init__(
            f"work-{job.id}",
            ActionType.WORK,
            "Work",
            f"Work at {job.title}",
            CONFIG.jobs.work_period,
        )
        self.building = building
        self.job = job

    def can_execute(self, state, game) -> bool:
        return (
            state.is_inside(self.building.id)
            and state.job is not None
            and state.job.id == self.job.id
        )

    def execute(self, state, game) -> ActionResponse:
        if not self.can_execute(state, game):
            return ActionResponse.failed("Cannot work right now")

        units_per_hour = CONFIG.time.time_units_per_hour
        time_worked = min(game.time_units_remaining, self.time_cost)
        hours = time_worked / units_per_hour
        base_earnings = math.floor(time_worked * self.job.wage_per_hour / units_per_hour)

        garnished = 0
        prefix = ""
        if state.rent_debt > 0:
            garnished = min(math.floor(base_earnings * CONFIG.jobs.garnish_rate), state.rent_debt)
            prefix = f"I had to garnish ${garnished}. "
        net_earnings = base_earnings - garnished

        health_loss = math.floor(hours * CONFIG.jobs.health_loss_per_hour)
        experience = game.job_system.calculate_experience_gain(self.job, hours)

        builder = (
            StateChangeBuilder()
            .cash(state.cash + net_earnings, f"Earned ${net_earnings} (base: ${base_earnings})")
            .health(state.health - health_loss, f"Lost {health_loss} health from work")
            .experience(self.job.rank, experience, f"Gained {experience} experience")
        )
        if garnished > 0:
            builder.rent_debt(max(0, state.rent_debt - garnished), f"Garnished ${garnished} toward rent")

        return ActionResponse.succeeded(
            f"{prefix}Worked {hours:.1f} hours and earned ${net_earnings}",
            time_worked,
            builder.build(),
        )

    def get_requirements(self) -> List[ActionRequirement]:
        return [
            ActionRequirement("job", self.job.id, "Must have a job"),
            ActionRequirement("building", self.job.building_type.value,
                              f"Must be at a {self.job.building_type.display_name}"),
        ]


# Housing


class RentHomeAction(Action):
    def __init__(self, building, home, weekly_rent: int):
        super().__init__(
            f"rent-home-{home.id}",
            ActionType.RENT_HOME,
            f"Rent {home.name}",
            f"Rent {home.name} (${weekly_rent}/week)",
            CONFIG.actions.rent_home,
        )
        self.building = building
        self.home = home
        self.weekly_rent = weekly_rent

    def refusal(self, state) -> Optional[str]:
        if not state.is_inside(self.building.id):
            return f"Must be at {self.building.name} to rent"
        if state.rented_home == self.home.id:
            return f"You are already renting {self.home.name}"
        if not state.can_afford(self.weekly_rent):
            return (
                f"Not enough cash for first week rent. "
                f"Need ${self.weekly_rent}, have ${state.cash}"
            )
        return None

    def can_execute(self, state, game) -> bool:
        return self.refusal(state) is None

    def execute(self, state, game) -> ActionResponse:
        reason = self.refusal(state)
        if reason:
            return ActionResponse.failed(reason)
        changes = (
            StateChangeBuilder()
            .cash(state.cash - self.weekly_rent, f"Paid first week rent: ${self.weekly_rent}")
            .rented_home(self.home.id, f"Rented {self.home.name}")
            .rent_debt(0, "Rent paid for first week")
            .build()
        )
        return ActionResponse.succeeded(
            f"Successfully rented {self.home.name}! Weekly rent: ${self.weekly_rent}",
            self.time_cost,
            changes,
        )

    def get_requirements(self) -> List[ActionRequirement]:
        return [
            ActionRequirement("cash", self.weekly_rent, f"Cash: ${self.weekly_rent} (first week)"),
            ActionRequirement("time", self.time_cost, f"Time: {self.time_cost} units"),
        ]


class PayRentAction(Action):
    """Pay down outstanding rent debt with whatever cash is on hand."""

    def __init__(self, building):
        super().__init__(
            f"{building.id}-pay-rent",
            ActionType.PAY_RENT,
            "Pay Rent",
            "Pay off your rent debt",
            CONFIG.actions.pay_rent,
        )
        self.building = building

    def can_execute(self, state, game) -> bool:
        return state.is_inside(self.building.id) and state.rent_debt > 0 and state.cash > 0

    def execute(self, state, game) -> ActionResponse:
        if not state.is_inside(self.building.id):
            return ActionResponse.failed(f"Must be at {self.building.name} to pay rent")
        if state.rent_debt <= 0:
            return ActionResponse.failed("No rent is due at this time")
        if state.cash <= 0:
            return ActionResponse.failed(f"Not enough cash to pay rent. Owed ${state.rent_debt}")
        payment = min(state.cash, state.rent_debt)
        remaining = state.rent_debt - payment
        changes = (
            StateChangeBuilder()
            .cash(state.cash - payment, f"Paid rent: ${payment}")
            .rent_debt(remaining, "Rent debt reduced")
            .build()
        )
        return ActionResponse.succeeded(
            f"Paid ${payment} of rent. Remaining debt: ${remaining}", self.time_cost, changes
        )


class RelaxAction(Action):
    """Rest at the rented home; better homes restore more per time unit."""

    def __init__(self, building, effect_per_unit: int):
        super().__init__(
            f"{building.id}-relax",
            ActionType.RELAX,
            "Relax",
            "Rest and restore health/happiness",
            CONFIG.actions.relax_time,
        )
        self.building = building
        self.effect_per_unit = effect_per_unit

    def can_execute(self, state, game) -> bool:
        return state.rented_home == self.building.id and state.is_inside(self.building.id)

    def execute(self, state, game) -> ActionResponse:
        if not self.can_execute(state, game):
            return ActionResponse.failed("You must be at your rented home to relax")
        time_rested = min(game.time_units_remaining, self.time_cost)
        gain = self.effect_per_unit * time_rested
        changes = (
            StateChangeBuilder()
            .health(state.health + gain, f"Restored {gain} health")
            .happiness(state.happiness + gain, f"Restored {gain} happiness")
            .build()
        )
        return ActionResponse.succeeded("zzzzz", time_rested, changes)

    def get_requirements(self) -> List[ActionRequirement]:
        return [ActionRequirement("building", self.building.id, "Must be at your rented home")]
