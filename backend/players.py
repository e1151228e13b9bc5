"""
Player state and identity.

PlayerState is the mutable per-player aggregate. Its five stats are Measure
objects so clamping is applied in one place; plain numeric properties give
read access. Mutation is reserved for the game orchestrator.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from errors import InvalidColorError
from grid import Position
from jobs import Job
from measures import Career, Education, Happiness, Health, Measure, MeasureType, Wealth
from possessions import Possession, PossessionType

COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")


@dataclass(slots=True)
class Experience:
    """Experience points earned at one job rank."""
    rank: int
    points: float

    def to_dict(self) -> Dict[str, float]:
        return {"rank": self.rank, "points": self.points}


class PlayerState:
    """Everything about one player's progress."""

    def __init__(
        self,
        player_id: str,
        cash: float = 0,
        health: float = 100,
        happiness: float = 100,
        education: float = 0,
        career: float = 0,
        position: Optional[Position] = None,
        current_building: Optional[str] = None,
        job: Optional[Job] = None,
        experience: Optional[List[Experience]] = None,
        possessions: Optional[List[Possession]] = None,
        rented_home: Optional[str] = None,
        rent_debt: float = 0,
    ):
        self.player_id = player_id
        self.measures: Dict[MeasureType, Measure] = {
            MeasureType.WEALTH: Wealth(cash),
            MeasureType.HEALTH: Health(health),
            MeasureType.HAPPINESS: Happiness(happiness),
            MeasureType.EDUCATION: Education(education),
            MeasureType.CAREER: Career(career),
        }
        self.position = position if position is not None else Position(0, 0)
        self.current_building = current_building
        self.job = job
        self.experience: List[Experience] = list(experience) if experience else []
        self.possessions: List[Possession] = list(possessions) if possessions else []
        self.rented_home = rented_home
        self.rent_debt = rent_debt

    # Read accessors

    @property
    def cash(self) -> float:
        return self.measures[MeasureType.WEALTH].value

    @property
    def health(self) -> float:
        return self.measures[MeasureType.HEALTH].value

    @property
    def happiness(self) -> float:
        return self.measures[MeasureType.HAPPINESS].value

    @property
    def education(self) -> float:
        return self.measures[MeasureType.EDUCATION].value

    @property
    def career(self) -> float:
        return self.measures[MeasureType.CAREER].value

    def get_measure(self, measure_type: MeasureType) -> Measure:
        return self.measures[MeasureType(measure_type)]

    def get_measure_value(self, measure_type: MeasureType) -> float:
        return self.get_measure(measure_type).value

    def can_afford(self, cost: float) -> bool:
        return self.cash >= cost

    def is_inside(self, building_id: Optional[str] = None) -> bool:
        if building_id is None:
            return self.current_building is not None
        return self.current_building == building_id

    def is_on_street(self) -> bool:
        return self.current_building is None

    def get_clothes_level(self) -> int:
        levels = [
            p.clothes_level for p in self.possessions
            if p.type == PossessionType.CLOTHES and p.clothes_level is not None
        ]
        return max(levels) if levels else 0

    def get_total_experience(self) -> float:
        return sum(exp.points for exp in self.experience)

    def get_experience_at_rank(self, rank: int) -> float:
        for exp in self.experience:
            if exp.rank == rank:
                return exp.points
        return 0

    def get_possessions_by_type(self, possession_type: PossessionType) -> List[Possession]:
        return [p for p in self.possessions if p.type == possession_type]

    def find_possession(self, possession_id: str) -> Optional[Possession]:
        for possession in self.possessions:
            if possession.id == possession_id:
                return possession
        return None

    def has_possession_type(self, possession_type: PossessionType) -> bool:
        return any(p.type == possession_type for p in self.possessions)

    # Mutators (called from Game.apply_state_changes and the rent path)

    def update_measure(self, measure_type: MeasureType, delta: float) -> float:
        """Apply a signed delta through the measure's clamp; returns the applied delta."""
        return self.get_measure(measure_type).update(delta)

    def set_measure(self, measure_type: MeasureType, target: float) -> float:
        """Move a measure toward target, capped at its bounds."""
        measure = self.get_measure(measure_type)
        return measure.update(target - measure.value)

    def set_cash(self, amount: float) -> None:
        self.set_measure(MeasureType.WEALTH, amount)

    def add_experience(self, rank: int, points: float) -> None:
        for exp in self.experience:
            if exp.rank == rank:
                exp.points += points
                break
        else:
            self.experience.append(Experience(rank, points))
        self.set_measure(MeasureType.CAREER, self.get_total_experience())

    def add_possession(self, possession: Possession) -> None:
        self.possessions.append(possession)

    def remove_possession(self, possession_id: str) -> bool:
        for index, possession in enumerate(self.possessions):
            if possession.id == possession_id:
                del self.possessions[index]
                return True
        return False

    def clone(self) -> "PlayerState":
        return PlayerState.from_dict(self.to_dict())

    def to_dict(self) -> Dict[str, object]:
        return {
            "playerId": self.player_id,
            "cash": self.cash,
            "health": self.health,
            "happiness": self.happiness,
            "education": self.education,
            "career": self.career,
            "position": self.position.to_dict(),
            "currentBuilding": self.current_building,
            "job": self.job.to_dict() if self.job else None,
            "experience": [exp.to_dict() for exp in self.experience],
            "possessions": [p.to_dict() for p in self.possessions],
            "rentedHome": self.rented_home,
            "rentDebt": self.rent_debt,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "PlayerState":
        job_data = data.get("job")
        return cls(
            player_id=data["playerId"],
            cash=data.get("cash", 0),
            health=data.get("health", 100),
            happiness=data.get("happiness", 100),
            education=data.get("education", 0),
            career=data.get("career", 0),
            position=Position.from_dict(data["position"]) if data.get("position") else None,
            current_building=data.get("currentBuilding"),
            job=Job.from_dict(job_data) if job_data else None,
            experience=[Experience(e["rank"], e["points"]) for e in data.get("experience", [])],
            possessions=[Possession.from_dict(p) for p in data.get("possessions", [])],
            rented_home=data.get("rentedHome"),
            rent_debt=data.get("rentDebt", 0),
        )

    def __repr__(self) -> str:
        return (
            f"PlayerState({self.player_id}, cash={self.cash}, health={self.health}, "
            f"happiness={self.happiness}, education={self.education}, career={self.career})"
        )


@dataclass(slots=True)
class Player:
    """Identity wrapper around a PlayerState."""

    id: str
    name: str
    color: str
    state: PlayerState
    is_ai: bool = False
    ai_type: Optional[str] = None

    def __post_init__(self):
        """Validate invariants after initialization."""
        if not isinstance(self.color, str) or not COLOR_PATTERN.match(self.color):
            raise InvalidColorError(
                f"Invalid color format: {self.color}. Expected hex color like #FF0000"
            )

    @classmethod
    def create(
        cls,
        id: str,
        name: str,
        color: str,
        is_ai: bool = False,
        **state_overrides,
    ) -> "Player":
        return cls(id, name, color, PlayerState(id, **state_overrides), is_ai)

    def clone(self) -> "Player":
        return Player(self.id, self.name, self.color, self.state.clone(), self.is_ai, self.ai_type)

    def to_dict(self) -> Dict[str, object]:
        data = {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "isAI": self.is_ai,
            "state": self.state.to_dict(),
        }
        if self.ai_type is not None:
            data["aiType"] = self.ai_type
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Player":
        return cls(
            id=data["id"],
            name=data["name"],
            color=data["color"],
            state=PlayerState.from_dict(data["state"]),
            is_ai=data.get("isAI", False),
            ai_type=data.get("aiType"),
        )
