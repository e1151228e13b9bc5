"""
Wire models for the game setup and the saved-game snapshot.

Fields are snake_case in Python and camelCase on the wire.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from config import CONFIG


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, validate_default=True)


class PlayerSetup(CamelModel):
    id: str
    name: str
    color: str = "#FF0000"
    is_ai: bool = Field(default=False, alias="isAI")
    ai_type: Optional[str] = None


class VictoryConditions(CamelModel):
    target_wealth: float = CONFIG.victory.wealth
    target_health: float = CONFIG.victory.health
    target_happiness: float = CONFIG.victory.happiness
    target_career: float = CONFIG.victory.career
    target_education: float = CONFIG.victory.education


class StartingStats(CamelModel):
    health: float = CONFIG.starting.health
    happiness: float = CONFIG.starting.happiness
    education: float = CONFIG.starting.education


class GameSetup(CamelModel):
    players: List[PlayerSetup] = Field(min_length=1, max_length=CONFIG.max_players)
    victory_conditions: VictoryConditions = Field(default_factory=VictoryConditions)
    starting_cash: float = CONFIG.starting.cash
    starting_stats: StartingStats = Field(default_factory=StartingStats)


class PositionModel(BaseModel):
    x: int
    y: int


class PlayerStateSnapshot(CamelModel):
    player_id: str
    cash: float
    health: float
    happiness: float
    education: float
    career: float
    position: PositionModel
    current_building: Optional[str] = None
    job: Optional[Dict[str, Any]] = None
    experience: List[Dict[str, float]] = Field(default_factory=list)
    possessions: List[Dict[str, Any]] = Field(default_factory=list)
    rented_home: Optional[str] = None
    rent_debt: float = 0


class PlayerSnapshot(CamelModel):
    id: str
    name: str
    color: str
    is_ai: bool = Field(default=False, alias="isAI")
    ai_type: Optional[str] = None
    state: PlayerStateSnapshot


class GameSnapshot(CamelModel):
    id: str
    current_week: int = Field(ge=1)
    time_units_remaining: int
    current_player_index: int = Field(ge=0)
    players: List[PlayerSnapshot]
    victory_conditions: VictoryConditions
    is_game_over: bool = False
