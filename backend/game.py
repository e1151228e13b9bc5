"""
Game Orchestrator

Owns the players, the map, the economy model, the job system, the weekly
clock and the victory thresholds. Turns are processed strictly in order:
every rejection is reported through an ActionResponse and leaves the game
untouched; a successful action has its state changes applied, the clock
advanced and victory re-checked.

All behavior is deterministic apart from the game id and possession ids.
"""

import json
import logging
import random
import string
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from pydantic import ValidationError

from actions import (
    Action,
    ActionResponse,
    ChangeType,
    EnterBuildingAction,
    MoveAction,
    StateChange,
)
from config import CONFIG
from economy import EconomyModel
from errors import GameStateError, JonesError
from game_map import GameMap, create_default_map
from grid import Position
from jobs import Job, JobSystem
from measures import MeasureType
from players import Player, PlayerState
from possessions import Possession
from schemas import GameSetup, GameSnapshot, VictoryConditions

logger = logging.getLogger(__name__)


@dataclass
class VictoryResult:
    player_id: str
    player_name: str
    week: int
    conditions_met: Dict[str, bool]
    is_victory: bool

    def to_dict(self) -> Dict[str, object]:
        return {
            "playerId": self.player_id,
            "playerName": self.player_name,
            "week": self.week,
            "conditionsMet": dict(self.conditions_met),
            "isVictory": self.is_victory,
        }


def _generate_game_id() -> str:
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=7))
    return f"game-{int(time.time() * 1000)}-{suffix}"


class Game:
    """
    One match of the life simulation.

    Lifecycle: construct, then initialize(setup) or deserialize(blob). The
    same instance may be re-initialized, which discards all prior state.
    """

    def __init__(self, job_system: Optional[JobSystem] = None):
        self.job_system = job_system or JobSystem()
        self.id = _generate_game_id()
        self.current_week = 1
        self.time_units_remaining = CONFIG.time.time_units_per_week
        self.current_player_index = 0
        self.players: List[Player] = []
        self.map: GameMap = create_default_map(self.job_system)
        self.economy_model = EconomyModel()
        self.victory_conditions = VictoryConditions()
        self.is_game_over = False

    @classmethod
    def create(cls, job_system: Optional[JobSystem] = None) -> "Game":
        return cls(job_system)

    @classmethod
    def create_with_config(cls, setup, job_system: Optional[JobSystem] = None) -> "Game":
        game = cls(job_system)
        game.initialize(setup)
        return game

    # Lifecycle

    def initialize(self, setup: Union[GameSetup, Dict]) -> None:
        if not isinstance(setup, GameSetup):
            setup = GameSetup.model_validate(setup)

        self.id = _generate_game_id()
        self.current_week = 1
        self.time_units_remaining = CONFIG.time.time_units_per_week
        self.current_player_index = 0
        self.is_game_over = False

        stats = setup.starting_stats
        self.players = [
            Player(
                id=entry.id,
                name=entry.name,
                color=entry.color,
                state=PlayerState(
                    player_id=entry.id,
                    cash=setup.starting_cash,
                    health=stats.health,
                    happiness=stats.happiness,
                    education=stats.education,
                    career=0,
                    position=Position(0, 0),
                ),
                is_ai=entry.is_ai,
                ai_type=entry.ai_type,
            )
            for entry in setup.players
        ]
        self.victory_conditions = setup.victory_conditions.model_copy()
        self.map = create_default_map(self.job_system)
        self.economy_model = EconomyModel()

        logger.info(f"Game {self.id} initialized with {len(self.players)} player(s)")

    # Turn processing

    def process_turn(self, player_id: str, action: Action) -> ActionResponse:
        player = self.get_player_by_id(player_id)
        if player is None:
            return self._reject(f"Player with ID {player_id} not found")
        if self.get_current_player().id != player_id:
            return self._reject("It's not your turn")
        if self.is_game_over:
            return self._reject("Game is over")
        if not action.can_execute(player.state, self):
            return self._reject(f"Cannot execute action: {action.display_name}")
        if action.time_cost > self.time_units_remaining:
            return self._reject(
                f"Not enough time remaining. Action requires {action.time_cost} units, "
                f"but only {self.time_units_remaining} remaining"
            )

        response = action.execute(player.state, self)
        if response.success:
            self.apply_state_changes(player, response.state_changes)
            self.advance_time(response.time_spent)
            if any(result.is_victory for result in self.check_victory()):
                self.is_game_over = True
                logger.info(f"Game {self.id} over in week {self.current_week}")
        return response

    @staticmethod
    def _reject(message: str) -> ActionResponse:
        logger.debug(f"Turn rejected: {message}")
        return ActionResponse.failed(message)

    def advance_time(self, units: int) -> None:
        self.time_units_remaining -= units
        while self.time_units_remaining <= 0:
            self.process_end_of_week()
            self.current_week += 1
            self.time_units_remaining += CONFIG.time.time_units_per_week
            logger.info(f"Game {self.id} advanced to week {self.current_week}")

    def process_end_of_week(self) -> None:
        """Collect rent from every renter; shortfalls become debt plus a penalty."""
        for player in self.players:
            state = player.state
            if not state.rented_home:
                continue
            home = self.map.get_building_by_id(state.rented_home)
            if home is None or not home.is_home():
                continue

            rent = self.economy_model.get_rent(home.type)
            if state.can_afford(rent):
                state.set_cash(state.cash - rent)
            else:
                shortage = rent - state.cash
                state.set_cash(0)
                state.rent_debt += shortage
                state.update_measure(MeasureType.HEALTH, -CONFIG.rent.missed_rent_health_penalty)
                state.update_measure(MeasureType.HAPPINESS, -CONFIG.rent.missed_rent_happiness_penalty)
                logger.info(
                    f"Week {self.current_week}: {player.name} missed rent, "
                    f"debt now ${state.rent_debt}"
                )

    def apply_state_changes(self, player: Player, changes: List[StateChange]) -> None:
        state = player.state
        for change in changes:
            kind = change.type
            if kind == ChangeType.CASH:
                state.set_cash(change.value)
            elif kind == ChangeType.MEASURE:
                if change.measure is None:
                    logger.warning(f"Measure change without a measure ignored: {change.description}")
                else:
                    state.set_measure(change.measure, change.value)
            elif kind == ChangeType.POSSESSION_ADD:
                possession = change.value
                if isinstance(possession, dict):
                    possession = Possession.from_dict(possession)
                state.add_possession(possession)
            elif kind == ChangeType.POSSESSION_REMOVE:
                value = change.value
                state.remove_possession(value if isinstance(value, str) else value.id)
            elif kind == ChangeType.JOB:
                job = change.value
                if isinstance(job, dict):
                    job = Job.from_dict(job)
                if job is not None and job.id == self.job_system.get_unemployed_job().id:
                    job = None
                state.job = job
            elif kind == ChangeType.POSITION:
                value = change.value
                state.position = value if isinstance(value, Position) else Position.from_dict(value)
                # Standing on a coordinate means standing on the street
                state.current_building = None
            elif kind == ChangeType.CURRENT_BUILDING:
                state.current_building = change.value
            elif kind == ChangeType.RENTED_HOME:
                state.rented_home = change.value
            elif kind == ChangeType.RENT_DEBT:
                state.rent_debt = max(0, change.value)
            elif kind == ChangeType.EXPERIENCE:
                state.add_experience(change.value["rank"], change.value["points"])
            else:
                logger.warning(f"Unknown state change type: {kind}")

    # Players and turns

    def get_player_by_id(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def get_current_player(self) -> Player:
        if not self.players:
            raise GameStateError("No players in game")
        return self.players[self.current_player_index]

    def next_player(self) -> None:
        if not self.players:
            raise GameStateError("No players in game")
        self.current_player_index = (self.current_player_index + 1) % len(self.players)

    def get_available_actions(self, player_id: str) -> List[Action]:
        """Building actions when inside, otherwise entering and moving."""
        player = self.get_player_by_id(player_id)
        if player is None:
            return []
        state = player.state

        if state.current_building is not None:
            building = self.map.get_building_by_id(state.current_building)
            return building.get_available_actions(state, self) if building else []

        actions: List[Action] = []
        building = self.map.get_building(state.position)
        if building is not None and building.can_enter(state):
            actions.append(EnterBuildingAction(building))
        for target in self.map.all_positions():
            if not target.equals(state.position):
                actions.append(MoveAction(state.position, target))
        return actions

    def find_action(self, player_id: str, action_id: str) -> Optional[Action]:
        for action in self.get_available_actions(player_id):
            if action.id == action_id:
                return action
        return None

    # Victory

    def check_victory(self) -> List[VictoryResult]:
        targets = self.victory_conditions
        results = []
        for player in self.players:
            state = player.state
            met = {
                "wealth": state.cash >= targets.target_wealth,
                "health": state.health >= targets.target_health,
                "happiness": state.happiness >= targets.target_happiness,
                "career": state.career >= targets.target_career,
                "education": state.education >= targets.target_education,
            }
            results.append(VictoryResult(player.id, player.name, self.current_week, met, all(met.values())))
        return results

    def get_winners(self) -> List[Player]:
        winners = {r.player_id for r in self.check_victory() if r.is_victory}
        return [p for p in self.players if p.id in winners]

    # Persistence

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "currentWeek": self.current_week,
            "timeUnitsRemaining": self.time_units_remaining,
            "currentPlayerIndex": self.current_player_index,
            "players": [player.to_dict() for player in self.players],
            "victoryConditions": self.victory_conditions.model_dump(by_alias=True),
            "isGameOver": self.is_game_over,
        }

    def serialize(self) -> str:
        return json.dumps(self.to_dict())

    def deserialize(self, data: str) -> None:
        """Restore from a serialized snapshot; map and economy are rebuilt fresh."""
        try:
            raw = json.loads(data)
            snapshot = GameSnapshot.model_validate(raw)
            players = [Player.from_dict(p) for p in raw["players"]]
        except (ValueError, TypeError, KeyError, ValidationError, JonesError) as exc:
            raise GameStateError(f"Failed to deserialize game state: {exc}") from exc

        if players and snapshot.current_player_index >= len(players):
            raise GameStateError(
                f"Failed to deserialize game state: player index "
                f"{snapshot.current_player_index} out of range"
            )

        self.id = snapshot.id
        self.current_week = snapshot.current_week
        self.time_units_remaining = snapshot.time_units_remaining
        self.current_player_index = snapshot.current_player_index
        self.victory_conditions = snapshot.victory_conditions
        self.is_game_over = snapshot.is_game_over
        self.players = players
        self.map = create_default_map(self.job_system)
        self.economy_model = EconomyModel()

        logger.info(f"Game {self.id} restored at week {self.current_week}")
