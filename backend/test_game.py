"""
Unit tests for the Game orchestrator

Tests cover:
- Initialization from a camelCase setup
- Turn validation order and no-op rejections
- Time budget, week rollover and end-of-week rent
- State change interpretation
- Victory detection
- Snapshot serialization
"""

import json

import pytest
from actions import ActionResponse, ChangeType, MoveAction, StateChange
from errors import GameStateError
from game import Game
from grid import Position
from measures import MeasureType
from possessions import make_food


def two_player_setup(**overrides):
    setup = {
        "players": [
            {"id": "p1", "name": "Jones", "color": "#FF0000"},
            {"id": "p2", "name": "Smith", "color": "#0000FF", "isAI": True},
        ],
    }
    setup.update(overrides)
    return setup


@pytest.fixture
def game():
    return Game.create_with_config(two_player_setup())


class StubAction(MoveAction):
    """A move whose execution result is fixed by the test."""

    def __init__(self, response, time_cost=10, allowed=True):
        super().__init__(Position(0, 0), Position(1, 0))
        self.response = response
        self.time_cost = time_cost
        self.allowed = allowed

    def can_execute(self, state, game):
        return self.allowed

    def execute(self, state, game):
        return self.response


class TestInitialization:
    """Test suite for game setup"""

    def test_players_start_at_origin(self, game):
        assert [p.id for p in game.players] == ["p1", "p2"]
        for player in game.players:
            assert player.state.position.equals(Position(0, 0))
            assert player.state.cash == 1000
            assert player.state.happiness == 50
        assert game.players[1].is_ai

    def test_initial_clock(self, game):
        assert game.current_week == 1
        assert game.time_units_remaining == 600
        assert game.current_player_index == 0
        assert not game.is_game_over
        assert game.id.startswith("game-")

    def test_custom_setup(self):
        game = Game.create_with_config(two_player_setup(
            startingCash=50,
            startingStats={"health": 70, "happiness": 20, "education": 10},
            victoryConditions={"targetWealth": 500},
        ))
        state = game.players[0].state
        assert state.cash == 50
        assert state.health == 70
        assert state.education == 10
        assert game.victory_conditions.target_wealth == 500
        assert game.victory_conditions.target_education == 100

    def test_empty_player_list_rejected(self):
        with pytest.raises(ValueError):
            Game.create_with_config({"players": []})

    def test_reinitialize_discards_state(self, game):
        game.advance_time(700)
        game.initialize(two_player_setup())
        assert game.current_week == 1
        assert game.time_units_remaining == 600

    def test_current_player_without_players(self):
        with pytest.raises(GameStateError):
            Game().get_current_player()


class TestProcessTurn:
    """Test suite for turn validation and execution"""

    def snapshot(self, game):
        return game.serialize()

    def test_unknown_player(self, game):
        before = self.snapshot(game)
        response = game.process_turn("ghost", StubAction(ActionResponse.succeeded("ok", 10)))

        assert not response.success
        assert response.message == "Player with ID ghost not found"
        assert self.snapshot(game) == before

    def test_out_of_turn(self, game):
        before = self.snapshot(game)
        response = game.process_turn("p2", StubAction(ActionResponse.succeeded("ok", 10)))

        assert response.message == "It's not your turn"
        assert self.snapshot(game) == before

    def test_game_over(self, game):
        game.is_game_over = True
        response = game.process_turn("p1", StubAction(ActionResponse.succeeded("ok", 10)))
        assert response.message == "Game is over"

    def test_cannot_execute(self, game):
        action = StubAction(ActionResponse.succeeded("ok", 10), allowed=False)
        response = game.process_turn("p1", action)
        assert response.message == "Cannot execute action: Move"

    def test_not_enough_time(self, game):
        game.time_units_remaining = 30
        before = self.snapshot(game)
        response = game.process_turn("p1", StubAction(ActionResponse.succeeded("ok", 60), time_cost=60))

        assert response.message == "Not enough time remaining. Action requires 60 units, but only 30 remaining"
        assert self.snapshot(game) == before

    def test_failed_execution_changes_nothing(self, game):
        before = self.snapshot(game)
        response = game.process_turn("p1", StubAction(ActionResponse.failed("nope")))

        assert response.message == "nope"
        assert self.snapshot(game) == before

    def test_success_applies_changes_and_time(self, game):
        changes = [StateChange(ChangeType.CASH, 1234, "windfall")]
        response = game.process_turn("p1", StubAction(ActionResponse.succeeded("ok", 35, changes)))

        assert response.success
        assert game.players[0].state.cash == 1234
        assert game.time_units_remaining == 565

    def test_real_move(self, game):
        action = game.find_action("p1", "move-0,0-to-3,2")
        response = game.process_turn("p1", action)

        assert response.success
        assert action.time_cost == 15
        assert game.players[0].state.position.equals(Position(3, 2))
        assert game.time_units_remaining == 585

    def test_next_player_wraps(self, game):
        game.next_player()
        assert game.get_current_player().id == "p2"
        game.next_player()
        assert game.get_current_player().id == "p1"


class TestTime:
    """Test suite for the weekly clock"""

    def test_advance_within_week(self, game):
        game.advance_time(100)
        assert game.current_week == 1
        assert game.time_units_remaining == 500

    def test_exact_budget_rolls_over(self, game):
        game.advance_time(600)
        assert game.current_week == 2
        assert game.time_units_remaining == 600

    def test_multi_week_advance(self, game):
        game.advance_time(1300)
        assert game.current_week == 3
        assert game.time_units_remaining == 500

    def test_rent_collected_at_week_end(self, game):
        state = game.players[0].state
        state.rented_home = "lowcost-apartment"
        game.advance_time(600)

        assert state.cash == 695
        assert state.rent_debt == 0

    def test_missed_rent_becomes_debt(self, game):
        state = game.players[0].state
        state.rented_home = "security-apartment"
        state.set_cash(100)
        game.advance_time(600)

        assert state.cash == 0
        assert state.rent_debt == 345
        assert state.health == 95
        assert state.happiness == 40

    def test_rent_ignored_for_unknown_home(self, game):
        state = game.players[0].state
        state.rented_home = "bank"
        game.advance_time(600)
        assert state.cash == 1000


class TestStateChanges:
    """Test suite for apply_state_changes"""

    def test_measure_changes_are_clamped(self, game):
        player = game.players[0]
        game.apply_state_changes(player, [
            StateChange(ChangeType.MEASURE, 250, measure=MeasureType.HEALTH),
            StateChange(ChangeType.MEASURE, -10, measure=MeasureType.HAPPINESS),
        ])
        assert player.state.health == 100
        assert player.state.happiness == 0

    def test_position_clears_current_building(self, game):
        player = game.players[0]
        player.state.current_building = "bank"
        game.apply_state_changes(player, [StateChange(ChangeType.POSITION, {"x": 0, "y": 3})])

        assert player.state.position.equals(Position(0, 3))
        assert player.state.current_building is None

    def test_possessions(self, game):
        player = game.players[0]
        bread = make_food("Bread", 3)
        game.apply_state_changes(player, [StateChange(ChangeType.POSSESSION_ADD, bread)])
        assert player.state.possessions == [bread]

        game.apply_state_changes(player, [StateChange(ChangeType.POSSESSION_REMOVE, bread.id)])
        assert player.state.possessions == []

    def test_job_and_experience(self, game):
        player = game.players[0]
        cook = game.job_system.get_job_by_id("restaurant-cook")
        game.apply_state_changes(player, [
            StateChange(ChangeType.JOB, cook),
            StateChange(ChangeType.EXPERIENCE, {"rank": 1, "points": 60}),
        ])
        assert player.state.job is cook
        assert player.state.career == 60

        game.apply_state_changes(player, [StateChange(ChangeType.JOB, game.job_system.get_unemployed_job())])
        assert player.state.job is None

    def test_unknown_change_type_is_logged(self, game, caplog):
        game.apply_state_changes(game.players[0], [StateChange("teleport", 1)])
        assert "Unknown state change type: teleport" in caplog.text

    def test_measure_change_without_measure_is_logged(self, game, caplog):
        state = game.players[0].state
        game.apply_state_changes(game.players[0], [StateChange(ChangeType.MEASURE, 10, "Mystery boost")])

        assert state.health == 100
        assert state.happiness == 50
        assert "Measure change without a measure ignored: Mystery boost" in caplog.text


class TestVictory:
    """Test suite for win detection"""

    def make_winner(self, state):
        state.set_cash(10000)
        state.set_measure(MeasureType.HEALTH, 100)
        state.set_measure(MeasureType.HAPPINESS, 100)
        state.set_measure(MeasureType.EDUCATION, 100)
        state.add_experience(8, 850)

    def test_all_thresholds_required(self, game):
        state = game.players[0].state
        self.make_winner(state)
        state.set_measure(MeasureType.EDUCATION, 99)

        result = game.check_victory()[0]
        assert not result.is_victory
        assert result.conditions_met["education"] is False
        assert result.conditions_met["wealth"] is True

    def test_winner_detected(self, game):
        self.make_winner(game.players[1].state)
        results = game.check_victory()

        assert [r.is_victory for r in results] == [False, True]
        assert [p.id for p in game.get_winners()] == ["p2"]
        assert results[1].to_dict()["playerName"] == "Smith"

    def test_victory_ends_game(self, game):
        self.make_winner(game.players[0].state)
        game.players[0].state.set_cash(9990)
        changes = [StateChange(ChangeType.CASH, 10000)]
        game.process_turn("p1", StubAction(ActionResponse.succeeded("ok", 5, changes)))

        assert game.is_game_over
        later = game.process_turn("p1", StubAction(ActionResponse.succeeded("ok", 5)))
        assert later.message == "Game is over"


class TestAvailableActions:
    """Test suite for action discovery"""

    def test_street_actions(self, game):
        actions = game.get_available_actions("p1")
        # 24 moves; the home at the origin is not rented so it cannot be entered
        assert len(actions) == 24
        assert all(a.id.startswith("move-") for a in actions)

    def test_enter_offered_at_building(self, game):
        game.players[0].state.position = Position(1, 0)
        action_ids = [a.id for a in game.get_available_actions("p1")]
        assert action_ids[0] == "enter-rent-agency"

    def test_inside_actions_come_from_building(self, game):
        state = game.players[0].state
        state.position = Position(3, 4)
        state.current_building = "college"
        assert [a.id for a in game.get_available_actions("p1")] == ["college-study", "college-exit"]

    def test_unknown_player(self, game):
        assert game.get_available_actions("ghost") == []
        assert game.find_action("p1", "nope") is None


class TestSerialization:
    """Test suite for snapshots"""

    def test_round_trip(self, game):
        state = game.players[0].state
        state.add_experience(1, 25)
        state.add_possession(make_food("Bread", 3, health_effect=5, spoil_time=2))
        state.job = game.job_system.get_job_by_id("restaurant-cook")
        state.rented_home = "lowcost-apartment"
        game.advance_time(130)
        game.next_player()

        blob = game.serialize()
        restored = Game()
        restored.deserialize(blob)

        assert restored.serialize() == blob
        assert restored.current_player_index == 1
        assert restored.time_units_remaining == 470
        assert restored.players[0].state.job.title == "Cook"
        assert restored.map.get_building_by_id("bank") is not None

    def test_snapshot_is_camel_case(self, game):
        data = json.loads(game.serialize())
        assert set(data) >= {"id", "currentWeek", "timeUnitsRemaining", "currentPlayerIndex",
                             "players", "victoryConditions", "isGameOver"}
        assert data["victoryConditions"]["targetCareer"] == 850
        assert data["players"][1]["isAI"] is True

    @pytest.mark.parametrize("blob", [
        "not json",
        "{}",
        json.dumps({"id": "g", "currentWeek": 0, "timeUnitsRemaining": 600, "currentPlayerIndex": 0,
                    "players": [], "victoryConditions": {}}),
    ])
    def test_bad_snapshot(self, blob):
        with pytest.raises(GameStateError) as excinfo:
            Game().deserialize(blob)
        assert str(excinfo.value).startswith("Failed to deserialize game state")

    def test_player_index_out_of_range(self, game):
        data = json.loads(game.serialize())
        data["currentPlayerIndex"] = 5
        with pytest.raises(GameStateError):
            Game().deserialize(json.dumps(data))

    def test_restored_guest_in_foreign_apartment_can_leave(self, game):
        """A player inside a home they do not rent still gets an exit"""
        data = json.loads(game.serialize())
        player = data["players"][0]["state"]
        player["position"] = game.map.get_building_by_id("security-apartment").position.to_dict()
        player["currentBuilding"] = "security-apartment"
        player["rentedHome"] = "lowcost-apartment"

        restored = Game()
        restored.deserialize(json.dumps(data))
        actions = restored.get_available_actions("p1")

        assert [a.id for a in actions] == ["security-apartment-exit"]
        response = restored.process_turn("p1", actions[0])
        assert response.success
        assert restored.players[0].state.current_building is None
