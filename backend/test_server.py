"""
Unit tests for the HTTP and WebSocket adapter

Tests cover:
- Setup validation
- Listing and submitting actions by id
- Ending turns and checking victory
- Save/load through snapshots
- The WebSocket command loop
- Commands from concurrent requests running one at a time
"""

import inspect
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest
from fastapi.testclient import TestClient

import server
from errors import GameStateError
from game import Game
from server import app

SETUP = {
    "players": [
        {"id": "p1", "name": "Jones", "color": "#FF0000"},
        {"id": "p2", "name": "Smith", "color": "#00FF00"},
    ]
}


@pytest.fixture
def client():
    server.manager.reset()
    return TestClient(app)


class TestRestApi:
    """Test suite for the REST endpoints"""

    def test_state_before_setup(self, client):
        response = client.get("/game/state")
        assert response.status_code == 400
        assert "No game in progress" in response.json()["detail"]

    def test_setup(self, client):
        response = client.post("/game/setup", json=SETUP)
        assert response.status_code == 200

        data = response.json()
        assert data["currentWeek"] == 1
        assert len(data["players"]) == 2
        assert data["stats"]["mean_cash"] == 1000

    def test_setup_rejects_bad_color(self, client):
        bad = {"players": [{"id": "p1", "name": "Jones", "color": "red"}]}
        response = client.post("/game/setup", json=bad)
        assert response.status_code == 400
        assert "Invalid color format" in response.json()["detail"]

    def test_setup_rejects_too_many_players(self, client):
        players = [{"id": f"p{i}", "name": f"P{i}", "color": "#FF0000"} for i in range(5)]
        response = client.post("/game/setup", json={"players": players})
        assert response.status_code == 400

    def test_list_and_perform_action(self, client):
        client.post("/game/setup", json=SETUP)
        listed = client.get("/game/actions").json()
        action_ids = [a["id"] for a in listed["actions"]]
        assert "move-0,0-to-1,0" in action_ids
        assert listed["tree"] is None

        result = client.post("/game/actions/move-0,0-to-1,0").json()
        assert result["response"]["success"]
        assert result["response"]["timeSpent"] == 7
        assert result["state"]["timeUnitsRemaining"] == 593

        entered = client.post("/game/actions/enter-rent-agency").json()
        assert entered["response"]["success"]
        tree = client.get("/game/actions").json()["tree"]
        assert tree["action"]["displayName"] == "Housing"

    def test_unavailable_action(self, client):
        client.post("/game/setup", json=SETUP)
        response = client.post("/game/actions/enter-bank")
        assert response.status_code == 400

    def test_out_of_turn_is_reported_not_raised(self, client):
        client.post("/game/setup", json=SETUP)
        result = client.post("/game/actions/move-0,0-to-1,0", params={"player_id": "p2"}).json()
        assert result["response"]["success"] is False
        assert result["response"]["message"] == "It's not your turn"

    def test_end_turn_and_victory(self, client):
        client.post("/game/setup", json=SETUP)
        state = client.post("/game/end-turn").json()
        assert state["currentPlayerIndex"] == 1

        results = client.get("/game/victory").json()["results"]
        assert [r["isVictory"] for r in results] == [False, False]

    def test_save_and_load(self, client):
        client.post("/game/setup", json=SETUP)
        client.post("/game/actions/move-0,0-to-4,4")
        snapshot = client.get("/game/save").json()["snapshot"]

        client.post("/game/setup", json=SETUP)
        restored = client.post("/game/load", json={"snapshot": snapshot}).json()
        assert restored["players"][0]["state"]["position"] == {"x": 4, "y": 4}

    def test_load_rejects_garbage(self, client):
        response = client.post("/game/load", json={"snapshot": "garbage"})
        assert response.status_code == 400


class TestWebSocket:
    """Test suite for the command loop"""

    def test_setup_action_and_reset(self, client):
        with client.websocket_connect("/ws") as websocket:
            websocket.send_json({"command": "SETUP", "config": SETUP})
            message = websocket.receive_json()
            assert message["type"] == "SETUP_COMPLETE"

            websocket.send_json({"command": "ACTION", "actionId": "move-0,0-to-0,1"})
            message = websocket.receive_json()
            assert message["type"] == "ACTION_RESULT"
            assert message["response"]["success"]

            websocket.send_json({"command": "END_TURN"})
            assert websocket.receive_json()["state"]["currentPlayerIndex"] == 1

            websocket.send_json({"command": "RESET"})
            assert websocket.receive_json() == {"type": "RESET"}

            websocket.send_json({"command": "STATE"})
            assert "No game in progress" in websocket.receive_json()["error"]

    def test_unknown_command(self, client):
        with client.websocket_connect("/ws") as websocket:
            websocket.send_json({"command": "DANCE"})
            assert websocket.receive_json() == {"error": "Unknown command: DANCE"}


class TestSerializedAccess:
    """Test suite for one-command-at-a-time handling"""

    def test_endpoints_run_on_the_event_loop(self):
        for route in app.routes:
            if route.path.startswith("/game"):
                assert inspect.iscoroutinefunction(route.endpoint), route.path

    def test_concurrent_turns_do_not_overlap(self, client, monkeypatch):
        client.post("/game/setup", json=SETUP)
        original = Game.process_turn
        active = []
        overlap = []
        guard = threading.Lock()

        def slow_process_turn(self, player_id, action):
            with guard:
                active.append(player_id)
                overlap.append(len(active))
            time.sleep(0.05)
            try:
                return original(self, player_id, action)
            finally:
                with guard:
                    active.remove(player_id)

        monkeypatch.setattr(Game, "process_turn", slow_process_turn)

        def move():
            try:
                return server.manager.perform("move-0,0-to-1,0")["response"]["success"]
            except GameStateError:
                return False

        with ThreadPoolExecutor(max_workers=4) as pool:
            outcomes = list(pool.map(lambda _: move(), range(4)))

        assert max(overlap) == 1
        assert outcomes.count(True) == 1
        assert server.manager.game.time_units_remaining == 593
