import logging
import os
import threading
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ValidationError

from errors import GameStateError, JonesError
from game import Game
from run_game import compute_player_stats
from schemas import GameSetup

# Load environment variables from .env
load_dotenv()

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class SnapshotPayload(BaseModel):
    snapshot: str


class GameManager:
    """
    Holds the single game session served by this process.

    Every command runs under one re-entrant lock, so turns from concurrent
    requests never interleave.
    """

    def __init__(self):
        self.game: Optional[Game] = None
        self._lock = threading.RLock()

    def setup(self, setup: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            self.game = Game.create_with_config(GameSetup.model_validate(setup))
            logger.info(f"Game {self.game.id} set up")
            return self.state()

    def reset(self) -> None:
        with self._lock:
            self.game = None

    def require_game(self) -> Game:
        if self.game is None:
            raise GameStateError("No game in progress. Send a setup first.")
        return self.game

    def state(self) -> Dict[str, Any]:
        with self._lock:
            game = self.require_game()
            data = game.to_dict()
            data["stats"] = compute_player_stats(game)
            return data

    def actions(self) -> List[Dict[str, Any]]:
        with self._lock:
            game = self.require_game()
            player = game.get_current_player()
            return [action.to_dict() for action in game.get_available_actions(player.id)]

    def action_tree(self) -> Optional[Dict[str, Any]]:
        with self._lock:
            game = self.require_game()
            state = game.get_current_player().state
            if state.current_building is None:
                return None
            building = game.map.get_building_by_id(state.current_building)
            return building.get_action_tree(state, game).to_dict() if building else None

    def perform(self, action_id: str, player_id: Optional[str] = None) -> Dict[str, Any]:
        with self._lock:
            game = self.require_game()
            player_id = player_id or game.get_current_player().id
            action = game.find_action(player_id, action_id)
            if action is None:
                raise GameStateError(f"Action {action_id} is not available to {player_id}")
            response = game.process_turn(player_id, action)
            return {"response": response.to_dict(), "state": self.state()}

    def end_turn(self) -> Dict[str, Any]:
        with self._lock:
            self.require_game().next_player()
            return self.state()

    def victory(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [result.to_dict() for result in self.require_game().check_victory()]

    def save(self) -> str:
        with self._lock:
            return self.require_game().serialize()

    def load(self, snapshot: str) -> Dict[str, Any]:
        game = Game()
        game.deserialize(snapshot)
        with self._lock:
            self.game = game
            return self.state()


manager = GameManager()


def _bad_request(exc: Exception) -> HTTPException:
    logger.warning(f"Request rejected: {exc}")
    return HTTPException(status_code=400, detail=str(exc))


@app.post("/game/setup")
async def setup_game(setup: Dict[str, Any]):
    try:
        return manager.setup(setup)
    except (ValidationError, JonesError) as exc:
        raise _bad_request(exc) from exc


@app.get("/game/state")
async def get_state():
    try:
        return manager.state()
    except JonesError as exc:
        raise _bad_request(exc) from exc


@app.get("/game/actions")
async def get_actions():
    try:
        return {"actions": manager.actions(), "tree": manager.action_tree()}
    except JonesError as exc:
        raise _bad_request(exc) from exc


@app.post("/game/actions/{action_id}")
async def perform_action(action_id: str, player_id: Optional[str] = None):
    try:
        return manager.perform(action_id, player_id)
    except JonesError as exc:
        raise _bad_request(exc) from exc


@app.post("/game/end-turn")
async def end_turn():
    try:
        return manager.end_turn()
    except JonesError as exc:
        raise _bad_request(exc) from exc


@app.get("/game/victory")
async def get_victory():
    try:
        return {"results": manager.victory()}
    except JonesError as exc:
        raise _bad_request(exc) from exc


@app.get("/game/save")
async def save_game():
    try:
        return {"snapshot": manager.save()}
    except JonesError as exc:
        raise _bad_request(exc) from exc


@app.post("/game/load")
async def load_game(payload: SnapshotPayload):
    try:
        return manager.load(payload.snapshot)
    except JonesError as exc:
        raise _bad_request(exc) from exc


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    await websocket.accept()
    logger.info("WebSocket connected")

    try:
        while True:
            data = await websocket.receive_json()
            command = data.get("command")

            try:
                if command == "SETUP":
                    state = manager.setup(data.get("config", {}))
                    await websocket.send_json({"type": "SETUP_COMPLETE", "state": state})
                elif command == "ACTION":
                    result = manager.perform(data["actionId"], data.get("playerId"))
                    await websocket.send_json({"type": "ACTION_RESULT", **result})
                elif command == "ACTIONS":
                    await websocket.send_json({
                        "type": "ACTIONS",
                        "actions": manager.actions(),
                        "tree": manager.action_tree(),
                    })
                elif command == "END_TURN":
                    await websocket.send_json({"type": "STATE", "state": manager.end_turn()})
                elif command == "STATE":
                    await websocket.send_json({"type": "STATE", "state": manager.state()})
                elif command == "RESET":
                    manager.reset()
                    await websocket.send_json({"type": "RESET"})
                else:
                    await websocket.send_json({"error": f"Unknown command: {command}"})
            except (ValidationError, JonesError, KeyError) as exc:
                logger.warning(f"Command {command} failed: {exc}")
                await websocket.send_json({"error": str(exc)})

    except WebSocketDisconnect:
        logger.info("Client disconnected")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=os.getenv("JONES_HOST", "0.0.0.0"),
        port=int(os.getenv("JONES_PORT", "8000")),
    )
