"""
Headless game runner.

Builds a game from a setup file (or the default single-player setup), replays
a scripted list of actions, prints per-player progress and optionally writes
the final snapshot.

Script format: a JSON list whose entries are either an action id (played by
the current player), an object {"playerId": ..., "actionId": ...}, or the
string "end-turn" which passes play to the next player.
"""

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

import numpy as np

from game import Game

logger = logging.getLogger(__name__)

END_TURN = "end-turn"

DEFAULT_SETUP = {
    "players": [{"id": "player-1", "name": "Jones", "color": "#FF0000"}],
}


def compute_player_stats(game: Game) -> Dict[str, float]:
    """Vectorized snapshot of player measures across the table."""
    if not game.players:
        return {
            "mean_cash": 0.0,
            "median_cash": 0.0,
            "mean_health": 0.0,
            "mean_happiness": 0.0,
            "mean_education": 0.0,
            "mean_career": 0.0,
            "employment_rate": 0.0,
            "total_rent_debt": 0.0,
        }

    states = [p.state for p in game.players]
    cash = np.array([s.cash for s in states], dtype=float)
    health = np.array([s.health for s in states], dtype=float)
    happiness = np.array([s.happiness for s in states], dtype=float)
    education = np.array([s.education for s in states], dtype=float)
    career = np.array([s.career for s in states], dtype=float)
    employment = np.array([1.0 if s.job is not None else 0.0 for s in states], dtype=float)
    debt = np.array([s.rent_debt for s in states], dtype=float)

    return {
        "mean_cash": float(cash.mean()),
        "median_cash": float(np.median(cash)),
        "mean_health": float(health.mean()),
        "mean_happiness": float(happiness.mean()),
        "mean_education": float(education.mean()),
        "mean_career": float(career.mean()),
        "employment_rate": float(employment.mean()),
        "total_rent_debt": float(debt.sum()),
    }


def play_script(game: Game, script: List[Union[str, Dict[str, str]]]) -> List[Dict[str, object]]:
    """Replay scripted steps; unknown action ids are logged and skipped."""
    results = []
    for step in script:
        if step == END_TURN:
            game.next_player()
            continue

        if isinstance(step, dict):
            player_id, action_id = step["playerId"], step["actionId"]
        else:
            player_id, action_id = game.get_current_player().id, step

        action = game.find_action(player_id, action_id)
        if action is None:
            logger.warning(f"Action {action_id} not available to {player_id}, skipping")
            results.append({"actionId": action_id, "success": False, "message": "Action not available"})
            continue

        response = game.process_turn(player_id, action)
        results.append({"actionId": action_id, **response.to_dict()})
        if game.is_game_over:
            break
    return results


def print_summary(game: Game) -> None:
    print("=" * 80)
    print(f"WEEK {game.current_week}  ({game.time_units_remaining} time units left)")
    print("=" * 80)
    for player in game.players:
        state = player.state
        job = state.job.title if state.job else "unemployed"
        print(
            f"  {player.name:<12} cash=${state.cash:<8.0f} health={state.health:<4.0f} "
            f"happiness={state.happiness:<4.0f} education={state.education:<4.0f} "
            f"career={state.career:<5.0f} job={job}"
        )
    print()
    for key, value in compute_player_stats(game).items():
        print(f"  {key:<16} {value:.2f}")
    winners = game.get_winners()
    if winners:
        print()
        print(f"  Winner(s): {', '.join(p.name for p in winners)}")
    print("=" * 80)


def main(
    setup_path: Optional[str] = None,
    script_path: Optional[str] = None,
    output_path: Optional[str] = None,
) -> Game:
    """Run one scripted game and return it."""
    setup = json.loads(Path(setup_path).read_text()) if setup_path else DEFAULT_SETUP
    game = Game.create_with_config(setup)

    if script_path:
        script = json.loads(Path(script_path).read_text())
        results = play_script(game, script)
        for result in results:
            status = "ok " if result["success"] else "ERR"
            print(f"[{status}] {result['actionId']}: {result['message']}")
        print()

    print_summary(game)

    if output_path:
        Path(output_path).write_text(game.serialize())
        print(f"Snapshot written to {output_path}")

    return game


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    parser = argparse.ArgumentParser(description="Run a scripted game.")
    parser.add_argument("--setup", type=str, default=None, help="Path to a JSON game setup")
    parser.add_argument("--script", type=str, default=None, help="Path to a JSON list of actions")
    parser.add_argument("--output", type=str, default=None, help="Where to write the final snapshot")
    args = parser.parse_args()

    main(setup_path=args.setup, script_path=args.script, output_path=args.output)
