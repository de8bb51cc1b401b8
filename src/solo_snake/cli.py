"""Command-line tools for Solo Snake."""

from __future__ import annotations

import argparse
import logging
import sys

from solo_snake.config import GameConfig
from solo_snake.game import GameState, GameStateMachine
from solo_snake.persistence import JsonHighScoreStore, MemoryHighScoreStore
from solo_snake.snake import Direction

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solo-snake",
        description="Solo Snake headless simulation and high-score tools.",
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON game config file.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play games with a greedy autopilot.",
    )
    sim_p.add_argument("--games", type=int, default=1)
    sim_p.add_argument("--max-ticks", type=int, default=5_000)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument(
        "--record", action="store_true",
        help="Persist the best score to the configured high-score file.",
    )

    # --- highscore ---
    hs_p = sub.add_parser("highscore", help="Show or reset the high score.")
    hs_p.add_argument("action", choices=["show", "reset"], nargs="?",
                      default="show")

    # --- config ---
    cfg_p = sub.add_parser("config", help="Write the effective config.")
    cfg_p.add_argument("output", help="Path for the JSON config file.")

    return parser


def _load_config(args: argparse.Namespace) -> GameConfig:
    return GameConfig.load(args.config) if args.config else GameConfig()


def choose_direction(machine: GameStateMachine) -> Direction:
    """Pick the safe direction that gets closest to the food.

    Falls back to the current heading when every move is fatal.
    """
    snake = machine.snake
    body = set(list(snake.body)[:-1])
    fx, fy = machine.food
    best: tuple[int, Direction] | None = None
    for direction in Direction:
        if direction is snake.direction.opposite:
            continue
        dx, dy = direction.value
        hx, hy = snake.head
        cell = (hx + dx, hy + dy)
        if not machine.grid.in_bounds(cell) or cell in body:
            continue
        distance = abs(cell[0] - fx) + abs(cell[1] - fy)
        if best is None or distance < best[0]:
            best = (distance, direction)
    return best[1] if best is not None else snake.direction


def _run_simulate(args: argparse.Namespace) -> int:
    config = _load_config(args)
    if args.seed is not None:
        config = GameConfig(**{**config.to_dict(), "seed": args.seed})
    store = (
        JsonHighScoreStore(config.high_score_path)
        if args.record else MemoryHighScoreStore()
    )
    machine = GameStateMachine(config, store=store)

    for game in range(args.games):
        machine.restart()
        while (
            machine.state == GameState.PLAYING
            and machine.ticks < args.max_ticks
        ):
            machine.handle_direction_input(choose_direction(machine))
            machine.tick()
        reason = machine.last_reason.value if machine.last_reason else "timeout"
        print(  # noqa: T201
            f"game {game + 1}: score={machine.score} "
            f"length={len(machine.snake)} ticks={machine.ticks} "
            f"interval={machine.tick_interval_ms}ms end={reason}"
        )

    print(f"high score: {machine.high_score}")  # noqa: T201
    return 0


def _run_highscore(args: argparse.Namespace) -> int:
    config = _load_config(args)
    store = JsonHighScoreStore(config.high_score_path)
    if args.action == "reset":
        store.save(0)
        logger.info("High score reset.")
    print(store.load())  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    _load_config(args).save(args.output)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``solo-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "highscore": _run_highscore,
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
