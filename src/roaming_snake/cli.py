"""Command-line tools for running the engine headless."""

from __future__ import annotations

import argparse
import json
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roaming-snake",
        description="Roaming Snake headless simulation and config tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play one game with random turns and report it.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override it).",
    )
    sim_p.add_argument("--grid-size", type=int, default=None)
    sim_p.add_argument("--canvas-width", type=int, default=None)
    sim_p.add_argument("--food-move-interval", type=int, default=None)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument("--ticks", type=int, default=500)
    sim_p.add_argument(
        "--turn-probability", type=float, default=0.2,
        help="Chance per tick of requesting a random turn.",
    )

    # --- config ---
    cfg_p = sub.add_parser(
        "config", help="Write a default engine config file.",
    )
    cfg_p.add_argument("output", help="Path of the JSON file to write.")

    return parser


def _run_simulate(args: argparse.Namespace) -> int:
    from roaming_snake.config import EngineConfig
    from roaming_snake.engine import SimulationEngine
    from roaming_snake.snake import CARDINALS

    config = (
        EngineConfig.load(args.config) if args.config else EngineConfig()
    )

    overrides: dict = {}
    flag_map = {
        "grid_size": "grid_size",
        "canvas_width": "canvas_width",
        "food_move_interval": "food_move_interval",
        "seed": "seed",
    }
    for cli_name, cfg_name in flag_map.items():
        val = getattr(args, cli_name, None)
        if val is not None:
            overrides[cfg_name] = val

    try:
        if overrides:
            d = config.to_dict()
            d.update(overrides)
            config = EngineConfig(**d)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    engine = SimulationEngine.from_config(config)
    engine.start_game()
    engine.set_direction(*CARDINALS[int(engine.rng.integers(4))].value)

    for _ in range(args.ticks):
        if engine.rng.random() < args.turn_probability:
            turn = CARDINALS[int(engine.rng.integers(4))]
            engine.set_direction(*turn.value)
        result = engine.update()
        if result.game_over:
            break

    state = engine.get_game_state()
    summary = {
        "score": state.score,
        "ticks": state.tick,
        "length": len(state.snake),
        "game_over": not state.running,
        "run_state": state.run_state.value,
        "tile_count": engine.tile_count,
    }
    print(json.dumps(summary))  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    from roaming_snake.config import EngineConfig

    EngineConfig().save(args.output)
    print(f"Wrote default config to {args.output}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``roaming-snake`` CLI."""
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
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
