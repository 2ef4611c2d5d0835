"""Command line launcher for headless and text-rendered games."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from snake_autopilot.config import GameConfig

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-autopilot",
        description="Toroidal snake with a greedy autopilot.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- run ---
    run_p = sub.add_parser("run", help="Play a game on the autopilot.")
    run_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override it).",
    )
    run_p.add_argument("--grid-size", type=int, default=None)
    run_p.add_argument("--seed", type=int, default=None)
    run_p.add_argument(
        "--interval-ms", type=int, default=None,
        help="Tick period in milliseconds (0 runs as fast as possible).",
    )
    run_p.add_argument(
        "--max-ticks", type=int, default=1000,
        help="Stop after this many ticks even if the snake is alive.",
    )
    run_p.add_argument(
        "--render", action="store_true",
        help="Draw every tick as an ASCII frame.",
    )
    run_p.add_argument(
        "--manual", action="store_true",
        help="Start with the autopilot off (the snake goes straight).",
    )

    # --- config ---
    cfg_p = sub.add_parser("config", help="Write a default config file.")
    cfg_p.add_argument("output", help="Path for the JSON config.")

    return parser


def _build_config(args: argparse.Namespace) -> GameConfig:
    """Merge the config file (if any) with command line overrides."""
    from snake_autopilot.config import GameConfig

    config = GameConfig.load(args.config) if args.config else GameConfig()

    overrides: dict = {}
    flag_map = {
        "grid_size": "grid_size",
        "seed": "seed",
        "interval_ms": "tick_interval_ms",
    }
    for cli_name, cfg_name in flag_map.items():
        val = getattr(args, cli_name, None)
        if val is not None:
            overrides[cfg_name] = val
    size = overrides.get("grid_size", config.grid_size)
    if any(not 0 <= v < size for v in config.start):
        overrides["start"] = (size // 2, size // 2)
    overrides["autopilot"] = not args.manual
    return dataclasses.replace(config, **overrides)


def _run_game(args: argparse.Namespace) -> int:
    from snake_autopilot.engine import GameEngine
    from snake_autopilot.food import BoardFullError
    from snake_autopilot.render import TextRenderer
    from snake_autopilot.scheduler import TickScheduler

    try:
        config = _build_config(args)
    except (OSError, TypeError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        print(f"error: invalid configuration: {exc}", file=sys.stderr)  # noqa: T201
        return 2

    engine = GameEngine(config)
    sink = TextRenderer(engine.grid) if args.render else None
    scheduler = TickScheduler(engine, sink=sink)
    try:
        final = asyncio.run(scheduler.run(max_ticks=args.max_ticks))
        outcome = "game over" if final["game_over"] else "still alive"
    except BoardFullError:
        logger.info("Board filled at tick %d.", engine.tick)
        final = engine.get_state()
        outcome = "board full"

    print(  # noqa: T201
        f"Finished after {final['tick']} ticks: score {final['score']}, "
        f"length {len(final['snake'])}, {outcome}."
    )
    return 0


def _write_config(args: argparse.Namespace) -> int:
    from snake_autopilot.config import GameConfig

    GameConfig().save(args.output)
    print(f"Wrote default config to {args.output}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-autopilot`` CLI."""
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
        "run": _run_game,
        "config": _write_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
