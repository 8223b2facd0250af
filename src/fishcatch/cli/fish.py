from __future__ import annotations

import argparse
import logging
from collections import Counter
from typing import Sequence

from fishcatch.content.catalog import DEFAULT_CATALOG_PATH, ConfigurationError, load_catalog_json
from fishcatch.sim.core import SESSION_COMMANDS, START_FISHING_COMMAND, FishingSession
from fishcatch.sim.hash import session_hash
from fishcatch.sim.resolver import fish_chance
from fishcatch.sim.world import FishingWorld

DEFAULT_SEED = 7
CONFIGURATION_ERROR_EXIT_CODE = 2


def _positive_int(value: str) -> int:
    parsed = int(value)
    if parsed <= 0:
        raise argparse.ArgumentTypeError("casts must be > 0")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fishcatch",
        description="Run fishing attempts against a catalog and print the resulting messages and rewards.",
    )
    parser.add_argument("--catalog", default=DEFAULT_CATALOG_PATH, help="Path to fishing catalog JSON.")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Master seed for the fishing draw stream.")
    parser.add_argument("--casts", type=_positive_int, default=1, help="Number of commands to run.")
    parser.add_argument(
        "--command",
        choices=SESSION_COMMANDS,
        default=START_FISHING_COMMAND,
        help="Command to run on every cast.",
    )
    parser.add_argument("--print-trace", action="store_true", help="Print one line per resolved outcome.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def _print_summary(session: FishingSession, world: FishingWorld) -> None:
    counts = Counter(entry["outcome"]["kind"] for entry in session.outcome_trace)
    outcome_summary = " ".join(f"{kind}={counts[kind]}" for kind in sorted(counts)) or "none"
    inventory_summary = " ".join(f"{item_id}x{world.inventory[item_id]}" for item_id in sorted(world.inventory))
    print(f"summary fish_chance={fish_chance(session.catalog):.2f} casts={len(session.input_log)}")
    print(f"summary outcomes {outcome_summary}")
    print(f"summary gold={world.gold} inventory={inventory_summary or 'empty'}")
    print(f"summary active_quests={','.join(str(quest_id) for quest_id in world.active_quests) or 'none'}")
    print(f"session_hash={session_hash(session)}")


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        catalog = load_catalog_json(args.catalog)
    except ConfigurationError as exc:
        print(f"configuration error: {exc}")
        return CONFIGURATION_ERROR_EXIT_CODE

    world = FishingWorld()
    session = FishingSession(catalog=catalog, seed=args.seed, world=world)
    for _ in range(args.casts):
        session.run_command(args.command)
        for message in world.drain_messages():
            print(message)
        while world.cutscenes:
            played = world.finish_cutscene()
            print(f"{played.actor_name}: {played.line}")

    if args.print_trace:
        for entry in session.outcome_trace:
            fields = " ".join(f"{key}={value}" for key, value in sorted(entry["outcome"].items()))
            print(f"trace attempt={entry['attempt']} command={entry['command_type']} {fields}")

    _print_summary(session, world)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
