from __future__ import annotations

import argparse
import json
from pathlib import Path

from scoundrel.engine.ai import AISpec, autoplay
from scoundrel.engine.game import new_game
from scoundrel.engine.serialize import snapshot
from scoundrel.paths import get_paths
from scoundrel.services.content import ContentService
from scoundrel.services.telemetry import TelemetryService


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="scoundrel", description="Run autoplayed Scoundrel games headlessly.")
    parser.add_argument("--seed", type=int, default=None, help="seed of the first game (later games add 1 each)")
    parser.add_argument("--games", type=int, default=1)
    parser.add_argument("--difficulty", type=int, choices=(0, 1, 2), default=1)
    parser.add_argument("--json", action="store_true", help="print the final snapshot of each game as JSON")
    parser.add_argument("--quiet", action="store_true", help="only print the per-game summary")
    parser.add_argument(
        "--telemetry",
        type=Path,
        nargs="?",
        const=None,
        default=argparse.SUPPRESS,
        help="append finished games to a JSONL file (default: userdata/telemetry.jsonl)",
    )
    args = parser.parse_args(argv)

    paths = get_paths()
    content = ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir)
    config = content.load_rules()

    telemetry: TelemetryService | None = None
    if "telemetry" in args:
        telemetry = TelemetryService(args.telemetry or paths.userdata_dir / "telemetry.jsonl")

    spec = AISpec(difficulty=args.difficulty)
    wins = 0
    for i in range(max(0, args.games)):
        seed = args.seed + i if args.seed is not None else None
        state = new_game(seed=seed, config=config)
        autoplay(state, spec)

        if args.json:
            print(json.dumps(snapshot(state), ensure_ascii=False, indent=2))
        elif not args.quiet:
            for entry in state.log:
                print(entry)

        outcome = "VICTORY" if state.won else "DEFEAT"
        wins += 1 if state.won else 0
        print(f"Game {i + 1} (seed {state.seed}): {outcome}, score {state.score}")
        if telemetry is not None:
            telemetry.log_game_over(state)

    if args.games > 1:
        print(f"Won {wins}/{args.games}")
    return 0
