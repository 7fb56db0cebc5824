"""Play one level headlessly with the auto-player.

    python -m fruitmatch --level 3 --seed 7 --mode chain
"""
from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import List, Optional

from fruitmatch.components.game_state import GameMode
from fruitmatch.config.config_loader import load_config
from fruitmatch.events.bus import EVENT_LEVEL_COMPLETED, EVENT_LEVEL_FAILED, EVENT_LEVEL_LOCKED
from fruitmatch.game import create_game
from fruitmatch.systems.session_utils import get_progress, get_tally

log = logging.getLogger("fruitmatch.cli")

TICK_DT = 0.1
MAX_TICKS = 10_000


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fruitmatch", description="Play a fruit match level with the auto-player.")
    parser.add_argument("--level", type=int, default=1, help="level id to play (default: 1)")
    parser.add_argument("--seed", type=int, default=None, help="random seed for a reproducible run")
    parser.add_argument("--mode", choices=("swap", "chain"), default=None, help="input mode (default: from config)")
    parser.add_argument("--config", default=None, help="path to an alternative game_config.yaml")
    parser.add_argument("--verbose", action="store_true", help="log engine and session details")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_config(args.config)
    rng = random.Random(args.seed)
    # Every level is playable from the command line.
    game = create_game(
        config,
        input_mode=args.mode,
        rng=rng,
        auto_play=True,
        unlocked_level=config.last_level_id,
    )

    outcome = {}
    game.event_bus.subscribe(EVENT_LEVEL_COMPLETED, lambda sender, **payload: outcome.update(payload, result="completed"))
    game.event_bus.subscribe(EVENT_LEVEL_FAILED, lambda sender, **payload: outcome.update(payload, result="failed"))
    game.event_bus.subscribe(EVENT_LEVEL_LOCKED, lambda sender, **payload: outcome.update(payload, result="locked"))

    game.start_level(args.level)
    ticks = 0
    while game.mode == GameMode.PLAYING and ticks < MAX_TICKS:
        game.tick(TICK_DT)
        ticks += 1

    if outcome.get("result") == "locked":
        print(f"level {args.level} is locked", file=sys.stderr)
        return 2

    session = game.session
    level = config.get_level(session.level_id)
    if game.board is not None:
        print(game.board.render())
        print()
    print(f"level:      {level.id} ({level.description})")
    print(f"mode:       {game.input_mode}")
    print(f"result:     {outcome.get('result', 'unfinished')}")
    if "reason" in outcome:
        print(f"reason:     {outcome['reason']}")
    print(f"score:      {session.score} / {level.target_score}")
    print(f"moves used: {session.moves_used} / {level.move_limit}")
    print(f"shuffles:   {session.shuffles}")
    print(f"stars:      {session.stars}")
    cleared = get_tally(game.world).counts
    if cleared:
        print("cleared:    " + ", ".join(f"{config.fruit_name(t)} x{n}" for t, n in sorted(cleared.items())))
    best = get_progress(game.world).best_for(level.id)
    if best is not None:
        print(f"best:       {best.score} ({best.stars} star(s))")
    return 0 if outcome.get("result") == "completed" else 1


if __name__ == "__main__":
    sys.exit(main())
