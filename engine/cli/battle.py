#!/usr/bin/env python3
"""
Terminal runner for beamfield battles.

Plays two random agents against each other on a preset board.
"""

from __future__ import annotations
import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from beamfield.core.notation import encode
from beamfield.match.catalog import PRESETS, get_preset, default_preset, run_match
from beamfield.match.driver import BattleConfig, Frame, run_battle
from beamfield.match.producers import RandomProducer, SidedProducer


def print_frame(frame: Frame) -> None:
    if frame.entity is None:
        print(f"[{frame.turns:3d}] {frame.turn}: nothing to move ({frame.direction})")
        return
    print(f"[{frame.turns:3d}] {frame.turn}: {frame.entity.type} {frame.entity.id} "
          f"at {frame.entity.position} -> {frame.direction}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description='beamfield battle runner')
    parser.add_argument('--preset', type=str, default=None,
                        choices=[preset.id for preset in PRESETS],
                        help='Board preset (default: the default preset; not with --match)')
    parser.add_argument('--seed', type=str, default=None, help='Board seed')
    parser.add_argument('--max-turns', type=int, default=None,
                        help='Turn cap (default: BEAMFIELD_MAX_TURNS or 300)')
    parser.add_argument('--agent-seed', type=int, nargs=2, default=[0, 1],
                        metavar=('ATTACKER', 'DEFENDER'), help='Seeds of the two random agents')
    parser.add_argument('--match', action='store_true', help='Play the full match (both side assignments)')
    parser.add_argument('--verbose', action='store_true', help='Print every frame')
    parser.add_argument('--show-board', action='store_true', help='Print the initial board (not with --match)')

    args = parser.parse_args(argv)
    if args.match and args.preset is not None:
        parser.error('--match plays the preset of each match config, drop --preset')
    if args.match and args.show_board:
        parser.error('--show-board only applies to a single battle')

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    config = BattleConfig.from_env()
    if args.max_turns is not None:
        config.max_turns = args.max_turns

    seed = args.seed if args.seed is not None else config.seed
    on_frame = print_frame if args.verbose else (lambda frame: None)
    agents = [RandomProducer(agent_seed) for agent_seed in args.agent_seed]

    if args.match:
        outcome = run_match(agents, seed=seed, config=config, on_frame=on_frame)
        for index, record in enumerate(outcome.records):
            print(f"Battle {index + 1}: {record.turns} turns")
        return 0

    preset = get_preset(args.preset) if args.preset is not None else default_preset()
    params = replace(preset.params, seed=seed)

    record = run_battle(SidedProducer(agents), params, config=config, on_frame=on_frame)

    if args.show_board:
        print(encode(record.initial_state), end='')
    print(f"Battle finished after {record.turns} turns, {record.final_state.turn} to move")
    return 0


if __name__ == '__main__':
    sys.exit(main())
