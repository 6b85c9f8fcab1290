"""
Board presets, match configurations and the match judge.

A match is a list of battles on a preset board, each with its own side
assignment. MATCH_CONFIGS plays the default preset twice with the players
swapped.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
import logging
from typing import Optional, Sequence

from ..core.generator import BoardParams
from .driver import BattleConfig, BattleRecord, FrameObserver, battle
from .producers import MoveProducer, SidedProducer

logger = logging.getLogger(__name__)


@dataclass
class Preset:
    """Named board parameters."""
    id: str
    name: str
    params: BoardParams
    default: bool = False


@dataclass
class MatchConfig:
    """One battle of a match: the preset and which producer plays each side."""
    config: str  # Preset id
    players: tuple[int, int] = (0, 1)  # players[side] = producer index


@dataclass
class MatchOutcome:
    """All battle records of a match and the judged result."""
    records: list[BattleRecord] = field(default_factory=list)
    judged: Optional[BattleRecord] = None


PRESETS: list[Preset] = [
    Preset(
        id='default',
        name='Default',
        params=BoardParams(width=10, height=10, beams=1, pawns=1, targets=1),
        default=True,
    ),
]

MATCH_CONFIGS: list[MatchConfig] = [
    MatchConfig(config='default', players=(0, 1)),
    MatchConfig(config='default', players=(1, 0)),
]


def get_preset(preset_id: str) -> Preset:
    """Look up a preset by id."""
    for preset in PRESETS:
        if preset.id == preset_id:
            return preset
    raise KeyError(f"Unknown preset: {preset_id}")


def default_preset() -> Preset:
    """Return the preset marked as default."""
    for preset in PRESETS:
        if preset.default:
            return preset
    return PRESETS[0]


def judge_match(results: Sequence):
    """
    Decide the outcome of a match from its per-battle results.

    Placeholder policy: the first result wins.
    """
    if not results:
        raise ValueError("Cannot judge a match without results")
    return results[0]


async def play_match(
    producers: list[MoveProducer],
    match_configs: Sequence[MatchConfig] = MATCH_CONFIGS,
    seed: Optional[str] = None,
    config: Optional[BattleConfig] = None,
    on_frame: Optional[FrameObserver] = None,
) -> MatchOutcome:
    """
    Play every battle of a match in order and judge the records.

    The board seed comes from `seed`, else from `config.seed`, else from
    each preset.
    """
    outcome = MatchOutcome()
    if seed is None and config is not None:
        seed = config.seed

    for index, match_config in enumerate(match_configs):
        params = get_preset(match_config.config).params
        if seed is not None:
            params = replace(params, seed=seed)

        sided = SidedProducer([producers[player] for player in match_config.players])
        logger.info(
            "Match battle %d/%d: preset %s, players %s",
            index + 1, len(match_configs), match_config.config, match_config.players
        )
        record = await battle(sided, params, config=config, on_frame=on_frame)
        outcome.records.append(record)

    outcome.judged = judge_match(outcome.records)
    return outcome


def run_match(
    producers: list[MoveProducer],
    match_configs: Sequence[MatchConfig] = MATCH_CONFIGS,
    seed: Optional[str] = None,
    config: Optional[BattleConfig] = None,
    on_frame: Optional[FrameObserver] = None,
) -> MatchOutcome:
    """Blocking wrapper around play_match()."""
    import asyncio
    return asyncio.run(play_match(producers, match_configs, seed=seed, config=config, on_frame=on_frame))
