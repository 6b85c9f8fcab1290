"""Match components: move producers, the battle driver, and the preset catalog."""

from .producers import MoveProducer, CallableProducer, SidedProducer, RandomProducer, create_producer
from .driver import Battler, BattleConfig, BattleRecord, Frame, battle, run_battle, resolve_entity
from .catalog import (
    Preset,
    MatchConfig,
    MatchOutcome,
    PRESETS,
    MATCH_CONFIGS,
    get_preset,
    default_preset,
    judge_match,
    play_match,
    run_match,
)
