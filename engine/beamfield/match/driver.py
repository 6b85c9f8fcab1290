"""
Match driver for beamfield.

Runs a bounded number of turns between two producers. Each turn the board is
serialized, the acting side's producer answers with a move, and the move is
checked against the board: an attacker may only move a beam or pawn, a
defender only a target. Invalid answers are replaced by the first beam or
first target. Moves are reported to an observer but not applied to the board.
"""

from __future__ import annotations
import asyncio
import inspect
import logging
import os
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..core.board import ATTACKER, DIRECTIONS, MOVABLE_TYPES, side_for_turn, other_turn
from ..core.generator import BoardParams, DEFAULT_SEED, generate_board_from_params
from ..core.notation import decode, encode, parse_move
from ..core.state import BoardState, Entity
from .producers import MoveProducer

logger = logging.getLogger(__name__)


@dataclass
class BattleConfig:
    """Configuration for a battle."""
    max_turns: int = 300  # Loop runs while turns <= max_turns
    seed: str = DEFAULT_SEED  # Board seed used when no params or init state are given

    @classmethod
    def from_env(cls) -> BattleConfig:
        """Read BEAMFIELD_MAX_TURNS and BEAMFIELD_SEED from the environment."""
        return cls(
            max_turns=int(os.environ.get("BEAMFIELD_MAX_TURNS", cls.max_turns)),
            seed=os.environ.get("BEAMFIELD_SEED", cls.seed),
        )


@dataclass
class Frame:
    """One resolved move."""
    turns: int  # Turn counter when the move was made
    turn: str  # 'A' or 'D'
    entity: Optional[Entity]  # None when the side has nothing to move
    direction: str

    @property
    def side(self) -> int:
        return side_for_turn(self.turn)

    @property
    def delta(self) -> tuple[int, int]:
        return DIRECTIONS[self.direction]


@dataclass
class BattleRecord:
    """Record of a finished battle."""
    initial_state: BoardState
    final_state: BoardState
    turns: int
    frames: list[Frame] = field(default_factory=list)
    # No win condition is evaluated here; callers may fill this in.
    result: Optional[object] = None


FrameObserver = Callable[[Frame], None]


def log_frame(frame: Frame) -> None:
    """Default frame observer."""
    logger.debug(
        "turn %d (%s): %s %s",
        frame.turns, frame.turn,
        frame.entity if frame.entity is not None else "<none>",
        frame.direction
    )


def resolve_entity(state: BoardState, entity_id: int) -> Optional[Entity]:
    """
    Resolve a move's id to the entity the acting side moves.

    The attacker falls back to the first beam and the defender to the first
    target when the id is unknown or names an entity of the other side.
    """
    entity = state.find_entity(entity_id)
    if entity is not None and entity.type in MOVABLE_TYPES[state.turn]:
        return entity

    if state.turn == ATTACKER:
        fallback = state.beams[0] if state.beams else None
    else:
        fallback = state.targets[0] if state.targets else None
    logger.debug("Move id %d is not playable for %s, using %s", entity_id, state.turn, fallback)
    return fallback


class Battler:
    """Drives one battle between the producers of both sides."""

    def __init__(
        self,
        producer: MoveProducer,
        params: Optional[BoardParams] = None,
        config: Optional[BattleConfig] = None,
        on_frame: Optional[FrameObserver] = None,
        init_state: Optional[BoardState] = None,
    ):
        self.producer = producer
        self.config = config or BattleConfig()
        self.params = params or BoardParams(seed=self.config.seed)
        self.on_frame = on_frame or log_frame

        initial = init_state if init_state is not None else generate_board_from_params(self.params)
        # Normalize through the wire format, whatever the origin
        self.state = decode(encode(initial))
        self.turns = 0
        self.frames: list[Frame] = []

    async def _produce(self, board_text: str, side: int):
        output = self.producer.produce(board_text, side)
        if inspect.isawaitable(output):
            output = await output
        return output

    async def step(self) -> Frame:
        """Play one turn and return its frame."""
        state = self.state
        output = await self._produce(encode(state), side_for_turn(state.turn))

        entity_id, direction = parse_move(output)
        entity = resolve_entity(state, entity_id)

        frame = Frame(turns=self.turns, turn=state.turn, entity=entity, direction=direction)
        self.frames.append(frame)
        self.on_frame(frame)

        state.turn = other_turn(state.turn)
        self.turns += 1
        return frame

    def is_finished(self) -> bool:
        return self.turns > self.config.max_turns

    async def run(self) -> BattleRecord:
        """Play until the turn cap and return the record."""
        initial = self.state.copy()
        logger.info(
            "Battle start: %dx%d board, %d beams, %d pawns, %d targets",
            self.state.width, self.state.height,
            len(self.state.beams), len(self.state.pawns), len(self.state.targets)
        )

        while not self.is_finished():
            await self.step()

        logger.info("Battle finished after %d turns", self.turns)
        return BattleRecord(
            initial_state=initial,
            final_state=self.state,
            turns=self.turns,
            frames=self.frames,
        )


async def battle(
    producer: MoveProducer,
    params: Optional[BoardParams] = None,
    config: Optional[BattleConfig] = None,
    on_frame: Optional[FrameObserver] = None,
    init_state: Optional[BoardState] = None,
) -> BattleRecord:
    """Run a battle to completion."""
    battler = Battler(producer, params, config=config, on_frame=on_frame, init_state=init_state)
    return await battler.run()


def run_battle(
    producer: MoveProducer,
    params: Optional[BoardParams] = None,
    config: Optional[BattleConfig] = None,
    on_frame: Optional[FrameObserver] = None,
    init_state: Optional[BoardState] = None,
) -> BattleRecord:
    """Blocking wrapper around battle() for scripts and tests."""
    return asyncio.run(battle(producer, params, config=config, on_frame=on_frame, init_state=init_state))
