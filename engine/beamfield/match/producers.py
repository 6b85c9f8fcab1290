"""
Move producers: the agents that answer a board with a move.

A producer gets the serialized board and its side index (0 = attacker,
1 = defender) and returns move text such as "3 l". It may answer directly or
return an awaitable.
"""

from __future__ import annotations
from typing import Awaitable, Callable, Optional, Protocol, Union

from ..core.board import ATTACKER, DIRECTIONS
from ..core.notation import decode, format_move
from ..core.rng import SeededRandom, Seed

ProducerOutput = Union[str, bytes]


class MoveProducer(Protocol):
    """Protocol for move-producing agents."""
    def produce(
        self, board_text: str, side: int
    ) -> Union[ProducerOutput, Awaitable[ProducerOutput]]:
        """Return move text for the given board."""
        ...


class CallableProducer:
    """Adapts a plain function `(board_text, side) -> text` to MoveProducer."""

    def __init__(self, fn: Callable[[str, int], Union[ProducerOutput, Awaitable[ProducerOutput]]]):
        self.fn = fn

    def produce(self, board_text: str, side: int):
        return self.fn(board_text, side)


class SidedProducer:
    """Routes each side to its own producer: players[side] answers for that side."""

    def __init__(self, producers: list[MoveProducer]):
        if len(producers) != 2:
            raise ValueError(f"Expected 2 producers, got {len(producers)}")
        self.producers = producers

    def produce(self, board_text: str, side: int):
        return self.producers[side].produce(board_text, side)


class RandomProducer:
    """
    Plays a uniformly random move.

    As attacker picks among beams and pawns, as defender among targets,
    with a random direction.
    """

    def __init__(self, seed: Optional[Seed] = None):
        self.random = SeededRandom(seed if seed is not None else 0)

    def produce(self, board_text: str, side: int) -> str:
        state = decode(board_text)
        direction = self.random.choice(list(DIRECTIONS))

        if state.turn == ATTACKER:
            movable = state.beams + state.pawns
        else:
            movable = state.targets

        if not movable:
            return format_move(0, direction)
        return format_move(self.random.choice(movable).id, direction)


PRODUCER_PRESETS: dict[str, Callable[..., MoveProducer]] = {
    'random': RandomProducer,
}


def create_producer(name: str, **kwargs) -> MoveProducer:
    """Create a producer from its preset name."""
    if name not in PRODUCER_PRESETS:
        raise KeyError(f"Unknown producer: {name}")
    return PRODUCER_PRESETS[name](**kwargs)
