"""
Random board generation for beamfield.

Boards are fully determined by their parameters and seed, so a match can be
replayed by regenerating its board.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from .board import (
    EMPTY, BLOCK, BEAM_CELL, BEAM, PAWN, TARGET, DEFENDER,
    BLOCK_PROBABILITY
)
from .state import BoardState, Entity
from .rng import SeededRandom, Seed

logger = logging.getLogger(__name__)

DEFAULT_SEED = 'hoge'


@dataclass
class BoardParams:
    """Board dimensions, entity counts and seed."""
    width: int = 10
    height: int = 10
    beams: int = 1
    pawns: int = 1
    targets: int = 1
    seed: Seed = DEFAULT_SEED

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Board size must be positive, got {self.width}x{self.height}")
        for name in ('beams', 'pawns', 'targets'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

    def to_dict(self) -> dict:
        return {
            'width': self.width,
            'height': self.height,
            'beams': self.beams,
            'pawns': self.pawns,
            'targets': self.targets,
            'seed': self.seed,
        }


def generate_board(
    width: int,
    height: int,
    beams: int,
    pawns: int,
    targets: int,
    seed: Seed = DEFAULT_SEED
) -> BoardState:
    """
    Generate a random initial board.

    Each cell becomes a block with probability 0.1 (drawn in row-major
    order). Beams, then pawns, then targets are sampled without replacement
    from the empty cells left free by earlier entities. Ids run 0..n-1
    across beams, pawns and targets in that order; each list is sorted by
    position so the board survives an encode/decode round trip unchanged.
    Defender moves first.

    Requesting more entities than free cells yields fewer entities.
    """
    random = SeededRandom(seed)
    num_cells = width * height

    field = [BLOCK if random.random() < BLOCK_PROBABILITY else EMPTY for _ in range(num_cells)]
    free = [position for position in range(num_cells) if field[position] == EMPTY]

    beam_list = [
        Entity(position, BEAM, index)
        for index, position in enumerate(random.sample(free, beams))
    ]
    taken = {beam.position for beam in beam_list}

    pawn_list = [
        Entity(position, PAWN, index + beams)
        for index, position in enumerate(
            random.sample([p for p in free if p not in taken], pawns)
        )
    ]
    taken.update(pawn.position for pawn in pawn_list)

    target_list = [
        Entity(position, TARGET, index + beams + pawns)
        for index, position in enumerate(
            random.sample([p for p in free if p not in taken], targets)
        )
    ]

    for beam in beam_list:
        field[beam.position] = BEAM_CELL

    # Keep ids as sampled but list entities in board order, as decode does
    for entities in (beam_list, pawn_list, target_list):
        entities.sort(key=lambda entity: entity.position)

    placed = len(beam_list) + len(pawn_list) + len(target_list)
    if placed < beams + pawns + targets:
        logger.warning(
            "Board %dx%d has room for %d of %d requested entities",
            width, height, placed, beams + pawns + targets
        )

    return BoardState(
        width=width,
        height=height,
        turn=DEFENDER,
        beams=beam_list,
        pawns=pawn_list,
        targets=target_list,
        field=field,
    )


def generate_board_from_params(params: BoardParams) -> BoardState:
    """Generate a board from a BoardParams bundle."""
    return generate_board(
        params.width, params.height,
        params.beams, params.pawns, params.targets,
        seed=params.seed
    )
