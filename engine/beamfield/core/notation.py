"""
Board and move text formats for beamfield.

Board format example (3x2 board, defender to move):
```
3 2
D
b0 . *
p1 x t2
```

Line 0 holds `width height`, line 1 the turn letter, then one line per row
with `width` space-separated cell tokens:

- `b<id>`: beam (field cell 'beam')
- `p<id>`: pawn (field cell 'empty')
- `t<id>`: target (field cell 'empty')
- `*`: block
- `x`: beam cell with no tracked beam
- `.`: empty

Blank lines are ignored. Move format is `<id> <direction>` with direction
one of u, l, d, r.
"""

from __future__ import annotations
import logging
import re
from typing import Union

from .board import (
    EMPTY, BLOCK, BEAM_CELL, BEAM, PAWN, TARGET, TURNS,
    DIRECTIONS, DEFAULT_DIRECTION
)
from .state import BoardState, Entity

logger = logging.getLogger(__name__)

ENTITY_PREFIXES = {'b': BEAM, 'p': PAWN, 't': TARGET}
ENTITY_TOKEN = re.compile(r'^([bpt])([0-9]+)$')
LEADING_INT = re.compile(r'^[+-]?[0-9]+')
SIZE_TOKEN = re.compile(r'^[0-9]+$')


class NotationError(ValueError):
    """Raised when board text cannot be parsed."""


def decode(text: str) -> BoardState:
    """Parse board text into a BoardState."""
    lines = [line for line in text.split('\n') if len(line) > 0]
    if len(lines) < 2:
        raise NotationError("Board text needs a size line and a turn line")

    header = lines[0].split()
    if len(header) != 2 or not all(SIZE_TOKEN.match(token) for token in header):
        raise NotationError(f"Invalid size line: {lines[0]!r}")
    width, height = int(header[0]), int(header[1])
    if width <= 0 or height <= 0:
        raise NotationError(f"Board size must be positive, got {width}x{height}")

    turn = lines[1][0]
    if turn not in TURNS:
        raise NotationError(f"Invalid turn letter: {turn!r}")

    rows = lines[2:2 + height]
    if len(rows) != height:
        raise NotationError(f"Expected {height} rows, got {len(rows)}")

    state = BoardState(width=width, height=height, turn=turn)
    entity_lists = {BEAM: state.beams, PAWN: state.pawns, TARGET: state.targets}

    for y, row in enumerate(rows):
        cells = row.split()
        if len(cells) != width:
            raise NotationError(f"Row {y} has {len(cells)} cells, expected {width}")

        for x, cell in enumerate(cells):
            position = y * width + x
            match = ENTITY_TOKEN.match(cell)
            if match:
                kind = ENTITY_PREFIXES[match.group(1)]
                entity_lists[kind].append(Entity(position, kind, int(match.group(2))))
                state.field.append(BEAM_CELL if kind == BEAM else EMPTY)
            elif cell == '*':
                state.field.append(BLOCK)
            elif cell == 'x':
                state.field.append(BEAM_CELL)
            elif cell == '.':
                state.field.append(EMPTY)
            else:
                raise NotationError(f"Unknown cell token {cell!r} at ({x}, {y})")

    return state


def _cell_token(state: BoardState, position: int) -> str:
    # Precedence: target, pawn, beam, then terrain
    for prefix, entities in (('t', state.targets), ('p', state.pawns), ('b', state.beams)):
        for entity in entities:
            if entity.position == position:
                return f"{prefix}{entity.id}"

    label = state.field[position]
    if label == BLOCK:
        return '*'
    if label == BEAM_CELL:
        return 'x'
    if label == EMPTY:
        return '.'
    raise NotationError(f"Unknown field label {label!r} at position {position}")


def encode(state: BoardState) -> str:
    """Serialize a BoardState into board text, with a trailing newline."""
    lines = [f"{state.width} {state.height}", state.turn]
    for y in range(state.height):
        lines.append(' '.join(
            _cell_token(state, y * state.width + x) for x in range(state.width)
        ))
    return '\n'.join(lines) + '\n'


def parse_move(text: Union[str, bytes]) -> tuple[int, str]:
    """
    Parse producer output into (entity id, direction).

    Never fails: an unparsable id becomes 0 and an unknown direction
    becomes 'u'. The id takes the leading integer of the first token,
    so "3abc" reads as 3.
    """
    if isinstance(text, bytes):
        text = text.decode('utf-8', errors='replace')

    tokens = text.strip().split()

    entity_id = 0
    if tokens:
        match = LEADING_INT.match(tokens[0])
        if match:
            entity_id = int(match.group(0))
        else:
            logger.debug("Unparsable move id %r, using 0", tokens[0])

    direction = tokens[1] if len(tokens) > 1 else None
    if direction not in DIRECTIONS:
        logger.debug("Unknown direction %r, using %r", direction, DEFAULT_DIRECTION)
        direction = DEFAULT_DIRECTION

    return entity_id, direction


def format_move(entity_id: int, direction: str) -> str:
    """Format a move as producer output."""
    if direction not in DIRECTIONS:
        raise ValueError(f"Invalid direction: {direction}")
    return f"{entity_id} {direction}"
