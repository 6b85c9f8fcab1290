"""
Board primitives for beamfield.

Cells are addressed by a single row-major index:

  y=0 |  0  1  2  3
  y=1 |  4  5  6  7
  y=2 |  8  9 10 11
      +------------
         0  1  2  3   (x)

position = y * width + x
"""

# Cell labels stored in BoardState.field
EMPTY = 'empty'
BLOCK = 'block'
BEAM_CELL = 'beam'
CELL_LABELS = (EMPTY, BLOCK, BEAM_CELL)

# Entity kinds
BEAM = 'beam'
PAWN = 'pawn'
TARGET = 'target'
ENTITY_TYPES = (BEAM, PAWN, TARGET)

# Turn letters: attacker moves beams/pawns, defender moves targets
ATTACKER = 'A'
DEFENDER = 'D'
TURNS = (ATTACKER, DEFENDER)

# Entity kinds each side may move
MOVABLE_TYPES = {
    ATTACKER: (BEAM, PAWN),
    DEFENDER: (TARGET,),
}

# Direction codes -> (dx, dy) unit deltas, y grows downwards
DIRECTIONS = {
    'u': (0, -1),
    'l': (-1, 0),
    'd': (0, 1),
    'r': (1, 0),
}
DEFAULT_DIRECTION = 'u'

# Probability that a generated cell is a block
BLOCK_PROBABILITY = 0.1


def position_to_xy(position: int, width: int) -> tuple[int, int]:
    """Convert cell index to (x, y)."""
    return position % width, position // width


def xy_to_position(x: int, y: int, width: int) -> int:
    """Convert (x, y) to cell index."""
    return y * width + x


def is_on_board(x: int, y: int, width: int, height: int) -> bool:
    """Check if (x, y) lies inside the board."""
    return 0 <= x < width and 0 <= y < height


def side_for_turn(turn: str) -> int:
    """Producer side index for a turn letter: 0 for attacker, 1 for defender."""
    return 0 if turn == ATTACKER else 1


def other_turn(turn: str) -> str:
    """Return the turn letter of the opposing side."""
    return ATTACKER if turn == DEFENDER else DEFENDER
