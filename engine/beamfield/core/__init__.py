"""Core game data: board primitives, state, text codec, and board generation."""

from .board import *
from .state import BoardState, Entity
from .notation import NotationError, decode, encode, parse_move, format_move
from .generator import BoardParams, generate_board, generate_board_from_params
