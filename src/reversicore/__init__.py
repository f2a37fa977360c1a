"""reversicore — Reversi/Othello rules engine.

Board state, per-cell move legality, move application and the
Place / Skip / End turn state machine. No I/O; a presentation layer
drives it by passing coordinates and rendering the returned states.
"""

__version__ = "0.1.0"

from reversicore.board import DIRECTIONS, SIZE, Board, BoardIndexError, Color, Coord, Direction
from reversicore.config import RulesConfig, load_config
from reversicore.game import (
    End,
    GameError,
    GameState,
    InvalidTransitionError,
    Place,
    Skip,
    StateConsumedError,
    new_game,
    place,
    skip,
)
from reversicore.legality import (
    IllegalMove,
    Ineffective,
    LegalityGrid,
    LegalMove,
    Occupied,
    test_board,
    test_cell,
)
from reversicore.moves import apply_move
