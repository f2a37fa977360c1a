"""Turn state machine — Place / Skip / End.

A game is driven by handing the current state to a transition and
keeping only the state it returns:

    state = new_game()
    state = place(state, (3, 5))      # Place -> Place | Skip
    state = skip(state)               # Skip  -> Place | End

Every transition consumes its input. Reusing a consumed state raises
``StateConsumedError``; calling a transition the variant does not
support raises ``InvalidTransitionError``. Illegal placements are not
errors: they come back as a ``Place`` with ``retry_reason`` set and the
board and legality grid untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from reversicore.board import Board, Color, Coord
from reversicore.config import RulesConfig
from reversicore.legality import IllegalMove, LegalityGrid, LegalMove, test_board
from reversicore.moves import apply_move

__all__ = [
    "GameError",
    "StateConsumedError",
    "InvalidTransitionError",
    "GameState",
    "Place",
    "Skip",
    "End",
    "new_game",
    "place",
    "skip",
]

logger = logging.getLogger(__name__)


class GameError(Exception):
    """Base for API misuse of the state machine."""


class StateConsumedError(GameError):
    """Raised when a state that already went through a transition is reused."""

    def __init__(self, state: GameState) -> None:
        self.state = state
        super().__init__(
            f"{type(state).__name__} state was already consumed by a transition"
        )


class InvalidTransitionError(GameError):
    """Raised when a transition is invoked on a variant that does not support it."""

    def __init__(self, operation: str, state: object) -> None:
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} from {type(state).__name__} state")


class GameState:
    """Common base of the three game states."""

    is_terminal: bool = False
    _consumed: bool = False

    @property
    def consumed(self) -> bool:
        return self._consumed

    def _consume(self) -> None:
        if self._consumed:
            raise StateConsumedError(self)
        # States are frozen; the consumed flag is the one bit that changes.
        object.__setattr__(self, "_consumed", True)


# ----------------------------------------------------------------------
# States
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class Place(GameState):
    """The player should place a disk.

    ``legality`` holds, for each cell of ``board``, whether ``player``
    may place there. ``retry_reason`` is set when the previous attempt
    was illegal.
    """

    player: Color
    board: Board
    legality: LegalityGrid
    retry_reason: IllegalMove | None = None

    def __post_init__(self) -> None:
        if not self.legality.is_for(self.board, self.player):
            raise ValueError(
                "Legality grid was not computed for this board and player"
            )

    def place(self, cell: Coord) -> GameState:
        """Place ``player``'s disk on *cell*.

        A legal move yields the next player's ``Place``, or ``Skip`` when
        that player has no legal cell. An illegal move yields this same
        position again with ``retry_reason`` set.
        """
        result = self.legality[cell]
        self._consume()

        if not isinstance(result, LegalMove):
            logger.debug("%s cannot place at %s: %s", self.player, cell, result)
            return Place(
                player=self.player,
                board=self.board,
                legality=self.legality,
                retry_reason=result,
            )

        next_board = apply_move(self.board, result)
        logger.debug(
            "%s placed at %s, flipped %d", self.player, result.position, result.total_flips
        )
        return _next_turn(next_board, self.player.flip())


@dataclass(frozen=True)
class Skip(GameState):
    """The player has no legal cell and must pass.

    Making the pass explicit keeps every turn to exactly one action per
    player, and lets the caller tell the player why they are skipped.
    """

    player: Color
    board: Board

    def skip(self) -> GameState:
        """Pass the turn. The board is unchanged."""
        self._consume()
        returning = self.player.flip()
        grid = test_board(self.board, returning)
        if grid.has_legal_move():
            logger.debug("%s skipped, %s to place", self.player, returning)
            return Place(player=returning, board=self.board, legality=grid)
        logger.debug("Neither player can move, game over")
        return End(board=self.board)


@dataclass(frozen=True)
class End(GameState):
    """The game is over. No transitions are defined.

    ``board`` is the final constellation, kept for display only.
    """

    board: Board
    is_terminal = True


# ----------------------------------------------------------------------
# Transitions
# ----------------------------------------------------------------------

def _next_turn(board: Board, player: Color) -> Place | Skip:
    grid = test_board(board, player)
    if grid.has_legal_move():
        return Place(player=player, board=board, legality=grid)
    logger.debug("%s has no legal move, must skip", player)
    return Skip(player=player, board=board)


def new_game(config: RulesConfig | None = None) -> GameState:
    """Initialize a game to the starting state.

    With the default config this is ``Place`` for Black on the standard
    opening board. A custom opening where the first player cannot move
    starts with ``Skip`` instead.
    """
    config = config or RulesConfig()
    return _next_turn(config.opening_board(), config.first_player)


def place(state: GameState, cell: Coord) -> GameState:
    """Place a disk on *cell*. Only valid on a ``Place`` state."""
    if not isinstance(state, Place):
        raise InvalidTransitionError("place", state)
    return state.place(cell)


def skip(state: GameState) -> GameState:
    """Acknowledge a forced skip. Only valid on a ``Skip`` state."""
    if not isinstance(state, Skip):
        raise InvalidTransitionError("skip", state)
    return state.skip()
