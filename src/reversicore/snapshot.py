"""Snapshots — JSON-compatible dicts for boards and game states.

Snapshots are validated against the bundled ``schema.json``. The
legality grid is not stored; it is recomputed from the board when a
``Place`` snapshot is loaded. Taking a snapshot never consumes a state.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path

import jsonschema

import reversicore
from reversicore.board import SIZE, Board, Color
from reversicore.game import End, GameState, Place, Skip
from reversicore.legality import IllegalMove, Ineffective, LegalityGrid, Occupied, test_board

__all__ = [
    "SnapshotError",
    "load_schema",
    "board_to_dict",
    "board_from_dict",
    "state_to_dict",
    "state_from_dict",
]

_SCHEMA_PATH = Path(__file__).parent / "schema.json"


class SnapshotError(ValueError):
    """Raised when a snapshot document is malformed."""


def load_schema(path: Path = _SCHEMA_PATH) -> dict:
    """Load a JSON Schema file and return as dict."""
    with open(path) as f:
        return json.load(f)


@lru_cache(maxsize=1)
def _snapshot_schema() -> dict:
    return load_schema()


# ------------------------------------------------------------------
# Board
# ------------------------------------------------------------------

def board_to_dict(board: Board) -> list[list[str | None]]:
    """Column-major nested lists of ``"black"``, ``"white"`` or ``None``."""
    return [
        [cell.value if cell is not None else None for cell in col]
        for col in board.cells
    ]


def board_from_dict(data: list) -> Board:
    if not isinstance(data, list) or len(data) != SIZE:
        raise SnapshotError(f"Board must be a list of {SIZE} columns")
    cells: list[list[Color | None]] = []
    for col in data:
        if not isinstance(col, list) or len(col) != SIZE:
            raise SnapshotError(f"Each board column must hold {SIZE} cells")
        try:
            cells.append([Color(cell) if cell is not None else None for cell in col])
        except ValueError as e:
            raise SnapshotError(f"Invalid cell: {e}") from e
    return Board.from_lists(cells)


# ------------------------------------------------------------------
# Game state
# ------------------------------------------------------------------

def _reason_to_dict(reason: IllegalMove | None) -> dict | None:
    if reason is None:
        return None
    if isinstance(reason, Occupied):
        return {"kind": "occupied", "color": reason.color.value}
    return {"kind": "ineffective"}


def _reason_from_dict(data: dict | None) -> IllegalMove | None:
    if data is None:
        return None
    if data["kind"] == "occupied":
        return Occupied(Color(data["color"]))
    return Ineffective()


def state_to_dict(state: GameState) -> dict:
    """Return a serializable snapshot of *state*."""
    if isinstance(state, Place):
        kind = "place"
    elif isinstance(state, Skip):
        kind = "skip"
    elif isinstance(state, End):
        kind = "end"
    else:
        raise TypeError(f"Not a game state: {state!r}")

    board = state.board
    snap: dict = {
        "engine_version": reversicore.__version__,
        "state": kind,
        "board": board_to_dict(board),
        "piece_counts": {
            "black": board.count(Color.BLACK),
            "white": board.count(Color.WHITE),
        },
    }
    if isinstance(state, (Place, Skip)):
        snap["player"] = state.player.value
    if isinstance(state, Place):
        snap["retry_reason"] = _reason_to_dict(state.retry_reason)
        snap["legal_moves"] = [
            {"position": list(m.position), "flips": list(m.flips)}
            for m in state.legality.legal_moves()
        ]
    return snap


def _check_counts(data: dict, board: Board) -> None:
    counts = data.get("piece_counts")
    if counts is None:
        return
    actual = {"black": board.count(Color.BLACK), "white": board.count(Color.WHITE)}
    if counts != actual:
        raise SnapshotError(f"piece_counts {counts!r} do not match the board {actual!r}")


def _check_legal_moves(data: dict, grid: LegalityGrid) -> None:
    listed = data.get("legal_moves")
    if listed is None:
        return
    claimed = sorted((tuple(m["position"]), tuple(m["flips"])) for m in listed)
    actual = sorted((m.position, m.flips) for m in grid.legal_moves())
    if claimed != actual:
        raise SnapshotError("legal_moves do not match the board")


def state_from_dict(data: dict) -> GameState:
    """Rebuild a fresh, unconsumed state from a snapshot.

    Raises SnapshotError if the document does not match the schema,
    if ``piece_counts`` or ``legal_moves`` disagree with the board, or
    if it describes an impossible position: a ``place`` player with no
    legal cell, a ``skip`` player who could still place, or an ``end``
    where either color could still place.
    """
    try:
        jsonschema.validate(data, _snapshot_schema())
    except jsonschema.ValidationError as e:
        raise SnapshotError(f"Schema validation: {e.message}") from e

    board = board_from_dict(data["board"])
    _check_counts(data, board)
    kind = data["state"]
    if kind == "end":
        for color in Color:
            if test_board(board, color).has_legal_move():
                raise SnapshotError(f"{color} can still move; snapshot cannot be an end state")
        return End(board=board)

    player = Color(data["player"])
    grid = test_board(board, player)
    if kind == "skip":
        if grid.has_legal_move():
            raise SnapshotError(f"{player} has a legal move; snapshot cannot be a skip state")
        return Skip(player=player, board=board)

    if not grid.has_legal_move():
        raise SnapshotError(f"{player} has no legal move; snapshot cannot be a place state")
    _check_legal_moves(data, grid)
    return Place(
        player=player,
        board=board,
        legality=grid,
        retry_reason=_reason_from_dict(data.get("retry_reason")),
    )
