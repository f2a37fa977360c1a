"""Move application — resolve a LegalMove into a new Board."""

from __future__ import annotations

from reversicore.board import DIRECTIONS, Board, in_bounds
from reversicore.legality import LegalMove

__all__ = ["apply_move"]


def apply_move(board: Board, move: LegalMove) -> Board:
    """Apply *move* to *board*, returning a new board.

    Flips exactly ``move.flips[i]`` disks along each direction, then
    places the mover's disk. The input board is not modified.

    Raises ValueError if *move* does not fit *board* (target occupied or
    a flip path not holding opponent disks), which means the move was
    computed against a different board.
    """
    col, row = move.position
    cells = board.to_lists()
    if cells[col][row] is not None:
        raise ValueError(f"Cannot place on occupied cell {move.position!r}")

    opponent = move.color.flip()
    for direction, n in zip(DIRECTIONS, move.flips):
        c, r = col, row
        for _ in range(n):
            c += direction.dcol
            r += direction.drow
            if not in_bounds(c, r):
                raise ValueError(f"Flip path {direction.name} from {move.position!r} leaves the board")
            if cells[c][r] is not opponent:
                raise ValueError(
                    f"Stale move: expected {opponent} at {(c, r)!r}, found {cells[c][r]}"
                )
            cells[c][r] = move.color

    # Placed last so the walks above never see the mover's own disk.
    cells[col][row] = move.color
    return Board.from_lists(cells)
