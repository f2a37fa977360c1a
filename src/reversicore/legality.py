"""Move legality — the sandwich rule over eight directions.

For an empty cell, each direction is walked outward counting consecutive
opponent disks. The count only stands if the walk closes on a disk of
the mover's color; running off the board or onto an empty cell scores 0.
A cell is legal when at least one direction scores above zero.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from reversicore.board import (
    DIRECTIONS,
    SIZE,
    Board,
    Color,
    Coord,
    check_coord,
    in_bounds,
)

__all__ = [
    "LegalMove",
    "Occupied",
    "Ineffective",
    "IllegalMove",
    "LegalityGrid",
    "test_cell",
    "test_board",
]


@dataclass(frozen=True)
class LegalMove:
    """A legal placement and the number of disks it flips per direction.

    ``flips`` is indexed in the same order as ``DIRECTIONS``.
    """

    color: Color
    position: Coord
    flips: tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.flips) != len(DIRECTIONS):
            raise ValueError(
                f"Expected {len(DIRECTIONS)} flip counts, got {len(self.flips)}"
            )
        if any(n < 0 for n in self.flips):
            raise ValueError(f"Flip counts must be non-negative: {self.flips!r}")
        if sum(self.flips) == 0:
            raise ValueError("A legal move must flip at least one disk")
        check_coord(self.position)

    @property
    def total_flips(self) -> int:
        return sum(self.flips)

    def captured(self) -> list[Coord]:
        """Return the coordinates this move recolors, direction by direction."""
        col, row = self.position
        cells: list[Coord] = []
        for direction, n in zip(DIRECTIONS, self.flips):
            for step in range(1, n + 1):
                cells.append((col + direction.dcol * step, row + direction.drow * step))
        return cells


@dataclass(frozen=True)
class Occupied:
    """The cell already holds a disk of ``color``."""

    color: Color

    def __str__(self) -> str:
        return f"Occupied by {self.color}"


@dataclass(frozen=True)
class Ineffective:
    """The cell is empty but placing there flips nothing."""

    def __str__(self) -> str:
        return "Ineffective"


IllegalMove = Occupied | Ineffective


def _walk(board: Board, color: Color, col: int, row: int, dcol: int, drow: int) -> int:
    """Count opponent disks sandwiched along one ray, or 0 if the ray stays open."""
    n = 0
    for _ in range(SIZE - 1):
        col += dcol
        row += drow
        if not in_bounds(col, row):
            return 0
        found = board.cells[col][row]
        if found is None:
            return 0
        if found is color:
            return n
        n += 1
    return 0


def test_cell(board: Board, color: Color, position: Coord) -> LegalMove | IllegalMove:
    """Test whether *color* may place a disk on *position*.

    Returns a ``LegalMove`` carrying per-direction flip counts, or the
    ``IllegalMove`` reason. Never raises for game-rule failures.
    """
    col, row = check_coord(position)
    occupant = board.cells[col][row]
    if occupant is not None:
        return Occupied(occupant)

    flips = tuple(_walk(board, color, col, row, d.dcol, d.drow) for d in DIRECTIONS)
    if sum(flips) == 0:
        return Ineffective()
    return LegalMove(color=color, position=(col, row), flips=flips)


class LegalityGrid:
    """Per-cell legality for one color against one board.

    Column-major like ``Board``. Read-only once built.
    """

    __slots__ = ("_board", "_color", "_cells")

    def __init__(
        self,
        board: Board,
        color: Color,
        cells: tuple[tuple[LegalMove | IllegalMove, ...], ...],
    ) -> None:
        if len(cells) != SIZE or any(len(col) != SIZE for col in cells):
            raise ValueError(f"Legality grid must be exactly {SIZE}x{SIZE}")
        self._board = board
        self._color = color
        self._cells = cells

    @property
    def board(self) -> Board:
        return self._board

    @property
    def color(self) -> Color:
        return self._color

    @property
    def cells(self) -> tuple[tuple[LegalMove | IllegalMove, ...], ...]:
        return self._cells

    def __getitem__(self, position: Coord) -> LegalMove | IllegalMove:
        col, row = check_coord(position)
        return self._cells[col][row]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LegalityGrid):
            return NotImplemented
        return (
            self._color is other._color
            and self._board == other._board
            and self._cells == other._cells
        )

    def __hash__(self) -> int:
        return hash((self._board, self._color))

    def __repr__(self) -> str:
        return (
            f"LegalityGrid(color={self._color!s}, "
            f"legal={[m.position for m in self.legal_moves()]!r})"
        )

    def legal_moves(self) -> Iterator[LegalMove]:
        """Yield every legal move, column by column."""
        for col in self._cells:
            for result in col:
                if isinstance(result, LegalMove):
                    yield result

    def has_legal_move(self) -> bool:
        return any(True for _ in self.legal_moves())

    def is_for(self, board: Board, color: Color) -> bool:
        """True if this grid was computed for exactly *board* and *color*."""
        return self._color is color and self._board == board


def test_board(board: Board, color: Color) -> LegalityGrid:
    """Test every cell of *board* for *color*. Always computed fresh."""
    cells = tuple(
        tuple(test_cell(board, color, (col, row)) for row in range(SIZE))
        for col in range(SIZE)
    )
    return LegalityGrid(board, color, cells)

