"""Board — immutable 8×8 Reversi constellation.

Cells are stored column-major: ``cells[col][row]``. Each cell holds a
``Color`` or ``None`` for empty. Two boards compare equal iff their
cells match, regardless of how they were reached.

Coordinates are ``(col, row)`` pairs, zero-indexed. Any access outside
``[0, 7] × [0, 7]`` raises ``BoardIndexError``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

__all__ = [
    "SIZE",
    "Color",
    "Coord",
    "Direction",
    "DIRECTIONS",
    "Board",
    "BoardIndexError",
    "in_bounds",
    "check_coord",
]

SIZE = 8

Coord = tuple[int, int]


class Color(Enum):
    """Owner of a disk."""

    BLACK = "black"
    WHITE = "white"

    def flip(self) -> Color:
        """Flipping a disk yields the opposite color."""
        return Color.WHITE if self is Color.BLACK else Color.BLACK

    def __str__(self) -> str:
        return self.value.capitalize()


class Direction(NamedTuple):
    dcol: int
    drow: int
    name: str


# Fixed order; per-direction flip counts are indexed by position here.
DIRECTIONS: tuple[Direction, ...] = (
    Direction(0, 1, "N"),
    Direction(1, 1, "NE"),
    Direction(1, 0, "E"),
    Direction(1, -1, "SE"),
    Direction(0, -1, "S"),
    Direction(-1, -1, "SW"),
    Direction(-1, 0, "W"),
    Direction(-1, 1, "NW"),
)


class BoardIndexError(IndexError):
    """Raised when a coordinate falls outside the 8×8 board."""

    def __init__(self, position: tuple) -> None:
        self.position = position
        super().__init__(f"Coordinate {position!r} is outside the {SIZE}x{SIZE} board")


def in_bounds(col: int, row: int) -> bool:
    return 0 <= col < SIZE and 0 <= row < SIZE


def check_coord(position) -> Coord:
    """Return *position* as a ``(col, row)`` tuple or raise ``BoardIndexError``."""
    try:
        col, row = position
    except (TypeError, ValueError):
        raise BoardIndexError(position) from None
    if not isinstance(col, int) or not isinstance(row, int):
        raise BoardIndexError(position)
    if isinstance(col, bool) or isinstance(row, bool):
        raise BoardIndexError(position)
    if not in_bounds(col, row):
        raise BoardIndexError(position)
    return col, row


@dataclass(frozen=True)
class Board:
    """An 8×8 grid of cells holding disks. Immutable."""

    cells: tuple[tuple[Color | None, ...], ...]

    def __post_init__(self) -> None:
        if len(self.cells) != SIZE or any(len(col) != SIZE for col in self.cells):
            raise ValueError(f"Board must be exactly {SIZE}x{SIZE}")
        for col in self.cells:
            for cell in col:
                if cell is not None and not isinstance(cell, Color):
                    raise ValueError(f"Invalid cell value: {cell!r}")

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls(tuple((None,) * SIZE for _ in range(SIZE)))

    @classmethod
    def new(cls) -> Board:
        """Return the starting constellation."""
        return cls.from_pieces({
            (3, 3): Color.BLACK,
            (3, 4): Color.WHITE,
            (4, 3): Color.WHITE,
            (4, 4): Color.BLACK,
        })

    @classmethod
    def from_pieces(cls, pieces: Mapping[Coord, Color]) -> Board:
        """Build a board holding exactly *pieces*; every other cell is empty."""
        cells: list[list[Color | None]] = [[None] * SIZE for _ in range(SIZE)]
        for position, color in pieces.items():
            col, row = check_coord(position)
            cells[col][row] = color
        return cls.from_lists(cells)

    @classmethod
    def from_lists(cls, cells: list[list[Color | None]]) -> Board:
        """Freeze a column-major list-of-lists into a board."""
        return cls(tuple(tuple(col) for col in cells))

    def to_lists(self) -> list[list[Color | None]]:
        """Return a mutable column-major copy of the cells."""
        return [list(col) for col in self.cells]

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def __getitem__(self, position: Coord) -> Color | None:
        col, row = check_coord(position)
        return self.cells[col][row]

    def pieces(self) -> Iterator[tuple[Coord, Color]]:
        """Yield ``((col, row), color)`` for every occupied cell."""
        for col in range(SIZE):
            for row in range(SIZE):
                cell = self.cells[col][row]
                if cell is not None:
                    yield (col, row), cell

    def count(self, color: Color | None = None) -> int:
        """Count disks of *color*, or all disks when *color* is None."""
        return sum(
            1 for _, cell in self.pieces() if color is None or cell is color
        )
