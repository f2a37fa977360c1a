"""Shared test fixtures for reversicore."""

import pytest

from reversicore.board import Board, Color

B = Color.BLACK
W = Color.WHITE


@pytest.fixture
def opening():
    return Board.new()


@pytest.fixture
def skip_board():
    """Black to move at (2,0); afterwards White is stuck but Black can still capture (7,6)."""
    return Board.from_pieces({
        (0, 0): B,
        (1, 0): W,
        (7, 7): B,
        (7, 6): W,
    })
