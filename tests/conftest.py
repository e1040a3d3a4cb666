"""Pytest configuration and fixtures."""

import pytest

from board import BoardState
from drag import DragController


@pytest.fixture
def board() -> BoardState:
    """The three-column demo board (todo, doing, done) with cards 1-12."""
    return BoardState.default()


@pytest.fixture
def controller(board: BoardState) -> DragController:
    return DragController(board)
