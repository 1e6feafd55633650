"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import Callable, List, Sequence, Tuple
from unittest.mock import Mock

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import GameOptions, MineSweeper, MINE_FLAG


# ============================================================================
# Helpers
# ============================================================================

def plant(
    height: int,
    width: int,
    mines: Sequence[Tuple[int, int]],
    show_mines_only_on_failed: bool = False,
) -> MineSweeper:
    """
    Create a game whose mines sit exactly at the given (x, y) positions.

    The layout goes through the normal restart path with a random source
    that replays the positions.
    """
    values: List[int] = []
    for x, y in mines:
        values.extend((y, x))
    rng = Mock(spec=random.Random)
    rng.randrange.side_effect = values
    options = GameOptions(height, width, len(mines), show_mines_only_on_failed)
    return MineSweeper(options, rng)


def hidden_counts(game: MineSweeper) -> List[List[int]]:
    """Read the hidden mine-count grid of a game."""
    return [list(row) for row in game._context.mines]


def mine_positions(game: MineSweeper) -> List[Tuple[int, int]]:
    """List (x, y) of every mine in a game."""
    return [
        (x, y)
        for y, row in enumerate(hidden_counts(game))
        for x, value in enumerate(row)
        if value == MINE_FLAG
    ]


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def planted_game() -> Callable[..., MineSweeper]:
    """Factory for games with a fixed mine layout."""
    return plant


@pytest.fixture
def corner_game() -> MineSweeper:
    """
    5x4 map with mines in two opposite corners.

        x: 0 1 2 3 4
    y=0    * 1 0 0 0
    y=1    1 1 0 0 0
    y=2    0 0 0 1 1
    y=3    0 0 0 1 *
    """
    return plant(4, 5, [(0, 0), (4, 3)])


@pytest.fixture
def wall_game() -> MineSweeper:
    """
    5x5 map with a column of mines splitting it in two halves.

        x: 0 1 2 3 4
    y=0    0 2 * 2 0
    y=1    0 3 * 3 0
    y=2    0 3 * 3 0
    y=3    0 3 * 3 0
    y=4    0 2 * 2 0
    """
    return plant(5, 5, [(2, y) for y in range(5)])


@pytest.fixture
def tiny_game() -> MineSweeper:
    """2x2 map with mines on one diagonal."""
    return plant(2, 2, [(0, 0), (1, 1)])


@pytest.fixture
def default_game() -> MineSweeper:
    """Create a random 9x9 game with 10 mines."""
    return MineSweeper(GameOptions(9, 9, 10))


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_options() -> GameOptions:
    """Create a valid game configuration."""
    return GameOptions(9, 9, 10)
