"""
Block encoding for the Minesweeper game.

Every block on the visible map is a single integer: revealed blocks hold
their adjacent mine count (0-8), everything else holds a negative
BlockStatus code. This module also holds the mark transition table used
when a player flags or questions a block.
"""
from enum import Enum, IntEnum, auto
from typing import Dict, Tuple


# ============================================================================
# Constants
# ============================================================================

MINE_FLAG = -1
"""Value stored in the hidden mine-count grid for a block holding a mine."""


class BlockStatus(IntEnum):
    """Negative codes of a block on the visible map."""

    UNKNOWN = -1
    MARKED = -2
    QUESTION = -3
    WRONG = -4
    MINE = -5
    DEAD = -6


class GameStatus(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


class MarkStyle(Enum):
    """Marks a player may put on an unrevealed block."""

    UNMARKED = auto()
    MINE = auto()
    QUESTION = auto()


# ============================================================================
# Mark Transitions
# ============================================================================

# (current block, requested style) -> (new block, delta applied to both the
# unmarked mine counter and the unknown block counter)
MARK_TRANSITIONS: Dict[Tuple[BlockStatus, MarkStyle], Tuple[BlockStatus, int]] = {
    (BlockStatus.UNKNOWN, MarkStyle.UNMARKED): (BlockStatus.UNKNOWN, 0),
    (BlockStatus.UNKNOWN, MarkStyle.MINE): (BlockStatus.MARKED, -1),
    (BlockStatus.UNKNOWN, MarkStyle.QUESTION): (BlockStatus.QUESTION, 0),
    (BlockStatus.QUESTION, MarkStyle.UNMARKED): (BlockStatus.UNKNOWN, 0),
    (BlockStatus.QUESTION, MarkStyle.MINE): (BlockStatus.MARKED, -1),
    (BlockStatus.QUESTION, MarkStyle.QUESTION): (BlockStatus.QUESTION, 0),
    (BlockStatus.MARKED, MarkStyle.UNMARKED): (BlockStatus.UNKNOWN, 1),
    (BlockStatus.MARKED, MarkStyle.MINE): (BlockStatus.MARKED, 0),
    (BlockStatus.MARKED, MarkStyle.QUESTION): (BlockStatus.QUESTION, 1),
}


def is_markable(value: int) -> bool:
    """Check if a visible block still accepts marks."""
    return value in (
        BlockStatus.UNKNOWN,
        BlockStatus.MARKED,
        BlockStatus.QUESTION,
    )


def is_revealed_count(value: int) -> bool:
    """Check if a visible block shows an adjacent mine count."""
    return 0 <= value <= 8
