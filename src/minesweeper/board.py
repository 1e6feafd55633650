"""
Board module for Minesweeper game.

Implements the game engine: map configuration, mine placement, player
actions (mark, sweep, explore) and win/lose resolution.
"""
import logging
import numbers
import random
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .cell import (
    MARK_TRANSITIONS,
    MINE_FLAG,
    BlockStatus,
    GameStatus,
    MarkStyle,
    is_markable,
)
from .errors import InvalidParameters, OutOfBounds, TooManyMines

logger = logging.getLogger(__name__)


def _is_integer(value: object) -> bool:
    """Check for an integral number, rejecting booleans."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class GameOptions:
    """
    Configuration for a Minesweeper game.

    Attributes:
        height: Number of rows.
        width: Number of columns.
        mine_quantity: Total mines to place.
        show_mines_only_on_failed: On a loss, reveal only the mines and
            leave the other unexplored blocks hidden.
    """

    height: int
    width: int
    mine_quantity: int
    show_mines_only_on_failed: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if not (
            _is_integer(self.width)
            and _is_integer(self.height)
            and _is_integer(self.mine_quantity)
        ):
            raise InvalidParameters()
        if self.height < 2 or self.mine_quantity < 2:
            raise InvalidParameters()
        if self.mine_quantity >= self.capacity:
            raise TooManyMines(self.mine_quantity, self.capacity)

    @property
    def capacity(self) -> int:
        """Total number of blocks on the map."""
        return self.width * self.height


# ============================================================================
# Game Context
# ============================================================================

@dataclass
class GameContext:
    """
    Mutable state of a single game, replaced as a whole on restart.

    Attributes:
        blocks: Visible map, indexed [y][x].
        mines: Hidden map of adjacent mine counts, MINE_FLAG for mines.
        unmarked_mines: Mines minus blocks marked as mine.
        unknowns: Blocks that are neither revealed nor marked as mine.
        started_at: Wall-clock time the game started, in seconds.
        status: Current game status.
    """

    blocks: List[List[int]]
    mines: List[List[int]]
    unmarked_mines: int
    unknowns: int
    started_at: float = field(default_factory=time.time)
    status: GameStatus = GameStatus.PLAYING

    @classmethod
    def fresh(cls, options: GameOptions) -> "GameContext":
        """Create an all-unknown context without mines."""
        return cls(
            blocks=[
                [int(BlockStatus.UNKNOWN)] * options.width
                for _ in range(options.height)
            ],
            mines=[[0] * options.width for _ in range(options.height)],
            unmarked_mines=options.mine_quantity,
            unknowns=options.capacity,
        )


# ============================================================================
# Game Engine
# ============================================================================

@dataclass
class MineSweeper:
    """
    Minesweeper game engine.

    Owns the map of a single game and applies player actions to it.
    Actions on invalid coordinates or on a finished game are ignored and
    report their rejection through the return value.
    """

    options: GameOptions
    rng: random.Random = field(default_factory=random.Random, repr=False)
    _context: GameContext = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Start the first game right away."""
        self.restart()

    # ========================================================================
    # Map Generation (Low-level)
    # ========================================================================

    def restart(self) -> None:
        """Start a new game with a fresh random mine layout."""
        context = GameContext.fresh(self.options)
        remaining = self.options.mine_quantity
        while remaining:
            y = self.rng.randrange(self.options.height)
            x = self.rng.randrange(self.options.width)
            if self._lay_mine(context, x, y):
                remaining -= 1
        self._context = context
        logger.debug(
            "New game %dx%d with %d mines",
            self.options.width,
            self.options.height,
            self.options.mine_quantity,
        )

    def _lay_mine(self, context: GameContext, x: int, y: int) -> bool:
        """
        Put a mine on a block and update the counts around it.

        Returns:
            False if the block already holds a mine.
        """
        if context.mines[y][x] == MINE_FLAG:
            return False
        context.mines[y][x] = MINE_FLAG
        for nx, ny in self._get_neighbors(x, y):
            if context.mines[ny][nx] != MINE_FLAG:
                context.mines[ny][nx] += 1
        return True

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(self, x: int, y: int) -> List[Tuple[int, int]]:
        """
        Get valid neighboring block positions.

        Args:
            x: Column of the center block.
            y: Row of the center block.

        Returns:
            List of (x, y) tuples for in-bounds neighbors.
        """
        neighbors = []
        for delta_y in (-1, 0, 1):
            for delta_x in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self._is_valid_position(new_x, new_y):
                    neighbors.append((new_x, new_y))
        return neighbors

    def _is_valid_position(self, x: object, y: object) -> bool:
        """Check if position is integral and within map bounds."""
        return (
            _is_integer(x)
            and _is_integer(y)
            and 0 <= x < self.options.width
            and 0 <= y < self.options.height
        )

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def mark(self, x: int, y: int, style: MarkStyle) -> bool:
        """
        Put a mark on an unrevealed block.

        Requesting the mark a block already carries is accepted and changes
        nothing.

        Args:
            x: Column index.
            y: Row index.
            style: Mark to apply.

        Returns:
            True if the mark was accepted, False otherwise.
        """
        context = self._context
        if context.status != GameStatus.PLAYING:
            return False
        if not self._is_valid_position(x, y):
            return False

        current = context.blocks[y][x]
        if not is_markable(current):
            return False
        transition = MARK_TRANSITIONS.get((BlockStatus(current), style))
        if transition is None:
            return False

        new_block, delta = transition
        context.blocks[y][x] = int(new_block)
        context.unmarked_mines += delta
        context.unknowns += delta

        self._check_win()
        return True

    def sweep(self, x: int, y: int) -> GameStatus:
        """
        Reveal a block.

        A mine ends the game as lost. A block without adjacent mines also
        reveals its surroundings, spreading through connected empty blocks.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            Game status after the action.
        """
        context = self._context
        if context.status != GameStatus.PLAYING:
            return context.status
        if not self._is_valid_position(x, y):
            return context.status
        if context.blocks[y][x] != BlockStatus.UNKNOWN:
            return context.status

        if context.mines[y][x] == MINE_FLAG:
            self._die(x, y)
        else:
            self._reveal_from(x, y)
            self._check_win()

        return context.status

    def _reveal_from(self, x: int, y: int) -> int:
        """
        Reveal a safe block and flood through empty neighbors.

        Only UNKNOWN blocks are revealed; questioned blocks stop the flood.

        Returns:
            Number of blocks revealed.
        """
        context = self._context
        context.blocks[y][x] = context.mines[y][x]
        context.unknowns -= 1
        revealed = 1

        pending = [(x, y)] if context.mines[y][x] == 0 else []
        while pending:
            cx, cy = pending.pop()
            for nx, ny in self._get_neighbors(cx, cy):
                if context.blocks[ny][nx] != BlockStatus.UNKNOWN:
                    continue
                context.blocks[ny][nx] = context.mines[ny][nx]
                context.unknowns -= 1
                revealed += 1
                if context.mines[ny][nx] == 0:
                    pending.append((nx, ny))

        return revealed

    def explore(self, x: int, y: int) -> GameStatus:
        """
        Chord action: sweep all unknown neighbors of a revealed count.

        Happens only when at least as many neighbors are marked as mine as
        the count shows. Stops as soon as one of the sweeps ends the game.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            Game status after the action.
        """
        context = self._context
        if context.status != GameStatus.PLAYING:
            return context.status
        if not self._is_valid_position(x, y):
            return context.status
        count = context.blocks[y][x]
        if count < 0:
            return context.status

        neighbors = self._get_neighbors(x, y)
        if self._count_marked(neighbors) < count:
            return context.status

        for nx, ny in neighbors:
            if context.blocks[ny][nx] == BlockStatus.UNKNOWN:
                self.sweep(nx, ny)
            if context.status != GameStatus.PLAYING:
                break

        return context.status

    def _count_marked(self, positions: List[Tuple[int, int]]) -> int:
        """Count blocks marked as mine among positions."""
        blocks = self._context.blocks
        return sum(
            1 for x, y in positions if blocks[y][x] == BlockStatus.MARKED
        )

    # ========================================================================
    # Game Resolution (Mid-level)
    # ========================================================================

    def _die(self, x: int, y: int) -> None:
        """End the game as lost and expose the map."""
        context = self._context
        context.status = GameStatus.LOST
        context.blocks[y][x] = int(BlockStatus.DEAD)
        show_counts = not self.options.show_mines_only_on_failed

        for row in range(self.options.height):
            for col in range(self.options.width):
                block = context.blocks[row][col]
                is_mine = context.mines[row][col] == MINE_FLAG
                if block == BlockStatus.MARKED:
                    if not is_mine:
                        context.blocks[row][col] = int(BlockStatus.WRONG)
                elif block in (BlockStatus.UNKNOWN, BlockStatus.QUESTION):
                    if is_mine:
                        context.blocks[row][col] = int(BlockStatus.MINE)
                    elif show_counts:
                        context.blocks[row][col] = context.mines[row][col]

        logger.info("Game lost at (%d, %d)", x, y)

    def _check_win(self) -> None:
        """Declare the game won once only mines remain unrevealed."""
        context = self._context
        if context.unknowns != context.unmarked_mines:
            return

        context.status = GameStatus.WON
        context.unmarked_mines = 0
        context.unknowns = 0
        for row in range(self.options.height):
            for col in range(self.options.width):
                if context.mines[row][col] == MINE_FLAG:
                    context.blocks[row][col] = int(BlockStatus.MARKED)

        logger.info("Game won in %d ms", self.get_used_time())

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    def get_width(self) -> int:
        """Get the number of columns."""
        return self.options.width

    def get_height(self) -> int:
        """Get the number of rows."""
        return self.options.height

    def get_mine_quantity(self) -> int:
        """Get the total number of mines."""
        return self.options.mine_quantity

    def get_rest_mine_quantity(self) -> int:
        """Get the number of mines not yet marked (may go negative)."""
        return self._context.unmarked_mines

    def get_unknown_quantity(self) -> int:
        """Get the number of blocks neither revealed nor marked as mine."""
        return self._context.unknowns

    def get_status(self) -> GameStatus:
        """Get current game status."""
        return self._context.status

    def get_used_time(self) -> int:
        """Get milliseconds elapsed since the game started."""
        return int((time.time() - self._context.started_at) * 1000)

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._context.status == GameStatus.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._context.status == GameStatus.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._context.status == GameStatus.LOST

    def get_block(self, x: int, y: int) -> int:
        """
        Get the visible value of a block.

        Raises:
            OutOfBounds: If the coordinates are outside the map.
        """
        if not self._is_valid_position(x, y):
            raise OutOfBounds(x, y)
        return int(self._context.blocks[y][x])

    def get_map(self) -> List[List[int]]:
        """Get a copy of the visible map, indexed [y][x]."""
        return [[int(block) for block in row] for row in self._context.blocks]

    def get_observation(self) -> np.ndarray:
        """
        Get the visible map as a numpy array for ML agents.

        Returns:
            New int8 array of shape (height, width) using the same
            encoding as get_map().
        """
        return np.array(self._context.blocks, dtype=np.int8)

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of blocks that can still be swept.

        Returns:
            List of (x, y) positions that are UNKNOWN.
        """
        actions = []
        for y in range(self.options.height):
            for x in range(self.options.width):
                if self._context.blocks[y][x] == BlockStatus.UNKNOWN:
                    actions.append((x, y))
        return actions


def create_mine_sweeper(
    height: int,
    width: int,
    mine_quantity: int,
    show_mines_only_on_failed: bool = False,
    rng: Optional[random.Random] = None,
) -> MineSweeper:
    """
    Create a game and start it.

    Args:
        height: Number of rows.
        width: Number of columns.
        mine_quantity: Total mines to place.
        show_mines_only_on_failed: Reveal only mines when the game is lost.
        rng: Random source for mine placement (default: unseeded).

    Raises:
        InvalidParameters: If dimensions or mine quantity are invalid.
        TooManyMines: If there is no room left for a safe block.
    """
    options = GameOptions(
        height, width, mine_quantity, show_mines_only_on_failed
    )
    if rng is None:
        return MineSweeper(options)
    return MineSweeper(options, rng)
