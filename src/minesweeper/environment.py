"""
Gymnasium environment wrapper for Minesweeper.

Provides a standard RL interface for training agents.
"""
import random
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import GameOptions, MineSweeper
from .cell import BlockStatus, GameStatus, MarkStyle
from .render import ASCII, render_game


class ActionType(IntEnum):
    """Kinds of action, selected by action // (width * height)."""

    SWEEP = 0
    FLAG = 1
    EXPLORE = 2


DEFAULT_OPTIONS = GameOptions(height=9, width=9, mine_quantity=10)


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MineSweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D int8 array using the get_map() encoding:
        - -1 = unknown block
        - -2 = marked as mine
        - -3 = questioned
        - -4..-6 = end-of-game markers
        - 0-8 = revealed block with adjacent mine count

    Actions:
        Discrete action space of size 3 * width * height.
        action // cells picks the ActionType, action % cells is the
        block index y * width + x.

    Rewards:
        - +1 for a sweep or explore that reveals safe blocks
        - +10 for winning the game
        - -10 for hitting a mine
        - 0 for toggling a flag
        - -0.1 for an action that changes nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        options: Optional[GameOptions] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            options: Game configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.options = options or DEFAULT_OPTIONS
        self.game = MineSweeper(self.options)
        self.render_mode = render_mode

        self._cells = self.options.capacity
        self.observation_space = spaces.Box(
            low=int(BlockStatus.DEAD),
            high=8,
            shape=(self.options.height, self.options.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(len(ActionType) * self._cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Makes the mine layout reproducible when given.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng = random.Random(seed)
        self.game.restart()
        self._steps = 0

        return self.game.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Encoded action, see class docstring.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        action_type, x, y = self._decode_action(action)
        self._steps += 1

        reward = self._apply_action(action_type, x, y)

        observation = self.game.get_observation()
        terminated = not self.game.is_playing
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _decode_action(self, action: int) -> Tuple[ActionType, int, int]:
        """Convert flat action index to (type, x, y)."""
        action_type = ActionType(int(action) // self._cells)
        index = int(action) % self._cells
        return action_type, index % self.options.width, index // self.options.width

    def _apply_action(self, action_type: ActionType, x: int, y: int) -> float:
        """
        Apply an action to the game and compute its reward.

        Args:
            action_type: Kind of action.
            x: Column index.
            y: Row index.

        Returns:
            Reward value.
        """
        if action_type == ActionType.FLAG:
            block = self.game.get_block(x, y)
            style = (
                MarkStyle.UNMARKED
                if block == BlockStatus.MARKED
                else MarkStyle.MINE
            )
            if not self.game.mark(x, y, style):
                return -0.1
            return 10.0 if self.game.is_won else 0.0

        before = len(self.game.get_valid_actions())
        if action_type == ActionType.SWEEP:
            status = self.game.sweep(x, y)
        else:
            status = self.game.explore(x, y)

        if status == GameStatus.WON:
            return 10.0
        if status == GameStatus.LOST:
            return -10.0
        if len(self.game.get_valid_actions()) < before:
            return 1.0
        return -0.1

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "status": self.game.get_status().name,
            "rest_mines": self.game.get_rest_mine_quantity(),
            "hidden": self.game.get_unknown_quantity(),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_game(self.game, ASCII)
        if self.render_mode == "human":
            print(render_game(self.game, ASCII))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that can change the board.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if not self.game.is_playing:
            return mask

        observation = self.game.get_observation().flatten()
        unknown = observation == int(BlockStatus.UNKNOWN)
        by_type = {
            ActionType.SWEEP: unknown,
            ActionType.FLAG: unknown | (observation == int(BlockStatus.MARKED)),
            ActionType.EXPLORE: observation > 0,
        }
        for action_type, valid in by_type.items():
            start = int(action_type) * self._cells
            mask[start:start + self._cells] = valid
        return mask
