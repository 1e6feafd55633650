"""
Minesweeper game module.

Provides the game engine, block encoding, text rendering and a
Gymnasium environment wrapper.
"""
from .cell import BlockStatus, GameStatus, MarkStyle, MINE_FLAG
from .errors import MineSweeperError, InvalidParameters, TooManyMines, OutOfBounds
from .board import GameOptions, GameContext, MineSweeper, create_mine_sweeper
from .render import ASCII, EMOJI, render_map, render_game
from .environment import ActionType, MineSweeperEnv

__all__ = [
    "BlockStatus",
    "GameStatus",
    "MarkStyle",
    "MINE_FLAG",
    "MineSweeperError",
    "InvalidParameters",
    "TooManyMines",
    "OutOfBounds",
    "GameOptions",
    "GameContext",
    "MineSweeper",
    "create_mine_sweeper",
    "ASCII",
    "EMOJI",
    "render_map",
    "render_game",
    "ActionType",
    "MineSweeperEnv",
]
