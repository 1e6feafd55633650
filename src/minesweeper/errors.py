"""
Error types raised by the Minesweeper engine.

Construction errors are raised once when a game is created; the only
runtime error is a direct block query outside the map.
"""


class MineSweeperError(Exception):
    """Base class for all engine errors."""


class InvalidParameters(MineSweeperError, ValueError):
    """Map dimensions or mine quantity are not acceptable."""

    def __init__(self, message: str = "INVALID_GAME_MAP") -> None:
        super().__init__(message)


class TooManyMines(MineSweeperError, ValueError):
    """Mine quantity does not leave at least one safe block."""

    def __init__(self, mine_quantity: int, capacity: int) -> None:
        super().__init__(
            f"TOO_MANY_MINES: {mine_quantity} mines for {capacity} blocks"
        )
        self.mine_quantity = mine_quantity
        self.capacity = capacity


class OutOfBounds(MineSweeperError, IndexError):
    """Coordinates fall outside the map or are not integers."""

    def __init__(self, x: object, y: object) -> None:
        super().__init__(f"OUT_TO_BOUNDARY: ({x!r}, {y!r})")
        self.x = x
        self.y = y
