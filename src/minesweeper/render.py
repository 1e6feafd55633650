"""
Text rendering of the visible map.
"""
from typing import Dict, List, Sequence

from .board import MineSweeper
from .cell import BlockStatus


# ============================================================================
# Symbol Sets
# ============================================================================

ASCII: Dict[int, str] = {
    BlockStatus.UNKNOWN: ".",
    BlockStatus.MARKED: "F",
    BlockStatus.QUESTION: "?",
    BlockStatus.WRONG: "X",
    BlockStatus.MINE: "*",
    BlockStatus.DEAD: "@",
    0: " ",
    **{count: str(count) for count in range(1, 9)},
}

EMOJI: Dict[int, str] = {
    BlockStatus.UNKNOWN: "⬛",
    BlockStatus.MARKED: "⛳",
    BlockStatus.QUESTION: "❓",
    BlockStatus.WRONG: "❌",
    BlockStatus.MINE: "\U0001f4a3",
    BlockStatus.DEAD: "\U0001f4a5",
    0: "⬜",
    **{count: f"{count}️⃣" for count in range(1, 9)},
}


def _axis_label(index: int, symbols: Dict[int, str]) -> str:
    """Label a row or column, matching the width of the symbol set."""
    if symbols is EMOJI and index < 10:
        return f"{index}️⃣"
    return str(index % 10)


# ============================================================================
# Rendering
# ============================================================================

def render_map(
    grid: Sequence[Sequence[int]],
    symbols: Dict[int, str] = ASCII,
    with_axes: bool = True,
) -> str:
    """
    Render a visible map as text.

    Args:
        grid: Map indexed [y][x], as returned by MineSweeper.get_map().
        symbols: Symbol set mapping block values to text.
        with_axes: Prefix a column header and a label on each row.

    Returns:
        Multi-line string, one line per row.
    """
    separator = "" if symbols is EMOJI else " "
    lines: List[str] = []

    if with_axes and grid:
        corner = "#️⃣" if symbols is EMOJI else " "
        header = [corner] + [
            _axis_label(x, symbols) for x in range(len(grid[0]))
        ]
        lines.append(separator.join(header))

    for y, row in enumerate(grid):
        cells = [symbols[value] for value in row]
        if with_axes:
            cells.insert(0, _axis_label(y, symbols))
        lines.append(separator.join(cells))

    return "\n".join(lines)


def render_game(game: MineSweeper, symbols: Dict[int, str] = ASCII) -> str:
    """Render the map of a game followed by a status line."""
    status_line = (
        f"{game.get_status().name} | "
        f"mines left: {game.get_rest_mine_quantity()} | "
        f"time: {game.get_used_time() / 1000:.1f}s"
    )
    return render_map(game.get_map(), symbols) + "\n" + status_line
