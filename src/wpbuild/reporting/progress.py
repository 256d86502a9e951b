"""
Progress bar rendering.
"""

import math
from typing import Optional

from rich.text import Text

BAR_WIDTH = 20

# Colors of the filled cells, by how many cells are filled.
_COLOR_STEPS = [
    (15, ["red", "red", "yellow", "yellow", "green"]),
    (10, ["red", "red", "yellow", "yellow"]),
    (5, ["red", "red", "yellow"]),
    (0, ["red"]),
]


def _filled_colors(filled: int):
    for threshold, colors in _COLOR_STEPS:
        if filled >= threshold:
            return colors
    return ["red"]


def get_progress_bar(done: Optional[float]) -> Text:
    """
    Render ``[=====---------------] 25%``.

    Args:
        done: Percentage; NaN, infinities and None render as 0

    Returns:
        A styled rich Text. The filled part shades from red through
        yellow to green as the bar fills up.
    """
    if done is None or not math.isfinite(done):
        done = 0
    filled = max(0, min(BAR_WIDTH, math.floor(done / 100 * BAR_WIDTH)))

    # Spread the colour stops evenly across the filled cells.
    colors = _filled_colors(filled)
    bar = Text("[")
    for index in range(filled):
        bar.append("=", style=colors[index * len(colors) // filled])
    bar.append("-" * (BAR_WIDTH - filled), style="bright_black")
    bar.append("] ")
    bar.append(f"{done:g}%", style="yellow")
    return bar
