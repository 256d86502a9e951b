"""
Terminal rendering for build progress and results.
"""

from .banners import (
    end_build_info,
    intro_panel,
    logo_small,
    pretty_print_error,
    print_intro,
    print_outcome,
    progress_line,
)
from .progress import BAR_WIDTH, get_progress_bar

__all__ = [
    "BAR_WIDTH",
    "end_build_info",
    "get_progress_bar",
    "intro_panel",
    "logo_small",
    "pretty_print_error",
    "print_intro",
    "print_outcome",
    "progress_line",
]
