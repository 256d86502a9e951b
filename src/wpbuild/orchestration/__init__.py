"""
Build orchestration.

BuildRunner composes, submits and classifies a single production build.
"""

from .build_runner import BuildRunner

__all__ = [
    "BuildRunner",
]
