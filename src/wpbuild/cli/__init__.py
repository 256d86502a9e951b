"""
Command-line interface for the wpbuild package.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
