"""
System interaction utilities: project root resolution and package manager
detection.
"""

from .environment import PackageManagerDetector, find_up, resolve_cwd

__all__ = [
    "PackageManagerDetector",
    "find_up",
    "resolve_cwd",
]
