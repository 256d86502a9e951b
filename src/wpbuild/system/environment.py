"""
Working directory and package manager detection.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

YARN_LOCKFILE = "yarn.lock"


def resolve_cwd(context: Optional[Union[str, Path]] = None) -> Path:
    """Resolve the project root from a user-supplied context.

    An absolute context is used as is, a relative one is resolved against
    the process working directory, and no context means the process
    working directory itself.
    """
    cwd = Path(os.getcwd())
    if not context:
        return cwd
    context = Path(context)
    if context.is_absolute():
        return context
    return (cwd / context).resolve()


def find_up(filename: str, start: Union[str, Path]) -> Optional[Path]:
    """Return the first ``filename`` found in ``start`` or one of its parents."""
    directory = Path(start).resolve()
    for candidate_dir in [directory, *directory.parents]:
        candidate = candidate_dir / filename
        if candidate.is_file():
            return candidate
    return None


class PackageManagerDetector:
    """
    Detects whether a project uses yarn or npm.

    The lookup result is cached on the instance, so the owner decides how
    long it lives; nothing is cached process-wide.
    """

    def __init__(self, cwd: Union[str, Path]):
        self.cwd = Path(cwd)
        self._is_yarn: Optional[bool] = None

    def is_yarn(self) -> bool:
        if self._is_yarn is None:
            try:
                lockfile = find_up(YARN_LOCKFILE, self.cwd)
            except OSError as e:
                logger.debug(f"Could not look for {YARN_LOCKFILE} from {self.cwd}: {e}")
                lockfile = None
            self._is_yarn = lockfile is not None
        return self._is_yarn

    def run_command_hint(self, script: str) -> str:
        """Command that runs a package script, e.g. ``yarn build``."""
        if self.is_yarn():
            return f"yarn {script}"
        if script in ("start", "test"):
            return f"npm {script}"
        return f"npm run {script}"
