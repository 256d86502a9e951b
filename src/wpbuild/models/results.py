"""
Build result data models.

A build ends in exactly one BuildOutcome. Success, warnings and compilation
errors travel through the same value so callers handle all three the same
way; ``raise_for_status`` turns an error outcome back into an exception for
callers that prefer one.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Tuple

from ..validation import CompilationError


class BuildStatus(Enum):
    """Terminal states of a production build."""
    SUCCESS = "success"
    WARN = "warn"
    ERROR = "error"


@dataclass
class CompilationMessages:
    """Formatted errors and warnings of one compilation, in reported order."""

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class BuildOutcome:
    """
    The classified result of one build.

    ``log`` holds the asset summary for SUCCESS and the joined warnings for
    WARN; ``errors`` holds the compilation errors for ERROR.
    """

    status: BuildStatus
    log: str = ""
    errors: Tuple[str, ...] = ()

    @classmethod
    def success(cls, log: str) -> "BuildOutcome":
        return cls(status=BuildStatus.SUCCESS, log=log)

    @classmethod
    def warn(cls, log: str) -> "BuildOutcome":
        return cls(status=BuildStatus.WARN, log=log)

    @classmethod
    def failed(cls, errors: Iterable[str]) -> "BuildOutcome":
        errors = tuple(errors)
        return cls(status=BuildStatus.ERROR, log="\n".join(errors), errors=errors)

    @property
    def ok(self) -> bool:
        """True when the build produced usable output."""
        return self.status is not BuildStatus.ERROR

    def raise_for_status(self) -> "BuildOutcome":
        """Raise CompilationError for an ERROR outcome, otherwise return self."""
        if self.status is BuildStatus.ERROR:
            raise CompilationError(self.errors)
        return self
