"""Core data models for diagout."""

from dataclasses import dataclass
from enum import Enum

from ._version import __version__
from .levels import DBG_DEFAULT


@dataclass(frozen=True)
class ReporterConfig:
    """Startup settings read by every reporter call.

    Built once by the command-line layer and never mutated afterwards.
    """

    verbosity: int = DBG_DEFAULT
    program: str | None = None  # None means the program name is unknown
    version: str = __version__

    def __post_init__(self) -> None:
        if not self.version:
            raise ValueError("version must be a non-empty string")


class Severity(Enum):
    INFO = "info"
    DEBUG = "debug"
    WARNING = "warning"
    WARNING_ERRNO = "warning_errno"
    FATAL = "fatal"
    FATAL_ERRNO = "fatal_errno"
    USAGE_FATAL = "usage_fatal"
    USAGE_FATAL_ERRNO = "usage_fatal_errno"

    @property
    def terminates(self) -> bool:
        return self in _TERMINATING

    @property
    def reports_errno(self) -> bool:
        return self in _ERRNO


_TERMINATING = frozenset({
    Severity.FATAL, Severity.FATAL_ERRNO,
    Severity.USAGE_FATAL, Severity.USAGE_FATAL_ERRNO,
})
_ERRNO = frozenset({
    Severity.WARNING_ERRNO, Severity.FATAL_ERRNO, Severity.USAGE_FATAL_ERRNO,
})


@dataclass(frozen=True)
class SystemErrorContext:
    """An OS error code and its description, captured at a point in time."""

    code: int
    description: str

    def __str__(self) -> str:
        return f"errno[{self.code}]: {self.description}"


@dataclass
class MessageRecord:
    """One diagnostic, built and rendered within a single reporter call."""

    severity: Severity
    op: str  # name of the reporter operation, used in self-diagnostics
    template: str
    args: tuple = ()
    origin: str | None = None
    syserr: SystemErrorContext | None = None

    @property
    def prefix(self) -> str:
        if self.severity in (Severity.WARNING, Severity.WARNING_ERRNO):
            return f"Warning: {self.origin}: "
        if self.severity.terminates:
            return f"FATAL: {self.origin}: "
        return ""

    @property
    def errno_line(self) -> str | None:
        """The ``errno[...]`` line that follows this record, if any.

        A fatal error leaves it out when the captured code is 0; the warning
        and usage variants always carry it.
        """
        if not self.severity.reports_errno or self.syserr is None:
            return None
        if self.severity is Severity.FATAL_ERRNO and self.syserr.code == 0:
            return None
        return str(self.syserr)
