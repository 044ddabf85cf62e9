"""Process-wide reporter for library code.

Modules import the functions below instead of passing a :class:`Reporter`
around. The command-line layer calls :func:`init_reporter` once after parsing
its arguments; until then a default reporter (verbosity 0, program unknown)
is used.
"""

from typing import NoReturn, TextIO

from ._version import __version__
from .levels import DBG_DEFAULT
from .models import ReporterConfig
from .render import capture_system_error
from .reporter import Reporter

_reporter: Reporter | None = None


def init_reporter(
    verbosity: int = DBG_DEFAULT,
    program: str | None = None,
    version: str = __version__,
    stream: TextIO | None = None,
) -> Reporter:
    """Install and return the process-wide reporter."""
    global _reporter
    _reporter = Reporter(
        ReporterConfig(verbosity=verbosity, program=program, version=version),
        stream=stream,
    )
    return _reporter


def get_reporter() -> Reporter:
    """Return the process-wide reporter, creating a default one if needed."""
    global _reporter
    if _reporter is None:
        _reporter = Reporter()
    return _reporter


def message(template: str, *args) -> None:
    get_reporter().message(template, *args)


def debug(level: int, template: str, *args) -> None:
    get_reporter().debug(level, template, *args)


def warn(origin: str, template: str, *args) -> None:
    get_reporter().warn(origin, template, *args)


def fatal(exitcode: int, origin: str, template: str, *args) -> NoReturn:
    get_reporter().fatal(exitcode, origin, template, *args)


def usage_fatal(exitcode: int, origin: str, template: str, *args) -> NoReturn:
    get_reporter().usage_fatal(exitcode, origin, template, *args)


# The errno variants snapshot the error here, on entry to the wrapper.

def warn_syserr(origin: str, template: str, *args, error: OSError | int | None = None) -> None:
    code = capture_system_error(error).code
    get_reporter().warn_syserr(origin, template, *args, error=code)


def fatal_syserr(exitcode: int, origin: str, template: str, *args,
                 error: OSError | int | None = None) -> NoReturn:
    code = capture_system_error(error).code
    get_reporter().fatal_syserr(exitcode, origin, template, *args, error=code)


def usage_fatal_syserr(exitcode: int, origin: str, template: str, *args,
                       error: OSError | int | None = None) -> NoReturn:
    code = capture_system_error(error).code
    get_reporter().usage_fatal_syserr(exitcode, origin, template, *args, error=code)
