"""Text rendering: templates, system error lines and the usage trailer.

Nothing here writes to a stream or raises; every function returns text.
"""

import os
import sys

from .models import MessageRecord, ReporterConfig, SystemErrorContext


def render_template(op: str, template: str, args: tuple) -> str:
    """Apply ``%``-style *args* to *template*.

    With no arguments the template is returned verbatim, so a literal ``%``
    needs no escaping. If formatting fails for any reason (bad conversion,
    wrong argument count, an argument whose ``__str__`` raises) the raw
    template is kept and a bracketed fragment names the failure.
    """
    if not args:
        return template
    try:
        return template % args
    except Exception as e:  # arbitrary __str__/__format__ code runs here
        return f"{template} [{op} format error: {type(e).__name__}: {e}]"


def render_line(record: MessageRecord) -> str:
    """Return the full line for *record*, prefix included, without newline."""
    return record.prefix + render_template(record.op, record.template, record.args)


def describe_errno(code: int) -> str:
    """Human-readable description of an OS error code."""
    try:
        return os.strerror(code)
    except (ValueError, OverflowError):
        return f"Unknown error {code}"


def capture_system_error(error: OSError | int | None = None) -> SystemErrorContext:
    """Snapshot the system error context.

    An explicit *error* (an ``OSError`` or a raw errno) wins. Otherwise the
    ``OSError`` currently being handled, if any, is used. With neither the
    code is 0.
    """
    if error is None:
        error = sys.exc_info()[1]
    if isinstance(error, OSError):
        code = error.errno or 0
    elif isinstance(error, int) and not isinstance(error, bool):
        code = error
    else:
        code = 0
    return SystemErrorContext(code=code, description=describe_errno(code))


def usage_trailer(config: ReporterConfig) -> list[str]:
    """The two lines appended to every usage error."""
    if config.program:
        hint = f"For command line usage help, try: {config.program} -h"
    else:
        hint = "For command line usage help, try using -h"
    return [hint, f"version: {config.version}"]


def as_text(value: object, fallback: str) -> str:
    """Best-effort ``str`` for a value that should have been one.

    ``bytes`` are decoded as UTF-8 with replacement characters; anything
    whose ``__str__`` fails becomes *fallback*.
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    try:
        return str(value)
    except Exception:
        return fallback
