"""Reporter: leveled diagnostic output and fatal-error termination.

Every operation renders one line (plus, for some, a system error line or a
usage trailer) to the diagnostic stream and never raises because of caller
input or a failing stream. The fatal family then exits the process.

Output contract::

    Warning: {origin}: {message}
    FATAL: {origin}: {message}
    errno[{code}]: {description}
    For command line usage help, try: {program} -h
    version: {version}
"""

import os
import sys
import threading
from typing import NoReturn, TextIO

from .exit_codes import EXIT_CODE_LIMIT, FORCED_EXIT, is_valid_exit_code
from .models import MessageRecord, ReporterConfig, Severity, SystemErrorContext
from .render import as_text, capture_system_error, render_line, usage_trailer

NO_TEMPLATE = "((no template))"
NO_ORIGIN = "((no origin))"


class Reporter:
    """Writes diagnostics for one program run.

    All output goes to *stream* (default: whatever ``sys.stderr`` is at write
    time). Each public call holds the reporter's lock for its whole duration,
    so the lines of one call are never interleaved with another thread's.

    Usage::

        rep = Reporter(ReporterConfig(verbosity=3, program="mytool"))
        rep.debug(1, "loaded %d entries", 42)
        rep.warn("load_config", "ignoring unknown key %r", key)
        rep.fatal(2, "load_config", "cannot read %s", path)
    """

    def __init__(self, config: ReporterConfig | None = None, stream: TextIO | None = None):
        self.config = config if config is not None else ReporterConfig()
        self._stream = stream
        self._lock = threading.RLock()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    # ------------------------------------------------------------------
    # Non-terminating operations
    # ------------------------------------------------------------------

    def message(self, template: str, *args) -> None:
        """Write the rendered template, with no prefix."""
        with self._lock:
            template = self._check_template("message", template)
            self._emit(MessageRecord(Severity.INFO, "message", template, args))

    def debug(self, level: int, template: str, *args) -> None:
        """Write the rendered template if *level* <= the configured verbosity."""
        with self._lock:
            template = self._check_template("debug", template)
            if not isinstance(level, int):
                self.warn("debug", "called with non-integer level: %r", level)
                return
            if level > self.config.verbosity:
                return
            self._emit(MessageRecord(Severity.DEBUG, "debug", template, args))

    def warn(self, origin: str, template: str, *args) -> None:
        """Write ``Warning: <origin>: <message>``."""
        with self._lock:
            origin, template = self._check_origin("warn", origin, template)
            self._emit(MessageRecord(Severity.WARNING, "warn", template, args, origin=origin))

    def warn_syserr(self, origin: str, template: str, *args,
                    error: OSError | int | None = None) -> None:
        """Like :meth:`warn`, followed by an ``errno[...]`` line.

        The system error is captured before anything else happens, so work
        done while rendering cannot change what gets reported.
        """
        syserr = capture_system_error(error)
        with self._lock:
            origin, template = self._check_origin("warn_syserr", origin, template)
            self._emit(MessageRecord(
                Severity.WARNING_ERRNO, "warn_syserr", template, args,
                origin=origin, syserr=syserr,
            ))

    # ------------------------------------------------------------------
    # Terminating operations
    # ------------------------------------------------------------------

    def fatal(self, exitcode: int, origin: str, template: str, *args) -> NoReturn:
        """Write ``FATAL: <origin>: <message>`` and exit with *exitcode*."""
        with self._lock:
            self._fatal("fatal", Severity.FATAL, exitcode, origin, template, args, None)

    def fatal_syserr(self, exitcode: int, origin: str, template: str, *args,
                     error: OSError | int | None = None) -> NoReturn:
        """Like :meth:`fatal`; adds the ``errno[...]`` line when the code is non-zero."""
        syserr = capture_system_error(error)
        with self._lock:
            self._fatal("fatal_syserr", Severity.FATAL_ERRNO, exitcode, origin,
                        template, args, syserr)

    def usage_fatal(self, exitcode: int, origin: str, template: str, *args) -> NoReturn:
        """Report a command-line usage error and exit with *exitcode*.

        An exit code of 0 means "just show usage": the FATAL line is
        skipped and only the usage trailer is written.
        """
        with self._lock:
            self._usage_fatal("usage_fatal", Severity.USAGE_FATAL, exitcode, origin,
                              template, args, None)

    def usage_fatal_syserr(self, exitcode: int, origin: str, template: str, *args,
                           error: OSError | int | None = None) -> NoReturn:
        """Like :meth:`usage_fatal`; a non-zero exit also writes the ``errno[...]`` line."""
        syserr = capture_system_error(error)
        with self._lock:
            self._usage_fatal("usage_fatal_syserr", Severity.USAGE_FATAL_ERRNO, exitcode,
                              origin, template, args, syserr)

    def _fatal(
        self,
        op: str,
        severity: Severity,
        exitcode: int,
        origin: str,
        template: str,
        args: tuple,
        syserr: SystemErrorContext | None,
    ) -> NoReturn:
        exitcode = self._check_exitcode(op, exitcode)
        origin, template = self._check_origin(op, origin, template)
        self._emit(MessageRecord(
            severity, op, template, args,
            origin=origin, syserr=syserr,
        ))
        self._terminate(exitcode)

    def _usage_fatal(
        self,
        op: str,
        severity: Severity,
        exitcode: int,
        origin: str,
        template: str,
        args: tuple,
        syserr: SystemErrorContext | None,
    ) -> NoReturn:
        exitcode = self._check_exitcode(op, exitcode, usage=True)
        origin, template = self._check_origin(op, origin, template)
        if exitcode > 0:
            self._emit(MessageRecord(
                severity, op, template, args,
                origin=origin, syserr=syserr,
            ))
        for line in usage_trailer(self.config):
            self._write(op, line)
        self._terminate(exitcode)

    # ------------------------------------------------------------------
    # Input normalization
    # ------------------------------------------------------------------

    def _check_template(self, op: str, template: str | None) -> str:
        if template is None:
            self.warn(op, "called with no template")
            return NO_TEMPLATE
        if not isinstance(template, str):
            self.warn(op, "called with non-str template: %r", template)
            return as_text(template, NO_TEMPLATE)
        return template

    def _check_origin(self, op: str, origin: str | None,
                      template: str | None) -> tuple[str, str]:
        if origin is None:
            self.warn(op, "called with no origin")
            origin = NO_ORIGIN
        elif not isinstance(origin, str):
            self.warn(op, "called with non-str origin: %r", origin)
            origin = as_text(origin, NO_ORIGIN)
        return origin, self._check_template(op, template)

    def _check_exitcode(self, op: str, exitcode: int, usage: bool = False) -> int:
        """Return *exitcode*, or FORCED_EXIT after two warnings if it is out of range."""
        if is_valid_exit_code(exitcode):
            return exitcode
        if not isinstance(exitcode, int):
            self.warn(op, "called with non-integer exitcode: %r", exitcode)
        elif usage:
            self.warn(op, "exitcode must be >= 0 && < 256: %d", exitcode)
        elif exitcode >= EXIT_CODE_LIMIT:
            self.warn(op, "called with exitcode >= 256: %d", exitcode)
        else:
            self.warn(op, "called with exitcode < 0: %d", exitcode)
        self.warn(op, "forcing exit code: %d", FORCED_EXIT)
        return FORCED_EXIT

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _emit(self, record: MessageRecord) -> None:
        self._write(record.op, render_line(record))
        errno_line = record.errno_line
        if errno_line is not None:
            self._write(record.op, errno_line)

    def _write(self, op: str, line: str) -> None:
        try:
            print(line, file=self.stream, flush=True)
        except (OSError, ValueError) as e:
            try:
                print(f"[{op} write error: {e}]", file=self.stream, flush=True)
            except (OSError, ValueError):
                pass  # stream is unusable; there is nowhere left to report to

    def _terminate(self, exitcode: int) -> NoReturn:
        """Exit the process with *exitcode*, from any thread.

        ``sys.exit`` only unwinds the calling thread, so off the main thread
        the output is flushed and the process ends through ``os._exit``.
        """
        if threading.current_thread() is threading.main_thread():
            sys.exit(exitcode)
        for stream in (self.stream, sys.stdout):
            try:
                stream.flush()
            except (AttributeError, OSError, ValueError):
                pass  # closed or missing stream; exiting regardless
        os._exit(exitcode)
