# test_cli_utils.py
#
# Tests:
# - get_reporter: creates a default reporter once
# - init_reporter: replaces the process-wide reporter with the given settings
# - module-level wrappers delegate with the same output contract
# - errno wrappers capture the handled OSError on entry

import errno
import io

import pytest

from diagout import cli_utils
from diagout.reporter import Reporter


@pytest.fixture(autouse=True)
def _fresh_reporter(monkeypatch):
    monkeypatch.setattr(cli_utils, "_reporter", None)


class TestSingleton:
    def test_default_created_once(self):
        rep = cli_utils.get_reporter()
        assert isinstance(rep, Reporter)
        assert rep.config.verbosity == 0
        assert cli_utils.get_reporter() is rep

    def test_init_replaces(self):
        first = cli_utils.get_reporter()
        rep = cli_utils.init_reporter(verbosity=4, program="tool", version="2.0")
        assert rep is not first
        assert cli_utils.get_reporter() is rep
        assert (rep.config.verbosity, rep.config.program, rep.config.version) == (4, "tool", "2.0")

    def test_init_with_stream(self):
        buf = io.StringIO()
        cli_utils.init_reporter(stream=buf)
        cli_utils.message("to %s", "buffer")
        assert buf.getvalue() == "to buffer\n"


class TestWrappers:
    def test_message_and_debug(self, capsys):
        cli_utils.init_reporter(verbosity=1)
        cli_utils.message("plain")
        cli_utils.debug(1, "shown %d", 1)
        cli_utils.debug(2, "hidden")
        assert capsys.readouterr().err == "plain\nshown 1\n"

    def test_warn(self, capsys):
        cli_utils.warn("parse", "skipping row %d", 7)
        assert capsys.readouterr().err == "Warning: parse: skipping row 7\n"

    def test_warn_syserr_captures_handled_error(self, capsys):
        try:
            raise PermissionError(errno.EACCES, "denied")
        except OSError:
            cli_utils.warn_syserr("open", "cannot open")
        assert capsys.readouterr().err.splitlines()[1].startswith(f"errno[{errno.EACCES}]: ")

    def test_fatal(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli_utils.fatal(3, "main", "stop")
        assert exc.value.code == 3
        assert capsys.readouterr().err == "FATAL: main: stop\n"

    def test_fatal_syserr_explicit(self, capsys):
        with pytest.raises(SystemExit):
            cli_utils.fatal_syserr(1, "main", "stop", error=errno.EIO)
        assert f"errno[{errno.EIO}]: " in capsys.readouterr().err

    def test_usage_fatal(self, capsys):
        cli_utils.init_reporter(program="tool", version="2.0")
        with pytest.raises(SystemExit) as exc:
            cli_utils.usage_fatal(0, "args", "unused")
        assert exc.value.code == 0
        assert capsys.readouterr().err == (
            "For command line usage help, try: tool -h\nversion: 2.0\n"
        )

    def test_usage_fatal_syserr(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli_utils.usage_fatal_syserr(2, "args", "bad")
        assert exc.value.code == 2
        lines = capsys.readouterr().err.splitlines()
        assert lines[0] == "FATAL: args: bad"
        assert lines[1].startswith("errno[0]: ")
