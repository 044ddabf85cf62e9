"""Command-line interface for diagout.

Lets shell scripts report through the same channel and exit-code policy as
Python code::

    diagout -v 3 dbg 1 "copied %d files" 12
    diagout -p backup.sh err 2 rsync "destination %s is full" /mnt/b
"""

import re

import click

from ._version import __version__
from .cli_utils import init_reporter
from .levels import DBG_DEFAULT
from .reporter import Reporter

_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

# ---------------------------------------------------------------------------
# Argument helpers
# ---------------------------------------------------------------------------

# A positional %-conversion: flags, width, precision, length modifier, type.
_CONVERSION = re.compile(r"%[#0 +\-]*(\*|\d+)?(?:\.(\*|\d*))?[hlL]?([diouxXeEfFgGcrsa%])")

_AS_INT = (int,)
_AS_NUMBER = (int, float)
_AS_FLOAT = (float,)
_COERCIONS = {
    "*": _AS_INT, "o": _AS_INT, "x": _AS_INT, "X": _AS_INT,
    "d": _AS_NUMBER, "i": _AS_NUMBER, "u": _AS_NUMBER,
    "e": _AS_FLOAT, "E": _AS_FLOAT, "f": _AS_FLOAT, "F": _AS_FLOAT,
    "g": _AS_FLOAT, "G": _AS_FLOAT,
}


def _conversions(template: str) -> list[str]:
    """The conversion each positional argument is consumed by, in order.

    A ``*`` width or precision consumes an argument of its own.
    """
    kinds: list[str] = []
    for width, precision, conversion in _CONVERSION.findall(template):
        if conversion == "%":
            continue
        kinds.extend(star for star in (width, precision) if star == "*")
        kinds.append(conversion)
    return kinds


def _coerce(value: str, conversion: str) -> int | float | str:
    """Turn a shell word into a number only when *conversion* needs one."""
    for kind in _COERCIONS.get(conversion, ()):
        try:
            return kind(value)
        except ValueError:
            pass
    return value


def _coerce_args(template: str, args: tuple[str, ...]) -> tuple:
    kinds = _conversions(template)
    return tuple(
        _coerce(arg, kinds[i]) if i < len(kinds) else arg
        for i, arg in enumerate(args)
    )


def _template_args(func):
    """Attach the TEMPLATE [ARG ...] arguments shared by every subcommand."""
    func = click.argument("args", metavar="[ARG ...]", nargs=-1)(func)
    return click.argument("template")(func)


def _errno_option(func):
    return click.option(
        "--errno", "errno_code", type=int, default=0, show_default=True,
        metavar="N", help="System error code to report.",
    )(func)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

@click.group(context_settings=_CONTEXT_SETTINGS)
@click.option(
    "--verbosity", "-v", type=int, default=DBG_DEFAULT, show_default=True,
    envvar="DIAGOUT_VERBOSITY", metavar="LEVEL",
    help="Debug messages at or below this level are shown.",
)
@click.option(
    "--program", "-p", default=None, envvar="DIAGOUT_PROGRAM", metavar="NAME",
    help="Program name used in usage-error hints.",
)
@click.version_option(__version__, prog_name="diagout")
@click.pass_context
def main(ctx: click.Context, verbosity: int, program: str | None) -> None:
    """Write leveled diagnostics to stderr.

    TEMPLATE is a printf-style template. An ARG consumed by a numeric
    conversion (%d, %x, %f, ...) is passed as a number; all others are
    passed through as text.

    \b
    Exit codes
    ----------
    Terminating commands exit with CODE when 0 <= CODE < 256, otherwise
    with 255 after two warnings. Codes 250-254 are reserved for internal
    errors.
    """
    ctx.obj = init_reporter(verbosity=verbosity, program=program)


@main.command("msg")
@_template_args
@click.pass_obj
def msg_cmd(rep: Reporter, template: str, args: tuple[str, ...]) -> None:
    """Write a plain message."""
    rep.message(template, *_coerce_args(template, args))


@main.command("dbg")
@click.argument("level", type=int)
@_template_args
@click.pass_obj
def dbg_cmd(rep: Reporter, level: int, template: str, args: tuple[str, ...]) -> None:
    """Write a message if LEVEL <= --verbosity."""
    rep.debug(level, template, *_coerce_args(template, args))


@main.command("warn")
@click.argument("origin")
@_template_args
@click.pass_obj
def warn_cmd(rep: Reporter, origin: str, template: str, args: tuple[str, ...]) -> None:
    """Write a warning."""
    rep.warn(origin, template, *_coerce_args(template, args))


@main.command("warnp")
@click.argument("origin")
@_template_args
@_errno_option
@click.pass_obj
def warnp_cmd(rep: Reporter, origin: str, template: str, args: tuple[str, ...],
              errno_code: int) -> None:
    """Write a warning followed by the system error line."""
    rep.warn_syserr(origin, template, *_coerce_args(template, args), error=errno_code)


@main.command("err")
@click.argument("code", type=int)
@click.argument("origin")
@_template_args
@click.pass_obj
def err_cmd(rep: Reporter, code: int, origin: str, template: str,
            args: tuple[str, ...]) -> None:
    """Write a fatal error and exit with CODE."""
    rep.fatal(code, origin, template, *_coerce_args(template, args))


@main.command("errp")
@click.argument("code", type=int)
@click.argument("origin")
@_template_args
@_errno_option
@click.pass_obj
def errp_cmd(rep: Reporter, code: int, origin: str, template: str,
             args: tuple[str, ...], errno_code: int) -> None:
    """Write a fatal error (and a non-zero system error) and exit with CODE."""
    rep.fatal_syserr(code, origin, template, *_coerce_args(template, args), error=errno_code)


@main.command("usage-err")
@click.argument("code", type=int)
@click.argument("origin")
@_template_args
@click.pass_obj
def usage_err_cmd(rep: Reporter, code: int, origin: str, template: str,
                  args: tuple[str, ...]) -> None:
    """Write a usage error with the help hint and exit with CODE.

    CODE 0 skips the error line and only prints the hint.
    """
    rep.usage_fatal(code, origin, template, *_coerce_args(template, args))


@main.command("usage-errp")
@click.argument("code", type=int)
@click.argument("origin")
@_template_args
@_errno_option
@click.pass_obj
def usage_errp_cmd(rep: Reporter, code: int, origin: str, template: str,
                   args: tuple[str, ...], errno_code: int) -> None:
    """Like usage-err, adding the system error line when CODE > 0."""
    rep.usage_fatal_syserr(code, origin, template, *_coerce_args(template, args),
                           error=errno_code)


if __name__ == "__main__":
    main()
