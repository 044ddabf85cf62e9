"""Exit-code convention shared by every terminating reporter call.

Code     Meaning
-------  -------
  0-249  Free for callers
250-254  Reserved for internal-error conditions
    255  Forced exit: substituted for any out-of-range code

The reserved block is a convention for callers, not something the reporter
checks. Only the 0-255 range is enforced.
"""

EXIT_CODE_LIMIT = 256

INTERNAL_EXIT_MIN = 250
INTERNAL_EXIT_MAX = 254

FORCED_EXIT = 255


def is_valid_exit_code(code: object) -> bool:
    """Return True if *code* is an integer in ``[0, 256)``."""
    return isinstance(code, int) and 0 <= code < EXIT_CODE_LIMIT


def is_reserved_exit_code(code: int) -> bool:
    """Return True for the internal-error block and the forced exit code."""
    return INTERNAL_EXIT_MIN <= code <= FORCED_EXIT
