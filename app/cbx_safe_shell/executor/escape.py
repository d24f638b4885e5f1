"""
POSIX single-quote escaping for command arguments.

Every argument is wrapped in single quotes. Inside single quotes a POSIX
shell interprets nothing, so the only character needing work is the single
quote itself, which is written as ``'\\''`` (close quote, escaped quote,
reopen quote).

NUL bytes are passed through unchanged. Shells truncate or reject them and
this module does not try to fix that.
"""

from typing import Any, Iterable


def escape(value: Any) -> str:
    """
    Quote one value as a single literal shell token.

    Args:
        value: The value to quote. Non-strings are converted with str().

    Returns:
        The quoted token

    Examples:
        >>> escape("it's")
        "'it'\\\\''s'"

        >>> escape(42)
        "'42'"
    """
    return "'" + str(value).replace("'", "'\\''") + "'"


def escape_args(args: Iterable[Any]) -> str:
    """Escape each argument and join them with single spaces."""
    return " ".join(escape(arg) for arg in args)
