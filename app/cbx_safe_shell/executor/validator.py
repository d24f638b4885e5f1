"""
Validation for program names and argument lists.

Two checks guard command construction:
1. Program names are matched against a metacharacter denylist. The program
   position is never quoted, so an unsafe name is rejected, not escaped.
   Names shaped like ``VAR=value`` are rejected too: the shell would read
   them as an assignment and run the first argument instead.
2. Argument lists must be a sequence of strings (``str`` and ``bytes`` are
   not accepted as sequences).

Both checks return a ValidationResult and never raise.
"""

import re
import string
from collections.abc import Sequence
from typing import Any

from cbx_safe_shell.executor.types import ValidationResult


# Characters with special meaning to a POSIX shell
SHELL_METACHARACTERS = frozenset(";&|`$(){}[]<>!#~\"'")

# Space, tab, CR, LF plus vertical tab and form feed
WHITESPACE = frozenset(string.whitespace)

FORBIDDEN_PROGRAM_CHARS = SHELL_METACHARACTERS | WHITESPACE

# A leading shell variable name followed by "="
ASSIGNMENT_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*=")


def _type_name(value: Any) -> str:
    return type(value).__name__


def validate_program(name: Any) -> ValidationResult:
    """
    Check that a program name is safe to place unquoted on a command line.

    Args:
        name: The candidate program name (any type)

    Returns:
        ValidationResult; ``error`` mentions "metacharacters" when the
        name contains a forbidden character
    """
    if not isinstance(name, str):
        return ValidationResult.reject(
            f"program name must be string, got {_type_name(name)}"
        )

    if name == "":
        return ValidationResult.reject("program name must not be empty")

    if any(char in FORBIDDEN_PROGRAM_CHARS for char in name):
        return ValidationResult.reject(
            f"program name contains shell metacharacters: {name!r}"
        )

    if ASSIGNMENT_PATTERN.match(name):
        return ValidationResult.reject(
            f"program name looks like a variable assignment: {name!r}"
        )

    return ValidationResult.allow()


def validate_args(args: Any) -> ValidationResult:
    """
    Check that an argument list holds only strings.

    Any ``collections.abc.Sequence`` is accepted. Strings and bytes are
    rejected as containers so that ``"abc"`` is not mistaken for
    ``["a", "b", "c"]``. Positions in error messages are 1-based.
    """
    if not isinstance(args, Sequence) or isinstance(args, (str, bytes, bytearray)):
        return ValidationResult.reject(
            f"args must be a sequence, got {_type_name(args)}"
        )

    for position, arg in enumerate(args, start=1):
        if not isinstance(arg, str):
            return ValidationResult.reject(
                f"arg[{position}] must be string, got {_type_name(arg)}"
            )

    return ValidationResult.allow()
