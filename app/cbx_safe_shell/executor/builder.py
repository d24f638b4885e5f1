"""
Command line construction.

A command line is the validated program name followed by each argument as
a single-quoted token:

    >>> build_command("grep", ["-r", "; rm -rf /", "/path"])
    "grep '-r' '; rm -rf /' '/path'"
"""

from typing import Any, Optional, Sequence

from cbx_safe_shell.executor.escape import escape_args
from cbx_safe_shell.executor.types import ContractViolationError
from cbx_safe_shell.executor.validator import validate_program


def build_command(program: str, args: Optional[Sequence[Any]] = None) -> str:
    """
    Build a shell command line from a program name and argument list.

    Arguments are escaped but not type-checked; call ``validate_args`` first
    when they come from untrusted input.

    Args:
        program: Program name or path, placed on the line unquoted
        args: Arguments, each becoming one literal token

    Returns:
        The command line string

    Raises:
        ContractViolationError: If ``program`` fails ``validate_program``
    """
    validation = validate_program(program)
    if not validation.ok:
        raise ContractViolationError(validation.error, program=program)

    if args:
        return f"{program} {escape_args(args)}"
    return program
