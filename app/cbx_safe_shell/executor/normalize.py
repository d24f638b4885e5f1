"""
Exit status normalization.

Process completion has historically been reported in two shapes:

- a single exit code, where zero means success
- a triple ``(success, reason, code)`` where reason is "exit" or "signal"

``normalize_exit`` maps either shape onto one ExecutionResult. Anything it
does not recognise is reported as ``(False, 1)``; it never guesses success.

``host_triple`` turns a ``subprocess.CompletedProcess`` into the triple
shape, so the default executor goes host result -> triple -> canonical.
"""

import subprocess
from typing import Any

from cbx_safe_shell.executor.types import ExecutionResult


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def normalize_exit(*raw: Any) -> ExecutionResult:
    """
    Map a raw process result onto a canonical ExecutionResult.

    Examples:
        >>> normalize_exit(0)
        ExecutionResult(ok=True, exit_code=0)
        >>> normalize_exit(None, "exit", 1)
        ExecutionResult(ok=False, exit_code=1)
        >>> normalize_exit()
        ExecutionResult(ok=False, exit_code=1)
    """
    if len(raw) >= 3:
        success, _reason, code = raw[0], raw[1], raw[2]
        if not _is_int(code):
            return ExecutionResult.failure()
        return ExecutionResult(success is True, code)

    if len(raw) == 1:
        value = raw[0]
        if isinstance(value, bool):
            return ExecutionResult(True, 0) if value else ExecutionResult.failure()
        if _is_int(value):
            return ExecutionResult(value == 0, value)

    return ExecutionResult.failure()


def host_triple(completed: subprocess.CompletedProcess) -> tuple[bool, str, int]:
    """
    Convert a CompletedProcess into ``(success, reason, code)``.

    A negative return code means the child was killed by a signal; the
    triple then carries the signal number.
    """
    returncode = completed.returncode
    if returncode < 0:
        return False, "signal", -returncode
    return returncode == 0, "exit", returncode
