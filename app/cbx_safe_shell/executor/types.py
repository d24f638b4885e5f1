"""
Type definitions for command construction and execution.

This module defines the value types returned by the executor layer.
All of them are immutable and unpack like the ``(ok, value)`` pairs
they represent:

    ok, code = runner.run("make", ["test"])
"""

from typing import NamedTuple, Optional


class ValidationResult(NamedTuple):
    """
    Result of validating a program name or argument list.

    Attributes:
        ok: Whether the value passed validation
        error: Explanation of the failure (None when ok)
    """

    ok: bool
    error: Optional[str] = None

    @classmethod
    def allow(cls) -> "ValidationResult":
        """Create a passing result."""
        return cls(True, None)

    @classmethod
    def reject(cls, error: str) -> "ValidationResult":
        """Create a failing result."""
        return cls(False, error)


class ExecutionResult(NamedTuple):
    """
    Canonical result of running a command line.

    Attributes:
        ok: True only when the process exited with status zero
        exit_code: Process exit code (or signal number for signalled
            processes), None when a stand-in does not report one
    """

    ok: bool
    exit_code: Optional[int] = None

    @classmethod
    def failure(cls, exit_code: int = 1) -> "ExecutionResult":
        return cls(False, exit_code)


class CaptureResult(NamedTuple):
    """
    Result of capturing a command's standard output.

    ``output`` is None exactly when ``ok`` is False.
    """

    ok: bool
    output: Optional[str] = None

    @classmethod
    def failure(cls) -> "CaptureResult":
        return cls(False, None)


class ShellSafetyError(Exception):
    """Base exception for the shell safety layer."""

    pass


class ContractViolationError(ShellSafetyError, ValueError):
    """
    Raised when a command is built from an invalid program name.

    Program names coming from untrusted input must be checked with
    ``validate_program`` first; reaching ``build_command`` with one that
    fails is a programming error.
    """

    def __init__(self, message: str, program: object = None):
        super().__init__(message)
        self.program = program
