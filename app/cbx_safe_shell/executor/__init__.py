"""
Safe shell command construction and execution.

This module handles:
- Argument escaping and program name validation
- Command line building
- Swappable execution backends and exit status normalization
"""

from cbx_safe_shell.executor.types import (
    CaptureResult,
    ContractViolationError,
    ExecutionResult,
    ShellSafetyError,
    ValidationResult,
)
from cbx_safe_shell.executor.escape import (
    escape,
    escape_args,
)
from cbx_safe_shell.executor.validator import (
    SHELL_METACHARACTERS,
    validate_args,
    validate_program,
)
from cbx_safe_shell.executor.builder import build_command
from cbx_safe_shell.executor.normalize import (
    host_triple,
    normalize_exit,
)
from cbx_safe_shell.executor.backends import (
    Capturer,
    Executor,
    PipeCapturer,
    ScriptedCapturer,
    ScriptedExecutor,
    SubprocessExecutor,
)
from cbx_safe_shell.executor.runner import (
    ShellRunner,
    create_runner,
)

__all__ = [
    # Types
    "CaptureResult",
    "ExecutionResult",
    "ValidationResult",
    # Exceptions
    "ShellSafetyError",
    "ContractViolationError",
    # Escaping and validation
    "escape",
    "escape_args",
    "validate_program",
    "validate_args",
    "SHELL_METACHARACTERS",
    # Building
    "build_command",
    # Exit status
    "normalize_exit",
    "host_triple",
    # Backends
    "Executor",
    "Capturer",
    "SubprocessExecutor",
    "PipeCapturer",
    "ScriptedExecutor",
    "ScriptedCapturer",
    # Runner
    "ShellRunner",
    "create_runner",
]
