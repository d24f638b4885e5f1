"""
Safe command execution.

ShellRunner is the entry point for running external programs. It:
1. Builds the command line (validating the program, escaping the args)
2. Hands the line to the injected executor or capturer
3. Returns the canonical result unchanged

Execution is synchronous. Callers needing a timeout must wrap the call.
"""

from typing import Any, Optional, Sequence

from cbx_safe_shell.executor.backends import (
    Capturer,
    Executor,
    PipeCapturer,
    SubprocessExecutor,
)
from cbx_safe_shell.executor.builder import build_command
from cbx_safe_shell.executor.types import CaptureResult, ExecutionResult
from cbx_safe_shell.utils.logging import get_logger

logger = get_logger(__name__)


class ShellRunner:
    """
    Runs programs through swappable execution backends.

    Both strategies are fixed at construction. Tests pass scripted
    stand-ins; production code uses the subprocess defaults.
    """

    def __init__(
        self,
        executor: Optional[Executor] = None,
        capturer: Optional[Capturer] = None,
    ):
        """
        Initialize the runner.

        Args:
            executor: Strategy for run(); defaults to SubprocessExecutor
            capturer: Strategy for capture(); defaults to PipeCapturer
        """
        self.executor = executor if executor is not None else SubprocessExecutor()
        self.capturer = capturer if capturer is not None else PipeCapturer()

    def run(
        self,
        program: str,
        args: Optional[Sequence[Any]] = None,
    ) -> ExecutionResult:
        """
        Run a program and report its exit status.

        Args:
            program: Program name; must pass validate_program
            args: Arguments passed as literal tokens

        Returns:
            ExecutionResult with ok and exit_code

        Raises:
            ContractViolationError: If the program name is invalid
        """
        command_line = build_command(program, args or [])
        logger.debug(f"exec: {command_line}")

        result = self.executor(command_line)
        if not result.ok:
            logger.warning(f"Command failed (exit {result.exit_code}): {command_line}")
        return result

    def capture(
        self,
        program: str,
        args: Optional[Sequence[Any]] = None,
    ) -> CaptureResult:
        """
        Run a program and return its standard output.

        Raises:
            ContractViolationError: If the program name is invalid
        """
        command_line = build_command(program, args or [])
        logger.debug(f"capture: {command_line}")

        result = self.capturer(command_line)
        if not result.ok:
            logger.warning(f"Capture failed: {command_line}")
        return result


def create_runner(shell_config: Optional[Any] = None) -> ShellRunner:
    """
    Factory function to create a ShellRunner with the default backends.

    Args:
        shell_config: Optional ShellSettings (executable, encoding,
            decode_errors). Defaults are used when omitted.

    Returns:
        Configured ShellRunner instance
    """
    if shell_config is None:
        return ShellRunner()

    return ShellRunner(
        executor=SubprocessExecutor(shell=shell_config.executable),
        capturer=PipeCapturer(
            shell=shell_config.executable,
            encoding=shell_config.encoding,
            errors=shell_config.decode_errors,
        ),
    )
