"""
Execution backends.

A backend strategy is any callable taking one command line:

- Executor: ``(command_line) -> ExecutionResult``
- Capturer: ``(command_line) -> CaptureResult``

SubprocessExecutor and PipeCapturer run commands through the host shell.
ScriptedExecutor and ScriptedCapturer are deterministic stand-ins for tests:
they record each command line and replay pre-supplied responses.

Strategies are handed to ShellRunner at construction time; nothing in this
module holds a process-wide slot.
"""

import codecs
import subprocess
from typing import Iterable, Optional, Protocol, Union

from cbx_safe_shell.executor.normalize import host_triple, normalize_exit
from cbx_safe_shell.executor.types import CaptureResult, ExecutionResult
from cbx_safe_shell.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SHELL = "/bin/sh"


class Executor(Protocol):
    """Runs a command line and reports success and exit code."""

    def __call__(self, command_line: str) -> ExecutionResult: ...


class Capturer(Protocol):
    """Runs a command line and returns its standard output."""

    def __call__(self, command_line: str) -> CaptureResult: ...


class SubprocessExecutor:
    """
    Default executor.

    Runs the command line through the shell, waits for it to finish and
    normalizes the CompletedProcess via ``normalize_exit``.
    """

    def __init__(self, shell: str = DEFAULT_SHELL):
        self.shell = shell

    def __call__(self, command_line: str) -> ExecutionResult:
        try:
            completed = subprocess.run(
                command_line,
                shell=True,
                executable=self.shell,
                check=False,
            )
        except OSError as e:
            logger.warning(f"Failed to start command: {command_line}: {e}")
            return ExecutionResult.failure()

        return normalize_exit(*host_triple(completed))


class PipeCapturer:
    """
    Default capturer.

    Opens a read pipe on the command's stdout and reads it to the end. The
    Popen context manager closes the pipe and reaps the child on every
    path. Only a failure to open the pipe is reported as ``ok=False``; a
    command that runs and exits non-zero still returns what it printed.
    """

    def __init__(
        self,
        shell: str = DEFAULT_SHELL,
        encoding: str = "utf-8",
        errors: str = "replace",
    ):
        self.shell = shell
        # Unknown codecs fail here rather than after the command has run
        codecs.lookup(encoding)
        self.encoding = encoding
        self.errors = errors

    def __call__(self, command_line: str) -> CaptureResult:
        try:
            process = subprocess.Popen(
                command_line,
                shell=True,
                executable=self.shell,
                stdout=subprocess.PIPE,
            )
        except OSError as e:
            logger.warning(f"Failed to open pipe for: {command_line}: {e}")
            return CaptureResult.failure()

        with process:
            output_bytes = process.stdout.read()

        logger.debug(f"Pipe closed (exit code {process.returncode}): {command_line}")
        return CaptureResult(True, output_bytes.decode(self.encoding, errors=self.errors))


ScriptedResponse = Union[ExecutionResult, tuple[bool, Optional[int]]]
ScriptedOutput = Union[CaptureResult, tuple[bool, Optional[str]]]


class ScriptedExecutor:
    """
    Executor stand-in that replays responses in order.

    Every command line it receives is appended to ``calls``. Once the
    responses run out it returns ``(False, 1)``.

    Example:
        >>> executor = ScriptedExecutor([(True, 0), (False, 1)])
        >>> runner = ShellRunner(executor=executor)
    """

    def __init__(self, responses: Iterable[ScriptedResponse] = ()):
        self._responses = [ExecutionResult(*r) for r in responses]
        self._index = 0
        self.calls: list[str] = []

    def __call__(self, command_line: str) -> ExecutionResult:
        self.calls.append(command_line)
        if self._index >= len(self._responses):
            return ExecutionResult.failure()
        response = self._responses[self._index]
        self._index += 1
        return response


class ScriptedCapturer:
    """
    Capturer stand-in; returns ``(False, None)`` once outputs run out.

    Each output must have ``output is None`` exactly when ``ok`` is false.
    """

    def __init__(self, outputs: Iterable[ScriptedOutput] = ()):
        self._outputs = [CaptureResult(*o) for o in outputs]
        for position, (ok, output) in enumerate(self._outputs, start=1):
            if bool(ok) == (output is None):
                raise ValueError(
                    f"scripted output {position} is inconsistent: ok={ok!r} with output={output!r}"
                )
        self._index = 0
        self.calls: list[str] = []

    def __call__(self, command_line: str) -> CaptureResult:
        self.calls.append(command_line)
        if self._index >= len(self._outputs):
            return CaptureResult.failure()
        output = self._outputs[self._index]
        self._index += 1
        return output
