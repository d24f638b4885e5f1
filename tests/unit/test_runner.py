# tests/unit/test_runner.py
"""
Unit tests for ShellRunner and the execution backends.
Uses scripted stand-ins and mocked subprocess calls; no real processes.
"""

import logging
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from cbx_safe_shell.config import ShellSettings
from cbx_safe_shell.executor import (
    CaptureResult,
    ContractViolationError,
    ExecutionResult,
    PipeCapturer,
    ScriptedCapturer,
    ScriptedExecutor,
    ShellRunner,
    SubprocessExecutor,
    create_runner,
)


class TestScriptedExecutor:
    """Tests for the scripted executor stand-in."""

    def test_replays_responses_in_order(self):
        executor = ScriptedExecutor([(True, 0), (False, 1)])
        assert executor("echo 'a'") == (True, 0)
        assert executor("echo 'b'") == (False, 1)

    def test_records_calls(self):
        executor = ScriptedExecutor([(True, 0)])
        executor("ls")
        executor("ls '-la'")
        assert executor.calls == ["ls", "ls '-la'"]

    def test_exhausted_returns_failure(self):
        executor = ScriptedExecutor([(True, 0)])
        executor("first")
        assert executor("second") == (False, 1)
        assert executor("third") == (False, 1)

    def test_no_responses(self):
        assert ScriptedExecutor()("anything") == (False, 1)

    def test_returns_execution_result(self):
        result = ScriptedExecutor([(True, 0)])("true")
        assert isinstance(result, ExecutionResult)


class TestScriptedCapturer:
    """Tests for the scripted capturer stand-in."""

    def test_replays_outputs(self):
        capturer = ScriptedCapturer([(True, "one\n"), (True, "")])
        assert capturer("a") == (True, "one\n")
        assert capturer("b") == (True, "")

    def test_exhausted_returns_failure(self):
        capturer = ScriptedCapturer([])
        ok, output = capturer("missing")
        assert ok is False
        assert output is None
        assert capturer.calls == ["missing"]

    @pytest.mark.parametrize(
        "entry",
        [(True, None), (False, "x")],
        ids=["ok-without-output", "failure-with-output"],
    )
    def test_rejects_inconsistent_output(self, entry):
        with pytest.raises(ValueError, match="inconsistent"):
            ScriptedCapturer([(True, "fine"), entry])


class TestShellRunnerExec:
    """Tests for ShellRunner.run with injected executors."""

    def test_scripted_sequence(self):
        """Responses come back in order and both command lines are recorded."""
        executor = ScriptedExecutor([(True, 0), (False, 1)])
        runner = ShellRunner(executor=executor)

        assert runner.run("echo", ["hello"]) == (True, 0)
        assert runner.run("make", ["test", "it's"]) == (False, 1)
        assert executor.calls == ["echo 'hello'", "make 'test' 'it'\\''s'"]

    def test_args_default_to_empty(self):
        executor = ScriptedExecutor([(True, 0)])
        ShellRunner(executor=executor).run("ls")
        assert executor.calls == ["ls"]

    def test_failure_passed_through(self):
        runner = ShellRunner(executor=ScriptedExecutor([(False, 2)]))
        ok, code = runner.run("false", [])
        assert ok is False
        assert code == 2

    def test_invalid_program_raises_before_executing(self):
        executor = ScriptedExecutor([(True, 0)])
        runner = ShellRunner(executor=executor)

        with pytest.raises(ContractViolationError):
            runner.run("ls; rm", ["-rf"])
        assert executor.calls == []

    def test_plain_function_as_executor(self):
        seen = []

        def executor(command_line):
            seen.append(command_line)
            return ExecutionResult(True, 0)

        ShellRunner(executor=executor).run("echo", ["x"])
        assert seen == ["echo 'x'"]

    def test_failure_is_logged(self, caplog):
        runner = ShellRunner(executor=ScriptedExecutor([(False, 3)]))
        with caplog.at_level(logging.WARNING):
            runner.run("false")
        assert "exit 3" in caplog.text


class TestShellRunnerCapture:
    """Tests for ShellRunner.capture with injected capturers."""

    def test_returns_output(self):
        runner = ShellRunner(capturer=ScriptedCapturer([(True, "output text\n")]))
        ok, output = runner.capture("echo", ["hello"])
        assert ok is True
        assert output == "output text\n"

    def test_returns_failure(self):
        runner = ShellRunner(capturer=ScriptedCapturer([(False, None)]))
        assert runner.capture("nonexistent", []) == (False, None)

    def test_builds_command_line(self):
        capturer = ScriptedCapturer([(True, "")])
        ShellRunner(capturer=capturer).capture("grep", ["-r", "pattern", "/path"])
        assert capturer.calls == ["grep '-r' 'pattern' '/path'"]

    def test_strategies_are_independent(self):
        executor = ScriptedExecutor([(True, 0)])
        capturer = ScriptedCapturer([(True, "x")])
        runner = ShellRunner(executor=executor, capturer=capturer)

        runner.capture("date")
        assert executor.calls == []
        assert capturer.calls == ["date"]


class TestDefaultBackends:
    """Tests for the subprocess backends with the host mocked out."""

    def test_executor_normalizes_completed_process(self):
        completed = subprocess.CompletedProcess(args="x", returncode=4)
        with patch("subprocess.run", return_value=completed) as mock_run:
            result = SubprocessExecutor(shell="/bin/sh")("exit 4")

        assert result == (False, 4)
        mock_run.assert_called_once_with(
            "exit 4", shell=True, executable="/bin/sh", check=False
        )

    def test_executor_spawn_failure(self):
        with patch("subprocess.run", side_effect=OSError("no shell")):
            assert SubprocessExecutor(shell="/missing/sh")("true") == (False, 1)

    def test_capturer_open_failure(self):
        with patch("subprocess.Popen", side_effect=OSError("no shell")):
            assert PipeCapturer()("echo hi") == CaptureResult(False, None)

    def test_capturer_closes_pipe(self):
        process = MagicMock()
        process.__enter__.return_value = process
        process.stdout.read.return_value = b"hello\n"
        process.returncode = 0

        with patch("subprocess.Popen", return_value=process):
            result = PipeCapturer()("echo 'hello'")

        assert result == (True, "hello\n")
        process.__exit__.assert_called_once()

    def test_capturer_decodes_with_replacement(self):
        process = MagicMock()
        process.__enter__.return_value = process
        process.stdout.read.return_value = b"bad \xff byte"

        with patch("subprocess.Popen", return_value=process):
            ok, output = PipeCapturer()("cat")

        assert ok is True
        assert output == "bad \ufffd byte"


class TestCreateRunner:
    """Tests for the runner factory."""

    def test_defaults(self):
        runner = create_runner()
        assert isinstance(runner.executor, SubprocessExecutor)
        assert isinstance(runner.capturer, PipeCapturer)

    def test_uses_shell_settings(self):
        settings = ShellSettings(executable="/bin/bash", encoding="latin-1", decode_errors="strict")
        runner = create_runner(settings)

        assert runner.executor.shell == "/bin/bash"
        assert runner.capturer.shell == "/bin/bash"
        assert runner.capturer.encoding == "latin-1"
        assert runner.capturer.errors == "strict"

    def test_unknown_encoding_fails_before_running(self):
        with patch("subprocess.Popen") as mock_popen:
            with pytest.raises(LookupError):
                PipeCapturer(encoding="no-such-codec")
        mock_popen.assert_not_called()
