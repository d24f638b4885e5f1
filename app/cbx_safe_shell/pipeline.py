"""
Ordered command pipelines.

A pipeline is a list of named steps run one after another through a
ShellRunner. The first failing step halts the run. In dry-run mode every
command line is built (so invalid programs still fail fast) but nothing is
executed.

Step files are YAML:

    steps:
      - name: lint
        program: ruff
        args: [check, src]
      - name: test
        program: pytest
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from cbx_safe_shell.executor.builder import build_command
from cbx_safe_shell.executor.runner import ShellRunner
from cbx_safe_shell.executor.types import ShellSafetyError
from cbx_safe_shell.executor.validator import validate_program
from cbx_safe_shell.utils.logging import get_logger

logger = get_logger(__name__)


class PipelineConfigError(ShellSafetyError):
    """Raised when a step file cannot be read or validated."""

    pass


class Step(BaseModel):
    """A single pipeline step."""

    name: str = Field(min_length=1)
    program: str
    args: list[str] = Field(default_factory=list)

    @field_validator("program")
    @classmethod
    def validate_program_name(cls, v: str) -> str:
        result = validate_program(v)
        if not result.ok:
            raise ValueError(result.error)
        return v


@dataclass
class StepResult:
    """Outcome of one step."""

    name: str
    command_line: str
    ok: bool
    exit_code: Optional[int] = None
    skipped: bool = False
    elapsed_ms: float = 0.0


@dataclass
class PipelineResult:
    """Outcome of a pipeline run."""

    ok: bool
    results: list[StepResult] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.ok and not r.skipped)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.ok)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if r.skipped)

    def summary(self) -> str:
        """Generate summary message, e.g. ``2 passed, 1 failed``."""
        parts = [f"{self.passed} passed"]
        if self.failed:
            parts.append(f"{self.failed} failed")
        if self.skipped:
            parts.append(f"{self.skipped} skipped")
        return ", ".join(parts)


def run_pipeline(
    steps: list[Step],
    runner: ShellRunner,
    dry_run: bool = False,
) -> PipelineResult:
    """
    Run steps in order, halting on the first failure.

    Args:
        steps: Steps to run; must not be empty
        runner: ShellRunner used to execute each step
        dry_run: Build command lines without executing them

    Returns:
        PipelineResult with one StepResult per step reached

    Raises:
        ValueError: If ``steps`` is empty
    """
    if not steps:
        raise ValueError("pipeline must have at least one step")

    results: list[StepResult] = []
    total = len(steps)

    for i, step in enumerate(steps, start=1):
        command_line = build_command(step.program, step.args)

        if dry_run:
            logger.info(f"step {i}/{total}: {step.name} -> {command_line} (skipped)")
            results.append(
                StepResult(name=step.name, command_line=command_line, ok=True, skipped=True)
            )
            continue

        logger.info(f"step {i}/{total}: {step.name} -> {command_line}")
        start = time.perf_counter()
        execution = runner.run(step.program, step.args)
        elapsed_ms = (time.perf_counter() - start) * 1000

        results.append(
            StepResult(
                name=step.name,
                command_line=command_line,
                ok=execution.ok,
                exit_code=execution.exit_code,
                elapsed_ms=elapsed_ms,
            )
        )

        if not execution.ok:
            logger.error(f"step {step.name} failed, halting pipeline")
            return PipelineResult(ok=False, results=results)

        logger.info(f"step {step.name} passed ({elapsed_ms:.2f} ms)")

    return PipelineResult(ok=True, results=results)


def load_steps(path: str | Path) -> list[Step]:
    """
    Load and validate steps from a YAML file.

    Raises:
        PipelineConfigError: If the file is missing or malformed, holds no
            steps, or a step is invalid
    """
    path = Path(path)
    try:
        with open(path) as f:
            content = yaml.safe_load(f)
    except OSError as e:
        raise PipelineConfigError(f"Cannot read step file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise PipelineConfigError(f"Failed to parse {path}: {e}") from e

    if not isinstance(content, dict) or not isinstance(content.get("steps"), list):
        raise PipelineConfigError(f"{path}: expected a top-level 'steps' list")

    if not content["steps"]:
        raise PipelineConfigError(f"{path}: 'steps' must not be empty")

    try:
        return [Step.model_validate(item) for item in content["steps"]]
    except ValidationError as e:
        raise PipelineConfigError(f"{path}: invalid step: {e}") from e
