"""
Command line interface for cbx-safe-shell.

Subcommands:
    build     print the command line that would be run
    check     validate a program name
    run       run a program, exit with its status
    capture   run a program and print its stdout
    pipeline  run the steps in a YAML file
"""

import argparse
import sys
from typing import Optional, Sequence

from cbx_safe_shell import __version__
from cbx_safe_shell.config import load_config
from cbx_safe_shell.executor import (
    ContractViolationError,
    ShellRunner,
    build_command,
    create_runner,
    validate_program,
)
from cbx_safe_shell.pipeline import PipelineConfigError, load_steps, run_pipeline
from cbx_safe_shell.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

EXIT_CONTRACT_VIOLATION = 2


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="cbx-safe-shell",
        description="Build and run shell commands without injection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show the escaped command line
  cbx-safe-shell build grep -- -r "; rm -rf /" /path

  # Run a pipeline without executing anything
  cbx-safe-shell pipeline steps.yaml --dry-run
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"cbx-safe-shell {__version__}",
    )
    parser.add_argument(
        "--config-dir",
        type=str,
        help="Configuration directory path (default: ~/.cbx-safe-shell/)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        help="Logging level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="action", required=True)

    for name, help_text in (
        ("build", "Print the command line for PROGRAM and ARGS"),
        ("run", "Run PROGRAM with ARGS and exit with its status"),
        ("capture", "Run PROGRAM with ARGS and print its output"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("program", help="Program name or path")
        sub.add_argument("args", nargs=argparse.REMAINDER, help="Arguments")

    check = subparsers.add_parser("check", help="Validate a program name")
    check.add_argument("program", help="Program name to validate")

    pipeline = subparsers.add_parser("pipeline", help="Run steps from a YAML file")
    pipeline.add_argument("file", help="Path to the step file")
    pipeline.add_argument(
        "--dry-run",
        action="store_true",
        help="Print command lines without executing them",
    )

    return parser.parse_args(argv)


def _strip_separator(args: list[str]) -> list[str]:
    # argparse.REMAINDER keeps a leading "--"
    if args and args[0] == "--":
        return args[1:]
    return args


def _dispatch(args: argparse.Namespace, runner: ShellRunner) -> int:
    if args.action == "check":
        result = validate_program(args.program)
        if not result.ok:
            print(result.error, file=sys.stderr)
            return 1
        return 0

    if args.action == "pipeline":
        steps = load_steps(args.file)
        outcome = run_pipeline(steps, runner, dry_run=args.dry_run)
        for step in outcome.results:
            status = "SKIP" if step.skipped else ("PASS" if step.ok else "FAIL")
            print(f"  {step.name:<20} [{status}] {step.command_line}")
        print(outcome.summary())
        return 0 if outcome.ok else 1

    command_args = _strip_separator(args.args)

    if args.action == "build":
        print(build_command(args.program, command_args))
        return 0

    if args.action == "capture":
        captured = runner.capture(args.program, command_args)
        if not captured.ok:
            return 1
        sys.stdout.write(captured.output)
        return 0

    execution = runner.run(args.program, command_args)
    if execution.ok:
        return 0
    return execution.exit_code or 1


def main(argv: Optional[Sequence[str]] = None, runner: Optional[ShellRunner] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = load_config(args.config_dir)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    if args.log_level:
        config.logging.level = args.log_level

    setup_logging(config.logging.level, config.logging.file)

    if runner is None:
        runner = create_runner(config.shell)

    try:
        return _dispatch(args, runner)
    except ContractViolationError as e:
        logger.error(f"Refusing to build command: {e}")
        return EXIT_CONTRACT_VIOLATION
    except PipelineConfigError as e:
        logger.error(str(e))
        return 1
