"""
Pydantic models for safe shell configuration.

Configuration is explicit and passed to the components that need it;
nothing here is read from module-level globals.
"""

import codecs
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cbx_safe_shell.executor.validator import validate_program


class ShellSettings(BaseModel):
    """Settings for the default execution backends."""

    executable: str = Field(
        default="/bin/sh",
        description="POSIX shell used to interpret command lines",
    )
    encoding: str = Field(
        default="utf-8",
        description="Encoding used to decode captured output",
    )
    decode_errors: Literal["strict", "replace", "ignore", "backslashreplace"] = Field(
        default="replace",
        description="Error handler for decoding captured output",
    )

    @field_validator("executable")
    @classmethod
    def validate_executable(cls, v: str) -> str:
        """The shell path is never quoted, so it must be a safe program name."""
        result = validate_program(v)
        if not result.ok:
            raise ValueError(result.error)
        return v

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"unknown encoding: {v!r}")
        return v


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        description="Logging level",
    )
    file: Optional[str] = Field(
        default=None,
        description="Optional log file, in addition to stderr",
    )


class SafeShellConfig(BaseModel):
    """
    Main configuration container.

    Loaded from YAML files and environment variables, then passed to
    create_runner() and the CLI.
    """

    shell: ShellSettings = Field(default_factory=ShellSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # Allow extra fields to be ignored (forward compatibility)
    model_config = ConfigDict(extra="ignore")
