"""Error kinds raised by linegreet.

Library code raises these; only the CLI catches them and maps them to exit codes.
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "ConfigError",
    "InputExhaustedError",
    "InputReadError",
    "LineGreetError",
    "SourceError",
    "SourceNotFoundError",
    "SourceReadError",
]


class LineGreetError(Exception):
    """Base class for all reported failures."""


class SourceError(LineGreetError, OSError):
    """The text source could not be read.

    Attributes:
        path: Path of the source that failed.
    """

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        return str(self.args[0])


class SourceNotFoundError(SourceError):
    def __init__(self, path: Path) -> None:
        super().__init__(path, f"Source file not found: {path.name}")


class SourceReadError(SourceError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(path, f"Cannot read source file {path.name}: {reason}")
        self.reason = reason


class InputExhaustedError(LineGreetError):
    """Standard input reached end-of-stream before a line was read."""

    def __init__(self, message: str = "No input provided (end of input reached)") -> None:
        super().__init__(message)


class InputReadError(LineGreetError):
    """Standard input could not be read or decoded."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Cannot read input: {reason}")
        self.reason = reason


class ConfigError(LineGreetError):
    """Invalid or unreadable configuration."""
