"""Echo a text file line by line, then greet the user by name."""

from __future__ import annotations

from .errors import (
    ConfigError,
    InputExhaustedError,
    InputReadError,
    LineGreetError,
    SourceError,
    SourceNotFoundError,
    SourceReadError,
)
from .greeter import ConsoleInput, format_greeting, greet
from .lines import echo_lines, open_lines

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "ConfigError",
    "ConsoleInput",
    "echo_lines",
    "format_greeting",
    "greet",
    "InputExhaustedError",
    "InputReadError",
    "LineGreetError",
    "open_lines",
    "SourceError",
    "SourceNotFoundError",
    "SourceReadError",
]
