"""Interactive greeter.

Prompts for a name, reads exactly one line of input and prints an
upper-cased greeting. End-of-input is reported as ``InputExhaustedError``
instead of being passed on as a missing value.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import TextIO

from linegreet_core import redact, strip_ansi

from .errors import InputExhaustedError, InputReadError

logger = logging.getLogger(__name__)

__all__ = [
    "ConsoleInput",
    "DEFAULT_GREETING_PREFIX",
    "DEFAULT_PROMPT",
    "format_greeting",
    "greet",
]

DEFAULT_PROMPT = "Enter name: "
DEFAULT_GREETING_PREFIX = "Hello "


class ConsoleInput:
    """Scoped reader over a text input stream.

    The underlying stream is closed on release only when the reader owns it;
    process stdin is borrowed and left open for the interpreter.
    """

    def __init__(self, stream: TextIO, *, owns_stream: bool = False) -> None:
        self._stream = stream
        self._owns_stream = owns_stream
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def read_line(self) -> str:
        """Read one line and return it without its terminator.

        Raises:
            InputExhaustedError: If the stream is at end-of-input.
            InputReadError: If the stream cannot be read or decoded.
            ValueError: If the reader has been closed.
        """
        if self._closed:
            raise ValueError("read from closed ConsoleInput")
        try:
            raw = self._stream.readline()
        except UnicodeDecodeError as exc:
            raise InputReadError(f"not valid {exc.encoding} text") from exc
        except OSError as exc:
            raise InputReadError(type(exc).__name__) from exc
        if raw == "":
            logger.info("input_exhausted")
            raise InputExhaustedError()
        if raw.endswith("\r\n"):
            return raw[:-2]
        if raw.endswith("\n"):
            return raw[:-1]
        return raw

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_stream:
            self._stream.close()
        logger.debug("input_released", extra={"owned": self._owns_stream})

    def __enter__(self) -> ConsoleInput:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def format_greeting(name: str, prefix: str = DEFAULT_GREETING_PREFIX) -> str:
    """Build the greeting for ``name``.

    Terminal escape sequences are stripped before upper-casing. ``str.upper``
    applies Unicode case rules and does not depend on the process locale.
    """
    return prefix + strip_ansi(name).upper()


def greet(
    stdin: TextIO,
    out: TextIO,
    *,
    prompt: str = DEFAULT_PROMPT,
    prefix: str = DEFAULT_GREETING_PREFIX,
    owns_stdin: bool = False,
) -> str:
    """Prompt on ``out``, read one line from ``stdin`` and print the greeting.

    Args:
        stdin: Stream to read the name from.
        out: Stream for the prompt and the greeting.
        prompt: Text written before reading, without a trailing newline.
        prefix: Greeting prefix placed before the upper-cased name.
        owns_stdin: Close ``stdin`` once the name has been read.

    Returns:
        The greeting that was printed (without newline).

    Raises:
        InputExhaustedError: If ``stdin`` has no line to read.
        InputReadError: If ``stdin`` cannot be read or decoded.
    """
    out.write(prompt)
    out.flush()
    with ConsoleInput(stdin, owns_stream=owns_stdin) as console_input:
        name = console_input.read_line()
    logger.debug("name_read", extra={"input_text": redact(name), "length": len(name)})

    greeting = format_greeting(name, prefix)
    out.write(greeting + "\n")
    out.flush()
    return greeting
