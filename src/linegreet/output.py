"""Rich diagnostic output for linegreet.

Diagnostics go to standard error through a themed console. Program output
(echoed lines and the greeting) is written as plain text elsewhere so that
content never passes through rich markup.
"""

from __future__ import annotations

import logging
import re

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text
from rich.theme import Theme

from linegreet_core import strip_ansi

__all__ = [
    "configure_logging",
    "err_console",
    "report_error",
    "report_warning",
    "sanitize_error",
]

LINEGREET_THEME = Theme(
    {
        "info": "dim cyan",
        "warning": "yellow",
        "danger": "bold red",
        "muted": "dim white",
    }
)

err_console = Console(theme=LINEGREET_THEME, stderr=True, highlight=False)

# Absolute path tokens with at least two segments, e.g. /home/user/x or C:\Users\x.
_PATH_PATTERN = re.compile(r"(?:(?<=\s)|^)(?:[A-Za-z]:)?(?:[/\\][^\s/\\:]+){2,}")


def sanitize_error(error: str | Exception, *, max_length: int = 200) -> str:
    """Sanitize error messages for user display.

    Removes full paths and line references so messages do not disclose
    local filesystem layout.

    Args:
        error: Error message or exception to sanitize.
        max_length: Maximum length of returned message.

    Returns:
        Sanitized, truncated error message.
    """
    message = str(error) if isinstance(error, Exception) else error
    message = strip_ansi(message)
    message = _PATH_PATTERN.sub("[path]", message)
    message = re.sub(r"line \d+", "line [N]", message, flags=re.IGNORECASE)

    if len(message) > max_length:
        message = message[:max_length] + "..."

    return message


def report_error(error: str | Exception) -> None:
    text = Text("error: ", style="danger")
    text.append(sanitize_error(error))
    err_console.print(text)


def report_warning(error: str | Exception) -> None:
    text = Text("warning: ", style="warning")
    text.append(sanitize_error(error))
    err_console.print(text)


def configure_logging(verbose: bool) -> None:
    """Attach a rich handler to the package logger when ``verbose`` is set."""
    if not verbose:
        return
    package_logger = logging.getLogger("linegreet")
    if any(isinstance(h, RichHandler) for h in package_logger.handlers):
        return
    handler = RichHandler(console=err_console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
