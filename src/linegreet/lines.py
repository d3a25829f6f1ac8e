"""File line printer.

Reads a text source line by line and echoes each line to standard output.
The file handle is scoped to a ``with`` block so it is released on every
exit path, including decode failures partway through the file and early
termination of the iteration.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

from .errors import SourceNotFoundError, SourceReadError

logger = logging.getLogger(__name__)

__all__ = [
    "echo_lines",
    "open_lines",
]

DEFAULT_ENCODING = "utf-8"


@contextmanager
def open_lines(path: Path, *, encoding: str = DEFAULT_ENCODING) -> Iterator[Iterator[str]]:
    """Open ``path`` and yield a lazy iterator over its lines.

    Lines are yielded without their terminator. The handle is closed exactly
    once when the ``with`` block exits.

    Args:
        path: Text file to read.
        encoding: Text encoding of the file.

    Raises:
        SourceNotFoundError: If the path does not exist.
        SourceReadError: If the path cannot be opened or decoded.
    """
    try:
        handle = path.open("r", encoding=encoding)
    except FileNotFoundError as exc:
        logger.info("source_missing", extra={"file_path": path.name})
        raise SourceNotFoundError(path) from exc
    except IsADirectoryError as exc:
        raise SourceReadError(path, "is a directory") from exc
    except LookupError as exc:
        raise SourceReadError(path, f"unknown encoding {encoding!r}") from exc
    except OSError as exc:
        raise SourceReadError(path, type(exc).__name__) from exc

    logger.debug("source_opened", extra={"file_path": path.name, "encoding": encoding})
    try:
        yield _iter_lines(handle, path)
    finally:
        handle.close()
        logger.debug("source_closed", extra={"file_path": path.name})


def _iter_lines(handle: TextIO, path: Path) -> Iterator[str]:
    try:
        for raw in handle:
            yield raw.rstrip("\n")
    except UnicodeDecodeError as exc:
        raise SourceReadError(path, f"not valid {exc.encoding} text") from exc
    except OSError as exc:
        raise SourceReadError(path, type(exc).__name__) from exc


def echo_lines(
    path: Path,
    *,
    encoding: str = DEFAULT_ENCODING,
    out: TextIO | None = None,
) -> int:
    """Print every line of ``path`` to ``out`` in file order.

    Args:
        path: Text file to echo.
        encoding: Text encoding of the file.
        out: Destination stream (defaults to the current ``sys.stdout``).

    Returns:
        Number of lines printed.
    """
    stream = out if out is not None else sys.stdout
    count = 0
    with open_lines(path, encoding=encoding) as lines:
        for line in lines:
            stream.write(line + "\n")
            count += 1
    stream.flush()
    return count
