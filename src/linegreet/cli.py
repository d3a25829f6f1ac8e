from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from . import __version__
from .config import ConfigOverrides, Settings, load_config, resolve_config_path
from .errors import LineGreetError, SourceError
from .greeter import greet
from .lines import echo_lines
from .output import configure_logging, report_error, report_warning

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def main(argv: Sequence[str] | None = None) -> int:
    args = list(argv) if argv is not None else sys.argv[1:]

    parser = argparse.ArgumentParser(
        prog="linegreet",
        description="Echo a text file line by line, then greet the user.",
    )
    parser.add_argument("--source", type=str, help="Text file to echo (default: input.txt)")
    parser.add_argument("--config", type=str, help="Path to config file")
    parser.add_argument("--encoding", type=str, help="Encoding of the source file")
    parser.add_argument(
        "--skip-missing",
        action="store_true",
        help="Warn about a missing or unreadable source and continue",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"linegreet {__version__}")

    parsed = parser.parse_args(args)
    configure_logging(parsed.verbose)

    try:
        settings = _load_settings(parsed)
        return _run(settings)
    except LineGreetError as exc:
        report_error(exc)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        report_error("Interrupted")
        return EXIT_INTERRUPTED


def _load_settings(parsed: argparse.Namespace) -> Settings:
    cfg_path, explicit = resolve_config_path(parsed.config)
    overrides = ConfigOverrides(
        source=Path(parsed.source) if parsed.source else None,
        encoding=parsed.encoding,
        skip_missing=parsed.skip_missing,
    )
    return load_config(cfg_path, explicit=explicit, overrides=overrides)


def _run(settings: Settings) -> int:
    try:
        echo_lines(settings.source, encoding=settings.encoding, out=sys.stdout)
    except SourceError as exc:
        if not settings.skip_missing_source:
            raise
        report_warning(exc)

    greet(
        sys.stdin,
        sys.stdout,
        prompt=settings.prompt,
        prefix=settings.greeting_prefix,
    )
    return EXIT_OK
