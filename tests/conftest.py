from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep host LINEGREET_* settings and verbose handlers out of tests."""
    for var in ("LINEGREET_CONFIG", "LINEGREET_SOURCE", "LINEGREET_ENCODING"):
        monkeypatch.delenv(var, raising=False)

    package_logger = logging.getLogger("linegreet")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
