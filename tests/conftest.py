"""Shared pytest fixtures."""

from __future__ import annotations

import logging
import os

import pytest

_ENV_PREFIX = "MODSCOPE_"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop modscope environment overrides inherited from the shell."""
    for name in list(os.environ):
        if name.startswith(_ENV_PREFIX):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def scope_logger() -> logging.Logger:
    """Return a logger dedicated to change-scope tests.

    Returns
    -------
    logging.Logger
        Logger at DEBUG level that propagates to caplog.
    """
    logger = logging.getLogger("tests.modscope")
    logger.setLevel(logging.DEBUG)
    return logger
