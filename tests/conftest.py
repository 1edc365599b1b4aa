"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from chessrules.game.events import GameEvents
from chessrules.game.state import GameState


@pytest.fixture
def events() -> GameEvents:
    return GameEvents()


@pytest.fixture
def game(events: GameEvents) -> GameState:
    """A fresh game wired to the ``events`` fixture."""
    return GameState(events)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Keep ``main()``'s basicConfig from leaking handlers into other tests."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
