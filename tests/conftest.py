"""Shared pytest fixtures for the webmenu test-suite."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from webmenu import Link, Menu


@pytest.fixture
def site_menu() -> Menu:
    """Return a two-level site menu with a home link and a docs section."""

    return (
        Menu.new()
        .link("/", "Home")
        .link("/about", "About")
        .submenu(
            "<span>Docs</span>",
            lambda docs: docs.link("/docs/install", "Install").link("/docs/usage", "Usage"),
        )
        .link("/contact", "Contact")
    )


@pytest.fixture
def flat_links() -> list[Link]:
    """Return three unattached links."""

    return [Link.to("/", "Home"), Link.to("/about", "About"), Link.to("/contact", "Contact")]


@pytest.fixture(autouse=True)
def quiet_menu_logging() -> Iterator[None]:
    """Keep DEBUG menu events out of the test output unless a test asks for them."""

    logger = logging.getLogger("webmenu")
    previous_level = logger.level
    previous_handlers = list(logger.handlers)
    previous_propagate = logger.propagate
    logger.setLevel(logging.WARNING)
    yield
    logger.setLevel(previous_level)
    logger.handlers = previous_handlers
    logger.propagate = previous_propagate
