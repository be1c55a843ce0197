"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from paisanos.core.models.catalog import Catalog, CatalogEntry, Category
from tests.support import RecordingSink


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def small_catalog() -> Catalog:
    """One missing-able formula and one cask, no app paths."""
    return {
        "fnm": CatalogEntry(display_name="fnm", identifier="fnm", category=Category.FORMULA),
        "figma": CatalogEntry(display_name="figma", identifier="figma", category=Category.CASK),
    }


@pytest.fixture
def profile_path(tmp_path: Path) -> Path:
    return tmp_path / ".zprofile"


@pytest.fixture
def restore_logging():
    """Put the root logger back the way it was after the test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
