"""
L1 Detection — Homebrew presence and installed-state queries.

Read-only probes.  Nothing here installs or modifies anything.
Absence is a normal ``False``, never an exception; a query that
errors out counts as "not installed" so the entry is still attempted.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path

from paisanos.core.models.catalog import CatalogEntry, Category

logger = logging.getLogger(__name__)

BREW = "brew"

# Apple Silicon first, then Intel.
KNOWN_BREW_PATHS = ("/opt/homebrew/bin/brew", "/usr/local/bin/brew")

QUERY_TIMEOUT = 30  # brew is slow


def locate_package_manager() -> str | None:
    """Find the brew executable.

    Checks ``PATH`` first, then the well-known install prefixes
    (a fresh install isn't on ``PATH`` until the profile is sourced).

    Returns:
        Absolute path to brew, or None if not installed.
    """
    found = shutil.which(BREW)
    if found:
        return found
    for candidate in KNOWN_BREW_PATHS:
        if os.path.isfile(candidate) and os.access(candidate, os.X_OK):
            return candidate
    return None


def _list_args(entry: CatalogEntry) -> list[str]:
    """``brew list`` scoped to the entry's category.

    Formula and cask scopes are distinct: ``brew list slack`` can't
    tell you whether the *cask* is installed.
    """
    scope = "--cask" if entry.category == Category.CASK else "--formula"
    return ["list", scope, entry.identifier]


class IdempotencyChecker:
    """Decides whether a catalog entry already holds on this machine.

    Args:
        brew_path: Path to brew, or None when the manager is absent.
            When absent, every entry is unsatisfied.
    """

    def __init__(self, brew_path: str | None) -> None:
        self.brew_path = brew_path

    @property
    def manager_present(self) -> bool:
        return self.brew_path is not None

    def is_satisfied(self, entry: CatalogEntry) -> bool:
        """Check whether ``entry`` is already installed.

        Order:
          1. ``app_path`` exists → installed (filesystem-backed).
          2. brew absent → not installed.
          3. ``brew list --formula|--cask ID`` exit code.
        """
        if entry.app_path and Path(entry.app_path).exists():
            logger.debug("%s: found at %s", entry.identifier, entry.app_path)
            return True

        if self.brew_path is None:
            return False

        cmd = [self.brew_path, *_list_args(entry)]
        try:
            r = subprocess.run(
                cmd,
                capture_output=True, timeout=QUERY_TIMEOUT,
            )
            logger.debug("%s → exit %d", " ".join(cmd), r.returncode)
            return r.returncode == 0
        except FileNotFoundError:
            logger.warning("brew not found at %s (checking %s)", self.brew_path, entry.identifier)
        except subprocess.TimeoutExpired:
            logger.warning("Timeout checking %s %s", entry.category, entry.identifier)
        except OSError as exc:
            logger.warning("OS error checking %s %s: %s", entry.category, entry.identifier, exc)

        return False
