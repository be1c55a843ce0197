"""
L1 Detection — Host preconditions.

The installer only targets macOS.  These checks run before any plan
is built; failing them is fatal.
"""

from __future__ import annotations

import getpass
import logging
import platform
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

SUPPORTED_SYSTEM = "Darwin"
DEFAULT_PROFILE = ".zprofile"


class PreconditionError(Exception):
    """The host can't run the installer (wrong OS, no user/home)."""


@dataclass(frozen=True)
class HostInfo:
    """Who and where we are installing for."""

    username: str
    home: Path

    @property
    def profile_path(self) -> Path:
        return self.home / DEFAULT_PROFILE


def check_platform(system: str | None = None) -> None:
    """Fail fast unless running on macOS.

    Raises:
        PreconditionError: On any other operating system.
    """
    system = system or platform.system()
    if system != SUPPORTED_SYSTEM:
        raise PreconditionError(
            f"This installer only works on macOS (detected {system or 'unknown'})."
        )


def current_host() -> HostInfo:
    """Resolve the current user name and home directory.

    Raises:
        PreconditionError: If either cannot be determined.
    """
    try:
        username = getpass.getuser()
    except (KeyError, OSError) as exc:
        raise PreconditionError(f"Error getting current user: {exc}") from exc

    try:
        home = Path.home()
    except (KeyError, RuntimeError) as exc:
        raise PreconditionError(f"Error resolving home directory: {exc}") from exc

    logger.debug("Host user=%s home=%s", username, home)
    return HostInfo(username=username, home=home)


def check_preconditions(system: str | None = None) -> HostInfo:
    """Run every precondition and return the resolved host."""
    check_platform(system)
    return current_host()
