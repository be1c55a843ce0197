"""
L1 Detection — ``__init__.py`` re-exports all detection functions.

These functions READ system state but never WRITE.
"""

from paisanos.core.services.setup.detection.package_manager import (  # noqa: F401
    KNOWN_BREW_PATHS,
    IdempotencyChecker,
    locate_package_manager,
)
from paisanos.core.services.setup.detection.platform import (  # noqa: F401
    HostInfo,
    PreconditionError,
    check_platform,
    check_preconditions,
    current_host,
)
