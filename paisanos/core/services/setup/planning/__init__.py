"""
L2 Planning — catalog → ordered plan.
"""

from paisanos.core.services.setup.planning.plan_builder import (  # noqa: F401
    HOMEBREW_INSTALL_URL,
    Plan,
    bootstrap_steps,
    build_plan,
    install_step,
    shellenv_line,
)
