"""
L4 Execution — process invocation for plan steps.
"""

from paisanos.core.services.setup.execution.subprocess_runner import (  # noqa: F401
    StepResult,
    parse_env_dump,
    run_step,
)
