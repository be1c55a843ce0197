"""
L5 Orchestration — sequential plan execution.
"""

from paisanos.core.services.setup.orchestration.event_loop import (  # noqa: F401
    SetupEventLoop,
)
from paisanos.core.services.setup.orchestration.events import (  # noqa: F401
    CancelRequested,
    StepCompleted,
    Tick,
)
from paisanos.core.services.setup.orchestration.orchestrator import (  # noqa: F401
    Orchestrator,
)
