"""
Workstation setup service — package re-exports.

Layers (each imports only from the ones above it):
    data → detection → planning → execution → orchestration

    from paisanos.core.services.setup import build_plan, SetupEventLoop
"""

# ── L0: Data ──
from paisanos.core.services.setup.data.catalog import (  # noqa: F401
    DEFAULT_CATALOG,
    EDITOR_CHOICES,
    apply_editor_choice,
)

# ── L1: Detection ──
from paisanos.core.services.setup.detection.package_manager import (  # noqa: F401
    IdempotencyChecker,
    locate_package_manager,
)
from paisanos.core.services.setup.detection.platform import (  # noqa: F401
    HostInfo,
    PreconditionError,
    check_preconditions,
)

# ── L2: Planning ──
from paisanos.core.services.setup.planning.plan_builder import (  # noqa: F401
    Plan,
    build_plan,
)

# ── L4: Execution ──
from paisanos.core.services.setup.execution.subprocess_runner import (  # noqa: F401
    StepResult,
    run_step,
)

# ── L5: Orchestration ──
from paisanos.core.services.setup.orchestration.event_loop import (  # noqa: F401
    SetupEventLoop,
)
from paisanos.core.services.setup.orchestration.orchestrator import (  # noqa: F401
    Orchestrator,
)
