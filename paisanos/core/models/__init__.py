"""
Domain models — types shared by the setup service and the CLI.

    from paisanos.core.models import CatalogEntry, Step, RunState, SetupConfig
"""

from paisanos.core.models.catalog import Catalog, CatalogEntry, Category
from paisanos.core.models.progress import Notice, NoticeKind, ProgressSink
from paisanos.core.models.run_state import (
    TERMINAL_STATUSES,
    RunState,
    RunStatus,
    StepExecutionError,
)
from paisanos.core.models.settings import SetupConfig
from paisanos.core.models.step import (
    BootstrapPhase,
    BootstrapStep,
    CaskStep,
    FormulaStep,
    Step,
    StepKind,
    step_adapter,
    step_subject,
)

__all__ = [
    # catalog.py
    "Catalog",
    "CatalogEntry",
    "Category",
    # progress.py
    "Notice",
    "NoticeKind",
    "ProgressSink",
    # run_state.py
    "TERMINAL_STATUSES",
    "RunState",
    "RunStatus",
    "StepExecutionError",
    # settings.py
    "SetupConfig",
    # step.py
    "BootstrapPhase",
    "BootstrapStep",
    "CaskStep",
    "FormulaStep",
    "Step",
    "StepKind",
    "step_adapter",
    "step_subject",
]
