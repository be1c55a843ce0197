"""
Setup use case — from user intent to a finished run.

    preconditions → catalog + editor choice → brew detection → plan → event loop

The CLI calls ``prepare_plan()`` (also used by the dry-run ``plan``
command) and then ``execute_plan()``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from paisanos.core.models.catalog import Catalog
from paisanos.core.models.progress import ProgressSink
from paisanos.core.models.run_state import RunState
from paisanos.core.models.settings import SetupConfig
from paisanos.core.services.setup.data.catalog import DEFAULT_CATALOG, apply_editor_choice
from paisanos.core.services.setup.detection.package_manager import (
    IdempotencyChecker,
    locate_package_manager,
)
from paisanos.core.services.setup.detection.platform import (
    HostInfo,
    PreconditionError,
    check_preconditions,
)
from paisanos.core.services.setup.orchestration.event_loop import SetupEventLoop, StepRunner
from paisanos.core.services.setup.planning.plan_builder import NoticeCallback, Plan, build_plan

logger = logging.getLogger(__name__)


@dataclass
class PlanResult:
    """Result of planning a setup run."""

    plan: Plan | None = None
    host: HostInfo | None = None
    brew_path: str | None = None
    profile_path: Path | None = None
    catalog: Catalog = field(default_factory=dict)
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "user": self.host.username if self.host else "",
            "brew": self.brew_path,
            "profile": str(self.profile_path) if self.profile_path else None,
            "catalog": {
                key: entry.model_dump(mode="json") for key, entry in self.catalog.items()
            },
            "plan": self.plan.to_dict() if self.plan else None,
        }


def resolve_catalog(config: SetupConfig, editor: str | None) -> Catalog:
    """Configured (or default) catalog narrowed to the editor choice."""
    base = config.catalog if config.catalog is not None else DEFAULT_CATALOG
    return apply_editor_choice(base, editor)


def prepare_plan(
    config: SetupConfig,
    *,
    editor: str | None = None,
    on_notice: NoticeCallback | None = None,
    system: str | None = None,
    host: HostInfo | None = None,
) -> PlanResult:
    """Check preconditions and build the plan.  Runs nothing.

    Args:
        config: Setup settings.
        editor: Editor choice (``neovim``, ``vscode``, ``cursor``, ``none``).
        on_notice: Receives skip/info notices while planning.
        system: Override for ``platform.system()`` (tests).
        host: Host already resolved by ``check_preconditions()``; the
            precondition checks are skipped when given.

    Returns:
        PlanResult — ``error`` is set when a precondition fails.
    """
    result = PlanResult(host=host)

    if result.host is None:
        try:
            result.host = check_preconditions(system)
        except PreconditionError as e:
            result.error = str(e)
            return result

    result.catalog = resolve_catalog(config, editor)

    result.brew_path = locate_package_manager()
    logger.info("Homebrew: %s", result.brew_path or "not installed")

    result.profile_path = (
        Path(config.profile_path).expanduser()
        if config.profile_path
        else result.host.profile_path
    )

    result.plan = build_plan(
        result.catalog,
        IdempotencyChecker(result.brew_path),
        profile_path=result.profile_path,
        config=config,
        on_notice=on_notice,
    )
    return result


def execute_plan(
    plan: Plan,
    sink: ProgressSink,
    config: SetupConfig,
    *,
    animate: bool = True,
    runner: StepRunner | None = None,
) -> RunState:
    """Run the plan to a terminal state, reporting to ``sink``."""
    loop = SetupEventLoop(
        plan.steps,
        sink,
        tick_interval=config.spinner_interval if animate else None,
        runner=runner,
        step_timeout=config.step_timeout,
    )
    state = loop.run()
    logger.info("Setup finished: %s", state.status)
    return state
