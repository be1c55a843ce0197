"""
L2 Planning — Turn a catalog into an ordered, pre-filtered plan.

Plan layout:
    [bootstrap install, bootstrap profile, bootstrap shellenv]   ← only if brew is absent
    [one install step per enabled, unsatisfied entry]            ← catalog order

Satisfied entries never reach the plan; they produce a ``skipped``
notice instead.  Satisfaction is checked exactly once, here.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from paisanos.core.models.catalog import Catalog, CatalogEntry, Category
from paisanos.core.models.progress import Notice, NoticeKind
from paisanos.core.models.settings import SetupConfig
from paisanos.core.models.step import (
    BootstrapPhase,
    BootstrapStep,
    CaskStep,
    FormulaStep,
    Step,
    step_adapter,
)
from paisanos.core.services.setup.data.catalog import enabled_entries
from paisanos.core.services.setup.detection.package_manager import IdempotencyChecker

logger = logging.getLogger(__name__)

HOMEBREW_INSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"

NoticeCallback = Callable[[Notice], None]


@dataclass
class Plan:
    """Ordered steps for one run, plus what was left out."""

    steps: list[Step] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    bootstrap: bool = False

    def __len__(self) -> int:
        return len(self.steps)

    @property
    def is_empty(self) -> bool:
        return not self.steps

    def to_dict(self) -> dict:
        return {
            "bootstrap": self.bootstrap,
            "total": len(self.steps),
            "steps": [step_adapter.dump_python(s, mode="json") for s in self.steps],
            "skipped": list(self.skipped),
        }


def shellenv_line(brew_bin: str) -> str:
    """The profile line that puts brew on PATH."""
    return f'eval "$({brew_bin} shellenv)"'


def bootstrap_steps(profile_path: Path, brew_prefix: str) -> list[BootstrapStep]:
    """The fixed bootstrap triplet: install, profile, shellenv.

    The profile step appends a blank line plus the shellenv line, and
    is a no-op when that exact line is already in the file.  The
    shellenv step dumps the resulting environment NUL-separated, or
    one variable per line where ``env`` has no ``-0``.
    """
    brew_bin = f"{brew_prefix.rstrip('/')}/bin/brew"
    line = shlex.quote(shellenv_line(brew_bin))
    profile = shlex.quote(str(profile_path))

    return [
        BootstrapStep(
            phase=BootstrapPhase.INSTALL,
            description="Installing Homebrew...",
            command="/bin/bash",
            args=("-c", f'/bin/bash -c "$(curl -fsSL {HOMEBREW_INSTALL_URL})"'),
            env={"NONINTERACTIVE": "1"},
        ),
        BootstrapStep(
            phase=BootstrapPhase.PROFILE,
            description="Configuring Homebrew...",
            command="/bin/bash",
            args=(
                "-c",
                f"grep -qxF {line} {profile} 2>/dev/null"
                f" || printf '\\n%s\\n' {line} >> {profile}",
            ),
        ),
        BootstrapStep(
            phase=BootstrapPhase.SHELLENV,
            description="Evaluating Homebrew environment...",
            command="/bin/bash",
            args=("-c", f"{shellenv_line(brew_bin)} && {{ env -0 2>/dev/null || env; }}"),
            captures_env=True,
        ),
    ]


def install_step(entry: CatalogEntry, brew_bin: str) -> Step:
    """Build the install step for one catalog entry."""
    description = f"Installing {entry.display_name}..."
    if entry.category == Category.CASK:
        return CaskStep(
            description=description,
            command=brew_bin,
            args=("install", "--cask", entry.identifier),
            package=entry.identifier,
            display_name=entry.display_name,
            notify_on_success=True,
        )
    return FormulaStep(
        description=description,
        command=brew_bin,
        args=("install", entry.identifier),
        package=entry.identifier,
        display_name=entry.display_name,
        notify_on_success=True,
    )


def build_plan(
    catalog: Catalog,
    checker: IdempotencyChecker,
    *,
    profile_path: Path,
    config: SetupConfig | None = None,
    on_notice: NoticeCallback | None = None,
) -> Plan:
    """Build the ordered plan for a run.

    Args:
        catalog: Desired entries, in install order.
        checker: Idempotency checker bound to the current brew state.
            ``checker.manager_present`` decides whether bootstrap is needed.
        profile_path: Shell profile the bootstrap appends to.
        config: Setup settings (brew prefix).
        on_notice: Receives ``info``/``skipped`` notices as they're
            decided, before any step runs.

    Returns:
        Plan — possibly empty.
    """
    config = config or SetupConfig()
    notify = on_notice or (lambda _notice: None)
    plan = Plan()

    if checker.manager_present:
        brew_bin = checker.brew_path or "brew"
        notify(Notice(
            NoticeKind.INFO, "Homebrew",
            "Homebrew is already installed, skipping its installation.",
        ))
    else:
        plan.bootstrap = True
        plan.steps.extend(bootstrap_steps(profile_path, config.brew_prefix))
        brew_bin = f"{config.brew_prefix.rstrip('/')}/bin/brew"

    disabled = [key for key, entry in catalog.items() if not entry.enabled]
    if disabled:
        logger.info("Not selected: %s", ", ".join(disabled))

    for key, entry in enabled_entries(catalog):
        if checker.is_satisfied(entry):
            plan.skipped.append(key)
            notify(Notice(NoticeKind.SKIPPED, entry.display_name))
            continue
        plan.steps.append(install_step(entry, brew_bin))

    logger.info(
        "Plan: %d step(s), %d skipped, bootstrap=%s",
        len(plan.steps), len(plan.skipped), plan.bootstrap,
    )
    return plan
