"""
Test doubles shared across test modules.
"""

from __future__ import annotations

from paisanos.core.models.catalog import CatalogEntry
from paisanos.core.models.progress import Notice
from paisanos.core.models.run_state import RunState
from paisanos.core.models.step import FormulaStep, Step
from paisanos.core.services.setup.detection.package_manager import IdempotencyChecker


class RecordingSink:
    """ProgressSink that records every event in arrival order."""

    def __init__(self) -> None:
        self.events: list[tuple] = []
        self.ticks = 0
        self.final: RunState | None = None

    def notice(self, notice: Notice) -> None:
        self.events.append(("notice", notice.kind, notice.subject))

    def step_started(self, index: int, total: int, step: Step) -> None:
        self.events.append(("started", index, total))

    def tick(self) -> None:
        self.ticks += 1

    def finished(self, state: RunState) -> None:
        self.events.append(("finished", state.status))
        self.final = state

    @property
    def notices(self) -> list[tuple]:
        return [e for e in self.events if e[0] == "notice"]

    @property
    def started(self) -> list[int]:
        return [e[1] for e in self.events if e[0] == "started"]


class FakeChecker(IdempotencyChecker):
    """IdempotencyChecker answering from a fixed set of installed ids."""

    def __init__(self, brew_path: str | None, installed: set[str] | None = None) -> None:
        super().__init__(brew_path)
        self.installed = installed or set()
        self.checked: list[str] = []

    def is_satisfied(self, entry: CatalogEntry) -> bool:
        self.checked.append(entry.identifier)
        if self.brew_path is None:
            return False
        return entry.identifier in self.installed


def formula_step(name: str, *, notify: bool = True) -> FormulaStep:
    return FormulaStep(
        description=f"Installing {name}...",
        command="brew",
        args=("install", name),
        package=name,
        display_name=name,
        notify_on_success=notify,
    )
