"""
Progress contract — what the orchestrator tells the renderer.

The renderer is an outer-layer concern.  The core only knows this
protocol: it never prints, it calls a ``ProgressSink``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from paisanos.core.models.run_state import RunState
    from paisanos.core.models.step import Step


class NoticeKind(StrEnum):
    """Permanent lines printed above the live status area."""

    INFO = "info"
    SKIPPED = "skipped"
    SUCCEEDED = "succeeded"


@dataclass(frozen=True)
class Notice:
    kind: NoticeKind
    subject: str
    message: str = ""

    @property
    def text(self) -> str:
        if self.message:
            return self.message
        if self.kind == NoticeKind.SKIPPED:
            return f"■ {self.subject} is already installed."
        if self.kind == NoticeKind.SUCCEEDED:
            return f"■ {self.subject} installed successfully."
        return self.subject


class ProgressSink(Protocol):
    """Receives progress events.  Implementations must not block."""

    def notice(self, notice: Notice) -> None: ...

    def step_started(self, index: int, total: int, step: Step) -> None: ...

    def tick(self) -> None: ...

    def finished(self, state: RunState) -> None: ...
