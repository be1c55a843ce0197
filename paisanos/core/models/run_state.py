"""
Run state — what the orchestrator knows about the current run.

States:
    IDLE      → created, not started.
    RUNNING   → one step in flight at ``current_index``.
    DONE      → every step succeeded (or the plan was empty).
    FAILED    → a step failed; ``last_error`` says which and why.
    CANCELLED → the user interrupted; no error is recorded.

Transitions:
    IDLE → RUNNING:     start() with a non-empty plan
    IDLE → DONE:        start() with an empty plan
    RUNNING → RUNNING:  step succeeded, more steps remain
    RUNNING → DONE:     last step succeeded
    RUNNING → FAILED:   step completed with an error
    RUNNING → CANCELLED: cancel()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class RunStatus(StrEnum):
    """Orchestrator states."""

    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"
    CANCELLED = "cancelled"


TERMINAL_STATUSES = frozenset({RunStatus.DONE, RunStatus.FAILED, RunStatus.CANCELLED})


class StepExecutionError(Exception):
    """A step exited non-zero or could not be launched."""

    def __init__(
        self,
        description: str,
        message: str,
        *,
        returncode: int | None = None,
        output: str = "",
    ) -> None:
        super().__init__(f"{description!r} failed: {message}")
        self.description = description
        self.message = message
        self.returncode = returncode
        self.output = output


@dataclass
class RunState:
    """Mutable state owned by a single Orchestrator."""

    current_index: int = 0
    status: RunStatus = RunStatus.IDLE
    last_error: StepExecutionError | None = None
    env: dict[str, str] = field(default_factory=dict)
    launched: list[int] = field(default_factory=list)

    @property
    def terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def to_dict(self) -> dict:
        return {
            "status": str(self.status),
            "current_index": self.current_index,
            "launched": list(self.launched),
            "error": str(self.last_error) if self.last_error else None,
        }
