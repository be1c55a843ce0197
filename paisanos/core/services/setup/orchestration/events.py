"""
L5 Orchestration — Events consumed by the setup event loop.

Three sources feed one queue: the ticker thread, step worker threads,
and cancellation (Ctrl-C or an explicit request).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from paisanos.core.services.setup.execution.subprocess_runner import StepResult


@dataclass(frozen=True)
class Tick:
    """Spinner heartbeat; independent of step progress."""


@dataclass(frozen=True)
class StepCompleted:
    """The process for plan step ``index`` has finished."""

    index: int
    result: StepResult


@dataclass(frozen=True)
class CancelRequested:
    """The user asked to abandon the run."""

    reason: str = "interrupted"


Event = Union[Tick, StepCompleted, CancelRequested]
