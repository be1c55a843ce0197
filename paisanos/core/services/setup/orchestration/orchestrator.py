"""
L5 Orchestration — Sequential plan executor (state machine).

The Orchestrator owns a RunState and reacts to three inputs:
``start()``, ``on_step_completed()`` and ``cancel()``.  It never runs
a process itself; it hands the next step to a ``launch`` callable
(the event loop starts a worker thread, tests record the call).

Invariants:
    - At most one step is in flight.
    - Step i+1 is launched only after step i's completion is observed.
    - After FAILED or CANCELLED nothing else is launched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from paisanos.core.models.progress import Notice, NoticeKind, ProgressSink
from paisanos.core.models.run_state import RunState, RunStatus, StepExecutionError
from paisanos.core.models.step import Step, step_subject
from paisanos.core.services.setup.execution.subprocess_runner import StepResult

logger = logging.getLogger(__name__)

# launch(index, step, env_overrides); must not block
LaunchFn = Callable[[int, Step, dict[str, str]], None]


class Orchestrator:
    """Runs a plan one step at a time.

    Args:
        steps: The plan's steps, in execution order.
        sink: Progress sink for notices and terminal state.
        launch: Starts a step in the background; must return immediately.
    """

    def __init__(self, steps: Sequence[Step], sink: ProgressSink, launch: LaunchFn) -> None:
        self.steps = list(steps)
        self.sink = sink
        self._launch = launch
        self.state = RunState()

    @property
    def total(self) -> int:
        return len(self.steps)

    # ── Transitions ──────────────────────────────────────────────

    def start(self) -> None:
        """IDLE → RUNNING, or IDLE → DONE for an empty plan."""
        if self.state.status != RunStatus.IDLE:
            raise RuntimeError(f"Cannot start from state {self.state.status}")

        if not self.steps:
            logger.info("Empty plan, nothing to do")
            self._finish(RunStatus.DONE)
            return

        self.state.status = RunStatus.RUNNING
        self._launch_current()

    def on_step_completed(self, index: int, result: StepResult) -> None:
        """Advance, fail, or finish based on a completion event."""
        if self.state.status != RunStatus.RUNNING:
            logger.debug("Ignoring completion of step %d in state %s", index, self.state.status)
            return
        if index != self.state.current_index:
            logger.debug(
                "Ignoring stale completion of step %d (current %d)",
                index, self.state.current_index,
            )
            return

        step = self.steps[index]

        # ── Failure ──
        if not result.ok:
            self.state.last_error = StepExecutionError(
                step.description,
                result.error or "failed",
                returncode=result.returncode,
                output=result.output,
            )
            logger.warning("Step %d/%d failed: %s", index + 1, self.total, result.error)
            self._finish(RunStatus.FAILED)
            return

        # ── Success ──
        logger.info(
            "Step %d/%d done in %dms: %s",
            index + 1, self.total, result.elapsed_ms, step.description,
        )
        if result.env_updates:
            self.state.env.update(result.env_updates)
        if step.notify_on_success:
            self.sink.notice(Notice(NoticeKind.SUCCEEDED, step_subject(step)))

        self.state.current_index += 1
        if self.state.current_index < self.total:
            self._launch_current()
        else:
            self._finish(RunStatus.DONE)

    def cancel(self) -> None:
        """RUNNING → CANCELLED.  The in-flight process is left alone."""
        if self.state.status != RunStatus.RUNNING:
            return
        logger.info("Run cancelled at step %d/%d", self.state.current_index + 1, self.total)
        self._finish(RunStatus.CANCELLED)

    # ── Internals ────────────────────────────────────────────────

    def _launch_current(self) -> None:
        index = self.state.current_index
        step = self.steps[index]
        self.state.launched.append(index)
        self.sink.step_started(index, self.total, step)
        self._launch(index, step, dict(self.state.env))

    def _finish(self, status: RunStatus) -> None:
        self.state.status = status
        self.sink.finished(self.state)
