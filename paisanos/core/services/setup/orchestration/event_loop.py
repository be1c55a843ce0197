"""
L5 Orchestration — Single-consumer event loop around the Orchestrator.

    ticker thread ──┐
    step worker ────┼──► queue.Queue ──► loop (calling thread) ──► Orchestrator / sink
    Ctrl-C ─────────┘

All state changes happen on the calling thread, in arrival order.
Worker threads only run the process and post one StepCompleted; the
ticker only posts Tick.  Neither touches the RunState.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable, Sequence

from paisanos.core.models.progress import ProgressSink
from paisanos.core.models.run_state import RunState
from paisanos.core.models.step import Step
from paisanos.core.services.setup.execution.subprocess_runner import StepResult, run_step
from paisanos.core.services.setup.orchestration.events import (
    CancelRequested,
    Event,
    StepCompleted,
    Tick,
)
from paisanos.core.services.setup.orchestration.orchestrator import Orchestrator

logger = logging.getLogger(__name__)

# runner(step, env_overrides=..., timeout=...) → StepResult
StepRunner = Callable[..., StepResult]


class SetupEventLoop:
    """Drives one plan to a terminal state.

    Args:
        steps: The plan's steps.
        sink: Progress sink (renderer).
        tick_interval: Seconds between Tick events; None disables ticks.
        runner: Runs one step synchronously (on a worker thread).
            Defaults to ``run_step``.
        step_timeout: Passed through to the runner.
    """

    def __init__(
        self,
        steps: Sequence[Step],
        sink: ProgressSink,
        *,
        tick_interval: float | None = 0.1,
        runner: StepRunner | None = None,
        step_timeout: float | None = None,
    ) -> None:
        self.sink = sink
        self.tick_interval = tick_interval
        self.runner = runner or run_step
        self.step_timeout = step_timeout
        self.events: queue.Queue[Event] = queue.Queue()
        self.orchestrator = Orchestrator(steps, sink, self._launch)
        self._stop = threading.Event()

    @property
    def state(self) -> RunState:
        return self.orchestrator.state

    def request_cancel(self, reason: str = "interrupted") -> None:
        """Thread-safe: ask the loop to cancel at its next event."""
        self.events.put(CancelRequested(reason))

    def run(self) -> RunState:
        """Start the plan and process events until a terminal state."""
        self.orchestrator.start()
        if self.state.terminal:
            return self.state

        ticker = self._start_ticker()
        try:
            while not self.state.terminal:
                try:
                    event = self.events.get()
                except KeyboardInterrupt:
                    event = CancelRequested("keyboard interrupt")
                self._dispatch(event)
        except KeyboardInterrupt:
            self.orchestrator.cancel()
        finally:
            self._stop.set()
            if ticker is not None:
                ticker.join(timeout=1)

        return self.state

    # ── Internals ────────────────────────────────────────────────

    def _dispatch(self, event: Event) -> None:
        if isinstance(event, Tick):
            self.sink.tick()
        elif isinstance(event, StepCompleted):
            self.orchestrator.on_step_completed(event.index, event.result)
        elif isinstance(event, CancelRequested):
            logger.debug("Cancel requested: %s", event.reason)
            self.orchestrator.cancel()

    def _launch(self, index: int, step: Step, env: dict[str, str]) -> None:
        worker = threading.Thread(
            target=self._work,
            args=(index, step, env),
            name=f"step-{index}",
            daemon=True,
        )
        worker.start()

    def _work(self, index: int, step: Step, env: dict[str, str]) -> None:
        try:
            result = self.runner(step, env_overrides=env, timeout=self.step_timeout)
        except Exception as exc:
            logger.exception("Step runner crashed: %s", step.description)
            result = StepResult(ok=False, error=str(exc))
        self.events.put(StepCompleted(index, result))

    def _start_ticker(self) -> threading.Thread | None:
        if not self.tick_interval:
            return None
        t = threading.Thread(target=self._tick_loop, name="ticker", daemon=True)
        t.start()
        return t

    def _tick_loop(self) -> None:
        while not self._stop.wait(self.tick_interval):
            self.events.put(Tick())
