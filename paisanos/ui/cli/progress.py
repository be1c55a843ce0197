"""
Terminal progress renderer — the ProgressSink used by ``paisanos setup``.

Layout while running:

    ■ figma is already installed.          ← permanent lines (notices)
    ■ fnm installed successfully.
    ⣷ Installing slack...                  ← live line, redrawn on every tick

Animated mode redraws the live line in place with ``\\r``.  Plain mode
(``--no-animation`` or a non-TTY stdout) prints one line per step and
ignores ticks.
"""

from __future__ import annotations

import click

from paisanos.core.models.progress import Notice, NoticeKind
from paisanos.core.models.run_state import RunState, RunStatus
from paisanos.core.models.step import Step

SPINNER_FRAMES = "⠁⠃⠇⡇⣇⣧⣷⣾⣹⢹⠹⠙⠉"

_CLEAR_LINE = "\r\x1b[K"
_OUTPUT_LINES = 20

_NOTICE_COLORS = {
    NoticeKind.INFO: None,
    NoticeKind.SKIPPED: "bright_black",
    NoticeKind.SUCCEEDED: "green",
}


class TerminalProgress:
    """Renders progress events with click.

    Args:
        animate: Spinner + in-place redraw when True; plain lines otherwise.
    """

    def __init__(self, *, animate: bool = True) -> None:
        self.animate = animate
        self.frame = 0
        self.current: str | None = None
        self.position = ""

    # ── ProgressSink ─────────────────────────────────────────────

    def notice(self, notice: Notice) -> None:
        self._clear()
        click.secho(notice.text, fg=_NOTICE_COLORS.get(notice.kind))
        self._redraw()

    def step_started(self, index: int, total: int, step: Step) -> None:
        self.current = step.description
        self.position = f"[{index + 1}/{total}]"
        if self.animate:
            self._redraw()
        else:
            click.secho(f"→ {self.position} {step.description}", fg="cyan")

    def tick(self) -> None:
        if not self.animate or self.current is None:
            return
        self.frame = (self.frame + 1) % len(SPINNER_FRAMES)
        self._redraw()

    def finished(self, state: RunState) -> None:
        self._clear()
        self.current = None

        if state.status == RunStatus.DONE:
            click.echo()
            click.secho("Your setup completed successfully 🚀", fg="green", bold=True)
        elif state.status == RunStatus.CANCELLED:
            click.echo()
            click.secho("⊘ Setup cancelled.", fg="yellow")
        elif state.status == RunStatus.FAILED:
            err = state.last_error
            click.echo()
            click.secho(f"❌ Error: {err}", fg="red", bold=True)
            if err is not None and err.output:
                for line in err.output.rstrip().splitlines()[-_OUTPUT_LINES:]:
                    click.echo(f"     │ {line}")
        click.echo()

    # ── Internals ────────────────────────────────────────────────

    def _redraw(self) -> None:
        if not self.animate or self.current is None:
            return
        spinner = click.style(SPINNER_FRAMES[self.frame], fg="blue")
        click.echo(f"{_CLEAR_LINE}{spinner} {self.current}", nl=False)

    def _clear(self) -> None:
        if self.animate and self.current is not None:
            click.echo(_CLEAR_LINE, nl=False)
