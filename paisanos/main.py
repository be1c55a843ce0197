"""
paisanos — CLI entrypoint.

Usage:
    paisanos --help
    paisanos setup --editor neovim
    paisanos plan --json
    python -m paisanos.main catalog
"""

from __future__ import annotations

import json
import os
import re
import sys
from pathlib import Path

import click

from paisanos import __version__
from paisanos.core.observability.logging_config import resolve_level, setup_logging

EXIT_FAILED = 1
EXIT_CANCELLED = 130

EDITOR_PROMPT_CHOICES = ["neovim", "cursor", "vscode", "none"]


class DurationType(click.ParamType):
    """Accepts ``40ms``, ``0.5s`` or a bare number of milliseconds."""

    name = "duration"

    _PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s)?\s*$")

    def convert(self, value, param, ctx):  # type: ignore[override]
        if isinstance(value, float):
            return value
        match = self._PATTERN.match(str(value))
        if not match:
            self.fail(f"{value!r} is not a duration (e.g. 40ms, 0.1s)", param, ctx)
        amount, unit = float(match.group(1)), match.group(2) or "ms"
        return amount / 1000 if unit == "ms" else amount


def _load_config(
    ctx: click.Context,
    *,
    no_animation: bool = False,
    delay: float | None = None,
):
    """Load SetupConfig and apply animation flags; exit 1 on ConfigError."""
    from paisanos.core.config.loader import ConfigError, load_config

    try:
        config = load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(EXIT_FAILED)

    return config.with_overrides(
        no_animation=True if no_animation else None,
        animation_delay=delay,
    )


def _animation_options(fn):
    fn = click.option(
        "--delay",
        type=DurationType(),
        default=None,
        help="Delay between revealed characters (e.g. 40ms).",
    )(fn)
    fn = click.option(
        "--no-animation", is_flag=True, help="Disable text animation and the spinner.",
    )(fn)
    return fn


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="paisanos")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to config.yml (default: ~/.config/paisanos/config.yml).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """paisanos — set up your workstation with Homebrew, apps and an editor."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(
            debug=debug,
            verbose=verbose,
            quiet=quiet,
            env_level=os.environ.get("PAISANOS_LOG_LEVEL"),
        ),
        log_file=os.environ.get("PAISANOS_LOG_FILE"),
        log_file_level=os.environ.get("PAISANOS_LOG_FILE_LEVEL"),
    )

    if ctx.invoked_subcommand is None:
        ctx.invoke(welcome)


@cli.command()
@_animation_options
@click.pass_context
def welcome(ctx: click.Context, no_animation: bool = False, delay: float | None = None) -> None:
    """Show the welcome greeting."""
    from paisanos.core.services.setup.detection.platform import (
        PreconditionError,
        current_host,
    )
    from paisanos.ui.cli.welcome import show_welcome

    config = _load_config(ctx, no_animation=no_animation, delay=delay)

    try:
        host = current_host()
    except PreconditionError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(EXIT_FAILED)

    show_welcome(host.username, config)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def catalog(ctx: click.Context, as_json: bool) -> None:
    """List the packages and applications the installer knows about."""
    from paisanos.core.services.setup.data.catalog import DEFAULT_CATALOG, EDITOR_GROUP

    config = _load_config(ctx)
    entries = config.catalog if config.catalog is not None else DEFAULT_CATALOG

    if as_json:
        click.echo(json.dumps(
            {key: entry.model_dump(mode="json") for key, entry in entries.items()},
            indent=2,
        ))
        return

    click.secho("\n📦 Catalog", fg="cyan", bold=True)
    for key, entry in entries.items():
        marker = "✓" if entry.enabled else "·"
        group = " (editor)" if entry.group == EDITOR_GROUP else ""
        click.echo(f"   {marker} {key:<16} {entry.category:<8} {entry.identifier}{group}")
    click.echo()


@cli.command()
@click.option(
    "--editor", "-e",
    type=click.Choice(EDITOR_PROMPT_CHOICES, case_sensitive=False),
    default="none",
    show_default=True,
    help="Editor to include in the plan.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def plan(ctx: click.Context, editor: str, as_json: bool) -> None:
    """Show what ``setup`` would do, without running anything."""
    from paisanos.core.use_cases.setup import prepare_plan

    config = _load_config(ctx)
    result = prepare_plan(config, editor=editor)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(EXIT_FAILED)
        return

    the_plan = result.plan
    if result.error or the_plan is None:
        click.secho(f"❌ {result.error or 'No setup plan was built.'}", fg="red")
        sys.exit(EXIT_FAILED)

    click.secho(f"\n🧭 [dry-run] Setup plan — {len(the_plan)} step(s)", fg="cyan", bold=True)
    if not result.brew_path:
        click.secho("   Homebrew not found: bootstrap steps included", fg="yellow")
    click.echo()
    for i, step in enumerate(the_plan.steps, 1):
        click.echo(f"   {i}. {step.description}")
        if ctx.obj.get("verbose"):
            click.echo(f"      $ {' '.join(step.argv)}")
    for key in the_plan.skipped:
        click.secho(f"   ⊘ {key} (already installed)", fg="bright_black")
    if the_plan.is_empty:
        click.secho("   Nothing to install.", fg="green")
    click.echo()


@cli.command()
@click.option(
    "--editor", "-e",
    type=click.Choice(EDITOR_PROMPT_CHOICES, case_sensitive=False),
    default=None,
    help="Editor to install (prompted when omitted).",
)
@_animation_options
@click.pass_context
def setup(
    ctx: click.Context,
    editor: str | None,
    no_animation: bool = False,
    delay: float | None = None,
) -> None:
    """Install Homebrew, the catalog apps and your editor.

    Examples:

        paisanos setup

        paisanos setup --editor vscode --no-animation
    """
    from paisanos.core.models.run_state import RunStatus
    from paisanos.core.services.setup.detection.platform import (
        PreconditionError,
        check_preconditions,
    )
    from paisanos.core.use_cases.setup import execute_plan, prepare_plan
    from paisanos.ui.cli.progress import TerminalProgress
    from paisanos.ui.cli.welcome import logo

    config = _load_config(ctx, no_animation=no_animation, delay=delay)
    animate = not config.no_animation and sys.stdout.isatty()

    try:
        host = check_preconditions()
    except PreconditionError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(EXIT_FAILED)

    if editor is None:
        editor = click.prompt(
            "Select the editor to install",
            type=click.Choice(EDITOR_PROMPT_CHOICES, case_sensitive=False),
            default=EDITOR_PROMPT_CHOICES[0],
        )
    editor = editor.lower()
    click.echo(f"Selected editor: {editor}")

    progress = TerminalProgress(animate=animate)
    result = prepare_plan(config, editor=editor, on_notice=progress.notice, host=host)

    if result.error or result.plan is None:
        click.secho(f"❌ {result.error or 'No setup plan was built.'}", fg="red")
        sys.exit(EXIT_FAILED)
    click.echo()
    click.echo(logo() + "  Setup sequence started.")
    click.echo()

    state = execute_plan(result.plan, progress, config, animate=animate)

    if state.status == RunStatus.FAILED:
        sys.exit(EXIT_FAILED)
    if state.status == RunStatus.CANCELLED:
        sys.exit(EXIT_CANCELLED)


if __name__ == "__main__":
    cli()
