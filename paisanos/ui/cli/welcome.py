"""
Welcome greeting — the typewriter intro shown by ``paisanos``.

Purely cosmetic.  Pacing comes from the SetupConfig passed in:
``animation_delay`` per character, or none at all with ``no_animation``.
"""

from __future__ import annotations

import time

import click

from paisanos.core.models.settings import SetupConfig

TRANSITION_PAUSE = 2.0  # seconds between greeting lines when animated

_FLAG = "█▀▀▃▃█"


def print_slowly(text: str, delay: float) -> None:
    """Echo ``text`` one character at a time."""
    if delay <= 0:
        click.echo(text, nl=False)
        return
    for char in text:
        click.echo(char, nl=False)
        time.sleep(delay)


def logo(title: str = "paisanos") -> str:
    return click.style(f" {title} ", bg="bright_green", fg="black")


def show_welcome(username: str, config: SetupConfig) -> None:
    """Print the boxed greeting for ``username``."""
    delay = config.effective_delay
    flag = click.style(_FLAG, fg="bright_green")

    click.echo("╭────────╮")
    click.echo(f"│ {flag} │ " + click.style("Paisabot:", fg="bright_green", bold=True))
    click.echo("╰────────╯")

    print_slowly("Welcome to ", delay)
    click.echo(logo(), nl=False)
    print_slowly(f" {username}.", delay)
    click.echo()
    if delay:
        time.sleep(TRANSITION_PAUSE)

    print_slowly("Together we are going to conquer the world!", delay)
    click.echo()
    if delay:
        time.sleep(TRANSITION_PAUSE)
