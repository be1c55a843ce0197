"""
L4 Execution — Core subprocess runner.

The SINGLE PLACE where ``subprocess.run`` is called for install
steps.  Runs on a worker thread; never raises — every outcome,
including "couldn't launch", comes back as a StepResult.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
import time
from dataclasses import dataclass, field

from paisanos.core.models.step import Step

logger = logging.getLogger(__name__)

OUTPUT_TAIL = 4000  # chars of combined output kept for diagnostics

_ENV_KEY = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass
class StepResult:
    """Outcome of one step's process."""

    ok: bool
    returncode: int | None = None
    output: str = ""
    error: str = ""
    elapsed_ms: int = 0
    env_updates: dict[str, str] = field(default_factory=dict)


def parse_env_dump(output: str) -> dict[str, str]:
    """Parse ``env -0`` output (or newline-separated ``env``) into a dict.

    Lines without ``=`` or with a non-identifier key are dropped.
    """
    records = output.split("\0") if "\0" in output else output.splitlines()
    env: dict[str, str] = {}
    for record in records:
        record = record.strip("\n")
        key, sep, value = record.partition("=")
        if sep and _ENV_KEY.match(key):
            env[key] = value
    return env


def run_step(
    step: Step,
    *,
    env_overrides: dict[str, str] | None = None,
    timeout: float | None = None,
) -> StepResult:
    """Run a step's command to completion and capture its output.

    stdout and stderr are merged so the failure message shows them in
    the order the process wrote them.  Bytes that aren't valid UTF-8
    (installer progress bars, localized tool output) are replaced,
    never raised.

    Args:
        step: The step to run.
        env_overrides: Environment accumulated from earlier steps
            (e.g. brew's shellenv after bootstrap).
        timeout: Seconds before giving up, or None to wait.

    Returns:
        StepResult — ``ok`` is True only for exit code 0.
    """
    # ── Environment ──
    env = os.environ.copy()
    if env_overrides:
        env.update(env_overrides)
    env.update(step.env)

    cmd = step.argv
    logger.debug("Running %s", cmd)

    # ── Execute ──
    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            stdin=subprocess.DEVNULL,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            env=env,
        )
    except subprocess.TimeoutExpired as exc:
        partial = exc.output or ""
        if isinstance(partial, bytes):
            partial = partial.decode(errors="replace")
        return StepResult(
            ok=False,
            output=partial[-OUTPUT_TAIL:],
            error=f"Command timed out ({timeout}s)",
            elapsed_ms=int((time.monotonic() - start) * 1000),
        )
    except OSError as exc:
        logger.warning("Cannot launch %s: %s", cmd[0], exc)
        return StepResult(
            ok=False,
            error=f"Cannot launch {cmd[0]}: {exc}",
            elapsed_ms=int((time.monotonic() - start) * 1000),
        )

    elapsed_ms = int((time.monotonic() - start) * 1000)
    output = result.stdout or ""

    if result.returncode != 0:
        return StepResult(
            ok=False,
            returncode=result.returncode,
            output=output[-OUTPUT_TAIL:],
            error=f"Command failed (exit {result.returncode})",
            elapsed_ms=elapsed_ms,
        )

    env_updates = parse_env_dump(output) if step.captures_env else {}
    return StepResult(
        ok=True,
        returncode=0,
        output="" if step.captures_env else output[-OUTPUT_TAIL:],
        elapsed_ms=elapsed_ms,
        env_updates=env_updates,
    )
