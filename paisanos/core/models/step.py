"""
Step models — the unit of work the orchestrator executes.

A step is one external process invocation.  The three variants carry
only the fields they need; ``kind`` is the discriminator, so a step
serialised with ``model_dump()`` validates back into the right class.

Steps are frozen: built once by the planner, never mutated.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class StepKind(StrEnum):
    """Step variants."""

    BOOTSTRAP = "bootstrap"
    FORMULA = "formula"
    CASK = "cask"


class BootstrapPhase(StrEnum):
    """The fixed bootstrap triplet, in execution order."""

    INSTALL = "install"
    PROFILE = "profile"
    SHELLENV = "shellenv"


class _StepBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str
    command: str
    args: tuple[str, ...] = ()
    env: dict[str, str] = Field(default_factory=dict)
    notify_on_success: bool = False
    captures_env: bool = False      # output is an ``env -0`` dump to merge

    @property
    def argv(self) -> list[str]:
        """Full argument vector for ``subprocess``."""
        return [self.command, *self.args]


class BootstrapStep(_StepBase):
    """Installs or wires up the package manager itself."""

    kind: Literal[StepKind.BOOTSTRAP] = StepKind.BOOTSTRAP
    phase: BootstrapPhase


class FormulaStep(_StepBase):
    """``brew install <package>``."""

    kind: Literal[StepKind.FORMULA] = StepKind.FORMULA
    package: str
    display_name: str = ""


class CaskStep(_StepBase):
    """``brew install --cask <package>``."""

    kind: Literal[StepKind.CASK] = StepKind.CASK
    package: str
    display_name: str = ""


Step = Annotated[
    Union[BootstrapStep, FormulaStep, CaskStep],
    Field(discriminator="kind"),
]

step_adapter: TypeAdapter[Step] = TypeAdapter(Step)


def step_subject(step: Step) -> str:
    """Name shown in notices for a step."""
    if isinstance(step, BootstrapStep):
        return "Homebrew"
    return step.display_name or step.package
