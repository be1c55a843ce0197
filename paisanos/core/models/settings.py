"""
Setup configuration — explicit settings for one invocation.

Loaded from YAML by ``paisanos.core.config.loader`` and adjusted by
CLI flags.  Passed by value into the planner and the renderer; nothing
reads process-wide settings.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from paisanos.core.models.catalog import CatalogEntry

DEFAULT_ANIMATION_DELAY = 0.04     # seconds per revealed character
DEFAULT_SPINNER_INTERVAL = 0.1     # seconds between spinner frames


class SetupConfig(BaseModel):
    """Settings recognised in ``config.yml``."""

    animation_delay: float = DEFAULT_ANIMATION_DELAY
    no_animation: bool = False
    spinner_interval: float = DEFAULT_SPINNER_INTERVAL

    profile_path: str | None = None     # default: ~/.zprofile
    brew_prefix: str = "/opt/homebrew"
    step_timeout: float | None = None   # None = wait forever

    catalog: dict[str, CatalogEntry] | None = None

    @field_validator("animation_delay", "spinner_interval")
    @classmethod
    def _non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("must be >= 0")
        return value

    def with_overrides(
        self,
        *,
        no_animation: bool | None = None,
        animation_delay: float | None = None,
    ) -> SetupConfig:
        """Return a copy with CLI flag values applied (None = keep)."""
        update: dict = {}
        if no_animation is not None:
            update["no_animation"] = no_animation
        if animation_delay is not None:
            update["animation_delay"] = animation_delay
        return self.model_copy(update=update)

    @property
    def effective_delay(self) -> float:
        """Per-character delay, zero when animation is off."""
        return 0.0 if self.no_animation else self.animation_delay
