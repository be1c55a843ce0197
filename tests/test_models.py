"""
Tests for the data models and the default catalog.
"""

import pytest
from pydantic import ValidationError

from paisanos.core.models.catalog import CatalogEntry, Category
from paisanos.core.models.progress import Notice, NoticeKind
from paisanos.core.models.run_state import RunState, RunStatus, StepExecutionError
from paisanos.core.models.settings import SetupConfig
from paisanos.core.models.step import (
    BootstrapPhase,
    BootstrapStep,
    CaskStep,
    FormulaStep,
    step_adapter,
    step_subject,
)
from paisanos.core.services.setup.data.catalog import (
    DEFAULT_CATALOG,
    apply_editor_choice,
    editor_ids,
    enabled_entries,
)


class TestSteps:
    def test_kind_selects_variant(self):
        step = step_adapter.validate_python({
            "kind": "cask",
            "description": "Installing slack...",
            "command": "brew",
            "args": ["install", "--cask", "slack"],
            "package": "slack",
        })
        assert isinstance(step, CaskStep)
        assert step.argv == ["brew", "install", "--cask", "slack"]

    def test_unknown_kind_is_rejected(self):
        with pytest.raises(ValidationError):
            step_adapter.validate_python({"kind": "apt", "description": "x", "command": "apt"})

    def test_steps_are_frozen(self):
        step = FormulaStep(description="d", command="brew", package="fnm")
        with pytest.raises(ValidationError):
            step.package = "other"

    def test_subject(self):
        boot = BootstrapStep(phase=BootstrapPhase.INSTALL, description="d", command="/bin/bash")
        assert step_subject(boot) == "Homebrew"
        assert step_subject(CaskStep(description="d", command="brew", package="cursor",
                                     display_name="cursor.ai")) == "cursor.ai"
        assert step_subject(FormulaStep(description="d", command="brew", package="fnm")) == "fnm"


class TestNotice:
    def test_texts(self):
        assert Notice(NoticeKind.SKIPPED, "slack").text == "■ slack is already installed."
        assert Notice(NoticeKind.SUCCEEDED, "fnm").text == "■ fnm installed successfully."
        assert Notice(NoticeKind.INFO, "Homebrew", "custom").text == "custom"


class TestRunState:
    def test_terminal(self):
        assert not RunState().terminal
        assert not RunState(status=RunStatus.RUNNING).terminal
        for status in (RunStatus.DONE, RunStatus.FAILED, RunStatus.CANCELLED):
            assert RunState(status=status).terminal

    def test_error_message_names_step(self):
        err = StepExecutionError("Installing fnm...", "Command failed (exit 1)", returncode=1)
        assert str(err) == "'Installing fnm...' failed: Command failed (exit 1)"

    def test_to_dict(self):
        state = RunState(status=RunStatus.FAILED, last_error=StepExecutionError("x", "y"))
        assert state.to_dict()["status"] == "failed"
        assert state.to_dict()["error"] == "'x' failed: y"


class TestSetupConfig:
    def test_defaults(self):
        config = SetupConfig()
        assert config.brew_prefix == "/opt/homebrew"
        assert config.catalog is None
        assert config.effective_delay == config.animation_delay

    def test_negative_delay_rejected(self):
        with pytest.raises(ValidationError):
            SetupConfig(animation_delay=-1)

    def test_overrides(self):
        config = SetupConfig().with_overrides(no_animation=True, animation_delay=0.5)
        assert config.animation_delay == 0.5
        assert config.effective_delay == 0.0
        assert SetupConfig().with_overrides().no_animation is False


class TestDefaultCatalog:
    def test_order_and_editors(self):
        assert list(DEFAULT_CATALOG) == [
            "neovim", "fnm", "figma", "notion", "slack", "google-chrome", "vscode", "cursor",
        ]
        assert editor_ids(DEFAULT_CATALOG) == ["neovim", "vscode", "cursor"]
        assert all(not DEFAULT_CATALOG[k].enabled for k in editor_ids(DEFAULT_CATALOG))

    def test_chrome_is_filesystem_backed(self):
        chrome = DEFAULT_CATALOG["google-chrome"]
        assert chrome.category == Category.CASK
        assert chrome.app_path == "/Applications/Google Chrome.app"

    @pytest.mark.parametrize("choice,expected", [
        ("neovim", "neovim"),
        ("nvim", "neovim"),
        ("vscode", "vscode"),
        ("Cursor", "cursor"),
    ])
    def test_editor_choice_enables_exactly_one(self, choice, expected):
        catalog = apply_editor_choice(DEFAULT_CATALOG, choice)
        enabled_editors = [k for k in editor_ids(catalog) if catalog[k].enabled]
        assert enabled_editors == [expected]
        # input untouched
        assert not DEFAULT_CATALOG[expected].enabled

    def test_no_editor(self):
        for choice in ("none", None):
            catalog = apply_editor_choice(DEFAULT_CATALOG, choice)
            keys = [k for k, _ in enabled_entries(catalog)]
            assert keys == ["fnm", "figma", "notion", "slack", "google-chrome"]

    def test_unknown_editor(self):
        with pytest.raises(ValueError, match="Unknown editor"):
            apply_editor_choice(DEFAULT_CATALOG, "emacs")

    def test_non_editor_entries_untouched(self):
        catalog = {"fnm": CatalogEntry(display_name="fnm", identifier="fnm", enabled=False)}
        assert apply_editor_choice(catalog, "neovim")["fnm"].enabled is False
