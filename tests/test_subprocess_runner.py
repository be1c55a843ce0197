"""
Tests for the subprocess runner — real processes via the current interpreter.
"""

import sys

from paisanos.core.models.step import BootstrapPhase, BootstrapStep
from paisanos.core.services.setup.execution.subprocess_runner import (
    parse_env_dump,
    run_step,
)


def _py(code: str, **kw) -> BootstrapStep:
    return BootstrapStep(
        phase=BootstrapPhase.INSTALL,
        description="Running python...",
        command=sys.executable,
        args=("-c", code),
        **kw,
    )


class TestRunStep:
    def test_success(self):
        result = run_step(_py("print('hello')"))
        assert result.ok is True
        assert result.returncode == 0
        assert result.output.strip() == "hello"
        assert result.error == ""

    def test_nonzero_exit_keeps_combined_output(self):
        code = "import sys; print('out'); sys.stdout.flush(); print('err', file=sys.stderr); sys.exit(3)"
        result = run_step(_py(code))
        assert result.ok is False
        assert result.returncode == 3
        assert result.error == "Command failed (exit 3)"
        assert "out" in result.output
        assert "err" in result.output

    def test_missing_binary_does_not_raise(self):
        step = BootstrapStep(
            phase=BootstrapPhase.INSTALL,
            description="Nope...",
            command="/nonexistent/paisanos-missing-binary",
        )
        result = run_step(step)
        assert result.ok is False
        assert result.returncode is None
        assert result.error.startswith("Cannot launch /nonexistent/paisanos-missing-binary")

    def test_step_env_wins_over_overrides(self):
        code = "import os; print(os.environ['A'], os.environ['B'])"
        step = _py(code, env={"A": "step"})
        result = run_step(step, env_overrides={"A": "override", "B": "override"})
        assert result.output.strip() == "step override"

    def test_timeout(self):
        result = run_step(_py("import time; time.sleep(5)"), timeout=0.2)
        assert result.ok is False
        assert result.error == "Command timed out (0.2s)"

    def test_captures_env(self):
        code = "import sys; sys.stdout.write('FOO=bar\\0PATH=/x:/y\\0')"
        result = run_step(_py(code, captures_env=True))
        assert result.ok is True
        assert result.env_updates == {"FOO": "bar", "PATH": "/x:/y"}
        assert result.output == ""

    def test_invalid_utf8_output_still_succeeds(self):
        code = "import sys; sys.stdout.buffer.write(b'ok \\xff\\xfe bytes\\n')"
        result = run_step(_py(code))
        assert result.ok is True
        assert result.returncode == 0
        assert result.output.startswith("ok ")
        assert "�" in result.output
        assert result.output.rstrip().endswith("bytes")

    def test_invalid_utf8_in_failing_output(self):
        code = "import sys; sys.stdout.buffer.write(b'\\xff broken\\n'); sys.exit(2)"
        result = run_step(_py(code))
        assert result.ok is False
        assert result.returncode == 2
        assert "broken" in result.output

    def test_captured_env_with_invalid_utf8(self):
        code = "import sys; sys.stdout.buffer.write(b'LANG=\\xffx\\0OK=1\\0')"
        result = run_step(_py(code, captures_env=True))
        assert result.ok is True
        assert result.env_updates == {"LANG": "�x", "OK": "1"}

    def test_plain_steps_report_no_env(self):
        result = run_step(_py("print('FOO=bar')"))
        assert result.env_updates == {}


class TestParseEnvDump:
    def test_nul_separated(self):
        assert parse_env_dump("A=1\0B=two words\0") == {"A": "1", "B": "two words"}

    def test_value_may_contain_newlines_and_equals(self):
        assert parse_env_dump("A=x\ny\0B=k=v\0") == {"A": "x\ny", "B": "k=v"}

    def test_newline_fallback(self):
        assert parse_env_dump("A=1\nB=2\n") == {"A": "1", "B": "2"}

    def test_junk_is_dropped(self):
        assert parse_env_dump("not a var\0=empty\0" + "1BAD=x\0OK=1") == {"OK": "1"}


class TestShellenvDump:
    def test_env_without_nul_flag_falls_back_to_lines(self):
        script = (
            'env() { if [ "$1" = -0 ]; then echo "env: illegal option -- 0" >&2; return 1; fi; '
            "command env; }; "
            "export HOMEBREW_PREFIX=/opt/homebrew; "
            "{ env -0 2>/dev/null || env; }"
        )
        step = BootstrapStep(
            phase=BootstrapPhase.SHELLENV,
            description="Evaluating Homebrew environment...",
            command="/bin/bash",
            args=("-c", script),
            captures_env=True,
        )
        result = run_step(step)
        assert result.ok is True
        assert result.env_updates["HOMEBREW_PREFIX"] == "/opt/homebrew"
        assert "illegal option" not in result.output
