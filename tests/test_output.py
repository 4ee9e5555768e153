"""Tests for the output system.

Covers:
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet mode suppression rules
- Verbose mode debug output
- Rich markup escaping of user-provided text
- Global instance management and convenience functions
"""

from __future__ import annotations

import pytest

from aiagent import output as output_module
from aiagent.output import (
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture(autouse=True)
def _reset_global_output():
    """Ensure the global output instance is reset between tests."""
    reset_output()
    yield
    reset_output()


class TestColorDisabling:
    def test_no_color_env_disables_color(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb_disables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_color_enabled_by_default(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


class TestStreams:
    def test_print_data_goes_to_stdout(self, capsys):
        OutputManager(no_color=True).print_data('{"text": "hi"}')
        captured = capsys.readouterr()
        assert captured.out == '{"text": "hi"}\n'
        assert captured.err == ""

    def test_diagnostics_go_to_stderr(self, capsys):
        mgr = OutputManager(no_color=True, verbose=True)
        mgr.info("status")
        mgr.warning("careful")
        mgr.error("broken")
        mgr.debug("details")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.splitlines() == [
            "status",
            "Warning: careful",
            "Error: broken",
            "[debug] details",
        ]


class TestQuietAndVerbose:
    def test_quiet_suppresses_info_only(self, capsys):
        mgr = OutputManager(no_color=True, quiet=True)
        mgr.info("hidden")
        mgr.warning("shown warning")
        mgr.error("shown error")
        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown warning" in err
        assert "shown error" in err

    def test_debug_hidden_without_verbose(self, capsys):
        OutputManager(no_color=True).debug("secret")
        assert capsys.readouterr().err == ""

    def test_flags_exposed(self):
        mgr = OutputManager(quiet=True, verbose=True)
        assert mgr.is_quiet
        assert mgr.is_verbose


class TestRichMarkup:
    def test_error_message_brackets_not_eaten(self, capsys, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm")
        OutputManager().error("HTTP 400: [bold] is not a tag")
        assert "[bold] is not a tag" in capsys.readouterr().err

    def test_debug_prefix_rendered(self, capsys, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm")
        OutputManager(verbose=True).debug("hello")
        assert "[debug] hello" in capsys.readouterr().err


class TestGlobalInstance:
    def test_get_output_creates_default(self):
        assert isinstance(get_output(), OutputManager)

    def test_set_and_get(self):
        mgr = OutputManager(quiet=True)
        set_output(mgr)
        assert get_output() is mgr

    def test_reset(self):
        mgr = OutputManager()
        set_output(mgr)
        reset_output()
        assert get_output() is not mgr

    def test_convenience_functions_delegate(self, capsys):
        set_output(OutputManager(no_color=True, verbose=True))
        output_module.print_data("data")
        output_module.info("info")
        output_module.warning("warn")
        output_module.error("err")
        output_module.debug("dbg")
        captured = capsys.readouterr()
        assert captured.out == "data\n"
        assert "info" in captured.err
        assert "Warning: warn" in captured.err
        assert "Error: err" in captured.err
        assert "[debug] dbg" in captured.err
