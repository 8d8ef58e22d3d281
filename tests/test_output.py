"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- Generated source printing
- Logging configuration
- Global instance management
"""

from __future__ import annotations

import logging

import pytest
from rich.logging import RichHandler

from obsgen import output as output_module
from obsgen.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    configure_logging,
    get_output,
    reset_output,
    set_output,
)


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("obsgen.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("obsgen.output._is_tty", lambda: True)


# ------------------------------------------------------------------ #
# OutputFormat resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    """Test that AUTO format resolves correctly based on environment."""

    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        assert OutputManager().format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        assert OutputManager().format == OutputFormat.RICH

    def test_no_color_flag_forces_plain(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        assert OutputManager(no_color=True).format == OutputFormat.PLAIN

    def test_explicit_rich_stays_rich(self, non_tty):
        assert OutputManager(format=OutputFormat.RICH).format == OutputFormat.RICH


class TestColorDisabling:
    """Test that NO_COLOR and TERM=dumb are respected."""

    def test_no_color_env_any_value(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb_disables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# stdout vs stderr discipline
# ------------------------------------------------------------------ #


class TestStdoutStderrDiscipline:
    """Generated source goes to stdout, diagnostics to stderr."""

    def test_print_source_plain(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_source("export enum A {\n}\n")
        captured = capfd.readouterr()
        assert captured.out == "export enum A {\n}\n"
        assert captured.err == ""

    def test_print_source_rich_highlights(self, capfd, non_tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        mgr = OutputManager(format=OutputFormat.RICH)
        mgr.print_source("export enum A {\n}\n")
        captured = capfd.readouterr()
        assert "\x1b[" in captured.out
        assert captured.err == ""

    @pytest.mark.parametrize("method", ["info", "success", "warning", "error"])
    def test_diagnostics_go_to_stderr(self, capfd, non_tty, method):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        getattr(mgr, method)("diagnostic text")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "diagnostic text" in captured.err

    def test_error_prefix(self, capfd, non_tty):
        OutputManager(no_color=True).error("boom")
        assert capfd.readouterr().err == "Error: boom\n"

    def test_warning_prefix(self, capfd, non_tty):
        OutputManager(no_color=True).warning("careful")
        assert capfd.readouterr().err == "Warning: careful\n"


class TestQuietAndVerbose:
    """Quiet suppresses chatter; verbose enables debug."""

    def test_quiet_suppresses_info_and_success(self, capfd, non_tty):
        mgr = OutputManager(no_color=True, quiet=True)
        mgr.info("info")
        mgr.success("done")
        assert capfd.readouterr().err == ""

    def test_quiet_keeps_warnings_and_errors(self, capfd, non_tty):
        mgr = OutputManager(no_color=True, quiet=True)
        mgr.warning("w")
        mgr.error("e")
        err = capfd.readouterr().err
        assert "Warning: w" in err
        assert "Error: e" in err

    def test_debug_hidden_by_default(self, capfd, non_tty):
        OutputManager(no_color=True).debug("hidden")
        assert capfd.readouterr().err == ""

    def test_debug_shown_with_verbose(self, capfd, non_tty):
        mgr = OutputManager(no_color=True, verbose=True)
        mgr.debug("shown")
        assert capfd.readouterr().err == "[debug] shown\n"
        assert mgr.is_verbose is True


# ------------------------------------------------------------------ #
# Logging
# ------------------------------------------------------------------ #


class TestConfigureLogging:
    """Library log records are routed according to the output mode."""

    def test_plain_uses_stream_handler(self, non_tty):
        configure_logging(OutputManager(no_color=True))
        logger = logging.getLogger("obsgen")
        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0], RichHandler)
        assert logger.level == logging.WARNING
        assert logger.propagate is False

    def test_rich_uses_rich_handler(self, non_tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        configure_logging(OutputManager(format=OutputFormat.RICH))
        assert isinstance(logging.getLogger("obsgen").handlers[0], RichHandler)

    def test_verbose_enables_debug(self, non_tty):
        configure_logging(OutputManager(no_color=True, verbose=True))
        assert logging.getLogger("obsgen").level == logging.DEBUG

    def test_reconfiguring_replaces_handler(self, non_tty):
        configure_logging(OutputManager(no_color=True))
        configure_logging(OutputManager(no_color=True))
        assert len(logging.getLogger("obsgen").handlers) == 1

    def test_child_records_reach_stderr(self, capfd, non_tty):
        configure_logging(OutputManager(no_color=True, verbose=True))
        logging.getLogger("obsgen.compiler.builder").debug("synthesized node")
        assert "synthesized node" in capfd.readouterr().err


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalOutput:
    """Module-level helpers delegate to the global manager."""

    def test_get_output_creates_default(self, non_tty):
        reset_output()
        assert isinstance(get_output(), OutputManager)

    def test_set_output_installs_instance(self):
        mgr = OutputManager(format=OutputFormat.PLAIN)
        set_output(mgr)
        assert get_output() is mgr

    def test_convenience_functions(self, capfd, non_tty):
        set_output(OutputManager(no_color=True))
        output_module.print_source("const x = 1;")
        output_module.warning("careful")
        captured = capfd.readouterr()
        assert captured.out == "const x = 1;\n"
        assert "Warning: careful" in captured.err
