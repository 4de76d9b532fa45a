"""Unit tests for console and logging helpers (nestgen.utils)."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from rich.logging import RichHandler

from nestgen.scaffolder.models import WriteOutcome
from nestgen.utils import (
    MODE_COLORS,
    configure_logging,
    console,
    print_banner,
    print_error,
    print_info,
    print_outcomes,
    print_success,
    print_summary_table,
    print_warning,
)

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


class TestConfigureLogging:
    def test_default_level_is_warning(self):
        configure_logging()
        logger = logging.getLogger("nestgen")
        assert logger.level == logging.WARNING
        assert logger.propagate is False
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)

    def test_verbose_enables_debug(self):
        configure_logging(verbose=True)
        assert logging.getLogger("nestgen").level == logging.DEBUG

    def test_repeated_calls_do_not_stack_handlers(self):
        configure_logging()
        configure_logging()
        assert len(logging.getLogger("nestgen").handlers) == 1

    def test_child_loggers_inherit(self):
        configure_logging(verbose=True)
        child = logging.getLogger("nestgen.scaffolder.writer")
        assert child.getEffectiveLevel() == logging.DEBUG


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestPrintOutcomes:
    def test_created_and_skipped_lines(self, tmp_path: Path):
        outcomes = [
            WriteOutcome.created(tmp_path / "widget" / "widget.module.ts"),
            WriteOutcome.skipped(tmp_path / "app.module.ts"),
        ]
        with console.capture() as capture:
            print_outcomes(outcomes, base=tmp_path)
        text = capture.get()
        assert "Created widget/widget.module.ts" in text
        assert "Skipped app.module.ts (already-exists)" in text

    def test_path_outside_base_shown_in_full(self, tmp_path: Path):
        other = Path("/elsewhere/x.ts")
        with console.capture() as capture:
            print_outcomes([WriteOutcome.created(other)], base=tmp_path)
        assert str(other) in capture.get()

    def test_markup_in_paths_is_escaped(self, tmp_path: Path):
        with console.capture() as capture:
            print_outcomes([WriteOutcome.created(tmp_path / "[red]x.ts")], base=tmp_path)
        assert "[red]x.ts" in capture.get()


class TestRichOutputHelpers:
    def test_print_banner(self):
        for mode in MODE_COLORS:
            print_banner(mode, "Generating")
        print_banner("unknown", "Generating")

    def test_print_summary_table(self):
        with console.capture() as capture:
            print_summary_table({"Files created": "3", "Files skipped": "0"}, title="Summary")
        text = capture.get()
        assert "Files created" in text
        assert "Summary" in text

    def test_message_helpers(self):
        with console.capture() as capture:
            print_success("Done")
            print_error("Broken")
            print_warning("Careful")
            print_info("FYI")
        text = capture.get()
        for word in ("Done", "Broken", "Careful", "FYI"):
            assert word in text
