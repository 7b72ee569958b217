#!/usr/bin/env python3
"""Tests for structured logging and log context."""

import json
import logging
import logging.handlers

from sqlup.core.logging import (
    LogContext,
    StructuredFormatter,
    clear_context,
    get_context,
    set_context,
    set_package_log_level,
    set_package_log_output,
    setup_structured_logging,
)


def make_record(message="Capitalized 2 keyword(s)"):
    return logging.LogRecord("sqlup.test", logging.INFO, __file__, 1, message, None, None)


class TestLogContext:
    def test_context_is_restored(self):
        clear_context()
        set_context(dialect="postgres")
        with LogContext(buffer="query.sql"):
            assert get_context() == {"dialect": "postgres", "buffer": "query.sql"}
        assert get_context() == {"dialect": "postgres"}
        clear_context()


class TestStructuredFormatter:
    def test_readable_includes_context(self):
        with LogContext(buffer="query.sql"):
            line = StructuredFormatter().format(make_record())
        assert "| INFO  | sqlup.test | Capitalized 2 keyword(s)" in line
        assert line.endswith("| buffer=query.sql")

    def test_json_lines(self):
        with LogContext(buffer="query.sql"):
            entry = json.loads(StructuredFormatter(use_json=True).format(make_record()))
        assert entry["level"] == "INFO"
        assert entry["module"] == "sqlup.test"
        assert entry["context"] == {"buffer": "query.sql"}


class TestSetup:
    def test_console_only_by_default(self, tmp_path):
        logger = setup_structured_logging("sqlup.tests.console", log_level="info", logs_dir=tmp_path)
        assert logger.logger.level == logging.INFO
        assert not logger.logger.propagate
        assert [type(h) for h in logger.logger.handlers] == [logging.StreamHandler]

    def test_file_output(self, tmp_path):
        logger = setup_structured_logging("sqlup.tests.file", log_output="file", logs_dir=tmp_path)
        logger.warning("written")
        for handler in logger.logger.handlers:
            handler.flush()
        assert "written" in (tmp_path / "file.log").read_text(encoding="utf-8")

    def test_package_level(self):
        logger = setup_structured_logging("sqlup.tests.level", log_level="WARNING")
        set_package_log_level("DEBUG")
        assert logger.logger.level == logging.DEBUG
        set_package_log_level("CRITICAL")
        assert logger.logger.level == logging.CRITICAL

    def test_package_output_switch(self, tmp_path):
        """Configured output replaces the console handler with a rotating file."""
        logger = setup_structured_logging("sqlup.tests.output", log_level="WARNING", log_output="console")
        set_package_log_output("file", package="sqlup.tests.output", logs_dir=tmp_path)
        assert [type(h) for h in logger.logger.handlers] == [logging.handlers.RotatingFileHandler]

        logger.warning("to file")
        for handler in logger.logger.handlers:
            handler.flush()
        assert "to file" in (tmp_path / "output.log").read_text(encoding="utf-8")

        set_package_log_output("console", package="sqlup.tests.output")
        assert [type(h) for h in logger.logger.handlers] == [logging.StreamHandler]

    def test_package_output_both(self, tmp_path):
        logger = setup_structured_logging("sqlup.tests.both", log_output="console")
        set_package_log_output("both", package="sqlup.tests.both", logs_dir=tmp_path)
        assert sorted(type(h).__name__ for h in logger.logger.handlers) == ["RotatingFileHandler", "StreamHandler"]
        set_package_log_output("console", package="sqlup.tests.both")
