"""Shared fixtures and a rich failure summary for the sqlup test suite."""
from __future__ import annotations

import json
import re
import sys
from pathlib import Path

import pytest
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Make the src layout importable without an editable install
sys.path.insert(0, str(Path(__file__).parent.parent.resolve() / "src"))

from sqlup.capitalization.constants import clear_resource_cache  # noqa: E402
from sqlup.capitalization.mode import SqlupMode  # noqa: E402
from sqlup.core.config import load_config, set_config  # noqa: E402
from sqlup.core.logging import set_package_log_level  # noqa: E402
from sqlup.host.buffer import TextBuffer  # noqa: E402
from sqlup.host.dialect import DialectSelector  # noqa: E402

# Keep test output quiet
set_package_log_level("CRITICAL")

console = Console()

_CAPITALIZE_MESSAGE = re.compile(r"Input '(.*)' should capitalize to '(.*)', got '(.*)'")


class CapitalizationTestReporter:
    """Collects capitalization mismatches for a summary table at the end of the session."""

    def __init__(self):
        self.failures: list[tuple[str, str, str, str]] = []
        self.passes = 0
        self.total = 0

    def record_result(self, test_name: str, input_text: str, expected: str, actual: str, passed: bool):
        self.total += 1
        if passed:
            self.passes += 1
        else:
            self.failures.append((test_name, input_text, expected, actual))

    def print_summary(self):
        if not self.failures:
            return

        table = Table(title="Capitalization Test Failures", show_header=True, header_style="bold magenta")
        table.add_column("Test", style="cyan", no_wrap=False)
        table.add_column("Input", style="yellow")
        table.add_column("Expected", style="green")
        table.add_column("Actual", style="red")
        for test_name, input_text, expected, actual in self.failures:
            table.add_row(test_name.split("::")[-1], input_text, expected, actual)
        console.print(table)

        console.print(
            Panel.fit(
                f"[bold red]Failed:[/bold red] {len(self.failures)} | [bold]Checked:[/bold] {self.total}",
                title="Summary",
                border_style="red",
            )
        )


reporter = CapitalizationTestReporter()


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Pick capitalization mismatches out of assertion messages."""
    outcome = yield
    report = outcome.get_result()

    if report.when != "call" or not report.failed or not report.longrepr:
        return
    match = _CAPITALIZE_MESSAGE.search(str(report.longrepr))
    if match:
        reporter.record_result(item.nodeid, *match.groups(), passed=False)


def pytest_sessionfinish(session, exitstatus):
    if reporter.failures:
        console.print("\n")
        reporter.print_summary()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Give every test an empty config file and a fresh resource cache."""
    monkeypatch.delenv("SQLUP_CONFIG", raising=False)
    monkeypatch.delenv("SQLUP_DIALECT", raising=False)
    config_file = tmp_path / "sqlup.json"
    config_file.write_text("{}", encoding="utf-8")
    config = load_config(config_file)
    set_config(config)
    clear_resource_cache()
    yield config
    set_config(None)
    clear_resource_cache()


@pytest.fixture
def write_config(tmp_path):
    """Write a config file and install it as the global config."""

    def _write(data: dict):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        config = load_config(path)
        set_config(config)
        return config

    return _write


@pytest.fixture
def make_mode():
    """Build a TextBuffer and its SqlupMode."""

    def _make(text: str = "", dialect: str | None = None, mode: str = "sql", **buffer_kwargs) -> SqlupMode:
        buffer = TextBuffer(text, mode=mode, **buffer_kwargs)
        return SqlupMode(buffer, DialectSelector(dialect))

    return _make


@pytest.fixture
def capitalize(make_mode):
    """Capitalize a whole string and return the result."""

    def _capitalize(text: str, dialect: str | None = None, mode: str = "sql") -> str:
        sqlup = make_mode(text, dialect=dialect, mode=mode)
        sqlup.capitalize_buffer()
        return sqlup.buffer.text

    return _capitalize


@pytest.fixture
def typed(make_mode):
    """Type a string keystroke by keystroke with the mode enabled and return the buffer text."""

    def _typed(keys: str, dialect: str | None = None) -> str:
        sqlup = make_mode(dialect=dialect)
        sqlup.enable()
        sqlup.buffer.type(keys)
        return sqlup.buffer.text

    return _typed
