#!/usr/bin/env python3
"""
App hooks for the sqlup CLI - implementation behind every command.
This file connects the CLI definitions in cli.py to the capitalization engine.
"""
from __future__ import annotations

import json as jsonlib
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from .capitalization.constants import available_dialects, get_dialect_resources, get_eval_keywords
from .capitalization.keywords import KeywordSetResolver
from .capitalization.mode import SqlupMode
from .core.config import ConfigurationError, get_config
from .host.buffer import TextBuffer
from .host.dialect import DialectSelector

console = Console()
err_console = Console(stderr=True)


def _read_source(file: Optional[str]) -> tuple[str, str]:
    """Return (buffer name, text) for a path, or stdin when the path is None or '-'"""
    if file is None or file == "-":
        return "<stdin>", sys.stdin.read()
    path = Path(file)
    return path.name, path.read_text(encoding="utf-8")


def _make_mode(text: str, name: str, dialect: Optional[str], mode: str = "sql") -> SqlupMode:
    buffer = TextBuffer(text, name=name, mode=mode)
    return SqlupMode(buffer, DialectSelector(dialect), get_config())


def on_format(
    file: Optional[str],
    dialect: Optional[str] = None,
    start: int = 0,
    end: Optional[int] = None,
    in_place: bool = False,
    **kwargs,
) -> int:
    """Handle the format command - capitalize keywords across a span of a file"""
    try:
        if in_place and (file is None or file == "-"):
            err_console.print("[red]Error:[/red] --in-place needs a file argument")
            return 2

        name, text = _read_source(file)
        sqlup = _make_mode(text, name, dialect)
        changed = sqlup.capitalize_region(start, len(text) if end is None else end)

        if in_place:
            Path(file).write_text(sqlup.buffer.text, encoding="utf-8")
            err_console.print(f"✅ {changed} keyword(s) capitalized in {file}")
        else:
            sys.stdout.write(sqlup.buffer.text)
        return 0
    except (OSError, UnicodeDecodeError, ConfigurationError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        return 1


def on_type(file: Optional[str], dialect: Optional[str] = None, **kwargs) -> int:
    """Handle the type command - replay text keystroke by keystroke through the mode"""
    try:
        name, text = _read_source(file)
        sqlup = _make_mode("", name, dialect)
        sqlup.enable()
        sqlup.buffer.type(text)
        sqlup.disable()
        sys.stdout.write(sqlup.buffer.text)
        return 0
    except (OSError, UnicodeDecodeError, ConfigurationError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        return 1


def on_keywords(dialect: Optional[str] = None, mode: str = "sql", json: bool = False, **kwargs) -> int:
    """List the keywords a buffer in the given mode and dialect would use"""
    try:
        buffer = TextBuffer(name="*keywords*", mode=mode)
        resolver = KeywordSetResolver(buffer, DialectSelector(dialect), get_config())
        keywords = resolver.resolve()

        if json:
            print(
                jsonlib.dumps(
                    {
                        "source": keywords.source,
                        "keywords": list(keywords),
                        "patterns": [p.pattern for p in keywords.patterns],
                    },
                    indent=2,
                )
            )
        else:
            console.print(f"[bold yellow]{len(keywords)} keywords[/bold yellow] from [cyan]{keywords.source}[/cyan]")
            console.print(" ".join(keywords))
            for pattern in keywords.patterns:
                console.print(f"  pattern: [green]{pattern.pattern}[/green]")
        return 0
    except (ConfigurationError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        return 1


def on_dialects(json: bool = False, **kwargs) -> int:
    """Show every shipped dialect with its keyword count and eval-string markers"""
    try:
        config = get_config()
        rows = []
        for name in available_dialects():
            resources = get_dialect_resources(name)
            markers = get_eval_keywords(name, config.get_eval_keywords(name))
            rows.append(
                {
                    "dialect": name,
                    "description": resources["description"],
                    "keywords": len(resources["keywords"]) + len(config.get_extra_keywords(name)),
                    "eval_markers": list(markers),
                    "default": name == config.default_dialect,
                }
            )

        if json:
            print(jsonlib.dumps(rows, indent=2))
            return 0

        table = Table(title="SQL Dialects", show_header=True, header_style="bold magenta")
        table.add_column("Dialect", style="cyan")
        table.add_column("Description")
        table.add_column("Keywords", justify="right", style="green")
        table.add_column("Eval markers", style="yellow")
        for row in rows:
            label = f"{row['dialect']} (default)" if row["default"] else row["dialect"]
            table.add_row(label, row["description"], str(row["keywords"]), ", ".join(row["eval_markers"]) or "-")
        console.print(table)
        return 0
    except (ConfigurationError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        return 1


def on_config_show(json: bool = False, **kwargs) -> int:
    """Show the effective configuration"""
    config = get_config()
    data = {
        "config_file": config.config_file,
        "dialect.default": config.default_dialect,
        "keywords.blacklist": sorted(config.blacklist),
        "keywords.extra": config.get("keywords.extra", {}),
        "eval_keywords": config.get("eval_keywords", {}),
        "logging.level": config.log_level,
        "logging.output": config.log_output,
    }
    if json:
        print(jsonlib.dumps(data, indent=2))
    else:
        console.print("🔧 [bold]Current Configuration[/bold]")
        for key, value in data.items():
            console.print(f"  {key}: {value}")
    return 0
