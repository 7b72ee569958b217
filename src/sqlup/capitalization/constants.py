#!/usr/bin/env python3
"""Shared constants and the dialect resource loader."""
from __future__ import annotations

# Standard library imports
import json
import os
import threading
from functools import lru_cache
from typing import Any

from ..core.config import setup_logging

logger = setup_logging(__name__)

# ==============================================================================
# TRIGGERS
# ==============================================================================

# Single characters whose self-insertion starts a capitalization pass
TRIGGER_CHARACTERS = frozenset((" ", ";", ",", "(", "'"))

# Carriage return and line feed: the Enter trigger
ENTER_KEY_CODES = frozenset((13, 10))

# ==============================================================================
# DIALECTS
# ==============================================================================

DEFAULT_DIALECT = "ansi"

# Major mode of the key-value-store DSL whose built-in command list wins
REDIS_MODE = "redis"

# Markers that, found right before a string's opening quote, make that string
# dynamically executed SQL. Compared case-insensitively.
EVAL_KEYWORDS: dict[str, tuple[str, ...]] = {
    "postgres": ("EXECUTE", "format("),
    "oracle": ("EXECUTE IMMEDIATE",),
    "ms": ("EXEC(", "EXECUTE(", "sp_executesql"),
}

# ==============================================================================
# RESOURCE LOADER
# ==============================================================================

_RESOURCE_PATH = os.path.join(os.path.dirname(__file__), "resources")
_DIALECT_PATH = os.path.join(_RESOURCE_PATH, "dialects")
_MODE_PATH = os.path.join(_RESOURCE_PATH, "modes")

_DIALECTS: dict[str, dict[str, Any]] = {}  # Cache for loaded dialects
_LOCK = threading.RLock()  # Re-entrant: "extends" loads the parent while holding it

# Suppress repeated warnings for unknown dialects
_WARNED_DIALECTS: set[str] = set()


@lru_cache(maxsize=None)
def available_dialects() -> tuple[str, ...]:
    """Names of every dialect that ships a keyword resource"""
    return tuple(
        sorted(
            os.path.splitext(filename)[0]
            for filename in os.listdir(_DIALECT_PATH)
            if filename.endswith(".json")
        )
    )


def normalize_dialect(dialect: str | None) -> str:
    """Map None, empty and unknown dialect names to the default dialect"""
    if not dialect:
        return DEFAULT_DIALECT
    name = dialect.strip().lower()
    if name in available_dialects():
        return name
    if name not in _WARNED_DIALECTS:
        _WARNED_DIALECTS.add(name)
        logger.warning(f"Unknown dialect '{name}', falling back to '{DEFAULT_DIALECT}'")
    return DEFAULT_DIALECT


def _read_resource(filepath: str, name: str) -> dict[str, Any]:
    try:
        with open(filepath, encoding="utf-8") as f:
            resource: dict[str, Any] = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Error decoding JSON from {name}.json") from e
    return resource


def get_dialect_resources(dialect: str | None = DEFAULT_DIALECT) -> dict[str, Any]:
    """
    Loads and caches the keyword resource of a dialect.

    A resource may name a parent in ``extends``; the parent's keywords and
    patterns are merged in, so every product dialect carries the ANSI words.

    Args:
        dialect: Dialect name (e.g., 'ansi', 'postgres', 'mysql')

    Returns:
        dict with ``keywords`` (list of str) and ``patterns`` (list of regex str)

    Raises:
        ValueError: If the default dialect resource is missing or malformed

    """
    name = normalize_dialect(dialect)
    if name in _DIALECTS:
        return _DIALECTS[name]

    with _LOCK:
        # Double-check if another thread loaded it while we were waiting
        if name in _DIALECTS:
            return _DIALECTS[name]

        try:
            resource = _read_resource(os.path.join(_DIALECT_PATH, f"{name}.json"), name)
        except FileNotFoundError:
            if name != DEFAULT_DIALECT:
                return get_dialect_resources(DEFAULT_DIALECT)
            raise ValueError(f"Default dialect resource '{DEFAULT_DIALECT}.json' not found.") from None

        keywords = [kw.lower() for kw in resource.get("keywords", [])]
        patterns = list(resource.get("patterns", []))
        parent = resource.get("extends")
        if parent:
            parent_resource = get_dialect_resources(parent)
            keywords = parent_resource["keywords"] + keywords
            patterns = parent_resource["patterns"] + patterns

        loaded = {
            "name": name,
            "description": resource.get("description", ""),
            "keywords": keywords,
            "patterns": patterns,
        }
        _DIALECTS[name] = loaded
        logger.debug(f"Loaded dialect '{name}' with {len(keywords)} keywords")
        return loaded


@lru_cache(maxsize=None)
def get_mode_keywords(mode: str) -> tuple[str, ...]:
    """Built-in keyword list shipped for a non-SQL major mode (e.g. redis)"""
    filepath = os.path.join(_MODE_PATH, f"{mode}.json")
    try:
        resource = _read_resource(filepath, mode)
    except FileNotFoundError:
        return ()
    return tuple(kw.lower() for kw in resource.get("keywords", []))


def get_eval_keywords(dialect: str | None, extra: list[str] | None = None) -> tuple[str, ...]:
    """Eval-string markers for a dialect, built-in entries first"""
    markers = EVAL_KEYWORDS.get(normalize_dialect(dialect), ())
    if extra:
        markers = markers + tuple(m for m in extra if m not in markers)
    return markers


def clear_resource_cache() -> None:
    """Drop loaded dialect resources (useful for testing)"""
    with _LOCK:
        _DIALECTS.clear()
        _WARNED_DIALECTS.clear()
