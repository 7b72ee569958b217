#!/usr/bin/env python3
"""
Lexical classification of a position in SQL text.

Only the parts of SQL syntax that decide capitalization are recognized:
- ``--`` line comments (and ``#`` line comments in MySQL)
- ``/* ... */`` block comments, nested in PostgreSQL
- single-quoted string literals with ``''`` doubling (and backslash escapes in MySQL)
- double-quoted identifiers (and backtick identifiers in MySQL)

Dollar-quoted bodies are left as code so PL/pgSQL function bodies stay eligible.
"""
from __future__ import annotations

from dataclasses import dataclass

_CODE = "code"
_LINE_COMMENT = "line_comment"
_BLOCK_COMMENT = "block_comment"
_STRING = "string"
_IDENTIFIER = "identifier"


class LexicalScanError(Exception):
    """Raised when the syntactic state at a position cannot be computed."""
    pass


@dataclass(frozen=True)
class SyntaxState:
    """Syntactic context of a single position"""

    in_comment: bool = False
    in_string: bool = False
    string_start: int | None = None
    in_identifier: bool = False


@dataclass(frozen=True)
class LexerRules:
    """Per-dialect switches for the scanner"""

    hash_comments: bool = False
    nested_block_comments: bool = False
    backslash_escapes: bool = False
    backtick_identifiers: bool = False


DEFAULT_RULES = LexerRules()

DIALECT_RULES: dict[str, LexerRules] = {
    "mysql": LexerRules(hash_comments=True, backslash_escapes=True, backtick_identifiers=True),
    "postgres": LexerRules(nested_block_comments=True),
}


def rules_for(dialect: str | None) -> LexerRules:
    return DIALECT_RULES.get(dialect or "", DEFAULT_RULES)


class SqlLexer:
    """Scans SQL text from the beginning up to a position."""

    def __init__(self, rules: LexerRules = DEFAULT_RULES):
        self.rules = rules

    def classify(self, content: str, position: int) -> SyntaxState:
        """
        Compute the syntactic state just before ``content[position]``.

        Args:
            content: Full text snapshot
            position: Offset in ``[0, len(content)]``

        Returns:
            SyntaxState describing comment / string / identifier membership

        Raises:
            LexicalScanError: If position lies outside the content

        """
        if not 0 <= position <= len(content):
            raise LexicalScanError(f"Position {position} outside content of length {len(content)}")

        rules = self.rules
        state = _CODE
        depth = 0
        open_at: int | None = None
        closing_quote = ""
        i = 0

        while i < position:
            char = content[i]
            following = content[i + 1] if i + 1 < position else ""

            if state == _CODE:
                if char == "-" and following == "-":
                    state = _LINE_COMMENT
                    i += 2
                    continue
                if char == "#" and rules.hash_comments:
                    state = _LINE_COMMENT
                elif char == "/" and following == "*":
                    state, depth = _BLOCK_COMMENT, 1
                    i += 2
                    continue
                elif char == "'":
                    state, open_at = _STRING, i
                elif char == '"' or (char == "`" and rules.backtick_identifiers):
                    state, open_at, closing_quote = _IDENTIFIER, i, char

            elif state == _LINE_COMMENT:
                if char in "\n\f":
                    state = _CODE

            elif state == _BLOCK_COMMENT:
                if char == "*" and following == "/":
                    depth -= 1
                    if depth == 0:
                        state = _CODE
                    i += 2
                    continue
                if char == "/" and following == "*" and rules.nested_block_comments:
                    depth += 1
                    i += 2
                    continue

            elif state == _STRING:
                if char == "\\" and rules.backslash_escapes:
                    i += 2
                    continue
                if char == "'":
                    if following == "'":
                        i += 2
                        continue
                    state, open_at = _CODE, None

            elif state == _IDENTIFIER:
                if char == closing_quote:
                    if following == closing_quote:
                        i += 2
                        continue
                    state, open_at = _CODE, None

            i += 1

        return SyntaxState(
            in_comment=state in (_LINE_COMMENT, _BLOCK_COMMENT),
            in_string=state == _STRING,
            string_start=open_at if state == _STRING else None,
            in_identifier=state == _IDENTIFIER,
        )


def classify_at(content: str, position: int, dialect: str | None = None) -> SyntaxState:
    """Classify ``position`` in ``content`` under the SQL rules of ``dialect``"""
    return SqlLexer(rules_for(dialect)).classify(content, position)
