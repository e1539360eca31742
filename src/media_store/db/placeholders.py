"""Positional placeholder translation between SQL dialects.

Application SQL uses ``?`` as the generic positional placeholder. PostgreSQL
(asyncpg) wants ``$1, $2, ...``; SQLite accepts ``?`` natively and also
understands numbered ``?N``, which is how ``$N`` text written for Postgres is
made to run against SQLite.

Single-quoted string literals (with ``''`` escapes) are copied through
untouched in both directions.
"""

from __future__ import annotations

import re

GENERIC_PLACEHOLDER = "?"

# Pre-compiled regexes for placeholder translation. The first alternative
# consumes a whole string literal so placeholders inside it never match.
_LITERAL = r"'(?:[^']|'')*'"
_QMARK_RE = re.compile(_LITERAL + r"|(\?)")
_DOLLAR_RE = re.compile(_LITERAL + r"|\$(\d+)")


def qmark_to_dollar(sql: str) -> str:
    """Convert ``?`` placeholders to ``$1, $2, ...`` in left-to-right order.

    Text without any ``?`` (including text already written with ``$N``) is
    returned unchanged.
    """
    if GENERIC_PLACEHOLDER not in sql:
        return sql

    counter = 0

    def _replace(match: re.Match[str]) -> str:
        nonlocal counter
        if match.group(1) is None:
            return match.group(0)
        counter += 1
        return f"${counter}"

    return _QMARK_RE.sub(_replace, sql)


def dollar_to_qmark(sql: str) -> str:
    """Convert ``$N`` placeholders to SQLite's numbered ``?N`` form.

    Numbering is kept as written, so ``$2 ... $1`` binds the same parameters
    on both backends. Text without ``$N`` is returned unchanged.
    """
    if "$" not in sql:
        return sql

    def _replace(match: re.Match[str]) -> str:
        if match.group(1) is None:
            return match.group(0)
        return f"?{match.group(1)}"

    return _DOLLAR_RE.sub(_replace, sql)
