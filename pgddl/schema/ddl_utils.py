# ============================================================================
# DDL UTILITIES
# ============================================================================
# STATUS: Core - DRY utilities for SQL DDL generation
# PURPOSE: Type tokens, default quoting, clause composition using psycopg.sql
# CREATED: 18 OCT 2026
# EXPORTS: TYPE_MAP, data_type_token, is_bare_default, format_default,
#          quote_literal, qualify, join_clauses, render, CommentBuilder
# DEPENDENCIES: psycopg
# ============================================================================
"""
DDL Utilities - Shared SQL Generation Patterns.

Every serializer builds its statement as a list of psycopg.sql.SQL clauses,
joins them and renders the result to text. Clause text is emitted verbatim;
only values wrapped in single quotes by this module are escaped.

Usage:
    from pgddl.schema.ddl_utils import join_clauses, render

    parts = ["CREATE TABLE", "users", "(id SERIAL PRIMARY KEY)"]
    text = render(join_clauses(parts))
"""

from typing import Iterable, Optional, Sequence, Union

from psycopg import sql

from pgddl.contracts import DataType


# ============================================================================
# TYPE MAPPING
# ============================================================================

TYPE_MAP = {
    DataType.SERIAL: "SERIAL",
    DataType.STRING: "VARCHAR",
    DataType.INTEGER: "INTEGER",
    DataType.DECIMAL: "DECIMAL",
    DataType.BOOLEAN: "BOOLEAN",
    DataType.DATE: "DATE",
    DataType.DATETIME: "TIMESTAMP",
}

# Unknown or unset types fall back to this token
FALLBACK_TYPE = "VARCHAR"


def data_type_token(
    data_type,
    length: int = 0,
    precision: int = 0,
    scale: int = 0,
) -> str:
    """
    Map a logical data type to its PostgreSQL token.

    Args:
        data_type: DataType member, its string token, or None
        length: VARCHAR length (ignored when <= 0)
        precision: DECIMAL precision (ignored when <= 0)
        scale: DECIMAL scale (only used with a precision)

    Returns:
        PostgreSQL type token
    """
    parsed = DataType.parse(data_type)
    if parsed is None:
        return FALLBACK_TYPE

    if parsed == DataType.STRING and length > 0:
        return f"VARCHAR({length})"

    if parsed == DataType.DECIMAL and precision > 0:
        if scale > 0:
            return f"DECIMAL({precision},{scale})"
        return f"DECIMAL({precision})"

    return TYPE_MAP[parsed]


# ============================================================================
# LITERALS & DEFAULTS
# ============================================================================

BARE_DEFAULTS = frozenset({
    "CURRENT_TIMESTAMP",
    "CURRENT_DATE",
    "CURRENT_TIME",
    "LOCAL_TIME",
    "LOCAL_TIMESTAMP",
    "TRUE",
    "FALSE",
    "NULL",
    "true",
    "false",
})


def _is_number(value: str) -> bool:
    """True if value is a plain floating-point literal."""
    # float() tolerates padding, digit separators and non-ASCII digits, a numeric literal does not
    if not value.isascii() or value != value.strip() or "_" in value:
        return False
    try:
        float(value)
    except ValueError:
        return False
    return True


def is_bare_default(value: str) -> bool:
    """
    Decide whether a DEFAULT value is emitted without quotes.

    Keywords from BARE_DEFAULTS and numeric literals stay bare, everything
    else is a string literal.
    """
    return value in BARE_DEFAULTS or _is_number(value)


def quote_literal(value: str) -> str:
    """Wrap text in single quotes, doubling embedded quotes."""
    return "'" + str(value).replace("'", "''") + "'"


def format_default(value: str) -> str:
    """Render the value part of a DEFAULT clause."""
    if is_bare_default(value):
        return value
    return quote_literal(value)


def qualify(schema: Optional[str], name: str) -> str:
    """Prefix a name with its schema when one is set."""
    if schema:
        return f"{schema}.{name}"
    return name


# ============================================================================
# CLAUSE COMPOSITION
# ============================================================================

def join_clauses(
    parts: Iterable[Union[str, sql.Composable]],
    separator: str = " ",
) -> sql.Composed:
    """Join clauses with a separator, skipping empty ones."""
    composables = []
    for part in parts:
        if isinstance(part, str):
            if not part:
                continue
            part = sql.SQL(part)
        composables.append(part)
    return sql.SQL(separator).join(composables)


def parenthesized(items: Sequence[str]) -> str:
    """Render (a, b, c)."""
    return "(" + ", ".join(items) + ")"


def render(composable: sql.Composable) -> str:
    """Render a composed statement to text without a connection."""
    return composable.as_string(None)


# ============================================================================
# COMMENT BUILDER
# ============================================================================

class CommentBuilder:
    """
    Builder for COMMENT fragments.
    """

    @staticmethod
    def table(table: str, comment: str) -> sql.Composed:
        """COMMENT ON TABLE fragment appended to CREATE/ALTER TABLE."""
        return join_clauses([
            "COMMENT ON TABLE",
            table,
            "IS",
            quote_literal(comment),
        ])

    @staticmethod
    def column(comment: str) -> sql.Composed:
        """Inline COMMENT clause of a column definition."""
        return join_clauses(["COMMENT", quote_literal(comment)])


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "TYPE_MAP",
    "FALLBACK_TYPE",
    "BARE_DEFAULTS",
    "data_type_token",
    "is_bare_default",
    "quote_literal",
    "format_default",
    "qualify",
    "join_clauses",
    "parenthesized",
    "render",
    "CommentBuilder",
]
