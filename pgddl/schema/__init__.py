# ============================================================================
# SCHEMA MODULE
# ============================================================================
# STATUS: Core - Shared DDL composition helpers
# PURPOSE: Type tokens, literal quoting and clause joining for every serializer
# CREATED: 18 OCT 2026
# ============================================================================
"""
Schema Module

The model-driven generator lives in pgddl.schema.sql_generator; it depends on
pgddl.models, which depends on this package, so it is not imported here.
"""

from pgddl.schema.ddl_utils import (
    TYPE_MAP,
    FALLBACK_TYPE,
    BARE_DEFAULTS,
    CommentBuilder,
    data_type_token,
    is_bare_default,
    quote_literal,
    format_default,
    qualify,
    join_clauses,
    parenthesized,
    render,
)

__all__ = [
    # Type mapping
    "TYPE_MAP",
    "FALLBACK_TYPE",
    "data_type_token",
    # Literals
    "BARE_DEFAULTS",
    "is_bare_default",
    "quote_literal",
    "format_default",
    "qualify",
    # Composition
    "join_clauses",
    "parenthesized",
    "render",
    "CommentBuilder",
]
