# ============================================================================
# DDL UTILITY TESTS
# ============================================================================
# STATUS: Tests - Shared SQL composition helpers
# PURPOSE: Verify type tokens, default quoting and clause joining
# CREATED: 18 OCT 2026
# ============================================================================
"""
DDL Utility Tests

Run with:
    pytest tests/test_ddl_utils.py -v
"""

import pytest
from psycopg import sql

from pgddl.contracts import DataType
from pgddl.schema.ddl_utils import (
    CommentBuilder,
    data_type_token,
    format_default,
    is_bare_default,
    join_clauses,
    qualify,
    quote_literal,
    render,
)


class TestDataTypeToken:
    def test_string_tokens_are_accepted(self):
        assert data_type_token("datetime") == "TIMESTAMP"

    def test_unknown_falls_back(self):
        assert data_type_token("uuid") == "VARCHAR"
        assert data_type_token(None) == "VARCHAR"

    def test_refinements_only_apply_to_their_type(self):
        assert data_type_token(DataType.INTEGER, length=10, precision=5) == "INTEGER"
        assert data_type_token(DataType.STRING, length=0) == "VARCHAR"
        assert data_type_token(DataType.DECIMAL, scale=2) == "DECIMAL"


class TestDefaultQuoting:
    @pytest.mark.parametrize("value", [
        "CURRENT_TIMESTAMP", "CURRENT_DATE", "CURRENT_TIME", "LOCAL_TIME", "LOCAL_TIMESTAMP",
        "TRUE", "FALSE", "NULL", "true", "false",
        "0", "42", "-3.5", "1e10",
    ])
    def test_bare(self, value):
        assert is_bare_default(value)
        assert format_default(value) == value

    @pytest.mark.parametrize("value", ["active", "now()", "1_000", " 1", "Null", "", "\u0661\u0662", "\uff11"])
    def test_quoted(self, value):
        assert not is_bare_default(value)

    def test_non_ascii_digits_are_quoted(self):
        assert format_default("\u0661\u0662") == "'\u0661\u0662'"

    def test_quote_doubling(self):
        assert quote_literal("O'Brien") == "'O''Brien'"
        assert format_default("it's") == "'it''s'"


class TestComposition:
    def test_join_skips_empty_parts(self):
        composed = join_clauses(["DROP TABLE", "", "t", sql.SQL("CASCADE")])
        assert render(composed) == "DROP TABLE t CASCADE"

    def test_custom_separator(self):
        assert render(join_clauses(["a", "b"], separator=", ")) == "a, b"

    def test_percent_signs_survive(self):
        assert render(join_clauses(["CHECK (x LIKE '%a%')"])) == "CHECK (x LIKE '%a%')"

    def test_qualify(self):
        assert qualify("auth", "users") == "auth.users"
        assert qualify("", "users") == "users"
        assert qualify(None, "users") == "users"

    def test_comment_fragments(self):
        assert render(CommentBuilder.table("t", "a'b")) == "COMMENT ON TABLE t IS 'a''b'"
        assert render(CommentBuilder.column("note")) == "COMMENT 'note'"
