# ============================================================================
# DROP TABLE TESTS
# ============================================================================
# STATUS: Tests - DROP TABLE rendering
# PURPOSE: Verify IF EXISTS / CASCADE rendering and the name check
# CREATED: 18 OCT 2026
# ============================================================================
"""
Drop Table Tests

Run with:
    pytest tests/test_drop_table.py -v
"""

import pytest

from pgddl.contracts import MissingFieldError, StatementRejectedError
from pgddl.models import DropTable


class TestDropTable:
    def test_basic(self):
        assert DropTable("temp_logs").to_sql() == ("DROP TABLE IF EXISTS temp_logs", None)

    def test_cascade(self):
        sql, _ = DropTable("temp_logs").set_cascade().to_sql()
        assert sql == "DROP TABLE IF EXISTS temp_logs CASCADE"

    def test_cascade_can_be_cleared(self):
        sql, _ = DropTable("temp_logs").set_cascade().set_cascade(False).to_sql()
        assert sql == "DROP TABLE IF EXISTS temp_logs"

    def test_name_required(self):
        sql, err = DropTable("").to_sql()
        assert sql == ""
        assert isinstance(err, MissingFieldError)
        assert str(err) == "table name cannot be empty"

    def test_compose(self):
        assert DropTable("t").compose().as_string(None) == "DROP TABLE IF EXISTS t"
        with pytest.raises(StatementRejectedError):
            DropTable().compose()
