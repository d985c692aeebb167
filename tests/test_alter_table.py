# ============================================================================
# ALTER TABLE TESTS
# ============================================================================
# STATUS: Tests - ALTER TABLE operation dispatch
# PURPOSE: Verify add/drop/rename/retype rendering, ordering and errors
# CREATED: 18 OCT 2026
# ============================================================================
"""
Alter Table Tests

Unit tests for ALTER TABLE:
- Operation rendering in insertion order
- ColumnUpdate resolution (rename wins over retype)
- Alter-type rendering in both configuration modes
- Aggregated errors

Run with:
    pytest tests/test_alter_table.py -v
"""

import pytest
from pydantic import ValidationError

from pgddl.config import reset_defaults
from pgddl.contracts import (
    AlterOperation,
    DataType,
    DefaultValue,
    EmptyStatementError,
    InvalidColumnError,
    MissingFieldError,
)
from pgddl.models import AlterTable, Column, ColumnOperation, ColumnUpdate


# ============================================================================
# COLUMN UPDATE
# ============================================================================


class TestColumnUpdate:
    def test_rename_wins(self):
        update = ColumnUpdate(new_name="b", new_data_type=DataType.STRING)
        assert update.resolve() == AlterOperation.RENAME

    def test_retype(self):
        assert ColumnUpdate(new_data_type=DataType.STRING).resolve() == AlterOperation.ALTER_TYPE

    def test_empty(self):
        assert ColumnUpdate().resolve() is None

    def test_frozen(self):
        update = ColumnUpdate(new_name="b")
        with pytest.raises(ValidationError):
            update.new_name = "c"


# ============================================================================
# RENDERING
# ============================================================================


class TestAlterTableRendering:
    def test_add_column(self):
        alter = AlterTable("users").add_column(
            Column("email").set_data_type(DataType.STRING).set_length(255).set_not_null()
        )
        sql, errors = alter.to_sql()
        assert errors == []
        assert sql == "ALTER TABLE users ADD COLUMN email VARCHAR(255) NOT NULL"

    def test_drop_column(self):
        sql, _ = AlterTable("users").drop_column(Column("temp_field")).to_sql()
        assert sql == "ALTER TABLE users DROP COLUMN temp_field"

    def test_rename_column(self):
        sql, _ = AlterTable("users").rename_column(Column("username"), "login_name").to_sql()
        assert sql == "ALTER TABLE users RENAME COLUMN username TO login_name"

    def test_mixed_operations_keep_order(self):
        alter = (
            AlterTable("products")
            .add_column(Column("category_id").set_data_type(DataType.INTEGER).set_not_null())
            .drop_column(Column("old_category"))
            .alter_column(Column("desc"), ColumnUpdate(new_name="description"))
        )
        sql, errors = alter.to_sql()
        assert errors == []
        assert sql == (
            "ALTER TABLE products ADD COLUMN category_id INTEGER NOT NULL, "
            "DROP COLUMN old_category, RENAME COLUMN desc TO description"
        )

    def test_several_added_columns(self):
        alter = (
            AlterTable("Account")
            .add_column(Column("ownerId").set_data_type(DataType.STRING).set_length(10).set_references("crmuser", "id"))
            .add_column(Column("is_delete").set_data_type(DataType.BOOLEAN).set_default(DefaultValue.FALSE))
            .add_column(Column("order_date").set_data_type(DataType.DATETIME).set_default(DefaultValue.CURRENT_TIMESTAMP))
        )
        sql, _ = alter.to_sql()
        assert sql == (
            "ALTER TABLE Account ADD COLUMN ownerId VARCHAR(10) REFERENCES crmuser(id), "
            "ADD COLUMN is_delete BOOLEAN DEFAULT FALSE, "
            "ADD COLUMN order_date TIMESTAMP DEFAULT CURRENT_TIMESTAMP"
        )

    def test_with_comment(self):
        alter = (
            AlterTable("orders")
            .add_column(Column("status").set_data_type(DataType.STRING).set_length(20))
            .set_comment("Updated orders table")
        )
        sql, _ = alter.to_sql()
        assert sql == (
            "ALTER TABLE orders ADD COLUMN status VARCHAR(20) "
            "COMMENT ON TABLE orders IS 'Updated orders table'"
        )

    def test_none_columns_are_ignored(self):
        alter = AlterTable("t").add_column(None).drop_column(None).drop_column(Column("a"))
        assert len(alter.operations) == 1

    def test_empty_update_records_nothing(self):
        alter = AlterTable("t").alter_column(Column("a"), ColumnUpdate())
        assert alter.operations == []

    def test_update_lives_on_operation(self):
        column = Column("a")
        alter = AlterTable("t").rename_column(column, "b")
        assert alter.operations[0].update.new_name == "b"
        assert "new_name" not in Column.model_fields

    def test_idempotent(self):
        alter = AlterTable("t").drop_column(Column("a")).rename_column(Column("b"), "c")
        assert alter.to_sql() == alter.to_sql()


# ============================================================================
# ALTER TYPE
# ============================================================================


class TestAlterColumnType:
    def test_legacy_rendering_uses_type_tokens(self):
        column = Column("ownerId").set_data_type(DataType.INTEGER)
        sql, errors = AlterTable("Account").alter_column_type(column, DataType.STRING).to_sql()
        assert errors == []
        assert sql == "ALTER TABLE Account ALTER COLUMN INTEGER TYPE VARCHAR"

    def test_column_name_rendering(self, monkeypatch):
        monkeypatch.setenv("PGDDL_LEGACY_ALTER_TYPE", "false")
        reset_defaults()
        column = Column("ownerId").set_data_type(DataType.INTEGER)
        sql, _ = AlterTable("Account").alter_column_type(column, "string").to_sql()
        assert sql == "ALTER TABLE Account ALTER COLUMN ownerId TYPE VARCHAR"

    def test_new_type_uses_column_refinements(self, monkeypatch):
        monkeypatch.setenv("PGDDL_LEGACY_ALTER_TYPE", "0")
        reset_defaults()
        column = Column("code").set_length(32)
        sql, _ = AlterTable("t").alter_column_type(column, DataType.STRING).to_sql()
        assert sql == "ALTER TABLE t ALTER COLUMN code TYPE VARCHAR(32)"

    def test_unset_current_type_falls_back(self):
        sql, _ = AlterTable("t").alter_column_type(Column("a"), DataType.INTEGER).to_sql()
        assert sql == "ALTER TABLE t ALTER COLUMN VARCHAR TYPE INTEGER"

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            AlterTable("t").alter_column_type(Column("a"), "uuid")


# ============================================================================
# ERRORS
# ============================================================================


class TestAlterTableErrors:
    def test_empty_name_and_no_operations(self):
        sql, errors = AlterTable("").to_sql()
        assert sql == ""
        assert [str(e) for e in errors] == [
            "table name cannot be empty",
            "alter table must have at least one operation",
        ]

    def test_no_operations(self):
        sql, errors = AlterTable("users").to_sql()
        assert sql == ""
        assert len(errors) == 1
        assert isinstance(errors[0], MissingFieldError)

    def test_invalid_added_column_voids_statement(self):
        alter = (
            AlterTable("t")
            .add_column(Column("bad"))
            .drop_column(Column("old"))
        )
        sql, errors = alter.to_sql()
        assert sql == ""
        assert len(errors) == 1
        assert isinstance(errors[0], InvalidColumnError)

    def test_nameless_drop(self):
        sql, errors = AlterTable("t").drop_column(Column()).to_sql()
        assert sql == ""
        assert isinstance(errors[0], MissingFieldError)
        assert isinstance(errors[-1], EmptyStatementError)
        assert str(errors[-1]) == "no valid operations defined for table t"


# ============================================================================
# OPERATIONS LOADED AS DATA
# ============================================================================


class TestStoredOperations:
    def test_rename_without_update(self):
        alter = AlterTable("t", operations=[ColumnOperation(operation="rename", column=Column("a"))])
        sql, errors = alter.to_sql()
        assert sql == ""
        assert isinstance(errors[0], MissingFieldError)
        assert str(errors[0]) == "rename column requires a new name"

    def test_rename_with_retype_update(self):
        op = ColumnOperation(
            operation="rename",
            column=Column("a"),
            update=ColumnUpdate(new_data_type="integer"),
        )
        sql, errors = AlterTable("t", operations=[op]).to_sql()
        assert sql == ""
        assert str(errors[0]) == "rename column requires a new name"

    def test_alter_type_with_rename_update(self):
        op = ColumnOperation(
            operation="alter_type",
            column=Column("a").set_data_type(DataType.INTEGER),
            update=ColumnUpdate(new_name="b"),
        )
        sql, errors = AlterTable("t", operations=[op]).to_sql()
        assert sql == ""
        assert str(errors[0]) == "alter column type requires a new data type"

    @pytest.mark.parametrize("payload,message", [
        (
            '{"table_name": "t", "operations": [{"operation": "rename", "column": {"name": "a"}}]}',
            "rename column requires a new name",
        ),
        (
            '{"table_name": "t", "operations": [{"operation": "alter_type", "column": {"name": "a"}}]}',
            "alter column type requires a new data type",
        ),
    ])
    def test_json_payload_without_update(self, payload, message):
        sql, errors = AlterTable.model_validate_json(payload).to_sql()
        assert sql == ""
        assert str(errors[0]) == message
        assert isinstance(errors[-1], EmptyStatementError)

    def test_json_round_trip(self):
        alter = AlterTable("t").rename_column(Column("a"), "b").alter_column_type(Column("c"), DataType.INTEGER)
        restored = AlterTable.model_validate_json(alter.model_dump_json())
        assert restored.to_sql() == alter.to_sql()
