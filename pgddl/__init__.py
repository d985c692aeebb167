# ============================================================================
# PGDDL PACKAGE
# ============================================================================
# STATUS: Package root
# PURPOSE: Public API of the PostgreSQL DDL builder
# CREATED: 18 OCT 2026
# ============================================================================
"""
pgddl - PostgreSQL DDL builder.

Configure tables, columns, alter operations and indexes as pydantic models,
then render them to DDL text.

Usage:
    from pgddl import Column, DataType, Table

    table = Table("users").add_columns(
        Column("id").set_data_type(DataType.SERIAL).set_primary_key(),
        Column("email").set_data_type(DataType.STRING).set_length(255).set_not_null(),
    )
    text, errors = table.to_sql()
"""

from pgddl.__version__ import __version__
from pgddl.contracts import (
    DataType,
    DefaultValue,
    Constraint,
    AlterOperation,
    ReindexTarget,
    DDLError,
    InvalidColumnError,
    MissingFieldError,
    EmptyStatementError,
    StatementRejectedError,
)
from pgddl.models import (
    DDLStatement,
    Column,
    Table,
    AlterTable,
    ColumnOperation,
    ColumnUpdate,
    DropTable,
    Index,
    DropIndex,
    RenameIndex,
    ReindexOperation,
    SetIndexTablespace,
)
from pgddl.schema.sql_generator import ModelToDDL

__all__ = [
    "__version__",
    # Vocabulary
    "DataType",
    "DefaultValue",
    "Constraint",
    "AlterOperation",
    "ReindexTarget",
    # Errors
    "DDLError",
    "InvalidColumnError",
    "MissingFieldError",
    "EmptyStatementError",
    "StatementRejectedError",
    # Statements
    "DDLStatement",
    "Column",
    "Table",
    "AlterTable",
    "ColumnOperation",
    "ColumnUpdate",
    "DropTable",
    "Index",
    "DropIndex",
    "RenameIndex",
    "ReindexOperation",
    "SetIndexTablespace",
    # Generator
    "ModelToDDL",
]
