# ============================================================================
# MODELS MODULE
# ============================================================================
# STATUS: Model exports
# PURPOSE: Central export point for all DDL entities
# CREATED: 18 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

All DDL entities are pydantic models: configure them with chained setters,
render them with to_sql(), or store them as data with model_dump_json().
"""

from pgddl.models.base import DDLStatement
from pgddl.models.column import Column
from pgddl.models.table import Table
from pgddl.models.alter_table import AlterTable, ColumnOperation, ColumnUpdate
from pgddl.models.drop_table import DropTable
from pgddl.models.index import (
    Index,
    DropIndex,
    RenameIndex,
    ReindexOperation,
    SetIndexTablespace,
)

__all__ = [
    # Base
    "DDLStatement",
    # Tables
    "Column",
    "Table",
    "AlterTable",
    "ColumnOperation",
    "ColumnUpdate",
    "DropTable",
    # Indexes
    "Index",
    "DropIndex",
    "RenameIndex",
    "ReindexOperation",
    "SetIndexTablespace",
]
