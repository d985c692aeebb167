# ============================================================================
# INDEX MODELS
# ============================================================================
# STATUS: Core - Index lifecycle statements
# PURPOSE: CREATE / DROP / RENAME / REINDEX / SET TABLESPACE for indexes
# CREATED: 18 OCT 2026
# EXPORTS: Index, DropIndex, RenameIndex, ReindexOperation, SetIndexTablespace
# DEPENDENCIES: pydantic
# ============================================================================
"""
Index Models

Each statement reports a single error: required fields are checked in a
fixed order and the first missing one is returned.

Usage:
    idx = Index("idx_users_email").on_table("users").add_column("email").set_unique()
    text, err = idx.to_sql()   # "CREATE UNIQUE INDEX idx_users_email ON users (email)"

    drop = DropIndex("idx_users_email").set_if_exists().set_cascade()
    text, err = drop.to_sql()  # "DROP INDEX IF EXISTS idx_users_email CASCADE"
"""

from typing import Any, ClassVar, List, Optional, Tuple

from pydantic import Field, field_validator

from pgddl.config import get_defaults
from pgddl.contracts import DDLError, MissingFieldError, ReindexTarget
from pgddl.logging import ComponentType, get_logger, log_context
from pgddl.models.base import DDLStatement
from pgddl.schema.ddl_utils import join_clauses, parenthesized, qualify, render

logger = get_logger(__name__, ComponentType.MODEL)


def _default_index_method() -> str:
    return get_defaults().serializer.index_method


# ============================================================================
# CREATE INDEX
# ============================================================================

class Index(DDLStatement):
    """
    CREATE INDEX statement.

    Clause order:
        CREATE [UNIQUE] INDEX [CONCURRENTLY] name ON [schema.]table
        [USING method] (columns) [INCLUDE (...)] [WHERE predicate]
        [WITH (...)] [TABLESPACE ts]

    `using` keeps the configured default access method but is never
    rendered; only a method set through set_method() produces USING.
    """

    __statement_kind__: ClassVar[str] = "create_index"

    name: str = ""
    table: str = ""
    schema_name: str = ""
    columns: List[str] = Field(default_factory=list, description="Columns or expressions")
    include_columns: List[str] = Field(default_factory=list)
    unique: bool = False
    concurrently: bool = False
    using: str = Field(default_factory=_default_index_method)
    method: str = Field(default="", description="btree, hash, gist, gin, brin, ...")
    where: str = ""
    tablespace: str = ""
    with_options: List[str] = Field(default_factory=list)

    def __init__(self, name: str = "", **data: Any):
        super().__init__(name=name, **data)

    def on_table(self, table: str) -> "Index":
        self.table = table
        return self

    def add_column(self, column: str) -> "Index":
        self.columns.append(column)
        return self

    def set_unique(self) -> "Index":
        self.unique = True
        return self

    def set_concurrently(self) -> "Index":
        self.concurrently = True
        return self

    def set_method(self, method: str) -> "Index":
        self.method = method
        return self

    def set_where(self, condition: str) -> "Index":
        self.where = condition
        return self

    def set_schema(self, schema: str) -> "Index":
        self.schema_name = schema
        return self

    def add_include_column(self, column: str) -> "Index":
        """Add a non-key column to the INCLUDE list (covering index)."""
        self.include_columns.append(column)
        return self

    def set_tablespace(self, tablespace: str) -> "Index":
        self.tablespace = tablespace
        return self

    def add_with_option(self, option: str) -> "Index":
        """Add a storage parameter such as fillfactor=70."""
        self.with_options.append(option)
        return self

    # Sugar over add_column / set_where

    def partial_index(self, condition: str) -> "Index":
        return self.set_where(condition)

    def expression_index(self, expression: str) -> "Index":
        return self.add_column(expression)

    def multi_column_index(self, *columns: str) -> "Index":
        self.columns.extend(columns)
        return self

    def to_sql(self) -> Tuple[str, Optional[DDLError]]:
        with log_context(statement=self.__statement_kind__, table=self.table or None, index=self.name or None):
            text, error = self._render()
            if error is not None:
                logger.debug(f"Index rejected: {error}")
            return text, error

    def _render(self) -> Tuple[str, Optional[DDLError]]:
        if not self.name:
            return "", MissingFieldError("index name is required", entity="index", field="name")

        if not self.table:
            return "", MissingFieldError("table name is required", entity="index", field="table")

        if not self.columns:
            return "", MissingFieldError(
                "at least one column is required for an index",
                entity="index", field="columns",
            )

        parts = ["CREATE"]
        if self.unique:
            parts.append("UNIQUE")
        parts.append("INDEX")
        if self.concurrently:
            parts.append("CONCURRENTLY")

        parts.extend([self.name, "ON", qualify(self.schema_name, self.table)])

        if self.method:
            parts.extend(["USING", self.method])

        parts.append(parenthesized(self.columns))

        if self.include_columns:
            parts.extend(["INCLUDE", parenthesized(self.include_columns)])

        if self.where:
            parts.extend(["WHERE", self.where])

        if self.with_options:
            parts.extend(["WITH", parenthesized(self.with_options)])

        if self.tablespace:
            parts.extend(["TABLESPACE", self.tablespace])

        logger.debug(f"Rendered index {self.name} on {self.table}")
        return render(join_clauses(parts)), None


# ============================================================================
# DROP INDEX
# ============================================================================

class DropIndex(DDLStatement):
    """DROP INDEX [CONCURRENTLY] [IF EXISTS] [schema.]name [CASCADE|RESTRICT]."""

    __statement_kind__: ClassVar[str] = "drop_index"

    name: str = ""
    if_exists: bool = False
    concurrently: bool = False
    cascade: bool = False
    restrict: bool = False
    schema_name: str = ""

    def __init__(self, name: str = "", **data: Any):
        super().__init__(name=name, **data)

    def set_if_exists(self) -> "DropIndex":
        self.if_exists = True
        return self

    def set_concurrently(self) -> "DropIndex":
        self.concurrently = True
        return self

    def set_cascade(self) -> "DropIndex":
        self.cascade = True
        self.restrict = False
        return self

    def set_restrict(self) -> "DropIndex":
        self.restrict = True
        self.cascade = False
        return self

    def set_schema(self, schema: str) -> "DropIndex":
        self.schema_name = schema
        return self

    def to_sql(self) -> Tuple[str, Optional[DDLError]]:
        if not self.name:
            return "", MissingFieldError("index name is required", entity="drop_index", field="name")

        parts = ["DROP INDEX"]
        if self.concurrently:
            parts.append("CONCURRENTLY")
        if self.if_exists:
            parts.append("IF EXISTS")

        parts.append(qualify(self.schema_name, self.name))

        if self.cascade:
            parts.append("CASCADE")
        elif self.restrict:
            parts.append("RESTRICT")

        return render(join_clauses(parts)), None


# ============================================================================
# RENAME INDEX
# ============================================================================

class RenameIndex(DDLStatement):
    """ALTER INDEX [schema.]old RENAME TO new."""

    __statement_kind__: ClassVar[str] = "rename_index"

    old_name: str = ""
    new_name: str = ""
    schema_name: str = ""

    def __init__(self, old_name: str = "", new_name: str = "", **data: Any):
        super().__init__(old_name=old_name, new_name=new_name, **data)

    def set_schema(self, schema: str) -> "RenameIndex":
        self.schema_name = schema
        return self

    def to_sql(self) -> Tuple[str, Optional[DDLError]]:
        if not self.old_name or not self.new_name:
            return "", MissingFieldError(
                "both old and new index names are required",
                entity="rename_index", field="old_name" if not self.old_name else "new_name",
            )

        parts = ["ALTER INDEX", qualify(self.schema_name, self.old_name), "RENAME TO", self.new_name]
        return render(join_clauses(parts)), None


# ============================================================================
# REINDEX
# ============================================================================

class ReindexOperation(DDLStatement):
    """REINDEX [CONCURRENTLY] TARGET [name]."""

    __statement_kind__: ClassVar[str] = "reindex"

    target: str = ""
    name: str = ""
    concurrently: bool = False

    def __init__(self, target: str = "", name: str = "", **data: Any):
        super().__init__(target=target, name=name, **data)

    @field_validator("target", mode="before")
    @classmethod
    def normalize_target(cls, v: Any) -> str:
        if isinstance(v, ReindexTarget):
            return v.value
        return str(v or "").upper()

    def set_concurrently(self) -> "ReindexOperation":
        self.concurrently = True
        return self

    def to_sql(self) -> Tuple[str, Optional[DDLError]]:
        if not self.target:
            return "", MissingFieldError("reindex target is required", entity="reindex", field="target")

        try:
            target = ReindexTarget(self.target)
        except ValueError:
            return "", DDLError(f"unknown reindex target: {self.target}", entity="reindex", field="target")

        if not self.name and target.requires_name():
            return "", MissingFieldError(f"name is required for REINDEX {target.value}", entity="reindex", field="name")

        parts = ["REINDEX"]
        if self.concurrently:
            parts.append("CONCURRENTLY")
        parts.append(target.value)
        if self.name:
            parts.append(self.name)

        return render(join_clauses(parts)), None


# ============================================================================
# SET TABLESPACE
# ============================================================================

class SetIndexTablespace(DDLStatement):
    """ALTER INDEX [schema.]name SET TABLESPACE ts [NOWAIT]."""

    __statement_kind__: ClassVar[str] = "set_index_tablespace"

    index_name: str = ""
    tablespace: str = ""
    nowait: bool = False
    schema_name: str = ""

    def __init__(self, index_name: str = "", tablespace: str = "", **data: Any):
        super().__init__(index_name=index_name, tablespace=tablespace, **data)

    def set_nowait(self) -> "SetIndexTablespace":
        self.nowait = True
        return self

    def set_schema(self, schema: str) -> "SetIndexTablespace":
        self.schema_name = schema
        return self

    def to_sql(self) -> Tuple[str, Optional[DDLError]]:
        if not self.index_name:
            return "", MissingFieldError("index name is required", entity="set_index_tablespace", field="index_name")

        if not self.tablespace:
            return "", MissingFieldError(
                "tablespace name is required",
                entity="set_index_tablespace", field="tablespace",
            )

        parts = ["ALTER INDEX", qualify(self.schema_name, self.index_name), "SET TABLESPACE", self.tablespace]
        if self.nowait:
            parts.append("NOWAIT")

        return render(join_clauses(parts)), None


__all__ = [
    "Index",
    "DropIndex",
    "RenameIndex",
    "ReindexOperation",
    "SetIndexTablespace",
]
