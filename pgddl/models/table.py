# ============================================================================
# TABLE MODEL
# ============================================================================
# STATUS: Core - CREATE TABLE assembly
# PURPOSE: Serialize a table and aggregate every column error
# CREATED: 18 OCT 2026
# EXPORTS: Table
# DEPENDENCIES: pydantic
# ============================================================================
"""
Table Model

CREATE TABLE statement built from an ordered list of columns.

A column that fails validation is skipped and its error collected; any
collected error voids the whole statement, so callers see every problem in
one pass.
"""

from typing import Any, ClassVar, Dict, List, Tuple

from pydantic import Field

from pgddl.contracts import DDLError, EmptyStatementError, MissingFieldError
from pgddl.logging import ComponentType, get_logger, log_context
from pgddl.models.base import DDLStatement
from pgddl.models.column import Column
from pgddl.schema.ddl_utils import CommentBuilder, join_clauses, parenthesized, render

logger = get_logger(__name__, ComponentType.MODEL)


class Table(DDLStatement):
    """
    A table definition.

    label and attributes are carried for callers that store schema as data;
    they are not rendered.
    """

    __statement_kind__: ClassVar[str] = "create_table"

    name: str = ""
    label: str = ""
    columns: List[Column] = Field(default_factory=list)
    attributes: Dict[str, Any] = Field(default_factory=dict)
    comment: str = ""

    def __init__(self, name: str = "", **data: Any):
        super().__init__(name=name, **data)

    def add_column(self, column: Column) -> "Table":
        self.columns.append(column)
        return self

    def add_columns(self, *columns: Column) -> "Table":
        self.columns.extend(columns)
        return self

    def set_label(self, label: str) -> "Table":
        self.label = label
        return self

    def set_comment(self, comment: str) -> "Table":
        self.comment = comment
        return self

    def set_attributes(self, attributes: Dict[str, Any]) -> "Table":
        self.attributes = dict(attributes)
        return self

    def validate(self) -> List[DDLError]:
        """Validate table-level fields (columns are checked by to_sql)."""
        errors: List[DDLError] = []
        if not self.name:
            errors.append(MissingFieldError("table name cannot be empty", entity="table", field="name"))
        return errors

    def to_sql(self) -> Tuple[str, List[DDLError]]:
        """
        Generate the CREATE TABLE statement.

        Returns:
            Tuple of (sql, errors); sql is empty whenever errors is non-empty
        """
        errors = self.validate()
        if errors:
            return "", errors

        with log_context(statement=self.__statement_kind__, table=self.name):
            column_defs = []
            for column in self.columns:
                column_sql, error = column.to_sql()
                if error is not None:
                    errors.append(error)
                    continue
                column_defs.append(column_sql)

            if not column_defs:
                errors.append(EmptyStatementError(
                    f"no valid columns defined for table {self.name}",
                    entity="table", field="columns",
                ))

            if errors:
                logger.debug(f"Table {self.name} rejected with {len(errors)} error(s)")
                return "", errors

            parts = ["CREATE TABLE", self.name, parenthesized(column_defs)]
            if self.comment:
                parts.append(CommentBuilder.table(self.name, self.comment))

            logger.debug(f"Rendered table {self.name} with {len(column_defs)} column(s)")
            return render(join_clauses(parts)), []


__all__ = ["Table"]
