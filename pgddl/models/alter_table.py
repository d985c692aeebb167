# ============================================================================
# ALTER TABLE MODEL
# ============================================================================
# STATUS: Core - ALTER TABLE assembly
# PURPOSE: Dispatch add/drop/rename/retype column operations in order
# CREATED: 18 OCT 2026
# EXPORTS: AlterTable, ColumnOperation, ColumnUpdate
# DEPENDENCIES: pydantic
# ============================================================================
"""
Alter Table Model

An ALTER TABLE statement is a table name plus an ordered list of column
operations, rendered as one comma-joined statement:

    ALTER TABLE products ADD COLUMN category_id INTEGER NOT NULL,
        DROP COLUMN old_category, RENAME COLUMN desc TO description

Rename and retype intents live on the operation (ColumnUpdate), so a Column
never carries alter-only state.
"""

from typing import Any, ClassVar, List, Optional, Tuple, Union

from pydantic import BaseModel, Field

from pgddl.config import get_defaults
from pgddl.contracts import (
    AlterOperation,
    DataType,
    DDLError,
    EmptyStatementError,
    MissingFieldError,
)
from pgddl.logging import ComponentType, get_logger, log_context
from pgddl.models.base import DDLStatement
from pgddl.models.column import Column
from pgddl.schema.ddl_utils import CommentBuilder, join_clauses, render

logger = get_logger(__name__, ComponentType.MODEL)


class ColumnUpdate(BaseModel):
    """
    Rename-or-retype intent for an existing column.

    new_name wins when both are set.
    """
    new_name: str = ""
    new_data_type: Optional[DataType] = None

    model_config = {"frozen": True}

    def resolve(self) -> Optional[AlterOperation]:
        """Operation kind this update describes, or None when empty."""
        if self.new_name:
            return AlterOperation.RENAME
        if self.new_data_type is not None:
            return AlterOperation.ALTER_TYPE
        return None


class ColumnOperation(BaseModel):
    """One column operation inside an ALTER TABLE."""
    operation: AlterOperation
    column: Column
    update: Optional[ColumnUpdate] = None

    model_config = {"frozen": False}


class AlterTable(DDLStatement):
    """
    An ALTER TABLE statement.

    Operations render in the order they were added.
    """

    __statement_kind__: ClassVar[str] = "alter_table"

    table_name: str = ""
    operations: List[ColumnOperation] = Field(default_factory=list)
    comment: str = ""

    def __init__(self, table_name: str = "", **data: Any):
        super().__init__(table_name=table_name, **data)

    # ----------------------------------------------------------------
    # Configuration
    # ----------------------------------------------------------------

    def _append(
        self,
        operation: AlterOperation,
        column: Optional[Column],
        update: Optional[ColumnUpdate] = None,
    ) -> "AlterTable":
        if column is not None:
            self.operations.append(ColumnOperation(operation=operation, column=column, update=update))
        return self

    def add_column(self, column: Optional[Column]) -> "AlterTable":
        return self._append(AlterOperation.ADD, column)

    def drop_column(self, column: Optional[Column]) -> "AlterTable":
        return self._append(AlterOperation.DROP, column)

    def alter_column(self, column: Optional[Column], update: ColumnUpdate) -> "AlterTable":
        """
        Record a rename or a type change, chosen by which update field is set.

        An update with neither field set records nothing.
        """
        operation = update.resolve()
        if operation is None:
            logger.debug(f"Ignoring empty column update on table {self.table_name}")
            return self
        return self._append(operation, column, update)

    def rename_column(self, column: Optional[Column], new_name: str) -> "AlterTable":
        return self.alter_column(column, ColumnUpdate(new_name=new_name))

    def alter_column_type(
        self,
        column: Optional[Column],
        new_data_type: Union[DataType, str],
    ) -> "AlterTable":
        return self.alter_column(column, ColumnUpdate(new_data_type=DataType(new_data_type)))

    def set_comment(self, comment: str) -> "AlterTable":
        self.comment = comment
        return self

    # ----------------------------------------------------------------
    # Validation & rendering
    # ----------------------------------------------------------------

    def validate(self) -> List[DDLError]:
        """Check the table name and operation list, reporting both."""
        errors: List[DDLError] = []

        if not self.table_name:
            errors.append(MissingFieldError("table name cannot be empty", entity="alter_table", field="table_name"))

        if not self.operations:
            errors.append(MissingFieldError(
                "alter table must have at least one operation",
                entity="alter_table", field="operations",
            ))

        return errors

    def _render_operation(self, op: ColumnOperation) -> Tuple[str, Optional[DDLError]]:
        column = op.column

        if op.operation == AlterOperation.ADD:
            column_sql, error = column.to_sql()
            if error is not None:
                return "", error
            return f"ADD COLUMN {column_sql}", None

        if op.operation == AlterOperation.DROP:
            if not column.name:
                return "", MissingFieldError("drop column requires a column name", entity="alter_table", field="column")
            return f"DROP COLUMN {column.name}", None

        update = op.update or ColumnUpdate()

        if op.operation == AlterOperation.RENAME:
            if not update.new_name:
                return "", MissingFieldError("rename column requires a new name", entity="alter_table", field="new_name")
            return f"RENAME COLUMN {column.name} TO {update.new_name}", None

        # ALTER_TYPE
        if update.new_data_type is None:
            return "", MissingFieldError(
                "alter column type requires a new data type",
                entity="alter_table", field="new_data_type",
            )
        new_type = column.type_token_for(update.new_data_type)
        if get_defaults().serializer.legacy_alter_type:
            target = column.data_type_token()
        else:
            target = column.name
        return f"ALTER COLUMN {target} TYPE {new_type}", None

    def to_sql(self) -> Tuple[str, List[DDLError]]:
        """
        Generate the ALTER TABLE statement.

        Returns:
            Tuple of (sql, errors); sql is empty whenever errors is non-empty
        """
        errors = self.validate()
        if errors:
            return "", errors

        with log_context(statement=self.__statement_kind__, table=self.table_name):
            operation_defs = []
            for op in self.operations:
                with log_context(column=op.column.name, operation=op.operation.value):
                    op_sql, error = self._render_operation(op)
                if error is not None:
                    errors.append(error)
                    continue
                operation_defs.append(op_sql)

            if not operation_defs:
                errors.append(EmptyStatementError(
                    f"no valid operations defined for table {self.table_name}",
                    entity="alter_table", field="operations",
                ))

            if errors:
                logger.debug(f"Alter table {self.table_name} rejected with {len(errors)} error(s)")
                return "", errors

            parts = ["ALTER TABLE", self.table_name, join_clauses(operation_defs, separator=", ")]
            if self.comment:
                parts.append(CommentBuilder.table(self.table_name, self.comment))

            logger.debug(f"Rendered alter table {self.table_name} with {len(operation_defs)} operation(s)")
            return render(join_clauses(parts)), []


__all__ = ["AlterTable", "ColumnOperation", "ColumnUpdate"]
