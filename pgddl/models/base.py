# ============================================================================
# STATEMENT BASE MODEL
# ============================================================================
# STATUS: Core - Common behaviour of every DDL entity
# PURPOSE: to_sql() contract plus compose() for psycopg execution
# CREATED: 18 OCT 2026
# ============================================================================
"""
Base class for DDL entities.

Subclasses return either a single error (Column, index family, DropTable) or
a list of errors (Table, AlterTable) from to_sql(). compose() accepts both
shapes.
"""

from abc import abstractmethod
from typing import ClassVar, List, Optional, Tuple, Union

from pydantic import BaseModel
from psycopg import sql

from pgddl.contracts import DDLError, StatementRejectedError


def as_error_list(errors: Union[DDLError, List[DDLError], None]) -> List[DDLError]:
    """Normalize the single and aggregate error shapes to a list."""
    if errors is None:
        return []
    if isinstance(errors, DDLError):
        return [errors]
    return list(errors)


class DDLStatement(BaseModel):
    """
    A configurable DDL entity.

    Setters mutate the instance and return it so calls chain.
    """

    model_config = {"frozen": False}

    # Name used in log records and rejection messages
    __statement_kind__: ClassVar[str] = "statement"

    @abstractmethod
    def to_sql(self) -> Tuple[str, Union[Optional[DDLError], List[DDLError]]]:
        """Render the statement; empty text when errors are returned."""

    def compose(self) -> sql.SQL:
        """
        Render the statement as a psycopg composable.

        Raises:
            StatementRejectedError: if to_sql() reported any error
        """
        text, errors = self.to_sql()
        errors = as_error_list(errors)
        if errors:
            raise StatementRejectedError(errors, entity=self.__statement_kind__)
        return sql.SQL(text)


__all__ = ["DDLStatement", "as_error_list"]
