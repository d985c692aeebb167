# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Shared DDL vocabulary and error types
# PURPOSE: Canonical tokens consumed by every statement serializer
# CREATED: 18 OCT 2026
# EXPORTS: DataType, DefaultValue, Constraint, AlterOperation, ReindexTarget,
#          DDLError, InvalidColumnError, MissingFieldError,
#          EmptyStatementError, StatementRejectedError
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the DDL builder.

Enums are closed: every token a serializer emits comes from one of these.
Errors are returned as values by validate()/to_sql(), never raised, except
through compose() which turns a rejected statement into an exception.
"""

from enum import Enum
from typing import List, Optional


# ============================================================================
# VOCABULARY ENUMS
# ============================================================================

class DataType(str, Enum):
    """
    Logical column types.

    Mapped to PostgreSQL tokens by ddl_utils.data_type_token().
    """
    SERIAL = "serial"
    STRING = "string"
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"

    @classmethod
    def parse(cls, value) -> Optional["DataType"]:
        """Return the member for a token, or None when unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class DefaultValue(str, Enum):
    """Well-known DEFAULT expressions."""
    NULL = "NULL"

    # Boolean defaults
    TRUE = "TRUE"
    FALSE = "FALSE"

    # Date/Time defaults
    CURRENT_TIMESTAMP = "CURRENT_TIMESTAMP"
    CURRENT_DATE = "CURRENT_DATE"
    CURRENT_TIME = "CURRENT_TIME"
    LOCAL_TIME = "LOCALTIME"
    LOCAL_TIMESTAMP = "LOCALTIMESTAMP"


class Constraint(str, Enum):
    """Column-level constraint keywords."""
    PRIMARY_KEY = "PRIMARY KEY"
    NOT_NULL = "NOT NULL"
    UNIQUE = "UNIQUE"


class AlterOperation(str, Enum):
    """Kinds of column operation inside an ALTER TABLE."""
    ADD = "add"
    DROP = "drop"
    RENAME = "rename"
    ALTER_TYPE = "alter_type"


class ReindexTarget(str, Enum):
    """Object kinds accepted by REINDEX."""
    INDEX = "INDEX"
    TABLE = "TABLE"
    SCHEMA = "SCHEMA"
    DATABASE = "DATABASE"
    SYSTEM = "SYSTEM"

    def requires_name(self) -> bool:
        """SYSTEM and DATABASE default to the current database."""
        return self not in (ReindexTarget.SYSTEM, ReindexTarget.DATABASE)


# ============================================================================
# EXCEPTIONS
# ============================================================================

class DDLError(Exception):
    """Base exception for DDL configuration errors."""

    def __init__(self, message: str, entity: str = None, field: str = None):
        self.entity = entity
        self.field = field
        super().__init__(message)


class InvalidColumnError(DDLError):
    """A column definition breaks one of its own rules."""

    def __init__(self, message: str, column: str = None, field: str = None):
        self.column = column
        super().__init__(message, entity="column", field=field)


class MissingFieldError(DDLError):
    """A required field of a statement is empty."""
    pass


class EmptyStatementError(DDLError):
    """Nothing serializable was left to put in the statement."""
    pass


class StatementRejectedError(DDLError):
    """Raised by compose() when a statement failed validation."""

    def __init__(self, errors: List[DDLError], entity: str = None):
        self.errors = list(errors)
        summary = "; ".join(str(e) for e in self.errors)
        super().__init__(f"{entity or 'statement'} rejected: {summary}", entity=entity)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "DataType",
    "DefaultValue",
    "Constraint",
    "AlterOperation",
    "ReindexTarget",
    "DDLError",
    "InvalidColumnError",
    "MissingFieldError",
    "EmptyStatementError",
    "StatementRejectedError",
]
