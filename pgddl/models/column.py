# ============================================================================
# COLUMN MODEL
# ============================================================================
# STATUS: Core - Column definition, validation and serialization
# PURPOSE: Compose the column clause used by CREATE TABLE and ADD COLUMN
# CREATED: 18 OCT 2026
# EXPORTS: Column
# DEPENDENCIES: pydantic, psycopg
# ============================================================================
"""
Column Model

One column definition. Validation is entity-local and stops at the first
broken rule. Clause order of the rendered definition:

    name type [PRIMARY KEY] [AUTOINCREMENT ...] [NOT NULL] [UNIQUE]
    [DEFAULT v] [CHECK (...)] [REFERENCES t(c)] [GENERATED ALWAYS AS (...)]
    [COLLATE c] [COMMENT '...'] [STORAGE s] [COMPRESSION c]
    [IDENTITY (start,inc)] [key value ...]

Usage:
    col = Column("email").set_data_type(DataType.STRING).set_length(255).set_not_null()
    text, err = col.to_sql()   # "email VARCHAR(255) NOT NULL", None
"""

from typing import Any, ClassVar, Dict, Optional, Tuple, Union

from pydantic import Field

from pgddl.contracts import DataType, DefaultValue, InvalidColumnError
from pgddl.logging import ComponentType, get_logger
from pgddl.models.base import DDLStatement
from pgddl.schema.ddl_utils import (
    CommentBuilder,
    data_type_token,
    format_default,
    join_clauses,
    quote_literal,
    render,
)

logger = get_logger(__name__, ComponentType.MODEL)


def _attribute_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Column(DDLStatement):
    """
    A single column definition.

    Owned by exactly one Table or ColumnOperation.
    """

    __statement_kind__: ClassVar[str] = "column"

    name: str = Field(default="", description="Column name")
    data_type: Optional[DataType] = Field(default=None, description="Logical data type")
    length: int = Field(default=0, description="VARCHAR length")
    precision: int = Field(default=0, description="DECIMAL precision")
    scale: int = Field(default=0, description="DECIMAL scale")

    # Flags
    primary_key: bool = False
    auto_number: bool = False
    auto_number_start: int = 0
    auto_number_prefix: str = ""
    not_null: bool = False
    unique: bool = False

    # Expressions, kept as caller-formatted text
    default: str = Field(default="", description="Default value or expression")
    check: str = Field(default="", description="CHECK expression, parenthesized")
    references: str = Field(default="", description="Foreign key target, e.g. users(id)")
    generated: str = Field(default="", description="Generated column expression")

    collation: str = ""
    comment: str = ""
    storage: str = Field(default="", description="PLAIN, EXTERNAL, EXTENDED, MAIN")
    compression: str = ""
    identity_start: int = 0
    identity_increment: int = 0

    # Emitted verbatim as "key value" in insertion order
    attributes: Dict[str, Any] = Field(default_factory=dict)

    def __init__(self, name: str = "", **data: Any):
        super().__init__(name=name, **data)

    # ----------------------------------------------------------------
    # Configuration
    # ----------------------------------------------------------------

    def set_name(self, name: str) -> "Column":
        self.name = name
        return self

    def set_data_type(self, data_type: Union[DataType, str]) -> "Column":
        """
        Set the logical type.

        Raises:
            ValueError: for a token outside DataType
        """
        self.data_type = DataType(data_type)
        return self

    def set_length(self, length: int) -> "Column":
        self.length = length
        return self

    def set_precision(self, precision: int) -> "Column":
        self.precision = precision
        return self

    def set_scale(self, scale: int) -> "Column":
        self.scale = scale
        return self

    def set_primary_key(self) -> "Column":
        self.primary_key = True
        return self

    def set_unique(self) -> "Column":
        self.unique = True
        return self

    def set_not_null(self) -> "Column":
        self.not_null = True
        return self

    def set_default(self, value: Any) -> "Column":
        """
        Set the default value.

        Strings are kept verbatim and quoted at render time unless they are
        a keyword or a number. Booleans become true/false, None becomes NULL.

        DefaultValue.LOCAL_TIME and LOCAL_TIMESTAMP store LOCALTIME and
        LOCALTIMESTAMP, which are not in BARE_DEFAULTS (that set lists the
        LOCAL_TIME spelling), so they render quoted: DEFAULT 'LOCALTIME'.
        """
        if isinstance(value, DefaultValue):
            self.default = value.value
        elif isinstance(value, str):
            self.default = value
        elif isinstance(value, bool):
            self.default = "true" if value else "false"
        elif value is None:
            self.default = DefaultValue.NULL.value
        else:
            self.default = str(value)
        return self

    def set_auto_number(self) -> "Column":
        self.auto_number = True
        return self

    def set_auto_number_with_prefix(self, start: int, prefix: str) -> "Column":
        self.auto_number = True
        self.auto_number_start = start
        self.auto_number_prefix = prefix
        return self

    def set_check(self, check: str) -> "Column":
        self.check = check
        return self

    def set_references(self, table: str, column: str) -> "Column":
        self.references = f"{table}({column})"
        return self

    def set_references_on_delete_cascade(self, table: str, column: str) -> "Column":
        self.references = f"{table}({column}) ON DELETE CASCADE"
        return self

    def set_generated(self, expression: str) -> "Column":
        self.generated = expression
        return self

    def set_collation(self, collation: str) -> "Column":
        self.collation = collation
        return self

    def set_comment(self, comment: str) -> "Column":
        self.comment = comment
        return self

    def set_storage(self, storage: str) -> "Column":
        self.storage = storage
        return self

    def set_compression(self, compression: str) -> "Column":
        self.compression = compression
        return self

    def set_identity_start(self, start: int) -> "Column":
        self.identity_start = start
        return self

    def set_identity_increment(self, increment: int) -> "Column":
        self.identity_increment = increment
        return self

    def set_attributes(self, attributes: Dict[str, Any]) -> "Column":
        self.attributes = dict(attributes)
        return self

    def set_attribute(self, key: str, value: Any) -> "Column":
        self.attributes[key] = value
        return self

    # ----------------------------------------------------------------
    # Type tokens
    # ----------------------------------------------------------------

    def data_type_token(self) -> str:
        """PostgreSQL token for this column's own type."""
        return self.type_token_for(self.data_type)

    def type_token_for(self, data_type) -> str:
        """PostgreSQL token for any type, sized by this column's refinements."""
        return data_type_token(data_type, self.length, self.precision, self.scale)

    # ----------------------------------------------------------------
    # Validation & rendering
    # ----------------------------------------------------------------

    def validate(self) -> Optional[InvalidColumnError]:
        """
        Check the column rules in order.

        Returns:
            The first violation found, or None
        """
        if DataType.parse(self.data_type) is None:
            value = getattr(self.data_type, "value", self.data_type)
            return InvalidColumnError(
                f"invalid data type: {value if value is not None else ''}",
                column=self.name, field="data_type",
            )

        if self.auto_number and self.auto_number_start < 0:
            return InvalidColumnError(
                "auto-number start must be greater or equal than 0",
                column=self.name, field="auto_number_start",
            )

        if self.not_null and self.default:
            return InvalidColumnError(
                "column cannot be both NOT NULL and have a DEFAULT value",
                column=self.name, field="default",
            )

        if self.identity_start > 0 and self.identity_increment <= 0:
            return InvalidColumnError(
                "identity increment must be greater than 0",
                column=self.name, field="identity_increment",
            )

        if self.check and "(" not in self.check:
            return InvalidColumnError(
                "check constraint must have an expression in parentheses",
                column=self.name, field="check",
            )

        if self.references and "(" not in self.references:
            return InvalidColumnError(
                "foreign key references must be in the format 'table(column)'",
                column=self.name, field="references",
            )

        return None

    def to_sql(self) -> Tuple[str, Optional[InvalidColumnError]]:
        """
        Render the column definition.

        Returns:
            Tuple of (sql, error); sql is empty when error is set
        """
        error = self.validate()
        if error is not None:
            logger.debug(f"Column {self.name!r} rejected: {error}")
            return "", error

        parts = [self.name, self.data_type_token()]

        if self.primary_key:
            parts.append("PRIMARY KEY")

        if self.auto_number:
            parts.append("AUTOINCREMENT")
            if self.auto_number_start > 0:
                parts.append(f"START WITH {self.auto_number_start}")
            if self.auto_number_prefix:
                parts.append(f"PREFIX {quote_literal(self.auto_number_prefix)}")

        if self.not_null:
            parts.append("NOT NULL")

        if self.unique:
            parts.append("UNIQUE")

        if self.default:
            parts.append(f"DEFAULT {format_default(self.default)}")

        if self.check:
            parts.append(f"CHECK {self.check}")

        if self.references:
            parts.append(f"REFERENCES {self.references}")

        if self.generated:
            parts.append(f"GENERATED ALWAYS AS ({self.generated})")

        if self.collation:
            parts.append(f"COLLATE {self.collation}")

        if self.comment:
            parts.append(CommentBuilder.column(self.comment))

        if self.storage:
            parts.append(f"STORAGE {self.storage}")

        if self.compression:
            parts.append(f"COMPRESSION {self.compression}")

        if self.identity_start > 0 and self.identity_increment > 0:
            parts.append(f"IDENTITY ({self.identity_start},{self.identity_increment})")

        for key, value in self.attributes.items():
            parts.append(f"{key} {_attribute_value(value)}")

        return render(join_clauses(parts)), None


__all__ = ["Column"]
