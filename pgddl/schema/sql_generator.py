# ============================================================================
# PYDANTIC TO DDL GENERATOR
# ============================================================================
# STATUS: Core - DDL entities derived from Pydantic models
# PURPOSE: Build Table / Index / DropTable entities from annotated models
# CREATED: 18 OCT 2026
# EXPORTS: ModelToDDL
# DEPENDENCIES: pydantic, annotated_types
# ============================================================================
"""
Pydantic to PostgreSQL Schema Generator.

Builds DDL entities from Pydantic models so that the models stay the single
source of truth for a schema.

Model Metadata Convention:
    Models define SQL metadata via ClassVar attributes:
    - __sql_table__: Table name
    - __sql_schema__: Schema name (falls back to the generator's schema)
    - __sql_primary_key__: Primary key column - string or one-element list
    - __sql_foreign_keys__: Dict of {column: "schema.table(column)"}
    - __sql_indexes__: List of index definitions
    - __sql_serial_columns__: Columns that should be SERIAL
    - __sql_comment__: Table comment

Usage:
    generator = ModelToDDL(schema_name="app")
    statements, errors = generator.render_all([User, Order])
"""

import logging
import re
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from types import UnionType
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, Union, get_args, get_origin

from annotated_types import MaxLen
from pydantic import BaseModel
from pydantic.fields import FieldInfo

from pgddl.config import get_defaults
from pgddl.contracts import DataType, DDLError, DefaultValue
from pgddl.models import Column, DDLStatement, DropTable, Index, Table
from pgddl.models.base import as_error_list
from pgddl.schema.ddl_utils import qualify, quote_literal

# Setup logger
logger = logging.getLogger(__name__)

# schema.table(column) or table(column)
FOREIGN_KEY_PATTERN = re.compile(r"(?:(\w+)\.)?(\w+)\((\w+)\)")

TIMESTAMP_FIELDS = ("created_at", "updated_at")

METADATA_DEFAULTS = {
    "table": None,
    "schema": None,
    "primary_key": [],
    "foreign_keys": {},
    "indexes": [],
    "serial_columns": [],
    "comment": "",
}


class ModelToDDL:
    """
    Convert Pydantic models to DDL entities.

    Analyzes Pydantic models with __sql_* metadata and builds the
    corresponding Table, Index and DropTable entities.
    """

    TYPE_MAP = {
        str: DataType.STRING,
        int: DataType.INTEGER,
        bool: DataType.BOOLEAN,
        float: DataType.DECIMAL,
        Decimal: DataType.DECIMAL,
        date: DataType.DATE,
        datetime: DataType.DATETIME,
    }

    def __init__(self, schema_name: Optional[str] = None):
        """
        Initialize the generator.

        Args:
            schema_name: Default schema for models without __sql_schema__;
                         falls back to PGDDL_SCHEMA
        """
        self.schema_name = schema_name or get_defaults().generator.schema_name

    # =========================================================================
    # METADATA EXTRACTION
    # =========================================================================

    @staticmethod
    def get_model_metadata(model: Type[BaseModel]) -> Dict[str, Any]:
        """
        Read the __sql_*__ class attributes of a model.

        Private spellings (__sql_table, mangled to _Model__sql_table) and
        bare ones (sql_table) are accepted too.

        Returns:
            Dict keyed by METADATA_DEFAULTS; primary_key is always a list
        """
        def lookup(key: str, default: Any) -> Any:
            for attr in (f"__sql_{key}__", f"_{model.__name__}__sql_{key}", f"sql_{key}"):
                if hasattr(model, attr):
                    return getattr(model, attr)
            return default

        metadata = {key: lookup(key, default) for key, default in METADATA_DEFAULTS.items()}

        if isinstance(metadata["primary_key"], str):
            metadata["primary_key"] = [metadata["primary_key"]]

        return metadata

    def _qualified_table(self, model: Type[BaseModel]) -> Tuple[str, str]:
        meta = self.get_model_metadata(model)
        if not meta["table"]:
            raise ValueError(f"Model {model.__name__} missing __sql_table__ attribute")
        return meta["schema"] or self.schema_name, meta["table"]

    # =========================================================================
    # TYPE CONVERSION
    # =========================================================================

    @staticmethod
    def _unwrap_optional(field_type: Any) -> Tuple[Any, bool]:
        """Return (inner type, is_optional) for Optional[X] / X | None."""
        origin = get_origin(field_type)
        if origin is Union or origin is UnionType:
            args = [a for a in get_args(field_type) if a is not type(None)]
            is_optional = len(args) < len(get_args(field_type))
            if len(args) == 1:
                return args[0], is_optional
            return field_type, is_optional
        return field_type, False

    @staticmethod
    def _constraint(field_info: FieldInfo, name: str) -> Optional[Any]:
        """Find a constraint value (max_digits, decimal_places, ...) in field metadata."""
        for constraint in getattr(field_info, "metadata", None) or []:
            value = getattr(constraint, name, None)
            if value is not None:
                return value
        return None

    def python_type_to_column(
        self,
        field_name: str,
        field_type: Any,
        field_info: FieldInfo,
    ) -> Column:
        """
        Convert a Pydantic field to a Column carrying type and size.

        Args:
            field_name: Column name
            field_type: Python type from Pydantic model
            field_info: Pydantic field information

        Returns:
            Column with data type, refinements and comment set
        """
        column = Column(field_name)
        actual_type, _ = self._unwrap_optional(field_type)

        if field_info.description:
            column.set_comment(field_info.description)

        # Enums become bounded strings with a membership check
        if isinstance(actual_type, type) and issubclass(actual_type, Enum):
            values = [str(member.value) for member in actual_type]
            column.set_data_type(DataType.STRING)
            column.set_length(max(len(v) for v in values))
            column.set_check(f"({field_name} IN ({', '.join(quote_literal(v) for v in values)}))")
            return column

        data_type = self.TYPE_MAP.get(actual_type)
        if data_type is None:
            logger.debug(f"Field {field_name} has no column type for {field_type}, storing as string")
            column.set_data_type(DataType.STRING)
            return column

        column.set_data_type(data_type)

        if data_type == DataType.STRING:
            for constraint in getattr(field_info, "metadata", None) or []:
                if isinstance(constraint, MaxLen):
                    column.set_length(constraint.max_length)
                    break

        if data_type == DataType.DECIMAL:
            column.set_precision(self._constraint(field_info, "max_digits") or 0)
            column.set_scale(self._constraint(field_info, "decimal_places") or 0)

        return column

    @staticmethod
    def _default_for(field_name: str, field_info: FieldInfo) -> Any:
        """Default value to render, or None when the column has none."""
        if field_info.default_factory is not None:
            if field_name in TIMESTAMP_FIELDS:
                return DefaultValue.CURRENT_TIMESTAMP
            return None

        if field_info.is_required() or field_info.default is None:
            return None

        default = field_info.default
        if isinstance(default, Enum):
            return str(default.value)
        if isinstance(default, (str, bool, int, float, Decimal)):
            return default
        return None

    # =========================================================================
    # TABLE GENERATION
    # =========================================================================

    def generate_table(self, model: Type[BaseModel]) -> Table:
        """
        Build the CREATE TABLE entity for a Pydantic model.

        Args:
            model: Pydantic model with __sql_* metadata

        Returns:
            Table entity (not yet validated)

        Raises:
            ValueError: missing __sql_table__ or a composite primary key
        """
        meta = self.get_model_metadata(model)
        schema_name, table_name = self._qualified_table(model)
        primary_key = meta["primary_key"]
        foreign_keys = meta["foreign_keys"]
        serial_columns = meta["serial_columns"]

        if len(primary_key) > 1:
            raise ValueError(
                f"Model {model.__name__} declares a composite primary key {primary_key}; "
                "only single-column keys can be expressed"
            )

        logger.debug(f"Generating table {schema_name}.{table_name} from {model.__name__}")

        table = Table(qualify(schema_name, table_name))
        if meta["comment"]:
            table.set_comment(meta["comment"])

        for field_name, field_info in model.model_fields.items():
            column = self.python_type_to_column(field_name, field_info.annotation, field_info)
            _, is_optional = self._unwrap_optional(field_info.annotation)

            is_serial = field_name in serial_columns
            if is_serial:
                column.set_data_type(DataType.SERIAL)

            is_primary = field_name in primary_key
            if is_primary:
                column.set_primary_key()

            # NOT NULL and DEFAULT are exclusive on a column
            default = None if is_serial else self._default_for(field_name, field_info)
            if default is not None:
                column.set_default(default)
            elif not is_optional and not is_primary and not is_serial:
                column.set_not_null()

            fk_reference = foreign_keys.get(field_name)
            if fk_reference:
                match = FOREIGN_KEY_PATTERN.fullmatch(fk_reference)
                if match:
                    ref_schema, ref_table, ref_column = match.groups()
                    column.set_references_on_delete_cascade(qualify(ref_schema, ref_table), ref_column)
                else:
                    logger.warning(f"Ignoring malformed foreign key on {table_name}.{field_name}: {fk_reference}")

            table.add_column(column)

        return table

    # =========================================================================
    # INDEX GENERATION
    # =========================================================================

    @staticmethod
    def _index_options(idx_def: Any) -> Optional[Dict[str, Any]]:
        """Normalize a tuple or dict index definition to dict form."""
        if isinstance(idx_def, tuple):
            return dict(zip(("name", "columns", "partial_where"), idx_def))
        if isinstance(idx_def, dict):
            return idx_def
        return None

    def generate_indexes(self, model: Type[BaseModel]) -> List[Index]:
        """
        Build CREATE INDEX entities from a Pydantic model's __sql_indexes__.

        Accepted definitions:
            (name, columns) or (name, columns, partial_where)
            {"name", "columns", "partial_where", "descending", "type",
             "unique", "include", "concurrently"}

        Definitions without a name or columns are skipped.
        """
        schema_name, table_name = self._qualified_table(model)
        indexes = []

        for idx_def in self.get_model_metadata(model)["indexes"]:
            options = self._index_options(idx_def)
            if options is None:
                logger.warning(f"Skipping unsupported index definition on {table_name}: {idx_def!r}")
                continue

            columns = options.get("columns") or []
            if isinstance(columns, str):
                columns = [columns]
            if not options.get("name") or not columns:
                continue

            suffix = " DESC" if options.get("descending") else ""
            index = (
                Index(options["name"])
                .on_table(table_name)
                .set_schema(schema_name)
                .multi_column_index(*(f"{column}{suffix}" for column in columns))
            )
            if options.get("type"):
                index.set_method(options["type"])
            if options.get("unique"):
                index.set_unique()
            if options.get("concurrently"):
                index.set_concurrently()
            for column in options.get("include", ()):
                index.add_include_column(column)
            if options.get("partial_where"):
                index.partial_index(options["partial_where"])

            indexes.append(index)

        return indexes

    # =========================================================================
    # DROP GENERATION
    # =========================================================================

    def generate_drop(self, model: Type[BaseModel], cascade: Optional[bool] = None) -> DropTable:
        """
        Build the DROP TABLE entity for a model.

        Args:
            model: Pydantic model with __sql_table__
            cascade: Add CASCADE; defaults to PGDDL_CASCADE_DROPS
        """
        if cascade is None:
            cascade = get_defaults().generator.cascade_drops
        schema_name, table_name = self._qualified_table(model)
        return DropTable(qualify(schema_name, table_name)).set_cascade(cascade)

    # =========================================================================
    # COMPLETE SCHEMA GENERATION
    # =========================================================================

    def generate_all(self, models: Sequence[Type[BaseModel]]) -> List[DDLStatement]:
        """
        Build every CREATE entity for a set of models.

        Tables come first, in model order, followed by their indexes.
        """
        statements: List[DDLStatement] = [self.generate_table(model) for model in models]
        for model in models:
            statements.extend(self.generate_indexes(model))
        return statements

    def generate_drop_all(self, models: Sequence[Type[BaseModel]]) -> List[DropTable]:
        """Build DROP TABLE entities in reverse dependency order."""
        return [self.generate_drop(model) for model in reversed(list(models))]

    def render_all(self, models: Sequence[Type[BaseModel]]) -> Tuple[List[str], List[DDLError]]:
        """
        Render every CREATE statement for a set of models.

        Returns:
            Tuple of (sql statements, errors); statements that failed are
            left out and their errors collected
        """
        rendered: List[str] = []
        errors: List[DDLError] = []

        for statement in self.generate_all(models):
            text, statement_errors = statement.to_sql()
            statement_errors = as_error_list(statement_errors)
            if statement_errors:
                errors.extend(statement_errors)
                continue
            rendered.append(text)

        logger.info(f"Generated {len(rendered)} DDL statements for schema {self.schema_name}")
        return rendered, errors


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ["ModelToDDL"]
