# ============================================================================
# DROP TABLE MODEL
# ============================================================================
# STATUS: Core - DROP TABLE assembly
# PURPOSE: Render DROP TABLE IF EXISTS with optional CASCADE
# CREATED: 18 OCT 2026
# ============================================================================
"""Drop Table Model."""

from typing import Any, ClassVar, Optional, Tuple

from pgddl.contracts import DDLError, MissingFieldError
from pgddl.models.base import DDLStatement
from pgddl.schema.ddl_utils import join_clauses, render


class DropTable(DDLStatement):
    """DROP TABLE IF EXISTS <name> [CASCADE]."""

    __statement_kind__: ClassVar[str] = "drop_table"

    name: str = ""
    cascade: bool = False

    def __init__(self, name: str = "", **data: Any):
        super().__init__(name=name, **data)

    def set_cascade(self, cascade: bool = True) -> "DropTable":
        self.cascade = cascade
        return self

    def to_sql(self) -> Tuple[str, Optional[DDLError]]:
        if not self.name:
            return "", MissingFieldError("table name cannot be empty", entity="drop_table", field="name")

        parts = ["DROP TABLE IF EXISTS", self.name]
        if self.cascade:
            parts.append("CASCADE")

        return render(join_clauses(parts)), None


__all__ = ["DropTable"]
