# ============================================================================
# COLUMN DEFINITION MODEL
# ============================================================================
# STATUS: Core model - Resolved table column
# PURPOSE: Immutable description of one MySQL column
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: ColumnDefinition, NO_DEFAULT, NULL_DEFAULT
# DEPENDENCIES: pydantic
# ============================================================================
"""
Column Definition Model

Everything the DDL renderer needs to know about a column. Produced by the
ColumnResolver, owned by a TableDefinition.

Attribute notes:
    precision - FLOAT/DOUBLE/DECIMAL: digits after the decimal point
                DATETIME/TIMESTAMP/TIME: fractional second precision (0-6)
    size      - display width / length for character and integer types,
                total digits for decimal types (when precision is set too)
    default   - "NULL", raw default text, or "" for no DEFAULT clause
"""

from typing import Tuple

from pydantic import BaseModel, Field, model_validator

NULL_DEFAULT = "NULL"
NO_DEFAULT = ""


class ColumnDefinition(BaseModel):
    """
    A resolved table column.

    Invariant: a primary column is never nullable. UNIQUE is implied by
    PRIMARY KEY and is not rendered twice.
    """

    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1, description="SQL type name, e.g. VARCHAR")
    nullable: bool = True
    unique: bool = False
    precision: int = -1
    size: int = -1
    enum_set_values: Tuple[str, ...] = ()
    default: str = NO_DEFAULT
    auto_increment: bool = False
    primary: bool = False
    unsigned: bool = False
    zerofill: bool = False
    update_timestamp: bool = False

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_primary_not_nullable(self) -> "ColumnDefinition":
        if self.primary and self.nullable:
            raise ValueError(f"Primary key column '{self.name}' cannot be nullable")
        return self

    @property
    def has_default(self) -> bool:
        return self.default.strip() != NO_DEFAULT

    def as_primary(self) -> "ColumnDefinition":
        """Copy of this column promoted to primary key (NOT NULL, no NULL default)."""
        default = NO_DEFAULT if self.default.strip() == NULL_DEFAULT else self.default
        return self.model_copy(update={"primary": True, "nullable": False, "default": default})


__all__ = ["ColumnDefinition", "NULL_DEFAULT", "NO_DEFAULT"]
