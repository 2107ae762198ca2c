# ============================================================================
# TABLE DEFINITION MODEL
# ============================================================================
# STATUS: Core model - Resolved table with constraints, triggers and seeds
# PURPOSE: Immutable description of one MySQL table
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: TableDefinition, ConstraintSet, UniqueConstraint,
#          ForeignKeyConstraint, TriggerDefinition, SeedRecordSet
# DEPENDENCIES: pydantic
# ============================================================================
"""
Table Definition Model

A TableDefinition is produced by the TableResolver and owned by the
Registry. Tables refer to each other by name only (foreign keys carry the
target table name), never by object reference.

Column order is the mapping's insertion order and is the order columns
appear in CREATE TABLE.
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from tablewright.contracts import TriggerEvent, TriggerTiming
from tablewright.models.column import ColumnDefinition


class UniqueConstraint(BaseModel):
    """Named unique constraint over an ordered list of columns."""
    name: str
    columns: Tuple[str, ...]

    model_config = {"frozen": True}


class ForeignKeyConstraint(BaseModel):
    """`column` references `table`(`reference_column`)."""
    column: str
    table: str
    reference_column: str

    model_config = {"frozen": True}


class TriggerDefinition(BaseModel):
    name: str
    timing: TriggerTiming
    event: TriggerEvent
    body: str

    model_config = {"frozen": True}


class SeedRecordSet(BaseModel):
    """
    Rows to insert once the table exists.

    A row shorter than `columns` is padded from the column defaults.
    """
    columns: Tuple[str, ...]
    values: Tuple[Tuple[Any, ...], ...] = ()

    model_config = {"frozen": True}


class ConstraintSet(BaseModel):
    unique: Tuple[UniqueConstraint, ...] = ()
    reference: Tuple[ForeignKeyConstraint, ...] = ()

    model_config = {"frozen": True}


class TableDefinition(BaseModel):
    """
    A resolved table.

    Invariants (enforced by TableResolver):
    - at most one primary key designation
    - every column named by a constraint or seed record exists
    """

    name: str = Field(..., min_length=1)
    primary_key_column: Optional[str] = None
    columns: Dict[str, ColumnDefinition] = Field(default_factory=dict)
    constraints: ConstraintSet = Field(default_factory=ConstraintSet)
    triggers: Tuple[TriggerDefinition, ...] = ()
    records: Tuple[SeedRecordSet, ...] = ()
    source: Optional[str] = Field(
        default=None,
        description="Qualified name of the type the table was resolved from",
    )

    model_config = {"frozen": True}

    @property
    def foreign_keys(self) -> Tuple[ForeignKeyConstraint, ...]:
        return self.constraints.reference

    @property
    def unique_constraints(self) -> Tuple[UniqueConstraint, ...]:
        return self.constraints.unique

    @property
    def referenced_tables(self) -> List[str]:
        """Distinct foreign key target tables in declaration order."""
        seen: List[str] = []
        for fk in self.constraints.reference:
            if fk.table not in seen:
                seen.append(fk.table)
        return seen

    def references(self, table_name: str) -> bool:
        return any(fk.table == table_name for fk in self.constraints.reference)

    def column_names(self) -> List[str]:
        return list(self.columns.keys())


__all__ = [
    "UniqueConstraint",
    "ForeignKeyConstraint",
    "TriggerDefinition",
    "SeedRecordSet",
    "ConstraintSet",
    "TableDefinition",
]
