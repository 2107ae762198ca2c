# ============================================================================
# MODELS MODULE
# ============================================================================
# STATUS: Model exports
# PURPOSE: Central export point for resolved schema definitions
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Immutable Pydantic models describing resolved tables and columns.

Single Source of Truth Pattern:
    - Annotated models declare metadata
    - Resolvers turn metadata into these definitions
    - SchemaCompiler renders MySQL DDL from them
"""

from tablewright.models.column import ColumnDefinition, NULL_DEFAULT, NO_DEFAULT
from tablewright.models.table import (
    TableDefinition,
    ConstraintSet,
    UniqueConstraint,
    ForeignKeyConstraint,
    TriggerDefinition,
    SeedRecordSet,
)

__all__ = [
    # Column
    "ColumnDefinition",
    "NULL_DEFAULT",
    "NO_DEFAULT",
    # Table
    "TableDefinition",
    "ConstraintSet",
    "UniqueConstraint",
    "ForeignKeyConstraint",
    "TriggerDefinition",
    "SeedRecordSet",
]
