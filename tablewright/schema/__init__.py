# ============================================================================
# SCHEMA MODULE
# ============================================================================
# STATUS: Core - Resolution, registration and compilation
# PURPOSE: Export resolvers, registry, compiler and DDL builders
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Schema Module

Pipeline:
    TypeDescriptor -> TableResolver -> Registry -> SchemaCompiler -> Schema
"""

from tablewright.schema.naming import (
    DEFAULT_NAMING_STRATEGY,
    apply_naming_strategy,
    parse_naming_strategy,
)
from tablewright.schema.column_resolver import ColumnResolver, NATIVE_TYPE_MAP
from tablewright.schema.table_resolver import TableResolver
from tablewright.schema.registry import Registry
from tablewright.schema.ddl_utils import (
    ColumnBuilder,
    ConstraintBuilder,
    TableBuilder,
    TriggerBuilder,
    RecordBuilder,
    quote_identifier,
    quote_literal,
)
from tablewright.schema.compiler import (
    SchemaCompiler,
    Schema,
    TableFragment,
    TriggerFragment,
    RecordFragment,
)

__all__ = [
    # Naming
    "DEFAULT_NAMING_STRATEGY",
    "apply_naming_strategy",
    "parse_naming_strategy",
    # Resolution
    "ColumnResolver",
    "NATIVE_TYPE_MAP",
    "TableResolver",
    "Registry",
    # DDL
    "ColumnBuilder",
    "ConstraintBuilder",
    "TableBuilder",
    "TriggerBuilder",
    "RecordBuilder",
    "quote_identifier",
    "quote_literal",
    # Compilation
    "SchemaCompiler",
    "Schema",
    "TableFragment",
    "TriggerFragment",
    "RecordFragment",
]
