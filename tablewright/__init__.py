# ============================================================================
# TABLEWRIGHT
# ============================================================================
# STATUS: Package initialization
# PURPOSE: Export the public schema engine API
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
tablewright - MySQL schemas from annotated models.

    from typing import Annotated, Optional
    from pydantic import BaseModel, Field
    from tablewright import Database, Table, Id, Column, Reference

    class Author(BaseModel):
        __sql_metadata__ = [Table()]
        id: Annotated[int, Id()]
        name: Annotated[str, Column(nullable=False), Field(max_length=80)]

    class Book(BaseModel):
        __sql_metadata__ = [Table(), Reference("author_id", "author", "id")]
        id: Annotated[int, Id()]
        author_id: Annotated[int, Column(nullable=False)]

    db = Database()
    db.add_tables(Author, Book)
    print(db.export_schema())
"""

from tablewright.__version__ import __version__
from tablewright.contracts import (
    NamingStrategy,
    NativeType,
    MetadataKind,
    TriggerTiming,
    TriggerEvent,
    RenderMode,
)
from tablewright.errors import SchemaError
from tablewright.metadata import (
    Table,
    Ignore,
    Column,
    Id,
    PrimaryKey,
    AutoIncrement,
    Unique,
    Reference,
    Trigger,
    Record,
    Naming,
    SqlType,
    EnumSetValues,
    DefaultsTo,
    Unsigned,
    Zerofill,
    UpdateTimestamp,
    DescriptorBuilder,
    PydanticMetadataProvider,
)
from tablewright.models import ColumnDefinition, TableDefinition
from tablewright.schema import (
    ColumnResolver,
    TableResolver,
    Registry,
    SchemaCompiler,
    Schema,
)
from tablewright.config import SchemaDefaults, get_defaults
from tablewright.infrastructure import SchemaExporter, DbApiGateway, ApplyResult, connect_mysql
from tablewright.database import Database

__all__ = [
    "__version__",
    # Enums
    "NamingStrategy",
    "NativeType",
    "MetadataKind",
    "TriggerTiming",
    "TriggerEvent",
    "RenderMode",
    # Errors
    "SchemaError",
    # Metadata
    "Table",
    "Ignore",
    "Column",
    "Id",
    "PrimaryKey",
    "AutoIncrement",
    "Unique",
    "Reference",
    "Trigger",
    "Record",
    "Naming",
    "SqlType",
    "EnumSetValues",
    "DefaultsTo",
    "Unsigned",
    "Zerofill",
    "UpdateTimestamp",
    "DescriptorBuilder",
    "PydanticMetadataProvider",
    # Models
    "ColumnDefinition",
    "TableDefinition",
    # Pipeline
    "ColumnResolver",
    "TableResolver",
    "Registry",
    "SchemaCompiler",
    "Schema",
    "SchemaExporter",
    "DbApiGateway",
    "connect_mysql",
    "ApplyResult",
    "SchemaDefaults",
    "get_defaults",
    "Database",
]
