# ============================================================================
# METADATA MODULE
# ============================================================================
# STATUS: Core - Declarative metadata and descriptors
# PURPOSE: Export metadata items, descriptors and providers
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================

from tablewright.metadata.items import (
    MetadataItem,
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
)
from tablewright.metadata.descriptors import (
    MetadataSet,
    FieldDescriptor,
    TypeDescriptor,
    MetadataProvider,
    DescriptorBuilder,
)
from tablewright.metadata.pydantic_provider import PydanticMetadataProvider, native_type_of

__all__ = [
    # Items
    "MetadataItem",
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
    # Descriptors
    "MetadataSet",
    "FieldDescriptor",
    "TypeDescriptor",
    "MetadataProvider",
    "DescriptorBuilder",
    # Providers
    "PydanticMetadataProvider",
    "native_type_of",
]
