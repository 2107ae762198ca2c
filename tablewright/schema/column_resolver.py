# ============================================================================
# COLUMN RESOLVER
# ============================================================================
# STATUS: Core - Field metadata to ColumnDefinition
# PURPOSE: Derive a column's name, type, nullability and default from metadata
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: ColumnResolver, NATIVE_TYPE_MAP
# DEPENDENCIES: pydantic
# ============================================================================
"""
Column Resolver.

Resolution rules for a single field:

    Marker      No Column/Id item, or an Ignore item -> no column
    Name        Column/Id name, else naming strategy
                (field Naming > table Naming > default strategy)
    Type        SqlType override, else inferred from the native type
                (TEXT -> ENUM if EnumSetValues else VARCHAR)
    Nullable    Column.nullable; Id and primary columns are NOT NULL
    Default     DefaultsTo, else "NULL" if nullable, else no default

The resolver is a pure function of its inputs.
"""

import logging
from typing import Iterable, List, Optional, Union

from tablewright.contracts import MetadataKind, NamingStrategy, NativeType
from tablewright.errors import (
    DuplicateColumnError,
    InvalidColumnModifierError,
    NonNullableMismatchError,
    UnmappableNativeTypeError,
)
from tablewright.metadata.descriptors import FieldDescriptor
from tablewright.metadata.items import (
    Column,
    DefaultsTo,
    EnumSetValues,
    Id,
    Naming,
    SqlType,
)
from tablewright.models.column import NO_DEFAULT, NULL_DEFAULT, ColumnDefinition
from tablewright.schema.naming import DEFAULT_NAMING_STRATEGY, apply_naming_strategy, parse_naming_strategy

logger = logging.getLogger(__name__)


# ============================================================================
# TYPE MAPPING
# ============================================================================

NATIVE_TYPE_MAP = {
    NativeType.TEXT: "VARCHAR",
    NativeType.INTEGER: "INT",
    NativeType.FLOAT: "FLOAT",
    NativeType.BOOLEAN: "BOOL",
    NativeType.DATETIME: "DATETIME",
    NativeType.LIST: "SET",
}

# Types ON UPDATE CURRENT_TIMESTAMP is valid for
TIME_VALUED_TYPES = ("DATETIME", "TIMESTAMP")


class ColumnResolver:
    """
    Resolve FieldDescriptors into ColumnDefinitions.

    Args:
        default_strategy: Naming strategy used when neither the field nor
                          its table declares one
    """

    def __init__(self, default_strategy: Union[str, NamingStrategy] = DEFAULT_NAMING_STRATEGY):
        self.default_strategy = parse_naming_strategy(default_strategy)

    # =========================================================================
    # NAME / TYPE
    # =========================================================================

    def resolve_name(
        self,
        field: FieldDescriptor,
        marker: Union[Column, Id],
        table_strategy: Optional[NamingStrategy] = None,
    ) -> str:
        name = marker.name.strip()
        if name:
            return name

        naming = field.metadata.get(MetadataKind.NAMING_STRATEGY)
        if isinstance(naming, Naming):
            strategy = naming.strategy
        else:
            strategy = table_strategy or self.default_strategy

        return apply_naming_strategy(field.name, strategy)

    def resolve_type(self, field: FieldDescriptor) -> str:
        override = field.metadata.get(MetadataKind.TYPE)
        if isinstance(override, SqlType):
            return override.type

        if field.native_type is NativeType.TEXT:
            return "ENUM" if field.metadata.has(MetadataKind.ENUM_SET_VALUES) else "VARCHAR"

        sql_type = NATIVE_TYPE_MAP.get(field.native_type)
        if sql_type is None:
            raise UnmappableNativeTypeError(field.name, field.display_type)
        return sql_type

    # =========================================================================
    # RESOLUTION
    # =========================================================================

    def resolve(
        self,
        field: FieldDescriptor,
        table_strategy: Optional[NamingStrategy] = None,
    ) -> Optional[ColumnDefinition]:
        """
        Resolve one field.

        Returns:
            ColumnDefinition, or None if the field is not mapped to a column
        """
        meta = field.metadata
        if meta.has(MetadataKind.IGNORE):
            return None

        # Id takes precedence over a plain Column marker
        marker = meta.first_of(Id, Column)
        if marker is None:
            return None

        is_id = isinstance(marker, Id)
        name = self.resolve_name(field, marker, table_strategy)
        sql_type = self.resolve_type(field)

        if marker.nullable and not field.allows_null:
            raise NonNullableMismatchError(field.name)

        primary = is_id or meta.has(MetadataKind.PRIMARY_KEY)
        auto_increment = meta.has(MetadataKind.AUTO_INCREMENT) or (is_id and marker.auto_increment)
        nullable = marker.nullable and not primary

        explicit_default = meta.get(MetadataKind.DEFAULT)
        if isinstance(explicit_default, DefaultsTo):
            default = explicit_default.value
        else:
            default = NULL_DEFAULT if nullable else NO_DEFAULT

        enum_values = meta.get(MetadataKind.ENUM_SET_VALUES)
        update_timestamp = meta.has(MetadataKind.UPDATE_TIMESTAMP)
        if update_timestamp and sql_type not in TIME_VALUED_TYPES:
            raise InvalidColumnModifierError(name, "ON UPDATE CURRENT_TIMESTAMP", sql_type)

        column = ColumnDefinition(
            name=name,
            type=sql_type,
            nullable=nullable,
            unique=marker.unique,
            precision=marker.precision,
            size=marker.size,
            enum_set_values=enum_values.values if isinstance(enum_values, EnumSetValues) else (),
            default=default,
            auto_increment=auto_increment,
            primary=primary,
            unsigned=meta.has(MetadataKind.UNSIGNED),
            zerofill=meta.has(MetadataKind.ZEROFILL),
            update_timestamp=update_timestamp,
        )

        logger.debug(f"Resolved field {field.name} -> column {column.name} {column.type}")
        return column

    def resolve_all(
        self,
        fields: Iterable[FieldDescriptor],
        table_strategy: Optional[NamingStrategy] = None,
        owner: Optional[str] = None,
    ) -> List[ColumnDefinition]:
        """Resolve fields in order, rejecting duplicate column names."""
        columns: List[ColumnDefinition] = []
        seen = set()

        for field in fields:
            column = self.resolve(field, table_strategy)
            if column is None:
                continue
            if column.name in seen:
                raise DuplicateColumnError(column.name, owner)
            seen.add(column.name)
            columns.append(column)

        return columns


__all__ = ["ColumnResolver", "NATIVE_TYPE_MAP", "TIME_VALUED_TYPES"]
