# ============================================================================
# PYDANTIC METADATA PROVIDER
# ============================================================================
# STATUS: Core - Descriptors from annotated Pydantic models
# PURPOSE: Read __sql_metadata__ and Annotated field metadata into descriptors
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: PydanticMetadataProvider, native_type_of
# DEPENDENCIES: pydantic, annotated_types
# ============================================================================
"""
Pydantic Metadata Provider.

Pydantic models are the single source of truth for a table:

    class Book(BaseModel):
        __sql_metadata__: ClassVar[list] = [
            Table(),
            Reference("author_id", "author", "id"),
        ]

        id: Annotated[Optional[int], Id()] = None
        title: Annotated[str, Column(nullable=False)] = Field(max_length=120)
        author_id: Annotated[int, Column(nullable=False), Unsigned()]

Type-level items come from the __sql_metadata__ ClassVar, field-level items
from the Annotated[...] metadata of each model field. This is the only place
in tablewright that looks at Python types; everything downstream consumes
the TypeDescriptor it produces.
"""

import logging
import types
from dataclasses import replace
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional, Tuple, Type, Union, get_args, get_origin

from annotated_types import MaxLen
from pydantic import BaseModel
from pydantic.fields import FieldInfo

from tablewright.contracts import NativeType
from tablewright.metadata.descriptors import FieldDescriptor, MetadataSet, TypeDescriptor
from tablewright.metadata.items import Column, Id, MetadataItem

logger = logging.getLogger(__name__)

_UNION_TYPES = (Union, types.UnionType)


def _unwrap_optional(annotation: Any) -> Tuple[Any, bool]:
    """Strip Optional/None from a union; returns (inner type, allows_null)."""
    if annotation is None or annotation is type(None):
        return annotation, True

    if get_origin(annotation) in _UNION_TYPES:
        args = get_args(annotation)
        if type(None) in args:
            remaining = [a for a in args if a is not type(None)]
            if len(remaining) == 1:
                return remaining[0], True
            return Union[tuple(remaining)], True

    return annotation, False


def native_type_of(annotation: Any) -> NativeType:
    """
    Classify a (non-optional) Python annotation.

    bool is checked before int since bool subclasses int.
    """
    origin = get_origin(annotation)
    if origin in (list, set, frozenset, tuple):
        return NativeType.LIST
    if origin is not None:
        return NativeType.OTHER

    if not isinstance(annotation, type):
        return NativeType.OTHER

    if issubclass(annotation, Enum):
        # str-valued enums are stored as text (ENUM when values are declared)
        return NativeType.TEXT if issubclass(annotation, str) else NativeType.OTHER
    if issubclass(annotation, bool):
        return NativeType.BOOLEAN
    if issubclass(annotation, int):
        return NativeType.INTEGER
    if issubclass(annotation, (float, Decimal)):
        return NativeType.FLOAT
    if issubclass(annotation, str):
        return NativeType.TEXT
    if issubclass(annotation, (datetime, date, time)):
        return NativeType.DATETIME
    if issubclass(annotation, (list, set, frozenset, tuple)):
        return NativeType.LIST

    return NativeType.OTHER


def _type_name(annotation: Any) -> str:
    return getattr(annotation, "__name__", None) or str(annotation)


class PydanticMetadataProvider:
    """
    Describe Pydantic models as TypeDescriptors.

    Looks for __sql_metadata__ (also accepting the mangled
    _ClassName__sql_metadata form) for table-level items.
    """

    METADATA_ATTRIBUTE = "sql_metadata__"

    @classmethod
    def get_model_metadata(cls, model: Type[BaseModel]) -> List[MetadataItem]:
        """Table-level metadata items declared on a model class."""
        mangled = f"_{model.__name__}__{cls.METADATA_ATTRIBUTE}"
        items = getattr(model, mangled, getattr(model, f"__{cls.METADATA_ATTRIBUTE}", None))
        if items is None:
            return []
        if isinstance(items, MetadataItem):
            return [items]
        return list(items)

    def describe_field(self, model_name: str, field_name: str, field_info: FieldInfo) -> FieldDescriptor:
        inner, allows_null = _unwrap_optional(field_info.annotation)

        items: List[MetadataItem] = []
        max_length: Optional[int] = None
        for entry in field_info.metadata:
            if isinstance(entry, MetadataItem):
                items.append(entry)
            elif isinstance(entry, MaxLen):
                max_length = entry.max_length

        # Field(max_length=...) sizes a column that leaves size unset
        if max_length is not None:
            items = [
                replace(item, size=max_length)
                if isinstance(item, (Column, Id)) and item.size < 0 else item
                for item in items
            ]

        return FieldDescriptor(
            name=field_name,
            native_type=native_type_of(inner),
            metadata=MetadataSet(f"{model_name}.{field_name}", items),
            allows_null=allows_null,
            type_name=_type_name(inner),
        )

    def describe(self, source: Type[BaseModel]) -> TypeDescriptor:
        if not (isinstance(source, type) and issubclass(source, BaseModel)):
            raise TypeError(f"Expected a pydantic model class, got {source!r}")

        fields = tuple(
            self.describe_field(source.__name__, field_name, field_info)
            for field_name, field_info in source.model_fields.items()
        )

        logger.debug(f"Described {source.__name__} ({len(fields)} fields)")

        return TypeDescriptor(
            name=source.__name__,
            metadata=MetadataSet(source.__name__, self.get_model_metadata(source)),
            fields=fields,
            source=f"{source.__module__}.{source.__qualname__}",
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ["PydanticMetadataProvider", "native_type_of"]
