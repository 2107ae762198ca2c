# ============================================================================
# METADATA DESCRIPTORS
# ============================================================================
# STATUS: Core - Structured metadata handed to the resolvers
# PURPOSE: Partitioned metadata sets, type/field descriptors, provider protocol
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: MetadataSet, FieldDescriptor, TypeDescriptor, MetadataProvider,
#          DescriptorBuilder
# DEPENDENCIES: pydantic
# ============================================================================
"""
Metadata Descriptors

The resolvers never inspect a type system. They consume descriptors:

    TypeDescriptor
        name      - type identifier (e.g. "BookAuthor")
        metadata  - MetadataSet of type-level items
        fields    - ordered FieldDescriptors

    FieldDescriptor
        name        - field identifier
        native_type - NativeType category
        allows_null - whether the field can hold an absent value
        metadata    - MetadataSet of field-level items

A MetadataSet partitions its items once, at construction, into singular
kinds (at most one item each) and repeated kinds (ordered lists).

Descriptors come from a MetadataProvider (see pydantic_provider) or are
assembled by hand with DescriptorBuilder:

    descriptor = (
        DescriptorBuilder("Book")
        .table(Table(), Reference("author_id", "author", "id"))
        .field("id", NativeType.INTEGER, Id())
        .field("author_id", NativeType.INTEGER, Column(nullable=False))
        .build()
    )
"""

from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple, Type, TypeVar, runtime_checkable

from pydantic import ConfigDict
from pydantic.dataclasses import dataclass

from tablewright.contracts import MetadataKind, NativeType
from tablewright.errors import DuplicateMetadataItemError
from tablewright.metadata.items import MetadataItem

ItemT = TypeVar("ItemT", bound=MetadataItem)


class MetadataSet:
    """
    Ordered metadata items, partitioned into singular and repeated kinds.

    Raises DuplicateMetadataItemError if a non-repeatable kind appears twice.
    """

    def __init__(self, owner: str, items: Iterable[MetadataItem] = ()):
        self.owner = owner
        self.items: Tuple[MetadataItem, ...] = tuple(items)
        self._singular: Dict[MetadataKind, MetadataItem] = {}
        self._repeated: Dict[MetadataKind, List[MetadataItem]] = {}

        for item in self.items:
            if item.repeatable:
                self._repeated.setdefault(item.kind, []).append(item)
            elif item.kind in self._singular:
                raise DuplicateMetadataItemError(owner, item.kind.value)
            else:
                self._singular[item.kind] = item

    def __repr__(self) -> str:
        return f"MetadataSet(owner={self.owner!r}, items={list(self.items)!r})"

    def __len__(self) -> int:
        return len(self.items)

    def has(self, kind: MetadataKind) -> bool:
        return kind in self._singular or kind in self._repeated

    def get(self, kind: MetadataKind) -> Optional[MetadataItem]:
        """Singular item of this kind, or None."""
        return self._singular.get(kind)

    def get_all(self, kind: MetadataKind) -> List[MetadataItem]:
        """Repeated items of this kind in declaration order."""
        return list(self._repeated.get(kind, []))

    def first_of(self, *item_types: Type[ItemT]) -> Optional[ItemT]:
        """First singular item matching the given types, in argument order."""
        for item_type in item_types:
            item = self._singular.get(item_type.kind)
            if item is not None:
                return item
        return None


@dataclass(frozen=True, config=ConfigDict(arbitrary_types_allowed=True))
class FieldDescriptor:
    """One field of a model type."""

    name: str
    native_type: NativeType
    metadata: MetadataSet
    allows_null: bool = False
    type_name: str = ""

    @property
    def display_type(self) -> str:
        return self.type_name or self.native_type.value


@dataclass(frozen=True, config=ConfigDict(arbitrary_types_allowed=True))
class TypeDescriptor:
    """A model type with its table-level metadata and ordered fields."""

    name: str
    metadata: MetadataSet
    fields: Tuple[FieldDescriptor, ...] = ()
    # Qualified name of the described type, for diagnostics
    source: Optional[str] = None


@runtime_checkable
class MetadataProvider(Protocol):
    """Anything that can describe a type as a TypeDescriptor."""

    def describe(self, source: Any) -> TypeDescriptor:
        ...


class DescriptorBuilder:
    """
    Hand assembly of TypeDescriptors without any reflection.

    Singular kinds are checked when build() is called.
    """

    def __init__(self, name: str, source: Optional[str] = None):
        self._name = name
        self._source = source
        self._items: List[MetadataItem] = []
        self._fields: List[Tuple[str, NativeType, List[MetadataItem], bool, str]] = []

    def table(self, *items: MetadataItem) -> "DescriptorBuilder":
        self._items.extend(items)
        return self

    def field(
        self,
        name: str,
        native_type: NativeType,
        *items: MetadataItem,
        allows_null: bool = False,
        type_name: str = "",
    ) -> "DescriptorBuilder":
        self._fields.append((name, native_type, list(items), allows_null, type_name))
        return self

    def build(self) -> TypeDescriptor:
        fields = tuple(
            FieldDescriptor(
                name=name,
                native_type=native_type,
                metadata=MetadataSet(f"{self._name}.{name}", items),
                allows_null=allows_null,
                type_name=type_name,
            )
            for name, native_type, items, allows_null, type_name in self._fields
        )
        return TypeDescriptor(
            name=self._name,
            metadata=MetadataSet(self._name, self._items),
            fields=fields,
            source=self._source,
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "MetadataSet",
    "FieldDescriptor",
    "TypeDescriptor",
    "MetadataProvider",
    "DescriptorBuilder",
]
