"""Intermediate Representation (IR) for schema coordinate lookup.

This module defines the immutable index built from a schema document and
consulted by the coordinate extractor.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

BUILTIN_SCALARS = frozenset({"String", "Int", "Float", "Boolean", "ID"})

DEFAULT_QUERY_TYPE = "Query"
DEFAULT_MUTATION_TYPE = "Mutation"


@dataclass(frozen=True)
class TypeInfo:
    """An indexed object, interface, or input type."""
    name: str  # canonical name, differs from the index key for root aliases
    fields: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.fields, MappingProxyType):
            object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))


@dataclass(frozen=True)
class TypeIndex:
    """Lookup from type name to TypeInfo, with Query/Mutation aliases resolved.

    Built once per schema and shared read-only across extraction calls.
    """
    types: Mapping[str, TypeInfo] = field(default_factory=dict)
    query_type: str = DEFAULT_QUERY_TYPE
    mutation_type: str = DEFAULT_MUTATION_TYPE

    def __post_init__(self):
        if not isinstance(self.types, MappingProxyType):
            object.__setattr__(self, "types", MappingProxyType(dict(self.types)))

    def __contains__(self, key: object) -> bool:
        return key in self.types

    def __iter__(self) -> Iterator[str]:
        return iter(self.types)

    def __len__(self) -> int:
        return len(self.types)

    def get(self, key: str) -> TypeInfo | None:
        return self.types.get(key)

    def canonical_name(self, key: str) -> str:
        """Return the real type name for a key, or the key itself if unindexed."""
        info = self.types.get(key)
        return info.name if info is not None else key

    def field_type(self, parent_key: str, field_name: str) -> str | None:
        """Return the unwrapped return type of a field, if the schema declares it."""
        info = self.types.get(parent_key)
        if info is None:
            return None
        return info.fields.get(field_name)

    def has_field(self, coordinate: str) -> bool:
        """Check whether a `Type.field` coordinate names a declared field."""
        type_name, sep, field_name = coordinate.partition(".")
        if not sep or not type_name or not field_name:
            return False
        if not self._is_canonical(type_name):
            return False
        return self.field_type(type_name, field_name) is not None

    def knows(self, coordinate: str) -> bool:
        """Check whether a coordinate of either form exists in the index."""
        if "." in coordinate:
            return self.has_field(coordinate)
        return self._is_canonical(coordinate)

    def _is_canonical(self, type_name: str) -> bool:
        # Root alias keys are lookup entry points, never emitted type names
        info = self.types.get(type_name)
        return info is not None and info.name == type_name

    @property
    def aliases(self) -> dict[str, str]:
        """Map root alias keys to the real root type names they stand for."""
        return {
            key: info.name
            for key, info in self.types.items()
            if key != info.name
        }
