"""Extract schema coordinates referenced by GraphQL documents."""

from .core import (
    CoordinateError,
    CoordinateExtractor,
    DocumentParseError,
    SchemaParseError,
    SubscriptionNotSupportedError,
    TypeIndex,
    TypeInfo,
    extract_coordinates,
    load_schema,
    parse_schema,
)

__version__ = "0.1.0"

__all__ = [
    "CoordinateError",
    "CoordinateExtractor",
    "DocumentParseError",
    "SchemaParseError",
    "SubscriptionNotSupportedError",
    "TypeIndex",
    "TypeInfo",
    "extract_coordinates",
    "load_schema",
    "parse_schema",
]
