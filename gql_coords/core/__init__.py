"""Core modules for schema coordinate extraction."""

from .errors import (
    CoordinateError,
    DocumentParseError,
    SchemaParseError,
    SubscriptionNotSupportedError,
)
from .extractor import CoordinateExtractor, extract_coordinates, parse_document
from .ir import BUILTIN_SCALARS, TypeIndex, TypeInfo
from .parser import SchemaIndexer, load_schema, parse_schema
from .usage import UsageReport, build_usage_report, collect_documents

__all__ = [
    # IR types
    "BUILTIN_SCALARS",
    "TypeIndex",
    "TypeInfo",
    # Errors
    "CoordinateError",
    "DocumentParseError",
    "SchemaParseError",
    "SubscriptionNotSupportedError",
    # Indexer
    "SchemaIndexer",
    "load_schema",
    "parse_schema",
    # Extractor
    "CoordinateExtractor",
    "extract_coordinates",
    "parse_document",
    # Usage
    "UsageReport",
    "build_usage_report",
    "collect_documents",
]
