"""Errors raised while indexing schemas and extracting coordinates."""

from graphql import GraphQLError


class CoordinateError(Exception):
    """Base class for all gql-coords errors."""


class SchemaParseError(CoordinateError):
    """Raised when schema text cannot be parsed as a schema document."""

    def __init__(self, message: str, source_name: str = "schema"):
        self.source_name = source_name
        super().__init__(f"Failed to parse schema {source_name}: {message}")

    @classmethod
    def from_graphql_error(cls, error: GraphQLError, source_name: str = "schema"):
        return cls(error.message, source_name)


class DocumentParseError(CoordinateError):
    """Raised when document text cannot be parsed as an executable document."""

    def __init__(self, message: str, source_name: str = "document"):
        self.source_name = source_name
        super().__init__(f"Failed to parse document {source_name}: {message}")

    @classmethod
    def from_graphql_error(cls, error: GraphQLError, source_name: str = "document"):
        return cls(error.message, source_name)


class SubscriptionNotSupportedError(CoordinateError):
    """Raised when a document contains a subscription operation."""

    def __init__(self, operation_name: str | None = None):
        self.operation_name = operation_name
        super().__init__("Schema is not configured to execute subscription")
