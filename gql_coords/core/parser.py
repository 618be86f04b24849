"""GraphQL schema indexer using graphql-core.

Parses schema SDL and produces the TypeIndex consulted by the extractor.
"""

import logging
import os

from graphql import (
    DocumentNode,
    ExecutableDefinitionNode,
    GraphQLError,
    InputObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    OperationType,
    SchemaDefinitionNode,
    Source,
    TypeNode,
    parse,
)

from .errors import SchemaParseError
from .ir import DEFAULT_MUTATION_TYPE, DEFAULT_QUERY_TYPE, TypeIndex, TypeInfo

logger = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = (".graphql", ".graphqls", ".gql")


class SchemaIndexer:
    """Builds a TypeIndex from a parsed schema document."""

    def __init__(self):
        self.types: dict[str, dict[str, str]] = {}
        self.query_type = DEFAULT_QUERY_TYPE
        self.mutation_type = DEFAULT_MUTATION_TYPE

    def index(self, ast: DocumentNode) -> TypeIndex:
        """Index all type declarations of a schema document."""
        self.types = {}
        self.query_type = DEFAULT_QUERY_TYPE
        self.mutation_type = DEFAULT_MUTATION_TYPE

        self._process_schema_definitions(ast)
        self._process_ast(ast)

        type_map = {
            name: TypeInfo(name=name, fields=fields)
            for name, fields in self.types.items()
        }
        self._add_root_aliases(type_map)

        logger.debug(
            "Indexed %d types (query root: %s, mutation root: %s)",
            len(type_map), self.query_type, self.mutation_type,
        )
        return TypeIndex(
            types=type_map,
            query_type=self.query_type,
            mutation_type=self.mutation_type,
        )

    def _process_schema_definitions(self, ast: DocumentNode):
        """Pick up root operation type names from `schema { ... }` blocks."""
        for definition in ast.definitions:
            if not isinstance(definition, SchemaDefinitionNode):
                continue
            for operation_type in definition.operation_types:
                if operation_type.operation == OperationType.QUERY:
                    self.query_type = operation_type.type.name.value
                elif operation_type.operation == OperationType.MUTATION:
                    self.mutation_type = operation_type.type.name.value
                # subscription roots are never indexed as entry points

    def _process_ast(self, ast: DocumentNode):
        for definition in ast.definitions:
            if isinstance(definition, (ObjectTypeDefinitionNode, InterfaceTypeDefinitionNode)):
                self._merge_fields(definition.name.value, definition.fields)
            elif isinstance(definition, ObjectTypeExtensionNode):
                # Extensions may precede their base declaration
                self._merge_fields(definition.name.value, definition.fields)
            elif isinstance(definition, InputObjectTypeDefinitionNode):
                # Input internals are never traversed, only the type name matters
                self.types.setdefault(definition.name.value, {})

    def _merge_fields(self, type_name: str, field_nodes):
        fields = self.types.setdefault(type_name, {})
        for node in field_nodes or ():
            fields[node.name.value] = self._get_type_name(node.type)

    def _add_root_aliases(self, type_map: dict[str, TypeInfo]):
        """Expose the declared root types under the literal Query/Mutation keys."""
        for alias, declared in (
            (DEFAULT_QUERY_TYPE, self.query_type),
            (DEFAULT_MUTATION_TYPE, self.mutation_type),
        ):
            if alias == declared:
                continue
            target = type_map.get(declared)
            type_map[alias] = TypeInfo(
                name=declared,
                fields=dict(target.fields) if target is not None else {},
            )

    @staticmethod
    def _get_type_name(type_node: TypeNode) -> str:
        """Strip list and non-null wrappers down to the named type."""
        while isinstance(type_node, (ListTypeNode, NonNullTypeNode)):
            type_node = type_node.type
        assert isinstance(type_node, NamedTypeNode), f"Expected NamedTypeNode, got {type(type_node)}"
        return type_node.name.value


def parse_schema_document(schema_text: str, source_name: str = "schema") -> DocumentNode:
    """Parse SDL text, rejecting anything that is not a type system document."""
    try:
        ast = parse(Source(schema_text, source_name))
    except GraphQLError as e:
        raise SchemaParseError.from_graphql_error(e, source_name) from e

    for definition in ast.definitions:
        if isinstance(definition, ExecutableDefinitionNode):
            raise SchemaParseError(
                f"unexpected executable definition '{definition.kind}'", source_name
            )
    return ast


def parse_schema(schema_text: str, source_name: str = "schema") -> TypeIndex:
    """Parse schema text and build a reusable TypeIndex."""
    return SchemaIndexer().index(parse_schema_document(schema_text, source_name))


def load_schema(schema_path: str) -> TypeIndex:
    """Index a schema file, or every schema file found under a directory."""
    definitions = []
    for file_path in collect_schema_files(schema_path):
        with open(file_path, encoding="utf-8") as f:
            content = f.read()
        logger.debug("Parsing schema file %s", file_path)
        ast = parse_schema_document(content, os.path.basename(file_path))
        definitions.extend(ast.definitions)

    if not definitions:
        logger.warning("No schema definitions found in %s", schema_path)
    return SchemaIndexer().index(DocumentNode(definitions=tuple(definitions)))


def collect_schema_files(schema_path: str, extensions=SCHEMA_EXTENSIONS) -> list[str]:
    """Collect all schema files from a path."""
    files = []
    if os.path.isfile(schema_path):
        files.append(schema_path)
    else:
        for root, _, filenames in os.walk(schema_path):
            for filename in filenames:
                if filename.endswith(extensions):
                    files.append(os.path.join(root, filename))
    return sorted(files)
