"""Schema coordinate extraction.

Walks the operations of an executable document against a TypeIndex and
collects the `Type.field` and bare `Type` coordinates it references.

Example:
    index = parse_schema(sdl)
    extract_coordinates(index, "{ animalOwner { name } }")
    # ['Root.animalOwner', 'Human.name']  (unordered)
"""

import logging

from graphql import (
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    GraphQLError,
    InlineFragmentNode,
    ListTypeNode,
    NonNullTypeNode,
    OperationDefinitionNode,
    OperationType,
    SelectionSetNode,
    Source,
    TypeNode,
    TypeSystemDefinitionNode,
    TypeSystemExtensionNode,
    parse,
)

from .errors import DocumentParseError, SubscriptionNotSupportedError
from .ir import BUILTIN_SCALARS, DEFAULT_MUTATION_TYPE, DEFAULT_QUERY_TYPE, TypeIndex

logger = logging.getLogger(__name__)

ROOT_KEYS = {
    OperationType.QUERY: DEFAULT_QUERY_TYPE,
    OperationType.MUTATION: DEFAULT_MUTATION_TYPE,
}


class CoordinateExtractor:
    """Extracts coordinates from parsed documents using a shared TypeIndex.

    The extractor holds no per-document state; each call to `extract`
    works on its own accumulator, so one instance may serve many documents.
    """

    def __init__(self, index: TypeIndex):
        self.index = index

    def extract(self, document: DocumentNode) -> set[str]:
        """Collect the coordinates referenced by every operation in a document.

        Raises:
            SubscriptionNotSupportedError: If any operation is a subscription.
                No coordinates are returned in that case.
        """
        coordinates: set[str] = set()
        fragments = [
            d for d in document.definitions if isinstance(d, FragmentDefinitionNode)
        ]

        for definition in document.definitions:
            if isinstance(definition, OperationDefinitionNode):
                self._extract_operation(definition, fragments, coordinates)

        return coordinates

    def _extract_operation(
        self,
        operation: OperationDefinitionNode,
        fragments: list[FragmentDefinitionNode],
        coordinates: set[str],
    ):
        root_key = ROOT_KEYS.get(operation.operation)
        if root_key is None:
            name = operation.name.value if operation.name else None
            raise SubscriptionNotSupportedError(name)

        for variable in operation.variable_definitions or ():
            self._extract_variable_type(variable.type, coordinates)

        self._extract_selection_set(
            operation.selection_set, root_key, fragments, coordinates, ()
        )

    def _extract_variable_type(self, type_node: TypeNode, coordinates: set[str]):
        while isinstance(type_node, (ListTypeNode, NonNullTypeNode)):
            type_node = type_node.type
        name = type_node.name.value
        if name in self.index and name not in BUILTIN_SCALARS:
            coordinates.add(name)

    def _extract_selection_set(
        self,
        selection_set: SelectionSetNode | None,
        parent_key: str,
        fragments: list[FragmentDefinitionNode],
        coordinates: set[str],
        fragment_stack: tuple[str, ...],
    ):
        """Walk one selection set with `parent_key` as the enclosing type.

        `fragment_stack` holds the named fragments currently being expanded;
        a spread of a fragment already on it is skipped so cyclic fragments
        terminate.
        """
        if selection_set is None:
            return

        for selection in selection_set.selections:
            if isinstance(selection, FieldNode):
                field_name = selection.name.value
                coordinates.add(f"{self.index.canonical_name(parent_key)}.{field_name}")

                if selection.selection_set and selection.selection_set.selections:
                    field_type = self.index.field_type(parent_key, field_name)
                    # Children of fields unknown to the schema are not expanded
                    if field_type is not None:
                        self._extract_selection_set(
                            selection.selection_set, field_type,
                            fragments, coordinates, fragment_stack,
                        )

            elif isinstance(selection, FragmentSpreadNode):
                fragment_name = selection.name.value
                if fragment_name in fragment_stack:
                    logger.debug("Skipping cyclic spread of fragment %s", fragment_name)
                    continue
                for fragment in fragments:
                    if fragment.name.value == fragment_name:
                        self._extract_selection_set(
                            fragment.selection_set,
                            fragment.type_condition.name.value,
                            fragments,
                            coordinates,
                            fragment_stack + (fragment_name,),
                        )

            elif isinstance(selection, InlineFragmentNode):
                type_key = (
                    selection.type_condition.name.value
                    if selection.type_condition
                    else parent_key
                )
                self._extract_selection_set(
                    selection.selection_set, type_key,
                    fragments, coordinates, fragment_stack,
                )


def parse_document(document_text: str, source_name: str = "document") -> DocumentNode:
    """Parse document text, rejecting type system definitions."""
    try:
        document = parse(Source(document_text, source_name))
    except GraphQLError as e:
        raise DocumentParseError.from_graphql_error(e, source_name) from e

    for definition in document.definitions:
        if isinstance(definition, (TypeSystemDefinitionNode, TypeSystemExtensionNode)):
            raise DocumentParseError(
                f"unexpected type system definition '{definition.kind}'", source_name
            )
    return document


def extract_coordinates(
    index: TypeIndex, document_text: str, source_name: str = "document"
) -> list[str]:
    """Parse a document and return its coordinates as an unordered list."""
    document = parse_document(document_text, source_name)
    return list(CoordinateExtractor(index).extract(document))
