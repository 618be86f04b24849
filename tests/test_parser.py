"""Tests for the schema indexer."""

import pytest

from gql_coords.core.errors import SchemaParseError
from gql_coords.core.ir import TypeIndex, TypeInfo
from gql_coords.core.parser import collect_schema_files, load_schema, parse_schema


class TestSchemaIndexer:
    """Tests for building a TypeIndex from SDL."""

    def test_object_fields_are_unwrapped(self, pets_index):
        root = pets_index.get("Root")
        assert root.fields["animalOwner"] == "Human"
        assert root.fields["allSpecies"] == "Animal"
        assert root.fields["pets"] == "Pet"

    def test_interfaces_are_indexed(self, pets_index):
        assert dict(pets_index.get("Animal").fields) == {"name": "String"}

    def test_input_types_have_no_fields(self, pets_index):
        assert "VetDetailsInput" in pets_index
        assert dict(pets_index.get("VetDetailsInput").fields) == {}

    def test_enums_scalars_unions_are_not_indexed(self):
        index = parse_schema("""
            scalar DateTime
            enum Color { RED }
            union Thing = A
            type A { id: ID }
        """)
        assert "DateTime" not in index
        assert "Color" not in index
        assert "Thing" not in index
        assert "A" in index

    def test_extension_fields_are_merged(self, pets_index):
        details = pets_index.get("ContactDetails")
        assert set(details.fields) == {"email", "phone", "address"}
        assert details.fields["address"] == "Address"

    def test_extension_before_base_is_merged(self):
        index = parse_schema("""
            extend type User { email: String }
            type User { id: ID! }
        """)
        assert dict(index.get("User").fields) == {"email": "String", "id": "ID"}

    def test_extension_without_base_creates_entry(self):
        index = parse_schema("extend type Query { ping: Boolean }")
        assert index.get("Query").name == "Query"
        assert index.field_type("Query", "ping") == "Boolean"

    def test_non_object_extensions_are_ignored(self):
        index = parse_schema("""
            interface Node { id: ID! }
            extend interface Node { createdAt: String }
            input Filter { q: String }
            extend input Filter { limit: Int }
        """)
        assert dict(index.get("Node").fields) == {"id": "ID"}
        assert dict(index.get("Filter").fields) == {}

    def test_nested_wrappers_are_stripped(self):
        index = parse_schema("type Query { grid: [[Cell!]!] }  type Cell { v: Int }")
        assert index.field_type("Query", "grid") == "Cell"


class TestRootAliases:
    """Tests for the Query/Mutation alias entries."""

    def test_custom_query_root_is_aliased(self, pets_index):
        alias = pets_index.get("Query")
        assert alias.name == "Root"
        assert dict(alias.fields) == dict(pets_index.get("Root").fields)
        assert pets_index.query_type == "Root"

    def test_default_mutation_root_is_not_aliased(self, pets_index):
        assert pets_index.get("Mutation").name == "Mutation"
        assert pets_index.aliases == {"Query": "Root"}

    def test_undeclared_custom_root_gives_empty_alias(self):
        index = parse_schema("schema { query: Missing } type Other { a: Int }")
        alias = index.get("Query")
        assert alias.name == "Missing"
        assert dict(alias.fields) == {}
        assert "Missing" not in index

    def test_schema_without_roots(self):
        index = parse_schema("scalar Date")
        assert len(index) == 0
        assert index.canonical_name("Query") == "Query"

    def test_subscription_root_is_ignored(self):
        index = parse_schema("""
            schema { query: Q subscription: S }
            type Q { a: Int }
            type S { b: Int }
        """)
        assert index.aliases == {"Query": "Q"}
        assert "Subscription" not in index


class TestSchemaParseErrors:
    """Tests for malformed schema input."""

    def test_syntax_error(self):
        with pytest.raises(SchemaParseError, match="Failed to parse schema"):
            parse_schema("type Query {")

    def test_executable_definitions_are_rejected(self):
        with pytest.raises(SchemaParseError, match="executable definition"):
            parse_schema("type Query { a: Int } query { a }")

    def test_source_name_is_kept(self):
        with pytest.raises(SchemaParseError) as exc_info:
            parse_schema("type {", source_name="broken.graphql")
        assert exc_info.value.source_name == "broken.graphql"
        assert exc_info.value.__cause__ is not None


class TestTypeIndex:
    """Tests for TypeIndex lookups and immutability."""

    def test_has_field(self, pets_index):
        assert pets_index.has_field("Cat.name")
        assert not pets_index.has_field("Yorg.dorg")
        assert not pets_index.has_field("Cat")
        assert not pets_index.has_field("Cat.")

    def test_knows_bare_types(self, pets_index):
        assert pets_index.knows("VetDetailsInput")
        assert pets_index.knows("Human.age")
        assert not pets_index.knows("Specialty")

    def test_root_alias_keys_are_not_coordinates(self, pets_index):
        assert not pets_index.knows("Query.animalOwner")
        assert not pets_index.has_field("Query.animalOwner")
        assert not pets_index.knows("Query")
        assert pets_index.knows("Root.animalOwner")
        assert pets_index.knows("Root")

    def test_default_root_names_are_coordinates(self, pets_index):
        assert pets_index.knows("Mutation.addCat")
        assert pets_index.knows("Mutation")

    def test_index_is_read_only(self, pets_index):
        with pytest.raises(TypeError):
            pets_index.types["Extra"] = TypeInfo(name="Extra")
        with pytest.raises(TypeError):
            pets_index.get("Cat").fields["extra"] = "String"

    def test_dataclasses_are_frozen(self):
        index = TypeIndex(types={"A": TypeInfo(name="A", fields={"x": "Int"})})
        with pytest.raises(AttributeError):
            index.query_type = "Other"


class TestLoadSchema:
    """Tests for loading schemas from files and directories."""

    def test_directory_is_merged(self, tmp_path):
        (tmp_path / "a.graphqls").write_text("type Query { user: User }")
        (tmp_path / "b.graphql").write_text("type User { id: ID }")
        (tmp_path / "c.graphql").write_text("extend type User { name: String }")
        (tmp_path / "notes.txt").write_text("not a schema")

        index = load_schema(str(tmp_path))
        assert index.field_type("Query", "user") == "User"
        assert set(index.get("User").fields) == {"id", "name"}

    def test_collect_schema_files_is_sorted(self, tmp_path):
        sub = tmp_path / "nested"
        sub.mkdir()
        (sub / "b.gql").write_text("type B { x: Int }")
        (tmp_path / "a.graphql").write_text("type A { x: Int }")
        files = collect_schema_files(str(tmp_path))
        assert files == sorted([str(tmp_path / "a.graphql"), str(sub / "b.gql")])

    def test_file_error_names_the_file(self, tmp_path):
        bad = tmp_path / "bad.graphql"
        bad.write_text("type Query {")
        with pytest.raises(SchemaParseError, match="bad.graphql"):
            load_schema(str(bad))
