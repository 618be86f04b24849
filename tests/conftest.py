from pathlib import Path

import pytest

from gql_coords.core.extractor import extract_coordinates
from gql_coords.core.parser import load_schema

TESTS_DATA = Path(__file__).parent / "data"
PETS_SCHEMA = TESTS_DATA / "pets.graphql"


@pytest.fixture(scope="session")
def pets_index():
    """The pets schema, indexed once and shared by all tests."""
    return load_schema(str(PETS_SCHEMA))


@pytest.fixture
def extract_sorted(pets_index):
    """Extract coordinates from a document against the pets schema, sorted."""
    def _extract(document: str) -> list[str]:
        return sorted(extract_coordinates(pets_index, document))
    return _extract
