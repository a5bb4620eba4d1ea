"""Shared fixtures: the Movie/Studio schema used across the test suite."""

from pathlib import Path

import pytest

from gql_ktgen.core.augmenter import SchemaAugmenter
from gql_ktgen.core.builder import OperationModelBuilder
from gql_ktgen.core.parser import OperationLoader, SchemaParser

MOVIES_SDL = """
"A film in the catalog."
type Movie @table {
  id: ID!
  title: String!
  studio: Studio
}

type Studio @table {
  id: ID!
  name: String!
}
"""

EXAMPLES_DIR = Path(__file__).parent.parent / "examples" / "movies"


@pytest.fixture
def movies_sdl():
    return MOVIES_SDL


@pytest.fixture
def movies_schema():
    """The parsed, not yet augmented, Movie/Studio schema."""
    return SchemaParser().parse_string(MOVIES_SDL)


@pytest.fixture
def augmented_schema(movies_schema):
    return SchemaAugmenter().augment(movies_schema)


@pytest.fixture
def operation_loader(augmented_schema):
    return OperationLoader(augmented_schema)


@pytest.fixture
def build_model(augmented_schema, operation_loader):
    """Validate a single-operation document and build its class model."""
    builder = OperationModelBuilder(augmented_schema)

    def build(text: str):
        [operation] = operation_loader.load_string(text)
        return builder.build(operation)

    return build


@pytest.fixture
def examples_dir():
    return EXAMPLES_DIR
