"""Tests for field picking."""

import pytest
from graphql import parse

from gql_ktgen.core.errors import UnknownPickedFieldError, UnsupportedSelectionError
from gql_ktgen.core.ir import FieldDef, TypeDef, TypeKind, TypeRef
from gql_ktgen.core.picker import (
    describe_location,
    merge_projections,
    pick_directive_fields,
    pick_fields,
    projection_from_pick,
    projection_from_selection_set,
    root_selections,
)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def movie_type():
    return TypeDef(
        name="Movie",
        kind=TypeKind.OBJECT,
        fields=[
            FieldDef(name="id", type=TypeRef.named("ID", non_null=True)),
            FieldDef(name="title", type=TypeRef.named("String", non_null=True)),
            FieldDef(name="studio", type=TypeRef.named("Studio")),
        ],
    )


def first_variable(text: str):
    return parse(text).definitions[0].variable_definitions[0]


def first_selection_set(text: str):
    return parse(text).definitions[0].selection_set


# =============================================================================
# @pick directive
# =============================================================================


class TestPickDirectiveFields:
    """Tests for reading @pick from variable definitions."""

    def test_list_value(self):
        node = first_variable('query Q($m: Movie_Data @pick(fields: ["title", "id"])) { movies { id } }')
        assert pick_directive_fields(node) == ["title", "id"]

    def test_single_value_is_a_list(self):
        node = first_variable('query Q($m: Movie_Data @pick(fields: "title")) { movies { id } }')
        assert pick_directive_fields(node) == ["title"]

    def test_absent(self):
        node = first_variable("query Q($m: Movie_Data) { movies { id } }")
        assert pick_directive_fields(node) is None

    def test_empty_list(self):
        node = first_variable("query Q($m: Movie_Data @pick(fields: [])) { movies { id } }")
        assert pick_directive_fields(node) == []

    def test_projection_from_pick(self):
        assert projection_from_pick(None) is None
        assert projection_from_pick(["title"]) == {"title": None}


# =============================================================================
# Selection sets
# =============================================================================


class TestProjectionFromSelectionSet:
    """Tests for turning response selections into projections."""

    def test_nested_fields(self):
        selection_set = first_selection_set("query Q { movie { id studio { name } } }")
        assert projection_from_selection_set(selection_set) == {
            "movie": {"id": None, "studio": {"name": None}},
        }

    def test_typename_ignored(self):
        selection_set = first_selection_set("query Q { movie { __typename title } }")
        assert projection_from_selection_set(selection_set) == {"movie": {"title": None}}

    def test_none(self):
        assert projection_from_selection_set(None) is None

    def test_fragment_spread_rejected(self):
        selection_set = first_selection_set(
            "query Q { movie { ...MovieParts } } fragment MovieParts on Movie { id }"
        )
        with pytest.raises(UnsupportedSelectionError, match="fragment spread") as exc_info:
            projection_from_selection_set(selection_set)
        assert exc_info.value.location == "GraphQL request:1:19"

    def test_inline_fragment_rejected(self):
        selection_set = first_selection_set("query Q { movie { ... on Movie { id } } }")
        with pytest.raises(UnsupportedSelectionError, match="inline fragment"):
            projection_from_selection_set(selection_set)

    def test_repeated_field_merged(self):
        selection_set = first_selection_set("query Q { movie { id studio { id } } movie { title studio { name } } }")
        assert projection_from_selection_set(selection_set) == {
            "movie": {"id": None, "studio": {"id": None, "name": None}, "title": None},
        }

    def test_nested_alias_rejected(self):
        selection_set = first_selection_set("query Q { movie { name: title } }")
        with pytest.raises(UnsupportedSelectionError, match="alias 'name' of field 'title'"):
            projection_from_selection_set(selection_set)

    def test_alias_matching_field_name(self):
        selection_set = first_selection_set("query Q { movie { title: title } }")
        assert projection_from_selection_set(selection_set) == {"movie": {"title": None}}


class TestRootSelections:
    """Tests for top-level selections."""

    def test_aliases_keyed_by_response_key(self):
        selection_set = first_selection_set("query Q { a: movie { id } b: movie { title } }")
        assert root_selections(selection_set) == {
            "a": ("movie", {"id": None}),
            "b": ("movie", {"title": None}),
        }

    def test_repeated_key_merged(self):
        selection_set = first_selection_set("query Q { movies { id } movies { title } }")
        assert root_selections(selection_set) == {"movies": ("movies", {"id": None, "title": None})}


class TestMergeProjections:
    """Tests for merge_projections."""

    def test_union_keeps_first_order(self):
        assert list(merge_projections({"title": None}, {"id": None, "title": None})) == ["title", "id"]

    def test_nested_union(self):
        merged = merge_projections({"studio": {"id": None}}, {"studio": {"name": None}})
        assert merged == {"studio": {"id": None, "name": None}}

    def test_none_selects_everything(self):
        assert merge_projections(None, {"id": None}) is None
        assert merge_projections({"id": None}, None) is None

    def test_inputs_untouched(self):
        first = {"id": None}
        merge_projections(first, {"title": None})
        assert first == {"id": None}


class TestDescribeLocation:
    """Tests for describe_location."""

    def test_line_and_column(self):
        document = parse("query Q {\n  movie { id }\n}")
        field_node = document.definitions[0].selection_set.selections[0]
        assert describe_location(field_node) == "GraphQL request:2:3"

    def test_no_location(self):
        document = parse("query Q { movie { id } }", no_location=True)
        assert describe_location(document.definitions[0]) is None


# =============================================================================
# Picking fields
# =============================================================================


class TestPickFields:
    """Tests for pick_fields."""

    def test_all_fields_without_projection(self, movie_type):
        fields = pick_fields(movie_type, None, "test")
        assert [f.name for f in fields] == ["id", "title", "studio"]
        assert fields is not movie_type.fields

    def test_keeps_declaration_order(self, movie_type):
        fields = pick_fields(movie_type, {"studio": None, "id": None}, "test")
        assert [f.name for f in fields] == ["id", "studio"]

    def test_unknown_field(self, movie_type):
        with pytest.raises(UnknownPickedFieldError) as exc_info:
            pick_fields(movie_type, {"rating": None}, "variable '$m'")
        assert exc_info.value.type_name == "Movie"
        assert exc_info.value.field_name == "rating"
        assert "variable '$m'" in str(exc_info.value)
