"""Tests for the schema IR."""

import pytest
from graphql import parse_type

from gql_ktgen.core.ir import (
    BUILTIN_SCALAR_NAMES,
    FieldDef,
    Schema,
    TypeDef,
    TypeKind,
    TypeRef,
    VariableDefinition,
)


class TestTypeRef:
    """Tests for TypeRef."""

    def test_requires_name_or_element(self):
        with pytest.raises(ValueError):
            TypeRef()

    def test_rejects_name_and_element(self):
        with pytest.raises(ValueError):
            TypeRef(name="Movie", element=TypeRef.named("Movie"))

    def test_from_node_list(self):
        type_ref = TypeRef.from_node(parse_type("[Movie!]!"))
        assert type_ref.is_list
        assert type_ref.non_null
        assert type_ref.element.non_null
        assert type_ref.named_type == "Movie"
        assert str(type_ref) == "[Movie!]!"

    def test_from_node_named(self):
        type_ref = TypeRef.from_node(parse_type("String"))
        assert not type_ref.is_list
        assert not type_ref.non_null
        assert type_ref.named_type == "String"

    def test_nested_lists(self):
        type_ref = TypeRef.from_node(parse_type("[[Int]!]"))
        assert str(type_ref) == "[[Int]!]"
        assert type_ref.named_type == "Int"

    def test_nullable_drops_outer_level_only(self):
        original = TypeRef.from_node(parse_type("[Movie!]!"))
        result = original.nullable()
        assert str(result) == "[Movie!]"
        # The original is untouched
        assert str(original) == "[Movie!]!"

    def test_with_named_type(self):
        type_ref = TypeRef.from_node(parse_type("[Studio!]"))
        assert str(type_ref.with_named_type("String")) == "[String!]"


class TestTypeDef:
    """Tests for TypeDef."""

    def test_get_field(self):
        type_def = TypeDef(
            name="Movie",
            kind=TypeKind.OBJECT,
            fields=[FieldDef(name="id", type=TypeRef.named("ID", non_null=True))],
        )
        assert type_def.get_field("id").name == "id"
        assert type_def.get_field("title") is None
        assert type_def.field_names == ["id"]


class TestSchema:
    """Tests for Schema."""

    def test_with_builtins(self):
        schema = Schema.with_builtins()
        for name in BUILTIN_SCALAR_NAMES:
            assert schema.get_type(name).kind is TypeKind.SCALAR
            assert schema.get_type(name).builtin
        assert schema.query.builtin
        assert schema.query.fields == []
        assert schema.mutation.builtin
        assert schema.non_builtin_types() == []

    def test_keeps_declaration_order(self):
        schema = Schema.with_builtins()
        schema.add_type(TypeDef(name="Studio", kind=TypeKind.OBJECT))
        schema.add_type(TypeDef(name="Movie", kind=TypeKind.OBJECT))
        assert [t.name for t in schema.non_builtin_types()] == ["Studio", "Movie"]

    def test_copy_is_independent(self):
        schema = Schema.with_builtins()
        schema.add_type(TypeDef(name="Movie", kind=TypeKind.OBJECT))
        copied = schema.copy()
        copied.get_type("Movie").fields.append(FieldDef(name="id", type=TypeRef.named("ID")))
        copied.query.fields.append(FieldDef(name="movie", type=TypeRef.named("Movie")))

        assert schema.get_type("Movie").fields == []
        assert schema.query.fields == []


class TestVariableDefinition:
    """Tests for VariableDefinition."""

    def test_picked_fields(self):
        definition = VariableDefinition(
            name="m",
            type=TypeRef.named("Movie_Data"),
            projection={"title": None, "id": None},
        )
        assert definition.picked_fields == ["title", "id"]

    def test_no_projection(self):
        definition = VariableDefinition(name="m", type=TypeRef.named("Movie_Data"))
        assert definition.picked_fields is None
