"""Schema augmentation.

Adds the CRUD vocabulary the generated SDK relies on to a user-authored
schema:

    type Movie { id: ID!, title: String!, studio: Studio }

gains an input type ``Movie_Data``, mutation fields ``movie_insert``,
``movie_delete`` and ``movie_update``, query fields ``movie`` and ``movies``,
and the referenced type ``Studio`` gains the relation field
``movies_as_studio: [Movie!]!``.
"""

from dataclasses import dataclass, field

import inflect

from .errors import SchemaConsistencyError
from .ir import (
    ArgumentDef,
    FieldDef,
    Schema,
    SynthesizedInputTypeInfo,
    TypeDef,
    TypeKind,
    TypeRef,
)
from .scalars import SYSTEM_TYPE_PREFIX, is_scalar_type

INSERT_RESULT_TYPE = f"{SYSTEM_TYPE_PREFIX}MutationRef.InsertData"
UPDATE_RESULT_TYPE = f"{SYSTEM_TYPE_PREFIX}MutationRef.UpdateData"
DELETE_RESULT_TYPE = f"{SYSTEM_TYPE_PREFIX}MutationRef.DeleteData"

INPUT_TYPE_SUFFIX = "_Data"

_inflect_engine = inflect.engine()


def pluralize(word: str) -> str:
    """Return the plural form of a lowercase type name."""
    return _inflect_engine.plural(word)


@dataclass
class AugmentationReport:
    """What one augmentation pass added, as qualified names."""
    relation_fields: list[str] = field(default_factory=list)
    input_types: list[str] = field(default_factory=list)
    mutation_fields: list[str] = field(default_factory=list)
    query_fields: list[str] = field(default_factory=list)

    def lines(self) -> list[str]:
        """Human-readable lines for progress output."""
        lines = []
        for name in self.relation_fields:
            owner, field_name = name.split(".", 1)
            lines.append(f'Adding query field to type "{owner}": {field_name}')
        lines.extend(f"Adding input type to schema: {name}" for name in self.input_types)
        lines.extend(f"Adding mutation field to schema: {name}" for name in self.mutation_fields)
        lines.extend(f"Adding query field to schema: {name}" for name in self.query_fields)
        return lines


class SchemaAugmenter:
    """Synthesizes input types, CRUD fields and relation fields.

    ``augment`` never touches the schema it is given: it works on a copy and
    returns it, so a failed pass publishes nothing.

    Example:
        augmenter = SchemaAugmenter()
        augmented = augmenter.augment(schema)
        for line in augmenter.report.lines():
            print(line)
    """

    def __init__(self):
        self.report = AugmentationReport()

    def augment(self, schema: Schema) -> Schema:
        """Return an augmented copy of the schema.

        Raises:
            SchemaConsistencyError: If a field references a missing type
        """
        self.report = AugmentationReport()
        schema = schema.copy()

        # Types added below must never feed back into synthesis
        original_type_names = [t.name for t in schema.non_builtin_types()]

        self._add_result_marker_types(schema)
        self._add_relation_fields(schema, original_type_names)
        synthesized = self._add_input_types(schema, original_type_names)
        self._add_mutation_fields(schema, synthesized)
        self._add_query_fields(schema, synthesized)

        return schema

    @staticmethod
    def _add_result_marker_types(schema: Schema):
        for name in (INSERT_RESULT_TYPE, UPDATE_RESULT_TYPE, DELETE_RESULT_TYPE):
            schema.add_type(TypeDef(name=name, kind=TypeKind.SCALAR, builtin=True))

    def _add_relation_fields(self, schema: Schema, type_names: list[str]):
        """Add a reverse-lookup field to every type referenced by an original type.

        Fields are collected across all owners first and appended afterwards,
        so relation fields never produce further relation fields.
        """
        pending: list[tuple[TypeDef, FieldDef]] = []

        for type_name in type_names:
            owner = schema.get_type(type_name)
            if owner is None:
                raise SchemaConsistencyError(type_name, "the original type list")

            for owner_field in owner.fields:
                referenced = schema.get_type(owner_field.type.named_type)
                if referenced is None:
                    raise SchemaConsistencyError(
                        owner_field.type.named_type,
                        f"field {owner.name}.{owner_field.name}",
                    )
                # List-typed relations are not supported
                if owner_field.type.is_list:
                    continue
                if referenced.builtin or referenced.kind is not TypeKind.OBJECT:
                    continue

                relation_name = f"{pluralize(owner.name.lower())}_as_{referenced.name.lower()}"
                relation_type = TypeRef.list_of(TypeRef.named(owner.name, non_null=True), non_null=True)
                pending.append((referenced, FieldDef(name=relation_name, type=relation_type)))

        for referenced, relation_field in pending:
            # A second field pointing at the same type yields the same name
            if referenced.get_field(relation_field.name) is not None:
                continue
            referenced.fields.append(relation_field)
            self.report.relation_fields.append(f"{referenced.name}.{relation_field.name}")

    def _add_input_types(self, schema: Schema, type_names: list[str]) -> list[SynthesizedInputTypeInfo]:
        synthesized = []
        for type_name in type_names:
            original = schema.types[type_name]
            input_type = TypeDef(
                name=original.name + INPUT_TYPE_SUFFIX,
                kind=TypeKind.INPUT,
                fields=[
                    FieldDef(name=f.name, type=f.type, description=f.description)
                    for f in original.fields
                ],
                description=original.description,
            )
            schema.add_type(input_type)
            self.report.input_types.append(input_type.name)
            synthesized.append(SynthesizedInputTypeInfo(original_type=original, input_type=input_type))
        return synthesized

    def _add_mutation_fields(self, schema: Schema, synthesized: list[SynthesizedInputTypeInfo]):
        for info in synthesized:
            base_name = info.original_type.name.lower()
            data_type = info.input_type.name
            mutation_fields = [
                FieldDef(
                    name=f"{base_name}_insert",
                    arguments=[ArgumentDef(name="data", type=TypeRef.named(data_type, non_null=True))],
                    type=TypeRef.named(INSERT_RESULT_TYPE, non_null=True),
                ),
                FieldDef(
                    name=f"{base_name}_delete",
                    arguments=[ArgumentDef(name="id", type=TypeRef.named("String"))],
                    type=TypeRef.named(DELETE_RESULT_TYPE),
                ),
                FieldDef(
                    name=f"{base_name}_update",
                    arguments=[
                        ArgumentDef(name="id", type=TypeRef.named("String")),
                        ArgumentDef(name="data", type=TypeRef.named(data_type)),
                    ],
                    type=TypeRef.named(UPDATE_RESULT_TYPE, non_null=True),
                ),
            ]
            for mutation_field in mutation_fields:
                schema.mutation.fields.append(mutation_field)
                self.report.mutation_fields.append(mutation_field.name)

    def _add_query_fields(self, schema: Schema, synthesized: list[SynthesizedInputTypeInfo]):
        for info in synthesized:
            original = info.original_type
            base_name = original.name.lower()
            query_fields = [
                FieldDef(
                    name=base_name,
                    arguments=self._filter_arguments(schema, original),
                    type=TypeRef.named(original.name, non_null=True),
                ),
                FieldDef(
                    name=pluralize(base_name),
                    arguments=self._filter_arguments(schema, original),
                    type=TypeRef.list_of(TypeRef.named(original.name, non_null=True), non_null=True),
                ),
            ]
            for query_field in query_fields:
                schema.query.fields.append(query_field)
                self.report.query_fields.append(query_field.name)

    @staticmethod
    def _filter_arguments(schema: Schema, type_def: TypeDef) -> list[ArgumentDef]:
        """One optional argument per field, in declaration order.

        Object-typed fields filter by the referenced row's key and ID fields
        by their key, both as String.
        """
        arguments = []
        for type_field in type_def.fields:
            argument_type = type_field.type.nullable()
            if argument_type.named_type == "ID" or not is_scalar_type(argument_type.named_type, schema):
                argument_type = argument_type.with_named_type("String")
            arguments.append(
                ArgumentDef(name=type_field.name, type=argument_type, description=type_field.description)
            )
        return arguments
