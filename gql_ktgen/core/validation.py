"""graphql-core view of an augmented schema, used to validate operations.

The IR keeps names graphql-core would reject (the ``sdk:`` result markers)
and lets synthesized input types reuse object-typed fields. The view prints
the schema as SDL with those spots made valid:

* system type names are mangled (``sdk:MutationRef.InsertData`` becomes
  ``sdk_MutationRef_InsertData``);
* object-typed input fields and arguments point at the referenced type's
  ``_Data`` input, or ``String`` when it has none;
* input fields referencing another input directly are nullable, since
  graphql-core rejects inputs that reference themselves through non-null
  fields.
"""

import re

from graphql import GraphQLSchema, build_schema

from .ir import BUILTIN_SCALAR_NAMES, Schema, TypeDef, TypeKind, TypeRef

VALIDATION_PRELUDE_SDL = "directive @pick(fields: [String!]) on VARIABLE_DEFINITION"

_INVALID_NAME_CHARS = re.compile(r"[^_0-9A-Za-z]")


def graphql_name(name: str) -> str:
    """Mangle a type name into a valid GraphQL name."""
    return _INVALID_NAME_CHARS.sub("_", name)


def _type_sdl(type_ref: TypeRef) -> str:
    if type_ref.element is not None:
        inner = f"[{_type_sdl(type_ref.element)}]"
    else:
        inner = graphql_name(type_ref.name)
    return f"{inner}!" if type_ref.non_null else inner


def _input_type_ref(schema: Schema, type_ref: TypeRef) -> TypeRef:
    """Replace an output-only leaf type with an input type."""
    leaf = schema.get_type(type_ref.named_type)
    if leaf is None or leaf.kind is not TypeKind.OBJECT:
        return type_ref
    data_type = f"{leaf.name}_Data"
    data_def = schema.get_type(data_type)
    if data_def is not None and data_def.kind is TypeKind.INPUT:
        return type_ref.with_named_type(data_type)
    return type_ref.with_named_type("String")


def _is_input_type(schema: Schema, name: str) -> bool:
    type_def = schema.get_type(name)
    return type_def is not None and type_def.kind is TypeKind.INPUT


def _object_type_sdl(schema: Schema, type_def: TypeDef) -> list[str]:
    lines = [f"type {graphql_name(type_def.name)} {{"]
    for type_field in type_def.fields:
        arguments = ""
        if type_field.arguments:
            arguments = "(" + ", ".join(
                f"{arg.name}: {_type_sdl(_input_type_ref(schema, arg.type))}"
                for arg in type_field.arguments
            ) + ")"
        lines.append(f"  {type_field.name}{arguments}: {_type_sdl(type_field.type)}")
    lines.append("}")
    return lines


def _input_type_sdl(schema: Schema, type_def: TypeDef) -> list[str]:
    lines = [f"input {graphql_name(type_def.name)} {{"]
    for type_field in type_def.fields:
        field_type = _input_type_ref(schema, type_field.type)
        if field_type.element is None and _is_input_type(schema, field_type.name):
            # Non-null references between inputs can form cycles no value satisfies
            field_type = field_type.nullable()
        lines.append(f"  {type_field.name}: {_type_sdl(field_type)}")
    lines.append("}")
    return lines


def build_validation_sdl(schema: Schema) -> str:
    """Print the schema as SDL accepted by graphql-core."""
    lines = [VALIDATION_PRELUDE_SDL, ""]
    for type_def in schema.types.values():
        if type_def.kind is TypeKind.SCALAR:
            if type_def.name not in BUILTIN_SCALAR_NAMES:
                lines.extend([f"scalar {graphql_name(type_def.name)}", ""])
            continue
        # Empty roots (a schema without mutations) are left out
        if not type_def.fields:
            continue
        if type_def.kind is TypeKind.INPUT:
            lines.extend(_input_type_sdl(schema, type_def))
        else:
            lines.extend(_object_type_sdl(schema, type_def))
        lines.append("")
    return "\n".join(lines)


def build_validation_schema(schema: Schema) -> GraphQLSchema:
    """Build the graphql-core schema operations are validated against."""
    return build_schema(build_validation_sdl(schema))
