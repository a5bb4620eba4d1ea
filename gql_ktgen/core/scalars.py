"""Scalar handling and Kotlin type rendering.

GraphQL built-in scalars map to a fixed set of Kotlin types; custom scalars
are not supported. Types synthesized by the generator itself carry the
``sdk:`` system prefix, which is stripped when rendering.

Example:
    kotlin_type(TypeRef.list_of(TypeRef.named("Movie", non_null=True)))
    # "List<Movie>?"
"""

from .ir import BUILTIN_SCALAR_NAMES, Schema, TypeKind, TypeRef

SYSTEM_TYPE_PREFIX = "sdk:"

KOTLIN_SCALAR_TYPES = {
    "Int": "Int",
    "Float": "Float",
    "String": "String",
    "Boolean": "Boolean",
    "ID": "String",
}


def kotlin_type_name(graphql_type_name: str) -> str:
    """Map a GraphQL named type to its Kotlin type name."""
    if graphql_type_name in KOTLIN_SCALAR_TYPES:
        return KOTLIN_SCALAR_TYPES[graphql_type_name]
    if graphql_type_name.startswith(SYSTEM_TYPE_PREFIX):
        return graphql_type_name[len(SYSTEM_TYPE_PREFIX):]
    return graphql_type_name


def kotlin_type(type_ref: TypeRef) -> str:
    """Render a type reference, keeping nullability at each list level."""
    suffix = "" if type_ref.non_null else "?"
    if type_ref.element is not None:
        return f"List<{kotlin_type(type_ref.element)}>{suffix}"
    return f"{kotlin_type_name(type_ref.name)}{suffix}"


def is_scalar_type(type_name: str, schema: Schema | None = None) -> bool:
    """Check if a named type is a scalar (no class is generated for it).

    Built-in scalars are always scalar; with a schema, any type of kind
    Scalar (such as the mutation result markers) is too.
    """
    if type_name in BUILTIN_SCALAR_NAMES:
        return True
    if schema is None:
        return False
    type_def = schema.get_type(type_name)
    return type_def is not None and type_def.kind is TypeKind.SCALAR
