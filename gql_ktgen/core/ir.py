"""Intermediate Representation (IR) for GraphQL schemas.

This module defines dataclasses that represent the schema constructs the
augmentation engine and the operation model builder work on. The IR is
created from graphql-core AST nodes by the parser and never holds on to them.
"""

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from graphql import ListTypeNode, NamedTypeNode, NonNullTypeNode, TypeNode

BUILTIN_SCALAR_NAMES = ("Int", "Float", "String", "Boolean", "ID")

QUERY_TYPE_NAME = "Query"
MUTATION_TYPE_NAME = "Mutation"


class TypeKind(Enum):
    """Kinds of named types known to the generator."""
    OBJECT = "Object"
    INPUT = "Input"
    SCALAR = "Scalar"


@dataclass
class TypeRef:
    """A (possibly list-wrapped) reference to a named type.

    Exactly one of ``name`` and ``element`` is set at each level.
    """
    name: str | None = None
    element: "TypeRef | None" = None
    non_null: bool = False

    def __post_init__(self):
        if (self.name is None) == (self.element is None):
            raise ValueError("TypeRef needs exactly one of 'name' or 'element'")

    @classmethod
    def named(cls, name: str, non_null: bool = False) -> "TypeRef":
        return cls(name=name, non_null=non_null)

    @classmethod
    def list_of(cls, element: "TypeRef", non_null: bool = False) -> "TypeRef":
        return cls(element=element, non_null=non_null)

    @classmethod
    def from_node(cls, node: TypeNode) -> "TypeRef":
        """Build a TypeRef from a graphql-core type node."""
        if isinstance(node, NonNullTypeNode):
            inner = cls.from_node(node.type)
            inner.non_null = True
            return inner
        if isinstance(node, ListTypeNode):
            return cls(element=cls.from_node(node.type))
        if isinstance(node, NamedTypeNode):
            return cls(name=node.name.value)
        raise TypeError(f"Unexpected type node: {type(node).__name__}")

    @property
    def is_list(self) -> bool:
        return self.element is not None

    @property
    def named_type(self) -> str:
        """Name of the innermost named type."""
        ref = self
        while ref.element is not None:
            ref = ref.element
        return ref.name

    def nullable(self) -> "TypeRef":
        """Return a copy with the outermost level made nullable."""
        result = copy.deepcopy(self)
        result.non_null = False
        return result

    def with_named_type(self, name: str) -> "TypeRef":
        """Return a copy with the innermost named type replaced."""
        if self.element is not None:
            return TypeRef(element=self.element.with_named_type(name), non_null=self.non_null)
        return TypeRef(name=name, non_null=self.non_null)

    def __str__(self) -> str:
        inner = f"[{self.element}]" if self.element is not None else self.name
        return f"{inner}!" if self.non_null else inner


@dataclass
class ArgumentDef:
    """Represents an argument to a field."""
    name: str
    type: TypeRef
    description: str | None = None


@dataclass
class FieldDef:
    """Represents a field of an object or input type."""
    name: str
    type: TypeRef
    arguments: list[ArgumentDef] = field(default_factory=list)
    description: str | None = None


@dataclass
class TypeDef:
    """Represents a named type.

    Builtin types (the standard scalars, the result markers and the root
    operation types) are never subject to CRUD or relation synthesis.
    """
    name: str
    kind: TypeKind
    fields: list[FieldDef] = field(default_factory=list)
    builtin: bool = False
    description: str | None = None

    def get_field(self, name: str) -> FieldDef | None:
        for type_field in self.fields:
            if type_field.name == name:
                return type_field
        return None

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


@dataclass
class Schema:
    """Complete intermediate representation of a GraphQL schema.

    ``types`` keeps declaration order, which is observable in the generated
    output.
    """
    types: dict[str, TypeDef] = field(default_factory=dict)

    @classmethod
    def with_builtins(cls) -> "Schema":
        """Create a schema holding only the standard scalars and empty roots."""
        schema = cls()
        for name in BUILTIN_SCALAR_NAMES:
            schema.add_type(TypeDef(name=name, kind=TypeKind.SCALAR, builtin=True))
        schema.add_type(TypeDef(name=QUERY_TYPE_NAME, kind=TypeKind.OBJECT, builtin=True))
        schema.add_type(TypeDef(name=MUTATION_TYPE_NAME, kind=TypeKind.OBJECT, builtin=True))
        return schema

    def add_type(self, type_def: TypeDef):
        self.types[type_def.name] = type_def

    def get_type(self, name: str) -> TypeDef | None:
        return self.types.get(name)

    @property
    def query(self) -> TypeDef:
        return self.types[QUERY_TYPE_NAME]

    @property
    def mutation(self) -> TypeDef:
        return self.types[MUTATION_TYPE_NAME]

    def non_builtin_types(self) -> list[TypeDef]:
        return [t for t in self.types.values() if not t.builtin]

    def copy(self) -> "Schema":
        """Return an independent deep copy."""
        return copy.deepcopy(self)


# Ordered mapping of picked field name to the projection of that field's own
# type; None means "every field".
Projection = Mapping[str, "Projection | None"]


@dataclass
class VariableDefinition:
    """A variable (or top-level response field) feeding class generation."""
    name: str
    type: TypeRef
    definition: TypeDef | None = None
    projection: Projection | None = None

    @property
    def picked_fields(self) -> list[str] | None:
        if self.projection is None:
            return None
        return list(self.projection)


@dataclass
class SynthesizedInputTypeInfo:
    """Pairs an original type with its synthesized ``<Name>_Data`` input."""
    original_type: TypeDef
    input_type: TypeDef
