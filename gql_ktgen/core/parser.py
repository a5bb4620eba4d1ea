"""GraphQL document loading using graphql-core.

Parses schema files (.graphqls, .graphql, .gql) into a Schema IR and parses
operation files into graphql-core operation nodes, validated against the
augmented schema.
"""

import os

from graphql import (
    DirectiveDefinitionNode,
    DocumentNode,
    FieldDefinitionNode,
    ObjectTypeDefinitionNode,
    OperationDefinitionNode,
    Source,
    parse,
    validate,
)
from graphql.validation.validate import validate_sdl

from .errors import DocumentValidationError, UnsupportedDefinitionError
from .ir import ArgumentDef, FieldDef, Schema, TypeDef, TypeKind, TypeRef
from .picker import describe_location
from .validation import build_validation_schema

SCHEMA_FILE_EXTENSIONS = (".graphqls", ".graphql", ".gql")

# Directives user schemas and operations may use
PRELUDE_SDL = """
directive @table(name: String) on OBJECT
directive @pick(fields: [String!]) on VARIABLE_DEFINITION
"""

ROOT_TYPE_NAMES = ("Query", "Mutation")


def collect_graphql_files(path: str) -> list[str]:
    """Collect GraphQL files from a file or directory path, sorted."""
    files = []
    if os.path.isfile(path):
        if path.endswith(SCHEMA_FILE_EXTENSIONS):
            files.append(path)
    else:
        for root, _, filenames in os.walk(path):
            for filename in filenames:
                if filename.endswith(SCHEMA_FILE_EXTENSIONS):
                    files.append(os.path.join(root, filename))
    return sorted(files)


def parse_files(paths: list[str]) -> DocumentNode:
    """Parse several files into one document, keeping file order."""
    definitions = []
    for file_path in paths:
        with open(file_path) as f:
            document = parse(Source(f.read(), file_path))
        definitions.extend(document.definitions)
    return DocumentNode(definitions=tuple(definitions))


class SchemaParser:
    """Parses GraphQL schema files into IR.

    Only object types (and directive definitions, which are ignored) are
    accepted; graphql-core validates the SDL before conversion.
    """

    def __init__(self, schema_path: str | None = None):
        """Initialize a parser with a path to a schema file or directory."""
        self.schema_path = schema_path

    def parse_all(self) -> Schema:
        """Parse all schema files and return the schema IR."""
        files = collect_graphql_files(self.schema_path)
        if not files:
            raise FileNotFoundError(f"No GraphQL schema files found at {self.schema_path}")
        return self.parse_document(parse_files(files))

    def parse_string(self, sdl: str, name: str = "GraphQL request") -> Schema:
        """Parse SDL text directly."""
        return self.parse_document(parse(Source(sdl, name)))

    def parse_document(self, document: DocumentNode) -> Schema:
        """Validate an SDL document and convert it to IR."""
        declared_directives = {
            d.name.value for d in document.definitions if isinstance(d, DirectiveDefinitionNode)
        }
        prelude = tuple(
            d for d in parse(Source(PRELUDE_SDL, "prelude")).definitions
            if d.name.value not in declared_directives
        )
        full_document = DocumentNode(definitions=prelude + tuple(document.definitions))
        errors = validate_sdl(full_document)
        if errors:
            raise DocumentValidationError("Invalid GraphQL schema", errors)

        schema = Schema.with_builtins()
        for definition in document.definitions:
            if isinstance(definition, ObjectTypeDefinitionNode):
                self._process_object_type(schema, definition)
            elif isinstance(definition, DirectiveDefinitionNode):
                continue
            else:
                raise UnsupportedDefinitionError(
                    f"Unsupported GraphQL definition kind {definition.kind!r} "
                    f"at {describe_location(definition)}; only object types are supported"
                )
        return schema

    def _process_object_type(self, schema: Schema, node: ObjectTypeDefinitionNode):
        name = node.name.value
        fields = self._process_fields(node.fields or ())
        if name in ROOT_TYPE_NAMES:
            # Roots stay builtin; user-declared root fields are kept
            schema.types[name].fields.extend(fields)
            return
        schema.add_type(
            TypeDef(
                name=name,
                kind=TypeKind.OBJECT,
                fields=fields,
                description=node.description.value if node.description else None,
            )
        )

    @staticmethod
    def _process_fields(field_nodes: tuple[FieldDefinitionNode, ...]) -> list[FieldDef]:
        """Process field definitions into the FieldDef list."""
        fields = []
        for node in field_nodes:
            arguments = [
                ArgumentDef(
                    name=arg_node.name.value,
                    type=TypeRef.from_node(arg_node.type),
                    description=arg_node.description.value if arg_node.description else None,
                )
                for arg_node in node.arguments or ()
            ]
            fields.append(
                FieldDef(
                    name=node.name.value,
                    type=TypeRef.from_node(node.type),
                    arguments=arguments,
                    description=node.description.value if node.description else None,
                )
            )
        return fields


class OperationLoader:
    """Parses operation documents and validates them against an augmented schema."""

    def __init__(self, schema: Schema):
        self.schema = schema
        self.graphql_schema = build_validation_schema(schema)

    def load(self, operations_path: str) -> list[OperationDefinitionNode]:
        """Load every operation from a file or directory."""
        files = collect_graphql_files(operations_path)
        if not files:
            raise FileNotFoundError(f"No GraphQL operation files found at {operations_path}")
        return self.load_document(parse_files(files))

    def load_string(self, text: str, name: str = "GraphQL request") -> list[OperationDefinitionNode]:
        return self.load_document(parse(Source(text, name)))

    def load_document(self, document: DocumentNode) -> list[OperationDefinitionNode]:
        """Validate a document and return its operations in document order."""
        errors = validate(self.graphql_schema, document)
        if errors:
            raise DocumentValidationError("Invalid GraphQL operations", errors)

        operations = []
        for definition in document.definitions:
            if isinstance(definition, OperationDefinitionNode):
                operations.append(definition)
            else:
                raise UnsupportedDefinitionError(
                    f"Unsupported GraphQL definition kind {definition.kind!r} "
                    f"at {describe_location(definition)}; fragments are not supported"
                )
        return operations
