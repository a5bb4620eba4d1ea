"""Errors raised while augmenting schemas and building operation models."""

from typing import Any


class CodegenError(Exception):
    """Base class for errors raised by the generator core."""


class SchemaConsistencyError(CodegenError):
    """A referenced type (or a field of it) is missing from the schema."""

    def __init__(self, type_name: str, owner: str, field_name: str | None = None):
        self.type_name = type_name
        self.owner = owner
        self.field_name = field_name
        if field_name:
            message = f"Type {type_name!r} has no field {field_name!r} referenced by {owner}"
        else:
            message = f"Schema is missing type {type_name!r} referenced by {owner}"
        super().__init__(message)


class UnsupportedSelectionError(CodegenError):
    """A selection set entry is a fragment, or a nested field is aliased."""

    def __init__(self, kind: str, location: str | None = None):
        self.kind = kind
        self.location = location
        message = f"Unsupported selection {kind}; only plain fields are supported"
        if location:
            message = f"{message} (at {location})"
        super().__init__(message)


class UnsupportedDefinitionError(CodegenError):
    """A schema document contains a definition kind the generator can't handle."""


class UnsupportedOperationError(CodegenError):
    """An operation is anonymous or is neither a query nor a mutation."""


class UnknownPickedFieldError(CodegenError):
    """A @pick directive names a field the variable's type doesn't declare."""

    def __init__(self, type_name: str, field_name: str, owner: str):
        self.type_name = type_name
        self.field_name = field_name
        self.owner = owner
        super().__init__(
            f"Field {field_name!r} picked by {owner} is not declared by type {type_name!r}"
        )


class TypeCycleError(CodegenError):
    """Flattening re-entered a type that is still being expanded."""

    def __init__(self, path: list[str]):
        self.path = path
        super().__init__(f"Cyclic type reference while flattening: {' -> '.join(path)}")


class DocumentValidationError(Exception):
    """Carries graphql-core validation errors for a schema or operation document.

    Not a CodegenError: the errors come from graphql-core unchanged.
    """

    def __init__(self, message: str, errors: list[Any]):
        self.message = message
        self.errors = errors
        details = "\n".join(f"  {error}" for error in errors)
        super().__init__(f"{message}\n{details}" if details else message)
