"""Operation model builder.

Turns one validated operation plus the augmented schema into the class model
rendered by the code generator:

    query GetMovie($id: String) { movie(id: $id) { id title } }

becomes a ``GetMovieVariables(id: String?)`` class and a
``GetMovieData(movie: Movie)`` class with a nested ``Movie(id, title)``.
"""

from collections import deque
from dataclasses import dataclass

from graphql import OperationDefinitionNode, OperationType

from .class_model import (
    ForwardingArgument,
    FunctionCall,
    FunctionParameter,
    GeneratedClass,
    GeneratedClassModel,
    SecondaryConstructor,
    mark_last,
)
from .errors import (
    SchemaConsistencyError,
    TypeCycleError,
    UnsupportedOperationError,
)
from .ir import FieldDef, Projection, Schema, TypeDef, TypeRef, VariableDefinition
from .picker import (
    describe_location,
    merge_projections,
    pick_directive_fields,
    pick_fields,
    projection_from_pick,
    root_selections,
)
from .scalars import is_scalar_type, kotlin_type

VARIABLES_CLASS_SUFFIX = "Variables"
RESPONSE_CLASS_SUFFIX = "Data"


@dataclass
class _NestedType:
    """A type reached from a top-level class, with every field any path selects."""
    type_def: TypeDef
    projection: Projection | None

    def fields(self) -> list[FieldDef]:
        return pick_fields(self.type_def, self.projection, f"type {self.type_def.name}")


class OperationModelBuilder:
    """Builds a GeneratedClassModel for operations against one schema.

    Example:
        builder = OperationModelBuilder(augmented_schema)
        model = builder.build(operation_node)
    """

    def __init__(self, schema: Schema):
        self.schema = schema

    def build(self, operation: OperationDefinitionNode) -> GeneratedClassModel:
        """Build the variables and response classes for an operation."""
        if operation.name is None:
            raise UnsupportedOperationError(
                f"Anonymous operations are not supported (at {describe_location(operation)})"
            )
        if operation.operation not in (OperationType.QUERY, OperationType.MUTATION):
            raise UnsupportedOperationError(
                f"Unsupported operation type {operation.operation.value!r} "
                f"for operation {operation.name.value!r}"
            )

        operation_name = operation.name.value

        variable_definitions = self.variable_definitions(operation)
        variables = self._class_for_variable_definitions(
            operation_name + VARIABLES_CLASS_SUFFIX,
            variable_definitions,
            include_convenience_constructors=True,
        )

        response_definitions = self.response_definitions(operation)
        response = self._class_for_variable_definitions(
            operation_name + RESPONSE_CLASS_SUFFIX,
            response_definitions,
            include_convenience_constructors=False,
        )

        model = GeneratedClassModel(
            operation_name=operation_name,
            operation_type=operation.operation.value,
            variables=variables,
            response=response,
        )

        if variables is not None:
            # Nested classes are reached through the operation's variables class
            prefix = f"{operation_name}.{variables.name}."
            flattener = _Flattener(self, prefix, self.nested_types(variable_definitions))
            parameters, arguments = flattener.flatten(variable_definitions)
            model.convenience_parameters = parameters
            model.convenience_arguments = arguments

        return model

    def variable_definitions(self, operation: OperationDefinitionNode) -> list[VariableDefinition]:
        """One definition per declared operation variable, honoring @pick."""
        definitions = []
        for node in operation.variable_definitions or ():
            name = node.variable.name.value
            type_ref = TypeRef.from_node(node.type)
            definitions.append(
                VariableDefinition(
                    name=name,
                    type=type_ref,
                    definition=self.lookup(type_ref.named_type, f"variable '${name}'"),
                    projection=projection_from_pick(pick_directive_fields(node)),
                )
            )
        return definitions

    def response_definitions(self, operation: OperationDefinitionNode) -> list[VariableDefinition]:
        """One definition per top-level response key, projected by its sub-selection."""
        if operation.operation is OperationType.MUTATION:
            root = self.schema.mutation
        else:
            root = self.schema.query

        definitions = []
        for response_key, (field_name, sub_projection) in root_selections(operation.selection_set).items():
            owner = f"selection '{response_key}' of operation '{operation.name.value}'"
            field_def = root.get_field(field_name)
            if field_def is None:
                raise SchemaConsistencyError(root.name, owner, field_name=field_name)
            definitions.append(
                VariableDefinition(
                    name=response_key,
                    type=field_def.type,
                    definition=self.lookup(field_def.type.named_type, owner),
                    projection=sub_projection,
                )
            )
        return definitions

    def lookup(self, type_name: str, owner: str) -> TypeDef:
        """Look up a type, failing with SchemaConsistencyError if it's missing."""
        type_def = self.schema.get_type(type_name)
        if type_def is None:
            raise SchemaConsistencyError(type_name, owner)
        return type_def

    def is_scalar(self, type_ref: TypeRef) -> bool:
        return is_scalar_type(type_ref.named_type, self.schema)

    def _class_for_variable_definitions(
        self,
        class_name: str,
        definitions: list[VariableDefinition],
        include_convenience_constructors: bool,
    ) -> GeneratedClass | None:
        if not definitions:
            return None

        nested_types = self.nested_types(definitions)

        secondary_constructors = []
        if include_convenience_constructors:
            secondary_constructors = self._secondary_constructors(definitions, nested_types)

        return GeneratedClass(
            name=class_name,
            constructor_parameters=mark_last([
                FunctionParameter(name=d.name, kotlin_type=kotlin_type(d.type))
                for d in definitions
            ]),
            nested_classes=[
                GeneratedClass(
                    name=nested.type_def.name,
                    constructor_parameters=mark_last([
                        FunctionParameter(name=f.name, kotlin_type=kotlin_type(f.type))
                        for f in nested.fields()
                    ]),
                )
                for nested in nested_types.values()
            ],
            secondary_constructors=secondary_constructors,
        )

    def nested_types(self, definitions: list[VariableDefinition]) -> dict[str, _NestedType]:
        """Breadth-first discovery of the types nested in a top-level class.

        A type reached through several paths gets one class holding the union
        of the fields those paths select. A type whose projection grows is
        visited again, so the union reaches its own nested types too.

        Returns:
            Nested types by name, in discovery order
        """
        discovered: dict[str, _NestedType] = {}
        queue: deque[_NestedType] = deque()
        queued: set[str] = set()

        def reach(type_def: TypeDef, projection: Projection | None, owner: str):
            # Fails fast on picked names the type doesn't declare
            pick_fields(type_def, projection, owner)
            nested = discovered.get(type_def.name)
            if nested is None:
                nested = _NestedType(type_def=type_def, projection=projection)
                discovered[type_def.name] = nested
            else:
                merged = merge_projections(nested.projection, projection)
                if merged == nested.projection:
                    return
                nested.projection = merged
            if type_def.name not in queued:
                queued.add(type_def.name)
                queue.append(nested)

        for definition in definitions:
            if self.is_scalar(definition.type):
                continue
            owner = f"'{definition.name}'"
            type_def = definition.definition or self.lookup(definition.type.named_type, owner)
            reach(type_def, definition.projection, owner)

        while queue:
            nested = queue.popleft()
            queued.discard(nested.type_def.name)
            for type_field in nested.fields():
                if self.is_scalar(type_field.type):
                    continue
                owner = f"field {nested.type_def.name}.{type_field.name}"
                field_type = self.lookup(type_field.type.named_type, owner)
                sub_projection = None
                if nested.projection is not None:
                    sub_projection = nested.projection.get(type_field.name)
                reach(field_type, sub_projection, owner)

        return discovered

    def _secondary_constructors(
        self, definitions: list[VariableDefinition], nested_types: dict[str, _NestedType]
    ) -> list[SecondaryConstructor]:
        """A flattened convenience constructor, if any variable can be flattened."""
        if not any(self.is_expandable(d.type) for d in definitions):
            return []
        parameters, arguments = _Flattener(self, "", nested_types).flatten(definitions)
        return [SecondaryConstructor(parameters=parameters, primary_constructor_arguments=arguments)]

    def is_expandable(self, type_ref: TypeRef) -> bool:
        """Non-list, non-scalar values are replaced by their fields when flattening."""
        return not type_ref.is_list and not self.is_scalar(type_ref)


class _Flattener:
    """Depth-first flattening of variables into leaf parameters.

    Builds the flattened parameter list and the forwarding arguments that
    rebuild the nested objects in the same pass, so both always agree.
    Each nested object is rebuilt with the fields of its nested class.
    """

    def __init__(
        self,
        builder: OperationModelBuilder,
        function_name_prefix: str,
        nested_types: dict[str, _NestedType],
    ):
        self.builder = builder
        self.function_name_prefix = function_name_prefix
        self.nested_types = nested_types
        self._used_names: set[str] = set()
        self._expanding: list[str] = []

    def flatten(
        self, definitions: list[VariableDefinition]
    ) -> tuple[list[FunctionParameter], list[ForwardingArgument]]:
        parameters: list[FunctionParameter] = []
        arguments: list[ForwardingArgument] = []

        for definition in definitions:
            if not self.builder.is_expandable(definition.type):
                parameter_name = self._unique_name(definition.name, None)
                parameters.append(FunctionParameter(name=parameter_name, kotlin_type=kotlin_type(definition.type)))
                arguments.append(ForwardingArgument(name=definition.name, parameter=parameter_name))
                continue

            type_name = definition.type.named_type
            child_parameters, child_arguments = self._expand(type_name)
            parameters.extend(child_parameters)
            arguments.append(
                ForwardingArgument(
                    name=definition.name,
                    call=FunctionCall(
                        function_name=self.function_name_prefix + type_name,
                        arguments=mark_last(child_arguments),
                    ),
                )
            )

        return mark_last(parameters), mark_last(arguments)

    def _expand(self, type_name: str) -> tuple[list[FunctionParameter], list[ForwardingArgument]]:
        if type_name in self._expanding:
            raise TypeCycleError(self._expanding + [type_name])
        self._expanding.append(type_name)

        parameters: list[FunctionParameter] = []
        arguments: list[ForwardingArgument] = []
        for type_field in self.nested_types[type_name].fields():
            if not self.builder.is_expandable(type_field.type):
                parameter_name = self._unique_name(type_field.name, type_name)
                parameters.append(FunctionParameter(name=parameter_name, kotlin_type=kotlin_type(type_field.type)))
                arguments.append(ForwardingArgument(name=type_field.name, parameter=parameter_name))
                continue

            field_type_name = type_field.type.named_type
            child_parameters, child_arguments = self._expand(field_type_name)
            parameters.extend(child_parameters)
            arguments.append(
                ForwardingArgument(
                    name=type_field.name,
                    call=FunctionCall(
                        function_name=self.function_name_prefix + field_type_name,
                        arguments=mark_last(child_arguments),
                    ),
                )
            )

        self._expanding.pop()
        return parameters, arguments

    def _unique_name(self, name: str, owner_type_name: str | None) -> str:
        """Keep a flattened parameter name unique, suffixing repeats with the owner."""
        candidate = name
        if candidate in self._used_names and owner_type_name:
            candidate = f"{name}_{self._owner_suffix(owner_type_name)}"
        counter = 2
        base = candidate
        while candidate in self._used_names:
            candidate = f"{base}{counter}"
            counter += 1
        self._used_names.add(candidate)
        return candidate

    @staticmethod
    def _owner_suffix(type_name: str) -> str:
        name = type_name
        if name.endswith("_Data"):
            name = name[:-len("_Data")]
        return name[0].lower() + name[1:] if name else "arg"
