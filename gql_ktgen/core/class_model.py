"""Class model handed to the Kotlin template.

The operation model builder produces these dataclasses; the code generator
renders them without further lookups in the schema.
"""

from dataclasses import dataclass, field


@dataclass
class FunctionParameter:
    """A constructor or function parameter."""
    name: str
    kotlin_type: str
    is_last: bool = False


@dataclass
class FunctionCall:
    """A nested constructor call, e.g. ``Movie_Data(title = title)``."""
    function_name: str
    arguments: list["ForwardingArgument"] = field(default_factory=list)


@dataclass
class ForwardingArgument:
    """A named argument forwarded to a primary constructor.

    Either forwards a flattened parameter by name (``parameter``) or
    rebuilds a nested object (``call``).
    """
    name: str
    parameter: str | None = None
    call: FunctionCall | None = None
    is_last: bool = False


@dataclass
class SecondaryConstructor:
    """A convenience constructor taking flattened parameters."""
    parameters: list[FunctionParameter]
    primary_constructor_arguments: list[ForwardingArgument]


@dataclass
class GeneratedClass:
    """A generated data class and the classes nested in it."""
    name: str
    constructor_parameters: list[FunctionParameter] = field(default_factory=list)
    nested_classes: list["GeneratedClass"] = field(default_factory=list)
    secondary_constructors: list[SecondaryConstructor] = field(default_factory=list)

    @property
    def has_body(self) -> bool:
        return bool(self.nested_classes or self.secondary_constructors)


@dataclass
class GeneratedClassModel:
    """Everything the template needs to render one operation."""
    operation_name: str
    operation_type: str  # 'query' or 'mutation'
    variables: GeneratedClass | None = None
    response: GeneratedClass | None = None
    convenience_parameters: list[FunctionParameter] = field(default_factory=list)
    convenience_arguments: list[ForwardingArgument] = field(default_factory=list)

    @property
    def variables_kotlin_type(self) -> str:
        return self.variables.name if self.variables else "Unit"

    @property
    def response_kotlin_type(self) -> str:
        return self.response.name if self.response else "Unit"


def mark_last(items: list) -> list:
    """Set ``is_last`` on the final item only."""
    for i, item in enumerate(items):
        item.is_last = i + 1 == len(items)
    return items
