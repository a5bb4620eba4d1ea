"""Field picking for variables and response selections.

Decides which fields of a referenced type take part in class generation:
either the fields named by a ``@pick(fields: [...])`` directive on a
variable definition, or the sub-fields selected by a response field.
"""

from graphql import (
    FieldNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    ListValueNode,
    Node,
    SelectionSetNode,
    StringValueNode,
    VariableDefinitionNode,
    get_location,
)

from .errors import UnknownPickedFieldError, UnsupportedSelectionError
from .ir import FieldDef, Projection, TypeDef

PICK_DIRECTIVE_NAME = "pick"
PICK_FIELDS_ARGUMENT = "fields"


def describe_location(node: Node) -> str | None:
    """Return 'source:line:column' for a node parsed with locations."""
    if node.loc is None:
        return None
    source = node.loc.source
    location = get_location(source, node.loc.start)
    return f"{source.name}:{location.line}:{location.column}"


def pick_directive_fields(node: VariableDefinitionNode) -> list[str] | None:
    """Return the field names of a @pick directive, or None if absent."""
    for directive in node.directives or ():
        if directive.name.value != PICK_DIRECTIVE_NAME:
            continue
        names: list[str] = []
        for argument in directive.arguments or ():
            if argument.name.value != PICK_FIELDS_ARGUMENT:
                continue
            value = argument.value
            # Input coercion lets a single value stand in for a list
            values = value.values if isinstance(value, ListValueNode) else (value,)
            for item in values:
                if isinstance(item, StringValueNode):
                    names.append(item.value)
        return names
    return None


def projection_from_pick(names: list[str] | None) -> Projection | None:
    """Build a flat projection from picked names."""
    if names is None:
        return None
    return {name: None for name in names}


def merge_projections(first: Projection | None, second: Projection | None) -> Projection | None:
    """Union of two projections, keeping the keys of ``first`` in front.

    None selects every field, so it absorbs the other side.
    """
    if first is None or second is None:
        return None
    merged = dict(first)
    for name, sub_projection in second.items():
        if name in merged:
            merged[name] = merge_projections(merged[name], sub_projection)
        else:
            merged[name] = sub_projection
    return merged


def selected_fields(selection_set: SelectionSetNode, allow_aliases: bool = False) -> list[tuple[str, FieldNode]]:
    """Plain fields of a selection set, paired with their response keys.

    Fragments raise UnsupportedSelectionError, and so do aliases unless
    ``allow_aliases`` is set.
    """
    fields = []
    for selection in selection_set.selections:
        if isinstance(selection, FieldNode):
            name = selection.name.value
            if name.startswith("__"):
                continue
            response_key = selection.alias.value if selection.alias else name
            if response_key != name and not allow_aliases:
                raise UnsupportedSelectionError(
                    f"alias '{response_key}' of field '{name}'", describe_location(selection)
                )
            fields.append((response_key, selection))
        elif isinstance(selection, FragmentSpreadNode):
            raise UnsupportedSelectionError(
                f"fragment spread '...{selection.name.value}'", describe_location(selection)
            )
        elif isinstance(selection, InlineFragmentNode):
            raise UnsupportedSelectionError("inline fragment", describe_location(selection))
        else:
            raise UnsupportedSelectionError(type(selection).__name__, describe_location(selection))
    return fields


def projection_from_selection_set(selection_set: SelectionSetNode | None) -> Projection | None:
    """Build a recursive projection from a response selection set.

    A field selected more than once gets the union of its sub-selections.
    """
    if selection_set is None:
        return None

    projection: dict[str, Projection | None] = {}
    for name, node in selected_fields(selection_set):
        sub_projection = projection_from_selection_set(node.selection_set)
        if name in projection:
            sub_projection = merge_projections(projection[name], sub_projection)
        projection[name] = sub_projection
    return projection


def root_selections(selection_set: SelectionSetNode) -> dict[str, tuple[str, Projection | None]]:
    """Top-level selections of an operation, keyed by response key.

    Each value is the selected root field name and its merged projection.
    Aliases are allowed here only: every response key becomes its own
    property of the response class, while nested classes are keyed by
    field name.
    """
    selections: dict[str, tuple[str, Projection | None]] = {}
    for response_key, node in selected_fields(selection_set, allow_aliases=True):
        sub_projection = projection_from_selection_set(node.selection_set)
        if response_key in selections:
            sub_projection = merge_projections(selections[response_key][1], sub_projection)
        selections[response_key] = (node.name.value, sub_projection)
    return selections


def pick_fields(type_def: TypeDef, projection: Projection | None, owner: str) -> list[FieldDef]:
    """Restrict a type's fields to a projection, keeping declaration order.

    Args:
        type_def: The type whose fields are picked
        projection: Picked field names (keys); None keeps every field
        owner: Description of who asked, used in error messages

    Raises:
        UnknownPickedFieldError: If a picked name isn't a field of the type
    """
    if projection is None:
        return list(type_def.fields)

    declared = set(type_def.field_names)
    for name in projection:
        if name not in declared:
            raise UnknownPickedFieldError(type_def.name, name, owner)

    return [f for f in type_def.fields if f.name in projection]
