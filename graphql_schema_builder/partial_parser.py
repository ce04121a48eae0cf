# Copyright 2019-present Kensho Technologies, LLC.
"""Parse single schema language fragments into AST nodes.

Manipulators usually find it easier to describe the definitions they install as schema language
text than to assemble AST nodes by hand. Every function here parses a fragment and checks that it
contains exactly one node of the expected kind.
"""
from typing import List, Type, TypeVar

from graphql.error import GraphQLSyntaxError
from graphql.language.ast import (
    DirectiveNode,
    FieldDefinitionNode,
    InputValueDefinitionNode,
    NamedTypeNode,
    Node,
    ObjectTypeDefinitionNode,
    TypeNode,
)
from graphql.language.parser import parse_type

from .ast_manipulation import get_error_location, safe_parse_schema
from .exceptions import SchemaParseError


NodeT = TypeVar("NodeT", bound=Node)


def _parse_definitions(fragment: str, expected_type: Type[NodeT]) -> List[NodeT]:
    """Parse the fragment as a schema document, ensuring every definition is of the given type."""
    document = safe_parse_schema(fragment)
    definitions = list(document.definitions)
    for definition in definitions:
        if not isinstance(definition, expected_type):
            raise SchemaParseError(
                "Expected the fragment to only contain {} definitions, but found {}.".format(
                    expected_type.__name__, type(definition).__name__
                ),
                source_text=fragment,
            )
    return definitions  # type: ignore[return-value]


def _get_only_node(nodes: List[NodeT], fragment: str, kind: str) -> NodeT:
    """Return the single node of the list, raising SchemaParseError if there isn't exactly one."""
    if len(nodes) != 1:
        raise SchemaParseError(
            "Expected the fragment to contain exactly one {}, but found {}.".format(
                kind, len(nodes)
            ),
            source_text=fragment,
        )
    return nodes[0]


def object_type_definitions(fragment: str) -> List[ObjectTypeDefinitionNode]:
    """Parse one or more object type definitions, in order."""
    return _parse_definitions(fragment, ObjectTypeDefinitionNode)


def object_type_definition(fragment: str) -> ObjectTypeDefinitionNode:
    """Parse a single object type definition, e.g. 'type User { id: ID! }'."""
    return _get_only_node(
        object_type_definitions(fragment), fragment, "object type definition"
    )


def field_definition(fragment: str) -> FieldDefinitionNode:
    """Parse a single field definition, e.g. 'users(first: Int!): [User!]!'."""
    # Field definitions only exist inside of a type, so wrap the fragment in a dummy one.
    wrapper = object_type_definition("type Dummy {{\n{}\n}}".format(fragment))
    return _get_only_node(list(wrapper.fields or ()), fragment, "field definition")


def input_value_definition(fragment: str) -> InputValueDefinitionNode:
    """Parse a single argument definition, e.g. 'first: Int! = 10'."""
    wrapper = field_definition("dummy(\n{}\n): Boolean".format(fragment))
    return _get_only_node(list(wrapper.arguments or ()), fragment, "argument definition")


def directive(fragment: str) -> DirectiveNode:
    """Parse a single directive application, e.g. '@paginate(type: "connection")'."""
    wrapper = object_type_definition("type Dummy {} {{ dummy: Boolean }}".format(fragment))
    return _get_only_node(list(wrapper.directives or ()), fragment, "directive")


def type_reference(fragment: str) -> TypeNode:
    """Parse a type reference, e.g. '[User!]!'."""
    try:
        return parse_type(fragment)
    except GraphQLSyntaxError as e:
        raise SchemaParseError(
            e.message, source_text=fragment, source_location=get_error_location(e)
        ) from e


def named_type(fragment: str) -> NamedTypeNode:
    """Parse a named type reference without list or non-null wrappers, e.g. 'User'."""
    type_node = type_reference(fragment)
    if not isinstance(type_node, NamedTypeNode):
        raise SchemaParseError(
            "Expected a named type, but found {}.".format(type(type_node).__name__),
            source_text=fragment,
        )
    return type_node
