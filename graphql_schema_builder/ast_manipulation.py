# Copyright 2019-present Kensho Technologies, LLC.
from typing import Any, Dict, Iterable, List, Optional, Tuple, TypeVar

from graphql.error import GraphQLSyntaxError
from graphql.language.ast import (
    ArgumentNode,
    DirectiveNode,
    DocumentNode,
    ListTypeNode,
    NamedTypeNode,
    NameNode,
    Node,
    NonNullTypeNode,
    TypeNode,
)
from graphql.language.parser import parse
from graphql.utilities import value_from_ast_untyped

from .exceptions import SchemaParseError


NodeT = TypeVar("NodeT", bound=Node)


def get_ast_name(ast: Node) -> str:
    """Return the name of the given AST node."""
    return ast.name.value  # type: ignore[attr-defined]


def safe_parse_schema(schema_string: str) -> DocumentNode:
    """Return an AST representation of the given schema text, reraising GraphQL library errors."""
    try:
        ast = parse(schema_string)
    except GraphQLSyntaxError as e:
        raise SchemaParseError(
            e.message, source_text=schema_string, source_location=get_error_location(e)
        ) from e

    return ast


def get_error_location(error: GraphQLSyntaxError) -> Optional[Tuple[int, int]]:
    """Return the (line, column) pair of the first location of the error, if there is one."""
    if not error.locations:
        return None
    location = error.locations[0]
    return (location.line, location.column)


def get_ast_with_non_null_stripped(ast: TypeNode) -> TypeNode:
    """Strip a NonNullType layer around the AST if there is one, return the underlying AST."""
    if isinstance(ast, NonNullTypeNode):
        stripped_ast = ast.type
        if isinstance(stripped_ast, NonNullTypeNode):
            raise AssertionError(
                "NonNullType is unexpectedly found to wrap around another NonNullType in AST "
                "{}, which is not allowed.".format(ast)
            )
        return stripped_ast
    else:
        return ast


def get_ast_with_non_null_and_list_stripped(ast: TypeNode) -> NamedTypeNode:
    """Strip any NonNullType or List layers around the AST, return the underlying AST."""
    while isinstance(ast, (NonNullTypeNode, ListTypeNode)):
        ast = ast.type
    return ast  # type: ignore[return-value]


def is_list_type(ast: TypeNode) -> bool:
    """Return True if the type is a list type, possibly wrapped in a NonNullType."""
    return isinstance(get_ast_with_non_null_stripped(ast), ListTypeNode)


def get_directives_named(node: Node, directive_name: str) -> List[DirectiveNode]:
    """Return all applications of the named directive on the node, in declaration order."""
    return [
        directive
        for directive in getattr(node, "directives", None) or ()
        if directive.name.value == directive_name
    ]


def get_directive_arguments(directive: DirectiveNode) -> Dict[str, Any]:
    """Return the directive's arguments as a dict of argument name to plain Python value.

    Variables are not allowed in the schema language, so every argument value is a literal.
    """
    return {
        argument.name.value: value_from_ast_untyped(argument.value)
        for argument in directive.arguments or ()
    }


def get_directive_arg_value(directive: DirectiveNode, arg_name: str, default: Any = None) -> Any:
    """Return the plain Python value of the named directive argument, or the default."""
    return get_directive_arguments(directive).get(arg_name, default)


def make_directive(directive_name: str, arguments: Iterable[ArgumentNode] = ()) -> DirectiveNode:
    """Create a DirectiveNode with the given name and arguments."""
    return DirectiveNode(name=NameNode(value=directive_name), arguments=tuple(arguments))


def get_copy_of_node_with_new_attributes(node: NodeT, **new_attributes: Any) -> NodeT:
    """Return a shallow copy of the node, with some of its attributes replaced.

    The copy is built through the node's constructor, since AST nodes cannot always be modified
    after they are created.
    """
    attributes = {key: getattr(node, key) for key in node.keys}
    attributes.update(new_attributes)
    return type(node)(**attributes)


def get_copy_of_node_with_new_directives(node: NodeT, directives: Iterable[DirectiveNode]) -> NodeT:
    """Return a shallow copy of the node whose directives are replaced by the given ones."""
    return get_copy_of_node_with_new_attributes(node, directives=tuple(directives))


def get_copy_of_node_with_new_fields(node: NodeT, fields: Iterable[Node]) -> NodeT:
    """Return a shallow copy of the node whose fields are replaced by the given ones."""
    return get_copy_of_node_with_new_attributes(node, fields=tuple(fields))
