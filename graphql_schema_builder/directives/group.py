# Copyright 2019-present Kensho Technologies, LLC.
"""@group: apply middleware to every field of a type or type extension.

    type Query @group(middleware: ["auth"]) {
      me: User
    }

becomes

    type Query @group(middleware: ["auth"]) {
      me: User @middleware(checks: ["auth"])
    }

Since node manipulators run before type extensions are merged, a group on an extension only
applies to the fields that the extension contributes. The @group directive itself stays on the
extension, and is not carried over to the type when the extension is merged.
"""
from typing import List, Sequence

from graphql.language.ast import (
    ArgumentNode,
    DirectiveNode,
    FieldDefinitionNode,
    ListValueNode,
    NameNode,
    Node,
    StringValueNode,
    TypeExtensionNode,
)

from ..ast_manipulation import (
    get_ast_name,
    get_copy_of_node_with_new_directives,
    get_copy_of_node_with_new_fields,
    get_directive_arg_value,
    get_directives_named,
    make_directive,
)
from ..directive_registry import NodeManipulator
from ..document import DocumentAST
from ..exceptions import DirectiveManipulationError


GROUP_DIRECTIVE_NAME = "group"
MIDDLEWARE_DIRECTIVE_NAME = "middleware"


def _get_middleware_names(directive: DirectiveNode, node: Node) -> List[str]:
    """Return the middleware names given to @group, validating them."""
    middleware = get_directive_arg_value(directive, "middleware", [])
    if isinstance(middleware, str):
        middleware = [middleware]
    if not isinstance(middleware, list) or not all(
        isinstance(name, str) and name for name in middleware
    ):
        raise DirectiveManipulationError(
            "The middleware argument of @{} on type {} must be a list of non-empty strings, "
            "but got: {}".format(GROUP_DIRECTIVE_NAME, get_ast_name(node), middleware)
        )
    return middleware


def _make_middleware_directive(checks: Sequence[str]) -> DirectiveNode:
    """Return a @middleware directive application with the given checks."""
    return make_directive(
        MIDDLEWARE_DIRECTIVE_NAME,
        [
            ArgumentNode(
                name=NameNode(value="checks"),
                value=ListValueNode(
                    values=tuple(StringValueNode(value=check) for check in checks)
                ),
            )
        ],
    )


def _add_middleware_to_field(
    field: FieldDefinitionNode, middleware_names: List[str]
) -> FieldDefinitionNode:
    """Return a copy of the field whose @middleware checks start with the given names."""
    existing_checks: List[str] = []
    other_directives = []
    for directive in field.directives or ():
        if directive.name.value == MIDDLEWARE_DIRECTIVE_NAME:
            existing_checks.extend(get_directive_arg_value(directive, "checks", []))
        else:
            other_directives.append(directive)

    checks = middleware_names + [name for name in existing_checks if name not in middleware_names]
    return get_copy_of_node_with_new_directives(
        field, other_directives + [_make_middleware_directive(checks)]
    )


def manipulate_group(
    directive: DirectiveNode, node: Node, document: DocumentAST, original_document: DocumentAST
) -> DocumentAST:
    """Add the group's middleware to all fields of the annotated type or type extension."""
    if not hasattr(node, "fields"):
        raise DirectiveManipulationError(
            "@{} can only be applied to types with fields, but was applied to {}.".format(
                GROUP_DIRECTIVE_NAME, get_ast_name(node)
            )
        )

    middleware_names = _get_middleware_names(directive, node)
    if not middleware_names:
        return document

    if isinstance(node, TypeExtensionNode):
        current_extension = document.current_type_extension(node)
        if current_extension is None:
            # The extension was removed by an earlier manipulator.
            return document

        new_extension_fields = [
            _add_middleware_to_field(field, middleware_names)
            for field in getattr(current_extension, "fields", None) or ()
        ]
        return document.replace_type_extension(
            current_extension,
            get_copy_of_node_with_new_fields(current_extension, new_extension_fields),
        )

    current_definition = document.definition(get_ast_name(node))
    if current_definition is None or not hasattr(current_definition, "fields"):
        # The type was removed or replaced by an earlier manipulator.
        return document

    new_fields = [
        _add_middleware_to_field(field, middleware_names)
        for field in current_definition.fields or ()  # type: ignore[attr-defined]
    ]
    new_definition = get_copy_of_node_with_new_fields(current_definition, new_fields)
    return document.set_definition(new_definition)


def get_group_middleware(field: FieldDefinitionNode) -> List[str]:
    """Return the middleware checks of the field, in order."""
    return [
        check
        for directive in get_directives_named(field, MIDDLEWARE_DIRECTIVE_NAME)
        for check in get_directive_arg_value(directive, "checks", [])
    ]


GROUP_PROVIDERS = (NodeManipulator(manipulate_group),)
