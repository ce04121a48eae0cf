# Copyright 2019-present Kensho Technologies, LLC.
"""@paginate: turn a list field into a paginated field.

With type "paginator" (offset-based, the default), the field
    users: [User!]! @paginate
becomes
    users(count: Int!, page: Int): UserPaginator! @paginate
and the UserPaginator type is installed, holding the items and a PaginatorInfo.

With type "connection" (cursor-based), the field
    users: [User!]! @paginate(type: "connection")
becomes
    users(first: Int!, after: String): UserConnection! @paginate(type: "connection")
and the UserConnection and UserEdge types are installed, with a PageInfo on the connection.

If a defaultCount argument is given, the count argument ("count" or "first") becomes optional
and defaults to it.
"""
from textwrap import dedent
from typing import List, Optional

from graphql.language.ast import (
    DirectiveNode,
    FieldDefinitionNode,
    InputValueDefinitionNode,
    ObjectTypeDefinitionNode,
)

from ..ast_manipulation import (
    get_ast_name,
    get_ast_with_non_null_and_list_stripped,
    get_copy_of_node_with_new_attributes,
    get_directive_arg_value,
    is_list_type,
)
from ..directive_registry import FieldManipulator
from ..document import DocumentAST
from ..exceptions import DirectiveManipulationError
from ..partial_parser import input_value_definition, object_type_definitions, type_reference


PAGINATE_DIRECTIVE_NAME = "paginate"

PAGINATOR_PAGINATION_TYPE = "paginator"
CONNECTION_PAGINATION_TYPE = "connection"

PAGINATOR_TEMPLATE = dedent(
    '''\
    "A paginated list of {type_name} items."
    type {type_name}Paginator {{
      "Pagination information about the list of items."
      paginatorInfo: PaginatorInfo!

      "A list of {type_name} items."
      data: [{type_name}!]!
    }}
'''
)

CONNECTION_TEMPLATE = dedent(
    '''\
    "A paginated list of {type_name} edges."
    type {type_name}Connection {{
      "Pagination information about the list of edges."
      pageInfo: PageInfo!

      "A list of {type_name} edges."
      edges: [{type_name}Edge]
    }}

    "An edge that contains a node of type {type_name} and a cursor."
    type {type_name}Edge {{
      "The {type_name} node."
      node: {type_name}

      "A unique cursor that can be used for pagination."
      cursor: String!
    }}
'''
)


def get_paginator_type_name(type_name: str) -> str:
    """Return the name of the offset-based pagination type of the given type."""
    return "{}Paginator".format(type_name)


def get_connection_type_name(type_name: str) -> str:
    """Return the name of the cursor-based pagination type of the given type."""
    return "{}Connection".format(type_name)


def _get_default_count(directive: DirectiveNode, field_description: str) -> Optional[int]:
    """Return the validated defaultCount argument of the directive, if there is one."""
    default_count = get_directive_arg_value(directive, "defaultCount")
    if default_count is None:
        return None
    if isinstance(default_count, bool) or not isinstance(default_count, int) or default_count < 1:
        raise DirectiveManipulationError(
            "The defaultCount of @{} on {} must be a positive integer, but got: {}".format(
                PAGINATE_DIRECTIVE_NAME, field_description, default_count
            )
        )
    return default_count


def _get_count_argument(count_arg_name: str, default_count: Optional[int]) -> str:
    """Return the definition of the argument that sets the number of items to fetch."""
    if default_count is None:
        return "{}: Int!".format(count_arg_name)
    return "{}: Int = {}".format(count_arg_name, default_count)


def _add_arguments(
    field: FieldDefinitionNode,
    new_arguments: List[InputValueDefinitionNode],
    field_description: str,
) -> List[InputValueDefinitionNode]:
    """Return the field's arguments followed by the new ones, rejecting duplicate names."""
    existing_arguments = list(field.arguments or ())
    existing_names = {get_ast_name(argument) for argument in existing_arguments}
    conflicting_names = sorted(
        get_ast_name(argument)
        for argument in new_arguments
        if get_ast_name(argument) in existing_names
    )
    if conflicting_names:
        raise DirectiveManipulationError(
            "@{} on {} adds the arguments {}, but the field already defines arguments with "
            "these names.".format(PAGINATE_DIRECTIVE_NAME, field_description, conflicting_names)
        )
    return existing_arguments + new_arguments


def manipulate_paginate(
    directive: DirectiveNode,
    field: FieldDefinitionNode,
    owner_type: ObjectTypeDefinitionNode,
    document: DocumentAST,
    original_document: DocumentAST,
) -> DocumentAST:
    """Rewrite the list field into a paginated field, and install its pagination types."""
    type_name = get_ast_name(owner_type)
    field_description = "{}.{}".format(type_name, get_ast_name(field))
    if not is_list_type(field.type):
        raise DirectiveManipulationError(
            "@{} can only be applied to fields that return a list, but {} does not.".format(
                PAGINATE_DIRECTIVE_NAME, field_description
            )
        )

    item_type_name = get_ast_name(get_ast_with_non_null_and_list_stripped(field.type))
    pagination_type = get_directive_arg_value(directive, "type", PAGINATOR_PAGINATION_TYPE)
    default_count = _get_default_count(directive, field_description)

    if pagination_type == PAGINATOR_PAGINATION_TYPE:
        new_type_definitions = PAGINATOR_TEMPLATE.format(type_name=item_type_name)
        new_field_type = "{}!".format(get_paginator_type_name(item_type_name))
        new_arguments = [
            _get_count_argument("count", default_count),
            "page: Int",
        ]
    elif pagination_type == CONNECTION_PAGINATION_TYPE:
        new_type_definitions = CONNECTION_TEMPLATE.format(type_name=item_type_name)
        new_field_type = "{}!".format(get_connection_type_name(item_type_name))
        new_arguments = [
            _get_count_argument("first", default_count),
            "after: String",
        ]
    else:
        raise DirectiveManipulationError(
            'The type of @{} on {} must be "{}" or "{}", but got: {}'.format(
                PAGINATE_DIRECTIVE_NAME,
                field_description,
                PAGINATOR_PAGINATION_TYPE,
                CONNECTION_PAGINATION_TYPE,
                pagination_type,
            )
        )

    for definition in object_type_definitions(new_type_definitions):
        document = document.set_definition(definition)

    new_argument_definitions = [input_value_definition(argument) for argument in new_arguments]
    paginated_field = get_copy_of_node_with_new_attributes(
        field,
        type=type_reference(new_field_type),
        arguments=tuple(_add_arguments(field, new_argument_definitions, field_description)),
    )
    return document.replace_field(type_name, paginated_field)


PAGINATE_PROVIDERS = (FieldManipulator(manipulate_paginate),)
