# Copyright 2019-present Kensho Technologies, LLC.
import logging
from textwrap import dedent
from typing import Tuple

from graphql import print_ast
from graphql.language.ast import ObjectTypeDefinitionNode

from .document import DocumentAST
from .partial_parser import object_type_definition


logger = logging.getLogger(__name__)


PAGINATOR_INFO_TYPE_NAME = "PaginatorInfo"
PAGE_INFO_TYPE_NAME = "PageInfo"

# Metadata of offset-based ("paginator") pagination.
PAGINATOR_INFO_DEFINITION = dedent(
    '''\
    type PaginatorInfo {
      "Total count of available items in the page."
      count: Int!

      "Current pagination page."
      currentPage: Int!

      "Index of first item in the current page."
      firstItem: Int!

      "If collection has more pages."
      hasMorePages: Boolean!

      "Index of last item in the current page."
      lastItem: Int!

      "Last page number of the collection."
      lastPage: Int!

      "Number of items per page in the collection."
      perPage: Int!

      "Total items available in the collection."
      total: Int!
    }
'''
)

# Metadata of cursor-based ("connection") pagination.
PAGE_INFO_DEFINITION = dedent(
    '''\
    type PageInfo {
      "When paginating forwards, are there more items?"
      hasNextPage: Boolean!

      "When paginating backwards, are there more items?"
      hasPreviousPage: Boolean!

      "When paginating backwards, the cursor to continue."
      startCursor: String

      "When paginating forwards, the cursor to continue."
      endCursor: String

      "Total number of node in connection."
      total: Int

      "Count of nodes in current request."
      count: Int

      "Current page of request."
      currentPage: Int

      "Last page in connection."
      lastPage: Int
    }
'''
)


def get_pagination_info_types() -> Tuple[ObjectTypeDefinitionNode, ObjectTypeDefinitionNode]:
    """Return freshly parsed PaginatorInfo and PageInfo definitions."""
    return (
        object_type_definition(PAGINATOR_INFO_DEFINITION),
        object_type_definition(PAGE_INFO_DEFINITION),
    )


def add_pagination_info_types(document: DocumentAST) -> DocumentAST:
    """Install the PaginatorInfo and PageInfo types, overwriting same-named existing types.

    Directives may add fields of these types to the schema, so they must always be defined.
    """
    for definition in get_pagination_info_types():
        type_name = definition.name.value
        existing_definition = document.definition(type_name)
        # Compare the printed definitions, since parsed nodes also hold their source locations.
        if existing_definition is not None and print_ast(existing_definition) != print_ast(
            definition
        ):
            logger.warning(
                "Replacing the existing definition of %(type_name)s with the built-in "
                "pagination type of the same name.",
                {"type_name": type_name},
            )
        document = document.set_definition(definition)
    return document
