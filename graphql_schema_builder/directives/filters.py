# Copyright 2019-present Kensho Technologies, LLC.
"""Argument filter directives: bind a field argument to a condition on a database column.

    type Query {
      users(name: String @eq, ids: [ID!] @in(key: "id")): [User!]!
      search(q: String @search(within: "bio")): [User!]!
    }

Each directive installs an ArgumentFilter binding on its argument. At execution time, the value
supplied for the argument is used to narrow a SQLAlchemy Select through ArgumentFilter.apply.
The column defaults to the argument's name, and can be overridden with the key argument, or with
the within argument for @search.
"""
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, Optional

from graphql.language.ast import (
    DirectiveNode,
    FieldDefinitionNode,
    InputValueDefinitionNode,
    ObjectTypeDefinitionNode,
)
from sqlalchemy.sql.expression import ColumnClause, ColumnElement, Select, column

from ..ast_manipulation import get_ast_name, get_directive_arg_value, is_list_type
from ..directive_registry import ArgManipulator
from ..document import DocumentAST
from ..exceptions import DirectiveManipulationError


ClauseBuilder = Callable[[ColumnClause, Any], ColumnElement]


@dataclass(frozen=True)
class FilterOperator:
    """A comparison that an argument filter directive applies to its column."""

    directive_name: str
    build_clause: ClauseBuilder

    # Whether the argument must be a list, e.g. for IN comparisons.
    expects_list: bool = False

    # Name of the directive argument that overrides the filtered column's name.
    column_argument: str = "key"


EQ_OPERATOR = FilterOperator("eq", lambda filtered_column, value: filtered_column == value)
NEQ_OPERATOR = FilterOperator("neq", lambda filtered_column, value: filtered_column != value)
IN_OPERATOR = FilterOperator(
    "in", lambda filtered_column, value: filtered_column.in_(value), expects_list=True
)
NOT_IN_OPERATOR = FilterOperator(
    "not_in", lambda filtered_column, value: ~filtered_column.in_(value), expects_list=True
)
LIKE_OPERATOR = FilterOperator("like", lambda filtered_column, value: filtered_column.like(value))
SEARCH_OPERATOR = FilterOperator(
    "search",
    lambda filtered_column, value: filtered_column.ilike("%{}%".format(value)),
    column_argument="within",
)

FILTER_OPERATORS: Dict[str, FilterOperator] = {
    operator.directive_name: operator
    for operator in (
        EQ_OPERATOR,
        NEQ_OPERATOR,
        IN_OPERATOR,
        NOT_IN_OPERATOR,
        LIKE_OPERATOR,
        SEARCH_OPERATOR,
    )
}


@dataclass(frozen=True)
class ArgumentFilter:
    """Narrows a query by the value supplied for a field argument."""

    column_name: str
    operator: FilterOperator

    def get_clause(self, value: Any) -> ColumnElement:
        """Return the condition on the column for the given argument value."""
        return self.operator.build_clause(column(self.column_name), value)

    def apply(self, query: Select, value: Any) -> Select:
        """Return the query, narrowed by the condition for the given argument value."""
        return query.where(self.get_clause(value))


def _get_column_name(
    directive: DirectiveNode, operator: FilterOperator, argument_name: str
) -> str:
    """Return the name of the filtered column, defaulting to the argument's name."""
    column_name: Optional[Any] = get_directive_arg_value(directive, operator.column_argument)
    if column_name is None:
        return argument_name
    if not isinstance(column_name, str) or not column_name:
        raise DirectiveManipulationError(
            "The {} argument of @{} must be a non-empty string, but got: {}".format(
                operator.column_argument, operator.directive_name, column_name
            )
        )
    return column_name


def _manipulate_filter(
    operator: FilterOperator,
    directive: DirectiveNode,
    argument: InputValueDefinitionNode,
    owner_field: FieldDefinitionNode,
    owner_type: ObjectTypeDefinitionNode,
    document: DocumentAST,
    original_document: DocumentAST,
) -> DocumentAST:
    """Attach an ArgumentFilter for the operator's comparison to the argument."""
    type_name = get_ast_name(owner_type)
    field_name = get_ast_name(owner_field)
    argument_name = get_ast_name(argument)

    if operator.expects_list and not is_list_type(argument.type):
        raise DirectiveManipulationError(
            "@{} can only be applied to list arguments, but {}.{}({}) is not a list.".format(
                operator.directive_name, type_name, field_name, argument_name
            )
        )

    argument_filter = ArgumentFilter(
        column_name=_get_column_name(directive, operator, argument_name), operator=operator
    )
    return document.add_argument_binding(type_name, field_name, argument_name, argument_filter)


def make_filter_manipulator(operator: FilterOperator) -> ArgManipulator:
    """Return an ArgManipulator that attaches filters with the given comparison."""
    return ArgManipulator(partial(_manipulate_filter, operator))


FILTER_PROVIDERS = {
    directive_name: (make_filter_manipulator(operator),)
    for directive_name, operator in FILTER_OPERATORS.items()
}
