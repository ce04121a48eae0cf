# Copyright 2019-present Kensho Technologies, LLC.
from textwrap import dedent
from typing import Any
import unittest

from sqlalchemy import column, select, table

from ...builder import build_schema_ast
from ...directives import default_directive_registry
from ...directives.filters import (
    EQ_OPERATOR,
    FILTER_OPERATORS,
    IN_OPERATOR,
    LIKE_OPERATOR,
    NEQ_OPERATOR,
    NOT_IN_OPERATOR,
    SEARCH_OPERATOR,
    ArgumentFilter,
)
from ...exceptions import DirectiveManipulationError


USERS_TABLE = table("users", column("id"), column("name"), column("bio"))


def _compile_filtered_query(argument_filter: ArgumentFilter, value: Any) -> str:
    """Return the SQL of a query on the users table narrowed by the filter, with inlined values."""
    query = argument_filter.apply(select(USERS_TABLE), value)
    return str(query.compile(compile_kwargs={"literal_binds": True}))


class FilterDirectiveTests(unittest.TestCase):
    def test_filter_bindings(self) -> None:
        schema_text = dedent(
            """\
            type User {
              id: ID!
            }

            type Query {
              users(
                name: String @eq
                other_name: String @neq(key: "name")
                ids: [Int!] @in(key: "id")
                excluded_ids: [Int!] @not_in(key: "id")
                pattern: String @like(key: "name")
                q: String @search(within: "bio")
              ): [User!]!
            }
            """
        )
        document = build_schema_ast(schema_text, default_directive_registry())

        expected_bindings = {
            ("Query", "users", "name"): [ArgumentFilter("name", EQ_OPERATOR)],
            ("Query", "users", "other_name"): [ArgumentFilter("name", NEQ_OPERATOR)],
            ("Query", "users", "ids"): [ArgumentFilter("id", IN_OPERATOR)],
            ("Query", "users", "excluded_ids"): [ArgumentFilter("id", NOT_IN_OPERATOR)],
            ("Query", "users", "pattern"): [ArgumentFilter("name", LIKE_OPERATOR)],
            ("Query", "users", "q"): [ArgumentFilter("bio", SEARCH_OPERATOR)],
        }
        self.assertEqual(expected_bindings, document.all_argument_bindings())

    def test_multiple_filters_on_one_argument(self) -> None:
        schema_text = 'type Query { users(name: String @neq @like(key: "bio")): [String] }'
        document = build_schema_ast(schema_text, default_directive_registry())
        self.assertEqual(
            [ArgumentFilter("name", NEQ_OPERATOR), ArgumentFilter("bio", LIKE_OPERATOR)],
            document.argument_bindings("Query", "users", "name"),
        )

    def test_filter_operators(self) -> None:
        self.assertEqual(
            {"eq", "neq", "in", "not_in", "like", "search"}, set(FILTER_OPERATORS)
        )

    def test_apply_filters(self) -> None:
        self.assertIn(
            "WHERE name = 'Alice'",
            _compile_filtered_query(ArgumentFilter("name", EQ_OPERATOR), "Alice"),
        )
        self.assertIn(
            "WHERE name != 'Alice'",
            _compile_filtered_query(ArgumentFilter("name", NEQ_OPERATOR), "Alice"),
        )
        self.assertIn(
            "id IN (1, 2)",
            _compile_filtered_query(ArgumentFilter("id", IN_OPERATOR), [1, 2]),
        )
        self.assertIn(
            "id NOT IN (1, 2)",
            _compile_filtered_query(ArgumentFilter("id", NOT_IN_OPERATOR), [1, 2]),
        )
        self.assertIn(
            "WHERE name LIKE 'A%'",
            _compile_filtered_query(ArgumentFilter("name", LIKE_OPERATOR), "A%"),
        )
        self.assertIn(
            "lower(bio) LIKE lower('%ali%')",
            _compile_filtered_query(ArgumentFilter("bio", SEARCH_OPERATOR), "ali"),
        )

    def test_apply_multiple_filters(self) -> None:
        query = select(USERS_TABLE)
        query = ArgumentFilter("name", EQ_OPERATOR).apply(query, "Alice")
        query = ArgumentFilter("id", NOT_IN_OPERATOR).apply(query, [3])
        compiled_query = str(query.compile(compile_kwargs={"literal_binds": True}))

        self.assertIn("name = 'Alice'", compiled_query)
        self.assertIn("id NOT IN (3)", compiled_query)
        self.assertIn(" AND ", compiled_query)

    def test_invalid_filters(self) -> None:
        invalid_arguments = (
            # List comparisons on arguments that are not lists.
            "ids: Int @in",
            "ids: Int! @not_in",
            # Invalid column names.
            "name: String @eq(key: 5)",
            'name: String @eq(key: "")',
            'q: String @search(within: ["bio"])',
        )
        for argument in invalid_arguments:
            schema_text = "type Query {{ users({}): [String] }}".format(argument)
            with self.assertRaises(DirectiveManipulationError):
                build_schema_ast(schema_text, default_directive_registry())
