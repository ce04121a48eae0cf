# Copyright 2019-present Kensho Technologies, LLC.
from io import StringIO
from textwrap import dedent
import unittest
from unittest.mock import patch

from ..directives import default_directive_registry
from ..directives.filters import FILTER_OPERATORS
from ..tool import main


class ToolTests(unittest.TestCase):
    def test_main_builds_schema_from_stdin(self) -> None:
        schema_text = dedent(
            """\
            type User {
              id: ID!
            }

            type Query @group(middleware: ["auth"]) {
              users(name: String @eq): [User!]! @paginate
            }
            """
        )
        stdout = StringIO()
        with patch("sys.stdin", StringIO(schema_text)), patch("sys.stdout", stdout):
            main()

        output = stdout.getvalue()
        self.assertIn(
            'users(name: String @eq, count: Int!, page: Int): UserPaginator! @paginate '
            '@middleware(checks: ["auth"])',
            output,
        )
        self.assertIn("type UserPaginator {", output)
        self.assertIn("type PaginatorInfo {", output)
        self.assertIn("type PageInfo {", output)
        self.assertTrue(output.endswith("\n"))

    def test_default_directive_registry(self) -> None:
        registry = default_directive_registry()
        self.assertEqual(
            ["group", "paginate", "rules"] + list(FILTER_OPERATORS), registry.directive_names()
        )
