# Copyright 2019-present Kensho Technologies, LLC.
import unittest

from graphql import print_ast
from graphql.language.ast import ArgumentNode, NameNode, StringValueNode

from ..ast_manipulation import (
    get_ast_with_non_null_and_list_stripped,
    get_ast_with_non_null_stripped,
    get_copy_of_node_with_new_attributes,
    get_copy_of_node_with_new_fields,
    get_directive_arg_value,
    get_directive_arguments,
    get_directives_named,
    is_list_type,
    make_directive,
    safe_parse_schema,
)
from ..exceptions import SchemaParseError
from ..partial_parser import directive, field_definition, type_reference
from .test_helpers import get_syntax_error_location


class ASTManipulationTests(unittest.TestCase):
    def test_safe_parse_schema(self) -> None:
        document_node = safe_parse_schema("type Query { a: Int }")
        self.assertEqual(1, len(document_node.definitions))

        invalid_schema_text = "type Query { a: }"
        with self.assertRaises(SchemaParseError) as context:
            safe_parse_schema(invalid_schema_text)
        self.assertEqual(
            get_syntax_error_location(invalid_schema_text), context.exception.source_location
        )

    def test_type_stripping(self) -> None:
        type_node = type_reference("[User!]!")
        self.assertEqual("[User!]", print_ast(get_ast_with_non_null_stripped(type_node)))
        self.assertEqual("User", print_ast(get_ast_with_non_null_and_list_stripped(type_node)))
        self.assertTrue(is_list_type(type_node))
        self.assertTrue(is_list_type(type_reference("[User]")))
        self.assertFalse(is_list_type(type_reference("User!")))

    def test_directive_arguments(self) -> None:
        paginate = directive('@paginate(type: "connection", defaultCount: 10, tags: ["a", "b"])')
        self.assertEqual(
            {"type": "connection", "defaultCount": 10, "tags": ["a", "b"]},
            get_directive_arguments(paginate),
        )
        self.assertEqual("connection", get_directive_arg_value(paginate, "type"))
        self.assertIsNone(get_directive_arg_value(paginate, "missing"))
        self.assertEqual(5, get_directive_arg_value(paginate, "missing", 5))

    def test_get_directives_named(self) -> None:
        field = field_definition('a: Int @eq @like(key: "b") @eq(key: "c")')
        self.assertEqual(
            ["@eq", '@eq(key: "c")'],
            [print_ast(applied) for applied in get_directives_named(field, "eq")],
        )
        self.assertEqual([], get_directives_named(field, "missing"))

    def test_make_directive(self) -> None:
        new_directive = make_directive(
            "middleware",
            [ArgumentNode(name=NameNode(value="check"), value=StringValueNode(value="auth"))],
        )
        self.assertEqual('@middleware(check: "auth")', print_ast(new_directive))
        self.assertEqual("@cached", print_ast(make_directive("cached")))

    def test_copy_of_node_with_new_attributes(self) -> None:
        field = field_definition("users(name: String): [User] @paginate")

        new_field = get_copy_of_node_with_new_attributes(
            field, type=type_reference("UserPaginator!"), arguments=()
        )

        self.assertIsNot(field, new_field)
        self.assertEqual("users: UserPaginator! @paginate", print_ast(new_field))
        # The original node is left as it was.
        self.assertEqual("users(name: String): [User] @paginate", print_ast(field))

    def test_copy_of_node_with_new_fields(self) -> None:
        extension = safe_parse_schema("extend type Query @group { a: Int }").definitions[0]

        new_extension = get_copy_of_node_with_new_fields(
            extension, [field_definition("a: Int"), field_definition("b: String")]
        )

        self.assertIsInstance(new_extension.fields, tuple)
        self.assertEqual(
            "extend type Query @group {\n  a: Int\n  b: String\n}", print_ast(new_extension)
        )
        self.assertEqual("extend type Query @group {\n  a: Int\n}", print_ast(extension))
