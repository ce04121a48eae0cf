# Copyright 2019-present Kensho Technologies, LLC.
from textwrap import dedent
import unittest

from ...builder import build_schema_ast
from ...directive_registry import DirectiveRegistry
from ...directives.rules import (
    RULES_DIRECTIVE_NAME,
    RULES_PROVIDERS,
    ValidationRules,
    get_rule_name,
)
from ...exceptions import DirectiveManipulationError
from ..test_helpers import compare_schema_texts, print_without_pagination_info_types


def _get_rules_registry() -> DirectiveRegistry:
    return DirectiveRegistry().register(RULES_DIRECTIVE_NAME, *RULES_PROVIDERS)


class RulesDirectiveTests(unittest.TestCase):
    def test_rules_binding(self) -> None:
        schema_text = dedent(
            """\
            type Query {
              user(
                email: String @rules(apply: ["required", "email"], messages: {required: "Need it"})
                name: String @rules(apply: "max:20")
                id: ID
              ): String
            }
            """
        )
        document = build_schema_ast(schema_text, _get_rules_registry())

        self.assertEqual(
            [ValidationRules(rules=("required", "email"), messages={"required": "Need it"})],
            document.argument_bindings("Query", "user", "email"),
        )
        self.assertEqual(
            [ValidationRules(rules=("max:20",))],
            document.argument_bindings("Query", "user", "name"),
        )
        self.assertEqual([], document.argument_bindings("Query", "user", "id"))

        # The schema itself is left as it is.
        compare_schema_texts(self, schema_text, print_without_pagination_info_types(document))

    def test_rules_on_extension_field(self) -> None:
        schema_text = dedent(
            """\
            type Query {
              a: Int
            }

            extend type Query {
              b(value: Int @rules(apply: ["min:1"])): Int
            }
            """
        )
        document = build_schema_ast(schema_text, _get_rules_registry())
        self.assertEqual(
            {("Query", "b", "value"): [ValidationRules(rules=("min:1",))]},
            document.all_argument_bindings(),
        )

    def test_rule_names(self) -> None:
        rules = ValidationRules(rules=("required", "max:20", "between:1,10"))
        self.assertEqual(("required", "max", "between"), rules.rule_names)
        self.assertEqual("regex", get_rule_name("regex:^a:b$"))

    def test_invalid_rules(self) -> None:
        invalid_arguments = (
            # No rules.
            "value: Int @rules",
            "value: Int @rules(apply: [])",
            # Malformed rules.
            'value: Int @rules(apply: ["1required"])',
            "value: Int @rules(apply: [5])",
            # Messages that do not belong to the applied rules.
            'value: Int @rules(apply: ["required"], messages: {max: "Too big"})',
            'value: Int @rules(apply: ["required"], messages: "Need it")',
            'value: Int @rules(apply: ["required"], messages: {required: 5})',
        )
        for argument in invalid_arguments:
            schema_text = "type Query {{ a({}): Int }}".format(argument)
            with self.assertRaises(DirectiveManipulationError):
                build_schema_ast(schema_text, _get_rules_registry())
