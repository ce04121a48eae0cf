# Copyright 2019-present Kensho Technologies, LLC.
from dataclasses import dataclass, field
import re
from typing import Dict, Tuple

from graphql.language.ast import (
    DirectiveNode,
    FieldDefinitionNode,
    InputValueDefinitionNode,
    ObjectTypeDefinitionNode,
)

from ..ast_manipulation import get_ast_name, get_directive_arg_value
from ..directive_registry import ArgManipulator
from ..document import DocumentAST
from ..exceptions import DirectiveManipulationError


RULES_DIRECTIVE_NAME = "rules"

# A rule is a name, optionally followed by a colon and comma-separated parameters,
# e.g. "required", "max:20" or "between:1,10".
_RULE_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(:.*)?$")


@dataclass(frozen=True)
class ValidationRules:
    """Validation rules that the execution layer checks an argument's value against."""

    rules: Tuple[str, ...]

    # Custom error messages, by rule name.
    messages: Dict[str, str] = field(default_factory=dict)

    @property
    def rule_names(self) -> Tuple[str, ...]:
        """Return the names of the rules, without their parameters."""
        return tuple(get_rule_name(rule) for rule in self.rules)


def get_rule_name(rule: str) -> str:
    """Return the name of the rule, without its parameters."""
    return rule.split(":", 1)[0]


def _get_rules(directive: DirectiveNode, argument_description: str) -> Tuple[str, ...]:
    """Return the validated rules of the directive."""
    rules = get_directive_arg_value(directive, "apply")
    if isinstance(rules, str):
        rules = [rules]
    if not rules or not isinstance(rules, list):
        raise DirectiveManipulationError(
            "@{} on {} requires a non-empty list of rules in its apply argument.".format(
                RULES_DIRECTIVE_NAME, argument_description
            )
        )

    invalid_rules = [
        rule for rule in rules if not isinstance(rule, str) or not _RULE_PATTERN.match(rule)
    ]
    if invalid_rules:
        raise DirectiveManipulationError(
            "@{} on {} received invalid rules: {}".format(
                RULES_DIRECTIVE_NAME, argument_description, invalid_rules
            )
        )
    return tuple(rules)


def _get_messages(
    directive: DirectiveNode, rules: Tuple[str, ...], argument_description: str
) -> Dict[str, str]:
    """Return the validated custom messages of the directive, by rule name."""
    messages = get_directive_arg_value(directive, "messages", {})
    if not isinstance(messages, dict) or not all(
        isinstance(message, str) for message in messages.values()
    ):
        raise DirectiveManipulationError(
            "The messages of @{} on {} must be an object of rule name to message string, "
            "but got: {}".format(RULES_DIRECTIVE_NAME, argument_description, messages)
        )

    unknown_rule_names = sorted(set(messages) - {get_rule_name(rule) for rule in rules})
    if unknown_rule_names:
        raise DirectiveManipulationError(
            "@{} on {} defines messages for rules it does not apply: {}".format(
                RULES_DIRECTIVE_NAME, argument_description, unknown_rule_names
            )
        )
    return messages


def manipulate_rules(
    directive: DirectiveNode,
    argument: InputValueDefinitionNode,
    owner_field: FieldDefinitionNode,
    owner_type: ObjectTypeDefinitionNode,
    document: DocumentAST,
    original_document: DocumentAST,
) -> DocumentAST:
    """Validate the rules of the argument, and attach them to it as a ValidationRules binding."""
    type_name = get_ast_name(owner_type)
    field_name = get_ast_name(owner_field)
    argument_name = get_ast_name(argument)
    argument_description = "{}.{}({})".format(type_name, field_name, argument_name)

    rules = _get_rules(directive, argument_description)
    messages = _get_messages(directive, rules, argument_description)
    return document.add_argument_binding(
        type_name, field_name, argument_name, ValidationRules(rules=rules, messages=messages)
    )


RULES_PROVIDERS = (ArgManipulator(manipulate_rules),)
