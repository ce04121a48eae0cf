# Copyright 2019-present Kensho Technologies, LLC.
"""Directives whose capability providers ship with this package."""
from ..directive_registry import DirectiveRegistry
from .filters import FILTER_PROVIDERS, ArgumentFilter  # noqa
from .group import GROUP_DIRECTIVE_NAME, GROUP_PROVIDERS
from .paginate import PAGINATE_DIRECTIVE_NAME, PAGINATE_PROVIDERS
from .rules import RULES_DIRECTIVE_NAME, RULES_PROVIDERS, ValidationRules  # noqa


def register_builtin_directives(directive_registry: DirectiveRegistry) -> DirectiveRegistry:
    """Register the providers of all directives that ship with this package, and return it."""
    directive_registry.register(GROUP_DIRECTIVE_NAME, *GROUP_PROVIDERS)
    directive_registry.register(PAGINATE_DIRECTIVE_NAME, *PAGINATE_PROVIDERS)
    directive_registry.register(RULES_DIRECTIVE_NAME, *RULES_PROVIDERS)
    for directive_name, providers in FILTER_PROVIDERS.items():
        directive_registry.register(directive_name, *providers)
    return directive_registry


def default_directive_registry() -> DirectiveRegistry:
    """Return a new registry containing all directives that ship with this package."""
    return register_builtin_directives(DirectiveRegistry())
