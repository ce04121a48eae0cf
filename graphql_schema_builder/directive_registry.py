# Copyright 2019-present Kensho Technologies, LLC.
"""Map directive names to the schema manipulations they provide.

A directive applied in the schema acts as a compile-time macro: while the schema AST is built,
every directive application is looked up in the registry, and each capability provider
registered under its name gets to rewrite the document. There are three kinds of providers:
- NodeManipulator: runs on a type definition or type extension, before extensions are merged;
- FieldManipulator: runs on a field of an object type, after extensions are merged;
- ArgManipulator: runs on an argument of a field of an object type, after field manipulators.

Provider functions receive the directive application they were resolved from as their first
argument, so that they can read its arguments. Lookups bind that argument, and return callables
with exactly the signatures the schema builder invokes:
    node:  (node, document, original_document) -> document
    field: (field, owner_type, document, original_document) -> document
    arg:   (arg, owner_field, owner_type, document, original_document) -> document
"""
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Tuple, Type, TypeVar, Union

from graphql.language.ast import (
    DirectiveNode,
    FieldDefinitionNode,
    InputValueDefinitionNode,
    Node,
    ObjectTypeDefinitionNode,
)

from .exceptions import DirectiveRegistrationError


if TYPE_CHECKING:
    from .document import DocumentAST


# Signatures of provider functions, before binding the directive application.
NodeManipulatorFunction = Callable[
    [DirectiveNode, Node, "DocumentAST", "DocumentAST"], "DocumentAST"
]
FieldManipulatorFunction = Callable[
    [DirectiveNode, FieldDefinitionNode, ObjectTypeDefinitionNode, "DocumentAST", "DocumentAST"],
    "DocumentAST",
]
ArgManipulatorFunction = Callable[
    [
        DirectiveNode,
        InputValueDefinitionNode,
        FieldDefinitionNode,
        ObjectTypeDefinitionNode,
        "DocumentAST",
        "DocumentAST",
    ],
    "DocumentAST",
]

# Signatures of resolved providers, as invoked by the schema builder.
BoundNodeManipulator = Callable[[Node, "DocumentAST", "DocumentAST"], "DocumentAST"]
BoundFieldManipulator = Callable[
    [FieldDefinitionNode, ObjectTypeDefinitionNode, "DocumentAST", "DocumentAST"], "DocumentAST"
]
BoundArgManipulator = Callable[
    [
        InputValueDefinitionNode,
        FieldDefinitionNode,
        ObjectTypeDefinitionNode,
        "DocumentAST",
        "DocumentAST",
    ],
    "DocumentAST",
]


@dataclass(frozen=True)
class NodeManipulator:
    """Rewrites the document based on a directive applied to a type definition or extension."""

    manipulate: NodeManipulatorFunction


@dataclass(frozen=True)
class FieldManipulator:
    """Rewrites the document based on a directive applied to a field of an object type."""

    manipulate: FieldManipulatorFunction


@dataclass(frozen=True)
class ArgManipulator:
    """Rewrites the document based on a directive applied to an argument of a field."""

    manipulate: ArgManipulatorFunction


CapabilityProvider = Union[NodeManipulator, FieldManipulator, ArgManipulator]
CapabilityProviderT = TypeVar(
    "CapabilityProviderT", NodeManipulator, FieldManipulator, ArgManipulator
)

_PROVIDER_TYPES = (NodeManipulator, FieldManipulator, ArgManipulator)


class DirectiveRegistry(object):
    """Registry of directive name -> capability providers, in registration order.

    The registry is meant to be populated once, and then only read while schemas are built.
    """

    def __init__(self) -> None:
        """Create a new empty registry."""
        self._providers: Dict[str, Tuple[CapabilityProvider, ...]] = {}

    def register(self, directive_name: str, *providers: CapabilityProvider) -> "DirectiveRegistry":
        """Register capability providers under the directive name, after any existing ones.

        Args:
            directive_name: str, name of the directive as used in the schema, without the "@"
            providers: NodeManipulator, FieldManipulator or ArgManipulator objects

        Returns:
            the registry itself, to allow chaining registrations

        Raises:
            DirectiveRegistrationError if the name is empty, no providers are given,
            or a provider is not of a known kind
        """
        if not directive_name or directive_name.startswith("@"):
            raise DirectiveRegistrationError(
                'Expected a non-empty directive name without a leading "@", but got '
                "{}.".format(repr(directive_name))
            )
        if not providers:
            raise DirectiveRegistrationError(
                "Expected at least one capability provider for directive @{}.".format(
                    directive_name
                )
            )
        for provider in providers:
            if not isinstance(provider, _PROVIDER_TYPES):
                raise DirectiveRegistrationError(
                    "Cannot register {} for directive @{}: expected a NodeManipulator, "
                    "FieldManipulator or ArgManipulator.".format(repr(provider), directive_name)
                )

        self._providers[directive_name] = self._providers.get(directive_name, ()) + tuple(
            providers
        )
        return self

    def directive_names(self) -> List[str]:
        """Return the names of all registered directives, in registration order."""
        return list(self._providers)

    def providers(self, directive_name: str) -> Tuple[CapabilityProvider, ...]:
        """Return all providers registered for the directive name, in registration order."""
        return self._providers.get(directive_name, ())

    def __contains__(self, directive_name: object) -> bool:
        """Return True if any provider is registered under the directive name."""
        return directive_name in self._providers

    def _resolve(
        self, node: Node, provider_type: Type[CapabilityProviderT]
    ) -> List[Tuple[DirectiveNode, CapabilityProviderT]]:
        """Return (directive, provider) pairs of the given kind for the directives of the node.

        Directives are visited in declaration order, and each directive's providers in
        registration order. Directives without registered providers are skipped: they may only
        be meaningful at execution time.
        """
        resolved = []
        for directive in getattr(node, "directives", None) or ():
            for provider in self.providers(directive.name.value):
                if isinstance(provider, provider_type):
                    resolved.append((directive, provider))
        return resolved

    def node_manipulators(self, node: Node) -> List[BoundNodeManipulator]:
        """Return the node manipulators of the type definition or extension, in order."""
        return _bind_all(self._resolve(node, NodeManipulator))

    def field_manipulators(self, field: FieldDefinitionNode) -> List[BoundFieldManipulator]:
        """Return the field manipulators of the field definition, in order."""
        return _bind_all(self._resolve(field, FieldManipulator))

    def arg_manipulators(self, arg: InputValueDefinitionNode) -> List[BoundArgManipulator]:
        """Return the arg manipulators of the argument definition, in order."""
        return _bind_all(self._resolve(arg, ArgManipulator))


def _bind_all(resolved: Iterable[Tuple[DirectiveNode, CapabilityProvider]]) -> List[Callable]:
    """Bind each provider function to the directive application it was resolved from."""
    return [partial(provider.manipulate, directive) for directive, provider in resolved]
