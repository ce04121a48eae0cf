# Copyright 2019-present Kensho Technologies, LLC.
"""In-memory schema document, keyed by type name.

A DocumentAST splits the definitions of a parsed schema into:
- type definitions (object, interface, input object, enum, scalar and union types), keyed by
  type name and kept in source order;
- type extensions, kept in source order across all extended types;
- all other type system definitions (schema definitions, schema extensions and directive
  definitions), kept in source order so that the document can be printed back.

Setting a type definition overwrites any definition with the same name. A replaced definition
keeps its position, so iteration over type definitions always follows source order, with new
definitions appended in the order they were installed.
"""
from copy import deepcopy
from typing import Any, Dict, Hashable, Iterator, List, Optional, Tuple, Type, TypeVar

from graphql import build_ast_schema, print_ast
from graphql.language.ast import (
    DefinitionNode,
    DocumentNode,
    ExecutableDefinitionNode,
    FieldDefinitionNode,
    ObjectTypeDefinitionNode,
    TypeDefinitionNode,
    TypeExtensionNode,
)
from graphql.type import GraphQLSchema

from .ast_manipulation import get_ast_name, get_copy_of_node_with_new_fields, safe_parse_schema
from .exceptions import SchemaParseError


DocumentASTT = TypeVar("DocumentASTT", bound="DocumentAST")

# (type name, field name, argument name)
ArgumentPath = Tuple[str, str, str]


class DocumentAST(object):
    """A schema document whose type definitions can be looked up and replaced by name."""

    def __init__(
        self,
        type_definitions: Optional[Dict[str, TypeDefinitionNode]] = None,
        type_extensions: Optional[List[TypeExtensionNode]] = None,
        other_definitions: Optional[List[DefinitionNode]] = None,
    ) -> None:
        """Create a new document from already-split definitions."""
        self._type_definitions: Dict[str, TypeDefinitionNode] = dict(type_definitions or {})
        self._type_extensions: List[TypeExtensionNode] = list(type_extensions or [])
        # (replaced extension, new extension) pairs, in the order the replacements were made
        self._replaced_type_extensions: List[Tuple[TypeExtensionNode, TypeExtensionNode]] = []
        self._other_definitions: List[DefinitionNode] = list(other_definitions or [])
        self._merged_type_extensions: Dict[str, List[TypeExtensionNode]] = {}
        self._argument_bindings: Dict[ArgumentPath, List[Any]] = {}

    @classmethod
    def from_source(cls: Type[DocumentASTT], schema_string: str) -> DocumentASTT:
        """Parse the schema text into a new document.

        Args:
            schema_string: str, GraphQL schema language text

        Returns:
            DocumentAST containing every definition of the schema text

        Raises:
            SchemaParseError if the text cannot be parsed, or contains executable definitions
        """
        return cls.from_document_node(safe_parse_schema(schema_string))

    @classmethod
    def from_document_node(cls: Type[DocumentASTT], document_node: DocumentNode) -> DocumentASTT:
        """Split an already-parsed DocumentNode into a new document.

        Raises:
            SchemaParseError if the DocumentNode contains executable definitions
        """
        document = cls()
        for definition in document_node.definitions:
            if isinstance(definition, TypeDefinitionNode):
                document._type_definitions[get_ast_name(definition)] = definition
            elif isinstance(definition, TypeExtensionNode):
                document._type_extensions.append(definition)
            elif isinstance(definition, ExecutableDefinitionNode):
                raise SchemaParseError(
                    "Schema documents may only contain type system definitions, but found "
                    'a "{}" definition.'.format(type(definition).__name__)
                )
            else:
                document._other_definitions.append(definition)
        return document

    # ##########
    # Lookups #
    # ##########

    def type_definitions(self) -> List[TypeDefinitionNode]:
        """Return all type definitions, in order."""
        return list(self._type_definitions.values())

    def object_type_definitions(self) -> List[ObjectTypeDefinitionNode]:
        """Return all object type definitions, in order."""
        return [
            definition
            for definition in self._type_definitions.values()
            if isinstance(definition, ObjectTypeDefinitionNode)
        ]

    def type_extension_definitions(self, name: Optional[str] = None) -> List[TypeExtensionNode]:
        """Return the pending type extensions of the named type, or of all types if name is None.

        Extensions are returned in source order, including when the extensions of several types
        are interleaved. Extensions already merged into their base type are not returned.
        """
        if name is None:
            return list(self._type_extensions)
        return [
            extension
            for extension in self._type_extensions
            if get_ast_name(extension) == name
        ]

    def current_type_extension(
        self, extension: TypeExtensionNode
    ) -> Optional[TypeExtensionNode]:
        """Return the pending extension that the given extension has been replaced with, if any.

        Replacements are followed transitively, so the latest version of the extension is
        returned. If the extension was never replaced, it is returned as is. Returns None if the
        extension is no longer pending, e.g. because it was removed or merged.
        """
        current_extension = extension
        for replaced_extension, new_extension in self._replaced_type_extensions:
            if replaced_extension is current_extension:
                current_extension = new_extension

        if any(pending is current_extension for pending in self._type_extensions):
            return current_extension
        return None

    def merged_type_extension_definitions(self, name: str) -> List[TypeExtensionNode]:
        """Return the type extensions that have already been merged into the named type."""
        return list(self._merged_type_extensions.get(name, ()))

    def other_definitions(self) -> List[DefinitionNode]:
        """Return the schema, schema extension and directive definitions, in order."""
        return list(self._other_definitions)

    def definition(self, name: str) -> Optional[TypeDefinitionNode]:
        """Return the type definition with the given name, or None if there isn't one."""
        return self._type_definitions.get(name)

    def has_definition(self, name: str) -> bool:
        """Return True if a type definition with the given name exists."""
        return name in self._type_definitions

    def __contains__(self, name: Hashable) -> bool:
        """Return True if a type definition with the given name exists."""
        return name in self._type_definitions

    def __iter__(self) -> Iterator[TypeDefinitionNode]:
        """Iterate over the type definitions, in order."""
        return iter(self.type_definitions())

    def __len__(self) -> int:
        """Return the number of type definitions."""
        return len(self._type_definitions)

    # ################
    # Modifications #
    # ################

    def set_definition(self: DocumentASTT, definition: TypeDefinitionNode) -> DocumentASTT:
        """Install the type definition, overwriting any existing definition with the same name."""
        if not isinstance(definition, TypeDefinitionNode):
            raise AssertionError(
                "Expected a TypeDefinitionNode, but received {}: {}".format(
                    type(definition).__name__, definition
                )
            )
        self._type_definitions[get_ast_name(definition)] = definition
        return self

    def remove_definition(self: DocumentASTT, name: str) -> DocumentASTT:
        """Remove the type definition with the given name, if there is one."""
        self._type_definitions.pop(name, None)
        return self

    def add_type_extension(self: DocumentASTT, extension: TypeExtensionNode) -> DocumentASTT:
        """Add a pending type extension after all existing extensions of the same type."""
        self._type_extensions.append(extension)
        return self

    def replace_type_extension(
        self: DocumentASTT, extension: TypeExtensionNode, new_extension: TypeExtensionNode
    ) -> DocumentASTT:
        """Replace a pending type extension, keeping its position among the other extensions."""
        index = self._get_extension_index(extension)
        if get_ast_name(new_extension) != get_ast_name(extension):
            raise AssertionError(
                "Cannot replace the extension of type {} with an extension of type {}.".format(
                    get_ast_name(extension), get_ast_name(new_extension)
                )
            )
        self._type_extensions[index] = new_extension
        self._replaced_type_extensions.append((extension, new_extension))
        return self

    def remove_type_extension(self: DocumentASTT, extension: TypeExtensionNode) -> DocumentASTT:
        """Remove a pending type extension."""
        del self._type_extensions[self._get_extension_index(extension)]
        return self

    def mark_type_extension_merged(
        self: DocumentASTT, extension: TypeExtensionNode
    ) -> DocumentASTT:
        """Record that the pending type extension has been merged into its base type."""
        self.remove_type_extension(extension)
        self._merged_type_extensions.setdefault(get_ast_name(extension), []).append(extension)
        return self

    def replace_field(
        self: DocumentASTT, type_name: str, field: FieldDefinitionNode
    ) -> DocumentASTT:
        """Replace the same-named field of the current definition of the type.

        The owning type is looked up by name at the time of the call, so that successive
        replacements of different fields of the same type do not overwrite each other.
        """
        definition = self._type_definitions.get(type_name)
        if definition is None:
            raise AssertionError(
                "Cannot replace field {} of type {}: the type does not exist.".format(
                    get_ast_name(field), type_name
                )
            )

        field_name = get_ast_name(field)
        existing_fields = list(getattr(definition, "fields", None) or ())
        for index, existing_field in enumerate(existing_fields):
            if get_ast_name(existing_field) == field_name:
                existing_fields[index] = field
                break
        else:
            raise AssertionError(
                "Cannot replace field {} of type {}: the field does not exist.".format(
                    field_name, type_name
                )
            )

        return self.set_definition(get_copy_of_node_with_new_fields(definition, existing_fields))

    def add_argument_binding(
        self: DocumentASTT, type_name: str, field_name: str, argument_name: str, binding: Any
    ) -> DocumentASTT:
        """Attach a binding (e.g. a query filter or validation rules) to a field argument."""
        self._argument_bindings.setdefault((type_name, field_name, argument_name), []).append(
            binding
        )
        return self

    def argument_bindings(
        self, type_name: str, field_name: str, argument_name: str
    ) -> List[Any]:
        """Return the bindings attached to the field argument, in the order they were added."""
        return list(self._argument_bindings.get((type_name, field_name, argument_name), ()))

    def all_argument_bindings(self) -> Dict[ArgumentPath, List[Any]]:
        """Return all argument bindings, keyed by (type name, field name, argument name)."""
        return {path: list(bindings) for path, bindings in self._argument_bindings.items()}

    # ##########
    # Outputs #
    # ##########

    def to_document_node(self) -> DocumentNode:
        """Return a DocumentNode with all definitions and pending type extensions, in order."""
        definitions: List[DefinitionNode] = list(self._other_definitions)
        definitions.extend(self._type_definitions.values())
        definitions.extend(self._type_extensions)
        return DocumentNode(definitions=tuple(definitions))

    def print(self) -> str:
        """Return the document in GraphQL schema language."""
        return print_ast(self.to_document_node())

    def to_graphql_schema(self, assume_valid_sdl: bool = False) -> GraphQLSchema:
        """Build an executable GraphQLSchema from the document.

        Args:
            assume_valid_sdl: bool, set to True to skip validation of the schema language,
                              e.g. when the document still uses directives without definitions

        Returns:
            GraphQLSchema built by the GraphQL library
        """
        return build_ast_schema(self.to_document_node(), assume_valid_sdl=assume_valid_sdl)

    def copy(self: DocumentASTT) -> DocumentASTT:
        """Return a deep copy of the document."""
        return deepcopy(self)

    def __repr__(self) -> str:
        """Return a short description of the document."""
        return "{}(types={}, pending_extensions={})".format(
            type(self).__name__,
            list(self._type_definitions),
            [get_ast_name(extension) for extension in self.type_extension_definitions()],
        )

    def _get_extension_index(self, extension: TypeExtensionNode) -> int:
        """Return the position of the pending extension, comparing by identity."""
        for index, existing_extension in enumerate(self._type_extensions):
            if existing_extension is extension:
                return index
        raise AssertionError(
            "The type extension of {} is not a pending extension of this document.".format(
                get_ast_name(extension)
            )
        )
