# Copyright 2019-present Kensho Technologies, LLC.
import unittest

from ..ast_manipulation import get_copy_of_node_with_new_fields
from ..builder import build_schema_ast
from ..directive_registry import DirectiveRegistry
from ..document import DocumentAST
from ..exceptions import DirectiveRegistrationError
from ..extensions import ExtensionRegistry, SchemaExtension
from ..partial_parser import field_definition, object_type_definition


def _add_version_type(document: DocumentAST) -> DocumentAST:
    return document.set_definition(object_type_definition("type Version { number: String }"))


def _add_version_field(document: DocumentAST) -> DocumentAST:
    query_type = document.definition("Query")
    new_fields = tuple(query_type.fields) + (field_definition("version: Version"),)
    return document.set_definition(get_copy_of_node_with_new_fields(query_type, new_fields))


class ExtensionRegistryTests(unittest.TestCase):
    def test_extensions_applied_in_registration_order(self) -> None:
        registry = ExtensionRegistry()
        version_type = SchemaExtension("version_type", _add_version_type)
        version_field = SchemaExtension("version_field", _add_version_field)

        self.assertIs(registry, registry.register(version_type).register(version_field))
        self.assertEqual([version_type, version_field], registry.extensions())

        document = registry.apply(DocumentAST.from_source("type Query { a: Int }"))
        self.assertEqual(
            ["Query", "Version"], [definition.name.value for definition in document]
        )
        self.assertEqual(
            ["a", "version"], [field.name.value for field in document.definition("Query").fields]
        )

    def test_duplicate_names_rejected(self) -> None:
        registry = ExtensionRegistry().register(SchemaExtension("version", _add_version_type))
        with self.assertRaises(DirectiveRegistrationError):
            registry.register(SchemaExtension("version", _add_version_field))

    def test_extensions_must_return_a_document(self) -> None:
        registry = ExtensionRegistry().register(SchemaExtension("broken", lambda document: None))
        with self.assertRaises(AssertionError):
            registry.apply(DocumentAST.from_source("type Query { a: Int }"))

    def test_empty_registry_returns_document(self) -> None:
        document = DocumentAST.from_source("type Query { a: Int }")
        self.assertIs(document, ExtensionRegistry().apply(document))

    def test_registry_as_extension_hook(self) -> None:
        registry = ExtensionRegistry().register(SchemaExtension("version", _add_version_type))
        document = build_schema_ast(
            "type Query { a: Int }", DirectiveRegistry(), extension_hook=registry.apply
        )

        # Extensions run after the pagination info types are installed.
        self.assertEqual(
            ["Query", "PaginatorInfo", "PageInfo", "Version"],
            [definition.name.value for definition in document],
        )
