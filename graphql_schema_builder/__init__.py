# Copyright 2019-present Kensho Technologies, LLC.
"""Commonly-used functions and data types from this package."""
from .builder import (  # noqa
    ExtensionHook,
    apply_arg_manipulators,
    apply_field_manipulators,
    apply_node_manipulators,
    build_document_ast,
    build_schema_ast,
    merge_type_extensions,
)
from .config import DEFAULT_CONFIG, OrphanExtensionPolicy, SchemaBuilderConfig  # noqa
from .directive_registry import (  # noqa
    ArgManipulator,
    DirectiveRegistry,
    FieldManipulator,
    NodeManipulator,
)
from .directives import default_directive_registry, register_builtin_directives  # noqa
from .document import DocumentAST  # noqa
from .exceptions import (  # noqa
    DirectiveManipulationError,
    DirectiveRegistrationError,
    ExtensionTargetError,
    SchemaBuilderError,
    SchemaParseError,
)
from .extensions import ExtensionRegistry, SchemaExtension  # noqa
from .pagination import PAGE_INFO_TYPE_NAME, PAGINATOR_INFO_TYPE_NAME  # noqa


__package_name__ = "graphql-schema-builder"
__version__ = "1.0.0"
