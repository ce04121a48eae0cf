# Copyright 2019-present Kensho Technologies, LLC.
"""Build a fully-resolved schema AST by applying directive-driven transformations.

The schema document is threaded through the following passes, in this exact order:
1. node manipulators, on all pending type extensions and then on all type definitions;
2. merging of object type extensions into their base object types;
3. field manipulators, on every field of every object type;
4. arg manipulators, on every argument of every field of every object type;
5. installation of the PaginatorInfo and PageInfo types;
6. the extension hook, e.g. ExtensionRegistry.apply.

Node manipulators run before the merge because they may need to react to a type extension
before it is folded into its base type. Field and arg manipulators run after the merge because
they must see the final set of fields of each type, including those contributed by extensions.

Every pass takes the current document and returns the next one. Manipulators additionally
receive the original document, a snapshot taken before the first pass. Any error raised by a
pass aborts the whole build: a partially transformed schema is never returned.
"""
import logging
from typing import Callable, Optional

from funcy import identity, ldistinct
from graphql.language.ast import ObjectTypeDefinitionNode, ObjectTypeExtensionNode

from .ast_manipulation import get_ast_name, get_copy_of_node_with_new_attributes
from .config import DEFAULT_CONFIG, OrphanExtensionPolicy, SchemaBuilderConfig
from .directive_registry import DirectiveRegistry
from .document import DocumentAST
from .exceptions import ExtensionTargetError
from .pagination import add_pagination_info_types


logger = logging.getLogger(__name__)


ExtensionHook = Callable[[DocumentAST], DocumentAST]


def build_schema_ast(
    schema_string: str,
    directive_registry: DirectiveRegistry,
    extension_hook: Optional[ExtensionHook] = None,
    config: SchemaBuilderConfig = DEFAULT_CONFIG,
) -> DocumentAST:
    """Parse the schema text and build it into a fully-resolved schema AST.

    Args:
        schema_string: str, GraphQL schema language text
        directive_registry: DirectiveRegistry resolving directive applications to manipulators
        extension_hook: optional function applied once to the fully-assembled document, and
                        whose result is returned. Defaults to the identity function
        config: SchemaBuilderConfig controlling the build

    Returns:
        DocumentAST, the transformed schema

    Raises:
        - SchemaParseError if the schema text or a built-in schema fragment cannot be parsed
        - DirectiveManipulationError if a manipulator rejects the schema
        - ExtensionTargetError if an object type extension has no base type, and the config
          requires such extensions to be rejected
    """
    document = DocumentAST.from_source(schema_string)
    return build_document_ast(
        document, directive_registry, extension_hook=extension_hook, config=config
    )


def build_document_ast(
    document: DocumentAST,
    directive_registry: DirectiveRegistry,
    extension_hook: Optional[ExtensionHook] = None,
    config: SchemaBuilderConfig = DEFAULT_CONFIG,
) -> DocumentAST:
    """Build an already-parsed document into a fully-resolved schema AST.

    See build_schema_ast for a description of the arguments and errors. The input document may
    be modified in place by manipulators; the returned document is the one to use.
    """
    if extension_hook is None:
        extension_hook = identity

    if config.copy_original_document:
        original_document = document.copy()
    else:
        original_document = document

    try:
        logger.debug("Applying node manipulators to %s.", document)
        document = apply_node_manipulators(document, original_document, directive_registry)

        logger.debug("Merging type extensions of %s.", document)
        document = merge_type_extensions(document, config.orphan_extension_policy)

        logger.debug("Applying field manipulators to %s.", document)
        document = apply_field_manipulators(document, original_document, directive_registry)

        logger.debug("Applying arg manipulators to %s.", document)
        document = apply_arg_manipulators(document, original_document, directive_registry)

        document = add_pagination_info_types(document)
        document = _check_is_document(extension_hook(document), "the extension hook")
    except Exception as e:
        logger.error("Failed to build the schema AST: %s", e)
        raise

    logger.debug("Built %s.", document)
    return document


def apply_node_manipulators(
    document: DocumentAST, original_document: DocumentAST, directive_registry: DirectiveRegistry
) -> DocumentAST:
    """Apply the node manipulators of all type extensions, then of all type definitions.

    The nodes to visit are collected before the first manipulator runs: nodes that manipulators
    add to the document are not visited, and manipulators receive the nodes as they were when
    the pass started.
    """
    nodes = document.type_extension_definitions() + document.type_definitions()
    for node in nodes:
        for manipulator in directive_registry.node_manipulators(node):
            document = _check_is_document(
                manipulator(node, document, original_document),
                "the node manipulator of {}".format(get_ast_name(node)),
            )
    return document


def merge_type_extensions(
    document: DocumentAST,
    orphan_extension_policy: OrphanExtensionPolicy = OrphanExtensionPolicy.Ignore,
) -> DocumentAST:
    """Fold the pending extensions of every object type into the object type's definition.

    The merged definition has the fields of the base type followed by the fields of each of its
    extensions, in the order in which the extensions appear. Interfaces of the extensions are
    appended in the same manner, skipping those the type already implements. Directives of the
    extensions only apply to the extensions themselves, and are not carried over. Extensions of
    other kinds of types are not examined, and stay pending.

    Raises:
        ExtensionTargetError if an object type extension has no base type at all, and
        orphan_extension_policy is Raise
    """
    for object_type in document.object_type_definitions():
        type_name = get_ast_name(object_type)
        extensions = [
            extension
            for extension in document.type_extension_definitions(type_name)
            if isinstance(extension, ObjectTypeExtensionNode)
        ]
        if not extensions:
            continue

        merged_type = object_type
        for extension in extensions:
            merged_type = _merge_object_type_extension(merged_type, extension)
            document = document.mark_type_extension_merged(extension)

        document = document.set_definition(merged_type)

    return _handle_orphan_extensions(document, orphan_extension_policy)


def apply_field_manipulators(
    document: DocumentAST, original_document: DocumentAST, directive_registry: DirectiveRegistry
) -> DocumentAST:
    """Apply the field manipulators of every field of every object type, in order.

    As with node manipulators, the object types and their fields are collected when the pass
    starts. A manipulator that changes a field should install the change by type and field name,
    e.g. through DocumentAST.replace_field, rather than by reinstalling the owner type it got.
    """
    for object_type in document.object_type_definitions():
        for field in object_type.fields or ():
            for manipulator in directive_registry.field_manipulators(field):
                document = _check_is_document(
                    manipulator(field, object_type, document, original_document),
                    "the field manipulator of {}.{}".format(
                        get_ast_name(object_type), get_ast_name(field)
                    ),
                )
    return document


def apply_arg_manipulators(
    document: DocumentAST, original_document: DocumentAST, directive_registry: DirectiveRegistry
) -> DocumentAST:
    """Apply the arg manipulators of every argument of every field of every object type."""
    for object_type in document.object_type_definitions():
        for field in object_type.fields or ():
            for argument in field.arguments or ():
                for manipulator in directive_registry.arg_manipulators(argument):
                    document = _check_is_document(
                        manipulator(argument, field, object_type, document, original_document),
                        "the arg manipulator of {}.{}({})".format(
                            get_ast_name(object_type),
                            get_ast_name(field),
                            get_ast_name(argument),
                        ),
                    )
    return document


def _merge_object_type_extension(
    object_type: ObjectTypeDefinitionNode, extension: ObjectTypeExtensionNode
) -> ObjectTypeDefinitionNode:
    """Return a copy of the object type with the extension's additions appended."""
    interfaces = ldistinct(
        tuple(object_type.interfaces or ()) + tuple(extension.interfaces or ()),
        key=get_ast_name,
    )
    return get_copy_of_node_with_new_attributes(
        object_type,
        fields=tuple(object_type.fields or ()) + tuple(extension.fields or ()),
        interfaces=tuple(interfaces),
    )


def _handle_orphan_extensions(
    document: DocumentAST, orphan_extension_policy: OrphanExtensionPolicy
) -> DocumentAST:
    """Apply the policy to pending object type extensions whose base type does not exist."""
    orphan_extensions = [
        extension
        for extension in document.type_extension_definitions()
        if isinstance(extension, ObjectTypeExtensionNode)
        and not document.has_definition(get_ast_name(extension))
    ]
    if not orphan_extensions:
        return document

    orphan_names = sorted({get_ast_name(extension) for extension in orphan_extensions})
    if orphan_extension_policy == OrphanExtensionPolicy.Raise:
        raise ExtensionTargetError(
            "Found type extensions of types that are not defined: {}".format(orphan_names)
        )
    elif orphan_extension_policy == OrphanExtensionPolicy.Drop:
        logger.info("Dropping type extensions of types that are not defined: %s", orphan_names)
        for extension in orphan_extensions:
            document = document.remove_type_extension(extension)
    elif orphan_extension_policy == OrphanExtensionPolicy.Ignore:
        logger.debug("Leaving type extensions of undefined types unmerged: %s", orphan_names)
    else:
        raise AssertionError(
            "Unreachable code reached. Unknown orphan extension policy: {}".format(
                orphan_extension_policy
            )
        )
    return document


def _check_is_document(result: object, description: str) -> DocumentAST:
    """Ensure a manipulator returned a document, and return it."""
    if not isinstance(result, DocumentAST):
        raise AssertionError(
            "Expected {} to return a DocumentAST, but it returned {}.".format(
                description, type(result).__name__
            )
        )
    return result
