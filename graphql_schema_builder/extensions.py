# Copyright 2019-present Kensho Technologies, LLC.
from dataclasses import dataclass
import logging
from typing import Callable, Dict, List

from .document import DocumentAST
from .exceptions import DirectiveRegistrationError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemaExtension:
    """A schema-wide rewrite applied once, after all directives have been applied."""

    name: str
    manipulate_schema: Callable[[DocumentAST], DocumentAST]


class ExtensionRegistry(object):
    """Ordered collection of schema extensions, usable as the schema builder's extension hook."""

    def __init__(self) -> None:
        """Create a new empty registry."""
        self._extensions: Dict[str, SchemaExtension] = {}

    def register(self, extension: SchemaExtension) -> "ExtensionRegistry":
        """Add the extension after all previously registered ones.

        Raises:
            DirectiveRegistrationError if an extension with the same name is already registered
        """
        if extension.name in self._extensions:
            raise DirectiveRegistrationError(
                'A schema extension named "{}" is already registered.'.format(extension.name)
            )
        self._extensions[extension.name] = extension
        return self

    def extensions(self) -> List[SchemaExtension]:
        """Return the registered extensions, in registration order."""
        return list(self._extensions.values())

    def apply(self, document: DocumentAST) -> DocumentAST:
        """Thread the document through every registered extension, in registration order."""
        for extension in self._extensions.values():
            logger.debug("Applying schema extension %s.", extension.name)
            document = extension.manipulate_schema(document)
            if not isinstance(document, DocumentAST):
                raise AssertionError(
                    "Expected schema extension {} to return a DocumentAST, but it returned "
                    "{}.".format(extension.name, type(document).__name__)
                )
        return document
