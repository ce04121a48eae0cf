# Copyright 2019-present Kensho Technologies, LLC.
from typing import Optional, Tuple


class SchemaBuilderError(Exception):
    """Generic error when building a schema AST."""


class SchemaParseError(SchemaBuilderError):
    """Exception raised when schema text or an inline schema fragment could not be parsed.

    This could be due to many reasons, such as:
    - the text is not valid GraphQL schema language;
    - the text contains executable definitions (operations or fragments);
    - a fragment does not contain exactly one definition of the expected kind.
    """

    source_text: Optional[str]
    source_location: Optional[Tuple[int, int]]

    def __init__(
        self,
        message: str,
        source_text: Optional[str] = None,
        source_location: Optional[Tuple[int, int]] = None,
    ) -> None:
        """Record the offending text and its (line, column) location, when known."""
        super().__init__(message)
        self.source_text = source_text
        self.source_location = source_location

    def __str__(self) -> str:
        """Describe the error, including its location if one is known."""
        message = super().__str__()
        if self.source_location is None:
            return message
        line, column = self.source_location
        return "{} (line {}, column {})".format(message, line, column)


class DirectiveManipulationError(SchemaBuilderError):
    """Exception raised when a directive rejects the schema it is asked to transform.

    For example:
    - a directive is applied to a field or argument whose type it cannot handle;
    - a directive is given missing or malformed arguments;
    - a directive would produce conflicting definitions.
    """


class ExtensionTargetError(SchemaBuilderError):
    """Exception raised when a type extension refers to a base type that does not exist."""


class DirectiveRegistrationError(SchemaBuilderError):
    """Exception raised when a directive or schema extension cannot be registered."""
