"""
Custom exception classes for view lineage extraction.

This module defines all custom exceptions used throughout the view_lineage
package. Parse errors are scoped to a single view document; catalog errors
are fatal for the whole run.
"""

from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from view_lineage.models.dom import ParseErrorRecord
    from view_lineage.models.view import ViewRecord


class ErrorCode(str, Enum):
    """Machine-readable codes carried by parse and catalog errors."""

    TOKENIZATION = "TOKENIZATION"
    MALFORMED_ATTRIBUTES = "MALFORMED_ATTRIBUTES"
    UNKNOWN_ENTITY = "UNKNOWN_ENTITY"
    CATALOG = "CATALOG"


class LineageError(Exception):
    """Base exception class for all view lineage errors.

    Attributes:
        message: Human-readable error message describing the error.
    """

    def __init__(self, message: str) -> None:
        """Initialize a LineageError with a message.

        Args:
            message: Error message describing what went wrong.
        """
        self.message = message
        super().__init__(self.message)


class XmlParseError(LineageError):
    """Base class for errors raised while parsing a view's XML.

    Attributes:
        message: Error message.
        code: ErrorCode identifying the kind of failure.
        position: 1-based character offset in the document, if known.
        node_name: Name of the node being built when the error occurred.
    """

    code: ErrorCode = ErrorCode.TOKENIZATION

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        node_name: Optional[str] = None,
    ) -> None:
        self.position = position
        self.node_name = node_name
        super().__init__(message)

    def to_record(self) -> "ParseErrorRecord":
        """Convert the exception into a structured error record."""
        from view_lineage.models.dom import ParseErrorRecord

        return ParseErrorRecord(
            code=self.code,
            message=self.message,
            position=self.position,
            node_name=self.node_name,
        )


class TokenizationError(XmlParseError):
    """Raised when no token alternative matches at the current offset.

    Also raised for unbalanced element tags, since the element stack can no
    longer describe the document.
    """

    code = ErrorCode.TOKENIZATION


class MalformedAttributesError(XmlParseError):
    """Raised when a start tag's attribute list does not fully tokenize."""

    code = ErrorCode.MALFORMED_ATTRIBUTES


class UnknownEntityError(XmlParseError):
    """Raised when an entity reference is not one the decoder knows.

    Only the five predefined XML entities and numeric character references
    are understood. Anything else of the form ``&name;`` ends up here.

    Attributes:
        entity: The offending token, e.g. ``"&foo;"``.
    """

    code = ErrorCode.UNKNOWN_ENTITY

    def __init__(
        self,
        entity: str,
        position: Optional[int] = None,
        node_name: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        self.entity = entity
        super().__init__(
            message or f"Unrecognized entity {entity}",
            position=position,
            node_name=node_name,
        )


class CatalogError(LineageError):
    """Raised when reading from the view catalog fails.

    Catalog errors are never retried and always abort the run.
    """

    code = ErrorCode.CATALOG


class ViewParseError(LineageError):
    """Raised in fail mode when one view of a batch cannot be parsed.

    Attributes:
        view: The view whose XML failed to parse.
        error: Structured record of the underlying parse error.
    """

    def __init__(self, view: "ViewRecord", error: "ParseErrorRecord") -> None:
        self.view = view
        self.error = error
        message = (
            f"Error parsing {view.object_suffix} {view.object_name} "
            f"in package {view.package_id}"
        )
        if error.position is not None:
            message += f" at offset {error.position}"
        message += f": {error.message}"
        super().__init__(message)
