"""
Configuration model for view lineage extraction.

This module defines the LineageConfig class and ErrorMode enum, which control
the behavior of the lineage pipeline, including how parse failures of single
views are handled and which mapping elements are recognized.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class ErrorMode(str, Enum):
    """Enumeration of error handling modes for view parse failures.

    Attributes:
        FAIL: Abort the whole batch with ViewParseError on the first view
            whose XML cannot be parsed.
        WARN: Record the failure against the view, log a warning and carry
            on with the remaining views.
        IGNORE: Record the failure against the view without logging and
            carry on. Failures are still reported on the result.

    Example:
        >>> mode = ErrorMode.FAIL
        >>> mode.value
        'fail'
        >>> ErrorMode.values()
        ['fail', 'warn', 'ignore']
    """

    FAIL = "fail"
    WARN = "warn"
    IGNORE = "ignore"

    @classmethod
    def values(cls) -> list[str]:
        """Return a list of all possible error mode values.

        Returns:
            List of string values for all error modes in the enum.
        """
        return [member.value for member in cls]


DEFAULT_MAPPING_ELEMENTS: Tuple[str, ...] = ("keyMapping", "measureMapping")


@dataclass
class LineageConfig:
    """Configuration settings for view lineage extraction.

    Attributes:
        on_parse_error: What to do when a view's XML fails to parse.
            Defaults to ErrorMode.WARN.
        recursive: Default for the dependency expansion of the view set.
            When True, views reachable by one dependency or cross-reference
            hop from the matched views are analyzed too. Defaults to True.
        strip_whitespace_text: If True, whitespace-only text runs do not
            produce text nodes. Defaults to True.
        mapping_elements: Element names carrying schemaName,
            columnObjectName and columnName attributes in analytic and
            attribute views. Defaults to keyMapping and measureMapping.

    Example:
        >>> config = LineageConfig(on_parse_error=ErrorMode.FAIL)
        >>> config.recursive
        True
        >>> LineageConfig(mapping_elements=("keyMapping",)).mapping_elements
        ('keyMapping',)
    """

    on_parse_error: ErrorMode = ErrorMode.WARN
    recursive: bool = True
    strip_whitespace_text: bool = True
    mapping_elements: Tuple[str, ...] = DEFAULT_MAPPING_ELEMENTS

    def __post_init__(self) -> None:
        """Validate configuration settings."""
        if not isinstance(self.on_parse_error, ErrorMode):
            raise TypeError("on_parse_error must be an ErrorMode instance")
        if not isinstance(self.recursive, bool):
            raise TypeError("recursive must be a boolean")
        if not isinstance(self.strip_whitespace_text, bool):
            raise TypeError("strip_whitespace_text must be a boolean")
        if isinstance(self.mapping_elements, str):
            raise TypeError("mapping_elements must be a sequence of names")
        self.mapping_elements = tuple(self.mapping_elements)
        if not self.mapping_elements:
            raise ValueError("mapping_elements cannot be empty")
