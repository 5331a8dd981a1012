"""
Warning system for view lineage extraction.

This module defines warning and error collection functionality for the
lineage pipeline, allowing warnings and errors to be collected while views
are analyzed and reported to users afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

VALID_LEVELS = ("INFO", "WARNING", "ERROR")


@dataclass
class LineageWarning:
    """Warning or error message for lineage extraction.

    Attributes:
        level: Severity level ("INFO", "WARNING", "ERROR").
        message: Warning or error message text.
        context: Optional context information, usually a view identifier.

    Example:
        >>> warning = LineageWarning(
        ...     level="WARNING",
        ...     message="View has no base columns",
        ...     context="acme.sales/CV_ORDERS"
        ... )
        >>> warning.level
        'WARNING'
    """

    level: str
    message: str
    context: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate warning level."""
        if self.level not in VALID_LEVELS:
            raise ValueError(
                f"Invalid warning level: {self.level}. "
                f"Must be one of {list(VALID_LEVELS)}"
            )

    def __str__(self) -> str:
        if self.context:
            return f"[{self.context}] {self.message}"
        return self.message


class WarningCollector:
    """Collects warnings and errors during lineage extraction.

    Attributes:
        warnings: List of LineageWarning objects collected so far.

    Example:
        >>> collector = WarningCollector()
        >>> collector.add("WARNING", "Unsupported view kind")
        >>> collector.has_errors()
        False
        >>> collector.add("ERROR", "Failed to parse view")
        >>> collector.has_errors()
        True
    """

    def __init__(self) -> None:
        """Initialize a WarningCollector."""
        self.warnings: list[LineageWarning] = []

    def add(
        self, level: str, message: str, context: Optional[str] = None
    ) -> None:
        """Add a warning or error message.

        Args:
            level: Severity level ("INFO", "WARNING", "ERROR").
            message: Warning or error message text.
            context: Optional context information (e.g., a view id).
        """
        self.warnings.append(
            LineageWarning(level=level, message=message, context=context)
        )

    def extend(self, other: WarningCollector) -> None:
        """Append all warnings collected by another collector."""
        self.warnings.extend(other.warnings)

    def has_errors(self) -> bool:
        """Check if any error-level warnings exist."""
        return any(warning.level == "ERROR" for warning in self.warnings)

    def get_all(self) -> list[LineageWarning]:
        """Get all collected warnings and errors, in insertion order."""
        return self.warnings.copy()

    def get_by_level(self, level: str) -> list[LineageWarning]:
        """Get warnings and errors by severity level.

        Args:
            level: Severity level to filter by ("INFO", "WARNING", "ERROR").

        Returns:
            List of LineageWarning objects with the specified level.
        """
        return [
            warning for warning in self.warnings if warning.level == level
        ]

    def clear(self) -> None:
        """Clear all collected warnings and errors."""
        self.warnings.clear()

    def add_parse_failure(
        self,
        view_id: str,
        message: str,
        position: Optional[int] = None,
    ) -> None:
        """Add an error for a view whose XML could not be parsed.

        Args:
            view_id: ``package/object`` identifier of the view.
            message: Parse error message.
            position: Optional 1-based offset of the failure.

        Example:
            >>> collector = WarningCollector()
            >>> collector.add_parse_failure("pkg/CV_A", "No token found", 42)
            >>> collector.get_all()[0].message
            'Failed to parse view at offset 42: No token found'
        """
        where = f" at offset {position}" if position is not None else ""
        self.add("ERROR", f"Failed to parse view{where}: {message}", view_id)

    def add_unsupported_view(self, view_id: str, object_suffix: str) -> None:
        """Add a warning for a view whose kind has no lineage pattern."""
        self.add(
            "WARNING",
            f"No lineage pattern for object suffix '{object_suffix}', skipped.",
            view_id,
        )

    def get_summary(self) -> dict[str, int]:
        """Get a summary of warnings by level.

        Example:
            >>> collector = WarningCollector()
            >>> collector.add("INFO", "Info 1")
            >>> collector.add("ERROR", "Error 1")
            >>> collector.get_summary() == {"INFO": 1, "WARNING": 0, "ERROR": 1}
            True
        """
        summary: dict[str, int] = {level: 0 for level in VALID_LEVELS}
        for warning in self.warnings:
            summary[warning.level] = summary.get(warning.level, 0) + 1
        return summary

    def __len__(self) -> int:
        return len(self.warnings)
