"""
Utility functions and helpers for view lineage extraction.

This package contains LIKE-pattern matching and the warning collector.
"""

from view_lineage.utils.patterns import like_to_regex, matches_like
from view_lineage.utils.warnings import LineageWarning, WarningCollector

__all__ = [
    "like_to_regex",
    "matches_like",
    "LineageWarning",
    "WarningCollector",
]
