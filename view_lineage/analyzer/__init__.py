"""
Lineage analyzers.

This package contains the pipeline entry points: ViewLineageAnalyzer for the
base columns of matching views and BaseColumnUsageAnalyzer for the views
using matching base columns.
"""

from view_lineage.analyzer.usage_analyzer import BaseColumnUsageAnalyzer
from view_lineage.analyzer.view_analyzer import ViewLineageAnalyzer

__all__ = [
    "BaseColumnUsageAnalyzer",
    "ViewLineageAnalyzer",
]
