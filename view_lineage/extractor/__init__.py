"""Base column extraction from parsed view XML."""

from view_lineage.extractor.lineage_extractor import BaseTableDataSource, LineageExtractor

__all__ = ["BaseTableDataSource", "LineageExtractor"]
