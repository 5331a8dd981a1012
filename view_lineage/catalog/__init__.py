"""
View catalog interfaces and implementations.

This package contains the abstract ViewCatalog interface and providers
reading the catalog from a dictionary/JSON export or a live database.
"""

from view_lineage.catalog.dbapi_provider import DbApiViewCatalog
from view_lineage.catalog.dict_provider import DictViewCatalog
from view_lineage.catalog.provider import ViewCatalog

__all__ = [
    "DbApiViewCatalog",
    "DictViewCatalog",
    "ViewCatalog",
]
