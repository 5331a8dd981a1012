"""Version information."""

__version__ = "1.0.0"
__version_info__ = (1, 0, 0)

# Version history
CHANGELOG = """
# Changelog

## v1.0.0

**Base column lineage for information views**

- XML parser producing a flat DOM node table with entity decoding
- View set resolution with one-hop dependency expansion
- Analytic/attribute view keyMapping and measureMapping matching
- Calculation view DATA_BASE_TABLE data source matching
- Base column usage lookup by schema/table/column pattern
- Fail/warn/ignore handling of unparseable views

**CLI**

- Base columns of matching views
- --usage-schema / --usage-table / --usage-column
- --dump-dom node table listing
- pretty, table and JSON output, --export

### Known Limitations

- No DTD validation, namespaces or external entities
- Dependency expansion stops after one hop
"""
