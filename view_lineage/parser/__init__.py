"""
XML parsing.

This package contains the entity decoder, the regex-driven XML parser that
builds a flat DOM node table, and the indexed queries over that table.
"""

from view_lineage.parser.dom_index import DomIndex
from view_lineage.parser.entities import decode_entities
from view_lineage.parser.xml_parser import XmlParser, parse_xml

__all__ = [
    "DomIndex",
    "XmlParser",
    "decode_entities",
    "parse_xml",
]
