"""
DOM node model.

This module defines the flat, parent-linked node table produced by the XML
parser. One parse yields an ordered list of DomNode objects whose index is
the node id; node 0 is always the synthetic document root.
"""

from dataclasses import asdict, dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional

from view_lineage.exceptions import ErrorCode


class NodeType(IntEnum):
    """DOM node type constants.

    The numbering follows the W3C DOM ``Node.nodeType`` values. The parser
    never produces ENTITY_REFERENCE, ENTITY, DOCUMENT_FRAGMENT or NOTATION
    nodes; they are listed for compatibility with generic DOM code.

    Example:
        >>> NodeType.ELEMENT.value
        1
        >>> NodeType(2).name
        'ATTRIBUTE'
    """

    ELEMENT = 1
    ATTRIBUTE = 2
    TEXT = 3
    CDATA_SECTION = 4
    ENTITY_REFERENCE = 5
    ENTITY = 6
    PROCESSING_INSTRUCTION = 7
    COMMENT = 8
    DOCUMENT = 9
    DOCUMENT_TYPE = 10
    DOCUMENT_FRAGMENT = 11
    NOTATION = 12


TEXT_NODE_NAME = "#text"
COMMENT_NODE_NAME = "#comment"
DOCUMENT_NODE_NAME = "#document"


@dataclass(frozen=True)
class DomNode:
    """A single row of the parsed node table.

    Attributes:
        node_id: Unique, contiguous id in pre-order emission order. 0 is
            the document root.
        parent_node_id: Id of the parent node, None only for the root.
        node_type: DOM node type.
        node_name: Tag name for elements, attribute name for attributes,
            target for processing instructions, type name for document
            types, and "#text"/"#comment"/"#document" otherwise.
        node_value: Decoded text for text, CDATA and comment nodes, data
            for processing instructions, the attribute value for
            attributes, None for the rest.
        token_text: Raw matched substring of the source document.
        pos: 1-based character offset of the token in the source.
        length: Length of the token in the source.

    Example:
        >>> node = DomNode(1, 0, NodeType.ELEMENT, "Calculation:scenario")
        >>> node.is_element
        True
    """

    node_id: int
    parent_node_id: Optional[int]
    node_type: NodeType
    node_name: str
    node_value: Optional[str] = None
    token_text: Optional[str] = field(default=None, repr=False)
    pos: int = 1
    length: int = 0

    @property
    def is_element(self) -> bool:
        return self.node_type == NodeType.ELEMENT

    @property
    def is_attribute(self) -> bool:
        return self.node_type == NodeType.ATTRIBUTE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (for serialization).

        Returns:
            Dictionary with the node table columns; ``node_type`` is the
            numeric DOM constant and the length column is named ``len``.
        """
        return {
            "node_id": self.node_id,
            "parent_node_id": self.parent_node_id,
            "node_type": int(self.node_type),
            "node_name": self.node_name,
            "node_value": self.node_value,
            "token_text": self.token_text,
            "pos": self.pos,
            "len": self.length,
        }


@dataclass(frozen=True)
class ParseErrorRecord:
    """Structured description of a parse failure.

    Attributes:
        code: ErrorCode of the failure.
        message: Human-readable message.
        position: 1-based offset in the document, if known.
        node_name: Name of the node being built, if known.
    """

    code: ErrorCode
    message: str
    position: Optional[int] = None
    node_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["code"] = self.code.value
        return data


@dataclass
class ParseOutcome:
    """Tagged result of a parse: either a node table or an error record.

    When ``error`` is set, ``nodes`` holds whatever was emitted before the
    failure and must not be used for lineage.

    Example:
        >>> outcome = XmlParser().try_parse("<a/>")
        >>> outcome.ok
        True
    """

    nodes: List[DomNode] = field(default_factory=list)
    error: Optional[ParseErrorRecord] = None

    @property
    def ok(self) -> bool:
        return self.error is None
