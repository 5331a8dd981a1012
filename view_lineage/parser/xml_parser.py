"""
Regex-driven XML parser producing a flat DOM node table.

This module defines the XmlParser class. It scans raw XML left to right with
one composite pattern, classifies each token, and emits DomNode rows whose
parent links encode the document tree. This is not a conforming XML parser:
there is no DTD validation, no namespace processing and no external entity
resolution. It does keep track of the tree structure of a well-formed
document, and it rejects input whose tags do not nest.
"""

from typing import List, Optional

from view_lineage.exceptions import (
    MalformedAttributesError,
    TokenizationError,
    UnknownEntityError,
    XmlParseError,
)
from view_lineage.models.dom import (
    COMMENT_NODE_NAME,
    DOCUMENT_NODE_NAME,
    TEXT_NODE_NAME,
    DomNode,
    NodeType,
    ParseOutcome,
)
from view_lineage.parser.entities import decode_entities
from view_lineage.parser.grammar import ATTRIBUTE_PATTERN, TOKEN_KINDS, TOKEN_PATTERN

CONTEXT_CHARS = 30


class ParserState:
    """Mutable state of one parse.

    Attributes:
        text: The document being parsed.
        offset: 0-based offset of the next unread character.
        next_id: Id the next emitted node will receive.
        element_stack: Ids of open elements; the top is the current parent.
            Starts with the document root (id 0).
        nodes: Emitted nodes, index == node_id.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.offset = 0
        self.nodes: List[DomNode] = [
            DomNode(
                node_id=0,
                parent_node_id=None,
                node_type=NodeType.DOCUMENT,
                node_name=DOCUMENT_NODE_NAME,
                pos=1,
                length=len(text),
            )
        ]
        self.next_id = 1
        self.element_stack: List[int] = [0]

    @property
    def parent_id(self) -> int:
        return self.element_stack[-1]

    def emit(
        self,
        node_type: NodeType,
        node_name: str,
        node_value: Optional[str],
        token_text: str,
        offset: int,
        parent_id: Optional[int] = None,
    ) -> DomNode:
        """Append a node and return it.

        Ids are only consumed by emitted nodes, so they stay contiguous even
        though end tags and stripped whitespace produce no rows.
        """
        node = DomNode(
            node_id=self.next_id,
            parent_node_id=self.parent_id if parent_id is None else parent_id,
            node_type=node_type,
            node_name=node_name,
            node_value=node_value,
            token_text=token_text,
            pos=offset + 1,
            length=len(token_text),
        )
        self.nodes.append(node)
        self.next_id += 1
        return node


class XmlParser:
    """XML tokenizer and tree builder.

    Usage:
        parser = XmlParser()

        # Raise on the first error
        nodes = parser.parse('<a x="1"><b/>text</a>')

        # Or get a tagged result and branch on it
        outcome = parser.try_parse(xml)
        if outcome.ok:
            ...
        else:
            print(outcome.error.message)

    Attributes:
        strip_whitespace_text: If True, text runs consisting only of
            whitespace do not produce text nodes.
    """

    def __init__(self, strip_whitespace_text: bool = True) -> None:
        self.strip_whitespace_text = strip_whitespace_text

    def parse(self, xml: str) -> List[DomNode]:
        """Parse a document into a node table.

        Args:
            xml: Raw XML text.

        Returns:
            List of DomNode, index == node_id, root first.

        Raises:
            TokenizationError: If no token matches at some offset, or tags
                do not nest.
            MalformedAttributesError: If a start tag's attribute list does
                not fully tokenize.
            UnknownEntityError: If a text run or attribute value contains
                an unknown entity reference.
        """
        state = ParserState(xml)
        self._scan(state)
        return state.nodes

    def try_parse(self, xml: str) -> ParseOutcome:
        """Parse a document, reporting failure as a record instead of raising.

        Args:
            xml: Raw XML text.

        Returns:
            ParseOutcome with the full node table, or with an error record
            and the nodes emitted before the failure.
        """
        state = ParserState(xml)
        try:
            self._scan(state)
        except XmlParseError as e:
            return ParseOutcome(nodes=state.nodes, error=e.to_record())
        return ParseOutcome(nodes=state.nodes)

    def _scan(self, state: ParserState) -> None:
        text = state.text
        end = len(text)
        while state.offset < end:
            match = TOKEN_PATTERN.match(text, state.offset)
            if match is None:
                raise TokenizationError(
                    self._describe_position(text, state.offset),
                    position=state.offset + 1,
                )

            kind = next(k for k in TOKEN_KINDS if match.group(k) is not None)
            handler = getattr(self, f"_handle_{kind}")
            handler(state, match)
            state.offset = match.end()

        if len(state.element_stack) > 1:
            open_element = state.nodes[state.element_stack[-1]]
            raise TokenizationError(
                f"Unclosed element <{open_element.node_name}> opened at "
                f"offset {open_element.pos}",
                position=end + 1,
                node_name=open_element.node_name,
            )

    def _handle_pi(self, state: ParserState, match) -> None:
        state.emit(
            NodeType.PROCESSING_INSTRUCTION,
            match.group("pi_target"),
            match.group("pi_data") or "",
            match.group(0),
            match.start(),
        )

    def _handle_comment(self, state: ParserState, match) -> None:
        state.emit(
            NodeType.COMMENT,
            COMMENT_NODE_NAME,
            match.group("comment_body"),
            match.group(0),
            match.start(),
        )

    def _handle_cdata(self, state: ParserState, match) -> None:
        # CDATA content is literal, no entity decoding
        state.emit(
            NodeType.CDATA_SECTION,
            TEXT_NODE_NAME,
            match.group("cdata_body"),
            match.group(0),
            match.start(),
        )

    def _handle_doctype(self, state: ParserState, match) -> None:
        state.emit(
            NodeType.DOCUMENT_TYPE,
            match.group("doctype_name"),
            None,
            match.group(0),
            match.start(),
        )

    def _handle_start_tag(self, state: ParserState, match) -> None:
        element = state.emit(
            NodeType.ELEMENT,
            match.group("start_tag_name"),
            None,
            match.group(0),
            match.start(),
        )
        attributes = match.group("start_tag_attributes")
        if attributes:
            self._emit_attributes(
                state, element, attributes, match.start("start_tag_attributes")
            )
        if not match.group("self_closing"):
            state.element_stack.append(element.node_id)

    def _emit_attributes(
        self, state: ParserState, element: DomNode, attributes: str, offset: int
    ) -> None:
        index = 0
        end = len(attributes.rstrip())
        while index < end:
            match = ATTRIBUTE_PATTERN.match(attributes, index)
            if match is None:
                raise MalformedAttributesError(
                    f"No attribute found in {attributes!r} at index {index}",
                    position=offset + index + 1,
                    node_name=element.node_name,
                )

            name = match.group("name")
            quoted = match.group("value")
            value_offset = offset + match.start("value") + 1
            value = self._decode(quoted[1:-1], value_offset, name)
            state.emit(
                NodeType.ATTRIBUTE,
                name,
                value,
                match.group(0),
                offset + match.start(),
                parent_id=element.node_id,
            )
            index = match.end()

    def _handle_end_tag(self, state: ParserState, match) -> None:
        name = match.group("end_tag_name")
        if len(state.element_stack) == 1:
            raise TokenizationError(
                f"End tag </{name}> at offset {match.start() + 1} "
                f"has no open element",
                position=match.start() + 1,
                node_name=name,
            )
        open_element = state.nodes[state.element_stack.pop()]
        if open_element.node_name != name:
            raise TokenizationError(
                f"End tag </{name}> at offset {match.start() + 1} does not "
                f"match open element <{open_element.node_name}>",
                position=match.start() + 1,
                node_name=name,
            )

    def _handle_text(self, state: ParserState, match) -> None:
        token = match.group(0)
        if self.strip_whitespace_text and token.isspace():
            return
        value = self._decode(token, match.start(), TEXT_NODE_NAME)
        state.emit(NodeType.TEXT, TEXT_NODE_NAME, value, token, match.start())

    @staticmethod
    def _decode(text: str, offset: int, node_name: str) -> str:
        """Decode entities, reporting failures at their document offset."""
        try:
            return decode_entities(text)
        except UnknownEntityError as e:
            position = offset + e.position if e.position is not None else None
            raise UnknownEntityError(
                e.entity,
                position=position,
                node_name=node_name,
                message=e.message,
            ) from e

    @staticmethod
    def _describe_position(text: str, offset: int) -> str:
        line = text.count("\n", 0, offset) + 1
        column = offset - text.rfind("\n", 0, offset)
        excerpt = text[offset:offset + CONTEXT_CHARS]
        return (
            f"No token found at offset {offset + 1} "
            f"(line {line}, column {column}) near {excerpt!r}"
        )


def parse_xml(xml: str, strip_whitespace_text: bool = True) -> List[DomNode]:
    """Parse XML text into a node table. See XmlParser.parse."""
    return XmlParser(strip_whitespace_text=strip_whitespace_text).parse(xml)
