"""
Tests for the XML parser.

This module checks the node table the parser emits: node kinds, parent
links, positions, whitespace handling and the errors raised for input that
does not tokenize.
"""

import time

import pytest

from view_lineage import (
    MalformedAttributesError,
    NodeType,
    TokenizationError,
    UnknownEntityError,
    XmlParser,
    parse_xml,
)
from view_lineage.exceptions import ErrorCode


def summarize(nodes):
    """Return (type, name, value, parent) tuples, skipping the root."""
    return [
        (node.node_type, node.node_name, node.node_value, node.parent_node_id)
        for node in nodes[1:]
    ]


class TestXmlParserBasics:
    """Tests for well-formed documents."""

    def setup_method(self):
        self.parser = XmlParser()

    def test_simple_document(self):
        """Test the canonical element/attribute/element/text document."""
        nodes = self.parser.parse('<a x="1"><b/>text</a>')

        assert summarize(nodes) == [
            (NodeType.ELEMENT, "a", None, 0),
            (NodeType.ATTRIBUTE, "x", "1", 1),
            (NodeType.ELEMENT, "b", None, 1),
            (NodeType.TEXT, "#text", "text", 1),
        ]

    def test_root_node(self):
        xml = "<a/>"
        root = self.parser.parse(xml)[0]

        assert root.node_id == 0
        assert root.parent_node_id is None
        assert root.node_type == NodeType.DOCUMENT
        assert root.node_name == "#document"
        assert root.length == len(xml)

    def test_node_ids_are_contiguous(self):
        nodes = self.parser.parse("<a>\n  <b>x</b>\n  <c/>\n</a>")

        assert [node.node_id for node in nodes] == list(range(len(nodes)))

    def test_self_closing_element_is_not_a_parent(self):
        """Test content after a self-closing tag belongs to the enclosing element."""
        nodes = self.parser.parse("<a><b/><c/></a>")

        assert [node.parent_node_id for node in nodes[1:]] == [0, 1, 1]

    def test_positions_and_lengths(self):
        xml = '<a x="1">hi</a>'
        nodes = self.parser.parse(xml)

        element, attribute, text = nodes[1:]
        assert (element.pos, element.length) == (1, len('<a x="1">'))
        assert xml[attribute.pos - 1:attribute.pos - 1 + attribute.length] == ' x="1"'
        assert (text.pos, text.length) == (10, 2)
        assert text.token_text == "hi"

    def test_single_quoted_attribute(self):
        nodes = self.parser.parse("<a x='1' y=\"2\"/>")

        assert [(n.node_name, n.node_value) for n in nodes[2:]] == [
            ("x", "1"),
            ("y", "2"),
        ]

    def test_whitespace_before_tag_end(self):
        nodes = self.parser.parse('<a x="1" ><b /></a >')

        assert summarize(nodes) == [
            (NodeType.ELEMENT, "a", None, 0),
            (NodeType.ATTRIBUTE, "x", "1", 1),
            (NodeType.ELEMENT, "b", None, 1),
        ]

    def test_self_closing_value_in_quotes(self):
        nodes = self.parser.parse('<a href="x/>y"/>')

        assert nodes[2].node_value == "x/>y"
        assert len(nodes) == 3

    def test_attribute_value_may_contain_gt(self):
        nodes = self.parser.parse('<a expr="x > 1"/>')

        assert nodes[2].node_value == "x > 1"

    def test_attribute_entities_are_decoded(self):
        nodes = self.parser.parse('<a title="Tom &amp; Jerry"/>')

        assert nodes[2].node_value == "Tom & Jerry"

    def test_text_entities_are_decoded(self):
        nodes = self.parser.parse("<a>1 &lt; 2</a>")

        assert nodes[2].node_value == "1 < 2"
        assert nodes[2].token_text == "1 &lt; 2"

    def test_qualified_names(self):
        nodes = self.parser.parse(
            '<Calculation:scenario xmlns:Calculation="urn:x" xsi:type="T"/>'
        )

        assert [node.node_name for node in nodes[1:]] == [
            "Calculation:scenario",
            "xmlns:Calculation",
            "xsi:type",
        ]

    def test_processing_instruction(self):
        nodes = self.parser.parse('<?xml version="1.0" encoding="UTF-8"?><a/>')

        pi = nodes[1]
        assert pi.node_type == NodeType.PROCESSING_INSTRUCTION
        assert pi.node_name == "xml"
        assert pi.node_value == 'version="1.0" encoding="UTF-8"'
        # pseudo-attributes are not emitted as attribute nodes
        assert [node.node_type for node in nodes[1:]] == [
            NodeType.PROCESSING_INSTRUCTION,
            NodeType.ELEMENT,
        ]

    def test_comment(self):
        nodes = self.parser.parse("<a><!-- note --></a>")

        assert nodes[2].node_type == NodeType.COMMENT
        assert nodes[2].node_name == "#comment"
        assert nodes[2].node_value == " note "
        assert nodes[2].parent_node_id == 1

    def test_cdata_is_not_decoded(self):
        nodes = self.parser.parse("<a><![CDATA[x < y &amp; z]]></a>")

        assert nodes[2].node_type == NodeType.CDATA_SECTION
        assert nodes[2].node_value == "x < y &amp; z"

    def test_doctype(self):
        nodes = self.parser.parse('<!DOCTYPE note SYSTEM "note.dtd"><note/>')

        assert nodes[1].node_type == NodeType.DOCUMENT_TYPE
        assert nodes[1].node_name == "note"

    def test_end_tag_with_trailing_space(self):
        nodes = self.parser.parse("<a>x</a >")

        assert len(nodes) == 3

    def test_text_outside_root(self):
        nodes = self.parser.parse("lead<a/>tail")

        assert [(n.node_type, n.node_value) for n in nodes[1:]] == [
            (NodeType.TEXT, "lead"),
            (NodeType.ELEMENT, None),
            (NodeType.TEXT, "tail"),
        ]

    def test_empty_document(self):
        nodes = self.parser.parse("")

        assert len(nodes) == 1
        assert nodes[0].node_type == NodeType.DOCUMENT

    def test_parse_xml_function(self):
        assert summarize(parse_xml("<a/>")) == [(NodeType.ELEMENT, "a", None, 0)]


class TestWhitespaceHandling:
    """Tests for whitespace-only text runs."""

    def test_whitespace_stripped_by_default(self):
        nodes = XmlParser().parse("<a>   </a>")

        assert summarize(nodes) == [(NodeType.ELEMENT, "a", None, 0)]

    def test_whitespace_kept_when_requested(self):
        nodes = XmlParser(strip_whitespace_text=False).parse("<a>   </a>")

        assert summarize(nodes) == [
            (NodeType.ELEMENT, "a", None, 0),
            (NodeType.TEXT, "#text", "   ", 1),
        ]

    def test_text_with_content_keeps_surrounding_whitespace(self):
        nodes = XmlParser().parse("<a>  x  </a>")

        assert nodes[2].node_value == "  x  "

    def test_indentation_produces_no_nodes(self):
        nodes = parse_xml("<a>\n  <b/>\n</a>\n")

        assert [node.node_name for node in nodes[1:]] == ["a", "b"]


class TestTreeProperties:
    """Tests for the tree encoded by parent links."""

    def test_parent_links_form_a_tree(self, calculation_view_xml):
        nodes = parse_xml(calculation_view_xml)

        for node in nodes[1:]:
            seen = set()
            current = node
            while current.parent_node_id is not None:
                assert current.node_id not in seen
                seen.add(current.node_id)
                assert current.parent_node_id < current.node_id
                current = nodes[current.parent_node_id]
            assert current.node_id == 0

    def test_parents_are_elements_or_root(self, calculation_view_xml):
        nodes = parse_xml(calculation_view_xml)

        for node in nodes[1:]:
            parent = nodes[node.parent_node_id]
            assert parent.node_type in (NodeType.ELEMENT, NodeType.DOCUMENT)

    def test_nested_depth(self):
        nodes = parse_xml("<a><b><c>deep</c></b></a>")

        text = nodes[-1]
        assert nodes[text.parent_node_id].node_name == "c"
        assert nodes[nodes[text.parent_node_id].parent_node_id].node_name == "b"


class TestParseErrors:
    """Tests for input that does not parse."""

    def setup_method(self):
        self.parser = XmlParser()

    def test_bare_less_than_raises_at_offset(self):
        with pytest.raises(TokenizationError) as exc_info:
            self.parser.parse("<a>1 < 2</a>")

        assert exc_info.value.position == 6
        assert exc_info.value.code == ErrorCode.TOKENIZATION
        assert "offset 6" in str(exc_info.value)

    def test_unknown_entity_in_text(self):
        with pytest.raises(UnknownEntityError) as exc_info:
            self.parser.parse("<a>x &foo; y</a>")

        assert exc_info.value.entity == "&foo;"
        assert exc_info.value.position == 6
        assert exc_info.value.node_name == "#text"

    def test_unknown_entity_in_attribute(self):
        with pytest.raises(UnknownEntityError) as exc_info:
            self.parser.parse('<a x="&foo;"/>')

        assert exc_info.value.position == 7
        assert exc_info.value.node_name == "x"

    def test_mismatched_end_tag(self):
        with pytest.raises(TokenizationError, match="does not match"):
            self.parser.parse("<a><b></a></b>")

    def test_end_tag_without_open_element(self):
        with pytest.raises(TokenizationError, match="has no open element"):
            self.parser.parse("<a/></a>")

    def test_unclosed_element(self):
        with pytest.raises(TokenizationError, match="Unclosed element <a>"):
            self.parser.parse("<a><b/>")

    def test_unterminated_comment(self):
        with pytest.raises(TokenizationError):
            self.parser.parse("<a><!-- never closed</a>")

    def test_malformed_attributes(self):
        """Test an attribute list that does not fully tokenize."""
        with pytest.raises(MalformedAttributesError) as exc_info:
            self.parser.parse('<a x="1" bogus>')

        assert exc_info.value.code == ErrorCode.MALFORMED_ATTRIBUTES
        assert exc_info.value.node_name == "a"
        assert exc_info.value.position == 9

    def test_attributes_without_separating_space(self):
        with pytest.raises(MalformedAttributesError):
            self.parser.parse('<a x="1"y="2"/>')

    def test_unterminated_attribute_value(self):
        with pytest.raises(TokenizationError):
            self.parser.parse('<a x="1></a>')


class TestTryParse:
    """Tests for the tagged parse result."""

    def test_success(self):
        outcome = XmlParser().try_parse('<a x="1"/>')

        assert outcome.ok
        assert outcome.error is None
        assert len(outcome.nodes) == 3

    def test_failure_keeps_partial_nodes(self):
        outcome = XmlParser().try_parse("<a><b>&foo;</b></a>")

        assert not outcome.ok
        assert outcome.error.code == ErrorCode.UNKNOWN_ENTITY
        assert outcome.error.position == 7
        assert [node.node_name for node in outcome.nodes] == ["#document", "a", "b"]

    def test_error_record_to_dict(self):
        outcome = XmlParser().try_parse("<a>")

        data = outcome.error.to_dict()
        assert data["code"] == "TOKENIZATION"
        assert data["node_name"] == "a"


class TestMalformedTagPerformance:
    """Tests that malformed start tags fail in time linear in their length."""

    ATTRIBUTE_COUNT = 60

    def prefixed_attributes(self):
        return ' xsi:type="1" xmlns:Calculation="urn:x"' * self.ATTRIBUTE_COUNT

    def test_bad_attribute_after_prefixed_attributes(self):
        xml = "<a" + self.prefixed_attributes() + " bogus/>"

        start = time.time()
        with pytest.raises(MalformedAttributesError):
            XmlParser().parse(xml)
        elapsed = time.time() - start

        assert elapsed < 1.0

    def test_unterminated_tag_after_prefixed_attributes(self):
        xml = "<Calculation:scenario" + self.prefixed_attributes() + ' id="open'

        start = time.time()
        with pytest.raises(TokenizationError):
            XmlParser().parse(xml)
        elapsed = time.time() - start

        assert elapsed < 1.0

    def test_many_prefixed_attributes_parse(self):
        xml = "<a" + self.prefixed_attributes() + "/>"

        start = time.time()
        nodes = XmlParser().parse(xml)
        elapsed = time.time() - start

        assert len(nodes) == 2 + 2 * self.ATTRIBUTE_COUNT
        assert nodes[2].node_name == "xsi:type"
        assert elapsed < 1.0
