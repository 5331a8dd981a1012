"""
Regular expression grammar for the XML tokenizer.

The building blocks below are combined into TOKEN_PATTERN, a single
composite pattern with one named alternative per token kind. Alternatives
are tried in the order processing instruction, comment, CDATA section,
document type, start tag, end tag, text.
"""

import re

NCNAME_START_CHARS = r"_A-Za-z\xC0-\xD6\xD8-\xF6"
NCNAME_CHARS = r"\-.0-9\xB7" + NCNAME_START_CHARS
NCNAME = f"[{NCNAME_START_CHARS}][{NCNAME_CHARS}]*"
NAME = f"[:{NCNAME_START_CHARS}][:{NCNAME_CHARS}]*"
# qualified name: optional prefix, no namespace semantics. Built from
# colon-free parts so each name splits into prefix and local part one way.
QNAME = f"(?:{NCNAME}:)?{NCNAME}"

# quoted strings may not contain '<' or their own quote
SINGLE_QUOTED = r"'[^'<]*'"
DOUBLE_QUOTED = r'"[^"<]*"'
QUOTED = f"(?:{SINGLE_QUOTED}|{DOUBLE_QUOTED})"

PROCESSING_INSTRUCTION = rf"(?P<pi><\?(?P<pi_target>{NAME})(?:\s+(?P<pi_data>.*?))?\s*\?>)"
COMMENT = r"(?P<comment><!--(?P<comment_body>(?:[^-]|-[^-])*)-->)"
CDATA = r"(?P<cdata><!\[CDATA\[(?P<cdata_body>.*?)\]\]>)"
EXTERNAL_ID = rf"(?:SYSTEM|PUBLIC\s+{QUOTED})\s+{QUOTED}"
DOCTYPE = rf"(?P<doctype><!DOCTYPE\s+(?P<doctype_name>{NAME})(?:\s+{EXTERNAL_ID})?\s*>)"
# the attribute span is captured loosely and tokenized by the parser, so
# malformed attribute lists surface as their own error
LOOSE_ATTRIBUTES = rf"(?:\s(?:{QUOTED}|[^<>'\"])*?)?"
START_TAG = (
    rf"(?P<start_tag><(?P<start_tag_name>{QNAME})"
    rf"(?P<start_tag_attributes>{LOOSE_ATTRIBUTES})(?P<self_closing>/?)>)"
)
END_TAG = rf"(?P<end_tag></(?P<end_tag_name>{QNAME})\s*>)"
# text: anything up to the next '<', following a '>' or the start of input
TEXT = r"(?P<text>(?:(?<=>)|\A)[^<]+(?=<|\Z))"

TOKEN_KINDS = (
    "pi",
    "comment",
    "cdata",
    "doctype",
    "start_tag",
    "end_tag",
    "text",
)

TOKEN_PATTERN = re.compile(
    "|".join(
        [
            PROCESSING_INSTRUCTION,
            COMMENT,
            CDATA,
            DOCTYPE,
            START_TAG,
            END_TAG,
            TEXT,
        ]
    ),
    re.DOTALL,
)

ATTRIBUTE_PATTERN = re.compile(
    rf"\s+(?P<name>{QNAME})\s*=\s*(?P<value>{QUOTED})", re.DOTALL
)
