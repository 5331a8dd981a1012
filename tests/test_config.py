"""
Tests for LineageConfig, patterns and the warning collector.
"""

import pytest

from view_lineage import ErrorMode, LineageConfig
from view_lineage.utils.patterns import like_to_regex, matches_like
from view_lineage.utils.warnings import LineageWarning, WarningCollector


class TestLineageConfig:
    """Tests for LineageConfig."""

    def test_defaults(self):
        config = LineageConfig()

        assert config.on_parse_error == ErrorMode.WARN
        assert config.recursive is True
        assert config.strip_whitespace_text is True
        assert config.mapping_elements == ("keyMapping", "measureMapping")

    def test_error_mode_values(self):
        assert ErrorMode.values() == ["fail", "warn", "ignore"]

    def test_invalid_error_mode(self):
        with pytest.raises(TypeError):
            LineageConfig(on_parse_error="fail")

    def test_invalid_recursive(self):
        with pytest.raises(TypeError):
            LineageConfig(recursive="yes")

    def test_mapping_elements_list_converted(self):
        config = LineageConfig(mapping_elements=["keyMapping"])
        assert config.mapping_elements == ("keyMapping",)

    def test_mapping_elements_string_rejected(self):
        with pytest.raises(TypeError):
            LineageConfig(mapping_elements="keyMapping")

    def test_mapping_elements_empty_rejected(self):
        with pytest.raises(ValueError):
            LineageConfig(mapping_elements=())


class TestLikePatterns:
    """Tests for LIKE pattern matching."""

    @pytest.mark.parametrize(
        "value,pattern,expected",
        [
            ("acme.sales", "acme.%", True),
            ("acme.sales", "acme.sale_", True),
            ("acme.sales", "acme", False),
            ("acmeXsales", "acme.sales", False),
            ("CV_ORDERS", "CV%", True),
            ("SALES", "sales", False),
            ("", "%", True),
            ("a\nb", "a%b", True),
        ],
    )
    def test_matches_like(self, value, pattern, expected):
        assert matches_like(value, pattern) is expected

    def test_none_pattern_matches_everything(self):
        assert matches_like("x", None)

    def test_none_value_matches_nothing(self):
        assert not matches_like(None, "%")
        assert not matches_like(None, "x")

    def test_like_to_regex_escapes(self):
        assert like_to_regex("a.b").fullmatch("a.b")
        assert not like_to_regex("a.b").fullmatch("axb")


class TestWarningCollector:
    """Tests for WarningCollector."""

    def test_add_and_summary(self):
        collector = WarningCollector()
        collector.add("INFO", "i")
        collector.add("ERROR", "e", "pkg/v")

        assert collector.has_errors()
        assert collector.get_summary() == {"INFO": 1, "WARNING": 0, "ERROR": 1}
        assert str(collector.get_by_level("ERROR")[0]) == "[pkg/v] e"

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            LineageWarning(level="DEBUG", message="x")

    def test_parse_failure_message(self):
        collector = WarningCollector()
        collector.add_parse_failure("pkg/v", "boom", 12)

        warning = collector.get_all()[0]
        assert warning.level == "ERROR"
        assert warning.message == "Failed to parse view at offset 12: boom"
        assert warning.context == "pkg/v"

    def test_extend_and_clear(self):
        first = WarningCollector()
        second = WarningCollector()
        second.add_unsupported_view("pkg/p", "procedure")

        first.extend(second)
        assert len(first) == 1
        first.clear()
        assert len(first) == 0
        assert len(second) == 1
