"""Tests for avfrd.core.normalize."""

from avfrd.core.normalize import clean_name_for_display, normalize_email, to_canonical_id


class TestToCanonicalId:
    """Tests for to_canonical_id function."""

    def test_integer(self):
        assert to_canonical_id(5) == "5"

    def test_string_unchanged(self):
        assert to_canonical_id("abc-123") == "abc-123"

    def test_integral_float(self):
        assert to_canonical_id(5.0) == "5"

    def test_fractional_float(self):
        assert to_canonical_id(5.5) == "5.5"

    def test_strips_whitespace(self):
        assert to_canonical_id(" 5 ") == "5"

    def test_none_is_empty(self):
        assert to_canonical_id(None) == ""

    def test_leading_zeros_kept(self):
        assert to_canonical_id("007") == "007"


class TestNormalizeEmail:
    """Tests for normalize_email function."""

    def test_lowercases_and_strips(self):
        assert normalize_email("  Jane.Smith@AVFRD.org ") == "jane.smith@avfrd.org"

    def test_returns_none_for_empty(self):
        assert normalize_email(None) is None
        assert normalize_email("") is None


class TestCleanNameForDisplay:
    """Tests for clean_name_for_display function."""

    def test_collapses_spaces(self):
        assert clean_name_for_display("  Mary   Jane  Watson ") == "Mary Jane Watson"

    def test_returns_empty_for_none(self):
        assert clean_name_for_display(None) == ""
