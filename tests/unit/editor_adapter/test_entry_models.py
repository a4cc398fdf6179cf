"""Unit tests for editor_adapter.entry_models module."""

from src.editor_adapter.entry_models import (
    count_entries,
    entry_children,
    entry_id,
    is_meta_key,
    is_responsive,
    is_token_value,
    unwrap_responsive,
)


class TestUnwrapResponsive:
    """Test cases for unwrap_responsive()."""

    def test_most_specific_breakpoint_wins(self):
        """xl is preferred over every other breakpoint."""
        assert unwrap_responsive({"$res": True, "xl": "Big", "md": "Small"}) == "Big"

    def test_falls_through_missing_breakpoints(self):
        """The first present breakpoint in order is selected."""
        assert unwrap_responsive({"$res": True, "md": 2, "sm": 1}) == 2

    def test_none_variant_is_skipped(self):
        """A breakpoint holding None does not win."""
        assert unwrap_responsive({"$res": True, "xl": None, "lg": "x"}) == "x"

    def test_empty_wrapper_is_none(self):
        """A wrapper without variants unwraps to None."""
        assert unwrap_responsive({"$res": True}) is None

    def test_custom_order(self):
        """The breakpoint order is an argument."""
        assert unwrap_responsive({"$res": True, "md": 2, "sm": 1}, ("sm", "md")) == 1

    def test_non_responsive_value_unchanged(self):
        """Plain values pass through."""
        plain = {"tokenId": "lg"}
        assert unwrap_responsive("text") == "text"
        assert unwrap_responsive(plain) is plain


class TestEntryHelpers:
    """Test cases for key classification and entry accessors."""

    def test_is_meta_key(self):
        """Editor bookkeeping keys are meta; props are not."""
        for key in ("_id", "_component", "_itemProps", "_master", "__editing", "$future"):
            assert is_meta_key(key) is True
        assert is_meta_key("label") is False
        assert is_meta_key("Children") is False

    def test_is_responsive_requires_true_marker(self):
        """Only an explicit True marker makes a wrapper."""
        assert is_responsive({"$res": True, "xl": 1}) is True
        assert is_responsive({"$res": "yes", "xl": 1}) is False
        assert is_responsive("xl") is False

    def test_is_token_value(self):
        """Token objects carry tokenId or value."""
        assert is_token_value({"tokenId": "lg"}) is True
        assert is_token_value({"value": "1px"}) is True
        assert is_token_value({"other": 1}) is False

    def test_entry_id_missing(self):
        """Missing or empty ids read as None."""
        assert entry_id({"_component": "CanvasText"}) is None
        assert entry_id({"_id": ""}) is None
        assert entry_id({"_id": "a"}) == "a"

    def test_entry_children_ignores_non_list_slot(self):
        """A malformed children slot reads as no children."""
        assert entry_children({"Children": "oops"}) == []
        assert entry_children({}) == []

    def test_count_entries(self):
        """Counts the root and every nested entry."""
        entry = {"_id": "r", "Children": [{"_id": "a", "Children": [{"_id": "b"}]}, {"_id": "c"}]}
        assert count_entries(entry) == 4
