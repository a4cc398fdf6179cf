"""Unit tests for editor_adapter.tree_adapter module."""

import logging

import pytest

from src.editor_adapter.errors import ConversionError
from src.editor_adapter.tree_adapter import (
    canonical_to_external,
    external_to_canonical,
    generate_id,
)
from src.models.canonical_page import CanonicalNode
from tests.fixtures.sample_pages import native_entry


class TestGenerateId:
    """Test cases for generate_id()."""

    def test_prefix_and_uniqueness(self):
        """Ids carry the prefix and do not repeat."""
        first = generate_id("heading")
        second = generate_id("heading")
        assert first.startswith("heading-")
        assert first != second


class TestUnknownTypes:
    """Test cases for pass-through of unregistered types."""

    def test_unknown_node_type_becomes_minimal_entry(self, caplog):
        """An unregistered node type never raises and keeps the raw type."""
        node = CanonicalNode(
            id="x1",
            type="mystery-widget",
            props={"foo": "bar"},
            children=[CanonicalNode(id="x2", type="text")],
        )

        with caplog.at_level(logging.WARNING):
            entry = canonical_to_external(node)

        assert entry == {"_id": "x1", "_component": "mystery-widget"}
        assert "mystery-widget" in caplog.text

    def test_unknown_component_becomes_opaque_node(self):
        """An unregistered component keeps its id and raw component id."""
        entry = {"_id": "h1", "_component": "LegacyHero", "title": "Hi", "Children": [{}]}

        node = external_to_canonical(entry)

        assert node.id == "h1"
        assert node.type == "LegacyHero"
        assert node.props == {}
        assert node.children == []

    def test_missing_component_gets_synthesized_id(self):
        """An entry with no component or id still converts."""
        node = external_to_canonical({})

        assert node.type == "unknown"
        assert node.id.startswith("unknown-")

    def test_non_mapping_root_raises(self):
        """Only a root that is not an object at all is an error."""
        with pytest.raises(ConversionError):
            external_to_canonical(["not", "an", "entry"])


class TestNumericProps:
    """Test cases for numeric-as-string props."""

    def test_heading_level_round_trip(self):
        """heading level 3 → "3" in the entry → 3 in the canonical tree."""
        node = CanonicalNode(id="h", type="heading", props={"level": 3, "text": "Title"})

        entry = canonical_to_external(node)
        back = external_to_canonical(entry)

        assert entry["level"] == "3"
        assert back.props["level"] == 3
        assert isinstance(back.props["level"], int)

    @pytest.mark.parametrize("node_type,prop", [("icon", "size"), ("grid", "columns"), ("list", "maxItems")])
    def test_other_numeric_props_round_trip(self, node_type, prop):
        """Every numeric-as-string prop survives as the same integer."""
        node = CanonicalNode(id="n", type=node_type, props={prop: 12})

        back = external_to_canonical(canonical_to_external(node))

        assert back.props[prop] == 12


class TestJsonProps:
    """Test cases for json-encoded props."""

    def test_table_columns_round_trip(self):
        """Table columns encode to columnsJson and decode deep-equal."""
        columns = [{"key": "a", "label": "A"}]
        node = CanonicalNode(id="t", type="table", props={"columns": columns})

        entry = canonical_to_external(node)
        back = external_to_canonical(entry)

        assert "columns" not in entry
        assert isinstance(entry["columnsJson"], str)
        assert back.props["columns"] == columns

    def test_tabs_items_use_type_specific_key(self):
        """Tabs store items under tabsJson, not itemsJson."""
        node = CanonicalNode(id="t", type="tabs", props={"items": [{"id": "one"}]})

        entry = canonical_to_external(node)

        assert entry["tabsJson"] == '[{"id":"one"}]'
        assert "itemsJson" not in entry

    def test_malformed_json_is_kept_raw(self):
        """A malformed json-encoded value becomes the raw string."""
        entry = {"_id": "t", "_component": "CanvasTable", "columnsJson": "{not valid json"}

        node = external_to_canonical(entry)

        assert node.props["columns"] == "{not valid json"

    def test_storage_key_of_other_type_is_plain_prop(self):
        """itemsJson on a component that does not own it passes through."""
        entry = {"_id": "x", "_component": "CanvasText", "itemsJson": "[1]"}

        node = external_to_canonical(entry)

        assert node.props == {"itemsJson": "[1]"}


class TestInboundShape:
    """Test cases for editor-specific structure on the way in."""

    def test_native_entry_is_flattened(self):
        """Meta keys are dropped, wrappers unwrapped, children preserved."""
        node = external_to_canonical(native_entry("root", label="Big"))

        assert node.type == "stack"
        assert node.props == {"gap": "$tokens.spacing.md"}
        assert len(node.children) == 1
        assert node.children[0].type == "button"
        assert node.children[0].props == {"label": "Big"}

    def test_custom_breakpoint_order(self):
        """Breakpoint precedence is configurable."""
        node = external_to_canonical(native_entry("root", label="Big"), breakpoints=("sm", "xl"))

        assert node.children[0].props["label"] == "short"

    def test_empty_values_are_dropped(self):
        """None and empty-string values are omitted from props."""
        entry = {
            "_id": "b",
            "_component": "CanvasButton",
            "label": "",
            "icon": None,
            "variant": {"$res": True},
            "size": "sm",
        }

        node = external_to_canonical(entry)

        assert node.props == {"size": "sm"}

    def test_style_override_goes_to_style(self):
        """Container background lands on style, unwrapped from its token object."""
        entry = {
            "_id": "c",
            "_component": "CanvasContainer",
            "background": {"value": "#fff"},
            "maxWidth": 960,
        }

        node = external_to_canonical(entry)

        assert node.style == {"background": "#fff", "maxWidth": "960"}
        assert node.props == {}

    def test_non_entry_children_are_skipped(self):
        """Children that are not objects are skipped, not fatal."""
        entry = {"_id": "s", "_component": "CanvasStack", "Children": ["junk", {"_id": "b", "_component": "CanvasButton"}]}

        node = external_to_canonical(entry)

        assert [child.id for child in node.children] == ["b"]


class TestOutboundShape:
    """Test cases for canonical_to_external() output shape."""

    def test_children_slot_only_when_non_empty(self):
        """Leaves carry no children slot."""
        entry = canonical_to_external(CanonicalNode(id="b", type="button", props={"label": "Go"}))

        assert "Children" not in entry
        assert entry == {"_id": "b", "_component": "CanvasButton", "label": "Go"}

    def test_style_merges_into_entry_and_is_token_wrapped(self):
        """Style overrides share the flat entry namespace."""
        node = CanonicalNode(id="c", type="container", style={"background": "#fff", "maxWidth": "960px"})

        entry = canonical_to_external(node)

        assert entry["background"] == {"value": "#fff"}
        assert entry["maxWidth"] == "960px"

    def test_token_reference_round_trip(self):
        """A token reference survives as the same reference."""
        node = CanonicalNode(id="s", type="stack", props={"gap": "$tokens.spacing.lg"})

        entry = canonical_to_external(node)
        back = external_to_canonical(entry)

        assert entry["gap"] == {"tokenId": "lg"}
        assert back.props["gap"] == "$tokens.spacing.lg"

    def test_accepts_dict_shape(self):
        """A node in its JSON shape converts the same as a CanonicalNode."""
        entry = canonical_to_external({"id": "h", "type": "heading", "props": {"level": 1}})

        assert entry == {"_id": "h", "_component": "CanvasHeading", "level": "1"}

    def test_malformed_dict_degrades(self, caplog):
        """Non-object children are skipped and a non-string type is unknown."""
        with caplog.at_level(logging.WARNING):
            entry = canonical_to_external({
                "id": "r",
                "type": "stack",
                "children": ["oops", {"id": "d", "type": "divider"}],
            })
            odd = canonical_to_external({"id": "s", "type": ["stack"]})

        assert entry == {
            "_id": "r",
            "_component": "CanvasStack",
            "Children": [{"_id": "d", "_component": "CanvasDivider"}],
        }
        assert odd == {"_id": "s", "_component": "['stack']"}
        assert "Skipping non-object child" in caplog.text

    def test_non_node_root_raises(self):
        """A root that is neither a node nor an object is a conversion error."""
        with pytest.raises(ConversionError):
            canonical_to_external("stack")

    def test_missing_id_is_synthesized(self):
        """Nodes without an id still get one."""
        entry = canonical_to_external(CanonicalNode(id="", type="divider"))

        assert entry["_id"].startswith("eb-")

    def test_props_are_copied(self):
        """Mutating the entry does not touch the canonical props."""
        node = CanonicalNode(id="l", type="menu", props={"links": [{"href": "/"}]})

        entry = canonical_to_external(node)
        entry["links"].append({"href": "/about"})

        assert node.props["links"] == [{"href": "/"}]
