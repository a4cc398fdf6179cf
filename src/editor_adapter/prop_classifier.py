"""Prop classification rules shared by both conversion directions.

Every prop of an entry or node falls into exactly one class, decided by the
prop name and the owning node type:

- json-encoded: structured in the canonical tree, a JSON string in the editor
- style-override: lives in CanonicalNode.style, not CanonicalNode.props
- numeric-as-string: a number in the canonical tree, a decimal string in the editor
- token-typed: a design token reference, wrapped in a token value object
- default: passed through unchanged

The tables below are static configuration, versioned with the component
catalog.
"""

import json
import logging
import re
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Node type → style props stored on CanonicalNode.style
STYLE_OVERRIDE_PROPS: Dict[str, frozenset] = {
    "container": frozenset({"background", "borderRadius", "maxWidth"}),
}

# Node type → props the editor keeps as decimal strings
NUMERIC_AS_STRING_PROPS: Dict[str, frozenset] = {
    "heading": frozenset({"level"}),
    "icon": frozenset({"size"}),
    "image": frozenset({"size"}),
    "grid": frozenset({"columns"}),
    "list": frozenset({"maxItems"}),
}

# Node type → {canonical prop name → editor storage key}
JSON_STORAGE_KEYS: Dict[str, Dict[str, str]] = {
    "table": {"columns": "columnsJson"},
    "key-value": {"items": "itemsJson"},
    "tabs": {"items": "tabsJson"},
    "select": {"options": "optionsJson"},
}

# Editor storage key → canonical prop name
JSON_PROP_NAMES: Dict[str, str] = {
    storage_key: prop_name
    for keys in JSON_STORAGE_KEYS.values()
    for prop_name, storage_key in keys.items()
}

# Component id → {prop → token group}
TOKEN_PROPS: Dict[str, Dict[str, str]] = {
    "CanvasStack": {"gap": "spacing", "padding": "spacing"},
    "CanvasRow": {"gap": "spacing", "padding": "spacing"},
    "CanvasGrid": {"gap": "spacing"},
    "CanvasContainer": {"padding": "spacing", "background": "colors", "borderRadius": "borderRadius"},
    "CanvasCard": {"padding": "spacing", "borderRadius": "borderRadius"},
    "CanvasSpacer": {"height": "spacing"},
    "CanvasHeading": {"color": "colors", "font": "fonts"},
    "CanvasText": {"color": "colors", "font": "fonts"},
    "CanvasDivider": {"color": "colors"},
}

# $tokens.<group>.<id>
TOKEN_REF_REGEX = re.compile(r"^\$tokens\.([\w-]+)\.([\w-]+)$")


def is_style_override(key: str, node_type: str) -> bool:
    """Check whether a prop belongs in CanonicalNode.style for this node type."""
    return key in STYLE_OVERRIDE_PROPS.get(node_type, ())


def is_numeric_as_string(key: str, node_type: str) -> bool:
    """Check whether a numeric prop is stored as a string by the editor."""
    return key in NUMERIC_AS_STRING_PROPS.get(node_type, ())


def json_storage_key(prop_name: str, node_type: str) -> Optional[str]:
    """Find the editor key a structured prop is encoded under.

    The same canonical prop name maps to different keys depending on the
    owning type (``items`` is ``itemsJson`` on key-value but ``tabsJson`` on
    tabs).

    Returns:
        The storage key, or None if the prop is not json-encoded for this type
    """
    return JSON_STORAGE_KEYS.get(node_type, {}).get(prop_name)


def json_prop_name(key: str) -> Optional[str]:
    """Map an editor storage key back to its canonical prop name."""
    return JSON_PROP_NAMES.get(key)


def token_group(component_id: str, prop_name: str) -> Optional[str]:
    """Get the token group of a token-typed prop, or None."""
    return TOKEN_PROPS.get(component_id, {}).get(prop_name)


def numeric_from_string(value: Any) -> Any:
    """Convert an editor decimal string back to a number.

    Integral strings become int, other numeric strings become float.
    Anything unparseable is returned unchanged.
    """
    if not isinstance(value, str):
        return value
    text = value.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        logger.debug(f"Numeric prop value is not a number: {value!r}")
        return value


def numeric_to_string(value: Any) -> str:
    """Convert a number to the decimal string the editor stores.

    Integral floats render without a fractional part, so 3.0 becomes "3".
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_json_prop(value: Any) -> Any:
    """Decode a json-encoded prop value.

    Non-string values are returned unchanged. A string that is not valid JSON
    degrades to the raw string instead of raising.
    """
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except ValueError:
        logger.debug(f"Malformed JSON prop kept as raw string: {value[:80]!r}")
        return value


def encode_json_prop(value: Any) -> str:
    """Encode a structured prop value as compact JSON text.

    Strings are already encoded (or are a degraded raw value) and pass
    through unchanged.
    """
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def wrap_token_value(value: Any) -> Any:
    """Wrap a raw scalar into the editor's token value format.

    Handles three cases:
        1. Already an object → returned unchanged
        2. "$tokens.spacing.lg" → {"tokenId": "lg"}
        3. "24px" → {"value": "24px"}
    """
    if isinstance(value, dict):
        return value
    if isinstance(value, str):
        match = TOKEN_REF_REGEX.match(value)
        if match:
            return {"tokenId": match.group(2)}
    return {"value": value}


def unwrap_token_value(value: Any, group: Optional[str] = None) -> Any:
    """Unwrap an editor token value to its canonical scalar.

    A token id is turned back into a ``$tokens.<group>.<id>`` reference when
    the group is known, so theme linkage survives a round trip. Otherwise the
    literal value wins over the bare token id.

        {"tokenId": "lg"}, group "spacing"   → "$tokens.spacing.lg"
        {"tokenId": "md", "value": "16px"}   → "16px" (no group)
        {"value": "24px"}                    → "24px"
        "24px"                               → "24px"
    """
    if not isinstance(value, dict) or not ("tokenId" in value or "value" in value):
        return value
    token_id = value.get("tokenId")
    if token_id and group:
        return f"$tokens.{group}.{token_id}"
    if value.get("value") is not None:
        return value["value"]
    if token_id is not None:
        return token_id
    return value
