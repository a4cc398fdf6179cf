"""Bidirectional conversion between editor entries and canonical nodes.

The two representations are not isomorphic. Editor entries carry responsive
wrappers, token value objects and bookkeeping keys that the canonical tree
does not model, and the canonical tree keeps style overrides apart from
props. Conversion is lossy-but-safe: unknown types pass through as opaque
nodes, malformed structured props degrade to raw strings, and empty values
are dropped. Losing a single prop is preferable to crashing the editor.

Entry shape:
    {"_id": "...", "_component": "CanvasHeading", "level": "2",
     "text": {"$res": True, "xl": "Hello"}, "Children": [...]}

Node shape:
    CanonicalNode(id="...", type="heading", props={"level": 2, "text": "Hello"})
"""

import copy
import logging
import uuid
from typing import Any, Dict, Sequence, Union

from src.models.canonical_page import CanonicalNode

from .entry_models import (
    BREAKPOINT_ORDER,
    CHILDREN_SLOT_KEY,
    COMPONENT_KEY,
    ID_KEY,
    ExternalEntry,
    entry_children,
    entry_id,
    is_meta_key,
    unwrap_responsive,
)
from .errors import ConversionError
from .prop_classifier import (
    TOKEN_PROPS,
    encode_json_prop,
    is_numeric_as_string,
    is_style_override,
    json_prop_name,
    json_storage_key,
    numeric_from_string,
    numeric_to_string,
    parse_json_prop,
    token_group,
    unwrap_token_value,
    wrap_token_value,
)
from .type_registry import component_id_for, node_type_for

logger = logging.getLogger(__name__)


def generate_id(prefix: str) -> str:
    """Generate a node or entry id with a readable prefix."""
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


# ============================================================================
# Entry → Node (editor → host)
# ============================================================================

def external_to_canonical(
    entry: ExternalEntry,
    breakpoints: Sequence[str] = BREAKPOINT_ORDER,
) -> CanonicalNode:
    """Convert an editor entry tree into a canonical node tree.

    Args:
        entry: Editor entry (a JSON object)
        breakpoints: Responsive breakpoint precedence, most specific first

    Returns:
        Equivalent CanonicalNode. Entries with an unregistered component
        become opaque pass-through nodes typed with the raw component id.

    Raises:
        ConversionError: If entry is not a mapping at all
    """
    if not isinstance(entry, dict):
        raise ConversionError(f"expected an entry object, got {type(entry).__name__}")

    component = entry.get(COMPONENT_KEY)
    node_type = node_type_for(component) if isinstance(component, str) else None
    if node_type is None:
        raw_type = str(component) if component else "unknown"
        logger.warning(f"Unknown editor component: {component!r}")
        return CanonicalNode(id=entry_id(entry) or generate_id("unknown"), type=raw_type)

    node = CanonicalNode(id=entry_id(entry) or generate_id(node_type), type=node_type)

    for key, raw_value in entry.items():
        if is_meta_key(key) or key == CHILDREN_SLOT_KEY:
            continue

        value = unwrap_responsive(raw_value, breakpoints)

        group = token_group(component, key)
        if group or (isinstance(value, dict) and "tokenId" in value):
            value = unwrap_token_value(value, group)

        if _is_empty(value):
            continue

        # JSON-encoded props (table columns, select options, ...)
        prop_name = json_prop_name(key)
        if prop_name and json_storage_key(prop_name, node_type) == key:
            node.props[prop_name] = parse_json_prop(value)
            continue

        if is_style_override(key, node_type):
            node.style[key] = str(value)
            continue

        if is_numeric_as_string(key, node_type):
            node.props[key] = numeric_from_string(value)
            continue

        node.props[key] = value

    for child in entry_children(entry):
        if not isinstance(child, dict):
            logger.warning(
                f"Skipping non-entry child of {node.id}: {type(child).__name__}"
            )
            continue
        node.children.append(external_to_canonical(child, breakpoints))

    return node


# ============================================================================
# Node → Entry (host → editor)
# ============================================================================

def canonical_to_external(
    node: Union[CanonicalNode, Dict[str, Any]],
) -> ExternalEntry:
    """Convert a canonical node tree into an editor entry tree.

    Style overrides and props share the same flat namespace in the entry.
    Token-typed props are wrapped last so that style overrides such as a
    container background are wrapped too.

    Args:
        node: Canonical node, or its JSON shape

    Returns:
        Equivalent editor entry. Unregistered node types become a minimal
        entry carrying the raw type as its component.

    Raises:
        ConversionError: If the root is neither a node nor an object
    """
    if isinstance(node, dict):
        node = CanonicalNode.from_dict(node)
    elif not isinstance(node, CanonicalNode):
        raise ConversionError(f"expected a node or an object, got {type(node).__name__}")

    component = component_id_for(node.type) if isinstance(node.type, str) else None
    if not component:
        logger.warning(f"Unknown node type: {node.type!r}")
        return {ID_KEY: node.id or generate_id("eb"), COMPONENT_KEY: str(node.type)}

    entry: ExternalEntry = {
        ID_KEY: node.id or generate_id("eb"),
        COMPONENT_KEY: component,
    }

    for key, value in node.props.items():
        if _is_empty(value):
            continue

        storage_key = json_storage_key(key, node.type)
        if storage_key:
            entry[storage_key] = encode_json_prop(value)
            continue

        if is_numeric_as_string(key, node.type):
            entry[key] = numeric_to_string(value)
            continue

        entry[key] = copy.deepcopy(value)

    for key, value in node.style.items():
        if _is_empty(value):
            continue
        entry[key] = value

    children = [
        canonical_to_external(child)
        for child in node.children
        if isinstance(child, (CanonicalNode, dict))
    ]
    if children:
        entry[CHILDREN_SLOT_KEY] = children

    for prop in TOKEN_PROPS.get(component, {}):
        if prop in entry and entry[prop] is not None:
            entry[prop] = wrap_token_value(entry[prop])

    return entry
