"""Data shapes for external editor entries.

The visual editor stores a page as a JSON tree of entries. Each entry has an
``_id`` and a ``_component``; every other key is a prop, except the meta keys
the editor adds for its own bookkeeping and the children slot, which holds the
ordered list of child entries.

Any prop value may be a responsive wrapper instead of a scalar:

    {"$res": True, "xl": "24px", "md": "16px"}

Token-typed props carry a token value object instead of a raw string:

    {"tokenId": "lg"}  or  {"value": "24px"}  or  {"tokenId": "md", "value": "16px"}
"""

from typing import Any, Dict, List, Optional, Sequence, Union

# An entry is a JSON object; the editor may attach arbitrary extra keys
ExternalEntry = Dict[str, Any]

# Closed set of values an entry key may hold
EntryValue = Union[str, int, float, bool, Dict[str, Any], List[ExternalEntry]]

ID_KEY = "_id"
COMPONENT_KEY = "_component"

# Key holding the ordered child entries
CHILDREN_SLOT_KEY = "Children"

# Bookkeeping keys added by the editor's normalizer; never props
META_KEYS = frozenset({ID_KEY, COMPONENT_KEY, "_itemProps", "_master", "__editing"})

# Marker of a responsive wrapper
RESPONSIVE_MARKER = "$res"

# Most specific breakpoint first
BREAKPOINT_ORDER = ("xl", "lg", "md", "sm", "xs")


def is_meta_key(key: str) -> bool:
    """Check whether an entry key is editor bookkeeping rather than a prop.

    Anything starting with ``_`` or ``$`` is treated as meta so that keys added
    by future editor versions never leak into canonical props.
    """
    return key in META_KEYS or key.startswith("_") or key.startswith("$")


def is_responsive(value: Any) -> bool:
    """Check whether a value is a responsive wrapper."""
    return isinstance(value, dict) and value.get(RESPONSIVE_MARKER) is True


def unwrap_responsive(
    value: Any,
    breakpoints: Sequence[str] = BREAKPOINT_ORDER,
) -> Any:
    """Pick the highest-fidelity variant out of a responsive wrapper.

    Breakpoints are consulted in order; the first one holding a non-None
    value wins. Non-responsive values are returned unchanged.

    Args:
        value: A prop value, possibly a responsive wrapper
        breakpoints: Breakpoint keys, most specific first

    Returns:
        The selected variant, the value itself, or None if the wrapper is empty

    Example:
        >>> unwrap_responsive({"$res": True, "md": 2, "sm": 1})
        2
    """
    if not is_responsive(value):
        return value
    for breakpoint in breakpoints:
        variant = value.get(breakpoint)
        if variant is not None:
            return variant
    return None


def is_token_value(value: Any) -> bool:
    """Check whether a value is a token value object."""
    return isinstance(value, dict) and ("tokenId" in value or "value" in value)


def entry_id(entry: ExternalEntry) -> Optional[str]:
    """Get the id of an entry, or None if it has none."""
    return entry.get(ID_KEY) or None


def entry_children(entry: ExternalEntry) -> List[ExternalEntry]:
    """Get the child entries held in the children slot.

    Returns:
        The children list, or an empty list if the slot is missing or not a list
    """
    children = entry.get(CHILDREN_SLOT_KEY)
    if isinstance(children, list):
        return children
    return []


def count_entries(entry: ExternalEntry) -> int:
    """Count an entry and all its descendants."""
    return 1 + sum(
        count_entries(child) for child in entry_children(entry) if isinstance(child, dict)
    )
