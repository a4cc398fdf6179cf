"""Round-trip self-check for the tree adapter.

Converting canonical → external → canonical should give back the original
tree. Any new node type should pass this check before it ships; the CLI
``check`` command runs it over a whole project.
"""

import json
import logging
from typing import Any, Dict, List, Sequence

from src.models.canonical_page import CanonicalNode
from src.models.roundtrip_result import RoundtripResult

from .entry_models import BREAKPOINT_ORDER
from .tree_adapter import canonical_to_external, external_to_canonical

logger = logging.getLogger(__name__)

_MISSING = object()


def check_roundtrip(
    original: CanonicalNode,
    breakpoints: Sequence[str] = BREAKPOINT_ORDER,
) -> RoundtripResult:
    """Convert a node to an entry and back, then diff the two trees.

    Args:
        original: Canonical node tree to check
        breakpoints: Responsive breakpoint precedence for the inbound leg

    Returns:
        RoundtripResult; ``passed`` is True when no differing path was found
    """
    entry = canonical_to_external(original)
    roundtripped = external_to_canonical(entry, breakpoints)
    diff = compare_nodes(original, roundtripped)

    if diff:
        logger.debug(f"Round trip of {original.id} found {len(diff)} difference(s)")

    return RoundtripResult(
        passed=not diff,
        original=original,
        roundtripped=roundtripped,
        diff=diff,
    )


def compare_nodes(a: CanonicalNode, b: CanonicalNode, path: str = "") -> List[str]:
    """Structurally compare two node trees field by field.

    Args:
        a: Expected tree
        b: Actual tree
        path: Path prefix of the compared subtree

    Returns:
        One line per differing path, in the form ``path: expected → actual``
    """
    diffs: List[str] = []

    if a.id != b.id:
        diffs.append(f"{path}.id: {a.id} → {b.id}")
    if a.type != b.type:
        diffs.append(f"{path}.type: {a.type} → {b.type}")

    diffs.extend(_compare_maps(a.props, b.props, f"{path}.props"))
    diffs.extend(_compare_maps(a.style, b.style, f"{path}.style"))

    if len(a.children) != len(b.children):
        diffs.append(
            f"{path}.children.length: {len(a.children)} → {len(b.children)}"
        )
    for index, (child_a, child_b) in enumerate(zip(a.children, b.children)):
        diffs.extend(compare_nodes(child_a, child_b, f"{path}.children[{index}]"))

    return diffs


def _compare_maps(a: Dict[str, Any], b: Dict[str, Any], path: str) -> List[str]:
    diffs = []
    for key in list(a) + [k for k in b if k not in a]:
        av = a.get(key, _MISSING)
        bv = b.get(key, _MISSING)
        # Equality, not text: 3.0 and 3 are the same number
        if av is _MISSING or bv is _MISSING or av != bv:
            diffs.append(f"{path}.{key}: {_render(av)} → {_render(bv)}")
    return diffs


def _render(value: Any) -> str:
    if value is _MISSING:
        return "<missing>"
    return json.dumps(value, default=str, ensure_ascii=False)
