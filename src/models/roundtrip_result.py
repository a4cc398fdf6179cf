"""Round-trip self-check result data model."""

from dataclasses import dataclass, field
from typing import List

from src.models.canonical_page import CanonicalNode


@dataclass
class RoundtripResult:
    """Result of converting a canonical node to an entry and back.

    Attributes:
        passed: True when no differing path was found
        original: Node that was fed into the check
        roundtripped: Node produced by canonical → external → canonical
        diff: One line per differing path, e.g. ".children[0].props.level: 3 → "3""
    """
    passed: bool
    original: CanonicalNode
    roundtripped: CanonicalNode
    diff: List[str] = field(default_factory=list)
