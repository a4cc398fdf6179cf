"""Data models for canonical pages and round-trip results."""

from src.models.canonical_page import CanonicalNode, CanonicalPage, PageMeta
from src.models.roundtrip_result import RoundtripResult

__all__ = ['CanonicalNode', 'CanonicalPage', 'PageMeta', 'RoundtripResult']
