"""In-memory cache of editor documents keyed by page id.

This module provides the CacheStore class. A single store is shared by
reference across backend instances so that native editor entries survive a
backend being rebuilt (page switch, host re-render). Hygiene operations are
explicit methods, called by the backend when it is constructed.
"""

import logging
from typing import Dict, Iterable, List, Optional

from src.document_store.models import DocRecord, Provenance

logger = logging.getLogger(__name__)


class CacheStore:
    """Holds one DocRecord per page id.

    The store is process-local and single-writer: the editor is the only
    mutator of a page's entry and calls arrive in event order, so no locking
    is done. Entries for different pages are independent.

    State per page id:
        Uncached → Cached/Native ⇄ Cached/AdapterSeeded

    Example:
        >>> store = CacheStore()
        >>> store.put(DocRecord("p1", 1, entry, Provenance.NATIVE, meta))
        >>> store.has_native_entry("p1")
        True
    """

    def __init__(self):
        """Initialize an empty cache."""
        self._records: Dict[str, DocRecord] = {}

    def __contains__(self, page_id: str) -> bool:
        return page_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def page_ids(self) -> List[str]:
        """Get the ids of all cached pages."""
        return list(self._records)

    def get(self, page_id: str) -> Optional[DocRecord]:
        """Retrieve the cached record for a page.

        Args:
            page_id: Page id

        Returns:
            The record, or None on cache miss
        """
        record = self._records.get(page_id)
        if record is None:
            logger.debug(f"Cache miss: page {page_id}")
        return record

    def put(self, record: DocRecord) -> None:
        """Store a record, replacing any previous one for the same page."""
        self._records[record.id] = record
        logger.debug(
            f"Cached page {record.id} v{record.version} ({record.provenance.value})"
        )

    def delete(self, page_id: str) -> bool:
        """Delete the record for a page.

        Returns:
            True if a record was removed
        """
        return self._records.pop(page_id, None) is not None

    def has_native_entry(self, page_id: str) -> bool:
        """Check whether a page's cached entry was produced by the editor."""
        record = self._records.get(page_id)
        return record is not None and record.is_native

    def evict_orphans(self, live_page_ids: Iterable[str]) -> List[str]:
        """Drop records for pages that no longer exist in the host.

        Pages can disappear outside this subsystem (deletion, project import,
        undo), so every backend construction reconciles the cache with the
        host's current page set.

        Args:
            live_page_ids: Ids of the pages the host currently has

        Returns:
            Ids of the evicted pages
        """
        live = set(live_page_ids)
        orphans = [page_id for page_id in self._records if page_id not in live]
        for page_id in orphans:
            del self._records[page_id]

        if orphans:
            logger.info(f"Evicted {len(orphans)} orphaned cache entries: {orphans}")
        return orphans

    def invalidate_adapter_seeded(self) -> List[str]:
        """Drop every adapter-seeded record so it is re-synthesized on next use.

        The canonical tree's style and token values may have changed since
        the entry was synthesized. Native records are never dropped here:
        the editor's own edits must not be clobbered.

        Returns:
            Ids of the invalidated pages
        """
        seeded = [
            page_id
            for page_id, record in self._records.items()
            if record.provenance is Provenance.ADAPTER_SEEDED
        ]
        for page_id in seeded:
            del self._records[page_id]

        if seeded:
            logger.info(f"Invalidated {len(seeded)} adapter-seeded cache entries")
        return seeded

    def evict_if_adapter_seeded(self, page_id: str) -> bool:
        """Evict a page's record only if it was adapter-seeded.

        Used when a synthesized entry crashes the editor: the page falls back
        to an empty initialization on retry. Native records are trusted by
        construction and are left in place.

        Returns:
            True if the record was evicted
        """
        record = self._records.get(page_id)
        if record is None:
            logger.debug(f"No cache entry to evict for page {page_id}")
            return False
        if record.is_native:
            logger.warning(f"Refusing to evict native cache entry for page {page_id}")
            return False

        del self._records[page_id]
        logger.info(f"Evicted adapter-seeded cache entry for page {page_id}")
        return True

    def clear(self) -> None:
        """Delete all records (all pages)."""
        count = len(self._records)
        self._records.clear()
        logger.info(f"Cleared document cache: {count} entries")
