"""Helpers for the persisted "last known native entry" blob.

A canonical page may carry the editor's last native entry so the document
cache can be re-hydrated after a restart without going through the adapter.
The blob is editor-internal: it is stripped before pages are exported to a
project file, and re-attached only for the local incremental save store.
"""

import copy
import dataclasses
import logging
from typing import Dict, Mapping

from src.document_store.cache_store import CacheStore
from src.models.canonical_page import CanonicalPage

logger = logging.getLogger(__name__)


def strip_native_entries(pages: Mapping[str, CanonicalPage]) -> Dict[str, CanonicalPage]:
    """Return copies of the pages without their native entry blobs.

    Args:
        pages: Pages keyed by page id

    Returns:
        New mapping of page copies with native_entry set to None
    """
    return {
        page_id: dataclasses.replace(page, native_entry=None)
        for page_id, page in pages.items()
    }


def attach_native_entries(
    pages: Mapping[str, CanonicalPage],
    cache_store: CacheStore,
) -> Dict[str, CanonicalPage]:
    """Return copies of the pages carrying their cached native entries.

    Only native cache records are attached; adapter-seeded entries are a
    cheap re-synthesis away and must not be persisted as if they were native.
    Pages without a native record keep whatever blob they already had.

    Args:
        pages: Pages keyed by page id
        cache_store: Cache holding the editor's entries

    Returns:
        New mapping of page copies
    """
    result: Dict[str, CanonicalPage] = {}
    attached = 0
    for page_id, page in pages.items():
        record = cache_store.get(page_id)
        if record is not None and record.is_native:
            result[page_id] = dataclasses.replace(
                page, native_entry=copy.deepcopy(record.entry)
            )
            attached += 1
        else:
            result[page_id] = dataclasses.replace(page)
    logger.debug(f"Attached native entries to {attached}/{len(result)} pages")
    return result
