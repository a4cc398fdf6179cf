"""Editor backend: the document store the visual editor reads and writes.

The editor never touches the host's canonical pages directly. It calls
get/create/update on this backend with its own native entries; the backend
caches them, converts them to canonical pages, and notifies the host.

Documents map 1:1 to host pages. Notifications for create() are immediate;
notifications for update() are debounced per page so a burst of keystrokes
reaches the host as a single change carrying the last state.
"""

import copy
import inspect
import logging
import uuid
from typing import Any, Callable, Dict, List, Optional

from src.document_store.cache_store import CacheStore
from src.document_store.debounce import Debouncer
from src.document_store.errors import NoCachedEntryError
from src.document_store.models import (
    BackendSettings,
    DocRecord,
    DocumentResponse,
    Provenance,
)
from src.document_store.templates import TemplateStore
from src.editor_adapter.entry_models import ExternalEntry
from src.editor_adapter.page_documents import document_to_page
from src.editor_adapter.tree_adapter import canonical_to_external
from src.models.canonical_page import CanonicalPage, PageMeta

logger = logging.getLogger(__name__)

PageChangeCallback = Callable[[str, CanonicalPage], Any]
PageDeleteCallback = Callable[[str], Any]


class DocumentBackend:
    """Cache-first document backend for the visual editor.

    Construction performs cache hygiene against the host's current page set
    and then hydrates pages that have no cache entry yet. The cache store is
    shared by reference, so native entries survive the backend being rebuilt.

    Attributes:
        pages: The host's page set (read, never mutated)
        cache: Shared CacheStore
        settings: BackendSettings in effect
        templates: TemplateStore for user-defined templates

    Example:
        >>> store = CacheStore()
        >>> backend = DocumentBackend(pages, on_page_change=host.apply, cache_store=store)
        >>> doc = await backend.get("home")
        >>> await backend.update("home", doc.version, edited_entry)
        >>> await backend.flush_sync("home")   # before saving the project
    """

    def __init__(
        self,
        pages: Dict[str, CanonicalPage],
        on_page_change: PageChangeCallback,
        on_page_delete: Optional[PageDeleteCallback] = None,
        cache_store: Optional[CacheStore] = None,
        settings: Optional[BackendSettings] = None,
        hydrate: bool = True,
    ):
        """Initialize backend.

        Args:
            pages: Host pages keyed by page id
            on_page_change: Called with (page_id, CanonicalPage) on every
                propagated change
            on_page_delete: Called with page_id when a page is deleted
            cache_store: Shared cache; a private one is created if omitted
            settings: Backend settings (defaults if omitted)
            hydrate: Seed uncached pages on construction
        """
        self.pages = pages
        self.cache = cache_store if cache_store is not None else CacheStore()
        self.settings = settings or BackendSettings()
        self.templates = TemplateStore()
        self._on_page_change = on_page_change
        self._on_page_delete = on_page_delete
        self._debouncers: Dict[str, Debouncer] = {}

        self._run_hygiene()
        if hydrate:
            self._hydrate()

    # ================================================================
    # Construction-time hygiene and hydration
    # ================================================================

    def _run_hygiene(self) -> None:
        # Orphans first: pages deleted/replaced outside this subsystem
        self.cache.evict_orphans(self.pages.keys())
        # Then stale syntheses; native entries are kept
        self.cache.invalidate_adapter_seeded()

    def _hydrate(self) -> None:
        for page_id, page in self.pages.items():
            if page_id in self.cache:
                continue
            if page.native_entry is not None:
                self.cache.put(DocRecord(
                    id=page_id,
                    version=1,
                    entry=copy.deepcopy(page.native_entry),
                    provenance=Provenance.NATIVE,
                    meta=page.meta,
                ))
                logger.debug(f"Restored native entry for page {page_id}")
            else:
                self.seed_page(page)

    def seed_page(self, page: CanonicalPage) -> Optional[DocRecord]:
        """Synthesize an adapter-seeded cache entry from a canonical page.

        This is best-effort hydration: the entry may hold literal values where
        the editor would normally keep token references. If conversion fails
        the page is left uncached, so the editor initializes it empty.

        Args:
            page: Canonical page to seed

        Returns:
            The cached DocRecord, or None if conversion failed
        """
        try:
            entry = canonical_to_external(page.content)
        except Exception:
            logger.exception(f"Failed to seed page {page.id}; leaving it uncached")
            return None

        record = DocRecord(
            id=page.id,
            version=1,
            entry=entry,
            provenance=Provenance.ADAPTER_SEEDED,
            meta=page.meta,
        )
        self.cache.put(record)
        return record

    # ================================================================
    # Editor contract: documents.get / create / update
    # ================================================================

    async def get(self, page_id: str) -> DocumentResponse:
        """Get the cached document for a page.

        Args:
            page_id: Page id

        Returns:
            DocumentResponse with the cached entry and its version

        Raises:
            NoCachedEntryError: If the page has no cache entry
        """
        record = self.cache.get(page_id)
        if record is None:
            raise NoCachedEntryError(page_id)
        return DocumentResponse(id=record.id, version=record.version, entry=record.entry)

    async def create(self, entry: ExternalEntry) -> DocumentResponse:
        """Create a new page from an editor-normalized entry.

        The host is notified immediately, without debounce.

        Args:
            entry: Root entry, already normalized by the editor

        Returns:
            DocumentResponse with the new page id and version 1
        """
        page_id = f"page-{uuid.uuid4().hex[:12]}"
        meta = PageMeta(
            label=self.settings.new_page_label.format(n=len(self.cache) + 1),
            route=f"/{page_id}",
        )
        self.cache.put(DocRecord(
            id=page_id,
            version=1,
            entry=entry,
            provenance=Provenance.NATIVE,
            meta=meta,
        ))
        logger.info(f"Created page {page_id} ({meta.label})")

        page = self._convert(page_id, entry, meta)
        if page is not None:
            result = self._deliver(page_id, page)
            if inspect.isawaitable(result):
                await result

        return DocumentResponse(id=page_id, version=1, entry=entry)

    async def update(
        self,
        page_id: str,
        version: int,
        entry: ExternalEntry,
    ) -> DocumentResponse:
        """Store an edited entry and schedule a debounced host notification.

        The entry always becomes the page's native entry, superseding any
        adapter-seeded one. The cache is updated even if conversion fails; in
        that case the host notification is skipped, any notification still
        pending for the page is dropped, and the error logged, so the editor's
        own state is never disrupted.

        Args:
            page_id: Page id
            version: Version the editor based its edit on
            entry: Edited root entry

        Returns:
            DocumentResponse with the bumped version
        """
        existing = self.cache.get(page_id)
        if existing is not None:
            if version != existing.version:
                logger.debug(
                    f"Update for page {page_id} based on v{version}, cache has v{existing.version}"
                )
            new_version = existing.version + 1
        else:
            new_version = (version or 0) + 1

        meta = self._meta_for(page_id, existing)
        self.cache.put(DocRecord(
            id=page_id,
            version=new_version,
            entry=entry,
            provenance=Provenance.NATIVE,
            meta=meta,
        ))

        page = self._convert(page_id, entry, meta)
        if page is not None:
            self._debouncer(page_id).schedule(page_id, page)
        else:
            # An older pending page must not reach the host after a newer edit
            self.cancel(page_id)

        return DocumentResponse(id=page_id, version=new_version, entry=entry)

    # ================================================================
    # Debounce control
    # ================================================================

    def flush(self, page_id: Optional[str] = None) -> None:
        """Fire pending notifications now (one page, or all pages)."""
        for debouncer in self._select_debouncers(page_id):
            debouncer.flush()

    async def flush_sync(self, page_id: Optional[str] = None) -> None:
        """Fire pending notifications and wait for the host to process them.

        Call this before any persistence action that depends on host state.
        """
        for debouncer in self._select_debouncers(page_id):
            await debouncer.flush_sync()

    def cancel(self, page_id: Optional[str] = None) -> None:
        """Drop pending notifications (one page, or all pages)."""
        for debouncer in self._select_debouncers(page_id):
            debouncer.cancel()

    def pending(self, page_id: Optional[str] = None) -> bool:
        """Check whether a notification is pending (for one page, or any page)."""
        return any(debouncer.pending() for debouncer in self._select_debouncers(page_id))

    # ================================================================
    # Lifecycle
    # ================================================================

    async def delete_page(self, page_id: str) -> None:
        """Tear down a page: drop its pending notification and cache entry.

        The pending notification is cancelled first so a late notification
        cannot re-create state for a page that no longer exists. An awaitable
        on_page_delete result is awaited.
        """
        debouncer = self._debouncers.pop(page_id, None)
        if debouncer is not None:
            debouncer.cancel()
        self.cache.delete(page_id)
        logger.info(f"Deleted page {page_id}")

        if self._on_page_delete is not None:
            result = self._on_page_delete(page_id)
            if inspect.isawaitable(result):
                await result

    def invalidate_all(self) -> None:
        """Cancel all pending notifications and clear the whole cache.

        Used after the whole project was replaced out-of-band (import, undo),
        so stale entries are never served for replaced pages.
        """
        self.cancel()
        self._debouncers.clear()
        self.cache.clear()

    def evict_crashed_entry(self, page_id: str) -> bool:
        """Evict an entry known to crash the editor, if it was adapter-seeded.

        The page then falls back to an empty initialization on retry.
        Native entries are never evicted.

        Returns:
            True if the entry was evicted
        """
        return self.cache.evict_if_adapter_seeded(page_id)

    def has_native_entry(self, page_id: str) -> bool:
        """Check whether a page's cached entry came from the editor."""
        return self.cache.has_native_entry(page_id)

    def version_of(self, page_id: str) -> Optional[int]:
        """Get a page's cached version, or None if uncached."""
        record = self.cache.get(page_id)
        return record.version if record is not None else None

    # ================================================================
    # Helpers
    # ================================================================

    def _meta_for(self, page_id: str, record: Optional[DocRecord]) -> PageMeta:
        host_page = self.pages.get(page_id)
        if host_page is not None:
            return host_page.meta
        if record is not None:
            return record.meta
        return PageMeta(label=page_id, route=f"/{page_id}")

    def _convert(
        self,
        page_id: str,
        entry: ExternalEntry,
        meta: PageMeta,
    ) -> Optional[CanonicalPage]:
        try:
            page = document_to_page(page_id, entry, meta, self.settings.breakpoints)
        except Exception:
            logger.exception(
                f"Failed to convert entry for page {page_id}; host notification skipped"
            )
            return None
        page.native_entry = entry
        return page

    def _deliver(self, page_id: str, page: CanonicalPage) -> Any:
        return self._on_page_change(page_id, page)

    def _debouncer(self, page_id: str) -> Debouncer:
        debouncer = self._debouncers.get(page_id)
        if debouncer is None:
            debouncer = Debouncer(
                self._deliver,
                self.settings.debounce_seconds,
                self.settings.flush_sync_turns,
            )
            self._debouncers[page_id] = debouncer
        return debouncer

    def _select_debouncers(self, page_id: Optional[str]) -> List[Debouncer]:
        if page_id is None:
            return list(self._debouncers.values())
        debouncer = self._debouncers.get(page_id)
        return [debouncer] if debouncer is not None else []
