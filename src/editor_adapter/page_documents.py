"""Page-level conversion between canonical pages and editor documents.

A document is a page's content tree converted to an editor entry, with the
page metadata (label, route, browser title) carried alongside untouched.
Bulk variants convert a whole page collection at project import/export time.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Sequence

from src.models.canonical_page import CanonicalPage, PageMeta

from .entry_models import BREAKPOINT_ORDER, ExternalEntry
from .tree_adapter import canonical_to_external, external_to_canonical


@dataclass
class PageDocument:
    """A page as the editor sees it.

    Attributes:
        id: Page identifier
        entry: Root editor entry of the page content
        meta: Page metadata, not touched by the adapter
    """
    id: str
    entry: ExternalEntry
    meta: PageMeta

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON shape."""
        meta: Dict[str, Any] = {'label': self.meta.label, 'route': self.meta.route}
        if self.meta.browser_title is not None:
            meta['browserTitle'] = self.meta.browser_title
        return {'id': self.id, 'entry': self.entry, 'meta': meta}


def page_to_document(page: CanonicalPage) -> PageDocument:
    """Convert a canonical page to an editor document."""
    return PageDocument(
        id=page.id,
        entry=canonical_to_external(page.content),
        meta=page.meta,
    )


def document_to_page(
    page_id: str,
    entry: ExternalEntry,
    meta: PageMeta,
    breakpoints: Sequence[str] = BREAKPOINT_ORDER,
) -> CanonicalPage:
    """Convert an editor document back to a canonical page.

    Raises:
        ConversionError: If entry is not an entry object
    """
    return CanonicalPage(
        id=page_id,
        label=meta.label,
        route=meta.route,
        browser_title=meta.browser_title,
        content=external_to_canonical(entry, breakpoints),
    )


def all_pages_to_documents(pages: Mapping[str, CanonicalPage]) -> Dict[str, PageDocument]:
    """Convert every page of a project to an editor document, keyed by page id."""
    return {page_id: page_to_document(page) for page_id, page in pages.items()}


def all_documents_to_pages(
    documents: Mapping[str, PageDocument],
    breakpoints: Sequence[str] = BREAKPOINT_ORDER,
) -> Dict[str, CanonicalPage]:
    """Convert every editor document back to a canonical page, keyed by page id."""
    return {
        page_id: document_to_page(page_id, document.entry, document.meta, breakpoints)
        for page_id, document in documents.items()
    }
