"""Editor adapter: structural conversion between canonical pages and editor entries.

Key pieces:
    type_registry: Canonical node type ↔ editor component id
    prop_classifier: Per-(prop, node type) encoding rules
    tree_adapter: external_to_canonical / canonical_to_external
    page_documents: Whole-page and whole-project conversion
    roundtrip: check_roundtrip self-check
"""

from .errors import SyncError, AdapterError, ConversionError
from .entry_models import (
    BREAKPOINT_ORDER,
    CHILDREN_SLOT_KEY,
    ExternalEntry,
    is_responsive,
    unwrap_responsive,
)
from .type_registry import (
    NODE_TYPE_TO_COMPONENT_ID,
    COMPONENT_ID_TO_NODE_TYPE,
    component_id_for,
    node_type_for,
)
from .tree_adapter import canonical_to_external, external_to_canonical
from .page_documents import (
    PageDocument,
    page_to_document,
    document_to_page,
    all_pages_to_documents,
    all_documents_to_pages,
)
from .roundtrip import check_roundtrip, compare_nodes

__all__ = [
    # Errors
    "SyncError",
    "AdapterError",
    "ConversionError",
    # Entry shape
    "BREAKPOINT_ORDER",
    "CHILDREN_SLOT_KEY",
    "ExternalEntry",
    "is_responsive",
    "unwrap_responsive",
    # Registry
    "NODE_TYPE_TO_COMPONENT_ID",
    "COMPONENT_ID_TO_NODE_TYPE",
    "component_id_for",
    "node_type_for",
    # Conversion
    "canonical_to_external",
    "external_to_canonical",
    "PageDocument",
    "page_to_document",
    "document_to_page",
    "all_pages_to_documents",
    "all_documents_to_pages",
    "check_roundtrip",
    "compare_nodes",
]
