"""Data models for the document cache and editor backend.

All models use dataclasses, following the patterns in src/models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from src.editor_adapter.entry_models import BREAKPOINT_ORDER, ExternalEntry
from src.models.canonical_page import PageMeta


class Provenance(Enum):
    """Where a cached editor entry came from.

    - NATIVE: produced or validated by the editor itself; authoritative
    - ADAPTER_SEEDED: synthesized from the canonical tree as best-effort
      hydration; may hold literal values where the editor expects token
      references, so it is never as trustworthy as a native entry
    """
    NATIVE = "native"
    ADAPTER_SEEDED = "adapterSeeded"


@dataclass
class DocRecord:
    """A cached editor document for one page.

    Attributes:
        id: Page id
        version: Version counter, monotonic per page
        entry: Root editor entry
        provenance: Whether the entry is native or adapter-seeded
        meta: Page metadata used when notifying the host
    """
    id: str
    version: int
    entry: ExternalEntry
    provenance: Provenance
    meta: PageMeta

    @property
    def is_native(self) -> bool:
        """True if the editor produced this entry."""
        return self.provenance is Provenance.NATIVE


@dataclass
class DocumentResponse:
    """Response shape the editor expects from get/create/update.

    Attributes:
        id: Page id
        version: Current version
        entry: Root editor entry
    """
    id: str
    version: int
    entry: ExternalEntry

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the editor's {id, version, entry} shape."""
        return {"id": self.id, "version": self.version, "entry": self.entry}


@dataclass
class TemplateRecord:
    """A user-defined template saved from the editor.

    Attributes:
        id: Template id
        label: Display name
        entry: Template content entry
        is_user_defined: Always True for templates stored here
        width: Optional preview width in pixels
        width_auto: Whether the preview width adapts to content
    """
    id: str
    label: str
    entry: ExternalEntry
    is_user_defined: bool = True
    width: Optional[int] = None
    width_auto: Optional[bool] = None


@dataclass
class BackendSettings:
    """Tunable backend behavior, loaded from .canvas-sync/config.yaml.

    Attributes:
        debounce_ms: Quiet period before an edit burst is propagated to the host
        flush_sync_turns: Loop turns flush_sync yields for host processing
        breakpoints: Responsive breakpoint precedence, most specific first
        new_page_label: Label template for pages created in the editor
    """
    debounce_ms: int = 300
    flush_sync_turns: int = 2
    breakpoints: Tuple[str, ...] = field(default=BREAKPOINT_ORDER)
    new_page_label: str = "Page {n}"

    @property
    def debounce_seconds(self) -> float:
        """Debounce window in seconds."""
        return self.debounce_ms / 1000
