"""Document store: the editor-facing backend over the host's canonical pages.

Key pieces:
    cache_store: Shared per-page cache of editor entries with provenance
    backend: DocumentBackend implementing documents.get/create/update
    debounce: Debouncer coalescing host notifications
    templates: In-memory user template store
    persistence: Strip/attach the native entry blob on canonical pages
    config_loader: BackendSettings from .canvas-sync/config.yaml
"""

from .errors import (
    DocumentStoreError,
    NoCachedEntryError,
    TemplateNotFoundError,
    ConfigError,
    ConfigFilesystemError,
)
from .models import (
    BackendSettings,
    DocRecord,
    DocumentResponse,
    Provenance,
    TemplateRecord,
)
from .cache_store import CacheStore
from .debounce import Debouncer, DebounceState
from .templates import TemplateStore
from .backend import DocumentBackend
from .persistence import attach_native_entries, strip_native_entries
from .config_loader import SettingsLoader

__all__ = [
    'DocumentStoreError',
    'NoCachedEntryError',
    'TemplateNotFoundError',
    'ConfigError',
    'ConfigFilesystemError',
    'BackendSettings',
    'DocRecord',
    'DocumentResponse',
    'Provenance',
    'TemplateRecord',
    'CacheStore',
    'Debouncer',
    'DebounceState',
    'TemplateStore',
    'DocumentBackend',
    'attach_native_entries',
    'strip_native_entries',
    'SettingsLoader',
]
