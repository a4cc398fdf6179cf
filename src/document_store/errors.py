"""Typed exception hierarchy for document store errors.

This module defines the exceptions raised by the document cache, the editor
backend and the settings loader. All inherit from SyncError.
"""

from typing import Optional

from src.editor_adapter.errors import SyncError


class DocumentStoreError(SyncError):
    """Base exception for all document store errors."""
    pass


class NoCachedEntryError(DocumentStoreError):
    """Raised when the editor asks for a document that was never cached.

    This is an integration bug on the caller's side: a page must be
    initialized some other way (not from a prior document) when it has no
    cache entry. Fabricating a native-looking entry on demand is not safe.
    """

    def __init__(self, page_id: str):
        super().__init__(
            f"No cached entry for page '{page_id}': initialize it without a prior document"
        )
        self.page_id = page_id


class TemplateNotFoundError(DocumentStoreError):
    """Raised when a requested template does not exist."""

    def __init__(self, template_id: str):
        super().__init__(f"Template '{template_id}' not found")
        self.template_id = template_id


class ConfigError(DocumentStoreError):
    """Raised when a settings file is invalid or malformed."""

    def __init__(self, message: str, field: Optional[str] = None):
        if field:
            full_message = f"Config error in field '{field}': {message}"
        else:
            full_message = f"Config error: {message}"
        super().__init__(full_message)
        self.field = field
        self.original_message = message


class ConfigFilesystemError(DocumentStoreError):
    """Raised when settings file filesystem operations fail."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Config file operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason
