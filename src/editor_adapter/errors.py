"""Typed exception hierarchy for editor adapter errors.

This module defines the base exception for the whole canvas-sync package and
the errors raised by the tree adapter. Unknown types and malformed structured
props are not exceptions: the adapter degrades them and logs a warning.
"""

from typing import Optional


class SyncError(Exception):
    """Base exception for all canvas-sync errors.

    Use this to catch any application-level error from the sync layer.
    """
    pass


class AdapterError(SyncError):
    """Base exception for all tree adapter errors."""
    pass


class ConversionError(AdapterError):
    """Raised when an entry or node has a shape the adapter cannot convert."""

    def __init__(self, message: str, entry_id: Optional[str] = None):
        if entry_id:
            full_message = f"Conversion failed for '{entry_id}': {message}"
        else:
            full_message = f"Conversion failed: {message}"
        super().__init__(full_message)
        self.entry_id = entry_id
        self.original_message = message
