"""Test fixtures for canvas-sync tests.

This module provides builders for:
- Canonical nodes and pages
- Editor entries, both native-looking and adapter-shaped
- Project files on disk for CLI tests
"""

from .sample_pages import (
    make_button,
    make_stack_page,
    make_heading_page,
    make_pages,
    native_entry,
    write_project_file,
)

__all__ = [
    'make_button',
    'make_stack_page',
    'make_heading_page',
    'make_pages',
    'native_entry',
    'write_project_file',
]
