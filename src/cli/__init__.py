"""Command-line interface for the canvas editor sync layer.

This package provides the `canvas-sync` CLI tool: a round-trip self-check
over a project file's pages, and a project export that strips editor-internal
data.
"""

from .models import ExitCode, PageCheck, CheckSummary
from .errors import CLIError, ProjectFileError
from .project_file import ProjectFile

__all__ = [
    'ExitCode',
    'PageCheck',
    'CheckSummary',
    'CLIError',
    'ProjectFileError',
    'ProjectFile',
]
