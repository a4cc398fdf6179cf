"""Project file reading and writing.

A project file is the host's exported page set, as JSON:

    {
        "pages": {
            "home": {"id": "home", "label": "Home", "route": "/", "content": {...}}
        }
    }

The "last known native entry" blob is only written when explicitly asked for;
project exports never carry it.
"""

import json
import logging
import os
from typing import Dict

from src.cli.errors import ProjectFileError
from src.models.canonical_page import CanonicalPage

logger = logging.getLogger(__name__)


class ProjectFile:
    """Loads and saves canonical pages from/to a JSON project file."""

    @classmethod
    def load(cls, file_path: str) -> Dict[str, CanonicalPage]:
        """Load pages from a project file.

        Args:
            file_path: Path to the JSON project file

        Returns:
            Pages keyed by page id, in file order

        Raises:
            ProjectFileError: If the file is missing, unreadable or malformed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            raise ProjectFileError(file_path, 'File not found')
        except json.JSONDecodeError as e:
            raise ProjectFileError(file_path, f'Invalid JSON: {e}')
        except OSError as e:
            raise ProjectFileError(file_path, str(e))

        if not isinstance(data, dict) or not isinstance(data.get('pages'), dict):
            raise ProjectFileError(file_path, "Expected an object with a 'pages' object")

        pages: Dict[str, CanonicalPage] = {}
        for page_id, page_data in data['pages'].items():
            if not isinstance(page_data, dict):
                raise ProjectFileError(file_path, f"Page '{page_id}' is not an object")
            try:
                page = CanonicalPage.from_dict(page_data)
            except (AttributeError, TypeError, ValueError) as e:
                raise ProjectFileError(file_path, f"Page '{page_id}' is malformed: {e}")
            if not page.id:
                page.id = page_id
            pages[page_id] = page

        logger.info(f"Loaded {len(pages)} page(s) from {file_path}")
        return pages

    @classmethod
    def save(
        cls,
        file_path: str,
        pages: Dict[str, CanonicalPage],
        include_native_entries: bool = False,
    ) -> None:
        """Save pages to a project file.

        Args:
            file_path: Destination path; parent directories are created
            pages: Pages keyed by page id
            include_native_entries: Keep editor blobs (local saves only)

        Raises:
            ProjectFileError: If the file cannot be written
        """
        data = {
            'pages': {
                page_id: page.to_dict(include_native_entry=include_native_entries)
                for page_id, page in pages.items()
            }
        }

        parent = os.path.dirname(file_path)
        try:
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(file_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.write('\n')
        except OSError as e:
            raise ProjectFileError(file_path, str(e))

        logger.info(f"Wrote {len(pages)} page(s) to {file_path}")
