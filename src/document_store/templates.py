"""In-memory store for user-defined editor templates.

Templates are entry snippets the user saves from the editor to reuse later.
They are not pages: they never reach the host's canonical tree.
"""

import logging
import uuid
from dataclasses import replace
from typing import Dict, List, Optional

from src.document_store.errors import TemplateNotFoundError
from src.document_store.models import TemplateRecord
from src.editor_adapter.entry_models import ExternalEntry

logger = logging.getLogger(__name__)


class TemplateStore:
    """Template half of the editor backend contract.

    Methods are coroutines to match the editor's asynchronous backend
    interface, even though the store itself is in-memory.
    """

    def __init__(self):
        self._templates: Dict[str, TemplateRecord] = {}

    async def get(self, template_id: str) -> TemplateRecord:
        """Get a template by id.

        Raises:
            TemplateNotFoundError: If no template has this id
        """
        template = self._templates.get(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)
        return template

    async def get_all(self) -> List[TemplateRecord]:
        """Get all templates, in creation order."""
        return list(self._templates.values())

    async def create(
        self,
        label: str,
        entry: ExternalEntry,
        width: Optional[int] = None,
        width_auto: Optional[bool] = None,
    ) -> TemplateRecord:
        """Save a new template.

        Args:
            label: Display name
            entry: Template content entry
            width: Optional preview width
            width_auto: Whether the preview width adapts to content

        Returns:
            The stored TemplateRecord with its new id
        """
        template_id = f"tpl-{uuid.uuid4().hex[:12]}"
        template = TemplateRecord(
            id=template_id,
            label=label,
            entry=entry,
            width=width,
            width_auto=width_auto,
        )
        self._templates[template_id] = template
        logger.info(f"Created template {template_id} ({label})")
        return template

    async def update(self, template_id: str, label: str) -> TemplateRecord:
        """Rename a template. The entry itself is immutable once saved.

        Raises:
            TemplateNotFoundError: If no template has this id
        """
        existing = self._templates.get(template_id)
        if existing is None:
            raise TemplateNotFoundError(template_id)
        updated = replace(existing, label=label)
        self._templates[template_id] = updated
        return updated

    async def delete(self, template_id: str) -> None:
        """Delete a template. Deleting an unknown id is a no-op."""
        if self._templates.pop(template_id, None) is not None:
            logger.info(f"Deleted template {template_id}")
