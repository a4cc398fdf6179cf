"""Canonical page tree data model.

The canonical tree is the host application's own representation of a page,
independent of any visual editor. Nodes form a strict tree: each node has at
most one parent and ids are unique within a page.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class CanonicalNode:
    """A node in the host's page tree.

    Attributes:
        id: Identifier, unique within its page
        type: Node type key (see src.editor_adapter.type_registry)
        props: Plain prop values (sparse: empty means "no props")
        children: Ordered child nodes
        style: CSS-like overrides, always string-valued
    """
    id: str
    type: str
    props: Dict[str, Any] = field(default_factory=dict)
    children: List['CanonicalNode'] = field(default_factory=list)
    style: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CanonicalNode':
        """Build a node tree from its JSON shape.

        Malformed parts degrade instead of raising: ids and types are
        coerced to strings, non-object props or style read as empty, and
        non-object children are skipped with a warning.

        Args:
            data: Dictionary with id, type and optional props/children/style

        Returns:
            CanonicalNode with all descendants converted
        """
        node_id = data.get('id')
        node_type = data.get('type')
        props = data.get('props')
        style = data.get('style')
        raw_children = data.get('children')

        children = []
        if isinstance(raw_children, list):
            for child in raw_children:
                if isinstance(child, dict):
                    children.append(cls.from_dict(child))
                else:
                    logger.warning(
                        f"Skipping non-object child of node {node_id!r}: {type(child).__name__}"
                    )
        elif raw_children:
            logger.warning(f"Ignoring malformed children of node {node_id!r}")

        return cls(
            id=str(node_id) if node_id is not None else '',
            type=str(node_type) if node_type is not None else '',
            props=dict(props) if isinstance(props, dict) else {},
            children=children,
            style=dict(style) if isinstance(style, dict) else {},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert this node back to its JSON shape.

        Empty props, children and style are omitted.

        Returns:
            Dictionary suitable for JSON serialization
        """
        result: Dict[str, Any] = {'id': self.id, 'type': self.type}
        if self.props:
            result['props'] = copy.deepcopy(self.props)
        if self.children:
            result['children'] = [child.to_dict() for child in self.children]
        if self.style:
            result['style'] = dict(self.style)
        return result

    def iter_nodes(self):
        """Yield this node and every descendant in document order."""
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def find_by_id(self, node_id: str) -> Optional['CanonicalNode']:
        """Find a node in this subtree by id.

        Args:
            node_id: The id to search for

        Returns:
            The matching node, or None if not found
        """
        for node in self.iter_nodes():
            if node.id == node_id:
                return node
        return None


@dataclass
class PageMeta:
    """Page metadata carried alongside the content tree.

    Attributes:
        label: Human readable page name
        route: URL route of the page
        browser_title: Optional document title
    """
    label: str
    route: str
    browser_title: Optional[str] = None


@dataclass
class CanonicalPage:
    """A page in the host application.

    Attributes:
        id: Page identifier
        label: Human readable page name
        route: URL route of the page
        content: Root of the page's node tree
        browser_title: Optional document title
        native_entry: Last known native editor entry, kept only to re-hydrate
            the document cache after a restart. Never part of exported data.
    """
    id: str
    label: str
    route: str
    content: CanonicalNode
    browser_title: Optional[str] = None
    native_entry: Optional[Dict[str, Any]] = None

    @property
    def meta(self) -> PageMeta:
        """Metadata view of this page."""
        return PageMeta(label=self.label, route=self.route, browser_title=self.browser_title)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CanonicalPage':
        """Build a page from its JSON shape.

        Accepts both ``browserTitle`` and ``browser_title`` keys, and
        ``nativeEntry`` for the persisted editor blob.

        Raises:
            ValueError: If content or nativeEntry is present but not an object
        """
        content = data.get('content') or {}
        if not isinstance(content, dict):
            raise ValueError(f"content must be an object, got {type(content).__name__}")
        native_entry = data.get('nativeEntry')
        if native_entry is not None and not isinstance(native_entry, dict):
            raise ValueError(f"nativeEntry must be an object, got {type(native_entry).__name__}")

        return cls(
            id=str(data.get('id', '')),
            label=str(data.get('label', '')),
            route=str(data.get('route', '')),
            content=CanonicalNode.from_dict(content),
            browser_title=data.get('browserTitle', data.get('browser_title')),
            native_entry=native_entry,
        )

    def to_dict(self, include_native_entry: bool = False) -> Dict[str, Any]:
        """Convert this page to its JSON shape.

        Args:
            include_native_entry: Keep the editor blob (local incremental saves
                only; project exports must leave it out)

        Returns:
            Dictionary suitable for JSON serialization
        """
        result: Dict[str, Any] = {
            'id': self.id,
            'label': self.label,
            'route': self.route,
        }
        if self.browser_title is not None:
            result['browserTitle'] = self.browser_title
        result['content'] = self.content.to_dict()
        if include_native_entry and self.native_entry is not None:
            result['nativeEntry'] = copy.deepcopy(self.native_entry)
        return result
