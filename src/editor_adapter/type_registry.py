"""Static mapping between canonical node types and editor component ids.

The two maps are total inverses of each other. They are versioned together
with the catalog of renderable component types; adding a node type means
adding one line to NODE_TYPE_TO_COMPONENT_ID and nothing else.
"""

from typing import Dict, List, Optional

# Canonical node type → editor component id
NODE_TYPE_TO_COMPONENT_ID: Dict[str, str] = {
    # Layout
    "stack": "CanvasStack",
    "row": "CanvasRow",
    "grid": "CanvasGrid",
    "container": "CanvasContainer",
    "accordion": "CanvasAccordion",
    "sidebar": "CanvasSidebar",
    # Content
    "heading": "CanvasHeading",
    "text": "CanvasText",
    "button": "CanvasButton",
    "badge": "CanvasBadge",
    "icon": "CanvasIcon",
    "image": "CanvasImage",
    "divider": "CanvasDivider",
    "spacer": "CanvasSpacer",
    # Data
    "stat-card": "CanvasStatCard",
    "card": "CanvasCard",
    "table": "CanvasTable",
    "list": "CanvasList",
    "key-value": "CanvasKeyValue",
    # Navigation
    "tabs": "CanvasTabs",
    "breadcrumb": "CanvasBreadcrumb",
    "pagination": "CanvasPagination",
    "menu": "CanvasMenu",
    "link": "CanvasLink",
    # Inputs
    "search": "CanvasSearch",
    "select": "CanvasSelect",
    "input": "CanvasInput",
    "textarea": "CanvasTextarea",
    "checkbox": "CanvasCheckbox",
    "switch": "CanvasSwitch",
    "radio": "CanvasRadio",
    # Feedback
    "alert": "CanvasAlert",
    "progress": "CanvasProgress",
    "spinner": "CanvasSpinner",
    "skeleton": "CanvasSkeleton",
    # Overlay
    "modal": "CanvasModal",
    "drawer": "CanvasDrawer",
    "tooltip": "CanvasTooltip",
    # Media
    "avatar": "CanvasAvatar",
    "video": "CanvasVideo",
    "carousel": "CanvasCarousel",
    # Special
    "slot": "CanvasSlot",
}

# Editor component id → canonical node type
COMPONENT_ID_TO_NODE_TYPE: Dict[str, str] = {
    component_id: node_type for node_type, component_id in NODE_TYPE_TO_COMPONENT_ID.items()
}

# Component groups, used by the editor for slot constraints
COMPONENT_GROUPS: Dict[str, List[str]] = {
    "layout": ["CanvasStack", "CanvasRow", "CanvasGrid", "CanvasContainer", "CanvasAccordion", "CanvasSidebar"],
    "content": ["CanvasHeading", "CanvasText", "CanvasButton", "CanvasBadge", "CanvasIcon", "CanvasImage", "CanvasDivider", "CanvasSpacer"],
    "data": ["CanvasStatCard", "CanvasCard", "CanvasTable", "CanvasList", "CanvasKeyValue"],
    "navigation": ["CanvasTabs", "CanvasBreadcrumb", "CanvasPagination", "CanvasMenu", "CanvasLink"],
    "input": ["CanvasSearch", "CanvasSelect", "CanvasInput", "CanvasTextarea", "CanvasCheckbox", "CanvasSwitch", "CanvasRadio"],
    "feedback": ["CanvasAlert", "CanvasProgress", "CanvasSpinner", "CanvasSkeleton"],
    "overlay": ["CanvasModal", "CanvasDrawer", "CanvasTooltip"],
    "media": ["CanvasAvatar", "CanvasVideo", "CanvasCarousel"],
    "special": ["CanvasSlot"],
}

# Flat accept list for unconstrained containers
ALL_COMPONENT_IDS: List[str] = [
    component_id for group in COMPONENT_GROUPS.values() for component_id in group
]


def component_id_for(node_type: str) -> Optional[str]:
    """Look up the editor component id for a canonical node type."""
    return NODE_TYPE_TO_COMPONENT_ID.get(node_type)


def node_type_for(component_id: Optional[str]) -> Optional[str]:
    """Look up the canonical node type for an editor component id."""
    if not component_id:
        return None
    return COMPONENT_ID_TO_NODE_TYPE.get(component_id)
