"""Element defaults and editing operations for interactively built documents."""

from .element_defaults import (
    ELEMENT_LABELS,
    create_default_element,
    create_default_instructions,
    get_element_label,
    get_element_summary,
)
from .operations import (
    EditorSession,
    add_element,
    duplicate_element,
    move_element,
    move_element_down,
    move_element_up,
    remove_element,
    update_element,
    update_metadata,
    update_page_settings,
    update_theme,
)

__all__ = [
    "ELEMENT_LABELS",
    "create_default_element",
    "create_default_instructions",
    "get_element_label",
    "get_element_summary",
    "EditorSession",
    "add_element",
    "duplicate_element",
    "move_element",
    "move_element_down",
    "move_element_up",
    "remove_element",
    "update_element",
    "update_metadata",
    "update_page_settings",
    "update_theme",
]
