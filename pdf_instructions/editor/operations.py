"""
Element-level editing operations.

Every operation returns a new document whose ``content`` list is
replaced; untouched sibling elements are shared, nested lists are never
mutated in place. :class:`EditorSession` layers stable per-element ids,
selection and dirty tracking over those operations.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..models import Element, InstructionDocument, Metadata, PageSettings, Theme
from ..validator import to_validation_error, validate_element, validate_instructions
from .element_defaults import create_default_element, create_default_instructions

logger = logging.getLogger(__name__)

ElementInput = Union[Element, Dict[str, Any]]


def _with_content(document: InstructionDocument, content: List[Element]) -> InstructionDocument:
    return document.model_copy(update={"content": content})


def _check_index(document: InstructionDocument, index: int) -> None:
    if not 0 <= index < len(document.content):
        raise IndexError(f"Element index {index} out of range (document has {len(document.content)} elements)")


def _coerce(element: ElementInput) -> Element:
    if isinstance(element, dict):
        return validate_element(element)
    return element


def add_element(document: InstructionDocument, element: ElementInput, index: Optional[int] = None) -> InstructionDocument:
    """
    Insert an element.

    Args:
        document: Source document
        element: Element model or JSON-like element
        index: Insert position; appends when omitted

    Returns:
        New document with the element inserted
    """
    content = list(document.content)
    position = len(content) if index is None else max(0, min(index, len(content)))
    content.insert(position, _coerce(element))
    return _with_content(document, content)


def update_element(document: InstructionDocument, index: int, element: ElementInput) -> InstructionDocument:
    """Replace the element at ``index``."""
    _check_index(document, index)
    content = list(document.content)
    content[index] = _coerce(element)
    return _with_content(document, content)


def remove_element(document: InstructionDocument, index: int) -> InstructionDocument:
    _check_index(document, index)
    content = list(document.content)
    del content[index]
    return _with_content(document, content)


def duplicate_element(document: InstructionDocument, index: int) -> InstructionDocument:
    """Insert a deep copy of the element at ``index`` right after it."""
    _check_index(document, index)
    content = list(document.content)
    content.insert(index + 1, content[index].model_copy(deep=True))
    return _with_content(document, content)


def move_element(document: InstructionDocument, from_index: int, to_index: int) -> InstructionDocument:
    """Move one element; ``to_index`` is its position after the move."""
    _check_index(document, from_index)
    _check_index(document, to_index)
    if from_index == to_index:
        return document
    content = list(document.content)
    content.insert(to_index, content.pop(from_index))
    return _with_content(document, content)


def move_element_up(document: InstructionDocument, index: int) -> InstructionDocument:
    _check_index(document, index)
    if index == 0:
        return document
    return move_element(document, index, index - 1)


def move_element_down(document: InstructionDocument, index: int) -> InstructionDocument:
    _check_index(document, index)
    if index == len(document.content) - 1:
        return document
    return move_element(document, index, index + 1)


def _merge(current, model_cls, changes: Dict[str, Any]):
    base = current.to_instructions() if current is not None else {}
    base.update({to_camel(key) if "_" in key else key: value for key, value in changes.items()})
    try:
        return model_cls.model_validate(base)
    except PydanticValidationError as exc:
        raise to_validation_error(exc) from exc


def update_metadata(document: InstructionDocument, **changes: Any) -> InstructionDocument:
    """Merge partial metadata changes (snake_case or camelCase keys)."""
    return document.model_copy(update={"metadata": _merge(document.metadata, Metadata, changes)})


def update_theme(document: InstructionDocument, **changes: Any) -> InstructionDocument:
    """Merge partial theme changes."""
    return document.model_copy(update={"theme": _merge(document.theme, Theme, changes)})


def update_page_settings(document: InstructionDocument, **changes: Any) -> InstructionDocument:
    """Merge partial page settings changes."""
    return document.model_copy(update={"page_settings": _merge(document.page_settings, PageSettings, changes)})


class EditorSession:
    """
    Working copy of one document under interactive editing.

    Keeps a parallel list of element ids (one per top-level element) in
    step with every content operation, so the interactive surface can
    track selection across re-renders. Ids never enter the document.
    """

    def __init__(self, document: Optional[InstructionDocument] = None, saved: bool = False):
        self.document = document if document is not None else create_default_instructions()
        self.element_ids: List[str] = [self._new_id() for _ in self.document.content]
        self.selected_id: Optional[str] = None
        self.version = 1
        self.saved_version = 1 if saved else 0

    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex[:9]

    def _index_of(self, element_id: str) -> int:
        try:
            return self.element_ids.index(element_id)
        except ValueError:
            raise KeyError(f"Unknown element id: {element_id}") from None

    def _commit(self, document: InstructionDocument) -> None:
        self.document = document
        self.version += 1

    @property
    def is_dirty(self) -> bool:
        return self.version != self.saved_version

    def mark_saved(self) -> None:
        self.saved_version = self.version

    def load(self, document: Union[InstructionDocument, Dict[str, Any]], saved: bool = False) -> None:
        """Replace the working document wholesale; ids and selection are reset."""
        self.document = validate_instructions(document)
        self.element_ids = [self._new_id() for _ in self.document.content]
        self.selected_id = None
        self.version = 1
        self.saved_version = 1 if saved else 0

    def get_element(self, element_id: str) -> Element:
        return self.document.content[self._index_of(element_id)]

    def elements_with_ids(self) -> List[tuple]:
        return list(zip(self.element_ids, self.document.content))

    def select(self, element_id: Optional[str]) -> None:
        if element_id is not None:
            self._index_of(element_id)
        self.selected_id = element_id

    def add(self, element_type: str, index: Optional[int] = None) -> str:
        """Add a default element of ``element_type``; returns its new id."""
        position = len(self.element_ids) if index is None else max(0, min(index, len(self.element_ids)))
        self._commit(add_element(self.document, create_default_element(element_type), position))
        new_id = self._new_id()
        self.element_ids.insert(position, new_id)
        logger.debug(f"Added {element_type} element {new_id} at {position}")
        return new_id

    def update(self, element_id: str, element: ElementInput) -> None:
        self._commit(update_element(self.document, self._index_of(element_id), element))

    def remove(self, element_id: str) -> None:
        index = self._index_of(element_id)
        self._commit(remove_element(self.document, index))
        del self.element_ids[index]
        if self.selected_id == element_id:
            self.selected_id = None

    def duplicate(self, element_id: str) -> str:
        index = self._index_of(element_id)
        self._commit(duplicate_element(self.document, index))
        new_id = self._new_id()
        self.element_ids.insert(index + 1, new_id)
        return new_id

    def move(self, from_index: int, to_index: int) -> None:
        if from_index == to_index:
            return
        self._commit(move_element(self.document, from_index, to_index))
        self.element_ids.insert(to_index, self.element_ids.pop(from_index))

    def move_up(self, element_id: str) -> None:
        index = self._index_of(element_id)
        if index > 0:
            self.move(index, index - 1)

    def move_down(self, element_id: str) -> None:
        index = self._index_of(element_id)
        if index < len(self.element_ids) - 1:
            self.move(index, index + 1)

    def update_metadata(self, **changes: Any) -> None:
        self._commit(update_metadata(self.document, **changes))

    def update_theme(self, **changes: Any) -> None:
        self._commit(update_theme(self.document, **changes))

    def update_page_settings(self, **changes: Any) -> None:
        self._commit(update_page_settings(self.document, **changes))
