"""
Tests for editing operations and EditorSession.
"""

import pytest

from pdf_instructions.editor import (
    EditorSession,
    add_element,
    create_default_element,
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
from pdf_instructions.exceptions import ValidationError
from pdf_instructions.validator import validate_instructions


@pytest.fixture
def document():
    return validate_instructions(
        {
            "metadata": {"title": "Doc"},
            "content": [
                {"type": "heading", "level": 1, "content": "A"},
                {"type": "paragraph", "content": "B"},
                {"type": "divider"},
            ],
        }
    )


def labels(document):
    return [getattr(element, "content", element.type) for element in document.content]


class TestContentOperations:
    """Test cases for pure content operations."""

    def test_add_appends(self, document):
        """Test appending an element."""
        result = add_element(document, {"type": "spacer", "height": 5})

        assert labels(result)[-1] == "spacer"
        assert len(document.content) == 3

    def test_add_at_index(self, document):
        """Test inserting at a position."""
        result = add_element(document, create_default_element("caption"), 1)

        assert labels(result) == ["A", "Caption text", "B", "divider"]

    def test_add_invalid_element(self, document):
        """Test that invalid dict elements are rejected."""
        with pytest.raises(ValidationError):
            add_element(document, {"type": "heading", "level": 1})

    def test_update(self, document):
        """Test replacing an element."""
        result = update_element(document, 1, {"type": "paragraph", "content": "C"})

        assert labels(result) == ["A", "C", "divider"]
        assert labels(document) == ["A", "B", "divider"]

    def test_remove(self, document):
        """Test removing an element."""
        assert labels(remove_element(document, 0)) == ["B", "divider"]

    def test_duplicate_is_deep(self, document):
        """Test that duplicates do not share nested state."""
        document = add_element(document, create_default_element("list"))
        result = duplicate_element(document, 3)
        result.content[4].items.append("extra")

        assert len(result.content[3].items) == 3
        assert result.content[3] is not result.content[4]

    def test_move(self, document):
        """Test moving to an absolute index."""
        assert labels(move_element(document, 0, 2)) == ["B", "divider", "A"]

    def test_move_up_and_down(self, document):
        """Test moving by one step and at the edges."""
        assert labels(move_element_up(document, 1)) == ["B", "A", "divider"]
        assert labels(move_element_down(document, 1)) == ["A", "divider", "B"]
        assert move_element_up(document, 0) is document
        assert move_element_down(document, 2) is document

    @pytest.mark.parametrize("index", [-1, 3])
    def test_index_out_of_range(self, document, index):
        """Test out-of-range indices."""
        with pytest.raises(IndexError):
            remove_element(document, index)


class TestDocumentSettings:
    """Test cases for metadata, theme and page setting updates."""

    def test_update_metadata(self, document):
        """Test merging metadata with snake_case keys."""
        result = update_metadata(document, author="Ann", created_at="2024-01-01")

        assert result.metadata.title == "Doc"
        assert result.metadata.author == "Ann"
        assert result.metadata.created_at == "2024-01-01"

    def test_update_theme_from_empty(self, document):
        """Test setting a theme on a document without one."""
        result = update_theme(document, primary_color="#ff0000")

        assert result.theme.primary_color == "#ff0000"

    def test_update_page_settings(self, document):
        """Test page setting merge."""
        result = update_page_settings(document, size="LETTER", orientation="landscape")

        assert result.page_settings.size == "LETTER"
        assert result.page_settings.orientation == "landscape"

    def test_invalid_setting(self, document):
        """Test that invalid values raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            update_page_settings(document, size="A9")

        assert exc_info.value.path == "size"


class TestEditorSession:
    """Test cases for EditorSession."""

    def test_new_session(self):
        """Test a session over the default document."""
        session = EditorSession()

        assert session.document.metadata.title == "Untitled Document"
        assert session.element_ids == []
        assert session.is_dirty

    def test_ids_follow_operations(self, document):
        """Test that ids stay aligned with content."""
        session = EditorSession(document, saved=True)
        first, second, third = session.element_ids

        new_id = session.add("table", 1)
        assert session.element_ids == [first, new_id, second, third]
        assert session.get_element(new_id).type == "table"

        session.move_down(first)
        assert session.element_ids == [new_id, first, second, third]
        assert session.get_element(first).content == "A"

        copy_id = session.duplicate(second)
        assert session.element_ids.index(copy_id) == session.element_ids.index(second) + 1

        session.remove(third)
        assert third not in session.element_ids
        assert len(session.element_ids) == len(session.document.content)

    def test_ids_are_unique(self, document):
        """Test id uniqueness."""
        session = EditorSession(document)
        for _ in range(5):
            session.add("divider")

        assert len(set(session.element_ids)) == len(session.element_ids)

    def test_selection(self, document):
        """Test selecting and removing the selected element."""
        session = EditorSession(document)
        target = session.element_ids[1]

        session.select(target)
        assert session.selected_id == target

        session.remove(target)
        assert session.selected_id is None

    def test_unknown_id(self, document):
        """Test operations on an unknown id."""
        session = EditorSession(document)

        with pytest.raises(KeyError):
            session.select("missing")

    def test_dirty_tracking(self, document):
        """Test version and saved version."""
        session = EditorSession(document, saved=True)
        assert not session.is_dirty

        session.update_theme(accent_color="#00ff00")
        assert session.is_dirty

        session.mark_saved()
        assert not session.is_dirty

    def test_update_keeps_id(self, document):
        """Test that updating an element keeps its id."""
        session = EditorSession(document)
        element_id = session.element_ids[0]

        session.update(element_id, {"type": "heading", "level": 2, "content": "Z"})

        assert session.element_ids[0] == element_id
        assert session.get_element(element_id).level == 2

    def test_load_resets(self, document):
        """Test loading a new document."""
        session = EditorSession(document)
        session.select(session.element_ids[0])

        session.load({"metadata": {"title": "Other"}, "content": [{"type": "divider"}]}, saved=True)

        assert session.selected_id is None
        assert len(session.element_ids) == 1
        assert not session.is_dirty
