"""
Tests for the validator module.

Checks path-qualified errors, JSON parsing and serialization round-trips.
"""

import json

import pytest

from pdf_instructions.exceptions import ValidationError
from pdf_instructions.validator import (
    format_location,
    instructions_json_schema,
    instructions_to_json,
    serialize_instructions,
    validate_element,
    validate_elements,
    validate_instructions,
    validate_json_string,
)


class TestFormatLocation:
    """Test cases for error path formatting."""

    def test_drops_discriminator_tags(self):
        """Test that union tags disappear from the path."""
        assert format_location(("content", 2, "heading", "level")) == "content.2.level"

    def test_nested_children(self):
        """Test a path through section children."""
        loc = ("content", 0, "section", "children", 1, "table", "rows")

        assert format_location(loc) == "content.0.children.1.rows"

    def test_field_named_like_a_tag_is_kept(self):
        """Test that the columns field survives next to the columns tag."""
        loc = ("content", 0, "columns", "columns", 0, "children")

        assert format_location(loc) == "content.0.columns.0.children"

    def test_root(self):
        """Test the empty root path."""
        assert format_location(()) == ""


class TestValidateInstructions:
    """Test cases for whole-document validation."""

    def test_valid_document(self, sample_instructions):
        """Test that the sample document validates."""
        document = validate_instructions(sample_instructions)

        assert document.metadata.title == "Quarterly Report"
        assert len(document.content) == len(sample_instructions["content"])

    def test_model_passthrough(self, sample_document):
        """Test that a validated document is returned unchanged."""
        assert validate_instructions(sample_document) is sample_document

    def test_bad_heading_level_path(self, sample_instructions):
        """Test the path of an invalid heading level."""
        sample_instructions["content"][0]["level"] = 9

        with pytest.raises(ValidationError) as exc_info:
            validate_instructions(sample_instructions)

        assert exc_info.value.path == "content.0.level"
        assert "9" in exc_info.value.message

    def test_missing_title(self, sample_instructions):
        """Test a missing required metadata field."""
        del sample_instructions["metadata"]["title"]

        with pytest.raises(ValidationError) as exc_info:
            validate_instructions(sample_instructions)

        assert exc_info.value.path == "metadata.title"
        assert exc_info.value.message == "Field required"

    def test_unknown_element_type(self, sample_instructions):
        """Test an unknown type tag."""
        sample_instructions["content"].append({"type": "video", "src": "x"})

        with pytest.raises(ValidationError) as exc_info:
            validate_instructions(sample_instructions)

        assert exc_info.value.path == f"content.{len(sample_instructions['content']) - 1}"
        assert "Unknown element type 'video'" in exc_info.value.message

    def test_missing_type_tag(self):
        """Test an element without a type tag."""
        with pytest.raises(ValidationError) as exc_info:
            validate_element({"content": "x"})

        assert "Missing element type tag" in exc_info.value.message

    def test_table_row_mismatch_path(self):
        """Test the path of a table row with too few cells."""
        document = {
            "metadata": {"title": "T"},
            "content": [{"type": "table", "headers": ["A", "B", "C"], "rows": [["1", "2"]]}],
        }

        with pytest.raises(ValidationError) as exc_info:
            validate_instructions(document)

        assert exc_info.value.path == "content.0.rows.0"
        assert exc_info.value.message == "row 0 has 2 cells, expected 3 (one per header)"

    def test_all_issues_kept(self):
        """Test that every violation is listed in issues."""
        document = {
            "metadata": {},
            "content": [{"type": "heading", "level": 0, "content": "x"}],
        }

        with pytest.raises(ValidationError) as exc_info:
            validate_instructions(document)

        paths = [path for path, _ in exc_info.value.issues]
        assert "metadata.title" in paths
        assert "content.0.level" in paths
        assert exc_info.value.to_dict()["path"] == exc_info.value.path

    def test_validate_elements(self):
        """Test validating a bare element list."""
        elements = validate_elements([{"type": "divider"}, {"type": "spacer", "height": 4}])

        assert [element.type for element in elements] == ["divider", "spacer"]


class TestValidateJsonString:
    """Test cases for raw JSON input."""

    def test_valid_json(self, sample_instructions):
        """Test parsing a JSON string."""
        document = validate_json_string(json.dumps(sample_instructions))

        assert document.metadata.author == "Finance Team"

    def test_malformed_json(self):
        """Test that parse errors are reported at the root."""
        with pytest.raises(ValidationError) as exc_info:
            validate_json_string('{"metadata": ')

        assert exc_info.value.path == ""
        assert exc_info.value.message.startswith("JSON Parse Error:")


class TestSerialization:
    """Test cases for serialization."""

    def test_round_trip(self, sample_instructions):
        """Test that serialize(validate(x)) == x for a valid document."""
        document = validate_instructions(sample_instructions)

        assert serialize_instructions(document) == sample_instructions
        assert validate_instructions(serialize_instructions(document)) == document

    def test_unset_optionals_omitted(self):
        """Test that unset optional fields are not emitted."""
        document = validate_instructions({"metadata": {"title": "T"}, "content": [{"type": "divider"}]})

        assert serialize_instructions(document) == {"metadata": {"title": "T"}, "content": [{"type": "divider"}]}

    def test_to_json(self, sample_document):
        """Test JSON string output."""
        text = instructions_to_json(sample_document, pretty=False)

        assert "\n" not in text
        assert json.loads(text)["pageSettings"]["size"] == "A4"

    def test_json_schema_uses_aliases(self):
        """Test that the JSON Schema is keyed by camelCase names."""
        schema = instructions_json_schema()

        assert "pageSettings" in schema["properties"]
        assert "metadata" in schema["required"]
