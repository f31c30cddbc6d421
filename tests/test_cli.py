"""
Tests for CLI functionality.
"""

import json

import pytest

from pdf_instructions.cli import create_parser, main


@pytest.fixture
def document_file(tmp_path, sample_instructions):
    path = tmp_path / "report.json"
    path.write_text(json.dumps(sample_instructions), encoding="utf-8")
    return path


class TestParser:
    """Test cases for argument parsing."""

    def test_render_defaults(self):
        """Test render command defaults."""
        args = create_parser().parse_args(["render", "doc.json"])

        assert args.format == "pdf"
        assert args.output is None
        assert not args.editable

    def test_invalid_format(self):
        """Test an unsupported output format."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["render", "doc.json", "--format", "docx"])


class TestCommands:
    """Test cases for CLI commands."""

    def test_validate_ok(self, document_file, capsys):
        """Test validating a good document."""
        assert main(["validate", str(document_file)]) == 0
        assert "OK: Quarterly Report" in capsys.readouterr().out

    def test_validate_error(self, tmp_path, capsys):
        """Test the first validation error is printed with its path."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"metadata": {"title": "T"}, "content": [{"type": "heading", "level": 9, "content": "x"}]}))

        assert main(["validate", str(path)]) == 1
        assert capsys.readouterr().err.startswith("content.0.level:")

    def test_validate_missing_file(self, tmp_path, capsys):
        """Test a missing input file."""
        assert main(["validate", str(tmp_path / "nope.json")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_render_pdf(self, document_file):
        """Test rendering a PDF next to the input."""
        assert main(["render", str(document_file)]) == 0
        assert document_file.with_suffix(".pdf").read_bytes().startswith(b"%PDF")

    def test_render_html(self, document_file, tmp_path):
        """Test rendering editable HTML to an explicit path."""
        output = tmp_path / "surface.html"

        assert main(["render", str(document_file), "--format", "html", "-o", str(output), "--editable"]) == 0
        assert "data-element-id" in output.read_text(encoding="utf-8")

    def test_schema(self, capsys):
        """Test printing the JSON Schema."""
        assert main(["schema"]) == 0
        assert "pageSettings" in json.loads(capsys.readouterr().out)["properties"]

    def test_new_document(self, capsys):
        """Test printing a default document."""
        assert main(["new"]) == 0
        assert json.loads(capsys.readouterr().out)["metadata"]["title"] == "Untitled Document"

    def test_new_element(self, capsys):
        """Test printing a default element."""
        assert main(["new", "--type", "barChart"]) == 0
        assert json.loads(capsys.readouterr().out)["type"] == "barChart"

    def test_no_command(self, capsys):
        """Test help output without a command."""
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out
