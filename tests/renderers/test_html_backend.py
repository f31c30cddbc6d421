"""
Tests for the interactive HTML back-end.
"""

import logging

import pytest

from pdf_instructions.engine.charts import NO_DATA_MESSAGE
from pdf_instructions.renderers.dispatcher import project_element
from pdf_instructions.renderers.html import HTML_BACKEND, HtmlRenderer, render_rich_text, render_surface
from pdf_instructions.renderers.html.markup import safe_href, style_attr
from pdf_instructions.validator import validate_element


def html_for(node, theme):
    return project_element(node, theme, HTML_BACKEND)


class TestMarkup:
    """Test cases for HTML markup helpers."""

    def test_rich_text(self):
        """Test inline markup conversion."""
        html = render_rich_text("**a** and *b* ~~c~~")

        assert "<strong>a</strong> and <em>b</em> <del>c</del>" == html

    def test_rich_text_escapes(self):
        """Test that text content is escaped."""
        assert render_rich_text("<script>") == "&lt;script&gt;"

    def test_link(self):
        """Test link output."""
        html = render_rich_text("[docs](https://example.com)")

        assert 'href="https://example.com"' in html
        assert 'rel="noopener noreferrer"' in html

    @pytest.mark.parametrize("href", ["javascript:alert(1)", "JavaScript:x", "data:text/html,x"])
    def test_unsafe_links_neutralized(self, href):
        """Test that script-capable schemes are replaced."""
        assert safe_href(href) == "#"

    def test_style_attr_skips_unset(self):
        """Test that None and empty declarations are dropped."""
        assert style_attr({"color": "#fff", "margin": None, "padding": ""}) == ' style="color: #fff"'
        assert style_attr({}) == ""


class TestLeafRenderers:
    """Test cases for individual HTML element renderers."""

    def test_heading(self, theme):
        """Test heading tag and typography."""
        html = html_for({"type": "heading", "level": 3, "content": "Title", "align": "center"}, theme)

        assert html.startswith("<h3 ")
        assert "font-size: 18px" in html
        assert "font-weight: 600" in html
        assert "text-align: center" in html

    def test_paragraph_rich_text(self, theme):
        """Test paragraph body markup."""
        html = html_for({"type": "paragraph", "content": "a **b**"}, theme)

        assert "<strong>b</strong>" in html

    def test_ordered_list(self, theme):
        """Test list variants."""
        html = html_for({"type": "list", "variant": "ordered", "items": ["one", "two"]}, theme)

        assert html.startswith("<ol ")
        assert html.count("<li") == 2

    def test_callout_variant(self, theme):
        """Test callout colors by variant."""
        html = html_for({"type": "callout", "variant": "error", "title": "Oops", "content": "x"}, theme)

        assert "pi-callout-error" in html
        assert "#ef4444" in html
        assert "Oops" in html

    def test_code_block_line_numbers(self, theme):
        """Test line numbers in code blocks."""
        html = html_for({"type": "codeBlock", "code": "a\nb\nc", "showLineNumbers": True, "language": "py"}, theme)

        assert html.count("pi-line-number") == 3
        assert "pi-code-language" in html

    def test_table(self, theme):
        """Test table header, rows and alternate row color."""
        html = html_for(
            {
                "type": "table",
                "headers": ["A", "B"],
                "rows": [["1", "2"], ["3", "4"]],
                "alternateRowColor": "#eeeeee",
                "columnWidths": [30, 70],
            },
            theme,
        )

        assert html.count("</th>") == 2
        assert html.count("</td>") == 4
        assert html.count("#eeeeee") == 1
        assert "width: 30%" in html and "width: 70%" in html

    def test_key_value_grid(self, theme):
        """Test the grid key/value layout."""
        html = html_for({"type": "keyValue", "layout": "grid", "items": [{"key": "k", "value": "v"}]}, theme)

        assert "pi-kv-grid" in html
        assert "width: 50%" in html

    def test_image_without_source(self, theme):
        """Test the image placeholder."""
        html = html_for({"type": "image", "src": "", "alt": "Logo"}, theme)

        assert "pi-image-placeholder" in html
        assert "Logo" in html

    def test_page_break_marker(self, theme):
        """Test the dashed page break marker."""
        html = html_for({"type": "pageBreak"}, theme)

        assert "dashed" in html
        assert "Page Break" in html

    def test_unknown_placeholder(self, theme):
        """Test the unknown element placeholder."""
        html = html_for({"type": "hologram"}, theme)

        assert "Unknown element type: hologram" in html


class TestComposites:
    """Test cases for section and columns."""

    def test_column_widths(self, theme):
        """Test proportional column widths."""
        html = html_for(
            {
                "type": "columns",
                "columns": [
                    {"width": 1, "children": []},
                    {"width": 2, "children": []},
                    {"width": 1, "children": []},
                ],
            },
            theme,
        )

        assert html.count("width: 25%") == 2
        assert html.count("width: 50%") == 1

    def test_section_columns_table(self, theme):
        """Test a table nested in columns nested in a section keeps its styling."""
        table = {"type": "table", "headers": ["A", "B"], "rows": [["1", "2"]], "headerStyle": {"backgroundColor": "#112233"}}
        nested = html_for(
            {
                "type": "section",
                "backgroundColor": "#f7fafc",
                "border": {"width": 1, "style": "dotted", "radius": 6},
                "children": [{"type": "columns", "columns": [{"width": 1, "children": [table]}]}],
            },
            theme,
        )
        standalone = html_for(table, theme)

        assert standalone in nested
        assert "background-color: #f7fafc" in nested
        assert "1px dotted" in nested
        assert "border-radius: 6px" in nested

    def test_section_model_children(self, theme):
        """Test projecting an already validated section."""
        section = validate_element({"type": "section", "children": [{"type": "divider"}]})
        html = project_element(section, theme, HTML_BACKEND)

        assert "pi-divider" in html


class TestCharts:
    """Test cases for chart SVG output."""

    @pytest.mark.parametrize("tag", ["barChart", "pieChart", "lineChart"])
    def test_empty_data_placeholder(self, tag, theme, caplog):
        """Test that empty charts render the no-data placeholder."""
        with caplog.at_level(logging.WARNING):
            html = html_for({"type": tag, "title": "Empty", "data": []}, theme)

        assert NO_DATA_MESSAGE in html
        assert "Empty" in html
        assert "no data" in caplog.text

    def test_vertical_bar_chart(self, theme):
        """Test vertical bars and legend."""
        html = html_for(
            {"type": "barChart", "orientation": "vertical", "data": [{"label": "A", "value": 3}, {"label": "B", "value": 0}]},
            theme,
        )

        assert html.count("<rect") >= 2
        assert "pi-legend" in html
        assert "NaN" not in html

    def test_bar_chart_legend_can_be_hidden(self, theme):
        """Test showLegend false."""
        html = html_for(
            {"type": "barChart", "orientation": "vertical", "showLegend": False, "data": [{"label": "A", "value": 3}]},
            theme,
        )

        assert "pi-legend" not in html

    def test_horizontal_bar_chart(self, theme):
        """Test horizontal bars are sized by percentage."""
        html = html_for({"type": "barChart", "data": [{"label": "A", "value": 2}, {"label": "B", "value": 1}]}, theme)

        assert "width: 100%" in html
        assert "width: 50%" in html

    def test_pie_zero_total(self, theme):
        """Test a pie with only zero values."""
        html = html_for({"type": "pieChart", "data": [{"label": "A", "value": 0}]}, theme)

        assert "NaN" not in html
        assert "A (0.0%)" in html

    def test_line_chart_legend_for_multiple_series(self, theme):
        """Test the legend appears with more than one series."""
        html = html_for(
            {
                "type": "lineChart",
                "data": [
                    {"label": "One", "values": [{"x": 1, "y": 1}]},
                    {"label": "Two", "values": [{"x": 1, "y": 2}]},
                ],
            },
            theme,
        )

        assert "pi-legend" in html
        assert html.count("<circle") == 2


class TestRenderSurface:
    """Test cases for the editing surface."""

    def test_wraps_each_element(self, sample_document, theme):
        """Test one clickable container per top-level element."""
        ids = [f"id{index}" for index in range(len(sample_document.content))]
        html = render_surface(sample_document.content, theme, ids, selected_id="id1")

        assert html.count("data-element-id=") == len(ids)
        assert 'class="pi-element pi-selected" data-element-id="id1"' in html
        assert 'data-element-type="heading"' in html

    def test_positional_ids(self, theme):
        """Test default ids when none are given."""
        html = render_surface([{"type": "divider"}], theme)

        assert 'data-element-id="element-0"' in html

    def test_id_count_mismatch(self, theme):
        """Test that ids must match elements one to one."""
        with pytest.raises(ValueError):
            render_surface([{"type": "divider"}], theme, ["a", "b"])


class TestHtmlRenderer:
    """Test cases for HtmlRenderer."""

    def test_standalone_page(self, sample_document):
        """Test full page output."""
        html = HtmlRenderer(sample_document).render()

        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Quarterly Report</title>" in html
        assert "Page 1 of 1" in html
        assert "pi-header" in html

    def test_fragment(self, sample_instructions):
        """Test fragment output from raw instructions."""
        html = HtmlRenderer(sample_instructions, options={"standalone": False}).render()

        assert html.startswith('<div class="pi-page"')

    def test_editable(self, sample_document):
        """Test editable mode adds selection script and containers."""
        html = HtmlRenderer(sample_document, editable=True).render()

        assert "pi-select" in html
        assert "data-element-id" in html

    def test_render_elements(self, sample_document):
        """Test one fragment per top-level element."""
        fragments = HtmlRenderer(sample_document).render_elements()

        assert len(fragments) == len(sample_document.content)

    def test_save_to_file(self, sample_document, tmp_path):
        """Test writing HTML to disk."""
        renderer = HtmlRenderer(sample_document)
        output = tmp_path / "out.html"

        assert renderer.save_to_file(renderer.render(), output)
        assert output.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")
