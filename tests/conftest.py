"""
Pytest configuration for pdf_instructions
"""

import copy
import logging

import pytest


SAMPLE_DOCUMENT = {
    "metadata": {
        "title": "Quarterly Report",
        "author": "Finance Team",
        "subject": "Q3 results",
        "keywords": ["finance", "quarterly"],
    },
    "pageSettings": {
        "size": "A4",
        "orientation": "portrait",
        "margins": {"top": 40, "right": 40, "bottom": 60, "left": 40},
    },
    "theme": {"primaryColor": "#1a365d", "accentColor": "#3182ce"},
    "header": {
        "enabled": True,
        "content": [{"type": "caption", "content": "Quarterly Report", "align": "right"}],
    },
    "footer": {"enabled": True, "showPageNumbers": True, "pageNumberFormat": "Page {current} of {total}"},
    "content": [
        {"type": "heading", "level": 1, "content": "Q3 Summary"},
        {"type": "paragraph", "content": "Revenue grew **12%** with *strong* demand in [EMEA](https://example.com)."},
        {"type": "list", "variant": "ordered", "items": ["Revenue", "Margin", "Headcount"]},
        {"type": "callout", "variant": "warning", "title": "Note", "content": "Figures are unaudited."},
        {
            "type": "section",
            "title": "Details",
            "backgroundColor": "#f7fafc",
            "padding": {"top": 10, "right": 10, "bottom": 10, "left": 10},
            "border": {"width": 1, "color": "#e2e8f0", "style": "dashed", "radius": 4},
            "children": [
                {
                    "type": "columns",
                    "gap": 12,
                    "columns": [
                        {"width": 1, "children": [{"type": "paragraph", "content": "Left"}]},
                        {
                            "width": 2,
                            "children": [
                                {
                                    "type": "table",
                                    "headers": ["Region", "Revenue", "Growth"],
                                    "rows": [["EMEA", "1.2M", "14%"], ["APAC", "0.8M", "9%"]],
                                    "alternateRowColor": "#f7fafc",
                                }
                            ],
                        },
                        {"width": 1, "children": [{"type": "keyValue", "items": [{"key": "Owner", "value": "CFO"}]}]},
                    ],
                }
            ],
        },
        {
            "type": "barChart",
            "title": "Revenue by region",
            "data": [{"label": "EMEA", "value": 1.2}, {"label": "APAC", "value": 0.8}],
        },
        {"type": "pageBreak"},
        {
            "type": "pieChart",
            "data": [{"label": "A", "value": 40}, {"label": "B", "value": 60}],
            "donut": True,
        },
        {
            "type": "lineChart",
            "data": [
                {"label": "2023", "values": [{"x": "Q1", "y": 10}, {"x": "Q2", "y": 20}]},
                {"label": "2024", "values": [{"x": "Q1", "y": 15}, {"x": "Q2", "y": -5}]},
            ],
        },
        {"type": "codeBlock", "code": "print('hi')\nprint('there')", "language": "python", "showLineNumbers": True},
        {"type": "divider"},
        {"type": "spacer", "height": 12},
    ],
}


@pytest.fixture(autouse=True)
def configure_logging():
    """Keep library warnings visible to caplog without leaking handlers between tests."""
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers[:] = saved_handlers
    root_logger.setLevel(saved_level)


@pytest.fixture
def sample_instructions():
    """Raw (JSON-like) sample instruction document."""
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def sample_document(sample_instructions):
    """Validated sample instruction document."""
    from pdf_instructions.validator import validate_instructions

    return validate_instructions(sample_instructions)


@pytest.fixture
def theme():
    """Default resolved theme."""
    from pdf_instructions.engine.theme import resolve_theme

    return resolve_theme()


@pytest.fixture
def png_data_uri():
    """A tiny PNG encoded as a data URI."""
    import base64
    from io import BytesIO

    from PIL import Image

    buffer = BytesIO()
    Image.new("RGB", (20, 10), (49, 130, 206)).save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")
