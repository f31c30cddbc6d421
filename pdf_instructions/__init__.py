"""
PDF Instructions - a document instruction model with HTML and PDF back-ends.

A document is described once as a validated tree of typed elements and
projected onto two render targets:

- Interactive HTML surface for editing (clickable, selectable elements)
- Print-fidelity PDF built with reportlab

Main Components:
- Models: pydantic schema of the instruction tree
- Validator: path-qualified validation and serialization
- Engine: rich-text tokenizer, theme resolution and chart geometry
- Renderers: element dispatcher plus the HTML and PDF back-ends
- Editor: element defaults and content editing operations
"""

from .editor import EditorSession, create_default_element, create_default_instructions
from .exceptions import (
    DocumentInstructionsError,
    ExternalProducerError,
    RenderingError,
    ValidationError,
)
from .models import Element, InstructionDocument
from .renderers import HtmlRenderer, PdfProducer, PdfRenderer, render_surface
from .validator import (
    instructions_json_schema,
    instructions_to_json,
    serialize_instructions,
    validate_element,
    validate_instructions,
    validate_json_string,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "DocumentInstructionsError",
    "ExternalProducerError",
    "RenderingError",
    "ValidationError",
    "Element",
    "InstructionDocument",
    "validate_instructions",
    "validate_element",
    "validate_json_string",
    "serialize_instructions",
    "instructions_to_json",
    "instructions_json_schema",
    "HtmlRenderer",
    "PdfRenderer",
    "PdfProducer",
    "render_surface",
    "EditorSession",
    "create_default_element",
    "create_default_instructions",
]
