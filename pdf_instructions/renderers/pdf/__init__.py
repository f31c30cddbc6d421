"""Print (PDF) render back-end built on reportlab."""

from .charts import FittedDrawing
from .pdf_renderer import PDF_BACKEND, PdfRenderer
from .producer import PdfProducer, prepare_instructions

__all__ = [
    "FittedDrawing",
    "PDF_BACKEND",
    "PdfProducer",
    "PdfRenderer",
    "prepare_instructions",
]
