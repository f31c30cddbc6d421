"""
Tests for the PDF artifact producer.
"""

import multiprocessing
import time

import pytest

from pdf_instructions.exceptions import ExternalProducerError, RenderingError, ValidationError
from pdf_instructions.renderers.pdf import PdfProducer, PdfRenderer, prepare_instructions
from pdf_instructions.renderers.pdf import producer as producer_module


requires_fork = pytest.mark.skipif(
    "fork" not in multiprocessing.get_all_start_methods(), reason="fork start method unavailable"
)


def _stall(instructions, options):
    time.sleep(60)


def _crash(instructions, options):
    raise RuntimeError("worker died")


class TestPrepareInstructions:
    """Test cases for prepare_instructions()."""

    def test_colors_normalized(self, sample_instructions):
        """Test that colors are hex before rendering."""
        sample_instructions["theme"]["primaryColor"] = "rgb(255, 0, 0)"
        sample_instructions["content"][0]["color"] = "hsl(240, 100%, 50%)"
        sample_instructions["content"][4]["backgroundColor"] = "transparent"

        prepared = prepare_instructions(sample_instructions)

        assert prepared["theme"]["primaryColor"] == "#ff0000"
        assert prepared["content"][0]["color"] == "#0000ff"
        assert "backgroundColor" not in prepared["content"][4]
        assert prepared["content"][0]["content"] == "Q3 Summary"

    def test_invalid_input(self):
        """Test that validation errors propagate unchanged."""
        with pytest.raises(ValidationError):
            prepare_instructions({"metadata": {"title": "T"}, "content": [{"type": "heading"}]})


class TestPdfProducer:
    """Test cases for PdfProducer."""

    def test_produce_inline(self, sample_instructions):
        """Test producing a payload without a worker process."""
        payload = PdfProducer(out_of_process=False).produce(sample_instructions)

        assert payload.startswith(b"%PDF")

    def test_produce_in_worker(self, sample_instructions):
        """Test producing a payload in a worker process."""
        payload = PdfProducer(timeout=120).produce(sample_instructions)

        assert payload.startswith(b"%PDF")

    def test_validation_error_not_wrapped(self):
        """Test that invalid input is not reported as a producer failure."""
        with pytest.raises(ValidationError):
            PdfProducer(out_of_process=False).produce({"content": []})

    def test_render_failure(self, sample_instructions, monkeypatch):
        """Test that a rendering failure becomes ExternalProducerError."""

        def fail(self):
            raise RenderingError("PDF layout failed", "boom")

        monkeypatch.setattr(PdfRenderer, "render_bytes", fail)

        with pytest.raises(ExternalProducerError) as exc_info:
            PdfProducer(out_of_process=False).produce(sample_instructions)

        assert str(exc_info.value) == "PDF layout failed: boom"

    def test_unexpected_error_inline(self, sample_instructions, monkeypatch):
        """Test that non-library errors are reported the same way inline."""

        def fail(self):
            raise OSError("disk full")

        monkeypatch.setattr(PdfRenderer, "render_bytes", fail)

        with pytest.raises(ExternalProducerError) as exc_info:
            PdfProducer(out_of_process=False).produce(sample_instructions)

        assert str(exc_info.value) == "PDF rendering failed: disk full"

    @requires_fork
    def test_timeout(self, sample_instructions, monkeypatch):
        """Test that a stalled worker times out and is terminated."""
        monkeypatch.setattr(producer_module, "_produce_payload", _stall)

        started = time.monotonic()
        with pytest.raises(ExternalProducerError) as exc_info:
            PdfProducer(timeout=0.5, start_method="fork").produce(sample_instructions)

        assert "timed out after 0.5s" in str(exc_info.value)
        assert time.monotonic() - started < 30
        assert multiprocessing.active_children() == []

    @requires_fork
    def test_worker_crash(self, sample_instructions, monkeypatch):
        """Test that an exception escaping the worker is reported."""
        monkeypatch.setattr(producer_module, "_produce_payload", _crash)

        with pytest.raises(ExternalProducerError) as exc_info:
            PdfProducer(timeout=60, start_method="fork").produce(sample_instructions)

        assert str(exc_info.value) == "PDF worker failed: worker died"
        assert multiprocessing.active_children() == []
