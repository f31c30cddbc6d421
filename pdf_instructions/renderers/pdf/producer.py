"""
Print artifact producer.

The boundary used by hosts that need a finished PDF: the instruction
value is validated, its colors are normalized to hex and the payload is
rendered, by default in a worker process with a timeout.
"""

from __future__ import annotations

import logging
import multiprocessing
from typing import Any, Dict, Optional, Tuple

from ...exceptions import DocumentInstructionsError, ExternalProducerError
from ...utils.color_utils import sanitize_colors
from ...validator import serialize_instructions, validate_instructions
from .pdf_renderer import PdfRenderer

logger = logging.getLogger(__name__)

ProducerResult = Tuple[Optional[bytes], Optional[str]]


def _produce_payload(instructions: Dict[str, Any], options: Optional[Dict[str, Any]]) -> ProducerResult:
    """Worker entry point: either ``(payload, None)`` or ``(None, error message)``."""
    try:
        return PdfRenderer(instructions, options=options).render_bytes(), None
    except DocumentInstructionsError as exc:
        return None, str(exc)
    except Exception as exc:
        logger.exception("Unexpected error while rendering PDF")
        return None, f"PDF rendering failed: {exc}"


def prepare_instructions(value: Any) -> Dict[str, Any]:
    """Validate ``value`` and return its color-normalized serialized form.

    Raises:
        ValidationError: If the value (or its sanitized form) is not a valid document
    """
    document = validate_instructions(value)
    sanitized = sanitize_colors(serialize_instructions(document))
    return serialize_instructions(validate_instructions(sanitized))


class PdfProducer:
    """Produce PDF payloads from instruction documents.

    Args:
        timeout: Seconds to wait for the worker before giving up
        out_of_process: Render in a worker process (``False`` renders inline)
        options: Options forwarded to :class:`PdfRenderer`
        start_method: multiprocessing start method for the worker
            (platform default when omitted)
    """

    def __init__(
        self,
        timeout: float = 60.0,
        out_of_process: bool = True,
        options: Optional[Dict[str, Any]] = None,
        start_method: Optional[str] = None,
    ) -> None:
        self.timeout = timeout
        self.out_of_process = out_of_process
        self.options = options
        self.start_method = start_method

    def produce(self, value: Any) -> bytes:
        """
        Validate, sanitize and render ``value``.

        Returns:
            PDF payload

        Raises:
            ValidationError: Before any rendering, if ``value`` is malformed
            ExternalProducerError: If rendering fails or exceeds the timeout
        """
        instructions = prepare_instructions(value)
        if self.out_of_process:
            payload, error = self._run_in_worker(instructions)
        else:
            payload, error = _produce_payload(instructions, self.options)

        if error is not None:
            logger.error(f"PDF production failed: {error}")
            raise ExternalProducerError(error)
        logger.info(f"Produced PDF payload ({len(payload)} bytes)")
        return payload

    def _run_in_worker(self, instructions: Dict[str, Any]) -> ProducerResult:
        ctx = multiprocessing.get_context(self.start_method)
        # Leaving the pool terminates and joins the worker, including a hung one.
        with ctx.Pool(processes=1) as pool:
            result = pool.apply_async(_produce_payload, (instructions, self.options))
            try:
                return result.get(timeout=self.timeout)
            except multiprocessing.TimeoutError:
                return None, f"PDF production timed out after {self.timeout:g}s"
            except Exception as exc:
                return None, f"PDF worker failed: {exc}"
