"""
Instruction document validator.

Turns arbitrary JSON-like values into validated instruction models and
reports the first violated field path with a readable message, which
raw-JSON import and generation-response checks show inline.
"""

import json
import logging
from typing import Any, Dict, List, Sequence, Tuple, Union

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError
from .models import ELEMENT_TYPES, Element, InstructionDocument
from .models.data import ROW_LENGTH_ERROR

logger = logging.getLogger(__name__)

_ELEMENT_ADAPTER: TypeAdapter = TypeAdapter(Element)
_ELEMENT_LIST_ADAPTER: TypeAdapter = TypeAdapter(List[Element])

# Union member labels pydantic adds to error locations.
_UNION_BRANCH_LABELS = {"int", "float", "str"}

_MAX_REPR = 60


def format_location(loc: Sequence[Union[str, int]]) -> str:
    """Convert a pydantic error location into a dotted instruction path.

    Discriminator tags (``content.0.heading.level``) and union branch
    labels are dropped so the path addresses the instruction JSON itself
    (``content.0.level``).
    """
    parts: List[str] = []
    previous: Union[str, int, None] = None
    for item in loc:
        if isinstance(item, str):
            if isinstance(previous, int) and item in ELEMENT_TYPES:
                previous = item
                continue
            if item in _UNION_BRANCH_LABELS:
                previous = item
                continue
        parts.append(str(item))
        previous = item
    return ".".join(parts)


def _describe_input(value: Any) -> str:
    if isinstance(value, dict):
        return "an object"
    if isinstance(value, list):
        return "an array"
    text = repr(value)
    if len(text) > _MAX_REPR:
        text = text[: _MAX_REPR - 3] + "..."
    return text


def _format_message(error: Dict[str, Any]) -> str:
    kind = error.get("type", "")
    if kind == "union_tag_not_found":
        return "Missing element type tag; expected one of: " + ", ".join(ELEMENT_TYPES)
    if kind == "union_tag_invalid":
        tag = error.get("ctx", {}).get("tag")
        return f"Unknown element type {tag!r}; expected one of: " + ", ".join(ELEMENT_TYPES)
    message = error.get("msg", "Invalid value")
    if kind in ("missing", ROW_LENGTH_ERROR):
        return message
    return f"{message} (received {_describe_input(error.get('input'))})"


def _error_path(error: Dict[str, Any]) -> str:
    path = format_location(error.get("loc", ()))
    if error.get("type") == ROW_LENGTH_ERROR:
        row = str(error.get("ctx", {}).get("row", ""))
        return f"{path}.{row}" if path else row
    return path


def to_validation_error(exc: PydanticValidationError) -> ValidationError:
    """Map a pydantic error onto the path-qualified :class:`ValidationError`."""
    issues: List[Tuple[str, str]] = [(_error_path(error), _format_message(error)) for error in exc.errors()]
    path, message = issues[0]
    return ValidationError(path, message, issues)


def validate_instructions(value: Any) -> InstructionDocument:
    """
    Validate a JSON-like value as a whole instruction document.

    Args:
        value: Parsed JSON value (or an existing ``InstructionDocument``)

    Returns:
        Validated instruction document

    Raises:
        ValidationError: With the first violated path and message
    """
    if isinstance(value, InstructionDocument):
        return value
    try:
        return InstructionDocument.model_validate(value)
    except PydanticValidationError as exc:
        error = to_validation_error(exc)
        logger.debug(f"Instruction validation failed with {len(error.issues)} issue(s): {error}")
        raise error from exc


def validate_element(value: Any) -> Element:
    """Validate a single element (and its nested children)."""
    try:
        return _ELEMENT_ADAPTER.validate_python(value)
    except PydanticValidationError as exc:
        raise to_validation_error(exc) from exc


def validate_elements(value: Any) -> List[Element]:
    """Validate an element sequence such as a generated ``content`` array."""
    try:
        return _ELEMENT_LIST_ADAPTER.validate_python(value)
    except PydanticValidationError as exc:
        raise to_validation_error(exc) from exc


def validate_json_string(text: str) -> InstructionDocument:
    """
    Parse and validate a raw JSON string.

    Args:
        text: JSON source, e.g. from the raw-JSON editor or a generation response

    Returns:
        Validated instruction document

    Raises:
        ValidationError: For malformed JSON (empty path) or schema violations
    """
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValidationError(
            "", f"JSON Parse Error: {exc.msg} (line {exc.lineno}, column {exc.colno})"
        ) from exc
    return validate_instructions(parsed)


def serialize_instructions(document: InstructionDocument) -> Dict[str, Any]:
    """Serialize to the camelCase JSON-like form accepted by :func:`validate_instructions`."""
    return document.to_instructions()


def instructions_to_json(document: InstructionDocument, pretty: bool = True) -> str:
    """Serialize to a JSON string."""
    return json.dumps(serialize_instructions(document), indent=2 if pretty else None, ensure_ascii=False)


def instructions_json_schema() -> Dict[str, Any]:
    """JSON Schema of the instruction document, keyed by camelCase aliases."""
    return InstructionDocument.model_json_schema(by_alias=True)
