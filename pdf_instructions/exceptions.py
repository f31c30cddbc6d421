"""Custom exceptions for PDF instruction documents."""

from typing import Any, Dict, List, Optional, Sequence, Tuple


class DocumentInstructionsError(Exception):
    """Base exception for instruction document errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ValidationError(DocumentInstructionsError):
    """Exception raised when an instruction tree does not match the schema.

    ``path`` is the dotted location of the first violated field
    (``content.2.level``); an empty path refers to the whole value.
    """

    def __init__(
        self,
        path: str,
        message: str,
        issues: Sequence[Tuple[str, str]] = (),
    ):
        super().__init__(message)
        self.path = path
        self.issues: List[Tuple[str, str]] = list(issues) or [(path, message)]

    def __str__(self) -> str:
        if self.path:
            return f'at "{self.path}": {self.message}'
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form used by JSON import surfaces."""
        return {
            "path": self.path,
            "message": self.message,
            "issues": [{"path": path, "message": message} for path, message in self.issues],
        }


class RenderingError(DocumentInstructionsError):
    """Exception raised when a back-end cannot produce any output."""

    pass


class ExternalProducerError(DocumentInstructionsError):
    """Exception raised when the print artifact producer fails or times out."""

    pass
