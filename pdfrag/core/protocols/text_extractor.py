"""Text extractor protocol for dependency injection."""
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..models.document import ExtractedText


@runtime_checkable
class TextExtractorProtocol(Protocol):
    """Protocol for turning a document file into page-delimited text."""

    def supports(self, file_path: Path) -> bool:
        ...

    def extract(self, file_path: Path) -> ExtractedText:
        """Extract text with pages separated by a form feed.

        Args:
            file_path: Document path.

        Returns:
            Extracted text and page count.
        """
        ...
