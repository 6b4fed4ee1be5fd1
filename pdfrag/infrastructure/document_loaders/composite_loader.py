import logging
from pathlib import Path

from pdfrag.core.exceptions import ValidationError
from pdfrag.core.models.document import ExtractedText

from .pdf_loader import PDFLoader
from .text_loader import TextLoader

logger = logging.getLogger(__name__)


class CompositeLoader:

    def __init__(self, max_pages: int = 500):
        self._loaders = [
            PDFLoader(max_pages=max_pages),
            TextLoader(),
        ]

    def supports(self, file_path: Path) -> bool:
        return any(loader.supports(file_path) for loader in self._loaders)

    def extract(self, file_path: Path) -> ExtractedText:
        """Extract text with the first loader that supports the file.

        Raises:
            ValidationError: Unsupported file type or too many pages.
        """
        for loader in self._loaders:
            if loader.supports(file_path):
                extracted = loader.extract(file_path)
                logger.info(f"Extracted {extracted.page_count} pages from {file_path.name}")
                return extracted
        raise ValidationError(f"Unsupported file type: {file_path.suffix or file_path.name}")
