from pathlib import Path

from pypdf import PdfReader

from pdfrag.core.exceptions import ValidationError
from pdfrag.core.models.document import PAGE_BREAK, ExtractedText


class PDFLoader:

    def __init__(self, max_pages: int = 500):
        self._max_pages = max_pages

    def supports(self, file_path: Path) -> bool:
        return file_path.suffix.lower() == ".pdf"

    def extract(self, file_path: Path) -> ExtractedText:
        reader = PdfReader(file_path)
        page_count = len(reader.pages)
        if page_count > self._max_pages:
            raise ValidationError(
                f"Maximum supported pages: {self._max_pages}. "
                f"Your document has: {page_count} pages."
            )

        # Blank pages stay in place so page numbers match the PDF
        text_parts = [(page.extract_text() or "").strip() for page in reader.pages]
        return ExtractedText(text=PAGE_BREAK.join(text_parts), page_count=page_count)
