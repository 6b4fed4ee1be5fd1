from pathlib import Path

from pdfrag.core.models.document import PAGE_BREAK, ExtractedText


class TextLoader:
    """Plain text with pages separated by form feeds."""

    EXTENSIONS = {".txt", ".md", ".markdown"}

    def supports(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in self.EXTENSIONS

    def extract(self, file_path: Path) -> ExtractedText:
        text = file_path.read_text(encoding="utf-8")
        return ExtractedText(text=text, page_count=text.count(PAGE_BREAK) + 1)
