"""Chunking service - sentence-aware overlapping chunks."""

import logging

from ..models.document import PAGE_BREAK, Chunk, ChunkingResult
from ..text import count_words, find_sentences, normalize_whitespace

logger = logging.getLogger(__name__)

MIN_SENTENCE_LENGTH = 10


class ChunkingService:
    """Splits page text into size-bounded chunks aligned to sentences."""

    def __init__(self, chunk_size: int = 1000, chunk_overlap: int = 200):
        """Initialize chunking service.

        Args:
            chunk_size: Target chunk size in characters.
            chunk_overlap: Characters of the previous chunk repeated at the
                start of the next one.
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if chunk_overlap < 0:
            raise ValueError("chunk_overlap must not be negative")
        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def chunk_overlap(self) -> int:
        return self._chunk_overlap

    def chunk_page(self, page_text: str, page_number: int = 1) -> list[Chunk]:
        """Split one page into chunks.

        A sentence longer than chunk_size is kept whole, so such a chunk
        exceeds the target size.

        Args:
            page_text: Raw page text.
            page_number: 1-based page number.

        Returns:
            Chunks in sentence order.
        """
        text = normalize_whitespace(page_text)
        sentences = find_sentences(text, min_length=MIN_SENTENCE_LENGTH)

        chunks: list[Chunk] = []
        buffer = ""
        buffer_start = 0
        buffer_end = 0

        for sentence in sentences:
            candidate = f"{buffer} {sentence.text}" if buffer else sentence.text

            if len(candidate) <= self._chunk_size:
                if not buffer:
                    buffer_start = sentence.start
                buffer = candidate
                buffer_end = sentence.end
                continue

            if buffer:
                chunks.append(self._make_chunk(buffer, page_number, len(chunks), buffer_start, buffer_end))

            if self._chunk_overlap > 0 and chunks:
                last = chunks[-1]
                overlap_text = last.content[-self._chunk_overlap:]
                buffer = f"{overlap_text} {sentence.text}"
                buffer_start = max(last.start_char, last.end_char - len(overlap_text))
            else:
                buffer = sentence.text
                buffer_start = sentence.start
            buffer_end = sentence.end

        if buffer.strip():
            chunks.append(self._make_chunk(buffer, page_number, len(chunks), buffer_start, buffer_end))

        return chunks

    def chunk_document(self, text: str, page_count: int | None = None) -> ChunkingResult:
        """Chunk a whole document whose pages are separated by form feeds.

        Args:
            text: Extracted document text.
            page_count: Page count reported by the extractor.

        Returns:
            All chunks with aggregate statistics.
        """
        pages = text.split(PAGE_BREAK)
        if page_count is not None and page_count != len(pages):
            logger.debug(f"Extractor reported {page_count} pages, found {len(pages)} page breaks")

        all_chunks: list[Chunk] = []
        for i, page in enumerate(pages):
            if not page.strip():
                continue
            all_chunks.extend(self.chunk_page(page, page_number=i + 1))

        total_chars = sum(len(c.content) for c in all_chunks)
        average = total_chars / len(all_chunks) if all_chunks else 0.0

        logger.info(f"Chunking: {len(all_chunks)} chunks from {len(pages)} pages")

        return ChunkingResult(
            chunks=all_chunks,
            total_chunks=len(all_chunks),
            total_words=sum(c.word_count for c in all_chunks),
            average_chunk_size=average,
        )

    def _make_chunk(
        self, buffer: str, page_number: int, chunk_index: int, start: int, end: int
    ) -> Chunk:
        content = buffer.strip()
        return Chunk(
            content=content,
            page_number=page_number,
            chunk_index=chunk_index,
            start_char=start,
            end_char=max(end, start + 1),
            word_count=count_words(content),
        )
