"""Unit tests for ChunkingService."""

import pytest

from pdfrag.core.services.chunking_service import ChunkingService
from pdfrag.core.text import normalize_whitespace


def _sentence(letter: str, length: int) -> str:
    return letter * (length - 1) + "."


def _long_text(count: int = 30) -> str:
    return " ".join(
        f"Sentence number {i} talks about topic {i % 4} in some detail." for i in range(count)
    )


def test_two_sentences_fit_in_one_chunk() -> None:
    """Short text yields one chunk holding both sentences."""
    chunker = ChunkingService(chunk_size=1000, chunk_overlap=0)
    text = "This is a test. It has two sentences."
    chunks = chunker.chunk_page(text)
    assert len(chunks) == 1
    chunk = chunks[0]
    assert chunk.content == text
    assert chunk.word_count == 8
    assert chunk.chunk_index == 0
    assert chunk.chunk_id == "1_0"
    assert (chunk.start_char, chunk.end_char) == (0, len(text))


def test_overflow_starts_next_chunk_with_overlap() -> None:
    """Three 400-char sentences: two fit in 1000 chars, the third starts a new chunk."""
    chunker = ChunkingService(chunk_size=1000, chunk_overlap=200)
    text = " ".join(_sentence(c, 400) for c in "abc")
    chunks = chunker.chunk_page(text)
    assert len(chunks) == 2
    assert len(chunks[0].content) == 801
    assert chunks[1].content.startswith(chunks[0].content[-200:])
    assert chunks[1].content.endswith(_sentence("c", 400))
    assert chunks[1].start_char == chunks[0].end_char - 200


def test_small_chunk_size_emits_one_chunk_per_sentence() -> None:
    """With chunk_size below two sentences every sentence opens a chunk."""
    chunker = ChunkingService(chunk_size=500, chunk_overlap=200)
    text = " ".join(_sentence(c, 400) for c in "abc")
    chunks = chunker.chunk_page(text)
    assert len(chunks) == 3
    for previous, current in zip(chunks, chunks[1:]):
        assert current.content.startswith(previous.content[-200:])


def test_long_sentence_is_not_split() -> None:
    """A sentence longer than chunk_size is emitted whole."""
    chunker = ChunkingService(chunk_size=50, chunk_overlap=10)
    sentence = "word " * 24 + "end."
    chunks = chunker.chunk_page(sentence)
    assert len(chunks) == 1
    assert chunks[0].content == sentence.strip()
    assert len(chunks[0].content) > 50


def test_short_fragments_are_dropped() -> None:
    """Sentences under 10 characters never form chunks."""
    chunker = ChunkingService()
    assert chunker.chunk_page("Hi. Ok. Yes!") == []
    chunks = chunker.chunk_page("Dr. Smith arrived.")
    assert [c.content for c in chunks] == ["Smith arrived."]


def test_text_without_terminal_punctuation_yields_nothing() -> None:
    chunker = ChunkingService()
    assert chunker.chunk_page("a heading without any period") == []


def test_whitespace_is_normalized() -> None:
    chunker = ChunkingService()
    chunks = chunker.chunk_page("This   is\n\na test.\tAnother sentence here.")
    assert chunks[0].content == "This is a test. Another sentence here."


def test_offsets_map_into_cleaned_text_without_overlap() -> None:
    """Without overlap each chunk is an exact slice of the cleaned page."""
    chunker = ChunkingService(chunk_size=150, chunk_overlap=0)
    raw = _long_text()
    cleaned = normalize_whitespace(raw)
    chunks = chunker.chunk_page(raw)
    assert len(chunks) > 3
    for chunk in chunks:
        assert cleaned[chunk.start_char : chunk.end_char] == chunk.content
    for previous, current in zip(chunks, chunks[1:]):
        assert current.start_char - previous.end_char <= 1


@pytest.mark.parametrize("overlap", [0, 30, 200])
def test_chunk_invariants(overlap: int) -> None:
    """Indices are contiguous, offsets ordered, overlap bounded."""
    chunker = ChunkingService(chunk_size=120, chunk_overlap=overlap)
    chunks = chunker.chunk_page(_long_text(), page_number=3)
    assert [c.chunk_index for c in chunks] == list(range(len(chunks)))
    assert len({c.chunk_id for c in chunks}) == len(chunks)
    for chunk in chunks:
        assert chunk.end_char > chunk.start_char
        assert chunk.page_number == 3
        assert chunk.content == chunk.content.strip()
        assert chunk.word_count == len(chunk.content.split())
    for previous, current in zip(chunks, chunks[1:]):
        assert current.start_char >= previous.start_char
        assert previous.end_char - current.start_char <= overlap
        assert current.start_char <= previous.end_char + 1


def test_chunking_is_idempotent() -> None:
    chunker = ChunkingService(chunk_size=120, chunk_overlap=30)
    first = chunker.chunk_page(_long_text())
    second = chunker.chunk_page(_long_text())
    assert first == second


def test_chunk_document_splits_pages() -> None:
    """Pages split on form feeds; blank pages keep their number."""
    chunker = ChunkingService()
    text = "First page sentence one.\fSecond page sentence.\f   \fFourth page has text."
    result = chunker.chunk_document(text, page_count=4)
    assert [c.page_number for c in result.chunks] == [1, 2, 4]
    assert [c.chunk_index for c in result.chunks] == [0, 0, 0]
    assert result.total_chunks == 3
    assert result.total_words == 11
    assert result.average_chunk_size == pytest.approx(22.0)


def test_chunk_document_without_chunks_has_zero_average() -> None:
    chunker = ChunkingService()
    result = chunker.chunk_document("\f  \f")
    assert result.chunks == []
    assert result.total_chunks == 0
    assert result.total_words == 0
    assert result.average_chunk_size == 0.0


def test_invalid_parameters_raise() -> None:
    with pytest.raises(ValueError, match="chunk_size"):
        ChunkingService(chunk_size=0)
    with pytest.raises(ValueError, match="chunk_overlap"):
        ChunkingService(chunk_overlap=-1)
