"""Unit tests for the ingest pipeline, status machine and chat service."""

from unittest.mock import MagicMock

import pytest

from pdfrag.core.exceptions import (
    CorruptTextError,
    InvalidStatusTransition,
    PipelineError,
    ValidationError,
)
from pdfrag.core.models import DegradedReason, ExtractedText, ProcessedDocument, ProcessingStatus
from pdfrag.core.models.answer import FALLBACK_MODEL
from pdfrag.core.models.search import METHOD_FALLBACK
from pdfrag.core.services import (
    AnalysisService,
    AnswerService,
    ChatService,
    ChunkingService,
    EmbeddingService,
    IngestService,
    SearchService,
)
from pdfrag.infrastructure.embeddings.tfidf_embedder import TfidfEmbedder

TWO_PAGES = (
    "Machine learning finds patterns in data. Neural networks are a popular approach."
    "\fDeep learning uses many layers of networks. Training requires large datasets."
)


@pytest.fixture
def ingest_service(tracker) -> IngestService:
    return IngestService(
        chunker=ChunkingService(chunk_size=1000, chunk_overlap=200),
        embedding_service=EmbeddingService(TfidfEmbedder(), batch_delay=0),
        analysis_service=AnalysisService(),
        tracker=tracker,
    )


@pytest.fixture
def chat_service() -> ChatService:
    return ChatService(
        search_service=SearchService(TfidfEmbedder(DegradedReason.NO_PROVIDER)),
        answer_service=AnswerService(),
        top_k=3,
    )


# --- Status machine ---


def test_status_forward_transitions() -> None:
    status = ProcessingStatus.UPLOADING
    for target in (
        ProcessingStatus.PROCESSING,
        ProcessingStatus.CHUNKING,
        ProcessingStatus.EMBEDDING,
        ProcessingStatus.COMPLETED,
    ):
        status = status.transition_to(target)
    assert status.is_terminal


@pytest.mark.parametrize(
    "status",
    [ProcessingStatus.UPLOADING, ProcessingStatus.CHUNKING, ProcessingStatus.EMBEDDING],
)
def test_failed_reachable_from_non_terminal(status: ProcessingStatus) -> None:
    assert status.transition_to(ProcessingStatus.FAILED) is ProcessingStatus.FAILED


@pytest.mark.parametrize(
    ("current", "target"),
    [
        (ProcessingStatus.UPLOADING, ProcessingStatus.CHUNKING),
        (ProcessingStatus.EMBEDDING, ProcessingStatus.PROCESSING),
        (ProcessingStatus.COMPLETED, ProcessingStatus.FAILED),
        (ProcessingStatus.FAILED, ProcessingStatus.PROCESSING),
    ],
)
def test_invalid_transitions(current: ProcessingStatus, target: ProcessingStatus) -> None:
    with pytest.raises(InvalidStatusTransition):
        current.transition_to(target)


# --- Ingest ---


@pytest.mark.asyncio
async def test_ingest_completes_document(ingest_service, tracker) -> None:
    document = await ingest_service.process("doc-1", ExtractedText(TWO_PAGES, 2), "ml.pdf")

    assert tracker.statuses == [
        ProcessingStatus.PROCESSING,
        ProcessingStatus.CHUNKING,
        ProcessingStatus.EMBEDDING,
        ProcessingStatus.COMPLETED,
    ]
    assert document.status is ProcessingStatus.COMPLETED
    assert [c.chunk_id for c in document.chunks] == ["1_0", "2_0"]
    assert all(c.embedding_model == "tfidf" for c in document.chunks)
    assert [e.chunk_id for e in document.embeddings] == ["1_0", "2_0"]
    assert document.metadata.total_chunks == 2
    assert document.metadata.total_tokens == 23
    assert document.metadata.embedding_model == "tfidf"
    assert (document.metadata.chunk_size, document.metadata.chunk_overlap) == (1000, 200)
    assert document.metadata.processing_time_ms >= 0
    assert document.summary.startswith("This document contains 2 text chunks across 2 pages.")
    assert "learning" in document.tags
    assert document.language == "en"
    assert document.error_message is None


@pytest.mark.asyncio
async def test_ingest_empty_text_completes_without_chunks(ingest_service) -> None:
    document = await ingest_service.process("doc-2", ExtractedText("", 1), "blank.pdf")

    assert document.status is ProcessingStatus.COMPLETED
    assert document.chunks == []
    assert document.metadata.total_chunks == 0


@pytest.mark.asyncio
async def test_ingest_corrupt_text_fails(ingest_service, tracker) -> None:
    with pytest.raises(CorruptTextError):
        await ingest_service.process("doc-3", ExtractedText("bad\x00text.", 1), "bad.pdf")

    document_id, status, error = tracker.updates[-1]
    assert document_id == "doc-3"
    assert status is ProcessingStatus.FAILED
    assert "NUL" in error


@pytest.mark.asyncio
async def test_ingest_wraps_unexpected_errors(tracker) -> None:
    chunker = MagicMock(chunk_size=1000, chunk_overlap=200)
    chunker.chunk_document.side_effect = RuntimeError("boom")
    service = IngestService(
        chunker=chunker,
        embedding_service=EmbeddingService(TfidfEmbedder()),
        analysis_service=AnalysisService(),
        tracker=tracker,
    )

    with pytest.raises(PipelineError, match="boom"):
        await service.process("doc-4", ExtractedText(TWO_PAGES, 2))

    assert tracker.statuses == [
        ProcessingStatus.PROCESSING,
        ProcessingStatus.CHUNKING,
        ProcessingStatus.FAILED,
    ]


@pytest.mark.asyncio
async def test_ingest_without_tracker() -> None:
    service = IngestService(
        chunker=ChunkingService(),
        embedding_service=EmbeddingService(TfidfEmbedder(), batch_delay=0),
        analysis_service=AnalysisService(),
    )

    document = await service.process("doc-5", ExtractedText(TWO_PAGES, 2))

    assert document.status is ProcessingStatus.COMPLETED


# --- Chat ---


@pytest.mark.asyncio
async def test_ask_without_provider_uses_default_threshold(ingest_service, chat_service) -> None:
    """With TF-IDF embeddings an on-topic question is still answered from keyword matches."""
    document = await ingest_service.process("doc-6", ExtractedText(TWO_PAGES, 2), "ml.pdf")

    result = await chat_service.ask(document, "  What do neural networks do?  ")

    assert result.search_method == METHOD_FALLBACK
    assert result.total_chunks == 2
    assert result.chunks_retrieved == 2
    assert result.similarity_threshold == 0.7
    assert result.average_similarity == pytest.approx((2 / 10 + 1 / 10) / 2)
    assert result.answer.answer.startswith("Based on the relevant content I found")
    assert result.answer.model == FALLBACK_MODEL
    assert result.answer.context.retrieved_chunks[0].page_number == 1
    assert result.processing_time_ms >= 0


@pytest.mark.asyncio
@pytest.mark.parametrize("question", ["", "   "])
async def test_ask_blank_question(chat_service, question: str) -> None:
    document = ProcessedDocument("doc-7", "a.pdf", 1, status=ProcessingStatus.COMPLETED)

    with pytest.raises(ValidationError, match="question"):
        await chat_service.ask(document, question)


@pytest.mark.asyncio
async def test_ask_before_completion(chat_service) -> None:
    document = ProcessedDocument("doc-8", "a.pdf", 1, status=ProcessingStatus.EMBEDDING)

    with pytest.raises(ValidationError, match="still embedding"):
        await chat_service.ask(document, "What is this?")
