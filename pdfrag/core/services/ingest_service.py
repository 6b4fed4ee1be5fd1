"""Ingest service - document processing pipeline."""

import logging
import time
from typing import Optional

from ..exceptions import CorruptTextError, PipelineError
from ..models.document import (
    ChunkEmbedding,
    DocumentMeta,
    ExtractedText,
    ProcessedDocument,
    ProcessingMetadata,
)
from ..models.status import ProcessingStatus
from ..protocols.status_tracker import StatusTrackerProtocol
from .analysis_service import AnalysisService
from .chunking_service import ChunkingService
from .embedding_service import EmbeddingService

logger = logging.getLogger(__name__)


class IngestService:
    """Runs chunking, embedding and analysis for one document at a time."""

    def __init__(
        self,
        chunker: ChunkingService,
        embedding_service: EmbeddingService,
        analysis_service: AnalysisService,
        tracker: Optional[StatusTrackerProtocol] = None,
    ):
        """Initialize ingest service.

        Args:
            chunker: Chunking service.
            embedding_service: Batched embedding service.
            analysis_service: Tags, language and summary.
            tracker: Receives status changes (optional).
        """
        self._chunker = chunker
        self._embedding_service = embedding_service
        self._analysis = analysis_service
        self._tracker = tracker

    async def process(
        self,
        document_id: str,
        extracted: ExtractedText,
        filename: str = "",
    ) -> ProcessedDocument:
        """Process extracted text into a completed document record.

        Args:
            document_id: Document identifier.
            extracted: Page-delimited text and page count.
            filename: Original filename.

        Returns:
            Completed document.

        Raises:
            PipelineError: Processing failed; the document is marked failed.
        """
        started = time.perf_counter()
        document = ProcessedDocument(
            document_id=document_id,
            filename=filename,
            page_count=extracted.page_count,
        )

        try:
            await self._advance(document, ProcessingStatus.PROCESSING)
            self._validate_text(extracted.text)

            await self._advance(document, ProcessingStatus.CHUNKING)
            chunking = self._chunker.chunk_document(extracted.text, extracted.page_count)
            document.chunks = chunking.chunks

            await self._advance(document, ProcessingStatus.EMBEDDING)
            embedded = await self._embedding_service.embed_chunks(chunking.chunks)
            by_id = {c.chunk_id: c for c in embedded}
            document.chunks = [by_id.get(c.chunk_id, c) for c in chunking.chunks]
            document.embeddings = [
                ChunkEmbedding(chunk_id=c.chunk_id, embedding=c.embedding, model=c.embedding_model)
                for c in embedded
            ]

            meta = DocumentMeta(filename=filename, page_count=extracted.page_count)
            summary = await self._analysis.summarize(embedded, meta)
            document.summary = summary.summary
            document.tags = self._analysis.tags(extracted.text)
            document.language = self._analysis.language(extracted.text)

            document.metadata = ProcessingMetadata(
                total_chunks=chunking.total_chunks,
                total_tokens=chunking.total_words,
                processing_time_ms=int((time.perf_counter() - started) * 1000),
                embedding_model=self._embedding_service.model_name,
                chunk_size=self._chunker.chunk_size,
                chunk_overlap=self._chunker.chunk_overlap,
            )
            await self._advance(document, ProcessingStatus.COMPLETED)

        except Exception as e:
            logger.error(f"Processing failed for {document_id}: {e}")
            document.error_message = str(e)
            await self._advance(document, ProcessingStatus.FAILED)
            if isinstance(e, PipelineError):
                raise
            raise PipelineError(str(e)) from e

        logger.info(
            f"Processed {document_id}: {len(document.chunks)} chunks, "
            f"{len(document.embeddings)} embeddings, tags={document.tags}"
        )
        return document

    async def _advance(self, document: ProcessedDocument, status: ProcessingStatus) -> None:
        target = document.status.transition_to(status)
        if self._tracker is not None:
            await self._tracker.update(document.document_id, target, document.error_message)
        document.status = target

    @staticmethod
    def _validate_text(text: object) -> None:
        if not isinstance(text, str):
            raise CorruptTextError(f"Extracted text must be a string, got {type(text).__name__}")
        if "\x00" in text:
            raise CorruptTextError("Extracted text contains NUL bytes")
