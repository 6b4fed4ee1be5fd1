"""Chat service - coordinates search and answer composition."""

import logging
import time

from ..exceptions import ValidationError
from ..models.answer import ChatResult
from ..models.document import ProcessedDocument
from ..models.status import ProcessingStatus
from .answer_service import AnswerService
from .search_service import SearchService

logger = logging.getLogger(__name__)


class ChatService:
    """Answers questions about a processed document."""

    def __init__(
        self,
        search_service: SearchService,
        answer_service: AnswerService,
        top_k: int = 5,
    ):
        """Initialize chat service.

        Args:
            search_service: Similarity search.
            answer_service: Answer composition.
            top_k: Number of chunks retrieved per question.
        """
        self._search = search_service
        self._answers = answer_service
        self._top_k = top_k

    async def ask(self, document: ProcessedDocument, question: str) -> ChatResult:
        """Answer a question about a document.

        Args:
            document: Completed document.
            question: User question.

        Returns:
            Answer with retrieval statistics.

        Raises:
            ValidationError: Blank question or document not completed.
        """
        if not question or not question.strip():
            raise ValidationError("question is required")
        if document.status is not ProcessingStatus.COMPLETED:
            raise ValidationError(
                f"Document is still {document.status.value}. "
                "Please wait for processing to complete."
            )

        started = time.perf_counter()
        question = question.strip()

        search = await self._search.find_similar(question, document.chunks, top_k=self._top_k)
        answer = await self._answers.answer(question, search.results, document.meta)

        processing_time_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            f"Answered '{question[:50]}...' with {answer.model} "
            f"({len(search.results)} chunks, {search.method}, {processing_time_ms}ms)"
        )

        return ChatResult(
            answer=answer,
            total_chunks=len(document.chunks),
            chunks_retrieved=len(search.results),
            average_similarity=search.average_similarity,
            similarity_threshold=self._search.threshold,
            search_method=search.method,
            processing_time_ms=processing_time_ms,
        )
