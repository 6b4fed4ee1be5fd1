"""Answer and summary models."""
from dataclasses import dataclass, field
from typing import Optional

from .outcome import DegradedReason

FALLBACK_MODEL = "fallback"


@dataclass
class RetrievedChunk:
    """Truncated provenance record of a chunk used for an answer."""
    chunk_id: str
    content: str
    page_number: int
    similarity: float
    relevance: float


@dataclass
class AnswerContext:
    retrieved_chunks: list[RetrievedChunk] = field(default_factory=list)
    total_chunks_retrieved: int = 0
    average_similarity: float = 0.0


@dataclass
class Answer:
    """Answer to a question with the context it was built from."""
    answer: str
    model: str
    context: AnswerContext
    degraded_reason: Optional[DegradedReason] = None

    @property
    def degraded(self) -> bool:
        return self.degraded_reason is not None


@dataclass
class DocumentSummary:
    summary: str
    model: str
    total_chunks: int
    degraded_reason: Optional[DegradedReason] = None


@dataclass
class ChatResult:
    """Answer plus retrieval statistics for the chat-history layer."""
    answer: Answer
    total_chunks: int
    chunks_retrieved: int
    average_similarity: float
    similarity_threshold: float
    search_method: str
    processing_time_ms: int
