"""Embedding and similarity search models."""
from dataclasses import dataclass, field
from typing import Optional

from .document import Chunk
from .outcome import DegradedReason

METHOD_EMBEDDING = "embedding"
METHOD_FALLBACK = "fallback"


@dataclass
class EmbeddingBatch:
    """Vectors for one batch of texts, all produced by the same method."""
    vectors: list[list[float]]
    model: str
    degraded_reason: Optional[DegradedReason] = None

    @property
    def degraded(self) -> bool:
        return self.degraded_reason is not None


@dataclass
class SimilarityResult:
    """Chunk scored against a query."""
    chunk: Chunk
    similarity: float
    relevance: float


@dataclass
class SearchResponse:
    """Ranked chunks with statistics over the whole candidate set."""
    results: list[SimilarityResult] = field(default_factory=list)
    total_chunks: int = 0
    chunks_with_embeddings: int = 0
    average_similarity: float = 0.0
    method: str = METHOD_EMBEDDING
    degraded_reason: Optional[DegradedReason] = None

    @property
    def degraded(self) -> bool:
        return self.degraded_reason is not None
