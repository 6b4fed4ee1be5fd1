
import logging
from abc import ABC, abstractmethod

import numpy as np

from ..exceptions import IncomparableVectorsError, NoEmbeddingsError
from ..models.document import Chunk
from ..models.search import METHOD_EMBEDDING, METHOD_FALLBACK
from ..protocols.embedder import EmbedderProtocol
from ..text import tokenize_terms
from .tfidf import TFIDF_MODEL

logger = logging.getLogger(__name__)

KEYWORD_THRESHOLD = 0.01


def cosine_similarities(query: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Cosine similarity of every matrix row against the query, clamped to [0, 1]."""
    query = np.asarray(query, dtype=float)
    matrix = np.asarray(matrix, dtype=float)
    if matrix.ndim != 2 or matrix.shape[1] != query.shape[0]:
        raise IncomparableVectorsError(
            f"Query dimension {query.shape[0]} does not match chunk vectors {matrix.shape}"
        )

    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    dots = matrix @ query
    with np.errstate(divide="ignore", invalid="ignore"):
        scores = np.where(norms > 0, dots / norms, 0.0)
    return np.clip(scores, 0.0, 1.0)


def relevance_score(similarity: float, chunk: Chunk) -> float:
    """Similarity plus flat bonuses for long chunks, capped at 1.0."""
    length_bonus = min(len(chunk.content) / 1000, 0.2)
    word_count_bonus = min(chunk.word_count / 100, 0.1)
    return min(similarity + length_bonus + word_count_bonus, 1.0)


class SimilarityStrategy(ABC):
    """Base class for query-to-chunk similarity strategies."""

    method: str

    @abstractmethod
    async def score(self, query: str, chunks: list[Chunk]) -> list[tuple[Chunk, float]]:
        """Score the chunks this strategy can compare against the query."""
        ...

    @abstractmethod
    def passes(self, similarity: float, threshold: float) -> bool:
        """Whether a scored chunk is kept."""
        ...


class EmbeddingSimilarityStrategy(SimilarityStrategy):
    """Cosine similarity between the query vector and chunk vectors."""

    method = METHOD_EMBEDDING

    def __init__(self, embedder: EmbedderProtocol):
        """Initialize strategy.

        Args:
            embedder: Embedder used for the chunk set.
        """
        self._embedder = embedder

    async def score(self, query: str, chunks: list[Chunk]) -> list[tuple[Chunk, float]]:
        """Score chunks embedded with the same method as the query.

        Raises:
            NoEmbeddingsError: No chunk has an embedding.
            IncomparableVectorsError: Query and chunks come from different methods.
        """
        embedded = [c for c in chunks if c.has_embedding]
        if not embedded:
            raise NoEmbeddingsError("No chunk carries an embedding")

        batch = await self._embedder.embed([query])
        if not batch.vectors:
            raise IncomparableVectorsError("Failed to generate query embedding")

        # TF-IDF vectors are batch-relative, a lone query vector shares no vocabulary
        if batch.model == TFIDF_MODEL:
            raise IncomparableVectorsError("TF-IDF query vector has no shared vocabulary")

        candidates = [c for c in embedded if c.embedding_model == batch.model]
        if not candidates:
            raise IncomparableVectorsError(f"No chunk embedded with {batch.model}")
        query_vector = np.asarray(batch.vectors[0], dtype=float)
        if any(len(c.embedding) != query_vector.shape[0] for c in candidates):
            raise IncomparableVectorsError("Chunk vectors differ in dimension")
        chunk_matrix = np.asarray([c.embedding for c in candidates], dtype=float)

        scores = cosine_similarities(query_vector, chunk_matrix)
        return [(chunk, float(score)) for chunk, score in zip(candidates, scores)]

    def passes(self, similarity: float, threshold: float) -> bool:
        return similarity >= threshold


class KeywordOverlapStrategy(SimilarityStrategy):
    """Share of query terms found in the chunk."""

    method = METHOD_FALLBACK

    def __init__(self, threshold: float = KEYWORD_THRESHOLD):
        """Initialize strategy.

        Args:
            threshold: Fixed minimum overlap, ignoring the caller's threshold.
        """
        self._threshold = threshold

    async def score(self, query: str, chunks: list[Chunk]) -> list[tuple[Chunk, float]]:
        return [(chunk, self.overlap(query, chunk.content)) for chunk in chunks]

    @staticmethod
    def overlap(query: str, content: str) -> float:
        query_terms = tokenize_terms(query)
        chunk_terms = tokenize_terms(content)
        denominator = max(len(query_terms), len(chunk_terms))
        if denominator == 0:
            return 0.0
        chunk_set = set(chunk_terms)
        common = [term for term in query_terms if term in chunk_set]
        return len(common) / denominator

    def passes(self, similarity: float, threshold: float) -> bool:
        # No overlap can exceed 1.0, so such a threshold keeps nothing
        if threshold > 1.0:
            return False
        return similarity > self._threshold
