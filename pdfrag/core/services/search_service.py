"""Search service - similarity ranking of a document's chunks."""

import logging

from ..exceptions import IncomparableVectorsError, NoEmbeddingsError
from ..models.document import Chunk
from ..models.outcome import DegradedReason
from ..models.search import SearchResponse, SimilarityResult
from ..protocols.embedder import EmbedderProtocol
from ..strategies.scoring import (
    EmbeddingSimilarityStrategy,
    KeywordOverlapStrategy,
    SimilarityStrategy,
    relevance_score,
)

logger = logging.getLogger(__name__)


class SearchService:
    """Ranks chunks by embedding similarity, degrading to keyword overlap."""

    def __init__(
        self,
        embedder: EmbedderProtocol,
        top_k: int = 5,
        threshold: float = 0.7,
        primary: SimilarityStrategy | None = None,
        fallback: SimilarityStrategy | None = None,
    ):
        """Initialize search service.

        Args:
            embedder: Embedder used for the chunk set.
            top_k: Default number of results.
            threshold: Default minimum similarity.
            primary: Strategy tried first.
            fallback: Strategy used when the primary one fails.
        """
        self._top_k = top_k
        self._threshold = threshold
        self._primary = primary or EmbeddingSimilarityStrategy(embedder)
        self._fallback = fallback or KeywordOverlapStrategy()

    @property
    def threshold(self) -> float:
        return self._threshold

    async def find_similar(
        self,
        query: str,
        chunks: list[Chunk],
        top_k: int | None = None,
        threshold: float | None = None,
    ) -> SearchResponse:
        """Find the chunks most similar to the query.

        Args:
            query: User question.
            chunks: Chunks of one document.
            top_k: Override number of results.
            threshold: Override minimum similarity.

        Returns:
            Ranked results; tagged with method "fallback" and a reason when
            keyword overlap was used.
        """
        top_k = self._top_k if top_k is None else top_k
        threshold = self._threshold if threshold is None else threshold

        try:
            scored = await self._primary.score(query, chunks)
            response = self._rank(self._primary, scored, chunks, top_k, threshold)
            logger.info(
                f"Search: {len(response.results)}/{top_k} chunks for '{query[:50]}...' "
                f"(avg={response.average_similarity:.3f})"
            )
            return response
        except NoEmbeddingsError as e:
            reason = DegradedReason.NO_EMBEDDINGS
            logger.warning(f"Search fallback: {e}")
        except IncomparableVectorsError as e:
            reason = DegradedReason.INCOMPARABLE_VECTORS
            logger.warning(f"Search fallback: {e}")
        except Exception as e:
            reason = DegradedReason.PROVIDER_ERROR
            logger.error(f"Error in similarity search: {e}")

        scored = await self._fallback.score(query, chunks)
        response = self._rank(self._fallback, scored, chunks, top_k, threshold)
        response.chunks_with_embeddings = len(chunks)
        response.degraded_reason = reason
        logger.info(
            f"Keyword search: {len(response.results)}/{top_k} chunks for '{query[:50]}...'"
        )
        return response

    def _rank(
        self,
        strategy: SimilarityStrategy,
        scored: list[tuple[Chunk, float]],
        chunks: list[Chunk],
        top_k: int,
        threshold: float,
    ) -> SearchResponse:
        """Filter, sort (stable, ties keep chunk order) and truncate."""
        similarities = [
            SimilarityResult(
                chunk=chunk,
                similarity=similarity,
                relevance=relevance_score(similarity, chunk),
            )
            for chunk, similarity in scored
        ]

        kept = [r for r in similarities if strategy.passes(r.similarity, threshold)]
        kept.sort(key=lambda r: r.similarity, reverse=True)

        average = (
            sum(r.similarity for r in similarities) / len(similarities)
            if similarities
            else 0.0
        )

        return SearchResponse(
            results=kept[: max(top_k, 0)],
            total_chunks=len(chunks),
            chunks_with_embeddings=len(similarities),
            average_similarity=average,
            method=strategy.method,
        )
