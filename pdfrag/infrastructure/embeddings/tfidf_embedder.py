from pdfrag.core.models.outcome import DegradedReason
from pdfrag.core.models.search import EmbeddingBatch
from pdfrag.core.strategies.tfidf import TFIDF_MODEL, compute_tfidf


class TfidfEmbedder:
    """Statistical embedder with no external dependency."""

    def __init__(self, degraded_reason: DegradedReason | None = None):
        self._degraded_reason = degraded_reason

    @property
    def model_name(self) -> str:
        return TFIDF_MODEL

    def vectorize(self, texts: list[str]) -> list[list[float]]:
        return compute_tfidf(texts).tolist()

    async def embed(self, texts: list[str]) -> EmbeddingBatch:
        return EmbeddingBatch(
            vectors=self.vectorize(texts),
            model=TFIDF_MODEL,
            degraded_reason=self._degraded_reason,
        )
