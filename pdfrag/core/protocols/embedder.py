"""Embedder protocol for dependency injection."""
from typing import Protocol, runtime_checkable

from ..models.search import EmbeddingBatch


@runtime_checkable
class EmbedderProtocol(Protocol):
    """Protocol for embedding service."""

    @property
    def model_name(self) -> str:
        """Name of the embedding method; vectors of different names never mix."""
        ...

    async def embed(self, texts: list[str]) -> EmbeddingBatch:
        """Embed a batch of texts.

        Implementations never raise for provider failures; they return a
        batch tagged with the reason it was degraded instead.

        Args:
            texts: Texts to embed.

        Returns:
            One vector per text, all produced by the same method.
        """
        ...
