"""Embedding service - batched chunk embedding."""

import asyncio
import logging

from ..models.document import Chunk
from ..protocols.embedder import EmbedderProtocol

logger = logging.getLogger(__name__)


class EmbeddingService:
    """Embeds chunks in fixed-size batches with a delay between batches."""

    def __init__(
        self,
        embedder: EmbedderProtocol,
        batch_size: int = 10,
        batch_delay: float = 0.1,
    ):
        """Initialize embedding service.

        Args:
            embedder: Embedding strategy selected at startup.
            batch_size: Chunks per embedding request.
            batch_delay: Seconds to wait between batches.
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._embedder = embedder
        self._batch_size = batch_size
        self._batch_delay = batch_delay

    @property
    def model_name(self) -> str:
        return self._embedder.model_name

    async def embed_chunks(self, chunks: list[Chunk]) -> list[Chunk]:
        """Attach embeddings to chunks.

        A failing batch is logged and its chunks are left out of the result;
        later batches still run.

        Args:
            chunks: Chunks to embed.

        Returns:
            Embedded chunks in submission order.
        """
        results: list[Chunk] = []

        for i in range(0, len(chunks), self._batch_size):
            batch = chunks[i : i + self._batch_size]
            batch_number = i // self._batch_size + 1

            try:
                embedded = await self._embedder.embed([c.content for c in batch])

                # A TF-IDF embedder reports its missing provider once at startup
                if embedded.degraded and embedded.model != self.model_name:
                    logger.warning(
                        f"Batch {batch_number}: embedded with {embedded.model} "
                        f"({embedded.degraded_reason.value})"
                    )

                for chunk, vector in zip(batch, embedded.vectors):
                    results.append(chunk.with_embedding(vector, embedded.model))

            except Exception as e:
                logger.error(f"Error processing batch {batch_number}: {e}")

            if i + self._batch_size < len(chunks):
                await asyncio.sleep(self._batch_delay)

        logger.info(f"Embedded {len(results)}/{len(chunks)} chunks with {self.model_name}")
        return results
