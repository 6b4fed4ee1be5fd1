import asyncio
import logging

import httpx
from openai import AsyncOpenAI

from pdfrag.core.exceptions import MalformedResponseError
from pdfrag.core.models.outcome import DegradedReason
from pdfrag.core.models.search import EmbeddingBatch

from .tfidf_embedder import TfidfEmbedder

logger = logging.getLogger(__name__)


class OpenAICompatibleEmbedder:
    """Remote embeddings through an OpenAI-compatible API (Cohere, OpenAI)."""

    def __init__(
        self,
        provider: str,
        base_url: str,
        api_key: str,
        model: str,
        timeout: float = 30.0,
        fallback: TfidfEmbedder | None = None,
        client: AsyncOpenAI | None = None,
    ):
        """Initialize embedder.

        Args:
            provider: Provider name, used as the embedding method name.
            base_url: OpenAI-compatible API URL.
            api_key: Provider API key.
            model: Embedding model.
            timeout: Seconds allowed per request.
            fallback: Embedder used when a request fails.
            client: Preconfigured client (tests).
        """
        self._provider = provider
        self._model = model
        self._timeout = timeout
        self._fallback = fallback or TfidfEmbedder()
        self._client = client or AsyncOpenAI(
            base_url=base_url,
            api_key=api_key,
            timeout=httpx.Timeout(timeout),
            max_retries=0,
        )

    @property
    def model_name(self) -> str:
        return self._provider

    async def embed(self, texts: list[str]) -> EmbeddingBatch:
        """Embed texts remotely, falling back to TF-IDF on any failure."""
        if not texts:
            return EmbeddingBatch(vectors=[], model=self._provider)

        try:
            vectors = await asyncio.wait_for(self._request(texts), timeout=self._timeout)
            return EmbeddingBatch(vectors=vectors, model=self._provider)
        except asyncio.TimeoutError:
            logger.error(f"[{self._provider}] Embedding request timed out after {self._timeout}s")
            reason = DegradedReason.TIMEOUT
        except MalformedResponseError as e:
            logger.error(f"[{self._provider}] Malformed embedding response: {e}")
            reason = DegradedReason.MALFORMED_RESPONSE
        except Exception as e:
            logger.error(f"[{self._provider}] Error generating embeddings: {e}")
            reason = DegradedReason.PROVIDER_ERROR

        batch = await self._fallback.embed(texts)
        batch.degraded_reason = reason
        return batch

    async def _request(self, texts: list[str]) -> list[list[float]]:
        response = await self._client.embeddings.create(
            model=self._model,
            input=texts,
            encoding_format="float",
        )
        data = getattr(response, "data", None)
        if not data or len(data) != len(texts):
            raise MalformedResponseError(
                f"expected {len(texts)} embeddings, got {len(data) if data else 0}"
            )
        ordered = sorted(data, key=lambda d: d.index)
        vectors = [list(d.embedding) for d in ordered]
        if any(not v for v in vectors):
            raise MalformedResponseError("empty embedding vector")
        return vectors
