"""Pytest fixtures for pdfrag tests."""

from __future__ import annotations

from typing import Callable, Optional

import pytest

from pdfrag.core.models import Chunk, EmbeddingBatch, ProcessingStatus
from pdfrag.core.text import count_words


# --- Fakes ---


class FakeEmbedder:
    """Embedder returning vectors from a function of the text."""

    def __init__(
        self,
        model: str = "cohere",
        vector_fn: Callable[[str], list[float]] | None = None,
        error: Exception | None = None,
    ) -> None:
        self._model = model
        self._vector_fn = vector_fn or (lambda text: [float(len(text)), 1.0, 0.0])
        self._error = error
        self.calls: list[list[str]] = []

    @property
    def model_name(self) -> str:
        return self._model

    async def embed(self, texts: list[str]) -> EmbeddingBatch:
        self.calls.append(list(texts))
        if self._error:
            raise self._error
        return EmbeddingBatch(vectors=[self._vector_fn(t) for t in texts], model=self._model)


class FakeLLM:
    """LLM returning a canned completion or raising."""

    def __init__(
        self,
        response: str = "Generated answer (page 1).",
        error: Exception | None = None,
        name: str = "anthropic",
    ) -> None:
        self._response = response
        self._error = error
        self._name = name
        self.prompts: list[str] = []
        self.systems: list[Optional[str]] = []

    @property
    def model_name(self) -> str:
        return self._name

    async def generate(self, prompt: str, system: str | None = None) -> str:
        self.prompts.append(prompt)
        self.systems.append(system)
        if self._error:
            raise self._error
        return self._response


class RecordingTracker:
    """Status tracker keeping every update."""

    def __init__(self) -> None:
        self.updates: list[tuple[str, ProcessingStatus, Optional[str]]] = []

    async def update(
        self,
        document_id: str,
        status: ProcessingStatus,
        error_message: Optional[str] = None,
    ) -> None:
        self.updates.append((document_id, status, error_message))

    @property
    def statuses(self) -> list[ProcessingStatus]:
        return [status for _, status, _ in self.updates]


# --- Fixtures ---


@pytest.fixture
def make_chunk() -> Callable[..., Chunk]:
    """Factory for chunks with consistent word counts and offsets."""

    def _make(
        content: str,
        page_number: int = 1,
        chunk_index: int = 0,
        embedding: list[float] | None = None,
        model: str | None = None,
    ) -> Chunk:
        chunk = Chunk(
            content=content,
            page_number=page_number,
            chunk_index=chunk_index,
            start_char=0,
            end_char=len(content),
            word_count=count_words(content),
        )
        if embedding is not None:
            chunk = chunk.with_embedding(embedding, model or "cohere")
        return chunk

    return _make


@pytest.fixture
def ml_chunks(make_chunk) -> list[Chunk]:
    """Three-chunk corpus, two about machine learning."""
    return [
        make_chunk("This is about artificial intelligence and machine learning.", 1, 0),
        make_chunk("Machine learning algorithms process data to find patterns.", 1, 1),
        make_chunk("The weather today is sunny and warm.", 2, 0),
    ]


@pytest.fixture
def fake_embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def failing_llm() -> FakeLLM:
    return FakeLLM(error=RuntimeError("provider unavailable"))


@pytest.fixture
def tracker() -> RecordingTracker:
    return RecordingTracker()
