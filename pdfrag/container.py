import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, TypeVar

from .config.settings import Settings
from .core.models.answer import FALLBACK_MODEL
from .core.strategies.tfidf import TFIDF_MODEL

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Container:
    _factories: dict[type, Callable[[], Any]] = field(default_factory=dict)
    _singletons: dict[type, Any] = field(default_factory=dict)
    _singleton_flags: set[type] = field(default_factory=set)

    def register(
        self, interface: type[T], factory: Callable[[], T], singleton: bool = False
    ) -> None:
        """Register factory for interface.

        Args:
            interface: Interface type.
            factory: Factory function.
            singleton: Whether to cache instance.
        """
        self._factories[interface] = factory
        if singleton:
            self._singleton_flags.add(interface)

    def resolve(self, interface: type[T]) -> T:
        if interface in self._singletons:
            return self._singletons[interface]

        if interface not in self._factories:
            raise KeyError(f"No factory registered for {interface}")

        instance = self._factories[interface]()

        if interface in self._singleton_flags:
            self._singletons[interface] = instance

        return instance

    def reset(self) -> None:
        """Reset singletons (for testing)."""
        self._singletons.clear()


@dataclass(frozen=True)
class ProviderConfig:
    name: str
    base_url: str
    api_key: str
    model: str


@dataclass(frozen=True)
class BackendSelection:
    """Embedding and generation providers chosen once at startup."""
    embedding: Optional[ProviderConfig]
    generation: Optional[ProviderConfig]

    @property
    def embedding_model(self) -> str:
        return self.embedding.name if self.embedding else TFIDF_MODEL

    @property
    def generation_model(self) -> str:
        return self.generation.name if self.generation else FALLBACK_MODEL

    def describe(self) -> dict:
        """Availability and features of the selected backends."""
        return {
            "embedding": {
                "model": self.embedding_model,
                "available": self.embedding is not None,
                "features": ["similarity_search", "cosine_similarity", "tfidf_fallback"],
            },
            "llm": {
                "model": self.generation_model,
                "available": self.generation is not None,
                "features": (
                    ["rag", "summarization", "qa"]
                    if self.generation
                    else ["fallback", "basic_qa"]
                ),
            },
        }


def select_backends(settings: Settings) -> BackendSelection:
    """Pick providers by available credentials.

    Embeddings: Cohere > OpenAI > TF-IDF (Anthropic has no embedding API).
    Generation: Anthropic > Cohere > OpenAI > Ollama > extractive answers.
    """
    embedding_candidates = [
        ("cohere", settings.cohere_api_key, settings.cohere_base_url, settings.cohere_embedding_model),
        ("openai", settings.openai_api_key, settings.openai_base_url, settings.openai_embedding_model),
    ]
    generation_candidates = [
        ("anthropic", settings.anthropic_api_key, settings.anthropic_base_url, settings.anthropic_model),
        ("cohere", settings.cohere_api_key, settings.cohere_base_url, settings.cohere_model),
        ("openai", settings.openai_api_key, settings.openai_base_url, settings.openai_model),
    ]
    if settings.ollama_base_url:
        generation_candidates.append(
            ("ollama", "ollama", settings.ollama_base_url, settings.ollama_model)
        )

    def first(candidates: list[tuple]) -> Optional[ProviderConfig]:
        for name, api_key, base_url, model in candidates:
            if api_key:
                return ProviderConfig(name=name, base_url=base_url, api_key=api_key, model=model)
        return None

    return BackendSelection(
        embedding=first(embedding_candidates),
        generation=first(generation_candidates),
    )


container = Container()


def configure_container(settings: Settings, target: Container | None = None) -> Container:
    """Configure container with all dependencies.

    Args:
        settings: Application settings.
        target: Container to configure (defaults to the module container).

    Returns:
        Configured container.
    """
    from .core.models.outcome import DegradedReason
    from .core.protocols.embedder import EmbedderProtocol
    from .core.protocols.llm import LLMProtocol
    from .core.protocols.text_extractor import TextExtractorProtocol
    from .core.services.analysis_service import AnalysisService
    from .core.services.answer_service import AnswerService
    from .core.services.chat_service import ChatService
    from .core.services.chunking_service import ChunkingService
    from .core.services.embedding_service import EmbeddingService
    from .core.services.ingest_service import IngestService
    from .core.services.search_service import SearchService
    from .infrastructure.document_loaders import CompositeLoader
    from .infrastructure.embeddings.openai_embedder import OpenAICompatibleEmbedder
    from .infrastructure.embeddings.tfidf_embedder import TfidfEmbedder
    from .infrastructure.llm.openai_client import OpenAICompatibleLLM

    target = target or container
    selection = select_backends(settings)

    def make_embedder() -> EmbedderProtocol:
        provider = selection.embedding
        if provider is None:
            logger.warning("No embedding API key found. Using TF-IDF embeddings.")
            return TfidfEmbedder(degraded_reason=DegradedReason.NO_PROVIDER)
        logger.info(f"Using {provider.name} embeddings ({provider.model})")
        return OpenAICompatibleEmbedder(
            provider=provider.name,
            base_url=provider.base_url,
            api_key=provider.api_key,
            model=provider.model,
            timeout=settings.request_timeout,
        )

    def make_llm() -> Optional[LLMProtocol]:
        provider = selection.generation
        if provider is None:
            logger.warning("No LLM API key found. Using extractive answers.")
            return None
        logger.info(f"Using {provider.name} LLM ({provider.model})")
        return OpenAICompatibleLLM(
            provider=provider.name,
            base_url=provider.base_url,
            api_key=provider.api_key,
            model=provider.model,
            max_tokens=settings.llm_max_tokens,
            temperature=settings.llm_temperature,
            timeout=settings.request_timeout,
        )

    target.register(BackendSelection, lambda: selection, singleton=True)
    target.register(EmbedderProtocol, make_embedder, singleton=True)
    target.register(LLMProtocol, make_llm, singleton=True)
    target.register(
        TextExtractorProtocol,
        lambda: CompositeLoader(max_pages=settings.max_pages),
        singleton=True,
    )

    target.register(
        ChunkingService,
        lambda: ChunkingService(
            chunk_size=settings.chunk_size,
            chunk_overlap=settings.chunk_overlap,
        ),
        singleton=True,
    )

    target.register(
        EmbeddingService,
        lambda: EmbeddingService(
            embedder=target.resolve(EmbedderProtocol),
            batch_size=settings.embedding_batch_size,
            batch_delay=settings.embedding_batch_delay,
        ),
        singleton=True,
    )

    target.register(
        SearchService,
        lambda: SearchService(
            embedder=target.resolve(EmbedderProtocol),
            top_k=settings.rag_top_k,
            threshold=settings.similarity_threshold,
        ),
        singleton=True,
    )

    target.register(
        AnswerService,
        lambda: AnswerService(llm=target.resolve(LLMProtocol)),
        singleton=True,
    )

    target.register(
        AnalysisService,
        lambda: AnalysisService(
            llm=target.resolve(LLMProtocol),
            summary_max_chars=settings.summary_max_chars,
        ),
        singleton=True,
    )

    target.register(
        IngestService,
        lambda: IngestService(
            chunker=target.resolve(ChunkingService),
            embedding_service=target.resolve(EmbeddingService),
            analysis_service=target.resolve(AnalysisService),
        ),
        singleton=True,
    )

    target.register(
        ChatService,
        lambda: ChatService(
            search_service=target.resolve(SearchService),
            answer_service=target.resolve(AnswerService),
            top_k=settings.rag_top_k,
        ),
        singleton=True,
    )

    logger.info(
        f"Container configured (embeddings={selection.embedding_model}, "
        f"llm={selection.generation_model})"
    )
    return target
