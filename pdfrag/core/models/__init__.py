"""Domain models."""
from .document import (
    PAGE_BREAK,
    Chunk,
    ChunkEmbedding,
    ChunkingResult,
    DocumentMeta,
    ExtractedText,
    ProcessedDocument,
    ProcessingMetadata,
)
from .status import ProcessingStatus
from .outcome import DegradedReason
from .search import (
    METHOD_EMBEDDING,
    METHOD_FALLBACK,
    EmbeddingBatch,
    SearchResponse,
    SimilarityResult,
)
from .answer import (
    FALLBACK_MODEL,
    Answer,
    AnswerContext,
    ChatResult,
    DocumentSummary,
    RetrievedChunk,
)

__all__ = [
    "PAGE_BREAK",
    "Chunk",
    "ChunkEmbedding",
    "ChunkingResult",
    "DocumentMeta",
    "ExtractedText",
    "ProcessedDocument",
    "ProcessingMetadata",
    "ProcessingStatus",
    "DegradedReason",
    "METHOD_EMBEDDING",
    "METHOD_FALLBACK",
    "EmbeddingBatch",
    "SearchResponse",
    "SimilarityResult",
    "FALLBACK_MODEL",
    "Answer",
    "AnswerContext",
    "ChatResult",
    "DocumentSummary",
    "RetrievedChunk",
]
