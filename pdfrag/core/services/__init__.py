"""Core business services."""
from .chunking_service import ChunkingService
from .embedding_service import EmbeddingService
from .search_service import SearchService
from .answer_service import AnswerService
from .analysis_service import AnalysisService
from .ingest_service import IngestService
from .chat_service import ChatService

__all__ = [
    "ChunkingService",
    "EmbeddingService",
    "SearchService",
    "AnswerService",
    "AnalysisService",
    "IngestService",
    "ChatService",
]
