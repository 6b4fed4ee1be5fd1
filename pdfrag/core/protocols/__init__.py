"""Protocol interfaces for dependency injection."""
from .embedder import EmbedderProtocol
from .llm import LLMProtocol
from .status_tracker import StatusTrackerProtocol
from .text_extractor import TextExtractorProtocol

__all__ = [
    "EmbedderProtocol",
    "LLMProtocol",
    "StatusTrackerProtocol",
    "TextExtractorProtocol",
]
