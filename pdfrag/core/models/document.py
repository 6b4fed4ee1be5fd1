"""Document domain models."""
from dataclasses import dataclass, field, replace
from typing import Optional

from .status import ProcessingStatus

PAGE_BREAK = "\f"


@dataclass(frozen=True)
class Chunk:
    """Retrievable span of one page's cleaned text."""
    content: str
    page_number: int
    chunk_index: int
    start_char: int
    end_char: int
    word_count: int
    embedding: tuple[float, ...] = ()
    embedding_model: Optional[str] = None

    @property
    def chunk_id(self) -> str:
        return f"{self.page_number}_{self.chunk_index}"

    @property
    def has_embedding(self) -> bool:
        return len(self.embedding) > 0

    def with_embedding(self, vector: list[float], model: str) -> "Chunk":
        """Return a copy carrying the given embedding."""
        return replace(self, embedding=tuple(float(v) for v in vector), embedding_model=model)


@dataclass
class ChunkingResult:
    """Chunks of a whole document with aggregate counts."""
    chunks: list[Chunk]
    total_chunks: int
    total_words: int
    average_chunk_size: float


@dataclass
class ExtractedText:
    """Page-delimited text produced by a text extractor."""
    text: str
    page_count: int


@dataclass
class DocumentMeta:
    """Document facts passed to prompts."""
    filename: Optional[str] = None
    page_count: Optional[int] = None


@dataclass
class ChunkEmbedding:
    """Embedding record persisted next to the chunk list."""
    chunk_id: str
    embedding: tuple[float, ...]
    model: str


@dataclass
class ProcessingMetadata:
    total_chunks: int
    total_tokens: int
    processing_time_ms: int
    embedding_model: str
    chunk_size: int
    chunk_overlap: int


@dataclass
class ProcessedDocument:
    """Output of the ingestion pipeline for the storage layer."""
    document_id: str
    filename: str
    page_count: int
    status: ProcessingStatus = ProcessingStatus.UPLOADING
    chunks: list[Chunk] = field(default_factory=list)
    embeddings: list[ChunkEmbedding] = field(default_factory=list)
    summary: str = ""
    tags: list[str] = field(default_factory=list)
    language: str = "en"
    metadata: Optional[ProcessingMetadata] = None
    error_message: Optional[str] = None

    @property
    def meta(self) -> DocumentMeta:
        return DocumentMeta(filename=self.filename, page_count=self.page_count)
