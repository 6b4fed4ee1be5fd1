import asyncio
import json
import logging
import sys
import uuid
from pathlib import Path

from pdfrag.config.settings import settings
from pdfrag.container import BackendSelection, configure_container, container
from pdfrag.core.exceptions import PdfRagError
from pdfrag.core.models.document import ProcessedDocument
from pdfrag.core.protocols.text_extractor import TextExtractorProtocol
from pdfrag.core.services.chat_service import ChatService
from pdfrag.core.services.ingest_service import IngestService

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


async def ingest_file(path: Path) -> ProcessedDocument:
    """Extract and process one document."""
    extracted = container.resolve(TextExtractorProtocol).extract(path)
    ingest_service = container.resolve(IngestService)
    return await ingest_service.process(
        document_id=uuid.uuid4().hex, extracted=extracted, filename=path.name
    )


def cmd_ingest(path: Path) -> None:
    """Ingest command - process a document and print its record."""
    document = asyncio.run(ingest_file(path))
    meta = document.metadata
    print(
        json.dumps(
            {
                "id": document.document_id,
                "filename": document.filename,
                "pageCount": document.page_count,
                "processingStatus": document.status.value,
                "summary": document.summary,
                "tags": document.tags,
                "language": document.language,
                "processingMetadata": {
                    "totalChunks": meta.total_chunks,
                    "totalTokens": meta.total_tokens,
                    "processingTime": meta.processing_time_ms,
                    "embeddingModel": meta.embedding_model,
                    "chunkSize": meta.chunk_size,
                    "chunkOverlap": meta.chunk_overlap,
                },
            },
            indent=2,
        )
    )


def cmd_ask(path: Path, question: str) -> None:
    """Ask command - process a document and answer one question."""

    async def run():
        document = await ingest_file(path)
        return await container.resolve(ChatService).ask(document, question)

    result = asyncio.run(run())
    print(result.answer.answer)
    print()
    print(
        f"[model={result.answer.model} chunks={result.chunks_retrieved}/{result.total_chunks} "
        f"method={result.search_method} avg_similarity={result.average_similarity:.3f}]"
    )
    for chunk in result.answer.context.retrieved_chunks:
        print(f"  - page {chunk.page_number} ({chunk.similarity:.2f}): {chunk.content}")


def cmd_status() -> None:
    """Status command - print selected backends and configuration."""
    selection = container.resolve(BackendSelection)
    status = {
        "services": selection.describe(),
        "configuration": {
            "chunkSize": settings.chunk_size,
            "chunkOverlap": settings.chunk_overlap,
            "maxTokens": settings.llm_max_tokens,
            "similarityThreshold": settings.similarity_threshold,
        },
    }
    print(json.dumps(status, indent=2))


def main():
    """CLI entry point."""
    if len(sys.argv) < 2:
        print("Usage: pdfrag <command> [args]")
        print("Commands: ingest <file>, ask <file> <question>, status")
        sys.exit(1)

    configure_container(settings)
    command = sys.argv[1]

    try:
        if command == "ingest" and len(sys.argv) == 3:
            cmd_ingest(Path(sys.argv[2]))
        elif command == "ask" and len(sys.argv) >= 4:
            cmd_ask(Path(sys.argv[2]), " ".join(sys.argv[3:]))
        elif command == "status":
            cmd_status()
        else:
            print(f"Unknown command or missing arguments: {' '.join(sys.argv[1:])}")
            sys.exit(1)
    except PdfRagError as e:
        logger.error(f"{command} failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
