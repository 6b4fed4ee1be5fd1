"""Answer service - generative answers with an extractive fallback."""

import asyncio
import logging
from typing import Optional, Union

from ..models.answer import (
    FALLBACK_MODEL,
    Answer,
    AnswerContext,
    RetrievedChunk,
)
from ..models.document import Chunk, DocumentMeta
from ..models.outcome import DegradedReason
from ..models.search import SimilarityResult
from ..protocols.llm import LLMProtocol
from ..text import split_sentences, truncate

logger = logging.getLogger(__name__)

CONTEXT_PREVIEW_CHARS = 200
EXCERPT_CHARS = 150
SUMMARY_CHARS = 200
RELEVANT_SIMILARITY = 0.1
MAX_SUMMARIZED_CHUNKS = 3
MAX_POSSIBLY_RELATED = 2

SYSTEM_PROMPT = """You are an intelligent AI assistant specialized in analyzing PDF documents and answering questions based on their content.

Guidelines:
- Always base your answers on the provided context
- Be precise and avoid speculation
- Cite specific page numbers
- Acknowledge limitations when context is insufficient"""

RAG_PROMPT = """Based on the following context from a PDF document, please answer the user's question accurately and comprehensively.
{document_info}

Context Information:
{context}

User Question: {question}

Instructions:
1. Answer based ONLY on the provided context
2. If the context doesn't contain enough information, say so clearly
3. Cite specific page numbers when referencing information
4. Provide a clear, well-structured response
5. If the question is unclear, ask for clarification

Answer:"""

NO_INFORMATION_ANSWER = (
    "I couldn't find any relevant information in the document to answer your question. "
    "Please try rephrasing your question or check if the document contains the "
    "information you're looking for."
)

RankedChunk = Union[SimilarityResult, Chunk]


class AnswerService:
    """Composes answers from ranked chunks."""

    def __init__(self, llm: Optional[LLMProtocol] = None):
        """Initialize answer service.

        Args:
            llm: Generative model; None means extractive answers only.
        """
        self._llm = llm

    @property
    def model_name(self) -> str:
        return self._llm.model_name if self._llm else FALLBACK_MODEL

    @property
    def is_available(self) -> bool:
        return self._llm is not None

    async def answer(
        self,
        question: str,
        ranked: list[RankedChunk],
        document_meta: DocumentMeta | None = None,
    ) -> Answer:
        """Answer a question from ranked chunks.

        Never raises for generation failures; the extractive answer is
        returned instead, tagged with the reason.

        Args:
            question: User question.
            ranked: Similarity results (plain chunks count as similarity 0).
            document_meta: Filename and page count for the prompt.

        Returns:
            Answer with the provenance of the chunks it used.
        """
        results = [_as_result(r) for r in ranked]
        meta = document_meta or DocumentMeta()

        if self._llm is None:
            return self._extractive_answer(results, DegradedReason.NO_PROVIDER)

        try:
            prompt = self.build_prompt(question, results, meta)
            text = await self._llm.generate(prompt, system=SYSTEM_PROMPT)
        except asyncio.TimeoutError:
            logger.error(f"[{self._llm.model_name}] Answer generation timed out")
            return self._extractive_answer(results, DegradedReason.TIMEOUT)
        except Exception as e:
            logger.error(f"Error generating LLM response: {e}")
            return self._extractive_answer(results, DegradedReason.PROVIDER_ERROR)

        return Answer(
            answer=text,
            model=self._llm.model_name,
            context=_build_context(results),
        )

    @staticmethod
    def build_prompt(
        question: str, results: list[SimilarityResult], meta: DocumentMeta
    ) -> str:
        """Build the RAG prompt with page-tagged context."""
        context = "\n".join(
            f"[Context {i} - Page {r.chunk.page_number}]\n{r.chunk.content}\n"
            for i, r in enumerate(results, 1)
        )
        document_info = ""
        if meta.filename:
            pages = meta.page_count if meta.page_count is not None else "unknown"
            document_info = f"\nDocument: {meta.filename} ({pages} pages)\n"

        return RAG_PROMPT.format(
            document_info=document_info, context=context, question=question
        )

    def _extractive_answer(
        self, results: list[SimilarityResult], reason: DegradedReason
    ) -> Answer:
        if not results:
            return Answer(
                answer=NO_INFORMATION_ANSWER,
                model=FALLBACK_MODEL,
                context=AnswerContext(),
                degraded_reason=reason,
            )

        by_similarity = sorted(results, key=lambda r: r.similarity, reverse=True)
        relevant = [r for r in by_similarity if r.similarity > RELEVANT_SIMILARITY]

        if not relevant:
            best = by_similarity[:MAX_POSSIBLY_RELATED]
            excerpts = "\n\n".join(
                f'Page {r.chunk.page_number}: "{r.chunk.content[:EXCERPT_CHARS]}..."'
                for r in best
            )
            text = (
                "While I couldn't find highly relevant information, here's what I found "
                f"in the document that might be related:\n\n{excerpts}\n\n"
                "Try asking more specific questions or rephrasing your query. You can also "
                "ask about specific topics, page numbers, or content sections."
            )
            return Answer(
                answer=text,
                model=FALLBACK_MODEL,
                context=_build_context(best),
                degraded_reason=reason,
            )

        parts = ["Based on the relevant content I found, here's what I can tell you:\n\n"]
        for i, r in enumerate(relevant[:MAX_SUMMARIZED_CHUNKS], 1):
            summary = summarize_chunk(r.chunk.content, SUMMARY_CHARS)
            parts.append(
                f"{i}. **Page {r.chunk.page_number}** "
                f"(Relevance: {r.relevance * 100:.1f}%):\n{summary}\n\n"
            )
        if len(relevant) > MAX_SUMMARIZED_CHUNKS:
            parts.append(
                f"*Note: I found {len(relevant)} relevant sections. For more details, "
                "try asking about specific topics or page numbers.*"
            )

        return Answer(
            answer="".join(parts),
            model=FALLBACK_MODEL,
            context=_build_context(relevant),
            degraded_reason=reason,
        )


def summarize_chunk(content: str, max_length: int = SUMMARY_CHARS) -> str:
    """Leading sentences of a chunk that fit within max_length."""
    sentences = split_sentences(content)
    if not sentences:
        return truncate(content, max_length)

    summary = ""
    for sentence in sentences:
        if len(summary + sentence) > max_length:
            break
        summary += sentence

    return summary.strip() or truncate(content, max_length)


def _as_result(item: RankedChunk) -> SimilarityResult:
    if isinstance(item, SimilarityResult):
        return item
    return SimilarityResult(chunk=item, similarity=0.0, relevance=0.0)


def _build_context(results: list[SimilarityResult]) -> AnswerContext:
    """Provenance record; the average is taken over the chunks listed."""
    records = [
        RetrievedChunk(
            chunk_id=r.chunk.chunk_id,
            content=truncate(r.chunk.content, CONTEXT_PREVIEW_CHARS),
            page_number=r.chunk.page_number,
            similarity=r.similarity,
            relevance=r.relevance,
        )
        for r in results
    ]
    average = sum(r.similarity for r in results) / len(results) if results else 0.0
    return AnswerContext(
        retrieved_chunks=records,
        total_chunks_retrieved=len(records),
        average_similarity=average,
    )
