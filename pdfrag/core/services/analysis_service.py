"""Analysis service - tags, language and document summary."""

import asyncio
import logging
import re
from collections import Counter
from typing import Optional

from ..models.answer import FALLBACK_MODEL, DocumentSummary
from ..models.document import Chunk, DocumentMeta
from ..models.outcome import DegradedReason
from ..protocols.llm import LLMProtocol

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"[A-Za-z0-9]+")

STOPWORDS = frozenset(
    """
    a about above after again against all also am an and any are as at be because been
    before being below between both but by can could did do does doing down during each
    few for from further had has have having he her here hers herself him himself his how
    however i if in into is it its itself just like may me might more most must my myself
    no nor not now of off on once only or other our ours ourselves out over own same shall
    she should so some such than that the their theirs them themselves then there these
    they this those through thus to too under until up upon very was we were what when
    where which while who whom why will with within without would you your yours yourself
    yourselves
    """.split()
)

LANGUAGE_PATTERNS = {
    "en": re.compile(r"\b(the|and|or|but|in|on|at|to|for|of|with|by)\b", re.IGNORECASE),
    "es": re.compile(r"\b(el|la|los|las|y|o|pero|en|con|por|para|de|del)\b", re.IGNORECASE),
    "fr": re.compile(r"\b(le|la|les|et|ou|mais|en|avec|par|pour|de|du)\b", re.IGNORECASE),
}
DEFAULT_LANGUAGE = "en"

SUMMARY_PROMPT = """Please provide a comprehensive summary of the following document content. Focus on the main topics, key findings, and important information.

Document: {filename}
Pages: {pages}

Content:
{content}

Please provide a structured summary with:
1. Main topics/themes
2. Key findings or conclusions
3. Important details
4. Overall document purpose

Summary:"""


def extract_key_phrases(text: str, max_phrases: int = 10) -> list[tuple[str, int]]:
    """Most frequent content words.

    Args:
        text: Document text.
        max_phrases: Number of phrases to return.

    Returns:
        (word, frequency) pairs, most frequent first, ties in first-seen order.
    """
    words = [
        w
        for w in _WORD_RE.findall(text.lower())
        if len(w) > 3 and w not in STOPWORDS and not w.isdigit()
    ]
    return Counter(words).most_common(max_phrases)


def detect_language(text: str) -> str:
    """Guess en/es/fr from function-word counts; English unless one strictly wins."""
    counts = {lang: len(pattern.findall(text)) for lang, pattern in LANGUAGE_PATTERNS.items()}
    for lang, count in counts.items():
        if all(count > other for other_lang, other in counts.items() if other_lang != lang):
            return lang
    return DEFAULT_LANGUAGE


class AnalysisService:
    """Derives tags, language and a summary from a processed document."""

    def __init__(
        self,
        llm: Optional[LLMProtocol] = None,
        max_tags: int = 8,
        summary_max_chars: int = 8000,
    ):
        """Initialize analysis service.

        Args:
            llm: Generative model; None means template summaries only.
            max_tags: Number of key phrases kept as tags.
            summary_max_chars: Content characters sent for summarization.
        """
        self._llm = llm
        self._max_tags = max_tags
        self._summary_max_chars = summary_max_chars

    def tags(self, text: str) -> list[str]:
        return [word for word, _ in extract_key_phrases(text, self._max_tags)]

    def language(self, text: str) -> str:
        return detect_language(text)

    async def summarize(
        self, chunks: list[Chunk], meta: DocumentMeta | None = None
    ) -> DocumentSummary:
        """Summarize a document, falling back to a key-topic template.

        Args:
            chunks: Document chunks.
            meta: Filename and page count.

        Returns:
            Summary tagged with the model that wrote it.
        """
        meta = meta or DocumentMeta()

        if self._llm is None:
            return self.fallback_summary(chunks, meta, DegradedReason.NO_PROVIDER)

        content = "\n\n".join(c.content for c in chunks)
        if len(content) > self._summary_max_chars:
            content = content[: self._summary_max_chars] + "..."

        prompt = SUMMARY_PROMPT.format(
            filename=meta.filename or "Unknown",
            pages=meta.page_count if meta.page_count is not None else "Unknown",
            content=content,
        )

        try:
            summary = await self._llm.generate(prompt)
        except asyncio.TimeoutError:
            logger.error("Document summary timed out")
            return self.fallback_summary(chunks, meta, DegradedReason.TIMEOUT)
        except Exception as e:
            logger.error(f"Error generating document summary: {e}")
            return self.fallback_summary(chunks, meta, DegradedReason.PROVIDER_ERROR)

        return DocumentSummary(
            summary=summary, model=self._llm.model_name, total_chunks=len(chunks)
        )

    def fallback_summary(
        self,
        chunks: list[Chunk],
        meta: DocumentMeta,
        reason: DegradedReason,
    ) -> DocumentSummary:
        text = " ".join(c.content for c in chunks)
        topics = ", ".join(word for word, _ in extract_key_phrases(text, 5))
        average = round(sum(len(c.content) for c in chunks) / len(chunks)) if chunks else 0
        pages = meta.page_count if meta.page_count is not None else "unknown"

        summary = (
            f"This document contains {len(chunks)} text chunks across {pages} pages.\n\n"
            f"Key topics identified: {topics or 'none'}\n\n"
            "The document appears to cover various subjects with an average chunk size "
            f"of {average} characters."
        )
        return DocumentSummary(
            summary=summary,
            model=FALLBACK_MODEL,
            total_chunks=len(chunks),
            degraded_reason=reason,
        )
