"""Text helpers shared by chunking, lexical embedding and keyword scoring."""
import re
from dataclasses import dataclass

_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+")
_NON_WORD_RE = re.compile(r"[^\w\s]")

MIN_TERM_LENGTH = 3


@dataclass(frozen=True)
class Sentence:
    text: str
    start: int
    end: int


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def find_sentences(text: str, min_length: int = 0) -> list[Sentence]:
    """Find sentences ending in '.', '!' or '?' with their offsets.

    Text after the last terminal punctuation mark is not a sentence.
    """
    sentences = []
    for match in _SENTENCE_RE.finditer(text):
        raw = match.group()
        stripped = raw.strip()
        if len(stripped) < min_length or not stripped:
            continue
        start = match.start() + (len(raw) - len(raw.lstrip()))
        sentences.append(Sentence(stripped, start, start + len(stripped)))
    return sentences


def split_sentences(text: str) -> list[str]:
    """Raw sentence matches, whitespace included."""
    return _SENTENCE_RE.findall(text)


def tokenize_terms(text: str) -> list[str]:
    """Lowercase, drop punctuation, split on whitespace, keep terms of 3+ chars."""
    cleaned = _NON_WORD_RE.sub("", text.lower())
    return [t for t in cleaned.split() if len(t) >= MIN_TERM_LENGTH]


def count_words(text: str) -> int:
    return len(text.split())


def truncate(text: str, limit: int) -> str:
    """Cut text to limit characters, marking the cut with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
