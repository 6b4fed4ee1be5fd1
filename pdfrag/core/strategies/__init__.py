"""Similarity scoring strategies."""
from .scoring import (
    EmbeddingSimilarityStrategy,
    KeywordOverlapStrategy,
    SimilarityStrategy,
    cosine_similarities,
    relevance_score,
)
from .tfidf import TFIDF_MODEL, compute_tfidf

__all__ = [
    "EmbeddingSimilarityStrategy",
    "KeywordOverlapStrategy",
    "SimilarityStrategy",
    "cosine_similarities",
    "relevance_score",
    "TFIDF_MODEL",
    "compute_tfidf",
]
