"""TF-IDF vectors over a batch of texts."""
import math

import numpy as np

from ..text import tokenize_terms

TFIDF_MODEL = "tfidf"


def build_vocabulary(documents: list[list[str]]) -> dict[str, int]:
    """Map each distinct term to its column, in first-occurrence order."""
    vocabulary: dict[str, int] = {}
    for terms in documents:
        for term in terms:
            if term not in vocabulary:
                vocabulary[term] = len(vocabulary)
    return vocabulary


def compute_tfidf(texts: list[str]) -> np.ndarray:
    """Compute TF-IDF vectors for a batch.

    Vectors are batch-relative: all rows share one vocabulary, so vectors
    from different batches must not be compared.

    Args:
        texts: Batch of texts.

    Returns:
        Matrix of shape (len(texts), vocabulary size).
    """
    documents = [tokenize_terms(text) for text in texts]
    vocabulary = build_vocabulary(documents)

    tf = np.zeros((len(documents), len(vocabulary)), dtype=float)
    for row, terms in enumerate(documents):
        for term in terms:
            tf[row, vocabulary[term]] += 1.0

    if not vocabulary:
        return tf

    doc_freq = np.count_nonzero(tf, axis=0)
    # A term present in every document gets weight 0
    idf = np.array([math.log(len(documents) / df) for df in doc_freq], dtype=float)
    return tf * idf
