"""PDF question answering with a retrieval core."""

__version__ = "0.1.0"
