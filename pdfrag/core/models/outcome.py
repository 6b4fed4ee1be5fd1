"""Tags for results produced by a fallback path."""
from enum import Enum


class DegradedReason(str, Enum):
    """Why a result came from a fallback path instead of the primary one."""
    NO_PROVIDER = "no_provider"
    PROVIDER_ERROR = "provider_error"
    TIMEOUT = "timeout"
    MALFORMED_RESPONSE = "malformed_response"
    NO_EMBEDDINGS = "no_embeddings"
    INCOMPARABLE_VECTORS = "incomparable_vectors"
