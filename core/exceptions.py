"""
Error taxonomy for the retrieval core.

Callers distinguish failures by type, never by message text.
"""

from __future__ import annotations

from typing import Optional


class RetrievalError(Exception):
    """Base exception for all retrieval core errors."""
    pass


class EmbeddingUnavailable(RetrievalError):
    """
    The embedding provider could not produce a vector for a text.

    Raised when:
    - The upstream embedding backend fails or times out
    - The backend returns an empty or malformed vector
    - The input text is rejected by the backend
    """

    def __init__(self, message: str, text: Optional[str] = None) -> None:
        super().__init__(message)
        self.text = text


class QueryEmbeddingFailed(EmbeddingUnavailable):
    """Embedding failed for a query; the query cannot be ranked."""
    pass


class InvalidChunkLength(RetrievalError, ValueError):
    """A non-positive maximum chunk length was requested."""

    def __init__(self, max_length: object) -> None:
        super().__init__(f"max_length must be a positive integer, got {max_length!r}")
        self.max_length = max_length


class VectorDimensionMismatch(RetrievalError, ValueError):
    """A vector does not match the dimension already established by an index."""

    def __init__(self, expected: Optional[int], actual: int) -> None:
        if expected is None:
            message = f"Vector must be one-dimensional and non-empty (got length {actual})"
        else:
            message = f"Vector dimension {actual} does not match index dimension {expected}"
        super().__init__(message)
        self.expected = expected
        self.actual = actual
