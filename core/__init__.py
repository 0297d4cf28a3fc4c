"""
Core retrieval components.

This module provides the building blocks the retrieval service composes:
- Sentence-respecting chunking
- Embedding provider interface and model management
- The error taxonomy
"""

from core.chunking import SentenceChunker, get_chunker, split_into_chunks
from core.embeddings import (
    EmbeddingManager,
    EmbeddingProvider,
    LlamaIndexEmbeddingProvider,
    get_embedding_model,
    get_embedding_provider,
)
from core.exceptions import (
    EmbeddingUnavailable,
    InvalidChunkLength,
    QueryEmbeddingFailed,
    RetrievalError,
    VectorDimensionMismatch,
)

__all__ = [
    # Chunking
    "SentenceChunker",
    "get_chunker",
    "split_into_chunks",
    # Embeddings
    "EmbeddingProvider",
    "LlamaIndexEmbeddingProvider",
    "EmbeddingManager",
    "get_embedding_model",
    "get_embedding_provider",
    # Errors
    "RetrievalError",
    "EmbeddingUnavailable",
    "QueryEmbeddingFailed",
    "InvalidChunkLength",
    "VectorDimensionMismatch",
]
