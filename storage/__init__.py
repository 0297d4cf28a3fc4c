"""
Storage package.

Provides the similarity index used by the retrieval service:
- InMemoryStore: append-only, process-scoped, brute-force cosine search
"""

from storage.memory_store import InMemoryStore, cosine_similarity
from storage.vector_store import Passage, SearchResult, VectorStoreInterface


def get_vector_store() -> VectorStoreInterface:
    """
    Factory function to create a vector store.

    Returns:
        A new, empty in-memory store.
    """
    return InMemoryStore()


__all__ = [
    "VectorStoreInterface",
    "InMemoryStore",
    "Passage",
    "SearchResult",
    "cosine_similarity",
    "get_vector_store",
]
