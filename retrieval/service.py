"""
Retrieval service.

Orchestrates chunking and embedding on ingest, and query embedding plus
similarity search on lookup. This is the only entry point callers (prompt
construction, chat loops) need.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, TYPE_CHECKING

from core.chunking import SentenceChunker
from core.embeddings import EmbeddingProvider, get_embedding_provider
from core.exceptions import EmbeddingUnavailable, QueryEmbeddingFailed
from config import settings
from monitoring import (
    documents_ingested,
    embedding_failures,
    passages_indexed,
    track_query_metrics,
)
from storage import InMemoryStore, Passage, SearchResult
from utils.validators import validate_top_k

if TYPE_CHECKING:
    from llama_index.core.schema import Document
    from storage.vector_store import VectorStoreInterface

logger = logging.getLogger(__name__)


class RetrievalService:
    """
    Ingest documents into a similarity index and answer top-K queries.

    Chunks are embedded one at a time, in order, so passage ids always
    follow chunk order. A chunk whose embedding fails is skipped and the
    rest of the document is still ingested; ingest is therefore not atomic.

    Attributes:
        embedding_provider: Converts text to vectors.
        store: The owned similarity index.
        chunker: Sentence chunker bounded by ``max_chunk_length``.
        default_k: Number of results when ``query`` is called without ``k``.
    """

    __slots__ = ('embedding_provider', 'store', 'chunker', 'default_k')

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        store: Optional[VectorStoreInterface] = None,
        max_chunk_length: Optional[int] = None,
        default_k: Optional[int] = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            embedding_provider: Provider used for both passages and queries.
            store: Similarity index to own. A new InMemoryStore if None.
            max_chunk_length: Chunk bound (default settings.MAX_CHUNK_LENGTH).
            default_k: Default top-K (default settings.SIMILARITY_TOP_K).

        Raises:
            InvalidChunkLength: If ``max_chunk_length`` is not positive.
            ValueError: If ``default_k`` is not a positive integer.
        """
        if default_k is None:
            default_k = settings.SIMILARITY_TOP_K

        is_valid, error = validate_top_k(default_k)
        if not is_valid:
            raise ValueError(error)

        self.embedding_provider = embedding_provider
        self.store: VectorStoreInterface = store if store is not None else InMemoryStore()
        self.chunker = SentenceChunker(max_length=max_chunk_length)
        self.default_k: int = default_k

    @property
    def max_chunk_length(self) -> int:
        return self.chunker.max_length

    def ingest(self, document: Document) -> List[Passage]:
        """
        Chunk, embed and store one document.

        Args:
            document: Document with ``text`` and ``metadata``.

        Returns:
            Stored passages in chunk order. Shorter than the chunk count
            when some embeddings failed; empty if all of them did.
        """
        metadata = dict(document.metadata or {})
        chunks = self.chunker.split(document.text)
        stored: List[Passage] = []
        log_ctx = {"stage": "ingest", "document": metadata.get("title"), "chunk_count": len(chunks)}

        for position, chunk in enumerate(chunks):
            try:
                vector = self.embedding_provider.embed(chunk)
            except EmbeddingUnavailable as e:
                embedding_failures.labels(stage="ingest").inc()
                logger.warning(
                    f"Skipping chunk {position + 1}/{len(chunks)}: embedding unavailable ({e})",
                    extra={**log_ctx, "chunk_index": position},
                )
                continue

            stored.append(self.store.add(chunk, metadata, vector))

        documents_ingested.inc()
        passages_indexed.set(len(self.store))

        logger.info(
            f"Ingested {len(stored)}/{len(chunks)} chunks "
            f"(max_chunk_length={self.max_chunk_length})",
            extra={**log_ctx, "passage_count": len(stored)},
        )
        return stored

    def ingest_many(self, documents: Iterable[Document]) -> List[Passage]:
        """
        Ingest documents in order.

        Args:
            documents: Documents to ingest.

        Returns:
            All passages stored by this call, in insertion order.
        """
        stored: List[Passage] = []
        for document in documents:
            stored.extend(self.ingest(document))

        stats = self.store.stats()
        logger.info(
            f"Knowledge base holds {stats['count']} chunks, "
            f"average {stats['average_chunk_size']} chars"
        )
        return stored

    @track_query_metrics
    def query(self, text: str, k: Optional[int] = None) -> List[SearchResult]:
        """
        Return the passages most similar to ``text``.

        Args:
            text: Query text.
            k: Maximum number of results (default ``self.default_k``).

        Returns:
            At most ``k`` results, highest similarity first. Empty when
            nothing has been indexed.

        Raises:
            ValueError: If ``k`` is not a positive integer.
            QueryEmbeddingFailed: If the query cannot be embedded.
        """
        if k is None:
            k = self.default_k

        is_valid, error = validate_top_k(k)
        if not is_valid:
            raise ValueError(error)

        if len(self.store) == 0:
            logger.debug("Query against empty index; returning no results")
            return []

        try:
            query_vector = self.embedding_provider.embed(text)
        except EmbeddingUnavailable as e:
            embedding_failures.labels(stage="query").inc()
            raise QueryEmbeddingFailed(f"Could not embed query: {e}", text=text) from e

        results = self.store.search(query_vector, int(k))
        logger.debug(
            f"Query returned {len(results)} of {len(self.store)} passages (k={k})",
            extra={"stage": "query", "k": int(k), "passage_count": len(results)},
        )
        return results

    def stats(self) -> dict:
        """Passage count and size aggregates of the owned index."""
        return self.store.stats()


def get_retrieval_service(
    embedding_provider: Optional[EmbeddingProvider] = None,
    max_chunk_length: Optional[int] = None,
    default_k: Optional[int] = None,
) -> RetrievalService:
    """
    Factory function to create a retrieval service over a fresh index.

    Args:
        embedding_provider: Provider to use. If None, the configured
            llama-index embedding model is loaded.
        max_chunk_length: Chunk bound override.
        default_k: Default top-K override.

    Returns:
        Configured retrieval service.
    """
    if embedding_provider is None:
        embedding_provider = get_embedding_provider()

    return RetrievalService(
        embedding_provider,
        max_chunk_length=max_chunk_length,
        default_k=default_k,
    )
