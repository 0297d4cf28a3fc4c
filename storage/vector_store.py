"""
Abstract vector store interface and record types.

Defines the common interface for similarity index backends together with
the immutable passage record and the ephemeral search result.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence, Tuple


@dataclass(frozen=True)
class Passage:
    """
    A stored chunk of a document.

    Attributes:
        id: Sequence number assigned at insertion, never reused.
        text: The chunk's literal content.
        metadata: Read-only view of the metadata attached at ingest time.
        vector: Embedding of ``text``.
    """

    id: int
    text: str
    metadata: Mapping[str, str]
    vector: Tuple[float, ...]


@dataclass(frozen=True)
class SearchResult:
    """
    One ranked match returned by a search.

    Results are detached copies; mutating ``metadata`` does not touch the index.
    """

    passage_id: int
    text: str
    metadata: Dict[str, str]
    score: float


class VectorStoreInterface(ABC):
    """
    Abstract interface for similarity index backends.

    Implementations are append-only: passages are never mutated or removed
    once added.
    """

    @abstractmethod
    def add(
        self,
        text: str,
        metadata: Mapping[str, str],
        vector: Sequence[float],
    ) -> Passage:
        """
        Store a passage with its embedding.

        Args:
            text: Passage text.
            metadata: Metadata to attach.
            vector: Embedding of ``text``.

        Returns:
            The stored passage.
        """
        pass

    @abstractmethod
    def search(
        self,
        query_vector: Sequence[float],
        top_k: int = 3,
    ) -> List[SearchResult]:
        """
        Rank stored passages against a query vector.

        Args:
            query_vector: Query embedding.
            top_k: Maximum number of results.

        Returns:
            Results ordered by descending similarity.
        """
        pass

    @abstractmethod
    def stats(self) -> Dict[str, int]:
        """
        Get store statistics.

        Returns:
            Dictionary with ``count``, ``total_characters`` and
            ``average_chunk_size``.
        """
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass
