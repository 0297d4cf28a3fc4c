"""
In-memory similarity index.

Brute-force cosine search over every stored passage. Suitable for the
small, process-scoped knowledge bases this package builds; nothing is
persisted.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence

import numpy as np

from core.exceptions import VectorDimensionMismatch
from storage.vector_store import Passage, SearchResult, VectorStoreInterface

logger = logging.getLogger(__name__)


def _as_vector(values: Optional[Sequence[float]]) -> Optional[np.ndarray]:
    """Coerce to a 1-D float array, or None if that is not possible."""
    if values is None:
        return None
    try:
        arr = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError):
        return None
    if arr.ndim != 1 or arr.size == 0:
        return None
    return arr


def _unit_rows(matrix: np.ndarray) -> np.ndarray:
    """
    Scale each row to unit length; rows that are zero or non-finite become zero.

    Rows are first divided by their largest absolute component so the norm
    neither overflows for huge values nor underflows for tiny ones.
    """
    with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
        scale = np.max(np.abs(matrix), axis=1)
        valid = np.isfinite(matrix).all(axis=1) & (scale > 0)
        scaled = np.where(valid[:, None], matrix / np.where(valid, scale, 1.0)[:, None], 0.0)
        norms = np.where(valid, np.linalg.norm(scaled, axis=1), 1.0)
        return scaled / norms[:, None]


def cosine_similarity(
    a: Optional[Sequence[float]],
    b: Optional[Sequence[float]],
) -> float:
    """
    Cosine similarity ``dot(a, b) / (|a| * |b|)``.

    Returns 0.0 instead of raising or producing NaN when either vector is
    missing, malformed, of a different length, has zero norm, or holds
    non-finite values.
    """
    va = _as_vector(a)
    vb = _as_vector(b)
    if va is None or vb is None or va.shape != vb.shape:
        return 0.0

    unit_a, unit_b = _unit_rows(np.vstack([va, vb]))
    return float(np.dot(unit_a, unit_b))


class InMemoryStore(VectorStoreInterface):
    """
    Append-only in-memory vector store.

    Passages receive gap-free, increasing ids in ``add`` call order. All
    vectors in one store share the dimension of the first vector added.

    Attributes:
        passages: Stored passages in insertion order.
        dimension: Vector dimension, fixed by the first ``add``.
    """

    __slots__ = ('passages', 'dimension', '_vectors', '_units', '_total_characters')

    def __init__(self) -> None:
        """Initialize an empty store."""
        self.passages: List[Passage] = []
        self.dimension: Optional[int] = None
        self._vectors: List[np.ndarray] = []
        self._units: Optional[np.ndarray] = None
        self._total_characters: int = 0

    def __len__(self) -> int:
        return len(self.passages)

    def add(
        self,
        text: str,
        metadata: Mapping[str, str],
        vector: Sequence[float],
    ) -> Passage:
        """
        Append a passage to the store.

        Args:
            text: Non-empty passage text.
            metadata: Metadata to attach; copied, so later changes by the
                caller are not seen by the store.
            vector: Embedding of ``text``.

        Returns:
            The stored passage.

        Raises:
            ValueError: If ``text`` is empty.
            VectorDimensionMismatch: If ``vector`` is not a non-empty 1-D
                sequence, or its length differs from the store's dimension.
        """
        if not text:
            raise ValueError("Passage text must be non-empty")

        arr = _as_vector(vector)
        if arr is None:
            raise VectorDimensionMismatch(None, len(vector) if hasattr(vector, "__len__") else 0)
        if self.dimension is not None and arr.size != self.dimension:
            raise VectorDimensionMismatch(self.dimension, arr.size)

        passage = Passage(
            id=len(self.passages),
            text=text,
            metadata=MappingProxyType(dict(metadata or {})),
            vector=tuple(float(x) for x in arr),
        )

        if self.dimension is None:
            self.dimension = int(arr.size)
        self.passages.append(passage)
        self._vectors.append(arr)
        self._units = None
        self._total_characters += len(text)

        logger.debug(f"Stored passage {passage.id} ({len(text)} chars)")
        return passage

    def _scores(self, query_vector: Optional[Sequence[float]]) -> np.ndarray:
        """Similarity of every stored passage to the query, 0.0 where undefined."""
        query = _as_vector(query_vector)
        if query is None or query.size != self.dimension:
            return np.zeros(len(self.passages), dtype=np.float64)

        if self._units is None:
            self._units = _unit_rows(np.vstack(self._vectors))

        unit_query = _unit_rows(query[np.newaxis, :])[0]
        return self._units @ unit_query

    def search(
        self,
        query_vector: Sequence[float],
        top_k: int = 3,
    ) -> List[SearchResult]:
        """
        Return the ``top_k`` passages most similar to ``query_vector``.

        Ranking uses a stable sort on descending score, so among equal
        scores the earlier-inserted passage comes first. Scores are raw
        cosine values; no clamping or rounding is applied.

        Args:
            query_vector: Query embedding.
            top_k: Maximum number of results.

        Returns:
            At most ``min(top_k, len(self))`` results. Empty when the store
            is empty or ``top_k`` is not positive.
        """
        if not self.passages or top_k <= 0:
            return []

        scores = self._scores(query_vector)
        order = np.argsort(-scores, kind="stable")[:top_k]

        return [
            SearchResult(
                passage_id=self.passages[i].id,
                text=self.passages[i].text,
                metadata=dict(self.passages[i].metadata),
                score=float(scores[i]),
            )
            for i in order
        ]

    def stats(self) -> Dict[str, int]:
        """
        Aggregate passage statistics.

        Returns:
            ``count``, ``total_characters`` and ``average_chunk_size``
            (floor of the mean length, 0 for an empty store).
        """
        count = len(self.passages)
        return {
            "count": count,
            "total_characters": self._total_characters,
            "average_chunk_size": self._total_characters // count if count else 0,
        }
