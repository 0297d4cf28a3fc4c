"""
Source formatting for retrieved passages.

Turns ranked search results into the pieces a prompt-construction layer
needs: a context block and a list of source titles.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from storage.vector_store import SearchResult

logger = logging.getLogger(__name__)

UNKNOWN_SOURCE = "Unknown"


class SourceFormatter:
    """
    Formats search results for display and prompt context.

    Attributes:
        title_key: Metadata key holding a passage's source title.
        separator: String placed between passages in the context block.
    """

    __slots__ = ('title_key', 'separator')

    def __init__(self, title_key: str = "title", separator: Optional[str] = None) -> None:
        self.title_key = title_key
        self.separator = "\n\n" if separator is None else separator

    def source_title(self, result: SearchResult) -> str:
        """Title of the result's source document, or "Unknown"."""
        return result.metadata.get(self.title_key) or UNKNOWN_SOURCE

    def build_context(self, results: Sequence[SearchResult]) -> str:
        """
        Join passage texts into one context block, best match first.

        Args:
            results: Ranked search results.

        Returns:
            Passage texts joined by ``self.separator``; empty if no results.
        """
        return self.separator.join(r.text for r in results)

    def list_sources(self, results: Sequence[SearchResult]) -> List[str]:
        """Source titles in rank order, one per result."""
        sources = [self.source_title(r) for r in results]
        logger.debug(f"Collected {len(sources)} sources")
        return sources

    def format_result_line(self, result: SearchResult, index: int) -> str:
        """
        Format one result as a numbered line.

        Args:
            result: Search result.
            index: 1-based rank for display.

        Returns:
            A line such as ``"1. [similarity: 0.994] RAG systems"``.
        """
        return f"{index}. [similarity: {result.score:.3f}] {self.source_title(result)}"
