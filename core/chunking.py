"""
Sentence-respecting chunking.

Splits document text into bounded-size passages. Sentences are never cut:
a chunk closes at a sentence boundary, and a single sentence longer than
the bound becomes a chunk of its own.
"""

from __future__ import annotations

import re
from typing import List, Optional

from config import settings
from core.exceptions import InvalidChunkLength

# Sentence terminator followed by whitespace. The terminator stays with its sentence.
_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")


def _check_max_length(max_length: object) -> int:
    if isinstance(max_length, bool) or not isinstance(max_length, int) or max_length <= 0:
        raise InvalidChunkLength(max_length)
    return max_length


def split_sentences(text: str) -> List[str]:
    """Split text into sentences, preserving order and terminal punctuation."""
    stripped = text.strip()
    if not stripped:
        return []
    return [s for s in (part.strip() for part in _SENTENCE_BOUNDARY.split(stripped)) if s]


def split_into_chunks(text: str, max_length: int) -> List[str]:
    """
    Greedily pack sentences into chunks of at most ``max_length`` characters.

    Sentences inside a chunk are joined by a single space. When adding the
    next sentence would push a non-empty running chunk past ``max_length``,
    the running chunk is emitted and a new one starts with that sentence.

    Args:
        text: Document text.
        max_length: Positive character bound per chunk.

    Returns:
        Non-empty chunks in document order. Empty or whitespace-only input
        yields an empty list.

    Raises:
        InvalidChunkLength: If ``max_length`` is not a positive integer.
    """
    max_length = _check_max_length(max_length)

    chunks: List[str] = []
    current = ""

    for sentence in split_sentences(text):
        if current and len(current) + 1 + len(sentence) > max_length:
            chunks.append(current.strip())
            current = sentence
        else:
            current = f"{current} {sentence}" if current else sentence

    if current.strip():
        chunks.append(current.strip())

    return chunks


class SentenceChunker:
    """
    Sentence-aware chunker with a fixed character bound.

    Attributes:
        max_length: Soft upper bound on chunk length in characters.
    """

    __slots__ = ('max_length',)

    def __init__(self, max_length: Optional[int] = None) -> None:
        """
        Initialize the chunker.

        Args:
            max_length: Character bound per chunk (default from settings).

        Raises:
            InvalidChunkLength: If ``max_length`` is not a positive integer.
        """
        if max_length is None:
            max_length = settings.MAX_CHUNK_LENGTH
        self.max_length: int = _check_max_length(max_length)

    def split(self, text: str) -> List[str]:
        """Split ``text`` into chunks bounded by ``self.max_length``."""
        return split_into_chunks(text, self.max_length)

    def get_stats(self, text: str) -> dict:
        """Chunk counts and sizes for ``text``, without indexing anything."""
        chunks = self.split(text)
        total = sum(len(c) for c in chunks)

        return {
            "total_chunks": len(chunks),
            "total_characters": total,
            "max_chunk_length": self.max_length,
            "oversized_chunks": sum(1 for c in chunks if len(c) > self.max_length),
        }


def get_chunker(max_length: Optional[int] = None) -> SentenceChunker:
    """
    Factory function to create a chunker.

    Args:
        max_length: Character bound. If None, uses settings.MAX_CHUNK_LENGTH.

    Returns:
        Configured chunker instance.
    """
    return SentenceChunker(max_length=max_length)
