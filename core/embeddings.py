"""
Embedding provider interface and model management.

The retrieval core only sees ``EmbeddingProvider.embed``. Concrete models
come from llama-index and are loaded once per process by ``EmbeddingManager``.
"""

from __future__ import annotations

import gc
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, TYPE_CHECKING

from config import settings
from core.exceptions import EmbeddingUnavailable

if TYPE_CHECKING:
    from llama_index.core.embeddings import BaseEmbedding

logger = logging.getLogger(__name__)


class EmbeddingProvider(ABC):
    """Contract for embedding providers."""

    @abstractmethod
    def embed(self, text: str) -> List[float]:
        """
        Convert text to a fixed-length vector.

        Raises:
            EmbeddingUnavailable: If no vector can be produced.
        """
        raise NotImplementedError


class LlamaIndexEmbeddingProvider(EmbeddingProvider):
    """
    Adapts a llama-index embedding model to ``EmbeddingProvider``.

    Any backend failure is reported as ``EmbeddingUnavailable``. Nothing is
    retried here; retry policy belongs to the model client or the caller.

    Attributes:
        model: The wrapped llama-index embedding model.
    """

    __slots__ = ('model',)

    def __init__(self, model: BaseEmbedding) -> None:
        self.model = model

    def embed(self, text: str) -> List[float]:
        try:
            vector = self.model.get_text_embedding(text)
        except Exception as e:
            logger.error(f"Embedding request failed: {e}")
            raise EmbeddingUnavailable(f"Embedding request failed: {e}", text=text) from e

        if not vector:
            raise EmbeddingUnavailable("Embedding backend returned an empty vector", text=text)

        return [float(x) for x in vector]


class EmbeddingManager:
    """
    Manages embedding model lifecycle with singleton pattern.

    The embedding model is loaded once and reused across requests
    to avoid repeated initialization overhead.

    Attributes:
        _instance: Singleton embedding model instance.
    """

    _instance: Optional[BaseEmbedding] = None

    @classmethod
    def get_embedding_model(cls, force_reload: bool = False) -> BaseEmbedding:
        """
        Get or create the embedding model (singleton).

        Args:
            force_reload: Force reload even if model is already loaded.

        Returns:
            The configured llama-index embedding model.

        Raises:
            RuntimeError: If model fails to load.
        """
        if cls._instance is None or force_reload:
            logger.info(f"Loading embedding backend: {settings.EMBEDDING_BACKEND}")

            try:
                cls._instance = cls._load_model()
                logger.info(f"Embedding model loaded ({cls._instance.model_name})")
            except Exception as e:
                logger.error(f"Failed to load embedding model: {e}")
                raise RuntimeError(f"Embedding model initialization failed: {e}") from e

        return cls._instance

    @staticmethod
    def _load_model() -> BaseEmbedding:
        if settings.EMBEDDING_BACKEND == "huggingface":
            from llama_index.embeddings.huggingface import HuggingFaceEmbedding

            return HuggingFaceEmbedding(
                model_name=settings.HF_EMBEDDING_MODEL,
                device="cpu",
                cache_folder=str(settings.EMBEDDINGS_DIR),
            )

        from llama_index.embeddings.openai import OpenAIEmbedding

        return OpenAIEmbedding(
            model=settings.EMBEDDING_MODEL,
            api_key=settings.OPENAI_API_KEY,
        )

    @classmethod
    def unload_model(cls) -> None:
        """Unload the embedding model to free memory."""
        if cls._instance is not None:
            logger.info("Unloading embedding model")
            cls._instance = None
            gc.collect()


def get_embedding_model() -> BaseEmbedding:
    """
    Convenience function to get the embedding model.

    Returns:
        The singleton llama-index embedding model.
    """
    return EmbeddingManager.get_embedding_model()


def get_embedding_provider() -> EmbeddingProvider:
    """Return a provider backed by the configured embedding model."""
    return LlamaIndexEmbeddingProvider(get_embedding_model())
