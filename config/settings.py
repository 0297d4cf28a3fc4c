"""
Configuration management with validation.

Centralized retrieval settings loaded from environment variables.
Uses Pydantic for validation and type safety.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Retrieval settings with validation.

    All settings can be overridden via environment variables or a `.env` file.
    Components only read these as defaults; explicit constructor arguments
    always win.
    """

    # =========================================================================
    # CHUNKING
    # =========================================================================
    MAX_CHUNK_LENGTH: int = Field(
        default=500, ge=1,
        description="Soft upper bound on chunk length in characters",
    )

    # =========================================================================
    # RETRIEVAL
    # =========================================================================
    SIMILARITY_TOP_K: int = Field(
        default=3, ge=1,
        description="Default number of passages returned per query",
    )

    # =========================================================================
    # EMBEDDINGS
    # =========================================================================
    EMBEDDING_BACKEND: Literal["openai", "huggingface"] = Field(
        default="openai",
        description="Embedding backend: 'openai' or 'huggingface'",
    )
    EMBEDDING_MODEL: str = Field(
        default="text-embedding-ada-002",
        description="OpenAI embedding model name",
    )
    HF_EMBEDDING_MODEL: str = Field(
        default="sentence-transformers/all-MiniLM-L6-v2",
        description="HuggingFace embedding model identifier",
    )
    EMBEDDINGS_DIR: Path = Field(
        default=Path("embeddings"),
        description="Cache directory for HuggingFace embedding models",
    )
    OPENAI_API_KEY: Optional[str] = Field(
        default=None,
        description="API key for the OpenAI embedding backend",
    )

    # =========================================================================
    # MONITORING
    # =========================================================================
    ENABLE_METRICS: bool = Field(
        default=False,
        description="Enable Prometheus metrics server",
    )
    METRICS_PORT: int = Field(
        default=8001, ge=1024, le=65535,
        description="Port for metrics endpoint",
    )
    LOG_FORMAT: Literal["json", "text"] = Field(
        default="text",
        description="Log output format",
    )
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global settings instance (singleton)
settings = Settings()
