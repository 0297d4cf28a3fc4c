"""Retrieval service package."""

from retrieval.service import RetrievalService, get_retrieval_service

__all__ = [
    "RetrievalService",
    "get_retrieval_service",
]
