"""
Monitoring package.

Provides observability tools:
- Prometheus metrics for ingest and query
- Structured JSON logging
"""

from monitoring.logger import ContextFormatter, JsonFormatter, setup_logging
from monitoring.metrics import (
    documents_ingested,
    embedding_failures,
    error_counter,
    passages_indexed,
    query_counter,
    query_latency,
    retrieval_docs_returned,
    start_metrics_server,
    track_query_metrics,
)

__all__ = [
    # Metrics
    "track_query_metrics",
    "start_metrics_server",
    "documents_ingested",
    "passages_indexed",
    "embedding_failures",
    "query_counter",
    "query_latency",
    "retrieval_docs_returned",
    "error_counter",
    # Logging
    "setup_logging",
    "JsonFormatter",
    "ContextFormatter",
]
