"""Prometheus metrics collection."""

import logging
from prometheus_client import Counter, Histogram, Gauge, start_http_server
from functools import wraps
import time
from config import settings

logger = logging.getLogger(__name__)

# ============================================================================
# Ingest Metrics
# ============================================================================

documents_ingested = Counter(
    'rag_documents_ingested_total',
    'Total number of documents passed to ingest'
)

passages_indexed = Gauge(
    'rag_passages_indexed',
    'Number of passages held by the similarity index'
)

embedding_failures = Counter(
    'rag_embedding_failures_total',
    'Embedding calls that produced no vector',
    ['stage']
)

# ============================================================================
# Query Metrics
# ============================================================================

query_counter = Counter(
    'rag_queries_total',
    'Total number of queries processed'
)

query_latency = Histogram(
    'rag_query_latency_seconds',
    'Query latency (query embedding + similarity search)',
    buckets=(0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0, 10.0)
)

retrieval_docs_returned = Histogram(
    'rag_retrieval_docs_returned',
    'Number of passages returned per query',
    buckets=(1, 3, 5, 10, 20, 50)
)

# ============================================================================
# System-Level Metrics
# ============================================================================

error_counter = Counter(
    'rag_errors_total',
    'Total number of errors',
    ['type']
)


def track_query_metrics(func):
    """Decorator to track query metrics."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        query_counter.inc()
        start_time = time.time()

        try:
            result = func(*args, **kwargs)
            query_latency.observe(time.time() - start_time)

            if isinstance(result, list):
                retrieval_docs_returned.observe(len(result))

            return result
        except Exception as e:
            error_counter.labels(type=type(e).__name__).inc()
            raise

    return wrapper


def start_metrics_server(port: int = None):
    """Start Prometheus metrics server."""
    port = port or settings.METRICS_PORT

    try:
        start_http_server(port)
        logger.info(f"Metrics server started on port {port}")
    except OSError as e:
        logger.warning(f"Failed to start metrics server: {e}")
