"""
Retrieval demo application.
Builds a small knowledge base and shows ranked passages for sample questions.

Run with ``python app.py`` for the scripted demo or ``python app.py -i`` for
an interactive prompt.
"""

import logging
import sys

# Setup must happen before other imports
from monitoring.logger import setup_logging

setup_logging()

from llama_index.core.schema import Document

from citation import SourceFormatter
from config import settings
from core import QueryEmbeddingFailed
from monitoring import start_metrics_server
from retrieval import RetrievalService, get_retrieval_service
from utils import sanitize_text, validate_query

logger = logging.getLogger(__name__)

SAMPLE_DOCUMENTS = [
    Document(
        text=(
            "GPT (Generative Pre-trained Transformer) is a family of large language models developed by OpenAI. "
            "GPT-3 has 175 billion parameters and can perform a wide range of natural language tasks. "
            "GPT-4 is multimodal and can process images together with text. "
            "These models are strong few-shot learners and can be steered through prompt engineering."
        ),
        metadata={"title": "OpenAI GPT models"},
    ),
    Document(
        text=(
            "RAG (Retrieval-Augmented Generation) combines search with generation. "
            "Relevant documents are retrieved first and then supplied as context to produce a more accurate answer. "
            "RAG reduces hallucination and lets answers reflect up-to-date information. "
            "Documents are embedded into a vector database and retrieved by semantic similarity."
        ),
        metadata={"title": "RAG systems"},
    ),
    Document(
        text=(
            "Prompt engineering is the craft of writing effective instructions for an AI model. "
            "A good prompt is clear and specific, and states the desired output format. "
            "Providing few-shot examples can greatly improve model performance. "
            "Chain-of-Thought (CoT) prompting is effective for complex reasoning tasks."
        ),
        metadata={"title": "Prompt engineering"},
    ),
    Document(
        text=(
            "An embedding turns text into an array of numbers in a high-dimensional vector space. "
            "Semantically similar texts are placed close together in that space. "
            "Cosine similarity measures the angle between two vectors to compute their similarity. "
            "Vector search understands meaning better than traditional keyword search."
        ),
        metadata={"title": "Embeddings and vector search"},
    ),
    Document(
        text=(
            "Fine-tuning continues training a pre-trained model for a specific task. "
            "LoRA (Low-Rank Adaptation) is an efficient fine-tuning method that trains only a few parameters. "
            "RLHF (Reinforcement Learning from Human Feedback) learns from human preference signals. "
            "Fine-tuning produces domain-specific models."
        ),
        metadata={"title": "LLM fine-tuning"},
    ),
]

SAMPLE_QUESTIONS = [
    "What are the features of GPT-4?",
    "What are the advantages of a RAG system?",
    "What is few-shot prompting?",
    "What is LoRA and why is it used?",
    "Explain quantum computers.",
]


def build_knowledge_base(service: RetrievalService) -> None:
    """Ingest the sample documents into ``service``."""
    print("Building knowledge base...\n")

    for document in SAMPLE_DOCUMENTS:
        passages = service.ingest(document)
        print(f"  + \"{document.metadata['title']}\" ({len(passages)} chunks)")

    stats = service.stats()
    print(
        f"\n{stats['count']} chunks total, "
        f"average {stats['average_chunk_size']} characters\n"
    )


def show_results(service: RetrievalService, formatter: SourceFormatter, question: str, k: int) -> None:
    """Run one query and print the ranked sources and assembled context."""
    print(f"\nQuestion: {question}")

    try:
        results = service.query(question, k)
    except QueryEmbeddingFailed as e:
        logger.error(f"Query failed: {e}")
        print("  Could not embed the question; try again later.")
        return

    if not results:
        print("  No related passages found.")
        return

    print("Related passages:")
    for i, result in enumerate(results, 1):
        print(f"  {formatter.format_result_line(result, i)}")

    print(f"\nContext:\n{formatter.build_context(results)}")
    print(f"\nSources: {', '.join(formatter.list_sources(results))}")


def run_demo(service: RetrievalService, formatter: SourceFormatter) -> None:
    """Scripted caller: ask every sample question once."""
    for question in SAMPLE_QUESTIONS:
        show_results(service, formatter, question, service.default_k)
        print("\n" + "=" * 50)


def run_interactive(service: RetrievalService, formatter: SourceFormatter) -> None:
    """Interactive caller: read questions until EOF or an empty line."""
    print("Ask a question (empty line to quit).")

    while True:
        try:
            raw = input("> ")
        except EOFError:
            break

        if not raw.strip():
            break

        question = sanitize_text(raw, max_length=5000)
        is_valid, error = validate_query(question)
        if not is_valid:
            print(f"  {error}")
            continue

        show_results(service, formatter, question, k=2)


def main(argv=None):
    """Main application."""
    argv = sys.argv[1:] if argv is None else argv

    if settings.ENABLE_METRICS:
        start_metrics_server()

    service = get_retrieval_service()
    formatter = SourceFormatter()

    build_knowledge_base(service)

    if "-i" in argv or "--interactive" in argv:
        run_interactive(service, formatter)
    else:
        run_demo(service, formatter)


if __name__ == "__main__":
    main()
