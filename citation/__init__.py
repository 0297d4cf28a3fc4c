"""Citation package: formatting retrieved passages for callers."""

from citation.extractor import UNKNOWN_SOURCE, SourceFormatter

__all__ = [
    "SourceFormatter",
    "UNKNOWN_SOURCE",
]
