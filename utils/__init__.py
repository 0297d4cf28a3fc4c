"""
Utilities package.

Provides helper functions for input validation and sanitization.
"""

from utils.validators import (
    sanitize_text,
    validate_query,
    validate_top_k,
)

__all__ = [
    "validate_query",
    "validate_top_k",
    "sanitize_text",
]
