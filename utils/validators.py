"""
Input validation utilities.
Validates caller inputs at the retrieval boundary.
"""

import logging
import numbers
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


def validate_query(query: str, min_length: int = 1, max_length: int = 5000) -> Tuple[bool, Optional[str]]:
    """
    Validate user query.

    Args:
        query: User query string
        min_length: Minimum query length
        max_length: Maximum query length

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not query or not query.strip():
        return False, "Query cannot be empty"

    if len(query) < min_length:
        return False, f"Query too short (minimum {min_length} characters)"

    if len(query) > max_length:
        return False, f"Query too long (maximum {max_length} characters)"

    return True, None


def validate_top_k(top_k: int, min_k: int = 1, max_k: Optional[int] = None) -> Tuple[bool, Optional[str]]:
    """
    Validate top_k parameter.

    Args:
        top_k: Top-K value to validate
        min_k: Minimum allowed value
        max_k: Maximum allowed value, or None for no upper bound

    Returns:
        Tuple of (is_valid, error_message)
    """
    if isinstance(top_k, bool) or not isinstance(top_k, numbers.Integral):
        return False, f"Top-K must be an integer (got {type(top_k).__name__})"

    if top_k < min_k:
        return False, f"Top-K too small (minimum {min_k})"

    if max_k is not None and top_k > max_k:
        return False, f"Top-K too large (maximum {max_k})"

    return True, None


def sanitize_text(text: str, max_length: Optional[int] = None) -> str:
    """
    Sanitize text input.

    Args:
        text: Text to sanitize
        max_length: Maximum length (truncate if longer)

    Returns:
        Sanitized text
    """
    # Remove null bytes
    text = text.replace('\x00', '')

    # Normalize whitespace
    text = ' '.join(text.split())

    if max_length and len(text) > max_length:
        text = text[:max_length] + '...'

    return text
