"""Utility functions for projectrag."""

from projectrag.utils.binary import detect_binary, is_binary_content, is_binary_extension
from projectrag.utils.text import CHARS_PER_TOKEN, content_hash, estimate_tokens, overlap_tail

__all__ = [
    "CHARS_PER_TOKEN",
    "content_hash",
    "detect_binary",
    "estimate_tokens",
    "is_binary_content",
    "is_binary_extension",
    "overlap_tail",
]
