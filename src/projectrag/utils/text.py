"""Text helpers shared by the chunkers, store and service."""

import hashlib
import math

# Approximate characters per token (conservative estimate)
CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    """Estimate the token count of ``text`` as ``ceil(len / 4)``."""
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def content_hash(content: str) -> str:
    """SHA-256 hex digest of the file content, used for change detection."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def overlap_tail(text: str, max_chars: int) -> str:
    """Return up to ``max_chars`` characters from the end of ``text``.

    If a space falls in the first half of that slice, the slice is trimmed
    to start right after it so the overlap does not begin mid-word.
    """
    if max_chars <= 0:
        return ""
    if len(text) <= max_chars:
        return text

    tail = text[-max_chars:]
    word_break = tail.find(" ")
    if 0 < word_break < max_chars / 2:
        return tail[word_break + 1 :]
    return tail
