"""Similarity ranking and context assembly."""

from projectrag.retrieval.context import assemble_context, format_chunk_context
from projectrag.retrieval.similarity import cosine_similarity, dot_product, find_top_k, normalize

__all__ = [
    "assemble_context",
    "cosine_similarity",
    "dot_product",
    "find_top_k",
    "format_chunk_context",
    "normalize",
]
