"""Search and context models."""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from projectrag.models.document import Chunk


@dataclass
class SearchOptions:
    """Per-call overrides for :meth:`ProjectRAGService.search`.

    ``None`` means "use the configured default". An empty ``file_ids``
    sequence is treated like ``None`` (no filter).
    """

    top_k: Optional[int] = None
    min_score: Optional[float] = None
    file_ids: Optional[Sequence[str]] = None


@dataclass
class SearchResult:
    """A ranked chunk with its cosine similarity score."""

    chunk: Chunk
    score: float
    rank: int


@dataclass
class RAGContext:
    """Context string assembled for an LLM prompt."""

    query: str
    context: str = ""
    sources: list[SearchResult] = field(default_factory=list)
    token_count: int = 0
