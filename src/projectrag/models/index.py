"""Persisted index models.

A :class:`ProjectIndex` keeps each chunk together with its embedding in a
single :class:`IndexEntry`, so the chunk list and the vector list can never
drift apart. ``chunks`` and ``embeddings`` are derived views kept for
callers that want them separately.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from projectrag.models.document import Chunk

Vector = list[float]


@dataclass
class IndexedFile:
    """Per-file bookkeeping used for change detection."""

    id: str
    name: str
    size: int
    chunk_count: int
    indexed_at: str
    content_hash: str


@dataclass
class IndexStats:
    """Derived statistics, recomputed on every save."""

    total_chunks: int = 0
    total_files: int = 0
    total_tokens: int = 0
    avg_chunk_size: int = 0


@dataclass
class IndexEntry:
    """A chunk and the vector computed for it."""

    chunk: Chunk
    embedding: Vector


@dataclass
class ProjectIndex:
    """The persisted aggregate for one project."""

    project_id: str
    version: int
    embedding_model: str
    dimension: int
    updated_at: str
    entries: list[IndexEntry] = field(default_factory=list)
    files: list[IndexedFile] = field(default_factory=list)
    stats: IndexStats = field(default_factory=IndexStats)

    @property
    def chunks(self) -> list[Chunk]:
        return [entry.chunk for entry in self.entries]

    @property
    def embeddings(self) -> list[Vector]:
        return [entry.embedding for entry in self.entries]

    def __len__(self) -> int:
        return len(self.entries)

    def get_file(self, file_id: str) -> Optional[IndexedFile]:
        """Return the file entry for ``file_id`` if it is indexed."""
        for indexed in self.files:
            if indexed.id == file_id:
                return indexed
        return None

    def extend(self, pairs: Iterable[tuple[Chunk, Vector]]) -> None:
        """Append (chunk, vector) pairs in order."""
        self.entries.extend(IndexEntry(chunk=c, embedding=list(v)) for c, v in pairs)

    def remove_file(self, file_id: str) -> int:
        """Drop every entry and the file record for ``file_id``.

        Remaining entries keep their relative order. Returns the number of
        removed chunks.
        """
        before = len(self.entries)
        self.entries = [e for e in self.entries if e.chunk.file_id != file_id]
        self.files = [f for f in self.files if f.id != file_id]
        return before - len(self.entries)

    def compute_stats(self) -> IndexStats:
        total_tokens = sum(entry.chunk.token_count for entry in self.entries)
        total_chunks = len(self.entries)
        # Half-up rounding, not banker's rounding.
        avg = math.floor(total_tokens / total_chunks + 0.5) if total_chunks else 0
        return IndexStats(
            total_chunks=total_chunks,
            total_files=len(self.files),
            total_tokens=total_tokens,
            avg_chunk_size=avg,
        )


class IndexState(str, Enum):
    """Why an index is (or is not) loadable."""

    MISSING = "missing"
    READY = "ready"
    INCOMPATIBLE = "incompatible"
    CORRUPT = "corrupt"


@dataclass(frozen=True)
class IndexInfo:
    """Summary of a project's index for status endpoints."""

    exists: bool
    chunk_count: int = 0
    file_count: int = 0
    last_updated: Optional[str] = None
    needs_rebuild: bool = False
