"""Data models for projectrag."""

from projectrag.models.document import (
    Chunk,
    ChunkMetadata,
    Document,
    FileMetadata,
    SourceFile,
)
from projectrag.models.index import (
    IndexedFile,
    IndexEntry,
    IndexInfo,
    IndexState,
    IndexStats,
    ProjectIndex,
    Vector,
)
from projectrag.models.search import RAGContext, SearchOptions, SearchResult
from projectrag.models.status import FileIndexState, IndexingStatus, ProjectIndexStatus

__all__ = [
    "Chunk",
    "ChunkMetadata",
    "Document",
    "FileMetadata",
    "SourceFile",
    "IndexedFile",
    "IndexEntry",
    "IndexInfo",
    "IndexState",
    "IndexStats",
    "ProjectIndex",
    "Vector",
    "RAGContext",
    "SearchOptions",
    "SearchResult",
    "FileIndexState",
    "IndexingStatus",
    "ProjectIndexStatus",
]
