"""Core data models for source documents and chunks."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class FileMetadata:
    """Metadata for any file picked up by an ingester (text or binary)."""

    path: str
    size_bytes: int
    extension: str
    is_binary: bool


@dataclass
class Document:
    """A document extracted from an input source."""

    metadata: FileMetadata
    content: Optional[str] = None  # None for binary files


@dataclass(frozen=True)
class SourceFile:
    """A file handed to the service for indexing."""

    id: str
    name: str
    content: str


@dataclass
class ChunkMetadata:
    """Optional metadata extracted while chunking."""

    language: Optional[str] = None
    section: Optional[str] = None
    line_start: Optional[int] = None
    line_end: Optional[int] = None


@dataclass
class Chunk:
    """A bounded slice of a source file, the unit of embedding and retrieval."""

    id: str
    file_id: str
    file_name: str
    content: str
    start_offset: int
    end_offset: int
    chunk_index: int
    total_chunks: int
    token_count: int
    metadata: Optional[ChunkMetadata] = field(default=None)
