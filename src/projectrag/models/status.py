"""Transient indexing progress models (kept in memory only)."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class FileIndexState(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass
class IndexingStatus:
    """Progress of a single file through indexing."""

    file_id: str
    file_name: str
    status: FileIndexState = FileIndexState.PENDING
    progress: int = 0
    error: Optional[str] = None
    chunks_created: Optional[int] = None

    def advance(self, progress: int) -> None:
        """Move progress forward; it never goes backwards."""
        self.progress = max(self.progress, min(100, progress))

    def complete(self, chunks_created: Optional[int] = None) -> None:
        self.status = FileIndexState.COMPLETED
        self.chunks_created = chunks_created
        self.advance(100)

    def fail(self, message: str) -> None:
        self.status = FileIndexState.ERROR
        self.error = message

    @property
    def is_terminal(self) -> bool:
        return self.status in (FileIndexState.COMPLETED, FileIndexState.ERROR)


@dataclass
class ProjectIndexStatus:
    """Aggregate progress for an ``index_files`` run."""

    project_id: str
    is_indexing: bool = False
    files: list[IndexingStatus] = field(default_factory=list)
    last_indexed: Optional[str] = None
    total_chunks: int = 0
    total_files: int = 0
