"""Protocol for text chunking strategies."""

from typing import Protocol, runtime_checkable

from projectrag.models import Chunk


@runtime_checkable
class ChunkingStrategy(Protocol):
    """Protocol for text chunking strategies.

    Different strategies are used for different content types (code,
    markup, plain text); the dispatcher asks each one in turn whether it
    handles a given file name.
    """

    def can_handle(self, file_name: str) -> bool:
        """Check if this strategy applies to the file."""
        ...

    def chunk(self, text: str, file_id: str, file_name: str) -> list[Chunk]:
        """Split text into finalized chunks (index, total and id set)."""
        ...
