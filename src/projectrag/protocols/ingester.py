"""Protocol for input source handlers."""

from pathlib import Path
from typing import Iterator, Protocol, runtime_checkable

from projectrag.models import Document


@runtime_checkable
class Ingester(Protocol):
    """Turns an input location into documents the service can index.

    Uses structural subtyping - no inheritance required.
    """

    @property
    def source_type(self) -> str:
        """Identifier for this source type (e.g. 'folder')."""
        ...

    def can_handle(self, source: Path) -> bool:
        ...

    def ingest(self, source: Path) -> Iterator[Document]:
        """Yield documents; binary files come back with ``content=None``."""
        ...
