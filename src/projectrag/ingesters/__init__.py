"""Input source handlers (ingesters) for projectrag."""

from pathlib import Path
from typing import Iterator, Optional

from projectrag.ingesters.folder_ingester import FolderIngester
from projectrag.models import SourceFile
from projectrag.protocols import Ingester

# Registry of available ingesters
_INGESTERS: list[Ingester] = [
    FolderIngester(),
]


def get_ingester(source: Path | str) -> Optional[Ingester]:
    """Find an ingester that can handle the given source, or None."""
    source_path = Path(source)
    for ingester in _INGESTERS:
        if ingester.can_handle(source_path):
            return ingester
    return None


def register_ingester(ingester: Ingester) -> None:
    """Register a custom ingester (for plugins/extensions)."""
    _INGESTERS.append(ingester)


def iter_source_files(source: Path | str) -> Iterator[SourceFile]:
    """Yield indexable text files from ``source``, keyed by relative path.

    Raises:
        ValueError: no registered ingester handles the source
    """
    source_path = Path(source)
    ingester = get_ingester(source_path)
    if ingester is None:
        raise ValueError(f"Cannot process: {source}")
    for doc in ingester.ingest(source_path):
        if doc.content is None:
            continue
        yield SourceFile(id=doc.metadata.path, name=doc.metadata.path, content=doc.content)


__all__ = ["FolderIngester", "get_ingester", "iter_source_files", "register_ingester"]
