"""Ingester for local folders."""

import logging
from pathlib import Path
from typing import Iterator

from projectrag.models import Document, FileMetadata
from projectrag.utils.binary import detect_binary

logger = logging.getLogger(__name__)

SKIP_DIRS = frozenset(
    {
        "__pycache__",
        "node_modules",
        "venv",
        "env",
        "dist",
        "build",
        "data",
    }
)


class FolderIngester:
    """Walk a project folder and yield its files in path order."""

    source_type = "folder"

    def can_handle(self, source: Path) -> bool:
        return source.is_dir()

    def ingest(self, source: Path) -> Iterator[Document]:
        """Yield documents from a folder recursively.

        Args:
            source: Path to the folder

        Yields:
            Document objects; binary files carry ``content=None``
        """
        for full_path in sorted(p for p in source.rglob("*") if p.is_file()):
            rel_path = full_path.relative_to(source)
            if self._should_skip(rel_path):
                continue

            try:
                raw = full_path.read_bytes()
            except OSError as exc:
                logger.warning(f"Skipping unreadable file {rel_path}: {exc}")
                continue

            is_binary = detect_binary(rel_path, raw)
            metadata = FileMetadata(
                path=rel_path.as_posix(),
                size_bytes=len(raw),
                extension=full_path.suffix.lower(),
                is_binary=is_binary,
            )
            content = None if is_binary else raw.decode("utf-8", errors="replace")
            yield Document(metadata=metadata, content=content)

    @staticmethod
    def _should_skip(path: Path) -> bool:
        """Hidden entries (dotfiles, .git, .venv, ...) and build/dependency folders."""
        return any(part.startswith(".") or part in SKIP_DIRS for part in path.parts)
