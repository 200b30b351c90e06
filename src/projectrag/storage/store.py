"""JSON-file storage for per-project retrieval indexes."""

import json
import logging
import os
import re
import shutil
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

from projectrag.exceptions import IndexIntegrityError
from projectrag.models import Chunk, IndexedFile, IndexInfo, IndexState, ProjectIndex, Vector
from projectrag.storage.schema import (
    FILES_DIRNAME,
    INDEX_FILENAME,
    INDEX_VERSION,
    PROJECTS_DIRNAME,
    index_from_dict,
    index_to_dict,
)

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9._-]")
_RESERVED_NAMES = frozenset({"", ".", ".."})


def sanitize_component(name: str) -> str:
    """Replace everything but letters, digits, ``.``, ``_`` and ``-``."""
    return _UNSAFE_CHARS.sub("_", name)


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ProjectIndexStore:
    """One JSON index plus a raw-file folder per project.

    The store assumes a single writer per project: add/remove are
    load-modify-save cycles with no locking.
    """

    def __init__(self, data_dir: Path | str = "./data"):
        self.data_dir = Path(data_dir).resolve()
        self.projects_dir = self.data_dir / PROJECTS_DIRNAME
        self.projects_dir.mkdir(parents=True, exist_ok=True)

    # Paths

    def project_dir(self, project_id: str) -> Path:
        """Directory for one project, always a direct child of ``projects_dir``.

        Raises:
            ValueError: the id sanitizes to an empty or relative component
        """
        name = sanitize_component(project_id)
        if name in _RESERVED_NAMES:
            raise ValueError(f"Invalid project id: {project_id!r}")
        return self.projects_dir / name

    def files_dir(self, project_id: str) -> Path:
        return self.project_dir(project_id) / FILES_DIRNAME

    def index_path(self, project_id: str) -> Path:
        return self.project_dir(project_id) / INDEX_FILENAME

    def ensure_project_dir(self, project_id: str) -> None:
        self.files_dir(project_id).mkdir(parents=True, exist_ok=True)

    # Index operations

    def _read(self, project_id: str) -> tuple[IndexState, Optional[ProjectIndex]]:
        path = self.index_path(project_id)
        if not path.exists():
            return IndexState.MISSING, None

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error(f"Failed to load index for {project_id}: {exc}")
            return IndexState.CORRUPT, None

        if not isinstance(data, dict):
            logger.error(f"Failed to load index for {project_id}: not a JSON object")
            return IndexState.CORRUPT, None

        if data.get("version") != INDEX_VERSION:
            logger.warning(
                f"Index version mismatch for {project_id} "
                f"(found {data.get('version')!r}, expected {INDEX_VERSION}); needs rebuild"
            )
            return IndexState.INCOMPATIBLE, None

        try:
            return IndexState.READY, index_from_dict(data)
        except (KeyError, TypeError, ValueError, IndexIntegrityError) as exc:
            logger.error(f"Corrupt index for {project_id}: {exc}")
            return IndexState.CORRUPT, None

    def index_state(self, project_id: str) -> IndexState:
        """Report whether the index is loadable, and if not, why."""
        state, _ = self._read(project_id)
        return state

    def load_index(self, project_id: str) -> Optional[ProjectIndex]:
        """Load the index, or ``None`` if it is missing, outdated or unreadable."""
        _, index = self._read(project_id)
        return index

    def save_index(self, index: ProjectIndex) -> None:
        """Refresh stats and timestamp, then atomically replace the index file."""
        self.ensure_project_dir(index.project_id)
        target = self.index_path(index.project_id)

        index.updated_at = utc_now()
        index.stats = index.compute_stats()

        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=target.parent,
            prefix=".rag-index-",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            try:
                json.dump(index_to_dict(index), f, indent=2)
            except BaseException:
                f.close()
                tmp_path.unlink(missing_ok=True)
                raise
        try:
            os.replace(tmp_path, target)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

    def create_index(self, project_id: str, embedding_model: str, dimension: int) -> ProjectIndex:
        """Build an empty index in memory. Nothing is written."""
        return ProjectIndex(
            project_id=project_id,
            version=INDEX_VERSION,
            embedding_model=embedding_model,
            dimension=dimension,
            updated_at=utc_now(),
        )

    def delete_index(self, project_id: str) -> bool:
        """Remove the whole project directory (index and stored files)."""
        try:
            project_dir = self.project_dir(project_id)
        except ValueError as exc:
            logger.warning(str(exc))
            return False
        if not project_dir.exists():
            return False
        try:
            shutil.rmtree(project_dir)
        except OSError as exc:
            logger.error(f"Failed to delete index for {project_id}: {exc}")
            return False
        logger.info(f"Deleted index for {project_id}")
        return True

    # Chunk operations

    def add_file_chunks(
        self,
        project_id: str,
        file: IndexedFile,
        chunks: Sequence[Chunk],
        embeddings: Sequence[Vector],
        *,
        embedding_model: Optional[str] = None,
        dimension: Optional[int] = None,
    ) -> ProjectIndex:
        """Replace whatever the index holds for ``file.id`` with the new chunks."""
        if len(chunks) != len(embeddings):
            raise IndexIntegrityError(
                f"{file.name}: {len(chunks)} chunks but {len(embeddings)} embeddings"
            )

        index = self.load_index(project_id)
        if index is None:
            if dimension is None:
                dimension = len(embeddings[0]) if embeddings else 0
            index = self.create_index(project_id, embedding_model or "", dimension)
            logger.info(f"Created index for {project_id}")

        removed = index.remove_file(file.id)
        if removed:
            logger.debug(f"Replaced {removed} stale chunks of {file.name}")

        index.files.append(file)
        index.extend(zip(chunks, embeddings))
        self.save_index(index)
        return index

    def remove_file_chunks(self, project_id: str, file_id: str) -> int:
        """Drop a file's chunks; returns how many were removed."""
        index = self.load_index(project_id)
        if index is None:
            return 0
        if index.get_file(file_id) is None and not any(e.chunk.file_id == file_id for e in index.entries):
            return 0
        removed = index.remove_file(file_id)
        self.save_index(index)
        return removed

    def needs_reindex(self, project_id: str, file_id: str, content_hash: str) -> bool:
        index = self.load_index(project_id)
        if index is None:
            return True
        indexed = index.get_file(file_id)
        if indexed is None:
            return True
        return indexed.content_hash != content_hash

    def get_index_status(self, project_id: str) -> IndexInfo:
        state, index = self._read(project_id)
        if index is None:
            return IndexInfo(
                exists=False,
                needs_rebuild=state in (IndexState.INCOMPATIBLE, IndexState.CORRUPT),
            )
        return IndexInfo(
            exists=True,
            chunk_count=len(index.entries),
            file_count=len(index.files),
            last_updated=index.updated_at,
        )

    # Raw file storage

    def _stored_file_path(self, project_id: str, file_id: str, file_name: str) -> Path:
        return self.files_dir(project_id) / sanitize_component(f"{file_id}_{file_name}")

    def save_file(self, project_id: str, file_id: str, file_name: str, content: str | bytes) -> Path:
        self.ensure_project_dir(project_id)
        path = self._stored_file_path(project_id, file_id, file_name)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    def load_file(self, project_id: str, file_id: str, file_name: str) -> Optional[str]:
        path = self._stored_file_path(project_id, file_id, file_name)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None

    def delete_file(self, project_id: str, file_id: str, file_name: str) -> bool:
        path = self._stored_file_path(project_id, file_id, file_name)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError:
            return False
        return True

    def list_files(self, project_id: str) -> list[str]:
        files_dir = self.files_dir(project_id)
        if not files_dir.is_dir():
            return []
        return sorted(p.name for p in files_dir.iterdir() if p.is_file())
