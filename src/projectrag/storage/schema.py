"""On-disk layout and JSON (de)serialisation of project indexes.

Layout per project::

    <data_dir>/projects/<project_id>/rag-index.json
    <data_dir>/projects/<project_id>/files/<file_id>_<file_name>

The index document keeps ``chunks`` and ``embeddings`` as parallel arrays;
decoding zips them back into entries and refuses unequal lengths.
"""

from dataclasses import asdict
from typing import Any

from projectrag.exceptions import IndexIntegrityError
from projectrag.models import (
    Chunk,
    ChunkMetadata,
    IndexedFile,
    IndexEntry,
    IndexStats,
    ProjectIndex,
)

# Bump whenever the document shape changes; older files are rebuilt.
INDEX_VERSION = 1
INDEX_FILENAME = "rag-index.json"
FILES_DIRNAME = "files"
PROJECTS_DIRNAME = "projects"


def chunk_to_dict(chunk: Chunk) -> dict[str, Any]:
    data = asdict(chunk)
    if chunk.metadata is not None:
        data["metadata"] = {k: v for k, v in data["metadata"].items() if v is not None}
    return data


def chunk_from_dict(data: dict[str, Any]) -> Chunk:
    metadata = data.get("metadata")
    return Chunk(
        id=str(data["id"]),
        file_id=str(data["file_id"]),
        file_name=str(data["file_name"]),
        content=str(data["content"]),
        start_offset=int(data["start_offset"]),
        end_offset=int(data["end_offset"]),
        chunk_index=int(data["chunk_index"]),
        total_chunks=int(data["total_chunks"]),
        token_count=int(data["token_count"]),
        metadata=ChunkMetadata(**metadata) if metadata else None,
    )


def index_to_dict(index: ProjectIndex) -> dict[str, Any]:
    return {
        "project_id": index.project_id,
        "version": index.version,
        "embedding_model": index.embedding_model,
        "dimension": index.dimension,
        "chunks": [chunk_to_dict(entry.chunk) for entry in index.entries],
        "embeddings": [list(entry.embedding) for entry in index.entries],
        "files": [asdict(f) for f in index.files],
        "updated_at": index.updated_at,
        "stats": asdict(index.stats),
    }


def index_from_dict(data: dict[str, Any]) -> ProjectIndex:
    """Decode an index document.

    Raises:
        KeyError, TypeError, ValueError: malformed document
        IndexIntegrityError: chunk and embedding arrays differ in length
    """
    chunks = [chunk_from_dict(c) for c in data["chunks"]]
    embeddings = [[float(x) for x in v] for v in data["embeddings"]]
    if len(chunks) != len(embeddings):
        raise IndexIntegrityError(
            f"Index has {len(chunks)} chunks but {len(embeddings)} embeddings"
        )

    return ProjectIndex(
        project_id=str(data["project_id"]),
        version=int(data["version"]),
        embedding_model=str(data.get("embedding_model", "")),
        dimension=int(data.get("dimension", 0)),
        updated_at=str(data.get("updated_at", "")),
        entries=[IndexEntry(chunk=c, embedding=v) for c, v in zip(chunks, embeddings)],
        files=[IndexedFile(**f) for f in data.get("files", [])],
        stats=IndexStats(**data.get("stats", {})),
    )
