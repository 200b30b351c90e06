"""Project retrieval service: indexing, search and context assembly."""

import logging
from typing import Iterable, Optional

from projectrag.chunkers import TextChunker
from projectrag.config import RAGSettings
from projectrag.embedders import create_embedder
from projectrag.exceptions import EmbeddingProviderError
from projectrag.models import (
    FileIndexState,
    IndexedFile,
    IndexInfo,
    IndexingStatus,
    ProjectIndexStatus,
    RAGContext,
    SearchOptions,
    SearchResult,
    SourceFile,
)
from projectrag.protocols import EmbeddingProvider
from projectrag.retrieval import assemble_context, find_top_k
from projectrag.storage import ProjectIndexStore
from projectrag.storage.store import utc_now
from projectrag.utils.text import content_hash

logger = logging.getLogger(__name__)

PROVIDER_NOT_READY = "Embedding model not available"


class ProjectRAGService:
    """Semantic search over the files of a project.

    Collaborators are built from ``settings`` unless injected. Call
    :meth:`close` (or use the service as a context manager) to release
    the embedding backend.
    """

    def __init__(
        self,
        settings: Optional[RAGSettings] = None,
        *,
        store: Optional[ProjectIndexStore] = None,
        embedder: Optional[EmbeddingProvider] = None,
        chunker: Optional[TextChunker] = None,
    ):
        self.settings = settings or RAGSettings()
        self.store = store or ProjectIndexStore(self.settings.data_dir)
        self.embedder = embedder or create_embedder(self.settings.embedding)
        self.chunker = chunker or TextChunker(self.settings.chunk_size, self.settings.chunk_overlap)
        self._indexing_status: dict[str, ProjectIndexStatus] = {}

    def __enter__(self) -> "ProjectRAGService":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.embedder.close()

    # Provider

    def is_available(self) -> bool:
        return self.embedder.is_available()

    def ensure_ready(self) -> bool:
        return self.embedder.ensure_ready()

    @property
    def model_name(self) -> str:
        return self.embedder.model_name

    # Indexing

    def index_file(self, project_id: str, file_id: str, file_name: str, content: str) -> IndexingStatus:
        """Index one file. Failures are reported in the returned status, never raised."""
        status = IndexingStatus(file_id=file_id, file_name=file_name)
        self._run_indexing(project_id, SourceFile(file_id, file_name, content), status)
        return status

    def _run_indexing(self, project_id: str, source: SourceFile, status: IndexingStatus) -> None:
        status.status = FileIndexState.PROCESSING
        try:
            if not self.embedder.ensure_ready():
                raise EmbeddingProviderError(PROVIDER_NOT_READY)
            status.advance(5)

            digest = content_hash(source.content)
            if not self.store.needs_reindex(project_id, source.id, digest):
                logger.debug(f"{source.name} unchanged, skipping")
                status.complete()
                return

            self.store.save_file(project_id, source.id, source.name, source.content)
            status.advance(10)

            chunks = self.chunker.chunk_document(source.id, source.name, source.content)
            status.advance(30)
            if not chunks:
                status.complete(chunks_created=0)
                return

            embeddings = self.embedder.embed_batch([c.content for c in chunks])
            status.advance(80)

            indexed = IndexedFile(
                id=source.id,
                name=source.name,
                size=len(source.content),
                chunk_count=len(chunks),
                indexed_at=utc_now(),
                content_hash=digest,
            )

            if self.store.load_index(project_id) is None:
                index = self.store.create_index(project_id, self.embedder.model_name, self.embedder.dimension)
                self.store.save_index(index)
                logger.info(f"Created index for {project_id} ({index.embedding_model})")
            status.advance(90)

            self.store.add_file_chunks(project_id, indexed, chunks, embeddings)
            status.complete(chunks_created=len(chunks))
            logger.info(f"Indexed {source.name}: {len(chunks)} chunks")
        except Exception as exc:
            logger.exception(f"Indexing {source.name} failed")
            status.fail(str(exc) or type(exc).__name__)

    def index_files(self, project_id: str, files: Iterable[SourceFile]) -> ProjectIndexStatus:
        """Index files one after another, collecting a status per file.

        If the embedding provider cannot be made ready, nothing is indexed
        and every file is marked ``error``.
        """
        project_status = ProjectIndexStatus(project_id=project_id, is_indexing=True)
        sources = list(files)
        project_status.files = [IndexingStatus(file_id=f.id, file_name=f.name) for f in sources]
        self._indexing_status[project_id] = project_status

        try:
            if not self.embedder.ensure_ready():
                logger.warning(f"{PROVIDER_NOT_READY}; aborting indexing of {project_id}")
                for status in project_status.files:
                    if status.status == FileIndexState.PENDING:
                        status.fail(PROVIDER_NOT_READY)
                return project_status

            for source, status in zip(sources, project_status.files):
                self._run_indexing(project_id, source, status)
                if status.status == FileIndexState.COMPLETED:
                    project_status.total_chunks += status.chunks_created or 0
                    project_status.total_files += 1

            project_status.last_indexed = utc_now()
            logger.info(
                f"Indexed {project_status.total_files}/{len(sources)} files "
                f"({project_status.total_chunks} chunks) for {project_id}"
            )
        finally:
            project_status.is_indexing = False
            self._indexing_status[project_id] = project_status

        return project_status

    def remove_file(self, project_id: str, file_id: str, file_name: str) -> bool:
        """Drop a file's chunks and its stored copy. True if anything was removed."""
        removed = self.store.remove_file_chunks(project_id, file_id)
        deleted = self.store.delete_file(project_id, file_id, file_name)
        return bool(removed) or deleted

    def delete_project_index(self, project_id: str) -> bool:
        self._indexing_status.pop(project_id, None)
        return self.store.delete_index(project_id)

    # Search

    def search(self, project_id: str, query: str, options: Optional[SearchOptions] = None) -> list[SearchResult]:
        """Rank the project's chunks against ``query`` by cosine similarity."""
        index = self.store.load_index(project_id)
        if index is None or not index.entries:
            return []

        options = options or SearchOptions()
        top_k = options.top_k if options.top_k is not None else self.settings.default_top_k
        min_score = options.min_score if options.min_score is not None else self.settings.default_min_score

        query_vector = self.embedder.embed(query)

        if options.file_ids:
            wanted = set(options.file_ids)
            positions = [i for i, entry in enumerate(index.entries) if entry.chunk.file_id in wanted]
        else:
            positions = list(range(len(index.entries)))

        candidates = [index.entries[i].embedding for i in positions]
        logger.debug(f"Scanning {len(candidates)} of {len(index.entries)} chunks in {project_id}")

        top = find_top_k(query_vector, candidates, top_k, min_score, positions=positions)
        return [
            SearchResult(chunk=index.entries[positions[i]].chunk, score=score, rank=rank)
            for rank, (i, score) in enumerate(top, start=1)
        ]

    def get_context(self, project_id: str, query: str, options: Optional[SearchOptions] = None) -> RAGContext:
        """Search, then pack results into a context string within the token budget."""
        results = self.search(project_id, query, options)
        if not results:
            return RAGContext(query=query)
        return assemble_context(query, results, self.settings.max_context_tokens)

    # Status

    def get_indexing_status(self, project_id: str) -> Optional[ProjectIndexStatus]:
        return self._indexing_status.get(project_id)

    def get_index_info(self, project_id: str) -> IndexInfo:
        return self.store.get_index_status(project_id)

    def is_file_indexed(self, project_id: str, file_id: str) -> bool:
        index = self.store.load_index(project_id)
        return index is not None and index.get_file(file_id) is not None
