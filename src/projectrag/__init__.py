"""Per-project semantic retrieval: chunking, embeddings, a versioned vector index and context assembly."""

from projectrag.chunkers import TextChunker
from projectrag.config import LocalEmbeddingConfig, RAGSettings, RemoteEmbeddingConfig
from projectrag.exceptions import EmbeddingProviderError, IndexIntegrityError, ProjectRAGError
from projectrag.service import ProjectRAGService
from projectrag.storage import ProjectIndexStore

__version__ = "0.1.0"

__all__ = [
    "EmbeddingProviderError",
    "IndexIntegrityError",
    "LocalEmbeddingConfig",
    "ProjectIndexStore",
    "ProjectRAGError",
    "ProjectRAGService",
    "RAGSettings",
    "RemoteEmbeddingConfig",
    "TextChunker",
]
