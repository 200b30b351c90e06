"""Protocol definitions for extensible components."""

from projectrag.protocols.chunker import ChunkingStrategy
from projectrag.protocols.embedder import EmbeddingProvider
from projectrag.protocols.ingester import Ingester

__all__ = ["ChunkingStrategy", "EmbeddingProvider", "Ingester"]
