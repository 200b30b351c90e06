"""Embedding providers for vector generation."""

from projectrag.config import EmbeddingConfig, LocalEmbeddingConfig, RemoteEmbeddingConfig
from projectrag.embedders.ollama import OllamaEmbedder
from projectrag.embedders.sentence_transformer import SentenceTransformerEmbedder
from projectrag.protocols import EmbeddingProvider


def create_embedder(config: EmbeddingConfig) -> EmbeddingProvider:
    """Resolve the tagged embedding configuration into a provider.

    Args:
        config: Either a local or a remote embedding configuration

    Returns:
        A provider implementing the EmbeddingProvider protocol
    """
    if isinstance(config, LocalEmbeddingConfig):
        return SentenceTransformerEmbedder(config.model, device=config.device)
    if isinstance(config, RemoteEmbeddingConfig):
        return OllamaEmbedder(config.endpoint, config.model, timeout=config.timeout)
    raise ValueError(f"Unsupported embedding configuration: {config!r}")


__all__ = ["OllamaEmbedder", "SentenceTransformerEmbedder", "create_embedder"]
