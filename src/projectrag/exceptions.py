"""Exception hierarchy for projectrag."""


class ProjectRAGError(Exception):
    """Base class for all projectrag errors."""


class EmbeddingProviderError(ProjectRAGError):
    """The embedding backend is unreachable, unloadable or returned garbage."""


class IndexIntegrityError(ProjectRAGError):
    """Chunks and embeddings do not line up one-to-one."""
