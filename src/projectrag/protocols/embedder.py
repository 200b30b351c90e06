"""Protocol for embedding model providers."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class EmbeddingProvider(Protocol):
    """Protocol for embedding model providers.

    Allows swapping between a local model (sentence-transformers) and an
    HTTP embedding API without the service knowing which one it has.
    """

    @property
    def dimension(self) -> int:
        """Length of the last produced vector (or the model's declared size)."""
        ...

    @property
    def model_name(self) -> str:
        """Return identifier for the model used."""
        ...

    def is_available(self) -> bool:
        """Best-effort readiness probe. Never raises."""
        ...

    def ensure_ready(self) -> bool:
        """Load or connect the backend. Idempotent; never raises."""
        ...

    def embed(self, text: str) -> list[float]:
        """Embed a single text."""
        ...

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Embed texts one after another, in order."""
        ...

    def close(self) -> None:
        """Release backend resources."""
        ...
