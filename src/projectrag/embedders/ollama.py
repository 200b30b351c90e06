"""Remote embedding provider speaking the Ollama HTTP API."""

import logging
from typing import Any, Optional

import httpx

from projectrag.exceptions import EmbeddingProviderError

logger = logging.getLogger(__name__)


def _norm_base_url(url: str) -> str:
    return (url or "").strip().rstrip("/")


class OllamaEmbedder:
    """Embedding provider backed by ``POST /api/embeddings``.

    Readiness is probed with ``GET /api/tags``. The dimension is unknown
    (0) until the first text has been embedded.
    """

    def __init__(
        self,
        endpoint: str = "http://localhost:11434",
        model_name: str = "nomic-embed-text",
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ):
        self._endpoint = _norm_base_url(endpoint)
        self._model_name = model_name
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)
        self._ready = False
        self._dimension = 0

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def model_name(self) -> str:
        return self._model_name

    def is_available(self) -> bool:
        try:
            response = self._client.get(f"{self._endpoint}/api/tags")
        except httpx.HTTPError as exc:
            logger.debug(f"Embedding endpoint {self._endpoint} unreachable: {exc}")
            return False
        return response.is_success

    def ensure_ready(self) -> bool:
        if self._ready:
            return True
        self._ready = self.is_available()
        if not self._ready:
            logger.warning(f"Embedding endpoint {self._endpoint} is not available")
        return self._ready

    def embed(self, text: str) -> list[float]:
        try:
            response = self._client.post(
                f"{self._endpoint}/api/embeddings",
                json={"model": self._model_name, "prompt": text},
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise EmbeddingProviderError(f"Embedding request to {self._endpoint} failed: {exc}") from exc

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise EmbeddingProviderError("Embedding response is not valid JSON") from exc

        embedding = payload.get("embedding") if isinstance(payload, dict) else None
        if not isinstance(embedding, list) or not embedding:
            raise EmbeddingProviderError("Embedding response has no 'embedding' vector")

        try:
            vector = [float(x) for x in embedding]
        except (TypeError, ValueError) as exc:
            raise EmbeddingProviderError("Embedding vector contains non-numeric values") from exc

        self._dimension = len(vector)
        return vector

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """One request per text, in order."""
        return [self.embed(text) for text in texts]

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
