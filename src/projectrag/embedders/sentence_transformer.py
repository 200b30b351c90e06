"""SentenceTransformer-based embedding provider."""

import logging
from typing import Optional

import numpy as np
from sentence_transformers import SentenceTransformer

from projectrag.exceptions import EmbeddingProviderError

logger = logging.getLogger(__name__)

# Short names accepted in configuration
MODEL_ALIASES = {
    "all-minilm": "all-MiniLM-L6-v2",
}


class SentenceTransformerEmbedder:
    """Embedding provider running a sentence-transformers model in-process.

    Uses all-MiniLM-L6-v2 by default - a fast, lightweight model
    that produces good quality embeddings for semantic search.
    """

    DEFAULT_MODEL = "all-MiniLM-L6-v2"
    DEFAULT_DIMENSION = 384

    def __init__(self, model_name: Optional[str] = None, device: Optional[str] = None):
        """Initialize the embedder. The model itself is loaded lazily.

        Args:
            model_name: Name of the sentence-transformers model to use.
                       Defaults to all-MiniLM-L6-v2.
            device: Torch device; None lets sentence-transformers choose.
        """
        requested = model_name or self.DEFAULT_MODEL
        self._model_name = MODEL_ALIASES.get(requested, requested)
        self._device = device
        self._model: Optional[SentenceTransformer] = None
        self._dimension = self.DEFAULT_DIMENSION

    def ensure_ready(self) -> bool:
        """Load the model once; later calls are no-ops."""
        if self._model is not None:
            return True
        try:
            logger.info(f"Loading local embedding model: {self._model_name}...")
            self._model = SentenceTransformer(self._model_name, device=self._device)
        except Exception as exc:
            logger.error(f"Failed to load local model {self._model_name}: {exc}")
            return False

        declared = self._model.get_sentence_embedding_dimension()
        if declared:
            self._dimension = int(declared)
        logger.info(f"Model loaded ({self._dimension} dimensions)")
        return True

    def is_available(self) -> bool:
        return self.ensure_ready()

    @property
    def model(self) -> SentenceTransformer:
        """Lazy-load the model on first access."""
        if not self.ensure_ready():
            raise EmbeddingProviderError(f"Local embedding model {self._model_name} could not be loaded")
        return self._model

    @property
    def dimension(self) -> int:
        """Return the embedding dimension."""
        return self._dimension

    @property
    def model_name(self) -> str:
        """Return identifier for the model used."""
        return self._model_name

    def embed(self, text: str) -> list[float]:
        """Embed a single text as a unit-length vector."""
        vector = self.model.encode(
            text,
            convert_to_numpy=True,
            normalize_embeddings=True,  # For cosine similarity
        )
        embedding = np.asarray(vector, dtype=np.float32).ravel().tolist()
        self._dimension = len(embedding)
        return embedding

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Embed texts sequentially to keep peak memory bounded."""
        return [self.embed(text) for text in texts]

    def close(self) -> None:
        self._model = None
