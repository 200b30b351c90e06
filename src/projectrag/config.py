"""Typed configuration for the retrieval engine."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

DEFAULT_CONFIG_PATH = Path("projectrag.json")
ENV_PREFIX = "PROJECTRAG_"


class LocalEmbeddingConfig(BaseModel):
    """In-process sentence-transformers model."""

    kind: Literal["local"] = "local"
    model: str = Field(default="all-MiniLM-L6-v2", description="sentence-transformers model id.")
    device: Optional[str] = Field(default=None, description="Torch device; None lets the library pick.")


class RemoteEmbeddingConfig(BaseModel):
    """Ollama-compatible embedding API reached over HTTP."""

    kind: Literal["remote"] = "remote"
    endpoint: str = Field(default="http://localhost:11434", description="Base URL of the embedding API.")
    model: str = Field(default="nomic-embed-text", description="Model name passed to the API.")
    timeout: float = Field(default=30.0, gt=0, description="Per-request timeout in seconds.")


EmbeddingConfig = Annotated[
    Union[LocalEmbeddingConfig, RemoteEmbeddingConfig],
    Field(discriminator="kind"),
]


class RAGSettings(BaseModel):
    """Top-level settings shared by the store, chunker, embedder and service."""

    data_dir: Path = Field(default=Path("./data"), description="Root directory for project indexes.")
    embedding: EmbeddingConfig = Field(default_factory=LocalEmbeddingConfig)
    chunk_size: int = Field(default=500, gt=0, description="Target chunk size in approximate tokens.")
    chunk_overlap: int = Field(default=50, ge=0, description="Overlap between chunks in approximate tokens.")
    default_top_k: int = Field(default=5, gt=0, description="Default number of search results.")
    default_min_score: float = Field(default=0.3, ge=-1.0, le=1.0, description="Default similarity cutoff.")
    max_context_tokens: int = Field(default=4000, gt=0, description="Token budget for assembled context.")
    log_level: str = Field(default="INFO", description="Verbosity level for application logs.")

    @model_validator(mode="after")
    def _check_overlap(self) -> "RAGSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "RAGSettings":
        """Build settings from ``PROJECTRAG_*`` environment variables."""
        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            value = env.get(ENV_PREFIX + name)
            return value if value else None

        data: dict = {}
        for key, name in (
            ("data_dir", "DATA_DIR"),
            ("chunk_size", "CHUNK_SIZE"),
            ("chunk_overlap", "CHUNK_OVERLAP"),
            ("default_top_k", "TOP_K"),
            ("default_min_score", "MIN_SCORE"),
            ("max_context_tokens", "MAX_CONTEXT_TOKENS"),
            ("log_level", "LOG_LEVEL"),
        ):
            value = get(name)
            if value is not None:
                data[key] = value

        kind = get("EMBEDDING_KIND")
        model = get("EMBEDDING_MODEL")
        endpoint = get("EMBEDDING_ENDPOINT")
        if kind or model or endpoint:
            embedding: dict = {"kind": kind or ("remote" if endpoint else "local")}
            if model:
                embedding["model"] = model
            if endpoint:
                embedding["endpoint"] = endpoint
            data["embedding"] = embedding

        return cls.model_validate(data)


def load_settings(path: Path = DEFAULT_CONFIG_PATH) -> RAGSettings:
    if path.exists():
        return RAGSettings.model_validate_json(path.read_text())
    raise FileNotFoundError(f"Config file not found: {path}")


def save_settings(settings: RAGSettings, path: Path = DEFAULT_CONFIG_PATH) -> None:
    path.write_text(settings.model_dump_json(indent=2))


__all__ = [
    "EmbeddingConfig",
    "LocalEmbeddingConfig",
    "RAGSettings",
    "RemoteEmbeddingConfig",
    "load_settings",
    "save_settings",
]
