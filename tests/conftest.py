"""Pytest fixtures for projectrag tests."""

import hashlib
import math
import re
from pathlib import Path
from typing import Callable, Iterator, Optional

import pytest

from projectrag.chunkers import TextChunker
from projectrag.config import RAGSettings
from projectrag.exceptions import EmbeddingProviderError
from projectrag.models import Chunk, ChunkMetadata, IndexedFile
from projectrag.service import ProjectRAGService
from projectrag.storage import ProjectIndexStore

_WORD_RE = re.compile(r"\w+")


class HashingEmbedder:
    """Deterministic bag-of-words embedder implementing EmbeddingProvider."""

    def __init__(self, dim: int = 64, ready: bool = True, fail_on: Optional[str] = None):
        self.dim = dim
        self.ready = ready
        self.fail_on = fail_on
        self.embedded: list[str] = []
        self.batch_calls = 0
        self.closed = False

    @property
    def dimension(self) -> int:
        return self.dim

    @property
    def model_name(self) -> str:
        return "hashing-test"

    def is_available(self) -> bool:
        return self.ready

    def ensure_ready(self) -> bool:
        return self.ready

    def embed(self, text: str) -> list[float]:
        if self.fail_on is not None and self.fail_on in text:
            raise EmbeddingProviderError(f"cannot embed text containing {self.fail_on!r}")
        self.embedded.append(text)
        vec = [0.0] * self.dim
        for token in _WORD_RE.findall(text.lower()):
            digest = hashlib.md5(token.encode("utf-8")).digest()
            vec[int.from_bytes(digest[:4], "big") % self.dim] += 1.0
        norm = math.sqrt(sum(v * v for v in vec))
        return [v / norm for v in vec] if norm else vec

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        self.batch_calls += 1
        return [self.embed(t) for t in texts]

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def embedder() -> HashingEmbedder:
    return HashingEmbedder()


@pytest.fixture
def settings(tmp_path: Path) -> RAGSettings:
    return RAGSettings(
        data_dir=tmp_path / "data",
        chunk_size=500,
        chunk_overlap=50,
        default_top_k=5,
        default_min_score=0.0,
        max_context_tokens=4000,
    )


@pytest.fixture
def store(settings: RAGSettings) -> ProjectIndexStore:
    return ProjectIndexStore(settings.data_dir)


@pytest.fixture
def service(settings: RAGSettings, store: ProjectIndexStore, embedder: HashingEmbedder) -> Iterator[ProjectRAGService]:
    svc = ProjectRAGService(settings, store=store, embedder=embedder)
    yield svc
    svc.close()


@pytest.fixture
def chunker() -> TextChunker:
    return TextChunker(chunk_size=500, chunk_overlap=50)


@pytest.fixture
def make_chunk() -> Callable[..., Chunk]:
    def _make(file_id: str, index: int, content: str = "some text", total: int = 1) -> Chunk:
        return Chunk(
            id=f"{file_id}-{index}",
            file_id=file_id,
            file_name=f"{file_id}.txt",
            content=content,
            start_offset=index * 10,
            end_offset=index * 10 + len(content),
            chunk_index=index,
            total_chunks=total,
            token_count=math.ceil(len(content) / 4),
            metadata=ChunkMetadata(section="Intro") if index == 0 else None,
        )

    return _make


@pytest.fixture
def make_file() -> Callable[..., IndexedFile]:
    def _make(file_id: str, chunk_count: int, content_hash: str = "hash") -> IndexedFile:
        return IndexedFile(
            id=file_id,
            name=f"{file_id}.txt",
            size=100,
            chunk_count=chunk_count,
            indexed_at="2024-01-01T00:00:00+00:00",
            content_hash=content_hash,
        )

    return _make


@pytest.fixture
def sample_code() -> str:
    """Sample code for testing."""
    return '''
def fibonacci(n: int) -> int:
    """Calculate the nth Fibonacci number."""
    if n <= 1:
        return n
    return fibonacci(n - 1) + fibonacci(n - 2)


class Calculator:
    """Simple calculator class."""

    def add(self, a: int, b: int) -> int:
        return a + b

    def subtract(self, a: int, b: int) -> int:
        return a - b
'''


@pytest.fixture
def make_embedder() -> Callable[..., HashingEmbedder]:
    return HashingEmbedder
