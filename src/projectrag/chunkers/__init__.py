"""Chunking strategies and the extension-based dispatcher."""

import logging

from projectrag.chunkers.code_chunker import CODE_EXTENSIONS, CodeChunker
from projectrag.chunkers.markdown_chunker import MARKDOWN_EXTENSIONS, MarkdownChunker
from projectrag.chunkers.paragraph_chunker import ParagraphChunker
from projectrag.models import Chunk
from projectrag.protocols import ChunkingStrategy

logger = logging.getLogger(__name__)


class TextChunker:
    """Pick a strategy by file extension and chunk the document with it.

    Strategies are tried in order; the paragraph chunker accepts anything
    and is always last.
    """

    def __init__(self, chunk_size: int = 500, chunk_overlap: int = 50):
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self._strategies: list[ChunkingStrategy] = [
            CodeChunker(chunk_size, chunk_overlap),
            MarkdownChunker(chunk_size, chunk_overlap),
            ParagraphChunker(chunk_size, chunk_overlap),
        ]

    def strategy_for(self, file_name: str) -> ChunkingStrategy:
        for strategy in self._strategies:
            if strategy.can_handle(file_name):
                return strategy
        return self._strategies[-1]

    def chunk_document(self, file_id: str, file_name: str, content: str) -> list[Chunk]:
        """Split ``content`` into ordered chunks; blank content yields ``[]``."""
        if not content or not content.strip():
            return []
        strategy = self.strategy_for(file_name)
        chunks = strategy.chunk(content, file_id, file_name)
        logger.debug(f"Chunked {file_name} with {type(strategy).__name__}: {len(chunks)} chunks")
        return chunks


__all__ = [
    "CODE_EXTENSIONS",
    "MARKDOWN_EXTENSIONS",
    "CodeChunker",
    "MarkdownChunker",
    "ParagraphChunker",
    "TextChunker",
]
