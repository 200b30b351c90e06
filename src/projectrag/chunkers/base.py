"""Shared plumbing for the chunking strategies."""

import hashlib
import time
from pathlib import PurePath
from typing import Optional

from projectrag.models import Chunk, ChunkMetadata
from projectrag.utils.text import CHARS_PER_TOKEN, estimate_tokens


def file_extension(file_name: str) -> str:
    """Lowercase extension including the dot, or ``""``."""
    name = PurePath(file_name).name
    dot = name.rfind(".")
    return name[dot:].lower() if dot != -1 else ""


def split_lines(text: str) -> list[str]:
    """Split into lines that keep their ``\\n`` so offsets stay exact."""
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def generate_chunk_id(file_id: str, index: int) -> str:
    digest = hashlib.md5(f"{file_id}:{index}:{time.time_ns()}".encode("utf-8")).hexdigest()
    return f"chunk_{digest[:12]}"


def finalize_chunks(chunks: list[Chunk], file_id: str) -> list[Chunk]:
    """Stamp position, total count and id once every chunk of a file is known."""
    total = len(chunks)
    for index, chunk in enumerate(chunks):
        chunk.chunk_index = index
        chunk.total_chunks = total
        chunk.id = generate_chunk_id(file_id, index)
    return chunks


class BaseChunker:
    """Holds the size budget shared by every strategy.

    Sizes are configured in approximate tokens and converted to characters
    with the fixed ``CHARS_PER_TOKEN`` ratio.
    """

    def __init__(self, chunk_size: int = 500, chunk_overlap: int = 50):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if chunk_overlap < 0:
            raise ValueError("chunk_overlap must not be negative")
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    @property
    def target_chars(self) -> int:
        return self.chunk_size * CHARS_PER_TOKEN

    @property
    def overlap_chars(self) -> int:
        return self.chunk_overlap * CHARS_PER_TOKEN

    @staticmethod
    def make_chunk(
        file_id: str,
        file_name: str,
        content: str,
        start_offset: int,
        end_offset: int,
        metadata: Optional[ChunkMetadata] = None,
    ) -> Chunk:
        # id, chunk_index and total_chunks are filled in by finalize_chunks
        return Chunk(
            id="",
            file_id=file_id,
            file_name=file_name,
            content=content,
            start_offset=start_offset,
            end_offset=end_offset,
            chunk_index=0,
            total_chunks=0,
            token_count=estimate_tokens(content),
            metadata=metadata,
        )

    @classmethod
    def make_prose_chunk(
        cls,
        file_id: str,
        file_name: str,
        raw: str,
        start_offset: int,
        section: Optional[str] = None,
    ) -> Chunk:
        """Build a chunk from ``raw`` with surrounding whitespace trimmed.

        Offsets are shifted to match, so the content is still exactly
        ``original[start_offset:end_offset]``.
        """
        lead = len(raw) - len(raw.lstrip())
        content = raw.strip()
        start = start_offset + lead
        metadata = ChunkMetadata(section=section) if section else None
        return cls.make_chunk(file_id, file_name, content, start, start + len(content), metadata)
