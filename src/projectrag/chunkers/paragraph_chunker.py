"""Paragraph-based chunking strategy for plain text."""

import re
from typing import Iterator, Optional

from projectrag.chunkers.base import BaseChunker, finalize_chunks
from projectrag.models import Chunk
from projectrag.utils.text import overlap_tail

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


def iter_paragraphs(text: str) -> Iterator[tuple[str, int]]:
    """Yield ``(paragraph, start)`` pairs, each paragraph keeping its trailing break."""
    position = 0
    for match in _PARAGRAPH_BREAK.finditer(text):
        yield text[position : match.end()], position
        position = match.end()
    if position < len(text):
        yield text[position:], position


class ParagraphChunker(BaseChunker):
    """Default chunking: pack blank-line separated paragraphs up to the budget.

    - Paragraphs are never split; a single oversized paragraph becomes its
      own (oversized) chunk
    - Consecutive chunks overlap by a word-aligned tail of the previous one
    - Chunk content is trimmed of surrounding whitespace
    """

    def can_handle(self, file_name: str) -> bool:
        return True

    def chunk(self, text: str, file_id: str, file_name: str) -> list[Chunk]:
        """Split text into chunks with position information.

        Args:
            text: The text content to chunk
            file_id: Id of the source file
            file_name: Name of the source file (for metadata)

        Returns:
            List of finalized Chunk objects
        """
        if not text or not text.strip():
            return []
        return finalize_chunks(self.split(text, file_id, file_name), file_id)

    def split(
        self,
        text: str,
        file_id: str,
        file_name: str,
        base_offset: int = 0,
        section: Optional[str] = None,
    ) -> list[Chunk]:
        """Chunk ``text`` without finalizing, for reuse by other strategies.

        ``base_offset`` is added to every offset so callers can split a
        slice of a larger document and keep absolute positions.
        """
        chunks: list[Chunk] = []
        buffer = ""
        buffer_start = base_offset

        for paragraph, start in iter_paragraphs(text):
            start += base_offset
            if buffer and len(buffer) + len(paragraph) > self.target_chars:
                overlap = ""
                if buffer.strip():
                    chunks.append(self.make_prose_chunk(file_id, file_name, buffer, buffer_start, section))
                    overlap = overlap_tail(buffer, self.overlap_chars)
                buffer = overlap + paragraph
                buffer_start = start - len(overlap)
            else:
                buffer += paragraph

        if buffer.strip():
            chunks.append(self.make_prose_chunk(file_id, file_name, buffer, buffer_start, section))

        return chunks
