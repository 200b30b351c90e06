"""Heading-aware chunking for markdown-like documents."""

import re
from dataclasses import dataclass
from typing import Optional

from projectrag.chunkers.base import BaseChunker, file_extension, finalize_chunks
from projectrag.chunkers.paragraph_chunker import ParagraphChunker
from projectrag.models import Chunk
from projectrag.utils.text import estimate_tokens

MARKDOWN_EXTENSIONS = frozenset({".md", ".mdx", ".markdown", ".rst", ".txt"})

_HEADING = re.compile(r"^#{1,6}[ \t]+(\S.*)$", re.MULTILINE)


@dataclass(frozen=True)
class Section:
    heading: Optional[str]
    content: str
    start: int


def split_sections(text: str) -> list[Section]:
    """Cut ``text`` at every heading line.

    Each section starts at its heading and runs to the next one. Content
    before the first heading forms a section with no heading.
    """
    sections: list[Section] = []
    last_start = 0
    last_heading: Optional[str] = None

    for match in _HEADING.finditer(text):
        if match.start() > last_start:
            sections.append(Section(last_heading, text[last_start : match.start()], last_start))
        last_start = match.start()
        last_heading = match.group(1).strip()

    if last_start < len(text):
        sections.append(Section(last_heading, text[last_start:], last_start))

    return sections


class MarkdownChunker(BaseChunker):
    """One chunk per heading section; oversized sections fall back to paragraphs."""

    def __init__(self, chunk_size: int = 500, chunk_overlap: int = 50):
        super().__init__(chunk_size, chunk_overlap)
        self._paragraphs = ParagraphChunker(chunk_size, chunk_overlap)

    def can_handle(self, file_name: str) -> bool:
        return file_extension(file_name) in MARKDOWN_EXTENSIONS

    def chunk(self, text: str, file_id: str, file_name: str) -> list[Chunk]:
        if not text or not text.strip():
            return []

        chunks: list[Chunk] = []
        for section in split_sections(text):
            if not section.content.strip():
                continue
            if estimate_tokens(section.content) <= self.chunk_size:
                chunks.append(
                    self.make_prose_chunk(file_id, file_name, section.content, section.start, section.heading)
                )
            else:
                chunks.extend(
                    self._paragraphs.split(
                        section.content,
                        file_id,
                        file_name,
                        base_offset=section.start,
                        section=section.heading,
                    )
                )

        return finalize_chunks(chunks, file_id)
