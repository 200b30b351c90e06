"""Line-based chunking for source code."""

from projectrag.chunkers.base import BaseChunker, file_extension, finalize_chunks, split_lines
from projectrag.models import Chunk, ChunkMetadata
from projectrag.utils.text import overlap_tail

CODE_EXTENSIONS = frozenset(
    {
        ".ts", ".tsx", ".js", ".jsx", ".py", ".java", ".go", ".rs",
        ".c", ".cpp", ".h", ".hpp", ".cs", ".rb", ".php", ".swift",
        ".kt", ".scala", ".sh", ".bash", ".zsh", ".sql", ".r",
    }
)


class CodeChunker(BaseChunker):
    """Accumulate whole lines until the character budget would overflow.

    Each emitted chunk carries its line range and the language (the file
    extension without the dot). The next chunk is seeded with an overlap
    tail of the previous one, so adjacent chunks share a few lines.
    """

    def can_handle(self, file_name: str) -> bool:
        return file_extension(file_name) in CODE_EXTENSIONS

    def chunk(self, text: str, file_id: str, file_name: str) -> list[Chunk]:
        if not text or not text.strip():
            return []

        language = file_extension(file_name)[1:] or None
        chunks: list[Chunk] = []

        buffer = ""
        buffer_start = 0
        buffer_line = 1
        offset = 0
        line_no = 1

        def emit(end_offset: int, last_line: int) -> None:
            chunks.append(
                self.make_chunk(
                    file_id,
                    file_name,
                    buffer,
                    buffer_start,
                    end_offset,
                    ChunkMetadata(language=language, line_start=buffer_line, line_end=last_line),
                )
            )

        for line in split_lines(text):
            if buffer and len(buffer) + len(line) > self.target_chars:
                overlap = ""
                if buffer.strip():
                    emit(offset, line_no - 1)
                    overlap = overlap_tail(buffer, self.overlap_chars)
                buffer = overlap + line
                buffer_start = offset - len(overlap)
                # The overlap always ends on a line break, one per line it spans.
                buffer_line = line_no - overlap.count("\n")
            else:
                buffer += line

            offset += len(line)
            line_no += 1

        if buffer.strip():
            emit(offset, line_no - 1)

        return finalize_chunks(chunks, file_id)
