"""Turn ranked search results into a token-bounded context string."""

from projectrag.models import RAGContext, SearchResult
from projectrag.utils.text import estimate_tokens

RULE = "-" * 40


def format_chunk_context(result: SearchResult) -> str:
    """Header (file, section, lines, match %) followed by the chunk text."""
    chunk = result.chunk
    meta = chunk.metadata

    header = chunk.file_name
    if meta is not None and meta.section:
        header += f" > {meta.section}"
    if meta is not None and meta.line_start is not None and meta.line_end is not None:
        header += f" (lines {meta.line_start}-{meta.line_end})"
    header += f" [{result.score * 100:.1f}% match]"

    return f"{header}\n{RULE}\n{chunk.content}"


def assemble_context(query: str, results: list[SearchResult], max_tokens: int) -> RAGContext:
    """Greedily add formatted results until one would exceed ``max_tokens``.

    Accumulation stops at the first result that does not fit; smaller
    results after it are not considered.
    """
    blocks: list[str] = []
    used: list[SearchResult] = []
    token_count = 0

    for result in results:
        block = format_chunk_context(result)
        block_tokens = estimate_tokens(block)
        if token_count + block_tokens > max_tokens:
            break
        blocks.append(block)
        used.append(result)
        token_count += block_tokens

    return RAGContext(
        query=query,
        context="\n\n".join(blocks).strip(),
        sources=used,
        token_count=token_count,
    )
