"""Tests for the chunking strategies."""

import pytest

from projectrag.chunkers import CodeChunker, MarkdownChunker, ParagraphChunker, TextChunker
from projectrag.chunkers.base import file_extension, split_lines
from projectrag.chunkers.markdown_chunker import split_sections


def assert_well_formed(chunks, text):
    """Shared structural checks for any chunk list of one file."""
    n = len(chunks)
    assert [c.chunk_index for c in chunks] == list(range(n))
    assert all(c.total_chunks == n for c in chunks)
    assert len({c.id for c in chunks}) == n
    for c in chunks:
        assert 0 <= c.start_offset < c.end_offset <= len(text)
        assert text[c.start_offset : c.end_offset] == c.content
        assert c.token_count == -(-len(c.content) // 4)
    for prev, nxt in zip(chunks, chunks[1:]):
        assert prev.start_offset <= nxt.start_offset
        # Anything between two chunks may only be whitespace
        assert text[prev.end_offset : nxt.start_offset].strip() == ""


@pytest.mark.parametrize("content", ["", "   ", "\n\n\t\n"])
def test_blank_content_yields_nothing(chunker: TextChunker, content: str) -> None:
    assert chunker.chunk_document("f1", "notes.md", content) == []
    assert chunker.chunk_document("f1", "main.py", content) == []
    assert chunker.chunk_document("f1", "data.csv", content) == []


@pytest.mark.parametrize(
    "file_name, strategy",
    [
        ("main.py", CodeChunker),
        ("src/App.TSX", CodeChunker),
        ("README.md", MarkdownChunker),
        ("notes.txt", MarkdownChunker),
        ("data.csv", ParagraphChunker),
        ("Makefile", ParagraphChunker),
    ],
)
def test_strategy_selected_by_extension(chunker: TextChunker, file_name: str, strategy: type) -> None:
    assert isinstance(chunker.strategy_for(file_name), strategy)


def test_file_extension_and_line_split() -> None:
    assert file_extension("dir/Script.PY") == ".py"
    assert file_extension("Makefile") == ""
    assert split_lines("a\nb\n") == ["a\n", "b\n"]
    assert split_lines("a\nb") == ["a\n", "b"]


def test_markdown_sections_become_chunks() -> None:
    chunker = TextChunker(chunk_size=1000, chunk_overlap=10)
    text = "# Intro\nHello world.\n\n# Details\nMore text here."

    chunks = chunker.chunk_document("doc", "guide.md", text)

    assert len(chunks) == 2
    assert [c.metadata.section for c in chunks] == ["Intro", "Details"]
    assert chunks[0].content == "# Intro\nHello world."
    assert chunks[1].content == "# Details\nMore text here."
    assert_well_formed(chunks, text)


def test_markdown_preamble_has_no_section() -> None:
    sections = split_sections("Preface text.\n# One\nbody\n")
    assert [s.heading for s in sections] == [None, "One"]
    assert sections[1].start == len("Preface text.\n")

    chunks = MarkdownChunker(1000, 10).chunk("Preface text.\n# One\nbody\n", "doc", "a.md")
    assert chunks[0].metadata is None
    assert chunks[1].metadata.section == "One"


def test_oversized_markdown_section_is_split_by_paragraph() -> None:
    paragraphs = "\n\n".join(f"Paragraph {i} has a handful of words in it." for i in range(6))
    text = "# Intro\nShort.\n\n# Big\n" + paragraphs + "\n"
    chunker = TextChunker(chunk_size=20, chunk_overlap=2)

    chunks = chunker.chunk_document("doc", "guide.md", text)

    assert chunks[0].metadata.section == "Intro"
    big = chunks[1:]
    assert len(big) > 1
    assert all(c.metadata.section == "Big" for c in big)
    assert big[0].start_offset == text.index("# Big")
    assert_well_formed(chunks, text)


def test_code_chunks_track_lines_and_language() -> None:
    text = "".join(f"value_{i:02d} = compute({i})\n" for i in range(30))
    chunker = TextChunker(chunk_size=25, chunk_overlap=5)

    chunks = chunker.chunk_document("f", "calc.py", text)

    assert len(chunks) > 1
    assert_well_formed(chunks, text)
    assert chunks[0].start_offset == 0
    assert chunks[-1].end_offset == len(text)
    assert chunks[0].metadata.line_start == 1
    assert chunks[-1].metadata.line_end == 30
    for c in chunks:
        assert c.metadata.language == "py"
        assert c.content.count("\n") == c.metadata.line_end - c.metadata.line_start + 1
    # Overlap: each chunk after the first starts before the previous one ends
    for prev, nxt in zip(chunks, chunks[1:]):
        assert nxt.start_offset < prev.end_offset


def test_code_chunk_respects_budget(sample_code: str) -> None:
    chunker = CodeChunker(chunk_size=20, chunk_overlap=0)
    chunks = chunker.chunk(sample_code, "f", "fib.py")

    assert len(chunks) > 1
    longest_line = max(len(line) for line in sample_code.splitlines(keepends=True))
    for c in chunks:
        assert len(c.content) <= max(chunker.target_chars, longest_line)
    assert "".join(c.content for c in chunks).strip() == sample_code.strip()


def test_small_code_file_is_single_chunk() -> None:
    chunks = CodeChunker(500, 50).chunk("print('hi')", "f", "x.py")
    assert len(chunks) == 1
    assert chunks[0].content == "print('hi')"
    assert chunks[0].metadata.line_start == chunks[0].metadata.line_end == 1


def test_paragraph_overlap_starts_on_word_boundary() -> None:
    text = (
        "First paragraph talks about apples and pears.\n\n"
        "Second paragraph covers bananas and cherries.\n\n"
        "Third paragraph is all about grapes and melons.\n"
    )
    chunks = ParagraphChunker(chunk_size=20, chunk_overlap=5).chunk(text, "f", "fruit.csv")

    assert len(chunks) == 3
    assert chunks[0].content == "First paragraph talks about apples and pears."
    assert chunks[1].content.startswith("apples and pears.")
    assert chunks[2].content.startswith("and cherries.")
    assert chunks[-1].content.endswith("melons.")
    assert_well_formed(chunks, text)


def test_paragraph_chunker_without_overlap_covers_everything() -> None:
    text = "\n\n".join(f"Block {i} " + "word " * 12 for i in range(8))
    chunks = ParagraphChunker(chunk_size=30, chunk_overlap=0).chunk(text, "f", "log.csv")

    assert len(chunks) > 1
    assert_well_formed(chunks, text)
    joined = " ".join(c.content for c in chunks)
    for i in range(8):
        assert f"Block {i}" in joined
