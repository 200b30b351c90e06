"""Binary file detection, so ingestion only hands text to the chunker."""

from pathlib import Path

# Extensions that are never worth chunking
BINARY_EXTENSIONS = frozenset(
    {
        ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".webp", ".tiff",
        ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
        ".zip", ".tar", ".gz", ".rar", ".7z", ".bz2", ".xz",
        ".exe", ".dll", ".so", ".dylib", ".bin", ".wasm",
        ".mp3", ".mp4", ".mov", ".wav", ".flac", ".webm",
        ".pyc", ".pyo", ".class", ".o", ".obj",
        ".ttf", ".otf", ".woff", ".woff2",
        ".db", ".sqlite", ".sqlite3", ".npy",
    }
)

_TEXT_BYTES = frozenset(range(32, 127)) | {9, 10, 12, 13}


def is_binary_extension(path: str | Path) -> bool:
    """Check if the file extension marks the file as binary."""
    return Path(path).suffix.lower() in BINARY_EXTENSIONS


def is_binary_content(content: bytes, sample_size: int = 8192) -> bool:
    """Heuristic: NUL bytes, or more than 30% non-text bytes that are not UTF-8."""
    if not content:
        return False

    sample = content[:sample_size]
    if b"\x00" in sample:
        return True

    try:
        sample.decode("utf-8")
        return False
    except UnicodeDecodeError as exc:
        # A multi-byte sequence cut off by the sample boundary is still text.
        if exc.start >= len(sample) - 3 and exc.reason == "unexpected end of data":
            return False

    non_text = sum(1 for byte in sample if byte not in _TEXT_BYTES)
    return non_text / len(sample) > 0.30


def detect_binary(path: str | Path, content: bytes) -> bool:
    """Extension check first, then content sniffing."""
    return is_binary_extension(path) or is_binary_content(content)
