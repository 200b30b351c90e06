"""Vector operations used for brute-force similarity search."""

from typing import Optional, Sequence

import numpy as np

VectorLike = Sequence[float] | np.ndarray


def cosine_similarity(a: VectorLike, b: VectorLike) -> float:
    """Compute cosine similarity between two vectors.

    Vectors of different lengths, or with a zero norm, score 0.
    """
    va = np.asarray(a, dtype=np.float64).ravel()
    vb = np.asarray(b, dtype=np.float64).ravel()
    if va.shape != vb.shape or va.size == 0:
        return 0.0
    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.dot(va, vb) / (norm_a * norm_b))


def dot_product(a: VectorLike, b: VectorLike) -> float:
    return float(np.dot(np.asarray(a, dtype=np.float64), np.asarray(b, dtype=np.float64)))


def normalize(vector: VectorLike) -> list[float]:
    """Scale to unit length; a zero vector is returned unchanged."""
    v = np.asarray(vector, dtype=np.float64)
    norm = np.linalg.norm(v)
    if norm == 0:
        return v.tolist()
    return (v / norm).tolist()


def find_top_k(
    query: VectorLike,
    vectors: Sequence[VectorLike],
    k: int,
    min_score: float = 0.0,
    positions: Optional[Sequence[int]] = None,
) -> list[tuple[int, float]]:
    """Rank ``vectors`` against ``query`` by cosine similarity.

    Args:
        query: The query vector
        vectors: Candidate vectors, scanned in order
        k: Maximum number of results
        min_score: Candidates scoring below this are dropped
        positions: Tie-break key per candidate (defaults to scan order);
            equal scores come back in ascending position

    Returns:
        ``(candidate_index, score)`` pairs, best first
    """
    if k <= 0:
        return []
    if positions is not None and len(positions) != len(vectors):
        raise ValueError("positions must have one entry per vector")

    order = positions if positions is not None else range(len(vectors))
    scored = []
    for i, (vector, position) in enumerate(zip(vectors, order)):
        score = cosine_similarity(query, vector)
        if score >= min_score:
            scored.append((i, score, position))

    scored.sort(key=lambda item: (-item[1], item[2]))
    return [(i, score) for i, score, _ in scored[:k]]
