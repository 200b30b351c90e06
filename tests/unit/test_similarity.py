"""Tests for vector similarity and top-k ranking."""

import numpy as np
import pytest

from projectrag.retrieval import cosine_similarity, dot_product, find_top_k, normalize


def test_cosine_similarity_basic() -> None:
    assert cosine_similarity([1, 0], [1, 0]) == pytest.approx(1.0)
    assert cosine_similarity([1, 0], [0, 1]) == pytest.approx(0.0)
    assert cosine_similarity([1, 2], [-1, -2]) == pytest.approx(-1.0)
    assert cosine_similarity([3, 4], [6, 8]) == pytest.approx(1.0)


def test_cosine_similarity_accepts_numpy() -> None:
    assert cosine_similarity(np.array([1.0, 1.0]), [1.0, 1.0]) == pytest.approx(1.0)


@pytest.mark.parametrize(
    "a, b",
    [([1, 2], [1, 2, 3]), ([], []), ([0, 0], [1, 1]), ([1, 1], [0, 0])],
)
def test_cosine_similarity_degenerate_inputs_score_zero(a, b) -> None:
    assert cosine_similarity(a, b) == 0.0


def test_dot_product_and_normalize() -> None:
    assert dot_product([1, 2, 3], [4, 5, 6]) == pytest.approx(32.0)
    assert normalize([3, 4]) == pytest.approx([0.6, 0.8])
    assert normalize([0, 0]) == [0.0, 0.0]


def test_find_top_k_orders_and_limits() -> None:
    query = [1.0, 0.0]
    vectors = [[0.0, 1.0], [1.0, 0.0], [1.0, 1.0], [-1.0, 0.0]]

    top = find_top_k(query, vectors, k=2)

    assert [i for i, _ in top] == [1, 2]
    assert top[0][1] == pytest.approx(1.0)
    assert top[1][1] == pytest.approx(2**-0.5)


def test_find_top_k_min_score_is_inclusive() -> None:
    vectors = [[1.0, 0.0], [0.0, 1.0], [-1.0, 0.0]]
    assert [i for i, _ in find_top_k([1.0, 0.0], vectors, k=10, min_score=0.0)] == [0, 1]
    assert find_top_k([1.0, 0.0], vectors, k=10, min_score=-1.0)[-1][0] == 2


def test_find_top_k_breaks_ties_by_position() -> None:
    vectors = [[1.0, 0.0], [2.0, 0.0], [3.0, 0.0]]

    assert [i for i, _ in find_top_k([1.0, 0.0], vectors, k=3)] == [0, 1, 2]
    ranked = find_top_k([1.0, 0.0], vectors, k=3, positions=[7, 2, 5])
    assert [i for i, _ in ranked] == [1, 2, 0]


def test_find_top_k_edge_cases() -> None:
    assert find_top_k([1.0], [[1.0]], k=0) == []
    assert find_top_k([1.0], [], k=3) == []
    with pytest.raises(ValueError):
        find_top_k([1.0], [[1.0], [1.0]], k=1, positions=[0])
