# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-14
# Description: VectorSimilarity
# -----------------------------------------------------------------------------
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np

from retrieval.types import RetrievalResult
from utility.errors import DimensionMismatchError

Vector = Union[np.ndarray, Sequence[float]]


def cosine_similarity(query: Vector, candidate: Vector) -> float:
    """
    Cosine similarity in [-1, 1]. A zero-norm vector on either side scores 0.0.
    Raises DimensionMismatchError when the vectors differ in length and
    ValueError when either vector, or the score itself, is not finite.
    """
    q = np.asarray(query, dtype=np.float64).ravel()
    c = np.asarray(candidate, dtype=np.float64).ravel()
    if q.shape[0] != c.shape[0]:
        raise DimensionMismatchError(expected=q.shape[0], actual=c.shape[0])
    if not (np.all(np.isfinite(q)) and np.all(np.isfinite(c))):
        raise ValueError("Cannot score a vector containing NaN or infinity")

    norm_q = float(np.linalg.norm(q))
    norm_c = float(np.linalg.norm(c))
    if norm_q == 0.0 or norm_c == 0.0:
        return 0.0

    score = float(np.dot(q, c)) / (norm_q * norm_c)
    if not np.isfinite(score):
        raise ValueError("Similarity overflowed to a non-finite value")
    # rounding can push parallel vectors fractionally past 1
    return max(-1.0, min(1.0, score))


def ranking_key(result: RetrievalResult) -> Tuple[float, int, str]:
    """Score descending, then messageId ascending, then episodeId ascending."""
    return -result.score, result.message_id, result.episode_id


def rank_results(results: Iterable[RetrievalResult], top_k: int) -> List[RetrievalResult]:
    return sorted(results, key=ranking_key)[:max(0, top_k)]
