"""
TOPSIS - Technique for Order of Preference by Similarity to Ideal Solution.

All criteria are benefit criteria (higher is better):

1. Vector-normalize each column (a zero column stays zero)
2. Multiply each column by its weight
3. Ideal = column maxima, negative-ideal = column minima
4. Euclidean distance of each row to both
5. Closeness = d- / (d+ + d-), or 0.5 when both distances are 0
"""

from typing import List, Sequence, Tuple

import numpy as np

from ..utils.validation import ValidationError

NEUTRAL_SCORE = 0.5


def topsis_scores(matrix: Sequence[Sequence[float]], weights: Sequence[float]) -> np.ndarray:
    """
    Closeness coefficient of each alternative, in [0, 1].

    Args:
        matrix: One row per alternative, one column per criterion
        weights: One weight per criterion

    Raises:
        ValidationError: On shape mismatch or non-finite values
    """
    values = np.asarray(matrix, dtype=float)
    if values.size == 0:
        return np.zeros(0)

    w = np.asarray(weights, dtype=float)
    if values.ndim != 2 or values.shape[1] != w.shape[0]:
        raise ValidationError(
            f"Criteria matrix shape {values.shape} does not match {w.shape[0]} weights",
            field="weights",
        )
    if not (np.isfinite(values).all() and np.isfinite(w).all()):
        raise ValidationError("Criteria values and weights must be finite", field="criteria")

    norms = np.linalg.norm(values, axis=0)
    normalized = np.divide(values, norms, out=np.zeros_like(values), where=norms > 0)
    weighted = normalized * w

    ideal = weighted.max(axis=0)
    negative_ideal = weighted.min(axis=0)
    d_ideal = np.linalg.norm(weighted - ideal, axis=1)
    d_negative = np.linalg.norm(weighted - negative_ideal, axis=1)

    total = d_ideal + d_negative
    return np.divide(d_negative, total, out=np.full_like(total, NEUTRAL_SCORE), where=total > 0)


def rank_by_score(scores: Sequence[float]) -> List[Tuple[int, int]]:
    """
    (index, rank) pairs ordered best first; rank 1 is best.

    Equal scores keep input order.
    """
    order = np.argsort(-np.asarray(scores, dtype=float), kind="stable")
    return [(int(index), position + 1) for position, index in enumerate(order)]
