"""Base-2 information measures over a joint probability table.

Cells with zero probability contribute nothing, following the limit
``p * log2(p) -> 0`` as ``p -> 0``.
"""

from __future__ import annotations

from typing import Union

import numpy as np
import pandas as pd

JointLike = Union[np.ndarray, pd.DataFrame]

_SUM_TOLERANCE = 1e-9


def ensure_joint(joint: JointLike) -> np.ndarray:
    """Coerce a joint table to a float64 2-D array of probabilities summing to one."""
    p = np.asarray(joint, dtype=np.float64)
    if p.ndim != 2:
        raise ValueError(f"joint must be 2-D (clusters × factors), got shape {p.shape}")
    if p.size == 0:
        raise ValueError("joint cannot be empty")
    if not np.all(np.isfinite(p)):
        raise ValueError("joint contains non-finite probabilities")
    if np.any(p < 0):
        raise ValueError("joint contains negative probabilities")
    if abs(p.sum() - 1.0) > _SUM_TOLERANCE:
        raise ValueError(f"joint must sum to 1, got {p.sum():.12g}")
    return p


def mutual_information(joint: JointLike) -> float:
    """I = Σ p(g,f) log2(p(g,f) / (p(g) p(f))), in bits."""
    p = ensure_joint(joint)
    p_row = p.sum(axis=1, keepdims=True)
    p_col = p.sum(axis=0, keepdims=True)
    independent = p_row * p_col

    mask = p > 0
    return float(np.sum(p[mask] * np.log2(p[mask] / independent[mask])))


def joint_entropy(joint: JointLike) -> float:
    """H = -Σ p(g,f) log2 p(g,f), in bits."""
    p = ensure_joint(joint)
    mask = p > 0
    entropy = float(-np.sum(p[mask] * np.log2(p[mask])))
    # A single occupied cell yields -0.0.
    return entropy if entropy > 0 else 0.0


__all__ = ["JointLike", "ensure_joint", "joint_entropy", "mutual_information"]
