# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-04
# Description: VectorOps
# -----------------------------------------------------------------------------
from typing import Sequence, Union

import numpy as np

VectorLike = Union[np.ndarray, Sequence[float]]


def as_vector(values: VectorLike) -> np.ndarray:
    """Coerce any numeric sequence into a 1-D float32 array."""
    return np.asarray(values, dtype=np.float32).reshape(-1)


def l2_normalize(vec: VectorLike) -> np.ndarray:
    """Scale to unit L2 norm. A zero vector is returned unchanged."""
    arr = as_vector(vec)
    wide = arr.astype(np.float64)
    norm = float(np.linalg.norm(wide))
    if norm == 0.0:
        return arr
    return (wide / norm).astype(np.float32)


def resize_vector(vec: VectorLike, target_dim: int) -> np.ndarray:
    """
    Reconcile a vector to `target_dim`.

    - same dimension: returned as-is (no renormalisation)
    - native > target: average contiguous blocks
    - native < target: nearest-neighbour repetition
    Resized output is renormalised to unit norm.
    """
    if target_dim <= 0:
        raise ValueError(f"target_dim must be positive, got {target_dim}")

    arr = as_vector(vec)
    src_n = arr.shape[0]
    if src_n == target_dim:
        return arr
    if src_n == 0:
        return np.zeros(target_dim, dtype=np.float32)

    out = np.zeros(target_dim, dtype=np.float32)
    if src_n > target_dim:
        ratio = src_n / target_dim
        for i in range(target_dim):
            start = int(np.floor(i * ratio))
            end = min(int(np.floor((i + 1) * ratio)), src_n)
            if end > start:
                out[i] = arr[start:end].mean()
    else:
        ratio = target_dim / src_n
        idx = np.floor(np.arange(target_dim) / ratio).astype(np.int64)
        out = arr[np.clip(idx, 0, src_n - 1)].astype(np.float32)

    return l2_normalize(out)


def cosine_similarity(a: VectorLike, b: VectorLike) -> float:
    """
    Cosine of the angle between a and b.

    Mismatched dimensions and zero vectors score 0.0 (never NaN).
    """
    va = as_vector(a).astype(np.float64)
    vb = as_vector(b).astype(np.float64)
    if va.shape != vb.shape or va.size == 0:
        return 0.0
    denom = float(np.linalg.norm(va)) * float(np.linalg.norm(vb))
    if denom == 0.0:
        return 0.0
    score = float(np.dot(va, vb) / denom)
    # float32 rounding can nudge |cos| a hair past 1
    return max(-1.0, min(1.0, score))
