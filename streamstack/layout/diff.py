from __future__ import annotations
from typing import Sequence
import numpy as np


def differentiate(series: Sequence[float]) -> np.ndarray:
    """
    Centered difference of one series, same length as the input.
    Endpoints use the one-sided difference; length <= 1 gives zeros.
    """
    s = np.asarray(series, dtype=float)
    n = s.shape[0]
    out = np.zeros(n, dtype=float)
    if n <= 1:
        return out
    out[0] = s[1] - s[0]
    out[-1] = s[-1] - s[-2]
    if n > 2:
        out[1:-1] = (s[2:] - s[:-2]) / 2.0
    return out


def differentiate_all(values: np.ndarray) -> np.ndarray:
    """Row-wise `differentiate` over a (bands x samples) matrix."""
    v = np.asarray(values, dtype=float)
    if v.ndim != 2:
        raise ValueError("expected a 2-D (bands x samples) array")
    out = np.zeros_like(v)
    for i in range(v.shape[0]):
        out[i] = differentiate(v[i])
    return out
