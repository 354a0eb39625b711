from __future__ import annotations
from typing import Callable, List, Sequence, Tuple, Union
import numpy as np

from ..utils.fp import pipe
from .dataset import Dataset

Coord = Tuple[float, float]
Boundary = List[Coord]
CoordinateSet = List[Boundary]

BaselineLike = Union[Callable[[int], float], Sequence[float], np.ndarray]


# ---------- stacking ----------

def baseline_curve(baseline: BaselineLike, dimension: int) -> np.ndarray:
    """Evaluate a baseline function (or accept a ready curve) over 0..dimension-1."""
    if callable(baseline):
        return np.array([float(baseline(i)) for i in range(dimension)], dtype=float)
    curve = np.asarray(baseline, dtype=float)
    if curve.shape != (dimension,):
        raise ValueError(f"baseline curve has shape {curve.shape}, expected ({dimension},)")
    return curve


def accumulate(values: np.ndarray, baseline: np.ndarray) -> np.ndarray:
    """
    Cumulative Boundaries: row 0 is the baseline, row k adds band k-1 on top
    of row k-1. Shape (band_count + 1, dimension).
    """
    v = np.asarray(values, dtype=float).reshape(-1, np.asarray(baseline).shape[0])
    rows = np.vstack([np.asarray(baseline, dtype=float)[np.newaxis, :], v])
    return np.cumsum(rows, axis=0)


# ---------- normalizing ----------

def normalize(boundaries: np.ndarray) -> np.ndarray:
    """
    Map boundaries into the unit square.
    Returns shape (boundaries, dimension, 2); degenerate ratios become 0.
    """
    b = np.asarray(boundaries, dtype=float)
    if b.ndim != 2:
        raise ValueError("expected a 2-D (boundaries x samples) array")
    count, dimension = b.shape
    out = np.zeros((count, dimension, 2), dtype=float)
    if count == 0 or dimension == 0:
        return out
    if dimension > 1:
        out[:, :, 0] = np.arange(dimension, dtype=float) / float(dimension - 1)
    lo, hi = float(b.min()), float(b.max())
    if hi != lo:
        out[:, :, 1] = (b - lo) / (hi - lo)
    return out


def to_coordinate_set(coords: np.ndarray) -> CoordinateSet:
    """(boundaries, samples, 2) array -> nested lists of (x, y) float tuples."""
    return [[(float(x), float(y)) for x, y in boundary] for boundary in np.asarray(coords, dtype=float)]


def build_target(dataset: Dataset, baseline: BaselineLike) -> CoordinateSet:
    """Baseline -> stack -> unit square, as a renderable Coordinate Set."""
    return pipe(
        baseline_curve(baseline, dataset.dimension),
        lambda curve: accumulate(dataset.values, curve),
        normalize,
        to_coordinate_set,
    )
