from __future__ import annotations
from functools import cached_property
from numbers import Real
from typing import Any, List, Optional, Sequence
import math
import numpy as np
import pandas as pd

from .diff import differentiate_all


class ShapeMismatch(ValueError):
    """Raised when band values cannot form a rectangular, all-numeric Dataset."""


# ---------- validation helpers ----------

def _is_real(x: Any) -> bool:
    # bool is a Real subclass; it is not a sample value
    if isinstance(x, (bool, np.bool_)):
        return False
    return isinstance(x, (Real, np.integer, np.floating))

def _matrix_from_rows(rows: Sequence[Sequence[Any]]) -> np.ndarray:
    try:
        rows = list(rows)
    except TypeError as e:
        raise ShapeMismatch("dataset is not a sequence of bands") from e
    if not rows:
        raise ShapeMismatch("dataset has no bands")
    lengths = []
    for i, r in enumerate(rows):
        if isinstance(r, (str, bytes)) or not hasattr(r, "__len__"):
            raise ShapeMismatch(f"band {i} is not a sequence of numbers")
        lengths.append(len(r))
    if len(set(lengths)) != 1:
        raise ShapeMismatch(f"bands have inconsistent lengths: {lengths}")
    for i, r in enumerate(rows):
        for j, x in enumerate(r):
            if not _is_real(x):
                raise ShapeMismatch(f"band {i} sample {j} is not numeric: {x!r}")
    return np.array([[float(x) for x in r] for r in rows], dtype=float)

def _matrix_from_array(arr: np.ndarray) -> np.ndarray:
    if arr.dtype.kind == "O":
        return _matrix_from_rows(arr.tolist())
    if arr.ndim != 2:
        raise ShapeMismatch(f"expected a 2-D (bands x samples) array, got ndim={arr.ndim}")
    if arr.dtype.kind not in ("i", "u", "f"):
        raise ShapeMismatch(f"array dtype {arr.dtype} is not numeric")
    return arr.astype(float)

def _matrix_from_frame(df: pd.DataFrame) -> np.ndarray:
    for col in df.columns:
        s = df[col]
        if pd.api.types.is_bool_dtype(s) or not pd.api.types.is_numeric_dtype(s):
            raise ShapeMismatch(f"column {col!r} is not numeric (dtype={s.dtype})")
    # wide frame: rows are samples, columns are bands
    return df.to_numpy(dtype=float).T


# ---------- Dataset ----------

class Dataset:
    """
    Ordered bands sharing one dimension; index 0 is stacked first (bottom).
    Values are held as a read-only float array of shape (band_count, dimension).
    """

    def __init__(self, values: Any, names: Optional[Sequence[str]] = None) -> None:
        if isinstance(values, Dataset):
            matrix = values.values.copy()
            names = names if names is not None else values.names
        elif isinstance(values, pd.DataFrame):
            matrix = _matrix_from_frame(values)
            names = names if names is not None else [str(c) for c in values.columns]
        elif isinstance(values, np.ndarray):
            matrix = _matrix_from_array(values)
        else:
            matrix = _matrix_from_rows(values)

        if matrix.shape[0] == 0:
            raise ShapeMismatch("dataset has no bands")
        if matrix.shape[1] == 0:
            raise ShapeMismatch("dataset dimension must be >= 1")
        if not np.isfinite(matrix).all():
            raise ShapeMismatch("dataset contains NaN or infinite values")

        matrix.setflags(write=False)
        self._values = matrix
        if names is None:
            names = [f"band {i}" for i in range(matrix.shape[0])]
        names = [str(n) for n in names]
        if len(names) != matrix.shape[0]:
            raise ShapeMismatch(f"{len(names)} names for {matrix.shape[0]} bands")
        self._names = names

    @property
    def values(self) -> np.ndarray:
        return self._values

    @property
    def names(self) -> List[str]:
        return list(self._names)

    @property
    def band_count(self) -> int:
        return int(self._values.shape[0])

    @property
    def dimension(self) -> int:
        return int(self._values.shape[1])

    @cached_property
    def derivatives(self) -> np.ndarray:
        """Derivative Set, computed once per Dataset object."""
        d = differentiate_all(self._values)
        d.setflags(write=False)
        return d

    def column_sums(self) -> np.ndarray:
        return self._values.sum(axis=0)

    def tolist(self) -> List[List[float]]:
        return self._values.tolist()

    def __len__(self) -> int:
        return self.band_count

    def __repr__(self) -> str:
        return f"Dataset(bands={self.band_count}, dimension={self.dimension})"


def dataset_from_frame(
    df: pd.DataFrame,
    *,
    time: str,
    group: str,
    value: str,
) -> Dataset:
    """
    Long-form (time, group, value) rows -> Dataset.
    Values are summed per (time, group); missing cells become 0.
    Bands keep the order in which groups first appear.
    """
    missing = [c for c in (time, group, value) if c not in df.columns]
    if missing:
        raise ShapeMismatch(f"missing columns: {missing}")
    if not pd.api.types.is_numeric_dtype(df[value]) or pd.api.types.is_bool_dtype(df[value]):
        raise ShapeMismatch(f"column {value!r} is not numeric")
    order = list(pd.unique(df[group]))
    W = df.pivot_table(index=time, columns=group, values=value, aggfunc="sum").fillna(0)
    W = W.sort_index()
    W = W[order]
    return Dataset(W, names=[str(g) for g in order])


def default_dataset() -> Dataset:
    """Two 10-sample bands used when a graph starts without data."""
    return Dataset(
        [
            [math.sin(i / 20) for i in range(10)],
            [1.2 * math.cos(i / 23) for i in range(10)],
        ]
    )
